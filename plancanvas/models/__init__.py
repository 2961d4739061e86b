"""Data models for the floor-plan canvas."""
from .geometry import Point, DisplayBounds, CropBounds, Rect, ViewportState
from .entities import Zone, Device, Person
from .state import InteractionMode, GestureKind, TooltipDetailLevel, SelectionState
from .events import PointerEvent, PointerKind, WheelEvent, KeyEvent, KeyKind, Modifiers
from .render import Shape, RenderLayer, TooltipContent, TooltipLayout

__all__ = [
    'Point',
    'DisplayBounds',
    'CropBounds',
    'Rect',
    'ViewportState',
    'Zone',
    'Device',
    'Person',
    'InteractionMode',
    'GestureKind',
    'TooltipDetailLevel',
    'SelectionState',
    'PointerEvent',
    'PointerKind',
    'WheelEvent',
    'KeyEvent',
    'KeyKind',
    'Modifiers',
    'Shape',
    'RenderLayer',
    'TooltipContent',
    'TooltipLayout',
]
