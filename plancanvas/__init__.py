"""
plancanvas - interaction engine for interactive floor-plan canvases.

Pan/zoom with a stable normalized <-> pixel mapping, device selection
(click, lasso, keyboard), zone drawing and vertex editing, viewport culling
and tooltip layout. The engine consumes normalized input events and produces
events plus ordered render layers; drawing is left to the host.
"""
from .engine import CanvasEngine, DEFAULT_CONFIG, DEFAULT_THEME
from .core import (
    ViewportTransform,
    ViewportCuller,
    SelectionManager,
    ZoneEditor,
    TooltipLayoutEngine,
    ZoneStore,
    MemoryZoneStore,
)
from .models import (
    Point,
    DisplayBounds,
    CropBounds,
    ViewportState,
    Zone,
    Device,
    Person,
    InteractionMode,
    TooltipDetailLevel,
    PointerEvent,
    PointerKind,
    WheelEvent,
    KeyEvent,
    KeyKind,
    Modifiers,
    RenderLayer,
    Shape,
)

__version__ = "1.0.0"

__all__ = [
    'CanvasEngine',
    'DEFAULT_CONFIG',
    'DEFAULT_THEME',
    'ViewportTransform',
    'ViewportCuller',
    'SelectionManager',
    'ZoneEditor',
    'TooltipLayoutEngine',
    'ZoneStore',
    'MemoryZoneStore',
    'Point',
    'DisplayBounds',
    'CropBounds',
    'ViewportState',
    'Zone',
    'Device',
    'Person',
    'InteractionMode',
    'TooltipDetailLevel',
    'PointerEvent',
    'PointerKind',
    'WheelEvent',
    'KeyEvent',
    'KeyKind',
    'Modifiers',
    'RenderLayer',
    'Shape',
]
