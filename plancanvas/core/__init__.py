"""Core components of the canvas engine."""
from .transform import ViewportTransform
from .culler import ViewportCuller
from .selection import SelectionManager
from .zone_editor import ZoneEditor
from .tooltip import TooltipLayoutEngine
from .events import EventEmitter, EVENT_NAMES
from .stores import ZoneStore, MemoryZoneStore
from .layers import Scene, build_layers

__all__ = [
    'ViewportTransform',
    'ViewportCuller',
    'SelectionManager',
    'ZoneEditor',
    'TooltipLayoutEngine',
    'EventEmitter',
    'EVENT_NAMES',
    'ZoneStore',
    'MemoryZoneStore',
    'Scene',
    'build_layers',
]
