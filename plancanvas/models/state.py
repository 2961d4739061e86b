"""Interaction mode and selection state."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Set


class InteractionMode(Enum):
    """Interaction modes of the canvas engine."""
    SELECT = "select"
    MOVE = "move"
    ROTATE = "rotate"
    DRAW_RECTANGLE = "draw-rectangle"
    DRAW_POLYGON = "draw-polygon"
    EDIT = "edit"
    DELETE = "delete"

    @property
    def is_draw(self) -> bool:
        return self in (InteractionMode.DRAW_RECTANGLE, InteractionMode.DRAW_POLYGON)


class GestureKind(Enum):
    """Pointer gesture currently holding capture."""
    NONE = "none"
    LASSO = "lasso"
    DEVICE_DRAG = "device-drag"
    VERTEX_DRAG = "vertex-drag"
    PAN = "pan"


class TooltipDetailLevel(Enum):
    MINIMAL = "minimal"
    DETAILED = "detailed"


@dataclass
class SelectionState:
    """Current selection of devices, zone and zone vertex."""
    selected_device_ids: Set[str] = field(default_factory=set)
    selected_zone_id: Optional[str] = None
    active_vertex_index: Optional[int] = None
    active_device_id: Optional[str] = None  # the single device keyboard navigation moves from
