"""Render output produced by the engine for any drawing surface."""
from dataclasses import dataclass, field
from typing import Dict, Any, List, Tuple

from .geometry import Point


@dataclass
class Shape:
    """
    A drawable primitive in screen pixels.

    kind is one of: polygon, polyline, circle, rect, text.
    For polygon/polyline the points are the outline; circle uses points[0] as
    centre with style["radius"]; rect uses points[0] as top-left corner, or
    as centre when style["rotation"] is present, with style["width"] and
    style["height"]; text uses points[0] as top-left.
    """
    kind: str
    points: List[Point]
    style: Dict[str, Any] = field(default_factory=dict)
    entity_id: str = ""
    text: str = ""


@dataclass
class RenderLayer:
    """Named, ordered group of shapes; layers are painted first to last."""
    name: str
    shapes: List[Shape] = field(default_factory=list)


@dataclass
class TooltipContent:
    """Text shown in a tooltip: title, fact lines and an optional capped sub-list."""
    title: str
    lines: List[str] = field(default_factory=list)
    sub_title: str = ""
    sub_items: List[str] = field(default_factory=list)


@dataclass
class TooltipLayout:
    """Computed tooltip box and text line positions, in screen pixels."""
    x: float
    y: float
    width: float
    height: float
    lines: List[Tuple[str, float]] = field(default_factory=list)  # (text, y offset inside box)
    flipped_x: bool = False
    flipped_y: bool = False
    padding: float = 16.0
