"""Floor-plan entities: zones, devices and people."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Any, List, Tuple

from .geometry import Point

MIN_ZONE_VERTICES = 3


def distinct_vertices(polygon: List[Point]) -> List[Point]:
    """Return the polygon vertices without the closing duplicate."""
    if len(polygon) > 1 and polygon[0] == polygon[-1]:
        return list(polygon[:-1])
    return list(polygon)


def close_ring(vertices: List[Point]) -> Tuple[Point, ...]:
    """Append the first vertex so the ring is closed."""
    if not vertices:
        return ()
    return tuple(vertices) + (vertices[0],)


@dataclass(frozen=True)
class Zone:
    """A named, coloured region of the floor plan.

    The polygon is closed: the last point repeats the first one.
    """
    id: str
    name: str
    color: str
    polygon: Tuple[Point, ...]

    def __post_init__(self):
        pts = tuple(self.polygon)
        if pts and pts[0] != pts[-1]:
            pts = pts + (pts[0],)
        object.__setattr__(self, "polygon", pts)
        if len(set(distinct_vertices(list(pts)))) < MIN_ZONE_VERTICES:
            raise ValueError("polygon must have >= 3 distinct vertices")
        for p in pts:
            # vertices are stored in normalized map space, not pixels
            if not (0.0 <= p.x <= 1.0 and 0.0 <= p.y <= 1.0):
                raise ValueError("points must be normalized 0..1")

    @property
    def vertices(self) -> List[Point]:
        return distinct_vertices(list(self.polygon))

    def with_polygon(self, polygon: Tuple[Point, ...]) -> Zone:
        return Zone(id=self.id, name=self.name, color=self.color, polygon=polygon)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "polygon": [p.to_dict() for p in self.polygon],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Zone:
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            color=data.get("color", "#4c7dff"),
            polygon=tuple(Point.from_dict(p) for p in data.get("polygon", [])),
        )


@dataclass
class Device:
    """A device placed on the floor plan."""
    id: str
    position: Point
    category: str = "device"
    orientation_degrees: float = 0.0
    locked: bool = False
    label: str = ""
    details: Dict[str, str] = field(default_factory=dict)  # shown in tooltip, in order
    components: List[str] = field(default_factory=list)

    @property
    def title(self) -> str:
        return self.label or self.id


@dataclass
class Person:
    """A person marker, rendered only when people are enabled."""
    id: str
    position: Point
    first_name: str = ""
    last_name: str = ""
    role: str = ""
    email: str = ""

    @property
    def display_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part) or "Person"
