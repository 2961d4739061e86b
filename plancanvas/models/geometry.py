"""Coordinate and viewport data models."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Any, Iterator

MIN_SCALE = 0.1
MAX_SCALE = 10.0


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp value into [lo, hi]."""
    return max(lo, min(hi, value))


@dataclass(frozen=True)
class Point:
    """
    2D point.

    Used for both coordinate spaces:
    - Normalized map space (0-1 of the floor plan width/height)
    - Screen pixels inside the viewport
    """
    x: float
    y: float

    def __iter__(self) -> Iterator[float]:
        """Allow tuple unpacking: x, y = point"""
        return iter((self.x, self.y))

    def clamped(self) -> Point:
        """Return the point clamped to the unit square."""
        return Point(clamp(self.x, 0.0, 1.0), clamp(self.y, 0.0, 1.0))

    def offset(self, dx: float, dy: float) -> Point:
        return Point(self.x + dx, self.y + dy)

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Point:
        return cls(float(data.get("x", 0.0)), float(data.get("y", 0.0)))


@dataclass(frozen=True)
class DisplayBounds:
    """Pixel rectangle where the floor-plan background is drawn in the viewport."""
    x: float
    y: float
    width: float
    height: float
    natural_width: float = 0.0
    natural_height: float = 0.0

    @property
    def origin(self) -> Point:
        return Point(self.x, self.y)

    def is_usable(self) -> bool:
        """Bounds with a zero-sized side cannot anchor a conversion."""
        return self.width > 0 and self.height > 0


@dataclass(frozen=True)
class CropBounds:
    """Normalized sub-rectangle of the floor plan shown by a zoom view."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle given by two corners, in any order."""
    x0: float
    y0: float
    x1: float
    y1: float

    @property
    def min_x(self) -> float:
        return min(self.x0, self.x1)

    @property
    def max_x(self) -> float:
        return max(self.x0, self.x1)

    @property
    def min_y(self) -> float:
        return min(self.y0, self.y1)

    @property
    def max_y(self) -> float:
        return max(self.y0, self.y1)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def expanded(self, margin: float) -> Rect:
        return Rect(self.min_x - margin, self.min_y - margin,
                    self.max_x + margin, self.max_y + margin)

    def contains(self, point: Point) -> bool:
        return self.min_x <= point.x <= self.max_x and self.min_y <= point.y <= self.max_y


@dataclass(frozen=True)
class ViewportState:
    """Stage pan offset (pixels) and zoom scale."""
    pan_offset: Point = Point(0.0, 0.0)
    scale: float = 1.0

    def __post_init__(self):
        if not MIN_SCALE <= self.scale <= MAX_SCALE:
            raise ValueError(f"scale must be within [{MIN_SCALE}, {MAX_SCALE}], got {self.scale}")

    def to_dict(self) -> Dict[str, Any]:
        return {"pan_offset": self.pan_offset.to_dict(), "scale": self.scale}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ViewportState:
        return cls(
            pan_offset=Point.from_dict(data.get("pan_offset", {})),
            scale=float(data.get("scale", 1.0)),
        )
