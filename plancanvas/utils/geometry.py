"""Pure polygon helpers in normalized map space."""
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from ..models.entities import Zone, distinct_vertices
from ..models.geometry import Point


def point_in_polygon(point: Point, polygon: Iterable[Point]) -> bool:
    """Ray casting test; the closing duplicate vertex is optional."""
    inside = False
    pts = list(polygon)
    n = len(pts)
    for i in range(n):
        x1, y1 = pts[i]
        x2, y2 = pts[(i + 1) % n]
        if (y1 > point.y) != (y2 > point.y):
            xin = (x2 - x1) * (point.y - y1) / (y2 - y1) + x1
            if point.x < xin:
                inside = not inside
    return inside


def polygon_area(polygon: Sequence[Point]) -> float:
    """Unsigned shoelace area."""
    pts = distinct_vertices(list(polygon))
    if len(pts) < 3:
        return 0.0
    xs = np.array([p.x for p in pts], dtype=float)
    ys = np.array([p.y for p in pts], dtype=float)
    return float(abs(np.dot(xs, np.roll(ys, -1)) - np.dot(ys, np.roll(xs, -1))) / 2.0)


def polygon_bounds(polygon: Sequence[Point]) -> Optional[Tuple[float, float, float, float]]:
    """Return (min_x, min_y, max_x, max_y) or None for an empty polygon."""
    if not polygon:
        return None
    xs = [p.x for p in polygon]
    ys = [p.y for p in polygon]
    return min(xs), min(ys), max(xs), max(ys)


def polygon_centroid(polygon: Sequence[Point]) -> Point:
    """Vertex average, good enough to anchor a label."""
    pts = distinct_vertices(list(polygon))
    if not pts:
        return Point(0.0, 0.0)
    return Point(sum(p.x for p in pts) / len(pts), sum(p.y for p in pts) / len(pts))


def find_zone_for_point(point: Point, zones: Iterable[Zone]) -> Optional[Zone]:
    """First zone whose polygon contains point."""
    for zone in zones:
        if point_in_polygon(point, zone.polygon):
            return zone
    return None


def nearest_index(target: Point, candidates: List[Point], radius: float) -> Optional[int]:
    """Index of the candidate closest to target within radius, if any."""
    if not candidates:
        return None
    arr = np.array([(c.x, c.y) for c in candidates], dtype=float)
    dist = np.hypot(arr[:, 0] - target.x, arr[:, 1] - target.y)
    idx = int(np.argmin(dist))
    if dist[idx] <= radius:
        return idx
    return None
