"""Bulk device placement: grid arrangement inside a zone and fixture alignment."""
import math
from typing import Dict, Any, List, Sequence

from ..models.entities import Device, Zone
from ..models.geometry import Point, clamp
from .geometry import polygon_bounds


def is_fixture(device: Device) -> bool:
    return device.category.startswith("fixture")


def arrange_devices_in_zone(
    devices: Sequence[Device],
    zone: Zone,
    padding: float = 0.02
) -> List[Dict[str, Any]]:
    """
    Lay devices out on a grid inside the zone's bounding box.

    Args:
        devices: Devices to arrange, in placement order
        zone: Target zone
        padding: Normalized margin kept inside the zone bounds

    Returns:
        List of {"device_id", "position"} updates; empty when the zone is too
        small for the padding
    """
    bounds = polygon_bounds(zone.polygon)
    if bounds is None or not devices:
        return []
    min_x, min_y, max_x, max_y = bounds
    min_x += padding
    min_y += padding
    max_x -= padding
    max_y -= padding
    width = max_x - min_x
    height = max_y - min_y
    if width <= 0 or height <= 0:
        return []

    cols = math.ceil(math.sqrt(len(devices)))
    rows = math.ceil(len(devices) / cols)
    spacing_x = width / (cols + 1)
    spacing_y = height / (rows + 1)

    updates = []
    for idx, device in enumerate(devices):
        col = idx % cols
        row = idx // cols
        x = clamp(min_x + spacing_x * (col + 1), min_x, max_x)
        y = clamp(min_y + spacing_y * (row + 1), min_y, max_y)
        updates.append({"device_id": device.id, "position": Point(x, y)})
    return updates


def alignment_updates(devices: Sequence[Device]) -> List[Dict[str, Any]]:
    """
    Snap fixtures to a common orientation.

    Orientations within 45 degrees of horizontal count as horizontal, the rest
    as vertical. If horizontal fixtures are the majority (or tie) everything is
    turned vertical, otherwise horizontal, so repeated calls toggle.
    """
    fixtures = [d for d in devices if is_fixture(d)]
    if not fixtures:
        return []

    horizontal = 0
    for d in fixtures:
        normalized = d.orientation_degrees % 360
        if normalized <= 45 or normalized >= 315:
            horizontal += 1
    vertical = len(fixtures) - horizontal
    target = 90.0 if horizontal >= vertical else 0.0
    return [{"device_id": d.id, "orientation_degrees": target} for d in fixtures]
