"""Zone store seam between the engine and the host's persistence."""
from __future__ import annotations

import itertools
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Tuple

from ..models.entities import Zone
from ..models.geometry import Point


class ZoneStore(ABC):
    """Owner of the zone collection. The engine only proposes changes."""

    @abstractmethod
    def list(self) -> List[Zone]:
        """Return all zones in drawing order."""

    @abstractmethod
    def get(self, zone_id: str) -> Optional[Zone]:
        """Return a zone by id."""

    @abstractmethod
    def create(self, polygon: Tuple[Point, ...]) -> Zone:
        """Persist a new zone for the polygon and return it."""

    @abstractmethod
    def update(self, zone_id: str, polygon: Tuple[Point, ...]) -> Zone:
        """Replace a zone's polygon and return the updated zone."""

    @abstractmethod
    def delete(self, zone_id: str) -> bool:
        """Remove a zone. Returns False when it did not exist."""

    @abstractmethod
    def replace_all(self, zones: Iterable[Zone]) -> None:
        """Replace the whole collection after an external reload."""


class MemoryZoneStore(ZoneStore):
    """In-memory zone store; new zones are named and coloured round-robin."""

    def __init__(self, zones: Iterable[Zone] = (), palette: Optional[List[str]] = None):
        self._zones: Dict[str, Zone] = {z.id: z for z in zones}
        self._palette = palette or ["#4c7dff", "#f97316", "#22c55e", "#a855f7", "#ef4444", "#14b8a6"]
        self._ids = itertools.count(len(self._zones) + 1)

    def list(self) -> List[Zone]:
        return list(self._zones.values())

    def get(self, zone_id: str) -> Optional[Zone]:
        return self._zones.get(zone_id)

    def replace_all(self, zones: Iterable[Zone]) -> None:
        self._zones = {z.id: z for z in zones}

    def create(self, polygon: Tuple[Point, ...]) -> Zone:
        number = len(self._zones) + 1
        zone_id = f"zone-{next(self._ids)}"
        while zone_id in self._zones:
            zone_id = f"zone-{next(self._ids)}"
        zone = Zone(
            id=zone_id,
            name=f"Zone {number}",
            color=self._palette[(number - 1) % len(self._palette)],
            polygon=polygon,
        )
        self._zones[zone.id] = zone
        return zone

    def update(self, zone_id: str, polygon: Tuple[Point, ...]) -> Zone:
        if zone_id not in self._zones:
            raise KeyError(zone_id)
        zone = self._zones[zone_id].with_polygon(polygon)
        self._zones[zone_id] = zone
        return zone

    def delete(self, zone_id: str) -> bool:
        return self._zones.pop(zone_id, None) is not None
