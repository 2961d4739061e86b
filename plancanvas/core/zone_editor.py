"""Zone drawing (rectangle and polygon) and vertex editing."""
from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

from ..models.entities import MIN_ZONE_VERTICES, Zone, close_ring
from ..models.geometry import Point
from ..utils.geometry import polygon_area
from ..utils.logger import setup_logger
from .stores import ZoneStore

DRAFT_RECTANGLE = "rectangle"
DRAFT_POLYGON = "polygon"


class ZoneEditor:
    """
    Proposes zone creations and vertex edits to a ZoneStore.

    Drawing state (the draft) and editing state (the working copy of one
    zone's vertices) are independent. Vertex drags only touch the working
    copy; the store is written once per drag, on commit.

    Rejected operations return None/False and leave a user-facing message in
    last_error.
    """

    def __init__(
        self,
        store: ZoneStore,
        to_normalized: Callable[[Point], Point],
        min_zone_area: float = 1e-4,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the zone editor.

        Args:
            store: Zone store receiving creations and updates
            to_normalized: Maps a screen pixel to a clamped normalized point
                           using the current viewport
            min_zone_area: Smallest normalized area accepted for a new zone
            logger: Optional logger instance
        """
        self.store = store
        self.to_normalized = to_normalized
        self.min_zone_area = min_zone_area
        self.log = logger or setup_logger(self.__class__.__name__)
        self.last_error: Optional[str] = None

        # Drawing
        self._draft_kind: Optional[str] = None
        self._anchor: Optional[Point] = None
        self._draft: List[Point] = []
        self._preview: List[Point] = []

        # Vertex editing
        self._zone_id: Optional[str] = None
        self._committed: List[Point] = []
        self._working: List[Point] = []
        self._drag_index: Optional[int] = None

    def _reject(self, message: str) -> None:
        self.last_error = message
        self.log.warning(message)

    # ---------- drawing state ----------

    @property
    def drawing(self) -> bool:
        return self._draft_kind is not None

    @property
    def draft_kind(self) -> Optional[str]:
        return self._draft_kind

    @property
    def draft_vertices(self) -> List[Point]:
        return list(self._draft)

    @property
    def preview(self) -> List[Point]:
        """Points of the live preview outline in normalized space."""
        return list(self._preview)

    def reset_draft(self) -> None:
        self._draft_kind = None
        self._anchor = None
        self._draft = []
        self._preview = []

    # ---------- rectangle ----------

    def start_rectangle(self, point: Point) -> None:
        self.reset_draft()
        self._draft_kind = DRAFT_RECTANGLE
        self._anchor = point.clamped()
        self._preview = [self._anchor]

    @staticmethod
    def rectangle_ring(a: Point, b: Point) -> Tuple[Point, ...]:
        return (a, Point(b.x, a.y), b, Point(a.x, b.y), a)

    def update_preview(self, point: Point) -> None:
        """Follow the pointer with the in-progress outline."""
        point = point.clamped()
        if self._draft_kind == DRAFT_RECTANGLE and self._anchor is not None:
            self._preview = list(self.rectangle_ring(self._anchor, point))
        elif self._draft_kind == DRAFT_POLYGON and self._draft:
            self._preview = self._draft + [point]

    def complete_rectangle(self, point: Point) -> Optional[Tuple[Point, ...]]:
        """
        Finish the rectangle at the opposite corner.

        Returns:
            The closed 5-point polygon, or None when there was no anchor or
            the rectangle is degenerate
        """
        if self._draft_kind != DRAFT_RECTANGLE or self._anchor is None:
            return None
        ring = self.rectangle_ring(self._anchor, point.clamped())
        self.reset_draft()
        if polygon_area(ring) < self.min_zone_area:
            self._reject("Zone is too small. Drag out a larger area.")
            return None
        self.last_error = None
        return ring

    # ---------- polygon ----------

    def start_polygon(self, point: Point) -> None:
        self.reset_draft()
        self._draft_kind = DRAFT_POLYGON
        self._draft = [point.clamped()]
        self._preview = list(self._draft)

    def add_vertex(self, point: Point) -> None:
        if self._draft_kind != DRAFT_POLYGON:
            self.start_polygon(point)
            return
        point = point.clamped()
        if self._draft and self._draft[-1] == point:
            return
        self._draft.append(point)
        self._preview = list(self._draft)

    def close_polygon(self) -> Optional[Tuple[Point, ...]]:
        """
        Close the working polygon.

        Returns:
            The closed polygon (first vertex repeated at the end), or None if
            fewer than 3 vertices were placed or the area is degenerate
        """
        if self._draft_kind != DRAFT_POLYGON:
            return None
        if len(set(self._draft)) < MIN_ZONE_VERTICES:
            self._reject("A zone needs at least 3 points.")
            return None
        ring = close_ring(self._draft)
        self.reset_draft()
        if polygon_area(ring) < self.min_zone_area:
            self._reject("Zone is too small. Place points further apart.")
            return None
        self.last_error = None
        return ring

    # ---------- vertex editing ----------

    @property
    def editing_zone_id(self) -> Optional[str]:
        return self._zone_id

    @property
    def working_vertices(self) -> List[Point]:
        return list(self._working)

    @property
    def committed_vertices(self) -> List[Point]:
        return list(self._committed)

    @property
    def working_polygon(self) -> Tuple[Point, ...]:
        return close_ring(self._working)

    @property
    def dragging(self) -> bool:
        return self._drag_index is not None

    @property
    def has_uncommitted_changes(self) -> bool:
        return self._working != self._committed

    def begin_vertex_edit(self, zone_id: str) -> bool:
        """Load a zone into the working copy, dropping any uncommitted edit."""
        zone = self.store.get(zone_id)
        if zone is None:
            self._reject(f"Zone {zone_id} not found")
            return False
        if self.has_uncommitted_changes:
            self.log.debug(f"Discarding uncommitted edit of zone {self._zone_id}")
        self._zone_id = zone_id
        self._committed = zone.vertices
        self._working = list(self._committed)
        self._drag_index = None
        return True

    def end_vertex_edit(self) -> None:
        self._zone_id = None
        self._committed = []
        self._working = []
        self._drag_index = None

    def drag_vertex(self, index: int, screen_point: Point) -> bool:
        """Move a vertex of the working copy; nothing is written to the store."""
        if self._zone_id is None or not 0 <= index < len(self._working):
            return False
        self._working[index] = self.to_normalized(screen_point)
        self._drag_index = index
        return True

    def commit_vertex_drag(self) -> Optional[Zone]:
        """
        Write the working copy to the store.

        Returns:
            The updated zone, or None if nothing changed or the store refused it
        """
        self._drag_index = None
        if self._zone_id is None or not self.has_uncommitted_changes:
            return None
        try:
            zone = self.store.update(self._zone_id, self.working_polygon)
        except (KeyError, ValueError) as e:
            self._working = list(self._committed)
            self._reject(f"Zone edit rejected: {e}")
            return None
        self._committed = list(self._working)
        self.last_error = None
        self.log.debug(f"Committed vertex drag on zone {self._zone_id}")
        return zone

    def cancel_vertex_drag(self) -> None:
        """Revert the working copy to the last committed polygon."""
        self._drag_index = None
        self._working = list(self._committed)

    def delete_vertex(self, index: int) -> Optional[Zone]:
        """
        Remove a vertex and commit immediately.

        Rejected (returns None, polygon unchanged) when fewer than 3 vertices
        would remain.
        """
        if self._zone_id is None or not 0 <= index < len(self._working):
            return None
        if len(self._working) - 1 < MIN_ZONE_VERTICES:
            self._reject("A zone needs at least 3 points; vertex not deleted.")
            return None
        del self._working[index]
        return self.commit_vertex_drag()
