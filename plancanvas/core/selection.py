"""Device and zone selection: click, lasso and keyboard navigation."""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Set

import numpy as np

from ..models.entities import Device
from ..models.geometry import Point, Rect, ViewportState
from ..models.state import SelectionState
from ..utils.logger import setup_logger
from .transform import ViewportTransform

NAVIGATION_KEYS = ("ArrowDown", "ArrowUp")


class SelectionManager:
    """
    Owns the SelectionState.

    Mutating methods return True when the selection actually changed so the
    caller can decide whether to publish a selection_changed event.
    """

    def __init__(
        self,
        lasso_tolerance: float = 5.0,
        lasso_min_size: float = 5.0,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the selection manager.

        Args:
            lasso_tolerance: Pixels the lasso rectangle is grown by before hit-testing
            lasso_min_size: Releases whose extent does not exceed this on either
                            axis are clicks, not lassos
            logger: Optional logger instance
        """
        self.lasso_tolerance = lasso_tolerance
        self.lasso_min_size = lasso_min_size
        self.log = logger or setup_logger(self.__class__.__name__)
        self.state = SelectionState()
        self._lasso_start: Optional[Point] = None
        self._lasso_end: Optional[Point] = None

    # ---------- queries ----------

    @property
    def device_ids(self) -> Set[str]:
        return set(self.state.selected_device_ids)

    @property
    def zone_id(self) -> Optional[str]:
        return self.state.selected_zone_id

    @property
    def lasso_active(self) -> bool:
        return self._lasso_start is not None

    @property
    def lasso_rect(self) -> Optional[Rect]:
        if self._lasso_start is None or self._lasso_end is None:
            return None
        return Rect(self._lasso_start.x, self._lasso_start.y, self._lasso_end.x, self._lasso_end.y)

    def is_selected(self, device_id: str) -> bool:
        return device_id in self.state.selected_device_ids

    # ---------- device selection ----------

    def _set_devices(self, ids: Iterable[str]) -> bool:
        new_ids = set(ids)
        changed = new_ids != self.state.selected_device_ids
        self.state.selected_device_ids = new_ids
        self.state.active_device_id = next(iter(new_ids)) if len(new_ids) == 1 else None
        return changed

    def select_device(self, device_id: str, union: bool = False) -> bool:
        """
        Click selection.

        Without a union modifier the selection becomes exactly {device_id};
        with one, device_id membership is toggled.
        """
        if not union:
            return self._set_devices({device_id})
        ids = set(self.state.selected_device_ids)
        if device_id in ids:
            ids.discard(device_id)
        else:
            ids.add(device_id)
        return self._set_devices(ids)

    def set_devices(self, ids: Iterable[str]) -> bool:
        return self._set_devices(ids)

    def clear(self) -> bool:
        changed = bool(self.state.selected_device_ids) or self.state.selected_zone_id is not None
        self.state = SelectionState()
        return changed

    def prune(self, valid_ids: Iterable[str]) -> bool:
        """Drop selected ids that no longer exist."""
        valid = set(valid_ids)
        return self._set_devices(self.state.selected_device_ids & valid)

    # ---------- zone selection ----------

    def select_zone(self, zone_id: Optional[str]) -> bool:
        changed = zone_id != self.state.selected_zone_id
        self.state.selected_zone_id = zone_id
        self.state.active_vertex_index = None
        return changed

    def set_active_vertex(self, index: Optional[int]) -> None:
        self.state.active_vertex_index = index

    # ---------- lasso ----------

    def begin_lasso(self, screen_point: Point) -> None:
        self._lasso_start = screen_point
        self._lasso_end = screen_point
        self.log.debug(f"Lasso started at ({screen_point.x:.0f}, {screen_point.y:.0f})")

    def update_lasso(self, screen_point: Point) -> None:
        if self._lasso_start is not None:
            self._lasso_end = screen_point

    def cancel_lasso(self) -> None:
        self._lasso_start = None
        self._lasso_end = None

    def lasso_hits(
        self,
        rect: Rect,
        devices: Sequence[Device],
        transform: ViewportTransform,
        viewport: ViewportState
    ) -> List[str]:
        """Ids of devices whose screen position lies in rect grown by the tolerance."""
        if not devices:
            return []
        grown = rect.expanded(self.lasso_tolerance)
        positions = np.array([(d.position.x, d.position.y) for d in devices], dtype=float)
        screen = transform.to_screen_many(positions, viewport)
        mask = ((screen[:, 0] >= grown.min_x) & (screen[:, 0] <= grown.max_x)
                & (screen[:, 1] >= grown.min_y) & (screen[:, 1] <= grown.max_y))
        return [d.id for d, hit in zip(devices, mask) if hit]

    def end_lasso(
        self,
        screen_point: Point,
        devices: Sequence[Device],
        transform: ViewportTransform,
        viewport: ViewportState,
        union: bool = False
    ) -> Optional[bool]:
        """
        Finish the lasso and apply it.

        Args:
            screen_point: Release position
            devices: Full logical device set (never the culled subset)
            transform: Current transform
            viewport: Current pan/zoom
            union: Whether a union modifier is held at release

        Returns:
            None when there was no lasso or it was too small to count,
            otherwise whether the selection changed
        """
        if self._lasso_start is None:
            return None
        rect = Rect(self._lasso_start.x, self._lasso_start.y, screen_point.x, screen_point.y)
        self.cancel_lasso()
        if rect.width <= self.lasso_min_size and rect.height <= self.lasso_min_size:
            self.log.debug("Lasso below minimum size; ignored")
            return None

        hits = self.lasso_hits(rect, devices, transform, viewport)
        self.log.debug(
            f"Lasso ({rect.min_x:.0f}, {rect.min_y:.0f}) to ({rect.max_x:.0f}, {rect.max_y:.0f}) "
            f"matched {len(hits)} devices"
        )
        if union:
            return self._set_devices(self.state.selected_device_ids | set(hits))
        return self._set_devices(hits)

    # ---------- keyboard ----------

    @staticmethod
    def navigation_order(devices: Sequence[Device]) -> List[Device]:
        return sorted(devices, key=lambda d: d.id)

    def navigate(self, key: str, devices: Sequence[Device], text_input_focused: bool = False) -> bool:
        """
        Move the active single selection to the next/previous device by id.

        Returns True when the selection moved. No-op at either end of the
        order, while a text-entry control has focus, or with no active device.
        """
        if key not in NAVIGATION_KEYS or text_input_focused:
            return False
        active = self.state.active_device_id
        if active is None:
            return False
        ordered = self.navigation_order(devices)
        ids = [d.id for d in ordered]
        if active not in ids:
            return False
        index = ids.index(active)
        if key == "ArrowDown":
            new_index = min(index + 1, len(ids) - 1)
        else:
            new_index = max(index - 1, 0)
        if new_index == index:
            return False
        return self._set_devices({ids[new_index]})

    def escape(self) -> bool:
        """Abort any lasso and clear the selection."""
        self.cancel_lasso()
        return self.clear()
