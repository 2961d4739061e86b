"""Viewport culling: which devices are worth drawing."""
import logging
from typing import Hashable, List, Optional, Sequence, Tuple

import numpy as np

from ..models.entities import Device
from ..models.geometry import Point, Rect, ViewportState
from ..utils.logger import setup_logger
from .transform import ViewportTransform


class ViewportCuller:
    """
    Computes the subset of devices near the visible viewport.

    This only reduces render cost. Selection and keyboard navigation always
    run over the full device set, never over the culled one.
    """

    def __init__(self, padding: float = 200.0, logger: Optional[logging.Logger] = None):
        """
        Initialize the culler.

        Args:
            padding: Screen-pixel margin kept around the viewport so devices
                     just outside it are already drawn while panning
            logger: Optional logger instance
        """
        self.padding = padding
        self.log = logger or setup_logger(self.__class__.__name__)
        self._cache_key: Optional[Tuple[Hashable, ...]] = None
        self._cache: List[Device] = []

    def visible_rect(self, transform: ViewportTransform, viewport: ViewportState) -> Rect:
        """Padded viewport corners inverse-transformed into content pixels."""
        top_left = transform.screen_to_content(Point(-self.padding, -self.padding), viewport)
        bottom_right = transform.screen_to_content(
            Point(transform.viewport_width + self.padding, transform.viewport_height + self.padding),
            viewport,
        )
        return Rect(top_left.x, top_left.y, bottom_right.x, bottom_right.y)

    def visible_devices(
        self,
        devices: Sequence[Device],
        transform: ViewportTransform,
        viewport: ViewportState,
        version: Hashable = None
    ) -> List[Device]:
        """
        Return devices whose position falls inside the padded viewport.

        Args:
            devices: Full device set
            transform: Current transform (size, bounds, crop)
            viewport: Current pan/zoom
            version: Token that changes whenever the device collection or a
                     device position changes; enables memoization

        Returns:
            Visible devices, in input order
        """
        key = (transform, viewport, version, len(devices))
        if version is not None and key == self._cache_key:
            return list(self._cache)

        if not devices:
            visible: List[Device] = []
        else:
            rect = self.visible_rect(transform, viewport)
            positions = np.array([(d.position.x, d.position.y) for d in devices], dtype=float)
            content = transform.to_content_many(positions)
            mask = ((content[:, 0] >= rect.min_x) & (content[:, 0] <= rect.max_x)
                    & (content[:, 1] >= rect.min_y) & (content[:, 1] <= rect.max_y))
            visible = [d for d, keep in zip(devices, mask) if keep]

        self._cache_key = key
        self._cache = visible
        self.log.debug(f"Culled {len(devices) - len(visible)} of {len(devices)} devices")
        return list(visible)

    def invalidate(self) -> None:
        self._cache_key = None
        self._cache = []
