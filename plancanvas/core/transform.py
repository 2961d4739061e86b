"""Normalized map coordinates <-> viewport pixels."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from ..models.geometry import (
    MAX_SCALE,
    MIN_SCALE,
    CropBounds,
    DisplayBounds,
    Point,
    ViewportState,
    clamp,
)


def cropped_bounds(raw: DisplayBounds, crop: CropBounds,
                   viewport_width: float, viewport_height: float) -> DisplayBounds:
    """
    Effective bounds of the full floor plan when only a crop of it is shown.

    The crop is aspect-fitted and centred in the viewport; the returned bounds
    describe where the *whole* image would sit at that scale, so the regular
    normalized <-> pixel conversion keeps working unchanged.
    """
    crop_w = crop.width * raw.width
    crop_h = crop.height * raw.height
    if crop_w <= 0 or crop_h <= 0:
        return raw
    fit = min(viewport_width / crop_w, viewport_height / crop_h)
    scaled_w = crop_w * fit
    scaled_h = crop_h * fit
    offset_x = (viewport_width - scaled_w) / 2
    offset_y = (viewport_height - scaled_h) / 2
    full_w = scaled_w / crop.width
    full_h = scaled_h / crop.height
    return DisplayBounds(
        x=offset_x - crop.min_x * full_w,
        y=offset_y - crop.min_y * full_h,
        width=full_w,
        height=full_h,
        natural_width=raw.natural_width,
        natural_height=raw.natural_height,
    )


@dataclass(frozen=True)
class ViewportTransform:
    """
    Bidirectional mapping between normalized map points and screen pixels.

    Two stages are applied:
    - content: normalized -> stage pixels, anchored on the display bounds
      reported by the background renderer (or the raw viewport size while
      those bounds are unknown)
    - stage: content pixels -> screen pixels through pan offset and scale

    Instances are immutable; every method is a pure function of the instance
    and the ViewportState passed in.
    """
    viewport_width: float = 800.0
    viewport_height: float = 600.0
    bounds: Optional[DisplayBounds] = None
    crop: Optional[CropBounds] = None

    # ---------- derived state ----------

    def with_size(self, width: float, height: float) -> ViewportTransform:
        return replace(self, viewport_width=width, viewport_height=height)

    def with_bounds(self, bounds: Optional[DisplayBounds]) -> ViewportTransform:
        return replace(self, bounds=bounds)

    def with_crop(self, crop: Optional[CropBounds]) -> ViewportTransform:
        return replace(self, crop=crop)

    def effective_bounds(self) -> Optional[DisplayBounds]:
        """Display bounds in effect, or None while the background is loading."""
        if self.bounds is None or not self.bounds.is_usable():
            return None
        if self.crop is None:
            return self.bounds
        return cropped_bounds(self.bounds, self.crop, self.viewport_width, self.viewport_height)

    def _anchor(self) -> tuple[float, float, float, float]:
        bounds = self.effective_bounds()
        if bounds is not None:
            return bounds.x, bounds.y, bounds.width, bounds.height
        # Fallback: raw viewport scaling drifts from the image until bounds arrive
        return 0.0, 0.0, self.viewport_width or 1.0, self.viewport_height or 1.0

    # ---------- conversions ----------

    def to_content(self, point: Point) -> Point:
        """Normalized point -> stage content pixels (before pan/zoom)."""
        ox, oy, w, h = self._anchor()
        return Point(ox + point.x * w, oy + point.y * h)

    def from_content(self, pixel: Point) -> Point:
        """Stage content pixels -> unclamped normalized point."""
        ox, oy, w, h = self._anchor()
        return Point((pixel.x - ox) / w, (pixel.y - oy) / h)

    def to_screen(self, point: Point, viewport: ViewportState) -> Point:
        """Normalized point -> screen pixel."""
        content = self.to_content(point)
        pan = viewport.pan_offset
        return Point(pan.x + content.x * viewport.scale, pan.y + content.y * viewport.scale)

    def to_normalized(self, pixel: Point, viewport: ViewportState, clamp_result: bool = True) -> Point:
        """
        Screen pixel -> normalized point.

        Args:
            pixel: Screen position
            viewport: Current pan/zoom
            clamp_result: Clamp each axis to [0, 1]; hit-testing passes False

        Returns:
            Normalized point
        """
        pan = viewport.pan_offset
        content = Point((pixel.x - pan.x) / viewport.scale, (pixel.y - pan.y) / viewport.scale)
        point = self.from_content(content)
        return point.clamped() if clamp_result else point

    def to_content_many(self, points: np.ndarray) -> np.ndarray:
        """Vectorized to_content for an (N, 2) array of normalized points."""
        pts = np.asarray(points, dtype=float).reshape(-1, 2)
        ox, oy, w, h = self._anchor()
        return pts * np.array([w, h]) + np.array([ox, oy])

    def to_screen_many(self, points: np.ndarray, viewport: ViewportState) -> np.ndarray:
        """Vectorized to_screen for an (N, 2) array of normalized points."""
        content = self.to_content_many(points)
        return content * viewport.scale + np.array([viewport.pan_offset.x, viewport.pan_offset.y])

    def screen_to_content(self, pixel: Point, viewport: ViewportState) -> Point:
        pan = viewport.pan_offset
        return Point((pixel.x - pan.x) / viewport.scale, (pixel.y - pan.y) / viewport.scale)

    # ---------- viewport operations ----------

    @staticmethod
    def zoom_at(viewport: ViewportState, cursor: Point, factor: float) -> ViewportState:
        """
        Zoom by factor keeping the map point under cursor fixed on screen.

        Args:
            viewport: Current pan/zoom
            cursor: Screen position to zoom around
            factor: Multiplicative scale change

        Returns:
            New ViewportState with scale clamped to [0.1, 10]
        """
        old_scale = viewport.scale
        new_scale = clamp(old_scale * factor, MIN_SCALE, MAX_SCALE)
        if new_scale == old_scale:
            return viewport
        ratio = new_scale / old_scale
        pan = viewport.pan_offset
        new_pan = Point(cursor.x - (cursor.x - pan.x) * ratio,
                        cursor.y - (cursor.y - pan.y) * ratio)
        return ViewportState(pan_offset=new_pan, scale=new_scale)

    @staticmethod
    def pan_by(viewport: ViewportState, dx: float, dy: float) -> ViewportState:
        return ViewportState(pan_offset=viewport.pan_offset.offset(dx, dy), scale=viewport.scale)

    def zoom_at_center(self, viewport: ViewportState, factor: float) -> ViewportState:
        center = Point(self.viewport_width / 2, self.viewport_height / 2)
        return self.zoom_at(viewport, center, factor)
