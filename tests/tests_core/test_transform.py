"""Tests for ViewportTransform."""
import numpy as np
import pytest

from plancanvas.core.transform import ViewportTransform, cropped_bounds
from plancanvas.models.geometry import CropBounds, DisplayBounds, Point, ViewportState


def as_tuple(point):
    return (point.x, point.y)


class TestFallbackTransform:
    """Conversions while display bounds are unknown."""

    def test_center_maps_to_viewport_center(self):
        """Test 800x600 viewport without bounds maps (0.5, 0.5) to (400, 300)."""
        transform = ViewportTransform(viewport_width=800, viewport_height=600)
        assert transform.to_screen(Point(0.5, 0.5), ViewportState()) == Point(400, 300)

    def test_unusable_bounds_fall_back(self):
        transform = ViewportTransform(800, 600, bounds=DisplayBounds(0, 0, 0, 0))
        assert transform.effective_bounds() is None
        assert transform.to_screen(Point(0.5, 0.5), ViewportState()) == Point(400, 300)

    def test_zero_sized_viewport_does_not_divide_by_zero(self):
        transform = ViewportTransform(viewport_width=0, viewport_height=0)
        assert transform.to_normalized(Point(0.5, 0.5), ViewportState(), clamp_result=False) == Point(0.5, 0.5)


class TestConversions:
    """Tests for normalized <-> screen conversions."""

    def test_anchored_on_bounds(self):
        transform = ViewportTransform(800, 600, bounds=DisplayBounds(100, 50, 400, 300))
        assert transform.to_content(Point(0, 0)) == Point(100, 50)
        assert transform.to_content(Point(1, 1)) == Point(500, 350)

    def test_pan_and_scale_applied(self):
        transform = ViewportTransform(800, 600, bounds=DisplayBounds(0, 0, 800, 600))
        viewport = ViewportState(pan_offset=Point(10, 20), scale=2.0)
        assert transform.to_screen(Point(0.5, 0.5), viewport) == Point(810, 620)

    @pytest.mark.parametrize("bounds", [
        None,
        DisplayBounds(0, 0, 800, 600),
        DisplayBounds(112.5, 0, 575, 600),
    ])
    @pytest.mark.parametrize("viewport", [
        ViewportState(),
        ViewportState(pan_offset=Point(-250, 130), scale=3.7),
        ViewportState(pan_offset=Point(40, -15), scale=0.1),
        ViewportState(pan_offset=Point(0, 0), scale=10.0),
    ])
    @pytest.mark.parametrize("point", [Point(0, 0), Point(1, 1), Point(0.123, 0.987), Point(0.5, 0.25)])
    def test_round_trip(self, bounds, viewport, point):
        """Test to_normalized(to_screen(p)) returns p."""
        transform = ViewportTransform(800, 600, bounds=bounds)
        back = transform.to_normalized(transform.to_screen(point, viewport), viewport)
        assert as_tuple(back) == pytest.approx(as_tuple(point))

    def test_to_normalized_clamps(self, transform, identity_viewport):
        assert transform.to_normalized(Point(-50, 700), identity_viewport) == Point(0.0, 1.0)

    def test_to_normalized_unclamped(self, transform, identity_viewport):
        point = transform.to_normalized(Point(-80, 660), identity_viewport, clamp_result=False)
        assert as_tuple(point) == pytest.approx((-0.1, 1.1))

    def test_to_screen_many_matches_scalar(self, transform):
        viewport = ViewportState(pan_offset=Point(-30, 12), scale=1.75)
        points = [Point(0.1, 0.2), Point(0.9, 0.4), Point(0.5, 0.5)]
        many = transform.to_screen_many(np.array([as_tuple(p) for p in points]), viewport)
        expected = [as_tuple(transform.to_screen(p, viewport)) for p in points]
        np.testing.assert_allclose(many, np.array(expected))

    def test_derived_transforms_are_new_instances(self, transform, full_bounds):
        resized = transform.with_size(1024, 768)
        assert resized.viewport_width == 1024
        assert transform.viewport_width == 800
        assert transform.with_bounds(None).bounds is None
        assert transform.bounds == full_bounds


class TestCrop:
    """Tests for zoom-view cropping."""

    def test_crop_fills_viewport(self, transform, identity_viewport):
        """Test that the bottom-right quarter fills an 800x600 viewport."""
        cropped = transform.with_crop(CropBounds(0.5, 0.5, 1.0, 1.0))
        assert as_tuple(cropped.to_screen(Point(0.5, 0.5), identity_viewport)) == pytest.approx((0, 0))
        assert as_tuple(cropped.to_screen(Point(1.0, 1.0), identity_viewport)) == pytest.approx((800, 600))

    def test_crop_is_centered(self):
        """Test that a square crop is letterboxed horizontally in a wide viewport."""
        raw = DisplayBounds(0, 0, 600, 600)
        bounds = cropped_bounds(raw, CropBounds(0.0, 0.0, 0.5, 0.5), 800, 600)
        # crop is 300x300 px, fitted to 600x600 and centred: 100 px margin on each side
        assert bounds.x == pytest.approx(100)
        assert bounds.y == pytest.approx(0)
        assert bounds.width == pytest.approx(1200)
        assert bounds.height == pytest.approx(1200)

    def test_empty_crop_ignored(self, full_bounds):
        assert cropped_bounds(full_bounds, CropBounds(0.5, 0.5, 0.5, 0.9), 800, 600) == full_bounds

    def test_crop_round_trip(self, transform):
        cropped = transform.with_crop(CropBounds(0.2, 0.1, 0.6, 0.7))
        viewport = ViewportState(pan_offset=Point(15, -8), scale=1.3)
        point = Point(0.4, 0.3)
        back = cropped.to_normalized(cropped.to_screen(point, viewport), viewport)
        assert as_tuple(back) == pytest.approx(as_tuple(point))


class TestZoomAndPan:
    """Tests for zoom_at and pan_by."""

    @pytest.mark.parametrize("factor", [1.1, 0.9, 2.0, 0.5])
    @pytest.mark.parametrize("cursor", [Point(400, 300), Point(13, 577), Point(790, 10)])
    def test_zoom_keeps_cursor_point(self, transform, cursor, factor):
        """Test the map point under the cursor stays under the cursor."""
        viewport = ViewportState(pan_offset=Point(-120, 35), scale=1.5)
        before = transform.to_normalized(cursor, viewport, clamp_result=False)
        zoomed = ViewportTransform.zoom_at(viewport, cursor, factor)
        after = transform.to_normalized(cursor, zoomed, clamp_result=False)
        assert as_tuple(after) == pytest.approx(as_tuple(before))
        assert zoomed.scale == pytest.approx(1.5 * factor)

    def test_zoom_clamps_scale(self):
        zoomed = ViewportTransform.zoom_at(ViewportState(scale=8.0), Point(100, 100), 2.0)
        assert zoomed.scale == 10.0
        zoomed = ViewportTransform.zoom_at(ViewportState(scale=0.15), Point(100, 100), 0.5)
        assert zoomed.scale == 0.1

    def test_zoom_at_limit_is_noop(self):
        viewport = ViewportState(pan_offset=Point(5, 5), scale=10.0)
        assert ViewportTransform.zoom_at(viewport, Point(100, 100), 1.5) is viewport

    def test_zoom_at_center(self, transform, identity_viewport):
        zoomed = transform.zoom_at_center(identity_viewport, 2.0)
        assert zoomed.pan_offset == Point(-400, -300)

    def test_pan_by(self):
        viewport = ViewportTransform.pan_by(ViewportState(pan_offset=Point(10, 10), scale=2.0), 5, -20)
        assert viewport.pan_offset == Point(15, -10)
        assert viewport.scale == 2.0
