"""Tests for interaction state models and input events."""
import pytest

from plancanvas.models.events import KeyEvent, KeyKind, Modifiers, PointerEvent, PointerKind, WheelEvent
from plancanvas.models.geometry import Point
from plancanvas.models.state import GestureKind, InteractionMode, SelectionState, TooltipDetailLevel


class TestInteractionMode:
    """Tests for InteractionMode enum."""

    def test_enum_values(self):
        """Test that all enum values are correct."""
        assert InteractionMode.SELECT.value == "select"
        assert InteractionMode.MOVE.value == "move"
        assert InteractionMode.ROTATE.value == "rotate"
        assert InteractionMode.DRAW_RECTANGLE.value == "draw-rectangle"
        assert InteractionMode.DRAW_POLYGON.value == "draw-polygon"
        assert InteractionMode.EDIT.value == "edit"
        assert InteractionMode.DELETE.value == "delete"

    def test_from_value(self):
        assert InteractionMode("draw-polygon") is InteractionMode.DRAW_POLYGON

    def test_unknown_value(self):
        with pytest.raises(ValueError):
            InteractionMode("lasso")

    def test_is_draw(self):
        draw_modes = {mode for mode in InteractionMode if mode.is_draw}
        assert draw_modes == {InteractionMode.DRAW_RECTANGLE, InteractionMode.DRAW_POLYGON}


class TestOtherEnums:
    def test_gesture_kinds(self):
        assert {g.name for g in GestureKind} == {"NONE", "LASSO", "DEVICE_DRAG", "VERTEX_DRAG", "PAN"}

    def test_tooltip_detail_levels(self):
        assert TooltipDetailLevel("minimal") is TooltipDetailLevel.MINIMAL
        assert TooltipDetailLevel("detailed") is TooltipDetailLevel.DETAILED


class TestSelectionState:
    """Tests for SelectionState dataclass."""

    def test_defaults(self):
        state = SelectionState()
        assert state.selected_device_ids == set()
        assert state.selected_zone_id is None
        assert state.active_vertex_index is None
        assert state.active_device_id is None

    def test_instances_do_not_share_sets(self):
        first = SelectionState()
        first.selected_device_ids.add("d1")
        assert SelectionState().selected_device_ids == set()


class TestInputEvents:
    """Tests for normalized input events."""

    @pytest.mark.parametrize("modifiers,expected", [
        (Modifiers(), False),
        (Modifiers(shift=True), True),
        (Modifiers(ctrl=True), True),
        (Modifiers(meta=True), True),
        (Modifiers(alt=True), False),
    ])
    def test_union_modifier(self, modifiers, expected):
        assert modifiers.union is expected

    def test_pointer_position(self):
        event = PointerEvent(PointerKind.DOWN, 12.5, 40.0)
        assert event.position == Point(12.5, 40.0)
        assert event.button == 0
        assert event.modifiers == Modifiers()

    def test_wheel_position(self):
        assert WheelEvent(3, 4, -120).position == Point(3, 4)

    def test_key_event_defaults(self):
        event = KeyEvent(KeyKind.DOWN, "Escape")
        assert event.text_input_focused is False
