"""Tests for render-layer construction."""
import pytest

from plancanvas.core.layers import (
    LAYER_ORDER,
    Scene,
    build_layers,
    device_color,
    fixture_size_multiplier,
)
from plancanvas.engine.config import DEFAULT_THEME
from plancanvas.models.entities import Device, Person
from plancanvas.models.geometry import Point, Rect, ViewportState
from plancanvas.models.render import TooltipLayout


def layer(layers, name):
    return next(l for l in layers if l.name == name)


@pytest.fixture
def scene(transform, square_zone, triangle_zone):
    return Scene(
        transform=transform,
        viewport=ViewportState(),
        theme=dict(DEFAULT_THEME),
        zones=[square_zone, triangle_zone],
        devices=[
            Device(id="fx", position=Point(0.5, 0.5), category="fixture-16ft", orientation_degrees=90),
            Device(id="m", position=Point(0.25, 0.5), category="motion"),
        ],
        people=[Person(id="p", position=Point(0.75, 0.75), first_name="Ada")],
    )


class TestHelpers:
    @pytest.mark.parametrize("category,expected", [
        ("fixture-16ft", 2.0),
        ("fixture-12ft", 1.5),
        ("fixture-8ft", 1.0),
        ("fixture", 1.0),
    ])
    def test_fixture_size_multiplier(self, category, expected):
        assert fixture_size_multiplier(category) == expected

    @pytest.mark.parametrize("category,token", [
        ("fixture-12ft", "fixture"),
        ("motion", "accent"),
        ("light-sensor", "success"),
        ("gateway", "muted"),
    ])
    def test_device_color(self, category, token):
        assert device_color(category, DEFAULT_THEME) == DEFAULT_THEME[token]


class TestBuildLayers:
    """Tests for build_layers."""

    def test_layer_order(self, scene):
        assert [l.name for l in build_layers(scene)] == list(LAYER_ORDER)
        assert LAYER_ORDER == ("zones", "draft", "vertex_handles", "devices", "people", "lasso", "tooltip")

    def test_zones_in_screen_pixels(self, scene):
        shapes = layer(build_layers(scene), "zones").shapes
        outline = shapes[0]
        assert outline.kind == "polygon"
        assert outline.entity_id == "zone-a"
        assert outline.points[0] == Point(80, 60)
        label = shapes[1]
        assert label.kind == "text"
        assert label.text == "Lobby"

    def test_selected_zone_highlighted(self, scene):
        scene.selected_zone_id = "zone-t"
        outlines = [s for s in layer(build_layers(scene), "zones").shapes if s.kind == "polygon"]
        assert [s.style["stroke_width"] for s in outlines] == [1, 3]

    def test_hidden_zones(self, scene):
        scene.show_zones = False
        assert layer(build_layers(scene), "zones").shapes == []

    def test_edited_zone_uses_working_polygon(self, scene):
        working = (Point(0.05, 0.05), Point(0.4, 0.1), Point(0.4, 0.4), Point(0.1, 0.4), Point(0.05, 0.05))
        scene.editing_zone_id = "zone-a"
        scene.working_polygon = working
        scene.active_vertex_index = 2
        layers = build_layers(scene)
        assert layer(layers, "zones").shapes[0].points[0] == Point(40, 30)
        handles = layer(layers, "vertex_handles").shapes
        assert len(handles) == 4
        assert handles[2].style["fill"] == DEFAULT_THEME["handle_active"]
        assert handles[0].style["fill"] == DEFAULT_THEME["handle"]

    def test_device_shapes(self, scene):
        shapes = {s.entity_id: s for s in layer(build_layers(scene), "devices").shapes}
        fixture = shapes["fx"]
        assert fixture.kind == "rect"
        assert fixture.points == [Point(400, 300)]
        assert (fixture.style["width"], fixture.style["height"]) == (24.0, 6.0)
        assert fixture.style["rotation"] == 90
        motion = shapes["m"]
        assert motion.kind == "circle"
        assert motion.style["fill"] == DEFAULT_THEME["accent"]

    def test_selected_and_dragged_device(self, scene):
        scene.selected_device_ids = frozenset({"m"})
        scene.drag_offsets = {"m": Point(10, 5)}
        shapes = {s.entity_id: s for s in layer(build_layers(scene), "devices").shapes}
        assert shapes["m"].points == [Point(210, 305)]
        assert shapes["m"].style["selected"] is True
        assert shapes["m"].style["stroke"] == DEFAULT_THEME["selection"]
        assert shapes["fx"].style["selected"] is False

    def test_people(self, scene):
        people = layer(build_layers(scene), "people").shapes
        assert people[0].points == [Point(600, 450)]
        assert people[0].text == "Ada"
        scene.show_people = False
        assert layer(build_layers(scene), "people").shapes == []

    def test_lasso(self, scene):
        assert layer(build_layers(scene), "lasso").shapes == []
        scene.lasso = Rect(200, 200, 90, 90)
        lasso = layer(build_layers(scene), "lasso").shapes[0]
        assert lasso.points == [Point(90, 90), Point(200, 90), Point(200, 200), Point(90, 200)]

    def test_draft(self, scene):
        scene.draft = [Point(0.1, 0.1), Point(0.2, 0.1)]
        draft = layer(build_layers(scene), "draft").shapes[0]
        assert draft.kind == "polyline"
        assert draft.points == [Point(80, 60), Point(160, 60)]

    def test_tooltip_text_inset_by_padding(self, scene):
        scene.tooltip = TooltipLayout(x=100, y=50, width=300, height=120,
                                      lines=[("Fixture 1", 16), ("Type: fixture", 66)], padding=24)
        rect, title, detail = layer(build_layers(scene), "tooltip").shapes
        assert rect.points == [Point(100, 50)]
        assert title.points == [Point(124, 66)]
        assert detail.points == [Point(124, 116)]
