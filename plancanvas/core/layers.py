"""Pure construction of the ordered render-layer list."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional, Sequence, Tuple

from ..models.entities import Device, Person, Zone
from ..models.geometry import Point, Rect, ViewportState
from ..models.render import RenderLayer, Shape, TooltipLayout
from ..utils.arrangement import is_fixture
from ..utils.geometry import polygon_centroid
from .transform import ViewportTransform

LAYER_ORDER = ("zones", "draft", "vertex_handles", "devices", "people", "lasso", "tooltip")

FIXTURE_BASE_SIZE = (12.0, 3.0)


def fixture_size_multiplier(category: str) -> float:
    """Fixture bars scale with their nominal length: 8ft = 1x, 12ft = 1.5x, 16ft = 2x."""
    if "16ft" in category:
        return 2.0
    if "12ft" in category:
        return 1.5
    return 1.0


def device_color(category: str, theme: Dict[str, str]) -> str:
    if category.startswith("fixture"):
        return theme["fixture"]
    if category == "motion":
        return theme["accent"]
    if category == "light-sensor":
        return theme["success"]
    return theme["muted"]


@dataclass
class Scene:
    """Snapshot of everything the layers are derived from."""
    transform: ViewportTransform
    viewport: ViewportState
    theme: Dict[str, str]
    zones: Sequence[Zone] = ()
    devices: Sequence[Device] = ()
    people: Sequence[Person] = ()
    selected_device_ids: frozenset = frozenset()
    selected_zone_id: Optional[str] = None
    hovered_device_id: Optional[str] = None
    show_zones: bool = True
    show_people: bool = True
    draft: List[Point] = field(default_factory=list)
    draft_closed: bool = False
    editing_zone_id: Optional[str] = None
    working_polygon: Tuple[Point, ...] = ()
    active_vertex_index: Optional[int] = None
    drag_offsets: Dict[str, Point] = field(default_factory=dict)  # device id -> screen delta
    lasso: Optional[Rect] = None
    tooltip: Optional[TooltipLayout] = None


def _zone_shapes(scene: Scene) -> List[Shape]:
    shapes = []
    for zone in scene.zones:
        polygon = zone.polygon
        if zone.id == scene.editing_zone_id and scene.working_polygon:
            polygon = scene.working_polygon
        outline = [scene.transform.to_screen(p, scene.viewport) for p in polygon]
        selected = zone.id == scene.selected_zone_id
        shapes.append(Shape(
            kind="polygon",
            points=outline,
            entity_id=zone.id,
            style={
                "stroke": zone.color,
                "fill": zone.color,
                "fill_opacity": 0.25 if selected else 0.12,
                "stroke_width": 3 if selected else 1,
            },
        ))
        label_at = scene.transform.to_screen(polygon_centroid(polygon), scene.viewport)
        shapes.append(Shape(
            kind="text",
            points=[label_at],
            entity_id=zone.id,
            text=zone.name,
            style={"color": zone.color, "font_size": 12, "align": "center"},
        ))
    return shapes


def _draft_shapes(scene: Scene) -> List[Shape]:
    if not scene.draft:
        return []
    outline = [scene.transform.to_screen(p, scene.viewport) for p in scene.draft]
    return [Shape(
        kind="polygon" if scene.draft_closed else "polyline",
        points=outline,
        style={"stroke": scene.theme["primary"], "stroke_width": 2, "dash": [5, 5]},
    )]


def _handle_shapes(scene: Scene) -> List[Shape]:
    if scene.editing_zone_id is None or not scene.working_polygon:
        return []
    shapes = []
    for idx, vertex in enumerate(scene.working_polygon[:-1]):
        active = idx == scene.active_vertex_index
        shapes.append(Shape(
            kind="circle",
            points=[scene.transform.to_screen(vertex, scene.viewport)],
            entity_id=f"{scene.editing_zone_id}:{idx}",
            style={
                "radius": 6 if active else 5,
                "fill": scene.theme["handle_active"] if active else scene.theme["handle"],
                "stroke": scene.theme["border"],
            },
        ))
    return shapes


def _device_shapes(scene: Scene) -> List[Shape]:
    shapes = []
    for device in scene.devices:
        center = scene.transform.to_screen(device.position, scene.viewport)
        offset = scene.drag_offsets.get(device.id)
        if offset is not None:
            center = center.offset(offset.x, offset.y)
        selected = device.id in scene.selected_device_ids
        hovered = device.id == scene.hovered_device_id
        style: Dict[str, Any] = {
            "fill": device_color(device.category, scene.theme),
            "stroke": scene.theme["selection"] if selected else scene.theme["border"],
            "opacity": 0.6 if device.locked else (1.0 if selected else 0.9),
            "selected": selected,
            "hovered": hovered,
            "locked": device.locked,
        }
        if device.locked:
            style["dash"] = [4, 4]
        if is_fixture(device):
            multiplier = fixture_size_multiplier(device.category)
            style.update({
                "width": FIXTURE_BASE_SIZE[0] * multiplier,
                "height": FIXTURE_BASE_SIZE[1] * multiplier,
                "rotation": device.orientation_degrees,
            })
            shapes.append(Shape(kind="rect", points=[center], entity_id=device.id, style=style))
        else:
            style["radius"] = 5 if selected else (4.5 if hovered else 4)
            shapes.append(Shape(kind="circle", points=[center], entity_id=device.id, style=style))
    return shapes


def _people_shapes(scene: Scene) -> List[Shape]:
    return [
        Shape(
            kind="circle",
            points=[scene.transform.to_screen(person.position, scene.viewport)],
            entity_id=person.id,
            text=person.display_name,
            style={"radius": 10, "fill": scene.theme["person"], "stroke": scene.theme["border"]},
        )
        for person in scene.people
    ]


def _lasso_shapes(scene: Scene) -> List[Shape]:
    rect = scene.lasso
    if rect is None:
        return []
    corners = [Point(rect.min_x, rect.min_y), Point(rect.max_x, rect.min_y),
               Point(rect.max_x, rect.max_y), Point(rect.min_x, rect.max_y)]
    return [Shape(
        kind="polygon",
        points=corners,
        style={"stroke": scene.theme["selection"], "fill": scene.theme["lasso_fill"], "dash": [6, 3]},
    )]


def _tooltip_shapes(scene: Scene) -> List[Shape]:
    tip = scene.tooltip
    if tip is None:
        return []
    shapes = [Shape(
        kind="rect",
        points=[Point(tip.x, tip.y)],
        style={
            "width": tip.width,
            "height": tip.height,
            "fill": scene.theme["tooltip_bg"],
            "stroke": scene.theme["tooltip_border"],
            "corner_radius": 10,
        },
    )]
    for idx, (text, offset) in enumerate(tip.lines):
        shapes.append(Shape(
            kind="text",
            points=[Point(tip.x + tip.padding, tip.y + offset)],
            text=text,
            style={"color": scene.theme["tooltip_text"], "font_size": 16 if idx == 0 else 12},
        ))
    return shapes


def build_layers(scene: Scene) -> List[RenderLayer]:
    """Derive the ordered layer list; layers are painted first to last."""
    builders = {
        "zones": _zone_shapes if scene.show_zones else (lambda s: []),
        "draft": _draft_shapes,
        "vertex_handles": _handle_shapes,
        "devices": _device_shapes,
        "people": _people_shapes if scene.show_people else (lambda s: []),
        "lasso": _lasso_shapes,
        "tooltip": _tooltip_shapes,
    }
    return [RenderLayer(name=name, shapes=builders[name](scene)) for name in LAYER_ORDER]
