"""Interactive floor-plan canvas engine."""
from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from ..core.culler import ViewportCuller
from ..core.events import (
    DEVICE_MOVED,
    DEVICE_ROTATED,
    DEVICES_ALIGNED,
    DEVICES_ARRANGED,
    EventEmitter,
    MODE_CHANGED,
    SELECTION_CHANGED,
    THEME_CHANGED,
    VALIDATION_FAILED,
    VIEWPORT_CHANGED,
    ZONE_CREATED,
    ZONE_DELETED,
    ZONE_UPDATED,
)
from ..core.layers import Scene, build_layers
from ..core.selection import NAVIGATION_KEYS, SelectionManager
from ..core.stores import MemoryZoneStore, ZoneStore
from ..core.tooltip import TooltipLayoutEngine
from ..core.transform import ViewportTransform
from ..core.zone_editor import DRAFT_RECTANGLE, ZoneEditor
from ..models.entities import Device, Person, Zone
from ..models.events import KeyEvent, KeyKind, PointerEvent, PointerKind, WheelEvent
from ..models.geometry import CropBounds, DisplayBounds, Point, ViewportState
from ..models.render import RenderLayer, TooltipContent, TooltipLayout
from ..models.state import GestureKind, InteractionMode, TooltipDetailLevel
from ..utils.arrangement import alignment_updates, arrange_devices_in_zone, is_fixture
from ..utils.geometry import find_zone_for_point, nearest_index, point_in_polygon
from ..utils.logger import setup_logger
from .config import DEFAULT_THEME, merge_config

ZOOM_IN_KEYS = ("+", "=")
ZOOM_OUT_KEYS = ("-", "_")
DELETE_KEYS = ("Delete", "Backspace")
SPACE_KEY = " "

CAPABILITY_FLAGS = ("show_zones", "show_people", "cull_devices", "tooltip_detail_level")


class CanvasEngine:
    """
    Interaction mode controller of the floor-plan canvas.

    Consumes normalized pointer, wheel and key events, keeps the viewport,
    selection and zone-editing state, and publishes changes through events
    registered with on(). Drawing is left to the host, which paints the
    ordered layers returned by render_layers().

    The engine keeps its own copies of the devices it is given; committed
    moves, rotations and bulk updates change those copies and are reported
    through events so the host can persist them.
    """

    def __init__(
        self,
        zone_store: Optional[ZoneStore] = None,
        config: Optional[Dict[str, Any]] = None,
        theme: Optional[Dict[str, str]] = None
    ):
        """
        Initialize the canvas engine.

        Args:
            zone_store: Owner of the zone collection (in-memory store if None)
            config: Optional configuration overriding DEFAULT_CONFIG
            theme: Optional colour tokens overriding DEFAULT_THEME
        """
        self._config = merge_config(config)
        self.log = setup_logger(self.__class__.__name__, self._config["logger_level"])
        self._events = EventEmitter(logger=self.log)
        self.zone_store = zone_store if zone_store is not None else MemoryZoneStore()
        self._theme = dict(DEFAULT_THEME)
        self._theme.update(theme or {})

        self._transform = ViewportTransform(
            viewport_width=self._config["viewport_width"],
            viewport_height=self._config["viewport_height"],
        )
        self._viewport = ViewportState()

        self._devices: Dict[str, Device] = {}
        self._device_version = 0
        self._people: Dict[str, Person] = {}

        self.culler = ViewportCuller(padding=self._config["cull_padding"])
        self.selection = SelectionManager(
            lasso_tolerance=self._config["lasso_tolerance"],
            lasso_min_size=self._config["lasso_min_size"],
        )
        self.zone_editor = ZoneEditor(
            self.zone_store,
            to_normalized=lambda pixel: self._transform.to_normalized(pixel, self._viewport),
            min_zone_area=self._config["min_zone_area"],
        )
        self.tooltips = TooltipLayoutEngine(**self._config["tooltip"])

        self._mode = InteractionMode.SELECT
        self._space_held = False

        # Gesture capture; at most one at a time
        self._gesture = GestureKind.NONE
        self._press_point: Optional[Point] = None
        self._press_zone_id: Optional[str] = None
        self._drag_ids: List[str] = []
        self._drag_delta = Point(0.0, 0.0)
        self._drag_vertex_index: Optional[int] = None
        self._pan_origin: Optional[ViewportState] = None

        # Hover
        self._pointer: Optional[Point] = None
        self._hover_device_id: Optional[str] = None
        self._hover_person_id: Optional[str] = None

    # ---------- events ----------

    def on(self, name: str, handler: Callable[..., Any]) -> Callable[[], None]:
        """
        Register an event handler.

        Args:
            name: Event name (see plancanvas.core.events.EVENT_NAMES)
            handler: Callable receiving the event arguments

        Returns:
            A function that unregisters the handler
        """
        return self._events.on(name, handler)

    def _fail(self, message: str) -> None:
        self.log.warning(message)
        self._events.emit(VALIDATION_FAILED, message)

    def _publish_selection(self, changed: Optional[bool]) -> None:
        if changed:
            self._events.emit(SELECTION_CHANGED, self.selection.device_ids, self.selection.zone_id)

    def _editor_call(self, operation: Callable[..., Any], *args: Any) -> Any:
        """Run a ZoneEditor operation and report its rejection, if any."""
        self.zone_editor.last_error = None
        result = operation(*args)
        if not result and self.zone_editor.last_error:
            # ZoneEditor already logged the warning
            self._events.emit(VALIDATION_FAILED, self.zone_editor.last_error)
        return result

    # ---------- state ----------

    @property
    def mode(self) -> InteractionMode:
        return self._mode

    @property
    def gesture(self) -> GestureKind:
        return self._gesture

    @property
    def viewport(self) -> ViewportState:
        return self._viewport

    @property
    def transform(self) -> ViewportTransform:
        return self._transform

    @property
    def theme(self) -> Dict[str, str]:
        return dict(self._theme)

    @property
    def config(self) -> Dict[str, Any]:
        return self._config

    @property
    def devices(self) -> List[Device]:
        return list(self._devices.values())

    @property
    def people(self) -> List[Person]:
        return list(self._people.values())

    @property
    def zones(self) -> List[Zone]:
        return self.zone_store.list()

    @property
    def space_held(self) -> bool:
        return self._space_held

    @property
    def hovered_device_id(self) -> Optional[str]:
        return self._hover_device_id

    @property
    def hovered_person_id(self) -> Optional[str]:
        return self._hover_person_id

    @property
    def tooltip_detail_level(self) -> TooltipDetailLevel:
        return TooltipDetailLevel(self._config["tooltip_detail_level"])

    def get_device(self, device_id: str) -> Optional[Device]:
        return self._devices.get(device_id)

    def to_screen(self, point: Point) -> Point:
        return self._transform.to_screen(point, self._viewport)

    def to_normalized(self, pixel: Point, clamp_result: bool = True) -> Point:
        return self._transform.to_normalized(pixel, self._viewport, clamp_result)

    # ---------- mode ----------

    def set_mode(self, mode: Union[InteractionMode, str]) -> bool:
        """
        Switch interaction mode.

        Any in-flight gesture is cancelled without committing. Draw drafts are
        reset when entering or leaving a draw mode; leaving edit discards
        uncommitted vertex changes. Entering edit with a selected zone starts
        editing that zone.

        Args:
            mode: New mode, as enum member or its string value

        Returns:
            True if the mode changed
        """
        mode = InteractionMode(mode)
        if mode == self._mode:
            return False
        previous = self._mode
        self._cancel_gesture()
        if previous == InteractionMode.EDIT:
            self.zone_editor.end_vertex_edit()
            self.selection.set_active_vertex(None)
        if previous.is_draw or mode.is_draw:
            self.zone_editor.reset_draft()
        self._mode = mode
        if mode == InteractionMode.EDIT and self.selection.zone_id is not None:
            self._editor_call(self.zone_editor.begin_vertex_edit, self.selection.zone_id)
        self.log.info(f"Mode changed: {previous.value} -> {mode.value}")
        self._events.emit(MODE_CHANGED, mode)
        return True

    def set_flags(self, **flags: Any) -> None:
        """
        Update capability flags.

        Args:
            flags: Any of show_zones, show_people, cull_devices, tooltip_detail_level
        """
        for name, value in flags.items():
            if name not in CAPABILITY_FLAGS:
                raise ValueError(f"Unknown capability flag '{name}'")
            if name == "tooltip_detail_level":
                value = TooltipDetailLevel(value).value
            self._config[name] = value
        if not self._config["show_people"]:
            self._hover_person_id = None

    # ---------- host inputs ----------

    def resize(self, width: float, height: float) -> None:
        self._transform = self._transform.with_size(width, height)

    def set_display_bounds(self, bounds: Optional[DisplayBounds]) -> bool:
        """
        Record where the renderer drew the floor plan.

        Returns:
            False when the bounds equal the current ones (no-op)
        """
        if bounds == self._transform.bounds:
            return False
        self._transform = self._transform.with_bounds(bounds)
        self.log.debug(f"Display bounds updated: {bounds}")
        return True

    def set_crop(self, crop: Optional[CropBounds]) -> None:
        """Show only a normalized sub-rectangle of the floor plan (None shows all)."""
        self._transform = self._transform.with_crop(crop)

    def set_theme(self, theme: Dict[str, str]) -> None:
        self._theme = dict(DEFAULT_THEME)
        self._theme.update(theme)
        self._events.emit(THEME_CHANGED, dict(self._theme))

    def set_devices(self, devices: Iterable[Device]) -> None:
        """Replace the device collection; the selection is pruned to existing ids."""
        self._devices = {d.id: replace(d) for d in devices}
        self._device_version += 1
        if self._hover_device_id not in self._devices:
            self._hover_device_id = None
        if self._gesture == GestureKind.DEVICE_DRAG:
            self._cancel_gesture()
        self._publish_selection(self.selection.prune(self._devices))

    def set_people(self, people: Iterable[Person]) -> None:
        self._people = {p.id: p for p in people}
        if self._hover_person_id not in self._people:
            self._hover_person_id = None

    def set_zones(self, zones: Iterable[Zone]) -> None:
        """
        Reload the zone collection.

        Selection and editing of vanished zones end. A zone under edit whose
        polygon changed is reloaded into the working copy, dropping any
        uncommitted vertex edit.
        """
        zones = list(zones)
        self.zone_store.replace_all(zones)
        ids = {z.id for z in zones}
        if self.zone_editor.editing_zone_id is not None and self.zone_editor.editing_zone_id not in ids:
            self._cancel_gesture()
            self.zone_editor.end_vertex_edit()
        elif self.zone_editor.editing_zone_id is not None:
            reloaded = self.zone_store.get(self.zone_editor.editing_zone_id)
            if reloaded.vertices != self.zone_editor.committed_vertices:
                self._cancel_gesture()
                self.zone_editor.begin_vertex_edit(reloaded.id)
                active = self.selection.state.active_vertex_index
                if active is not None and active >= len(reloaded.vertices):
                    self.selection.set_active_vertex(None)
        if self.selection.zone_id is not None and self.selection.zone_id not in ids:
            self._publish_selection(self.selection.select_zone(None))

    def set_viewport(self, viewport: ViewportState) -> None:
        """Mirror pan/zoom from a sibling view; no viewport_changed is emitted."""
        self._viewport = viewport

    # ---------- viewport ----------

    def _apply_viewport(self, viewport: ViewportState) -> ViewportState:
        if viewport != self._viewport:
            self._viewport = viewport
            self._events.emit(VIEWPORT_CHANGED, viewport.scale, viewport.pan_offset)
        return self._viewport

    def zoom_at(self, cursor: Point, factor: float) -> ViewportState:
        """
        Zoom by factor keeping the map point under cursor in place.

        Args:
            cursor: Screen position to zoom around
            factor: Multiplicative scale change

        Returns:
            The resulting viewport state
        """
        return self._apply_viewport(ViewportTransform.zoom_at(self._viewport, cursor, factor))

    def zoom_at_center(self, factor: float) -> ViewportState:
        return self._apply_viewport(self._transform.zoom_at_center(self._viewport, factor))

    def pan_by(self, dx: float, dy: float) -> ViewportState:
        return self._apply_viewport(ViewportTransform.pan_by(self._viewport, dx, dy))

    # ---------- hit testing ----------

    def _nearest_device(self, candidates: List[Device], screen_point: Point) -> Optional[Device]:
        if not candidates:
            return None
        screen = self._transform.to_screen_many(
            [(d.position.x, d.position.y) for d in candidates], self._viewport
        )
        idx = nearest_index(screen_point, [Point(x, y) for x, y in screen],
                            self._config["device_hit_radius"])
        return candidates[idx] if idx is not None else None

    def device_at(self, screen_point: Point) -> Optional[Device]:
        """Device closest to screen_point within the hit radius."""
        return self._nearest_device(self.devices, screen_point)

    def person_at(self, screen_point: Point) -> Optional[Person]:
        if not self._config["show_people"] or not self._people:
            return None
        people = self.people
        candidates = [self.to_screen(p.position) for p in people]
        idx = nearest_index(screen_point, candidates, self._config["person_hit_radius"])
        return people[idx] if idx is not None else None

    def zone_at(self, screen_point: Point) -> Optional[Zone]:
        """Topmost zone containing screen_point; later zones are drawn on top."""
        if not self._config["show_zones"]:
            return None
        point = self.to_normalized(screen_point, clamp_result=False)
        for zone in reversed(self.zones):
            if point_in_polygon(point, zone.polygon):
                return zone
        return None

    def vertex_at(self, screen_point: Point) -> Optional[int]:
        """Index of the vertex handle of the edited zone under screen_point."""
        if self.zone_editor.editing_zone_id is None:
            return None
        handles = [self.to_screen(v) for v in self.zone_editor.working_vertices]
        return nearest_index(screen_point, handles, self._config["vertex_hit_radius"])

    def visible_devices(self) -> List[Device]:
        """Devices worth drawing; the full set when culling is disabled."""
        if not self._config["cull_devices"]:
            return self.devices
        return self.culler.visible_devices(
            self.devices, self._transform, self._viewport, version=self._device_version
        )

    # ---------- gestures ----------

    def _capture(self, gesture: GestureKind, point: Point) -> None:
        self._gesture = gesture
        self._press_point = point
        self.log.debug(f"Gesture {gesture.value} started at ({point.x:.0f}, {point.y:.0f})")

    def _release(self) -> None:
        self._gesture = GestureKind.NONE
        self._press_point = None
        self._press_zone_id = None
        self._drag_ids = []
        self._drag_delta = Point(0.0, 0.0)
        self._drag_vertex_index = None
        self._pan_origin = None

    def _cancel_gesture(self) -> None:
        """Abort the captured gesture without committing anything."""
        gesture = self._gesture
        if gesture == GestureKind.LASSO:
            self.selection.cancel_lasso()
        elif gesture == GestureKind.VERTEX_DRAG:
            self.zone_editor.cancel_vertex_drag()
        elif gesture == GestureKind.PAN and self._pan_origin is not None:
            self._viewport = self._pan_origin
        if gesture != GestureKind.NONE:
            self.log.debug(f"Gesture {gesture.value} cancelled")
        self._release()

    # ---------- pointer ----------

    def handle_pointer(self, event: PointerEvent) -> None:
        """
        Route a pointer event according to the current mode and gesture.

        Args:
            event: Pointer event in screen pixels
        """
        try:
            if event.kind == PointerKind.DOWN:
                self._pointer_down(event)
            elif event.kind == PointerKind.MOVE:
                self._pointer_move(event)
            elif event.kind == PointerKind.UP:
                self._pointer_up(event)
            elif event.kind == PointerKind.DOUBLE:
                self._pointer_double(event)
        except Exception:
            self.log.exception(f"Error handling pointer {event.kind.value} event")
            self._cancel_gesture()

    def _pointer_down(self, event: PointerEvent) -> None:
        point = event.position
        self._pointer = point
        if self._gesture != GestureKind.NONE:
            return
        if self._space_held:
            self._pan_origin = self._viewport
            self._capture(GestureKind.PAN, point)
            return

        mode = self._mode
        if mode in (InteractionMode.SELECT, InteractionMode.MOVE):
            self._press_select(event)
        elif mode == InteractionMode.ROTATE:
            self._rotate_at(point)
        elif mode == InteractionMode.DRAW_RECTANGLE:
            self._rectangle_click(point)
        elif mode == InteractionMode.DRAW_POLYGON:
            self.zone_editor.add_vertex(self.to_normalized(point))
        elif mode == InteractionMode.EDIT:
            self._press_edit(point)
        elif mode == InteractionMode.DELETE:
            self._delete_zone_at(point)

    def _press_select(self, event: PointerEvent) -> None:
        point = event.position
        device = self.device_at(point)
        if device is not None:
            if self._mode == InteractionMode.MOVE:
                self._begin_device_drag(device, event)
            else:
                self._publish_selection(self.selection.select_device(device.id, event.modifiers.union))
            return
        zone = self.zone_at(point)
        self.selection.begin_lasso(point)
        self._capture(GestureKind.LASSO, point)
        self._press_zone_id = zone.id if zone is not None else None

    def _begin_device_drag(self, device: Device, event: PointerEvent) -> None:
        if device.locked:
            self._fail(f"{device.title} is locked and cannot be moved.")
            return
        if not self.selection.is_selected(device.id):
            self._publish_selection(self.selection.select_device(device.id, event.modifiers.union))
            if not self.selection.is_selected(device.id):
                return
        ids = []
        for device_id in sorted(self.selection.device_ids):
            member = self._devices.get(device_id)
            if member is None:
                continue
            if member.locked:
                self.log.debug(f"Skipping locked device {device_id} in group move")
                continue
            ids.append(device_id)
        self._drag_ids = ids
        self._capture(GestureKind.DEVICE_DRAG, event.position)

    def _press_edit(self, point: Point) -> None:
        index = self.vertex_at(point)
        if index is None:
            return
        self.selection.set_active_vertex(index)
        self._drag_vertex_index = index
        self._capture(GestureKind.VERTEX_DRAG, point)

    def _pointer_move(self, event: PointerEvent) -> None:
        point = event.position
        self._pointer = point
        gesture = self._gesture
        if gesture == GestureKind.PAN:
            self._viewport = ViewportTransform.pan_by(
                self._pan_origin, point.x - self._press_point.x, point.y - self._press_point.y
            )
        elif gesture == GestureKind.LASSO:
            self.selection.update_lasso(point)
        elif gesture == GestureKind.DEVICE_DRAG:
            self._drag_delta = Point(point.x - self._press_point.x, point.y - self._press_point.y)
        elif gesture == GestureKind.VERTEX_DRAG:
            self.zone_editor.drag_vertex(self._drag_vertex_index, point)
        else:
            if self._mode.is_draw and self.zone_editor.drawing:
                self.zone_editor.update_preview(self.to_normalized(point))
            self._update_hover(point)

    def _update_hover(self, point: Point) -> None:
        device = self.device_at(point)
        self._hover_device_id = device.id if device is not None else None
        person = self.person_at(point) if device is None else None
        self._hover_person_id = person.id if person is not None else None

    def _pointer_up(self, event: PointerEvent) -> None:
        point = event.position
        self._pointer = point
        gesture = self._gesture
        try:
            if gesture == GestureKind.PAN:
                self._commit_pan()
            elif gesture == GestureKind.LASSO:
                self._finish_lasso(point, event.modifiers.union)
            elif gesture == GestureKind.DEVICE_DRAG:
                self._commit_device_drag(point)
            elif gesture == GestureKind.VERTEX_DRAG:
                self._commit_vertex_drag()
        finally:
            self._release()

    def _pointer_double(self, event: PointerEvent) -> None:
        point = event.position
        if self._mode == InteractionMode.DRAW_POLYGON:
            self._close_polygon()
            return
        zone = self.zone_at(point)
        if zone is None:
            return
        if self._mode == InteractionMode.SELECT and zone.id == self.selection.zone_id:
            self.set_mode(InteractionMode.EDIT)
        elif self._mode == InteractionMode.EDIT and zone.id != self.zone_editor.editing_zone_id:
            self._cancel_gesture()
            self._publish_selection(self.selection.select_zone(zone.id))
            self.zone_editor.begin_vertex_edit(zone.id)
            self.log.debug(f"Editing zone {zone.id}")

    # ---------- commits ----------

    def _commit_pan(self) -> None:
        viewport = self._viewport
        if self._pan_origin is not None and viewport != self._pan_origin:
            self._events.emit(VIEWPORT_CHANGED, viewport.scale, viewport.pan_offset)

    def _finish_lasso(self, point: Point, union: bool) -> None:
        result = self.selection.end_lasso(point, self.devices, self._transform, self._viewport, union)
        if result is not None:
            self._publish_selection(result)
            return
        # Too small for a lasso: treat as a click
        if self._press_zone_id is not None:
            self._publish_selection(self.selection.select_zone(self._press_zone_id))
        elif not union:
            self._publish_selection(self.selection.clear())

    def _commit_device_drag(self, point: Point) -> None:
        dx = point.x - self._press_point.x
        dy = point.y - self._press_point.y
        if dx == 0 and dy == 0:
            return
        moved = []
        for device_id in self._drag_ids:
            device = self._devices.get(device_id)
            if device is None:
                continue
            target = self.to_normalized(self.to_screen(device.position).offset(dx, dy))
            if target == device.position:
                continue
            device.position = target
            moved.append(device)
        if not moved:
            return
        self._device_version += 1
        self.log.debug(f"Moved {len(moved)} devices by ({dx:.0f}, {dy:.0f}) px")
        for device in moved:
            self._events.emit(DEVICE_MOVED, device.id, device.position)

    def _commit_vertex_drag(self) -> None:
        zone = self._editor_call(self.zone_editor.commit_vertex_drag)
        if zone is not None:
            self._events.emit(ZONE_UPDATED, zone.id, zone.polygon)

    def _create_zone(self, polygon) -> Optional[Zone]:
        try:
            zone = self.zone_store.create(polygon)
        except ValueError as e:
            self._fail(f"Zone rejected: {e}")
            return None
        self.log.info(f"Created zone {zone.id} with {len(zone.vertices)} vertices")
        self._events.emit(ZONE_CREATED, zone.polygon)
        return zone

    def _rectangle_click(self, point: Point) -> None:
        normalized = self.to_normalized(point)
        if self.zone_editor.draft_kind != DRAFT_RECTANGLE:
            self.zone_editor.start_rectangle(normalized)
            return
        ring = self._editor_call(self.zone_editor.complete_rectangle, normalized)
        if ring is not None:
            self._create_zone(ring)

    def _close_polygon(self) -> None:
        ring = self._editor_call(self.zone_editor.close_polygon)
        if ring is not None:
            self._create_zone(ring)

    def _rotate_at(self, point: Point) -> None:
        device = self.device_at(point)
        if device is None:
            return
        if device.locked:
            self._fail(f"{device.title} is locked and cannot be rotated.")
            return
        device.orientation_degrees = (device.orientation_degrees + self._config["rotate_step_degrees"]) % 360
        self._device_version += 1
        self._events.emit(DEVICE_ROTATED, device.id)

    def _delete_zone_at(self, point: Point) -> None:
        zone = self.zone_at(point)
        if zone is None:
            return
        if not self.zone_store.delete(zone.id):
            self._fail(f"Zone {zone.id} not found")
            return
        if self.zone_editor.editing_zone_id == zone.id:
            self.zone_editor.end_vertex_edit()
        if self.selection.zone_id == zone.id:
            self._publish_selection(self.selection.select_zone(None))
        self.log.info(f"Deleted zone {zone.id}")
        self._events.emit(ZONE_DELETED, zone.id)

    def _delete_active_vertex(self) -> None:
        index = self.selection.state.active_vertex_index
        if index is None or self.zone_editor.editing_zone_id is None:
            return
        zone = self._editor_call(self.zone_editor.delete_vertex, index)
        if zone is not None:
            self.selection.set_active_vertex(None)
            self._events.emit(ZONE_UPDATED, zone.id, zone.polygon)

    # ---------- wheel and keyboard ----------

    def handle_wheel(self, event: WheelEvent) -> None:
        """Zoom at the cursor; negative delta_y zooms in."""
        try:
            if event.delta_y == 0 or self._gesture == GestureKind.PAN:
                return
            if event.delta_y < 0:
                factor = self._config["wheel_zoom_in"]
            else:
                factor = self._config["wheel_zoom_out"]
            self.zoom_at(event.position, factor)
        except Exception:
            self.log.exception("Error handling wheel event")

    def handle_key(self, event: KeyEvent) -> None:
        """
        Handle keyboard shortcuts.

        Keys are ignored while a text-entry control has focus, except that
        releasing space always ends the pan modifier.

        Args:
            event: Key event
        """
        try:
            if event.kind == KeyKind.UP:
                if event.key == SPACE_KEY:
                    self._space_held = False
                return
            if event.text_input_focused:
                return
            self._key_down(event.key)
        except Exception:
            self.log.exception(f"Error handling key '{event.key}'")

    def _key_down(self, key: str) -> None:
        if key == SPACE_KEY:
            self._space_held = True
        elif key == "Escape":
            self.escape()
        elif key in NAVIGATION_KEYS:
            self._publish_selection(self.selection.navigate(key, self.devices))
        elif key in ZOOM_IN_KEYS:
            self.zoom_at_center(self._config["key_zoom_in"])
        elif key in ZOOM_OUT_KEYS:
            self.zoom_at_center(self._config["key_zoom_out"])
        elif key == "Enter" and self._mode == InteractionMode.DRAW_POLYGON:
            self._close_polygon()
        elif key in DELETE_KEYS and self._mode == InteractionMode.EDIT:
            self._delete_active_vertex()

    def escape(self) -> None:
        """Cancel the active gesture and draft, then clear the selection."""
        self._cancel_gesture()
        self.zone_editor.reset_draft()
        if self.zone_editor.editing_zone_id is not None:
            self.zone_editor.end_vertex_edit()
        self._publish_selection(self.selection.escape())

    # ---------- bulk operations ----------

    def _selected_devices(self) -> List[Device]:
        ids = self.selection.device_ids
        return [d for d in self.selection.navigation_order(self.devices) if d.id in ids]

    def arrange_selection_in_zone(self, zone_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Lay the selected unlocked devices out on a grid inside a zone.

        Args:
            zone_id: Target zone (defaults to the selected zone)

        Returns:
            The applied {"device_id", "position"} updates
        """
        zone_id = zone_id or self.selection.zone_id
        zone = self.zone_store.get(zone_id) if zone_id else None
        if zone is None:
            self._fail("Select a zone to arrange devices in.")
            return []
        devices = [d for d in self._selected_devices() if not d.locked]
        if not devices:
            self._fail("Select at least one unlocked device to arrange.")
            return []
        updates = arrange_devices_in_zone(devices, zone, self._config["arrange_padding"])
        if not updates:
            self._fail(f"{zone.name} is too small to arrange devices in.")
            return []
        for update in updates:
            self._devices[update["device_id"]].position = update["position"]
        self._device_version += 1
        self.log.info(f"Arranged {len(updates)} devices in zone {zone.id}")
        self._events.emit(DEVICES_ARRANGED, updates)
        return updates

    def align_selection(self) -> List[Dict[str, Any]]:
        """
        Give the selected unlocked fixtures a common orientation.

        Returns:
            The applied {"device_id", "orientation_degrees"} updates
        """
        fixtures = [d for d in self._selected_devices() if is_fixture(d) and not d.locked]
        updates = alignment_updates(fixtures)
        if not updates:
            self._fail("Select at least one unlocked fixture to align.")
            return []
        for update in updates:
            self._devices[update["device_id"]].orientation_degrees = update["orientation_degrees"]
        self._device_version += 1
        self.log.info(f"Aligned {len(updates)} fixtures")
        self._events.emit(DEVICES_ALIGNED, updates)
        return updates

    # ---------- tooltip ----------

    def device_tooltip_content(self, device: Device) -> TooltipContent:
        detailed = self.tooltip_detail_level == TooltipDetailLevel.DETAILED
        lines = [f"Type: {device.category}"]
        if detailed:
            lines.extend(f"{key}: {value}" for key, value in device.details.items())
            zone = find_zone_for_point(device.position, self.zones)
            if zone is not None:
                lines.append(f"Zone: {zone.name}")
        if device.locked:
            lines.append("Locked")
        components = list(device.components) if detailed else []
        return TooltipContent(
            title=device.title,
            lines=lines,
            sub_title=f"Components ({len(components)})" if components else "",
            sub_items=components,
        )

    def person_tooltip_content(self, person: Person) -> TooltipContent:
        lines = []
        if self.tooltip_detail_level == TooltipDetailLevel.DETAILED:
            lines.extend(value for value in (person.role, person.email) if value)
        lines.append("Click to view details")
        return TooltipContent(title=person.display_name, lines=lines)

    def tooltip_layout(self) -> Optional[TooltipLayout]:
        """Layout of the tooltip for the hovered device or person, if any."""
        if self._gesture != GestureKind.NONE or self._pointer is None:
            return None
        width = None
        device = self._devices.get(self._hover_device_id) if self._hover_device_id else None
        if device is not None:
            content = self.device_tooltip_content(device)
        else:
            person = self._people.get(self._hover_person_id) if self._hover_person_id else None
            if person is None or not self._config["show_people"]:
                return None
            content = self.person_tooltip_content(person)
            width = self._config["person_tooltip_width"][self.tooltip_detail_level.value]
        return self.tooltips.layout(
            content,
            self._pointer,
            self._transform.viewport_width,
            self._transform.viewport_height,
            width=width,
        )

    # ---------- rendering ----------

    def render_layers(self) -> List[RenderLayer]:
        """
        Build the ordered render layers for the current state.

        Returns:
            Layers zones, draft, vertex_handles, devices, people, lasso and
            tooltip, to be painted in that order
        """
        editor = self.zone_editor
        editing = editor.editing_zone_id
        drag_offsets = {}
        if self._gesture == GestureKind.DEVICE_DRAG:
            drag_offsets = {device_id: self._drag_delta for device_id in self._drag_ids}
        scene = Scene(
            transform=self._transform,
            viewport=self._viewport,
            theme=self._theme,
            zones=self.zones,
            devices=self.visible_devices(),
            people=self.people,
            selected_device_ids=frozenset(self.selection.device_ids),
            selected_zone_id=self.selection.zone_id,
            hovered_device_id=self._hover_device_id,
            show_zones=self._config["show_zones"],
            show_people=self._config["show_people"],
            draft=editor.preview if editor.drawing else [],
            draft_closed=editor.draft_kind == DRAFT_RECTANGLE and len(editor.preview) > 1,
            editing_zone_id=editing,
            working_polygon=editor.working_polygon if editing is not None else (),
            active_vertex_index=self.selection.state.active_vertex_index,
            drag_offsets=drag_offsets,
            lasso=self.selection.lasso_rect,
            tooltip=self.tooltip_layout(),
        )
        return build_layers(scene)
