"""Pytest configuration and shared fixtures."""
import pytest

from plancanvas.core.stores import MemoryZoneStore
from plancanvas.core.transform import ViewportTransform
from plancanvas.engine.canvas_engine import CanvasEngine
from plancanvas.models.entities import Device, Zone
from plancanvas.models.geometry import DisplayBounds, Point, ViewportState


@pytest.fixture
def full_bounds():
    """Display bounds filling an 800x600 viewport: normalized (x, y) -> (800x, 600y)."""
    return DisplayBounds(x=0, y=0, width=800, height=600, natural_width=1600, natural_height=1200)


@pytest.fixture
def transform(full_bounds):
    """Transform for an 800x600 viewport with known display bounds."""
    return ViewportTransform(viewport_width=800, viewport_height=600, bounds=full_bounds)


@pytest.fixture
def identity_viewport():
    """Unpanned, unzoomed viewport."""
    return ViewportState()


@pytest.fixture
def square_zone():
    """Square zone, screen (80, 60) to (320, 240) at scale 1."""
    return Zone(
        id="zone-a",
        name="Lobby",
        color="#4c7dff",
        polygon=(Point(0.1, 0.1), Point(0.4, 0.1), Point(0.4, 0.4), Point(0.1, 0.4)),
    )


@pytest.fixture
def triangle_zone():
    """Three-vertex zone, screen (480, 360), (720, 360), (480, 540) at scale 1."""
    return Zone(
        id="zone-t",
        name="Corner",
        color="#f97316",
        polygon=(Point(0.6, 0.6), Point(0.9, 0.6), Point(0.6, 0.9)),
    )


@pytest.fixture
def zone_store(square_zone, triangle_zone):
    """In-memory store holding the square and the triangle zone."""
    return MemoryZoneStore([square_zone, triangle_zone])


@pytest.fixture
def sample_devices():
    """
    Devices with their screen positions at scale 1:
    fx-1 (200, 150), fx-2 (240, 180), motion-1 (600, 300), locked-1 (400, 450).
    """
    return [
        Device(
            id="fx-1",
            position=Point(0.25, 0.25),
            category="fixture-16ft",
            label="Fixture 1",
            details={"Serial": "SN-1"},
            components=["Driver", "Sensor", "Radio", "Lens", "Housing", "Bracket", "Cable"],
        ),
        Device(id="fx-2", position=Point(0.3, 0.3), category="fixture"),
        Device(id="motion-1", position=Point(0.75, 0.5), category="motion"),
        Device(id="locked-1", position=Point(0.5, 0.75), category="light-sensor", locked=True),
    ]


@pytest.fixture
def engine(zone_store, sample_devices, full_bounds):
    """Canvas engine over the sample zones and devices."""
    engine = CanvasEngine(zone_store=zone_store, config={"viewport_width": 800, "viewport_height": 600})
    engine.set_display_bounds(full_bounds)
    engine.set_devices(sample_devices)
    return engine
