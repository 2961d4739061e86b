"""Tests for Zone, Device and Person models."""
import pytest

from plancanvas.models.entities import Device, Person, Zone, close_ring, distinct_vertices
from plancanvas.models.geometry import Point

A = Point(0.1, 0.1)
B = Point(0.5, 0.1)
C = Point(0.5, 0.5)


class TestZone:
    """Tests for Zone dataclass."""

    def test_ring_is_closed(self):
        """Test that an open polygon gets its closing vertex."""
        zone = Zone(id="z", name="Z", color="#fff", polygon=(A, B, C))
        assert len(zone.polygon) == 4
        assert zone.polygon[0] == zone.polygon[-1]

    def test_closed_ring_kept(self):
        zone = Zone(id="z", name="Z", color="#fff", polygon=(A, B, C, A))
        assert zone.polygon == (A, B, C, A)

    def test_vertices_exclude_closing_point(self):
        zone = Zone(id="z", name="Z", color="#fff", polygon=(A, B, C))
        assert zone.vertices == [A, B, C]

    def test_too_few_vertices(self):
        """Test that fewer than 3 distinct vertices are rejected."""
        with pytest.raises(ValueError):
            Zone(id="z", name="Z", color="#fff", polygon=(A, B, A))
        with pytest.raises(ValueError):
            Zone(id="z", name="Z", color="#fff", polygon=(A, B))

    def test_points_must_be_normalized(self):
        with pytest.raises(ValueError):
            Zone(id="z", name="Z", color="#fff", polygon=(A, B, Point(1.5, 0.5)))

    def test_with_polygon(self):
        """Test that with_polygon keeps identity and styling."""
        zone = Zone(id="z", name="Z", color="#123456", polygon=(A, B, C))
        moved = zone.with_polygon((Point(0.2, 0.2), B, C))
        assert moved.id == "z"
        assert moved.name == "Z"
        assert moved.color == "#123456"
        assert moved.polygon[0] == moved.polygon[-1] == Point(0.2, 0.2)
        assert zone.polygon[0] == A

    def test_dict_conversion(self):
        zone = Zone(id="z", name="Z", color="#fff", polygon=(A, B, C))
        data = zone.to_dict()
        assert data["polygon"][0] == {"x": 0.1, "y": 0.1}
        assert len(data["polygon"]) == 4
        assert Zone.from_dict(data) == zone


class TestRingHelpers:
    def test_distinct_vertices(self):
        assert distinct_vertices([A, B, C, A]) == [A, B, C]
        assert distinct_vertices([A, B, C]) == [A, B, C]

    def test_close_ring(self):
        assert close_ring([A, B, C]) == (A, B, C, A)
        assert close_ring([]) == ()


class TestDevice:
    """Tests for Device dataclass."""

    def test_defaults(self):
        device = Device(id="d1", position=Point(0.5, 0.5))
        assert device.category == "device"
        assert device.orientation_degrees == 0.0
        assert device.locked is False
        assert device.details == {}
        assert device.components == []

    def test_title_falls_back_to_id(self):
        assert Device(id="d1", position=A).title == "d1"
        assert Device(id="d1", position=A, label="Door sensor").title == "Door sensor"


class TestPerson:
    """Tests for Person dataclass."""

    def test_display_name(self):
        person = Person(id="p1", position=A, first_name="Ada", last_name="Lovelace")
        assert person.display_name == "Ada Lovelace"

    def test_partial_name(self):
        assert Person(id="p1", position=A, first_name="Ada").display_name == "Ada"

    def test_anonymous(self):
        assert Person(id="p1", position=A).display_name == "Person"
