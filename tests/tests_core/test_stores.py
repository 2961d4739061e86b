"""Tests for the zone stores."""
import pytest

from plancanvas.core.stores import MemoryZoneStore, ZoneStore
from plancanvas.models.entities import Zone
from plancanvas.models.geometry import Point

RING = (Point(0.1, 0.1), Point(0.3, 0.1), Point(0.3, 0.3), Point(0.1, 0.1))


class TestMemoryZoneStore:
    """Tests for MemoryZoneStore."""

    def test_is_zone_store(self):
        assert isinstance(MemoryZoneStore(), ZoneStore)

    def test_abstract_store(self):
        with pytest.raises(TypeError):
            ZoneStore()

    def test_create_names_and_colours(self):
        """Test new zones are numbered and coloured round-robin."""
        store = MemoryZoneStore(palette=["#111111", "#222222"])
        zones = [store.create(RING) for _ in range(3)]
        assert [z.id for z in zones] == ["zone-1", "zone-2", "zone-3"]
        assert [z.name for z in zones] == ["Zone 1", "Zone 2", "Zone 3"]
        assert [z.color for z in zones] == ["#111111", "#222222", "#111111"]
        assert store.list() == zones

    def test_create_skips_taken_ids(self):
        existing = Zone(id="zone-2", name="Existing", color="#fff", polygon=RING)
        store = MemoryZoneStore([existing])
        assert store.create(RING).id == "zone-3"

    def test_create_invalid_polygon(self):
        store = MemoryZoneStore()
        with pytest.raises(ValueError):
            store.create((Point(0.1, 0.1), Point(0.2, 0.2)))
        assert store.list() == []

    def test_update(self, zone_store):
        polygon = (Point(0.0, 0.0), Point(0.5, 0.0), Point(0.5, 0.5))
        zone = zone_store.update("zone-a", polygon)
        assert zone.vertices == list(polygon)
        assert zone.name == "Lobby"
        assert zone_store.get("zone-a") == zone

    def test_update_missing(self, zone_store):
        with pytest.raises(KeyError):
            zone_store.update("missing", RING)

    def test_delete(self, zone_store):
        assert zone_store.delete("zone-a") is True
        assert zone_store.delete("zone-a") is False
        assert zone_store.get("zone-a") is None

    def test_replace_all(self, zone_store, triangle_zone):
        zone_store.replace_all([triangle_zone])
        assert [z.id for z in zone_store.list()] == ["zone-t"]
