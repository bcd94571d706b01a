"""
Tests for the SQLite key-value store.
"""
import pytest

from service_tracker_api.app.core.store import KeyValueStore, StoreError


class TestKeyValueStore:
    def test_set_get_and_overwrite(self, store):
        assert store.get("missing") is None
        assert store.set("k", "v1")
        assert store.set("k", "v2")
        assert store.get("k") == "v2"

    def test_remove(self, store):
        store.set("k", "v")
        assert store.remove("k")
        assert store.get("k") is None
        assert store.remove("k")

    def test_json_round_trip_keeps_unicode(self, store):
        assert store.save_json("notes", [{"title": "Çamaşır makinesi"}])
        assert store.load_json("notes") == [{"title": "Çamaşır makinesi"}]
        assert "Çamaşır" in store.get("notes")

    def test_corrupted_json_falls_back_to_default(self, store):
        store.set("sts_services", "{not json")
        assert store.load_json("sts_services", default=[]) == []

    def test_unserializable_value_is_not_saved(self, store):
        assert not store.save_json("k", {"value": object()})
        assert store.get("k") is None

    def test_replace_many(self, store):
        store.save_json("a", [1])
        store.replace_many({"a": [2], "b": {"x": 1}})
        assert store.load_json("a") == [2]
        assert store.load_json("b") == {"x": 1}

    def test_replace_many_writes_nothing_on_bad_value(self, store):
        store.save_json("a", [1])
        with pytest.raises(StoreError):
            store.replace_many({"a": [2], "b": object()})
        assert store.load_json("a") == [1]
        assert store.get("b") is None


def test_unreadable_database_degrades_softly(tmp_path):
    """Reads and writes against a directory path fail without raising."""
    broken = KeyValueStore(str(tmp_path))
    assert broken.get("k") is None
    assert broken.set("k", "v") is False
    assert broken.load_json("k", default=[]) == []
