"""Tests for the TTL cache and the in-memory store."""
from datetime import datetime, timedelta
from unittest.mock import patch

import pytest
from pydantic import BaseModel

from kerala_horizon.core.cache import TTLCache, make_key
from kerala_horizon.services.store import Database


class Note(BaseModel):
    id: str
    owner: str
    text: str = ""


class TestTTLCache:
    """Test cache expiry."""

    def test_set_and_get(self):
        cache = TTLCache(default_ttl_seconds=60)
        cache.set("a", {"x": 1})
        assert cache.get("a") == {"x": 1}
        assert cache.has("a")
        assert cache.keys() == ["a"]

    def test_expired_entry_is_evicted(self):
        cache = TTLCache(default_ttl_seconds=60)
        cache.set("a", 1)
        later = datetime.now() + timedelta(seconds=61)
        with patch("kerala_horizon.core.cache.datetime") as mock_datetime:
            mock_datetime.now.return_value = later
            assert cache.get("a") is None
        assert cache.keys() == []

    def test_zero_ttl_expires_immediately(self):
        cache = TTLCache()
        cache.set("a", 1, ttl_seconds=0)
        assert cache.get("a") is None

    def test_delete_and_flush(self):
        cache = TTLCache()
        cache.set("a", 1)
        cache.set("b", 2)
        assert cache.delete("a") is True
        assert cache.delete("a") is False
        cache.flush()
        assert cache.get("b") is None

    def test_make_key(self):
        assert make_key("stay_search", 9.93, 76.26, "all") == "stay_search_9.93_76.26_all"


class TestCollection:
    """Test collection operations."""

    def test_add_get_update_delete(self):
        notes = Database().collection("notes")
        notes.add("n1", Note(id="n1", owner="u1"))
        with pytest.raises(KeyError):
            notes.add("n1", Note(id="n1", owner="u1"))

        updated = notes.update("n1", text="hello")
        assert updated.text == "hello"
        assert notes.get("n1").text == "hello"
        assert notes.update("missing", text="x") is None

        assert notes.delete("n1") is True
        assert notes.get("n1") is None

    def test_where(self):
        notes = Database().collection("notes")
        notes.set("n1", Note(id="n1", owner="u1", text="backwaters"))
        notes.set("n2", Note(id="n2", owner="u2", text="hills"))
        notes.set("n3", Note(id="n3", owner="u1", text="hills"))

        assert {n.id for n in notes.where(owner="u1")} == {"n1", "n3"}
        assert [n.id for n in notes.where(owner="u1", text="hills")] == ["n3"]
        assert [n.id for n in notes.where(lambda n: n.text.startswith("back"))] == ["n1"]

    def test_database_clear(self):
        database = Database()
        database.collection("a").set("1", Note(id="1", owner="u"))
        assert database.collection("a") is database.collection("a")
        database.clear()
        assert database.collection("a").count() == 0
