"""Tests for the cache store and its typed view."""

import json

import pytest

from hoardview.domain import (
    DirectoryEntry,
    EntryType,
    ListingRecord,
    RenderedRecord,
    is_listing_fresh,
)
from hoardview.exceptions import CacheError
from hoardview.io import FontCache, JsonStore


class TestJsonStore:
    """Tests for JsonStore."""

    def test_memory_store(self):
        """Test a store without backing file."""
        store = JsonStore(None)
        store.set_item("a", "1")

        assert store.get_item("a") == "1"
        assert store.get_item("b") is None
        assert "a" in store
        assert len(store) == 1

    def test_persists_between_instances(self, tmp_path):
        """Test that items written by one store are read by the next."""
        path = tmp_path / "sub" / "store.json"
        JsonStore(path).set_item("key", "value")

        assert JsonStore(path).get_item("key") == "value"
        assert json.loads(path.read_text()) == {"key": "value"}

    def test_remove_item(self, tmp_path):
        path = tmp_path / "store.json"
        store = JsonStore(path)
        store.set_item("a", "1")
        store.remove_item("a")
        store.remove_item("missing")

        assert JsonStore(path).keys() == []

    def test_corrupt_file_raises(self, tmp_path):
        """Test that an unreadable store file raises CacheError."""
        path = tmp_path / "store.json"
        path.write_text("{not json")

        with pytest.raises(CacheError, match="unusable"):
            JsonStore(path)

    def test_non_object_raises(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("[1, 2]")

        with pytest.raises(CacheError):
            JsonStore(path)


class TestFontCache:
    """Tests for FontCache."""

    def test_listing_absent(self):
        assert FontCache(JsonStore(None)).listing is None

    def test_listing_round_trip(self, tmp_path):
        """Test that a stored listing is read back equal."""
        path = tmp_path / "store.json"
        record = ListingRecord(
            tree=[
                DirectoryEntry("d", EntryType.TREE),
                DirectoryEntry("d/x.yaff", EntryType.BLOB),
            ],
            fetched_at=1234.5,
        )
        FontCache(JsonStore(path)).listing = record

        assert FontCache(JsonStore(path)).listing == record

    def test_listing_overwritten(self):
        """Test that at most one listing is stored."""
        store = JsonStore(None)
        cache = FontCache(store)
        cache.listing = ListingRecord(tree=[], fetched_at=1.0)
        cache.listing = ListingRecord(tree=[], fetched_at=2.0)

        assert cache.listing.fetched_at == 2.0
        assert len(store) == 1

    def test_unreadable_listing_is_absent(self):
        store = JsonStore(None)
        store.set_item("listing", "garbage")

        assert FontCache(store).listing is None

    def test_rendered_round_trip_is_byte_exact(self, tmp_path):
        """Test that every byte value survives the base64 cache payload."""
        path = tmp_path / "store.json"
        image = bytes(range(256)) * 3
        FontCache(JsonStore(path)).put_rendered("d/x.yaff", RenderedRecord.from_image("X", image))

        record = FontCache(JsonStore(path)).get_rendered("d/x.yaff")

        assert record.name == "X"
        assert record.image_bytes() == image

    def test_rendered_keyed_by_path(self):
        """Test that fonts with the same base name are cached separately."""
        cache = FontCache(JsonStore(None))
        cache.put_rendered("a/x.yaff", RenderedRecord.from_image("A", b"a"))
        cache.put_rendered("b/x.yaff", RenderedRecord.from_image("B", b"b"))

        assert cache.get_rendered("a/x.yaff").name == "A"
        assert cache.get_rendered("b/x.yaff").name == "B"
        assert sorted(cache.rendered_paths()) == ["a/x.yaff", "b/x.yaff"]

    def test_rendered_absent(self):
        assert FontCache(JsonStore(None)).get_rendered("x.yaff") is None


class TestListingFreshness:
    """Tests for is_listing_fresh."""

    def test_no_record(self):
        assert not is_listing_fresh(None, 100.0, 3600)

    def test_young_record(self):
        assert is_listing_fresh(ListingRecord([], 100.0), 100.0 + 3599.9, 3600)

    def test_expired_at_ttl(self):
        assert not is_listing_fresh(ListingRecord([], 100.0), 100.0 + 3600, 3600)
