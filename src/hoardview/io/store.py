"""Persistent cache store.

JsonStore is a string key-value store kept in a single JSON file, in the
manner of browser local storage. FontCache puts a typed view on top of it:
one optional directory listing record and one rendered record per font path.
"""

import json
import os
from pathlib import Path

from hoardview.domain import ListingRecord, RenderedRecord
from hoardview.exceptions import CacheError

LISTING_KEY = "listing"
RENDERED_PREFIX = "rendered:"


class JsonStore:
    """String key-value store persisted to a JSON file.

    Every write rewrites the file. Pass ``path=None`` for a store that
    lives in memory only.
    """

    def __init__(self, path: Path | None) -> None:
        self._path = path
        self._items: dict[str, str] = {}
        if path is not None and path.exists():
            self._items = self._read(path)

    @property
    def path(self) -> Path | None:
        return self._path

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value
        self._flush()

    def remove_item(self, key: str) -> None:
        if self._items.pop(key, None) is not None:
            self._flush()

    def keys(self) -> list[str]:
        return list(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)

    @staticmethod
    def _read(path: Path) -> dict[str, str]:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise CacheError(str(path), str(e)) from e
        if not isinstance(data, dict):
            raise CacheError(str(path), "store is not a JSON object")
        return {str(key): str(value) for key, value in data.items()}

    def _flush(self) -> None:
        if self._path is None:
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            # replaced atomically
            tmp_path = self._path.with_name(self._path.name + ".tmp")
            tmp_path.write_text(json.dumps(self._items), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise CacheError(str(self._path), str(e)) from e


class FontCache:
    """Typed cache of directory listings and rendered previews.

    Example:
        cache = FontCache(JsonStore(Path("store.json")))
        cache.listing = ListingRecord(tree, time.time())
        cache.put_rendered("fonts/a.yaff", RenderedRecord("A", encoded))
    """

    def __init__(self, store: JsonStore) -> None:
        self._store = store

    @property
    def listing(self) -> ListingRecord | None:
        """Stored directory listing, or None if absent or unreadable."""
        raw = self._store.get_item(LISTING_KEY)
        if raw is None:
            return None
        try:
            return ListingRecord.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError):
            return None

    @listing.setter
    def listing(self, record: ListingRecord) -> None:
        self._store.set_item(LISTING_KEY, json.dumps(record.to_dict()))

    def get_rendered(self, path: str) -> RenderedRecord | None:
        """Look up the rendered record for a font path.

        Args:
            path: Remote path of the font source

        Returns:
            The stored record, or None if the font was never rendered
        """
        raw = self._store.get_item(RENDERED_PREFIX + path)
        if raw is None:
            return None
        try:
            return RenderedRecord.from_dict(json.loads(raw))
        except (ValueError, TypeError, AttributeError):
            return None

    def put_rendered(self, path: str, record: RenderedRecord) -> None:
        self._store.set_item(RENDERED_PREFIX + path, json.dumps(record.to_dict()))

    def rendered_paths(self) -> list[str]:
        return [
            key[len(RENDERED_PREFIX):]
            for key in self._store.keys()
            if key.startswith(RENDERED_PREFIX)
        ]
