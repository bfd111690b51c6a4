"""Locally persisted UI state.

Read and deleted notification ids plus the theme flag live outside the
remote store, behind a minimal key-value interface that is injected
rather than reached as a global. Values are JSON strings; every mutation
rewrites its key.
"""

import json
import logging
from pathlib import Path
from typing import Protocol

from nexus.domain.shared.result import Err
from nexus.infrastructure.storage.json_storage import JsonStorage

logger = logging.getLogger(__name__)

READ_NOTIFICATIONS_KEY = "nexus_read_notifs"
DELETED_NOTIFICATIONS_KEY = "nexus_deleted_notifs"
THEME_KEY = "nexus_theme"


class KeyValueStore(Protocol):
    """String key-value persistence."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryKeyValueStore:
    """Key-value store that lives only as long as the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFileKeyValueStore:
    """Key-value store persisted as a single JSON object on disk."""

    def __init__(self, path: Path, storage: JsonStorage | None = None) -> None:
        self._path = path
        self._storage = storage or JsonStorage()

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        result = self._storage.load_json(self._path)
        if isinstance(result, Err):
            logger.warning(f"Ignoring unreadable local state: {result.error}")
            return {}
        return result.value if isinstance(result.value, dict) else {}

    def get(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        values = self._load()
        values[key] = value
        result = self._storage.save_json(self._path, values)
        if isinstance(result, Err):
            logger.error(f"Failed to persist local state: {result.error}")


class LocalState:
    """Read/deleted notification ids and the theme flag.

    Sets are loaded once at construction and written back after every
    change.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store
        self._read_ids = self._load_ids(READ_NOTIFICATIONS_KEY)
        self._deleted_ids = self._load_ids(DELETED_NOTIFICATIONS_KEY)

    def _load_ids(self, key: str) -> set[str]:
        raw = self._store.get(key)
        if not raw:
            return set()
        try:
            values = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Discarding malformed value under {key}")
            return set()
        if not isinstance(values, list):
            return set()
        return {str(v) for v in values}

    def _save_ids(self, key: str, ids: set[str]) -> None:
        self._store.set(key, json.dumps(sorted(ids)))

    @property
    def read_ids(self) -> frozenset[str]:
        return frozenset(self._read_ids)

    @property
    def deleted_ids(self) -> frozenset[str]:
        return frozenset(self._deleted_ids)

    def mark_read(self, *ids: str) -> None:
        """Add ids to the read set."""
        self._read_ids.update(ids)
        self._save_ids(READ_NOTIFICATIONS_KEY, self._read_ids)

    def mark_deleted(self, *ids: str) -> None:
        """Add ids to the deleted set."""
        self._deleted_ids.update(ids)
        self._save_ids(DELETED_NOTIFICATIONS_KEY, self._deleted_ids)

    def clear(self) -> None:
        """Forget every read and deleted id."""
        self._read_ids.clear()
        self._deleted_ids.clear()
        self._save_ids(READ_NOTIFICATIONS_KEY, self._read_ids)
        self._save_ids(DELETED_NOTIFICATIONS_KEY, self._deleted_ids)

    @property
    def dark_theme(self) -> bool:
        return self._store.get(THEME_KEY) != "light"

    def set_dark_theme(self, dark: bool) -> None:
        self._store.set(THEME_KEY, "dark" if dark else "light")
