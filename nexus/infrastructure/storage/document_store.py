"""Document store collaborators.

The hosted database is reduced to four verbs per named collection:
subscribe (full snapshot on every change), put_document (full overwrite),
delete_document and list_documents. No querying happens at this layer;
all filtering is done in memory after subscription.

Two implementations live here: an in-memory store used by tests and
embedding code, and a JSON-directory store used by the CLI.
"""

import copy
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from nexus.domain.shared.result import Err
from nexus.infrastructure.storage.json_storage import JsonStorage

logger = logging.getLogger(__name__)

PROJECTS = "projects"
MEMBERS = "members"
ANNOUNCEMENTS = "announcements"
TEAMS = "teams"
COLLECTIONS = (PROJECTS, MEMBERS, ANNOUNCEMENTS, TEAMS)


@dataclass(frozen=True)
class StoredDocument:
    """A raw document as delivered by the store: its id and untyped body."""

    id: str
    data: dict[str, Any]


SnapshotCallback = Callable[[list[StoredDocument]], None]
Unsubscribe = Callable[[], None]


class DocumentStoreError(Exception):
    """A write or read against the document store failed."""


class DocumentStore(Protocol):
    """The four verbs consumed from the hosted document store."""

    def subscribe(self, collection: str, callback: SnapshotCallback) -> Unsubscribe: ...

    def put_document(self, collection: str, doc_id: str, data: dict[str, Any]) -> None: ...

    def delete_document(self, collection: str, doc_id: str) -> None: ...

    def list_documents(self, collection: str) -> list[StoredDocument]: ...


class _SubscriberRegistry:
    """Callbacks per collection, fired with a full snapshot after writes."""

    def __init__(self) -> None:
        self._subscribers: dict[str, list[SnapshotCallback]] = {}

    def add(self, collection: str, callback: SnapshotCallback) -> Unsubscribe:
        callbacks = self._subscribers.setdefault(collection, [])
        callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in callbacks:
                callbacks.remove(callback)

        return unsubscribe

    def publish(self, collection: str, snapshot: list[StoredDocument]) -> None:
        for callback in list(self._subscribers.get(collection, [])):
            callback(snapshot)


class InMemoryDocumentStore:
    """Document store held in process memory.

    Documents are deep-copied on the way in and out so callers cannot
    mutate stored state, mirroring a remote round trip.
    """

    def __init__(self, seed: dict[str, dict[str, dict[str, Any]]] | None = None) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = copy.deepcopy(seed or {})
        self._registry = _SubscriberRegistry()

    def subscribe(self, collection: str, callback: SnapshotCallback) -> Unsubscribe:
        unsubscribe = self._registry.add(collection, callback)
        callback(self.list_documents(collection))
        return unsubscribe

    def put_document(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        self._collections.setdefault(collection, {})[doc_id] = copy.deepcopy(data)
        self._registry.publish(collection, self.list_documents(collection))

    def delete_document(self, collection: str, doc_id: str) -> None:
        self._collections.get(collection, {}).pop(doc_id, None)
        self._registry.publish(collection, self.list_documents(collection))

    def list_documents(self, collection: str) -> list[StoredDocument]:
        return [
            StoredDocument(id=doc_id, data=copy.deepcopy(data))
            for doc_id, data in self._collections.get(collection, {}).items()
        ]


class JsonDocumentStore:
    """Document store backed by one JSON file per document.

    Layout: <root>/<collection>/<doc_id>.json. Subscribers in this process
    are notified after each write; changes made by other processes are
    picked up on the next list or write.
    """

    def __init__(self, root: Path, storage: JsonStorage | None = None) -> None:
        self._root = root
        self._storage = storage or JsonStorage()
        self._registry = _SubscriberRegistry()

    def _path(self, collection: str, doc_id: str) -> Path:
        if not doc_id or "/" in doc_id or "\\" in doc_id or doc_id.startswith("."):
            raise DocumentStoreError(f"Invalid document id: {doc_id!r}")
        return self._root / collection / f"{doc_id}.json"

    def subscribe(self, collection: str, callback: SnapshotCallback) -> Unsubscribe:
        unsubscribe = self._registry.add(collection, callback)
        callback(self.list_documents(collection))
        return unsubscribe

    def put_document(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        result = self._storage.save_json(self._path(collection, doc_id), data)
        if isinstance(result, Err):
            raise DocumentStoreError(result.error)
        self._registry.publish(collection, self.list_documents(collection))

    def delete_document(self, collection: str, doc_id: str) -> None:
        result = self._storage.delete_json(self._path(collection, doc_id))
        if isinstance(result, Err):
            raise DocumentStoreError(result.error)
        self._registry.publish(collection, self.list_documents(collection))

    def list_documents(self, collection: str) -> list[StoredDocument]:
        listing = self._storage.list_json(self._root / collection)
        if isinstance(listing, Err):
            raise DocumentStoreError(listing.error)

        documents: list[StoredDocument] = []
        for path in listing.value:
            loaded = self._storage.load_json(path)
            if isinstance(loaded, Err):
                logger.warning(f"Skipping unreadable document: {loaded.error}")
                continue
            if not isinstance(loaded.value, dict):
                logger.warning(f"Skipping non-object document: {path}")
                continue
            documents.append(StoredDocument(id=path.stem, data=loaded.value))
        return documents
