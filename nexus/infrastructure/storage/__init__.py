"""Storage infrastructure for Nexus.

Document stores, the decode boundary for raw documents, and locally
persisted UI state.
"""

from nexus.infrastructure.storage.document_store import (
    ANNOUNCEMENTS,
    COLLECTIONS,
    MEMBERS,
    PROJECTS,
    TEAMS,
    DocumentStore,
    DocumentStoreError,
    InMemoryDocumentStore,
    JsonDocumentStore,
    StoredDocument,
)
from nexus.infrastructure.storage.json_storage import JsonStorage
from nexus.infrastructure.storage.local_state import (
    JsonFileKeyValueStore,
    KeyValueStore,
    LocalState,
    MemoryKeyValueStore,
)
from nexus.infrastructure.storage.normalize import (
    DocumentDecodeError,
    normalize_announcement,
    normalize_member,
    normalize_project,
    normalize_team,
)

__all__ = [
    "JsonStorage",
    # Document store
    "DocumentStore",
    "DocumentStoreError",
    "InMemoryDocumentStore",
    "JsonDocumentStore",
    "StoredDocument",
    "PROJECTS",
    "MEMBERS",
    "ANNOUNCEMENTS",
    "TEAMS",
    "COLLECTIONS",
    # Decoding
    "DocumentDecodeError",
    "normalize_project",
    "normalize_member",
    "normalize_announcement",
    "normalize_team",
    # Local state
    "KeyValueStore",
    "MemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "LocalState",
]
