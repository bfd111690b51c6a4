"""Shared fixtures for the Nexus test suite."""

from datetime import UTC, datetime

import pytest

from nexus.application.snapshot import SnapshotStore
from nexus.domain.member.models import Member
from nexus.domain.project.models import Project
from nexus.domain.types import AccessLevel
from nexus.infrastructure.storage.document_store import InMemoryDocumentStore
from nexus.infrastructure.storage.local_state import LocalState, MemoryKeyValueStore

NOW = datetime(2025, 5, 20, 10, 0, tzinfo=UTC)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def admin() -> Member:
    return Member(id="u-admin", name="Ada", email="ada@studio.test", access_level=AccessLevel.ADMIN)


@pytest.fixture
def manager() -> Member:
    return Member(
        id="u-manager", name="Max", email="max@studio.test", access_level=AccessLevel.MANAGER, team="Team A"
    )


@pytest.fixture
def senior() -> Member:
    return Member(
        id="u-senior", name="Sam", email="sam@studio.test", access_level=AccessLevel.SENIOR_MEMBER, team="Team B"
    )


@pytest.fixture
def member() -> Member:
    return Member(id="u-member", name="Mia", email="mia@studio.test", team="Team A")


@pytest.fixture
def loner() -> Member:
    """A plain member without a team."""
    return Member(id="u-loner", name="Leo", email="leo@studio.test")


@pytest.fixture
def make_project():
    """Factory for projects with three stages and sensible defaults."""

    def _make(project_id: str = "1000", **overrides) -> Project:
        fields = {
            "id": project_id,
            "name": f"Project {project_id}",
            "client_name": "Acme",
            "current_stage": "Inquiry",
            "stages": ["Inquiry", "Design", "Build"],
        }
        fields.update(overrides)
        return Project(**fields)

    return _make


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def snapshots(store) -> SnapshotStore:
    snapshots = SnapshotStore()
    snapshots.bind(store)
    return snapshots


@pytest.fixture
def local_state() -> LocalState:
    return LocalState(MemoryKeyValueStore())


def put_project(store: InMemoryDocumentStore, project: Project) -> None:
    store.put_document("projects", project.id, project.to_document())


def put_member(store: InMemoryDocumentStore, member: Member) -> None:
    store.put_document("members", member.id, member.to_document())
