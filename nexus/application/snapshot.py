"""In-memory snapshot of the four store collections.

Each collection list is replaced wholesale whenever the store pushes a new
snapshot. Derived views (visible projects, notifications) are recomputed
by listeners from the latest snapshot; nothing is patched incrementally.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace

from nexus.domain.announcement.models import Announcement
from nexus.domain.member.models import Member, Team
from nexus.domain.project.models import Project
from nexus.domain.project.stages import DEFAULT_STAGES
from nexus.infrastructure.storage.document_store import (
    ANNOUNCEMENTS,
    MEMBERS,
    PROJECTS,
    TEAMS,
    DocumentStore,
    StoredDocument,
    Unsubscribe,
)
from nexus.infrastructure.storage.normalize import (
    DocumentDecodeError,
    normalize_announcement,
    normalize_member,
    normalize_project,
    normalize_team,
)

logger = logging.getLogger(__name__)

DEFAULT_TEAMS: tuple[str, ...] = ("Team A", "Team B", "Team C", "Team D")


@dataclass(frozen=True)
class Snapshot:
    """Typed contents of every collection at one point in time."""

    projects: list[Project] = field(default_factory=list)
    members: list[Member] = field(default_factory=list)
    announcements: list[Announcement] = field(default_factory=list)
    teams: list[Team] = field(default_factory=list)
    default_teams: tuple[str, ...] = DEFAULT_TEAMS

    @property
    def team_names(self) -> list[str]:
        """Stored team names, or the default teams when none are stored."""
        if not self.teams:
            return list(self.default_teams)
        return [t.name for t in self.teams]

    def project(self, project_id: str) -> Project | None:
        return next((p for p in self.projects if p.id == project_id), None)

    def member(self, member_id: str) -> Member | None:
        return next((m for m in self.members if m.id == member_id), None)

    def announcement(self, announcement_id: str) -> Announcement | None:
        return next((a for a in self.announcements if a.id == announcement_id), None)


def _creation_order(project: Project) -> tuple[int, int]:
    # Ids are creation timestamps; newest first, non-numeric ids last.
    if project.id.isdigit():
        return (0, -int(project.id))
    return (1, 0)


SnapshotListener = Callable[[Snapshot], None]


class SnapshotStore:
    """Holds the latest snapshot and notifies listeners on every change.

    Example:
        snapshots = SnapshotStore()
        unsubscribe = snapshots.bind(InMemoryDocumentStore())
        snapshots.on_change(lambda s: print(len(s.projects)))
    """

    def __init__(
        self,
        default_stages: tuple[str, ...] = DEFAULT_STAGES,
        default_teams: tuple[str, ...] = DEFAULT_TEAMS,
    ) -> None:
        self._default_stages = default_stages
        self._snapshot = Snapshot(default_teams=default_teams)
        self._listeners: list[SnapshotListener] = []

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    def on_change(self, listener: SnapshotListener) -> Unsubscribe:
        """Register a listener called after every collection replacement."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def bind(self, store: DocumentStore) -> Unsubscribe:
        """Subscribe once to each collection of store.

        Returns:
            Callable that cancels all four subscriptions.
        """
        subscriptions = [
            store.subscribe(PROJECTS, self.replace_projects),
            store.subscribe(MEMBERS, self.replace_members),
            store.subscribe(ANNOUNCEMENTS, self.replace_announcements),
            store.subscribe(TEAMS, self.replace_teams),
        ]

        def unsubscribe() -> None:
            for cancel in subscriptions:
                cancel()

        return unsubscribe

    def _decode_all(self, documents: Iterable[StoredDocument], decode: Callable) -> list:
        decoded = []
        for document in documents:
            try:
                decoded.append(decode(document))
            except DocumentDecodeError as e:
                logger.warning(f"Skipping document: {e}")
        return decoded

    def _replace(self, **changes) -> None:
        self._snapshot = replace(self._snapshot, **changes)
        for listener in list(self._listeners):
            listener(self._snapshot)

    def replace_projects(self, documents: list[StoredDocument]) -> None:
        projects = self._decode_all(
            documents, lambda d: normalize_project(d, self._default_stages)
        )
        self._replace(projects=sorted(projects, key=_creation_order))

    def replace_members(self, documents: list[StoredDocument]) -> None:
        self._replace(members=self._decode_all(documents, normalize_member))

    def replace_announcements(self, documents: list[StoredDocument]) -> None:
        self._replace(announcements=self._decode_all(documents, normalize_announcement))

    def replace_teams(self, documents: list[StoredDocument]) -> None:
        self._replace(teams=self._decode_all(documents, normalize_team))
