"""Notification center.

Combines the derivation engine with locally persisted read/deleted state.
Derived notifications are recomputed from scratch on every refresh; only
the id sets survive between runs.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from nexus.application.snapshot import Snapshot, SnapshotStore
from nexus.domain.member.models import Member
from nexus.domain.notification import (
    Notification,
    NotificationFeed,
    NotificationType,
    build_feed,
    derive_notifications,
)
from nexus.infrastructure.storage.document_store import Unsubscribe
from nexus.infrastructure.storage.local_state import LocalState

logger = logging.getLogger(__name__)

ANNOUNCEMENTS_VIEW = "announcements"
PROJECTS_VIEW = "projects"


@dataclass(frozen=True)
class NavigationTarget:
    """Where the UI goes after a notification is opened.

    announcement_id is set when the announcement must also be marked read
    in the store.
    """

    view: str
    project_id: str | None = None
    tab: str | None = None
    announcement_id: str | None = None


class NotificationCenter:
    """Derived notification feed for the signed-in user."""

    def __init__(self, local_state: LocalState) -> None:
        self._state = local_state
        self._notifications: list[Notification] = []
        self._feed = NotificationFeed()

    @property
    def notifications(self) -> list[Notification]:
        """Everything derived by the last refresh, deleted ones included."""
        return list(self._notifications)

    def refresh(self, snapshot: Snapshot, user: Member | None, now: datetime) -> NotificationFeed:
        """Re-derive notifications from a snapshot."""
        self._notifications = derive_notifications(
            snapshot.projects, snapshot.announcements, user, now
        )
        self._rebuild()
        logger.debug(
            f"Derived {len(self._notifications)} notifications, {self._feed.unread_count} unread"
        )
        return self._feed

    def follow(
        self,
        snapshots: SnapshotStore,
        current_user: Callable[[], Member | None],
        clock: Callable[[], datetime],
    ) -> Unsubscribe:
        """Refresh after every snapshot change; returns the unsubscribe callable."""
        self.refresh(snapshots.snapshot, current_user(), clock())
        return snapshots.on_change(lambda s: self.refresh(s, current_user(), clock()))

    def _rebuild(self) -> None:
        self._feed = build_feed(
            self._notifications, self._state.read_ids, self._state.deleted_ids
        )

    def _find(self, notification_id: str) -> Notification | None:
        return next((n for n in self._notifications if n.id == notification_id), None)

    def unread(self) -> list[Notification]:
        return list(self._feed.unread)

    def read(self) -> list[Notification]:
        return list(self._feed.read)

    def unread_count(self) -> int:
        return self._feed.unread_count

    def mark_read(self, notification_id: str) -> None:
        self._state.mark_read(notification_id)
        self._rebuild()

    def open(self, notification: Notification) -> NavigationTarget:
        """Mark a notification read and return its navigation target."""
        self.mark_read(notification.id)
        if notification.type == NotificationType.ANNOUNCEMENT:
            return NavigationTarget(view=ANNOUNCEMENTS_VIEW, announcement_id=notification.original_id)
        return NavigationTarget(
            view=PROJECTS_VIEW,
            project_id=notification.project_id,
            tab=notification.target_tab,
        )

    def open_by_id(self, notification_id: str) -> NavigationTarget | None:
        """Open a notification from the current feed; None if it is not there."""
        notification = self._find(notification_id)
        if notification is None or notification.id in self._state.deleted_ids:
            return None
        return self.open(notification)

    def delete(self, notification_id: str) -> None:
        self._state.mark_deleted(notification_id)
        self._rebuild()

    def mark_all_read(self) -> list[str]:
        """Mark every derived notification read.

        Returns:
            Ids of the announcements that must also be marked read in the
            store.
        """
        self._state.mark_read(*(n.id for n in self._notifications))
        self._rebuild()
        return [
            n.original_id
            for n in self._notifications
            if n.type == NotificationType.ANNOUNCEMENT and n.original_id
        ]

    def clear(self) -> None:
        """Delete every notification currently in the feed."""
        self._state.mark_deleted(*(n.id for n in self._feed.unread + self._feed.read))
        self._rebuild()

    def reset(self) -> None:
        """Forget all read and deleted marks."""
        self._state.clear()
        self._rebuild()
