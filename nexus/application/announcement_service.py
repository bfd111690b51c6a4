"""Announcement writes."""

import logging
from collections.abc import Callable
from datetime import datetime

from nexus.application.snapshot import SnapshotStore
from nexus.domain.announcement.models import Announcement
from nexus.domain.member.access import can_manage_announcements
from nexus.domain.member.models import Member
from nexus.domain.shared.clock import timestamp_id, utc_now
from nexus.domain.shared.result import Err, Ok, Result
from nexus.domain.types import AnnouncementPriority
from nexus.infrastructure.storage.document_store import ANNOUNCEMENTS, DocumentStore

logger = logging.getLogger(__name__)


class AnnouncementService:
    """Create, edit, delete and mark announcements read."""

    def __init__(
        self,
        store: DocumentStore,
        snapshots: SnapshotStore,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = store
        self._snapshots = snapshots
        self._clock = clock

    def _save(self, announcement: Announcement) -> Result[Announcement, str]:
        try:
            self._store.put_document(ANNOUNCEMENTS, announcement.id, announcement.to_document())
        except Exception as e:
            logger.error(f"Failed to save announcement {announcement.id}: {e}")
            return Err("Failed to save announcement")
        return Ok(announcement)

    def create(
        self,
        user: Member,
        title: str,
        content: str,
        tag: str = "General",
        priority: AnnouncementPriority = AnnouncementPriority.NORMAL,
        target_member_ids: list[str] | None = None,
    ) -> Result[Announcement, str]:
        """Publish an announcement; no targets means everyone."""
        if not can_manage_announcements(user):
            return Err("You do not have permission to publish announcements")
        title = title.strip()
        if not title:
            return Err("Announcement title cannot be empty")

        now = self._clock()
        return self._save(
            Announcement(
                id=timestamp_id(now),
                title=title,
                content=content,
                tag=tag,
                priority=priority,
                target_member_ids=target_member_ids or [],
                author_id=user.id,
                created_at=now.isoformat(),
            )
        )

    def update(self, user: Member, announcement: Announcement) -> Result[Announcement, str]:
        if not can_manage_announcements(user):
            return Err("You do not have permission to edit announcements")
        return self._save(announcement)

    def delete(self, user: Member, announcement_id: str) -> Result[str, str]:
        if not can_manage_announcements(user):
            return Err("You do not have permission to delete announcements")
        try:
            self._store.delete_document(ANNOUNCEMENTS, announcement_id)
        except Exception as e:
            logger.error(f"Failed to delete announcement {announcement_id}: {e}")
            return Err("Failed to delete announcement")
        return Ok(announcement_id)

    def mark_read(self, user: Member, announcement_id: str) -> Result[Announcement, str]:
        """Add the user to read_by; already-read announcements are not rewritten."""
        announcement = self._snapshots.snapshot.announcement(announcement_id)
        if announcement is None:
            return Err(f"Announcement not found: {announcement_id}")
        if announcement.is_read_by(user.id):
            return Ok(announcement)
        return self._save(announcement.mark_read(user.id))
