"""Announcement domain model and visibility rules."""

from collections.abc import Iterable

from pydantic import Field

from nexus.domain.member.access import can_manage_announcements
from nexus.domain.member.models import Member
from nexus.domain.shared.clock import parse_instant
from nexus.domain.shared.document import DocumentModel
from nexus.domain.types import AnnouncementPriority


class Announcement(DocumentModel):
    """A broadcast or targeted message from management.

    An empty target_member_ids list means every member. read_by is the
    remotely persisted read state.
    """

    id: str
    title: str
    content: str = ""
    tag: str = "General"
    priority: AnnouncementPriority = AnnouncementPriority.NORMAL
    target_member_ids: list[str] = Field(default_factory=list)
    author_id: str = ""
    created_at: str = ""
    read_by: list[str] = Field(default_factory=list)

    def targets(self, member_id: str) -> bool:
        """Check if the announcement is addressed to member_id."""
        return not self.target_member_ids or member_id in self.target_member_ids

    def is_read_by(self, member_id: str) -> bool:
        return member_id in self.read_by

    def mark_read(self, member_id: str) -> "Announcement":
        """Return a copy with member_id in read_by (unchanged if already there)."""
        if member_id in self.read_by:
            return self
        return self.model_copy(update={"read_by": [*self.read_by, member_id]})


def visible_announcements(user: Member, announcements: Iterable[Announcement]) -> list[Announcement]:
    """Announcements the user can open, newest first.

    Admins and Managers see all of them; others see broadcast ones and
    those targeted at them.
    """
    if can_manage_announcements(user):
        visible = list(announcements)
    else:
        visible = [a for a in announcements if a.targets(user.id)]

    def created(a: Announcement) -> float:
        moment = parse_instant(a.created_at)
        return moment.timestamp() if moment else 0.0

    return sorted(visible, key=created, reverse=True)
