"""Announcement domain package."""

from nexus.domain.announcement.models import Announcement, visible_announcements

__all__ = ["Announcement", "visible_announcements"]
