"""Notification domain - derivation engine and feed merging.

Key Types:
    Notification - A derived, transient alert
    NotificationType - Alert category
    NotificationFeed - Unread/read tabs after local state is applied

Functions:
    derive_notifications - Full derivation over a snapshot
    project_notifications - Rules for a single project
    build_feed - Apply read/deleted id sets
"""

from nexus.domain.notification.feed import NotificationFeed, build_feed, is_read
from nexus.domain.notification.models import Notification, NotificationType, notification_id
from nexus.domain.notification.rules import (
    PROJECT_RULES,
    announcement_notification,
    derive_notifications,
    project_notifications,
)

__all__ = [
    # Models
    "Notification",
    "NotificationType",
    "NotificationFeed",
    "notification_id",
    # Derivation
    "PROJECT_RULES",
    "derive_notifications",
    "project_notifications",
    "announcement_notification",
    # Feed
    "build_feed",
    "is_read",
]
