"""Notification domain models.

Notifications are derived, never stored remotely. Their identifiers are
built from the source entity id and the alert category, so the same
condition yields the same id on every recomputation and the locally
persisted read/deleted state keeps applying to it.
"""

from enum import Enum

from pydantic import BaseModel


class NotificationType(str, Enum):
    """Category of a derived notification."""

    ANNOUNCEMENT = "announcement"
    PROJECT = "project"
    BUDGET = "budget"
    TASK = "task"
    CHAT = "chat"
    NOTES = "notes"
    PROOFING = "proofing"
    PAYMENT = "payment"


class Notification(BaseModel):
    """A transient alert shown in the notification feed.

    project_id and target_tab tell the UI where to navigate on open.
    original_id and read_remotely only apply to announcements.
    """

    id: str
    type: NotificationType
    title: str
    description: str
    urgent: bool = False
    time_label: str = ""
    project_id: str | None = None
    target_tab: str | None = None
    original_id: str | None = None
    read_remotely: bool = False

    model_config = {"frozen": True}


def notification_id(category: str, entity_id: str) -> str:
    """Deterministic identifier, e.g. notification_id("risk", "p1") -> "risk-p1"."""
    return f"{category}-{entity_id}"
