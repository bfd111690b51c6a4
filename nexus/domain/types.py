"""Domain enumerations for Nexus.

String enums so values serialize directly into store documents.
"""

from enum import Enum


class TaskStatus(str, Enum):
    """Workflow status of a task."""

    TODO = "Todo"
    IN_PROGRESS = "InProgress"
    REVIEW = "Review"
    DONE = "Done"


class Priority(str, Enum):
    """Task priority."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class AccessLevel(str, Enum):
    """System permission tier, most privileged first."""

    ADMIN = "Admin"
    MANAGER = "Manager"
    SENIOR_MEMBER = "SeniorMember"
    MEMBER = "Member"

    @property
    def rank(self) -> int:
        """Privilege rank; 0 is the most privileged."""
        return _ACCESS_ORDER.index(self)

    def at_least(self, other: "AccessLevel") -> bool:
        """Check if this level is as privileged as other or more."""
        return self.rank <= other.rank


_ACCESS_ORDER = (
    AccessLevel.ADMIN,
    AccessLevel.MANAGER,
    AccessLevel.SENIOR_MEMBER,
    AccessLevel.MEMBER,
)


class RiskLevel(str, Enum):
    """Assessed project risk."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class MemberStatus(str, Enum):
    """Account status; suspended members cannot keep a session."""

    ACTIVE = "Active"
    SUSPENDED = "Suspended"


class TransactionType(str, Enum):
    """Direction of a budget transaction."""

    EXPENSE = "expense"
    INCOME = "income"


class AnnouncementPriority(str, Enum):
    """Announcement priority; High announcements raise urgent alerts."""

    NORMAL = "Normal"
    HIGH = "High"


# Labels written by earlier deployments, which stored localized values.
LEGACY_STATUS_LABELS: dict[str, TaskStatus] = {
    "待辦事項": TaskStatus.TODO,
    "進行中": TaskStatus.IN_PROGRESS,
    "審核中": TaskStatus.REVIEW,
    "已完成": TaskStatus.DONE,
}

LEGACY_PRIORITY_LABELS: dict[str, Priority] = {
    "低": Priority.LOW,
    "中": Priority.MEDIUM,
    "高": Priority.HIGH,
    "緊急": Priority.CRITICAL,
}
