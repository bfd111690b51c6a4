"""Project domain models.

A project is stored as one document holding its tasks, chat, budget
transactions and proofing rounds inline. These are pure data structures
with no I/O or side effects.
"""

from typing import Any

from pydantic import Field, field_validator

from nexus.domain.shared.document import DocumentModel
from nexus.domain.types import (
    LEGACY_PRIORITY_LABELS,
    LEGACY_STATUS_LABELS,
    Priority,
    RiskLevel,
    TaskStatus,
    TransactionType,
)


class SubTask(DocumentModel):
    """A checklist item inside a task."""

    id: str
    title: str
    completed: bool = False


class Task(DocumentModel):
    """A unit of work belonging to exactly one project."""

    id: str
    project_id: str = ""
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    priority: Priority = Priority.MEDIUM
    assignee: str | None = None
    subtasks: list[SubTask] = Field(default_factory=list)
    ai_suggestions: str | None = None
    start_date: str | None = None
    due_date: str | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _legacy_status(cls, value: Any) -> Any:
        return LEGACY_STATUS_LABELS.get(value, value) if isinstance(value, str) else value

    @field_validator("priority", mode="before")
    @classmethod
    def _legacy_priority(cls, value: Any) -> Any:
        return LEGACY_PRIORITY_LABELS.get(value, value) if isinstance(value, str) else value

    def is_done(self) -> bool:
        """Check if the task has reached Done."""
        return self.status == TaskStatus.DONE


class ChatMessage(DocumentModel):
    """A message in a project's discussion thread."""

    id: str
    sender_id: str
    content: str
    timestamp: str


class Transaction(DocumentModel):
    """An income or expense line in a project budget."""

    id: str
    title: str
    amount: float
    date: str
    category: str = "Other"
    type: TransactionType = TransactionType.EXPENSE


class ProofingRound(DocumentModel):
    """A batch of images submitted for client review."""

    id: str
    title: str
    date: str
    images: list[str] = Field(default_factory=list)


class PaymentStatus(DocumentModel):
    """Which contract installments have been received."""

    deposit_paid: bool = False
    interim1_paid: bool = False
    interim2_paid: bool = False
    final_paid: bool = False


class ProjectLinks(DocumentModel):
    """External links attached to a project."""

    figma: str | None = None
    staging: str | None = None
    production: str | None = None


class Project(DocumentModel):
    """A client project with its linear stage workflow.

    Invariants: current_stage is one of stages, completed_stages is a
    subset of stages, and progress is only changed by stage transitions
    or an explicit edit.
    """

    id: str
    name: str = ""
    category: str = ""
    client_name: str = ""
    client_avatar: str = ""
    description: str = ""
    current_stage: str = Field(default="", alias="stage")
    stages: list[str] = Field(default_factory=list)
    completed_stages: list[str] = Field(default_factory=list)
    progress: int = 0
    risk_level: RiskLevel = RiskLevel.LOW
    team: str | None = None
    team_members: list[str] = Field(default_factory=list)
    start_date: str = ""
    due_date: str = ""
    budget: str = ""
    budget_visible_to_members: bool = False
    payment_status: PaymentStatus = Field(default_factory=PaymentStatus)
    links: ProjectLinks = Field(default_factory=ProjectLinks)
    notes: str = ""
    notes_last_modified: str | None = None
    notes_last_modified_by: str | None = None
    tasks: list[Task] = Field(default_factory=list)
    chat_messages: list[ChatMessage] = Field(default_factory=list)
    transactions: list[Transaction] = Field(default_factory=list)
    proofing: list[ProofingRound] = Field(default_factory=list)
    unread_count: int = 0

    @field_validator("progress", mode="before")
    @classmethod
    def _round_progress(cls, value: Any) -> Any:
        if isinstance(value, float):
            return round(value)
        return value

    @field_validator("budget", mode="before")
    @classmethod
    def _budget_as_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value

    def has_member(self, member_id: str) -> bool:
        """Check if a member is assigned to this project."""
        return member_id in self.team_members
