"""Project application service.

Orchestrates project writes: looks up the current project in the latest
snapshot, applies a pure domain change and writes the whole document back.
Every store failure is logged and returned as Err with a user-facing
message; nothing is retried and the snapshot is only updated by the
store's own push.
"""

import logging
import uuid
from collections.abc import Callable
from datetime import datetime

from pydantic import BaseModel, Field

from nexus.application.snapshot import SnapshotStore
from nexus.domain.member.access import can_create_project, can_edit_project
from nexus.domain.member.models import Member
from nexus.domain.project.assets import PROJECT_IMAGE_LIMIT, validate_image_size
from nexus.domain.project.events import StageEvent
from nexus.domain.project.models import (
    ChatMessage,
    PaymentStatus,
    ProofingRound,
    Project,
    Task,
    Transaction,
)
from nexus.domain.project.stages import (
    DEFAULT_STAGES,
    click_stage,
    edit_stages,
    recompute_progress,
)
from nexus.domain.shared.clock import timestamp_id, today_string, utc_now
from nexus.domain.shared.result import Err, Ok, Result
from nexus.domain.types import AccessLevel, Priority, RiskLevel, TaskStatus, TransactionType
from nexus.infrastructure.storage.document_store import PROJECTS, DocumentStore

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_NAME = "New Project"
DEFAULT_CATEGORY = "Uncategorized"
DEFAULT_CLIENT = "No client"


class ProjectDraft(BaseModel):
    """Input for creating a project."""

    name: str = ""
    category: str = ""
    client: str = ""
    description: str = ""
    risk: RiskLevel = RiskLevel.LOW
    budget: str = ""
    start_date: str | None = None
    due_date: str = ""
    stages: list[str] = Field(default_factory=list)
    team: str | None = None
    team_members: list[str] = Field(default_factory=list)
    payment_status: PaymentStatus = Field(default_factory=PaymentStatus)


def _new_entity_id() -> str:
    return uuid.uuid4().hex[:12]


class ProgressRepair(BaseModel):
    """Outcome of a progress repair pass, by project id."""

    fixed: list[str] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)


class ProjectService:
    """Project writes against the document store.

    Example:
        service = ProjectService(store, snapshots)
        result = service.click_stage(user, "1715000000000", "Design")
        if isinstance(result, Err):
            print(result.error)
    """

    def __init__(
        self,
        store: DocumentStore,
        snapshots: SnapshotStore,
        clock: Callable[[], datetime] = utc_now,
        default_stages: tuple[str, ...] = DEFAULT_STAGES,
    ) -> None:
        self._store = store
        self._snapshots = snapshots
        self._clock = clock
        self._default_stages = default_stages

    # -------------------------------------------------------------------------
    # Store access
    # -------------------------------------------------------------------------

    def _get(self, project_id: str) -> Result[Project, str]:
        project = self._snapshots.snapshot.project(project_id)
        if project is None:
            return Err(f"Project not found: {project_id}")
        return Ok(project)

    def _save(self, project: Project, failure: str = "Failed to save project") -> Result[Project, str]:
        try:
            self._store.put_document(PROJECTS, project.id, project.to_document())
        except Exception as e:
            logger.error(f"{failure} ({project.id}): {e}")
            return Err(failure)
        return Ok(project)

    def _change(self, project_id: str, **update) -> Result[Project, str]:
        result = self._get(project_id)
        if isinstance(result, Err):
            return result
        return self._save(result.value.model_copy(update=update))

    # -------------------------------------------------------------------------
    # Project lifecycle
    # -------------------------------------------------------------------------

    def create_project(self, user: Member, draft: ProjectDraft) -> Result[Project, str]:
        """Create a project from a draft.

        Blank name, category and client fall back to defaults. A creator
        below Admin with a team gets the project assigned to that team, and
        the creator is always added to the project's members.

        Returns:
            Ok(Project) once written, Err(str) otherwise.
        """
        if not can_create_project(user):
            return Err("You do not have permission to create projects")

        stages = [s.strip() for s in draft.stages if s.strip()]
        if not stages:
            return Err("Please set at least one project stage")

        team = draft.team
        if not team and user.access_level != AccessLevel.ADMIN and user.team:
            team = user.team

        members = list(draft.team_members)
        if user.id not in members:
            members.append(user.id)

        now = self._clock()
        project = Project(
            id=timestamp_id(now),
            name=draft.name.strip() or DEFAULT_PROJECT_NAME,
            category=draft.category.strip() or DEFAULT_CATEGORY,
            client_name=draft.client.strip() or DEFAULT_CLIENT,
            description=draft.description,
            current_stage=stages[0],
            stages=stages,
            risk_level=draft.risk,
            team=team,
            team_members=members,
            start_date=draft.start_date or today_string(now),
            due_date=draft.due_date,
            budget=draft.budget,
            payment_status=draft.payment_status,
        )
        logger.info(f"Creating project {project.id} ({project.name})")
        return self._save(project, "Failed to create project, please check the connection")

    def update_project(self, project: Project) -> Result[Project, str]:
        """Overwrite a project document with an edited copy."""
        return self._save(project)

    def delete_project(self, user: Member, project_id: str) -> Result[str, str]:
        if not can_edit_project(user):
            return Err("You do not have permission to delete projects")
        try:
            self._store.delete_document(PROJECTS, project_id)
        except Exception as e:
            logger.error(f"Failed to delete project {project_id}: {e}")
            return Err("Failed to delete project")
        return Ok(project_id)

    def rename_category(self, old: str, new: str) -> Result[int, str]:
        """Rename a category on every project carrying it.

        Returns:
            Ok(number of projects rewritten). A blank or unchanged name is
            a no-op.
        """
        new = new.strip()
        if not new or new == old:
            return Ok(0)

        affected = [p for p in self._snapshots.snapshot.projects if p.category == old]
        for project in affected:
            result = self._save(project.model_copy(update={"category": new}), "Failed to update category")
            if isinstance(result, Err):
                return result
        return Ok(len(affected))

    # -------------------------------------------------------------------------
    # Stages
    # -------------------------------------------------------------------------

    def click_stage(
        self, user: Member, project_id: str, stage: str
    ) -> Result[tuple[Project, StageEvent | None], str]:
        """Apply a stage click and persist the result.

        A click that changes nothing is not written.
        """
        if not can_edit_project(user):
            return Err("You do not have permission to change project stages")
        found = self._get(project_id)
        if isinstance(found, Err):
            return found

        clicked = click_stage(found.value, stage, self._default_stages)
        if isinstance(clicked, Err):
            return clicked
        project, event = clicked.value
        if event is None:
            return Ok((project, None))

        saved = self._save(project)
        if isinstance(saved, Err):
            return saved
        logger.debug(f"Stage event: {event.model_dump()}")
        return Ok((project, event))

    def edit_stages(self, user: Member, project_id: str, stages: list[str]) -> Result[Project, str]:
        if not can_edit_project(user):
            return Err("You do not have permission to edit project stages")
        found = self._get(project_id)
        if isinstance(found, Err):
            return found
        project, _ = edit_stages(found.value, stages)
        return self._save(project)

    def fix_all_project_progress(self, user: Member) -> Result[ProgressRepair, str]:
        """Recompute progress from completion marks on every project.

        Only projects whose progress changes are written. A failed write is
        recorded and the pass moves on to the next project.

        Returns:
            Ok(ProgressRepair) with the rewritten and failed project ids,
            Err(str) if the user may not edit projects.
        """
        if not can_edit_project(user):
            return Err("You do not have permission to repair project progress")

        repair = ProgressRepair()
        for project in self._snapshots.snapshot.projects:
            progress = recompute_progress(project, self._default_stages)
            if progress == project.progress:
                continue
            logger.info(f"Progress for {project.id}: {project.progress} -> {progress}")
            result = self._save(project.model_copy(update={"progress": progress}))
            if isinstance(result, Err):
                repair.failed.append(project.id)
            else:
                repair.fixed.append(project.id)
        if repair.failed:
            logger.warning(f"Progress repair failed for {len(repair.failed)} project(s)")
        return Ok(repair)

    # -------------------------------------------------------------------------
    # Tasks
    # -------------------------------------------------------------------------

    def add_task(
        self,
        project_id: str,
        title: str,
        status: TaskStatus = TaskStatus.TODO,
        priority: Priority = Priority.MEDIUM,
        assignee: str | None = None,
        due_date: str | None = None,
    ) -> Result[Task, str]:
        title = title.strip()
        if not title:
            return Err("Task title cannot be empty")
        found = self._get(project_id)
        if isinstance(found, Err):
            return found

        project = found.value
        task = Task(
            id=_new_entity_id(),
            project_id=project.id,
            title=title,
            status=status,
            priority=priority,
            assignee=assignee,
            due_date=due_date,
        )
        saved = self._save(project.model_copy(update={"tasks": [*project.tasks, task]}))
        if isinstance(saved, Err):
            return saved
        return Ok(task)

    def update_task(self, project_id: str, task: Task) -> Result[Project, str]:
        found = self._get(project_id)
        if isinstance(found, Err):
            return found
        project = found.value
        if not any(t.id == task.id for t in project.tasks):
            return Err(f"Task not found: {task.id}")
        tasks = [task if t.id == task.id else t for t in project.tasks]
        return self._save(project.model_copy(update={"tasks": tasks}))

    def delete_task(self, project_id: str, task_id: str) -> Result[Project, str]:
        found = self._get(project_id)
        if isinstance(found, Err):
            return found
        project = found.value
        return self._save(
            project.model_copy(update={"tasks": [t for t in project.tasks if t.id != task_id]})
        )

    # -------------------------------------------------------------------------
    # Discussion, notes, proofing
    # -------------------------------------------------------------------------

    def send_chat_message(self, user: Member, project_id: str, content: str) -> Result[ChatMessage, str]:
        content = content.strip()
        if not content:
            return Err("Message cannot be empty")
        found = self._get(project_id)
        if isinstance(found, Err):
            return found

        project = found.value
        message = ChatMessage(
            id=_new_entity_id(),
            sender_id=user.id,
            content=content,
            timestamp=self._clock().isoformat(),
        )
        saved = self._save(project.model_copy(update={"chat_messages": [*project.chat_messages, message]}))
        if isinstance(saved, Err):
            return saved
        return Ok(message)

    def update_notes(self, user: Member, project_id: str, notes: str) -> Result[Project, str]:
        """Save notes, stamping when and by whom they were last modified."""
        return self._change(
            project_id,
            notes=notes,
            notes_last_modified=self._clock().isoformat(),
            notes_last_modified_by=user.id,
        )

    def add_proofing_round(self, project_id: str, title: str, images: list[str]) -> Result[ProofingRound, str]:
        found = self._get(project_id)
        if isinstance(found, Err):
            return found

        project = found.value
        proofing = ProofingRound(
            id=_new_entity_id(),
            title=title.strip() or f"Round {len(project.proofing) + 1}",
            date=today_string(self._clock()),
            images=images,
        )
        saved = self._save(project.model_copy(update={"proofing": [*project.proofing, proofing]}))
        if isinstance(saved, Err):
            return saved
        return Ok(proofing)

    def set_cover_image(self, project_id: str, data_url: str, size_bytes: int) -> Result[Project, str]:
        """Replace the project cover; an empty data_url removes it."""
        checked = validate_image_size(size_bytes, PROJECT_IMAGE_LIMIT)
        if isinstance(checked, Err):
            return checked
        return self._change(project_id, client_avatar=data_url)

    # -------------------------------------------------------------------------
    # Budget
    # -------------------------------------------------------------------------

    def add_transaction(
        self,
        project_id: str,
        title: str,
        amount: float,
        type: TransactionType = TransactionType.EXPENSE,
        category: str = "Other",
        date: str | None = None,
    ) -> Result[Transaction, str]:
        title = title.strip()
        if not title or amount <= 0:
            return Err("A transaction needs a title and a positive amount")
        found = self._get(project_id)
        if isinstance(found, Err):
            return found

        project = found.value
        transaction = Transaction(
            id=_new_entity_id(),
            title=title,
            amount=amount,
            type=type,
            category=category or "Other",
            date=date or today_string(self._clock()),
        )
        saved = self._save(
            project.model_copy(update={"transactions": [*project.transactions, transaction]})
        )
        if isinstance(saved, Err):
            return saved
        return Ok(transaction)

    def delete_transaction(self, project_id: str, transaction_id: str) -> Result[Project, str]:
        found = self._get(project_id)
        if isinstance(found, Err):
            return found
        project = found.value
        transactions = [t for t in project.transactions if t.id != transaction_id]
        return self._save(project.model_copy(update={"transactions": transactions}))

    def update_budget(self, project_id: str, budget: str) -> Result[Project, str]:
        return self._change(project_id, budget=budget.strip())

    def toggle_budget_visibility(self, user: Member, project_id: str) -> Result[Project, str]:
        """Open or close the budget view to plain Members."""
        if not can_edit_project(user):
            return Err("You do not have permission to change budget visibility")
        found = self._get(project_id)
        if isinstance(found, Err):
            return found
        project = found.value
        return self._save(
            project.model_copy(update={"budget_visible_to_members": not project.budget_visible_to_members})
        )
