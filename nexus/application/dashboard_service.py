"""Dashboard statistics and calendar events.

Pure functions over the projects visible to the viewer.
"""

from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel

from nexus.domain.member.access import sees_all_calendar_tasks
from nexus.domain.member.models import Member
from nexus.domain.project.models import Project
from nexus.domain.shared.numbers import round_half_up
from nexus.domain.types import Priority, TaskStatus


class DashboardStats(BaseModel):
    """Headline numbers shown on the dashboard."""

    total_projects: int
    total_tasks: int
    pending_tasks: int
    completed_tasks: int
    completion_rate: int


class CalendarEventKind(str, Enum):
    PROJECT_START = "project-start"
    PROJECT_DUE = "project-due"
    TASK = "task"


class CalendarEvent(BaseModel):
    """One entry on the calendar; project milestones come before tasks."""

    id: str
    kind: CalendarEventKind
    title: str
    project_id: str
    start_date: str | None = None
    due_date: str | None = None
    status: str | None = None
    priority: Priority | None = None
    assignee: str | None = None


def dashboard_stats(projects: Iterable[Project]) -> DashboardStats:
    projects = list(projects)
    tasks = [t for p in projects for t in p.tasks]
    completed = sum(1 for t in tasks if t.status == TaskStatus.DONE)
    rate = round_half_up(completed / len(tasks) * 100) if tasks else 0
    return DashboardStats(
        total_projects=len(projects),
        total_tasks=len(tasks),
        pending_tasks=len(tasks) - completed,
        completed_tasks=completed,
        completion_rate=rate,
    )


def calendar_events(user: Member, projects: Iterable[Project]) -> list[CalendarEvent]:
    """Calendar entries for the viewer.

    Admin and Manager see every project and task. Everyone else sees the
    projects they are assigned to, and only the tasks assigned to them by
    name.
    """
    see_all = sees_all_calendar_tasks(user)
    milestones: list[CalendarEvent] = []
    tasks: list[CalendarEvent] = []

    for project in projects:
        if not see_all and not project.has_member(user.id):
            continue

        if project.due_date:
            milestones.append(
                CalendarEvent(
                    id=f"prj-end-{project.id}",
                    kind=CalendarEventKind.PROJECT_DUE,
                    title=f"[Due] {project.name}",
                    project_id=project.id,
                    due_date=project.due_date,
                    status=project.current_stage,
                )
            )
        if project.start_date:
            milestones.append(
                CalendarEvent(
                    id=f"prj-start-{project.id}",
                    kind=CalendarEventKind.PROJECT_START,
                    title=f"[Start] {project.name}",
                    project_id=project.id,
                    start_date=project.start_date,
                    status=project.current_stage,
                )
            )

        for task in project.tasks:
            if not see_all and task.assignee != user.name:
                continue
            tasks.append(
                CalendarEvent(
                    id=task.id,
                    kind=CalendarEventKind.TASK,
                    title=f"{project.name} : {task.title}",
                    project_id=project.id,
                    start_date=task.start_date,
                    due_date=task.due_date,
                    status=task.status.value,
                    priority=task.priority,
                    assignee=task.assignee,
                )
            )

    return milestones + tasks
