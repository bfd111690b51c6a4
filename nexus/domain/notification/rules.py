"""Notification derivation engine.

A pure function of (projects, announcements, user, now). Every rule looks
at one project and either yields a notification or nothing; rules run in
a fixed order over projects in snapshot order, after one notification per
announcement addressed to the user. No sorting is applied afterwards.

All functions in this module are pure - no I/O, no side effects.
"""

from collections.abc import Callable, Iterable
from datetime import datetime, timedelta

from nexus.domain.announcement.models import Announcement
from nexus.domain.member.access import is_management, receives_project_alerts
from nexus.domain.member.models import Member
from nexus.domain.notification.models import Notification, NotificationType, notification_id
from nexus.domain.project.finance import budget_total, budget_usage_percent, spent
from nexus.domain.project.models import Project, Task
from nexus.domain.shared.clock import DAY, days_until, ensure_utc, parse_instant
from nexus.domain.shared.numbers import round_half_up
from nexus.domain.types import AnnouncementPriority, Priority, RiskLevel, TransactionType

DUE_SOON_DAYS = 7
TASK_DUE_SOON_DAYS = 3
BEHIND_SCHEDULE_MARGIN = 20
BUDGET_WARNING_PERCENT = 80
BUDGET_URGENT_PERCENT = 95
RECENT_WINDOW = timedelta(hours=24)
ANNOUNCEMENT_PREVIEW_CHARS = 40

ProjectRule = Callable[[Project, Member, datetime], Notification | None]


# =============================================================================
# Project rules
# =============================================================================


def high_risk(project: Project, user: Member, now: datetime) -> Notification | None:
    if project.risk_level != RiskLevel.HIGH:
        return None
    return Notification(
        id=notification_id("risk", project.id),
        type=NotificationType.PROJECT,
        title="High-risk project",
        description=f'Project "{project.name}" is currently assessed as high risk',
        urgent=True,
        time_label="Now",
        project_id=project.id,
        target_tab="content",
    )


def due_soon(project: Project, user: Member, now: datetime) -> Notification | None:
    due = parse_instant(project.due_date)
    if due is None or project.progress >= 100:
        return None
    days = days_until(due, now)
    if not 0 <= days <= DUE_SOON_DAYS:
        return None
    return Notification(
        id=notification_id("due", project.id),
        type=NotificationType.PROJECT,
        title="Project due soon",
        description=f'"{project.name}" has {days} days left',
        urgent=True,
        time_label="Deadline approaching",
        project_id=project.id,
        target_tab="schedule",
    )


def behind_schedule(project: Project, user: Member, now: datetime) -> Notification | None:
    due = parse_instant(project.due_date)
    start = parse_instant(project.start_date)
    if due is None or start is None or project.progress >= 100:
        return None
    total_days = (due - start) / DAY
    elapsed_days = (now - start) / DAY
    if total_days < 0 or (total_days == 0 and elapsed_days <= 0):
        return None
    # A zero-length schedule that has started is expected to be finished.
    expected = 100.0 if total_days == 0 else min(100.0, elapsed_days / total_days * 100)
    if project.progress >= expected - BEHIND_SCHEDULE_MARGIN:
        return None
    return Notification(
        id=notification_id("behind", project.id),
        type=NotificationType.PROJECT,
        title="Project behind schedule",
        description=(
            f'"{project.name}" is at {project.progress}% '
            f"(expected {round_half_up(expected)}%)"
        ),
        urgent=True,
        time_label="Needs attention",
        project_id=project.id,
        target_tab="content",
    )


def budget_warning(project: Project, user: Member, now: datetime) -> Notification | None:
    if not is_management(user) or budget_total(project) <= 0:
        return None
    usage = budget_usage_percent(project)
    if usage < BUDGET_WARNING_PERCENT:
        return None
    return Notification(
        id=notification_id("budget", project.id),
        type=NotificationType.BUDGET,
        title="Budget usage warning",
        description=(
            f'"{project.name}" has used {round_half_up(usage)}% of its budget '
            f"({spent(project):,.0f} of {budget_total(project):,.0f})"
        ),
        urgent=usage >= BUDGET_URGENT_PERCENT,
        time_label="Finance",
        project_id=project.id,
        target_tab="content",
    )


def _open_tasks(project: Project) -> list[Task]:
    return [t for t in project.tasks if not t.is_done()]


def critical_tasks(project: Project, user: Member, now: datetime) -> Notification | None:
    count = sum(1 for t in _open_tasks(project) if t.priority == Priority.CRITICAL)
    if not count:
        return None
    return Notification(
        id=notification_id("task-crit", project.id),
        type=NotificationType.TASK,
        title="Critical tasks open",
        description=f'"{project.name}" has {count} critical task(s)',
        urgent=True,
        time_label="To do",
        project_id=project.id,
        target_tab="tasks",
    )


def high_priority_tasks(project: Project, user: Member, now: datetime) -> Notification | None:
    count = sum(1 for t in _open_tasks(project) if t.priority == Priority.HIGH)
    if not count:
        return None
    return Notification(
        id=notification_id("task-high", project.id),
        type=NotificationType.TASK,
        title="High-priority tasks",
        description=f'"{project.name}" has {count} high-priority task(s)',
        urgent=False,
        time_label="Pending",
        project_id=project.id,
        target_tab="tasks",
    )


def overdue_tasks(project: Project, user: Member, now: datetime) -> Notification | None:
    count = 0
    for task in _open_tasks(project):
        due = parse_instant(task.due_date)
        if due is not None and due < now:
            count += 1
    if not count:
        return None
    return Notification(
        id=notification_id("task-overdue", project.id),
        type=NotificationType.TASK,
        title="Tasks overdue",
        description=f'"{project.name}" has {count} overdue task(s)',
        urgent=True,
        time_label="Overdue",
        project_id=project.id,
        target_tab="tasks",
    )


def tasks_due_soon(project: Project, user: Member, now: datetime) -> Notification | None:
    count = 0
    for task in _open_tasks(project):
        due = parse_instant(task.due_date)
        if due is not None and 0 <= days_until(due, now) <= TASK_DUE_SOON_DAYS:
            count += 1
    if not count:
        return None
    return Notification(
        id=notification_id("task-soon", project.id),
        type=NotificationType.TASK,
        title="Tasks due soon",
        description=f'"{project.name}" has {count} task(s) due within {TASK_DUE_SOON_DAYS} days',
        urgent=False,
        time_label=f"Within {TASK_DUE_SOON_DAYS} days",
        project_id=project.id,
        target_tab="tasks",
    )


def _is_recent(value: str | None, now: datetime) -> bool:
    moment = parse_instant(value)
    return moment is not None and moment > now - RECENT_WINDOW


def recent_chat(project: Project, user: Member, now: datetime) -> Notification | None:
    count = sum(
        1
        for msg in project.chat_messages
        if msg.sender_id != user.id and _is_recent(msg.timestamp, now)
    )
    if not count:
        return None
    return Notification(
        id=notification_id("chat", project.id),
        type=NotificationType.CHAT,
        title="New discussion messages",
        description=f'"{project.name}" has {count} new message(s)',
        urgent=False,
        time_label="Last 24 hours",
        project_id=project.id,
        target_tab="chat",
    )


def notes_updated(project: Project, user: Member, now: datetime) -> Notification | None:
    editor = project.notes_last_modified_by
    if not editor or editor == user.id or not _is_recent(project.notes_last_modified, now):
        return None
    return Notification(
        id=notification_id("notes", project.id),
        type=NotificationType.NOTES,
        title="Notes updated",
        description=f'The notes of "{project.name}" were updated',
        urgent=False,
        time_label="Last 24 hours",
        project_id=project.id,
        target_tab="notes",
    )


def new_proofing(project: Project, user: Member, now: datetime) -> Notification | None:
    count = sum(1 for rnd in project.proofing if _is_recent(rnd.date, now))
    if not count:
        return None
    return Notification(
        id=notification_id("proof", project.id),
        type=NotificationType.PROOFING,
        title="Proofing awaiting review",
        description=f'"{project.name}" has {count} new proofing round(s)',
        urgent=False,
        time_label="Awaiting review",
        project_id=project.id,
        target_tab="proofing",
    )


def new_income(project: Project, user: Member, now: datetime) -> Notification | None:
    if not is_management(user):
        return None
    recent = [
        tx
        for tx in project.transactions
        if tx.type == TransactionType.INCOME and _is_recent(tx.date, now)
    ]
    if not recent:
        return None
    total = sum(tx.amount for tx in recent)
    return Notification(
        id=notification_id("income", project.id),
        type=NotificationType.PAYMENT,
        title="New income recorded",
        description=f'"{project.name}" has {len(recent)} new income record(s) (${total:,.0f})',
        urgent=False,
        time_label="Last 24 hours",
        project_id=project.id,
        target_tab="content",
    )


PROJECT_RULES: tuple[ProjectRule, ...] = (
    high_risk,
    due_soon,
    behind_schedule,
    budget_warning,
    critical_tasks,
    high_priority_tasks,
    overdue_tasks,
    tasks_due_soon,
    recent_chat,
    notes_updated,
    new_proofing,
    new_income,
)


# =============================================================================
# Derivation
# =============================================================================


def announcement_notification(announcement: Announcement, user: Member) -> Notification:
    """Notification for one announcement addressed to user."""
    created = parse_instant(announcement.created_at)
    return Notification(
        id=notification_id("ann", announcement.id),
        type=NotificationType.ANNOUNCEMENT,
        title=announcement.title,
        description=announcement.content[:ANNOUNCEMENT_PREVIEW_CHARS] + "...",
        urgent=announcement.priority == AnnouncementPriority.HIGH,
        time_label=created.date().isoformat() if created else "",
        original_id=announcement.id,
        read_remotely=announcement.is_read_by(user.id),
    )


def project_notifications(
    project: Project,
    user: Member,
    now: datetime,
    rules: tuple[ProjectRule, ...] = PROJECT_RULES,
) -> list[Notification]:
    """Run every rule against one project the user receives alerts for."""
    if not receives_project_alerts(user, project):
        return []
    now = ensure_utc(now)
    found: list[Notification] = []
    for rule in rules:
        notification = rule(project, user, now)
        if notification is not None:
            found.append(notification)
    return found


def derive_notifications(
    projects: Iterable[Project],
    announcements: Iterable[Announcement],
    user: Member | None,
    now: datetime,
) -> list[Notification]:
    """Derive the full candidate notification list.

    Args:
        projects: Current project snapshot.
        announcements: Current announcement snapshot.
        user: Signed-in member; None yields no notifications.
        now: Reference time for due-date and recency thresholds.

    Returns:
        Announcement notifications in snapshot order, then project
        notifications per project in snapshot order and rule order.
    """
    if user is None:
        return []
    now = ensure_utc(now)
    found = [announcement_notification(a, user) for a in announcements if a.targets(user.id)]
    for project in projects:
        found.extend(project_notifications(project, user, now))
    return found
