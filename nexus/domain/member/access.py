"""Access control filter and feature gates.

Pure predicates over (user, project) pairs. Project visibility:

- Admin or Manager: every project.
- Otherwise, with a team: projects of that team or ones the user is
  assigned to.
- Otherwise: only projects the user is assigned to.
"""

from collections.abc import Iterable

from nexus.domain.member.models import Member
from nexus.domain.project.models import Project
from nexus.domain.types import AccessLevel

MANAGEMENT_LEVELS = frozenset({AccessLevel.ADMIN, AccessLevel.MANAGER, AccessLevel.SENIOR_MEMBER})
SEE_ALL_LEVELS = frozenset({AccessLevel.ADMIN, AccessLevel.MANAGER})


def is_management(user: Member) -> bool:
    """Admin, Manager or SeniorMember."""
    return user.access_level in MANAGEMENT_LEVELS


def can_view_project(user: Member, project: Project) -> bool:
    """Decide whether a project appears in the user's project list."""
    if user.access_level in SEE_ALL_LEVELS:
        return True
    if project.has_member(user.id):
        return True
    teams = user.team_names()
    return bool(teams) and project.team in teams


def filter_visible_projects(
    user: Member | None,
    projects: Iterable[Project],
    query: str = "",
) -> list[Project]:
    """Projects the user may see, optionally narrowed by a search query.

    The query matches project name or client name, case-insensitively.
    No user means no projects.
    """
    if user is None:
        return []
    needle = query.strip().lower()
    return [
        p
        for p in projects
        if can_view_project(user, p)
        and (not needle or needle in p.name.lower() or needle in p.client_name.lower())
    ]


def receives_project_alerts(user: Member, project: Project) -> bool:
    """Whether project-level notifications are derived for this user."""
    return is_management(user) or can_view_project(user, project)


# =============================================================================
# Feature gates
# =============================================================================


def can_create_project(user: Member) -> bool:
    return is_management(user)


def can_edit_project(user: Member) -> bool:
    """Stage editing, stage clicks, task and schedule edits."""
    return is_management(user)


def can_manage_members(user: Member) -> bool:
    return is_management(user)


def can_manage_teams(user: Member) -> bool:
    """Team-name create, rename and delete."""
    return user.access_level == AccessLevel.ADMIN


def can_view_team_tab(user: Member) -> bool:
    return is_management(user)


def can_view_budget(user: Member, project: Project | None = None) -> bool:
    """Everyone but plain Members, unless the project opens its budget to them."""
    if user.access_level != AccessLevel.MEMBER:
        return True
    return project is not None and project.budget_visible_to_members


def can_manage_announcements(user: Member) -> bool:
    return user.access_level in SEE_ALL_LEVELS


def can_edit_default_stages(user: Member) -> bool:
    return user.access_level in SEE_ALL_LEVELS


def sees_all_calendar_tasks(user: Member) -> bool:
    """Admin and Manager see every task; others only their own."""
    return user.access_level in SEE_ALL_LEVELS


def visible_members(user: Member, members: Iterable[Member]) -> list[Member]:
    """Members listed in the team view.

    Admins see everyone; a user with a team sees teammates; a user with no
    team sees everyone.
    """
    members = list(members)
    if user.access_level == AccessLevel.ADMIN or not user.team:
        return members
    return [m for m in members if m.team == user.team]


def sort_members_by_access(members: Iterable[Member]) -> list[Member]:
    """Order members from most to least privileged, then by name."""
    return sorted(members, key=lambda m: (m.access_level.rank, m.name.lower()))
