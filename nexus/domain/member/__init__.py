"""Member domain package.

Members, teams and the pure access-control predicates built on them.
"""

from nexus.domain.member.access import (
    MANAGEMENT_LEVELS,
    can_create_project,
    can_edit_default_stages,
    can_edit_project,
    can_manage_announcements,
    can_manage_members,
    can_manage_teams,
    can_view_budget,
    can_view_project,
    can_view_team_tab,
    filter_visible_projects,
    is_management,
    receives_project_alerts,
    sees_all_calendar_tasks,
    sort_members_by_access,
    visible_members,
)
from nexus.domain.member.models import Member, Team

__all__ = [
    "Member",
    "Team",
    "MANAGEMENT_LEVELS",
    "is_management",
    "can_view_project",
    "filter_visible_projects",
    "receives_project_alerts",
    "can_create_project",
    "can_edit_project",
    "can_manage_members",
    "can_manage_teams",
    "can_view_team_tab",
    "can_view_budget",
    "can_manage_announcements",
    "can_edit_default_stages",
    "sees_all_calendar_tasks",
    "visible_members",
    "sort_members_by_access",
]
