"""Application service layer for Nexus.

Services orchestrate domain functions against the store collaborators:

    snapshot - Latest typed contents of every collection
    notification_service - Derived notification feed with local read state
    project_service - Project writes (stages, tasks, budget, notes)
    team_service - Team management with cascading renames
    member_service - Member provisioning through the identity provider
    announcement_service - Announcement writes
    session - Resolution of the signed-in account to a member
    assistant_service - AI task breakdown, risk analysis and chat
    dashboard_service - Dashboard statistics and calendar events

Example usage:
    >>> snapshots = SnapshotStore()
    >>> snapshots.bind(InMemoryDocumentStore())
    >>> center = NotificationCenter(LocalState(MemoryKeyValueStore()))
    >>> center.refresh(snapshots.snapshot, user, utc_now()).unread_count
    0
"""

from nexus.application.announcement_service import AnnouncementService
from nexus.application.assistant_service import (
    AssistantService,
    RiskAssessment,
    SuggestedSubtask,
    TextGenerator,
)
from nexus.application.dashboard_service import (
    CalendarEvent,
    CalendarEventKind,
    DashboardStats,
    calendar_events,
    dashboard_stats,
)
from nexus.application.member_service import MemberService
from nexus.application.notification_service import NavigationTarget, NotificationCenter
from nexus.application.project_service import ProgressRepair, ProjectDraft, ProjectService
from nexus.application.session import SessionManager, auth_error_message, resolve_session_user
from nexus.application.snapshot import DEFAULT_TEAMS, Snapshot, SnapshotStore
from nexus.application.team_service import TeamService

__all__ = [
    # Snapshot
    "Snapshot",
    "SnapshotStore",
    "DEFAULT_TEAMS",
    # Notifications
    "NotificationCenter",
    "NavigationTarget",
    # Writes
    "ProjectService",
    "ProgressRepair",
    "ProjectDraft",
    "TeamService",
    "MemberService",
    "AnnouncementService",
    # Session
    "SessionManager",
    "resolve_session_user",
    "auth_error_message",
    # Assistant
    "AssistantService",
    "TextGenerator",
    "SuggestedSubtask",
    "RiskAssessment",
    # Dashboard
    "DashboardStats",
    "CalendarEvent",
    "CalendarEventKind",
    "dashboard_stats",
    "calendar_events",
]
