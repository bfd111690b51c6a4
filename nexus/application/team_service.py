"""Team management (Admin only).

Teams are stored one document per name. Renaming or deleting a team
rewrites every member and project that carries the old name.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from nexus.application.snapshot import SnapshotStore
from nexus.domain.member.access import can_manage_teams
from nexus.domain.member.models import Member, Team
from nexus.domain.shared.clock import timestamp_id, utc_now
from nexus.domain.shared.result import Err, Ok, Result
from nexus.infrastructure.storage.document_store import MEMBERS, PROJECTS, TEAMS, DocumentStore

logger = logging.getLogger(__name__)


class TeamService:
    """Create, rename and delete teams with cascading updates."""

    def __init__(
        self,
        store: DocumentStore,
        snapshots: SnapshotStore,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = store
        self._snapshots = snapshots
        self._clock = clock

    def _find(self, name: str) -> Team | None:
        return next((t for t in self._snapshots.snapshot.teams if t.name == name), None)

    def add_team(self, user: Member, name: str) -> Result[Team, str]:
        if not can_manage_teams(user):
            return Err("Only administrators can add teams")
        name = name.strip()
        if not name:
            return Err("Please enter a team name")
        if name in self._snapshots.snapshot.team_names:
            return Err("This team name already exists")

        team = Team(id=timestamp_id(self._clock()), name=name)
        try:
            self._store.put_document(TEAMS, team.id, {"name": team.name})
        except Exception as e:
            logger.error(f"Failed to add team {name}: {e}")
            return Err("Failed to add team")
        return Ok(team)

    def rename_team(self, user: Member, old: str, new: str) -> Result[int, str]:
        """Rename a team and carry the new name onto members and projects.

        Returns:
            Ok(number of members and projects rewritten). A blank or
            unchanged name is a no-op.
        """
        if not can_manage_teams(user):
            return Err("Only administrators can edit teams")
        new = new.strip()
        if not new or new == old:
            return Ok(0)
        if new in self._snapshots.snapshot.team_names:
            return Err("This team name already exists")
        team = self._find(old)
        if team is None:
            return Err(f"Team not found: {old}")

        snapshot = self._snapshots.snapshot
        try:
            self._store.put_document(TEAMS, team.id, {"name": new})
            rewritten = 0
            for member in snapshot.members:
                if member.team != old and old not in member.teams:
                    continue
                updated = member.model_copy(
                    update={
                        "team": new if member.team == old else member.team,
                        "teams": [new if t == old else t for t in member.teams],
                    }
                )
                self._store.put_document(MEMBERS, member.id, updated.to_document())
                rewritten += 1
            for project in snapshot.projects:
                if project.team != old:
                    continue
                updated = project.model_copy(update={"team": new})
                self._store.put_document(PROJECTS, project.id, updated.to_document())
                rewritten += 1
        except Exception as e:
            logger.error(f"Failed to rename team {old} -> {new}: {e}")
            return Err("Failed to update team")

        logger.info(f"Renamed team {old} -> {new}, {rewritten} documents updated")
        return Ok(rewritten)

    def delete_team(self, user: Member, name: str) -> Result[int, str]:
        """Delete a team and clear it from members and projects.

        Returns:
            Ok(number of members and projects rewritten).
        """
        if not can_manage_teams(user):
            return Err("Only administrators can delete teams")
        team = self._find(name)
        if team is None:
            return Err(f"Team not found: {name}")

        snapshot = self._snapshots.snapshot
        try:
            self._store.delete_document(TEAMS, team.id)
            rewritten = 0
            for member in snapshot.members:
                if member.team != name and name not in member.teams:
                    continue
                updated = member.model_copy(
                    update={
                        "team": None if member.team == name else member.team,
                        "teams": [t for t in member.teams if t != name],
                    }
                )
                self._store.put_document(MEMBERS, member.id, updated.to_document())
                rewritten += 1
            for project in snapshot.projects:
                if project.team != name:
                    continue
                updated = project.model_copy(update={"team": None})
                self._store.put_document(PROJECTS, project.id, updated.to_document())
                rewritten += 1
        except Exception as e:
            logger.error(f"Failed to delete team {name}: {e}")
            return Err("Failed to delete team")

        return Ok(rewritten)
