"""Member and team domain models."""

from pydantic import Field

from nexus.domain.shared.document import DocumentModel
from nexus.domain.types import AccessLevel, MemberStatus


class Member(DocumentModel):
    """A person who can sign in.

    The e-mail is the login key. role is a free-text job title; access_level
    is what gates features.
    """

    id: str
    name: str = ""
    email: str
    role: str = "Member"
    access_level: AccessLevel = AccessLevel.MEMBER
    team: str | None = None
    teams: list[str] = Field(default_factory=list)
    avatar: str | None = None
    status: MemberStatus = MemberStatus.ACTIVE

    def team_names(self) -> set[str]:
        """All teams the member belongs to (legacy single team included)."""
        names = set(self.teams)
        if self.team:
            names.add(self.team)
        return names

    def is_suspended(self) -> bool:
        """Check if the account has been suspended."""
        return self.status == MemberStatus.SUSPENDED


class Team(DocumentModel):
    """A named team; stored one document per team."""

    id: str
    name: str
