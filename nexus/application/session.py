"""Session resolution.

Maps an authenticated account onto a member record. The member list is
the source of truth for access level and status; an account with no
member record gets a plain Member profile built from the auth data.
"""

import logging
from collections.abc import Iterable
from urllib.parse import quote

from nexus.application.snapshot import Snapshot, SnapshotStore
from nexus.domain.member.models import Member
from nexus.domain.shared.result import Err, Ok, Result
from nexus.domain.types import AccessLevel, MemberStatus
from nexus.infrastructure.auth import (
    INVALID_CREDENTIAL,
    INVALID_EMAIL,
    NETWORK_REQUEST_FAILED,
    TOO_MANY_REQUESTS,
    USER_NOT_FOUND,
    WRONG_PASSWORD,
    AuthError,
    AuthService,
    AuthUser,
)
from nexus.infrastructure.storage.document_store import Unsubscribe

logger = logging.getLogger(__name__)

SUSPENDED_MESSAGE = "Your account has been suspended. Please contact an administrator."
GENERIC_SIGN_IN_ERROR = "Sign-in failed, please try again later."

_AUTH_ERROR_MESSAGES = {
    INVALID_EMAIL: "The e-mail address is not valid.",
    USER_NOT_FOUND: "Incorrect e-mail or password.",
    WRONG_PASSWORD: "Incorrect e-mail or password.",
    INVALID_CREDENTIAL: "Incorrect e-mail or password.",
    TOO_MANY_REQUESTS: "Too many attempts, please try again later.",
    NETWORK_REQUEST_FAILED: "Network connection failed, please check your network.",
}


def auth_error_message(code: str) -> str:
    """User-facing message for an identity-provider error code."""
    return _AUTH_ERROR_MESSAGES.get(code, GENERIC_SIGN_IN_ERROR)


def resolve_session_user(
    auth_user: AuthUser,
    members: Iterable[Member],
    super_admin_email: str | None = None,
) -> Result[Member, str]:
    """Resolve an authenticated account to the member acting in the app.

    Args:
        auth_user: Profile from the identity provider.
        members: Current member list.
        super_admin_email: Account that is always elevated to Admin / CEO.

    Returns:
        Ok(Member), or Err(SUSPENDED_MESSAGE) for a suspended member; the
        caller is expected to sign that account out.
    """
    email = auth_user.email.lower()
    is_super_admin = bool(super_admin_email) and email == super_admin_email.lower()

    member = next((m for m in members if m.email.lower() == email), None)
    if member is not None:
        if member.is_suspended():
            return Err(SUSPENDED_MESSAGE)
        if is_super_admin and (member.access_level != AccessLevel.ADMIN or member.role != "CEO"):
            member = member.model_copy(update={"access_level": AccessLevel.ADMIN, "role": "CEO"})
        return Ok(member)

    return Ok(
        Member(
            id=auth_user.uid,
            name=auth_user.display_name or email.split("@")[0] or "New User",
            email=auth_user.email,
            role="CEO" if is_super_admin else "Member",
            access_level=AccessLevel.ADMIN if is_super_admin else AccessLevel.MEMBER,
            status=MemberStatus.ACTIVE,
            avatar=f"https://ui-avatars.com/api/?name={quote(auth_user.email or 'U')}&background=random",
        )
    )


class SessionManager:
    """Keeps the acting member in sync with auth state and the member list."""

    def __init__(
        self,
        auth: AuthService,
        snapshots: SnapshotStore,
        super_admin_email: str | None = None,
    ) -> None:
        self._auth = auth
        self._snapshots = snapshots
        self._super_admin_email = super_admin_email
        self._current: Member | None = None
        self.last_error: str | None = None

    @property
    def current_user(self) -> Member | None:
        return self._current

    def start(self) -> Unsubscribe:
        """Follow session and member-list changes; returns the unsubscribe callable."""
        cancel_auth = self._auth.on_session_change(lambda _: self._resolve())
        cancel_snapshot = self._snapshots.on_change(self._on_snapshot)

        def unsubscribe() -> None:
            cancel_auth()
            cancel_snapshot()

        return unsubscribe

    def _on_snapshot(self, snapshot: Snapshot) -> None:
        self._resolve()

    def _resolve(self) -> None:
        auth_user = self._auth.current_user
        if auth_user is None:
            self._current = None
            return

        result = resolve_session_user(auth_user, self._snapshots.snapshot.members, self._super_admin_email)
        if isinstance(result, Err):
            logger.warning(f"Rejected session for {auth_user.email}: suspended")
            self.last_error = result.error
            self._current = None
            self._auth.sign_out()
            return
        self._current = result.value

    def sign_in(self, email: str, password: str) -> Result[Member, str]:
        """Sign in and resolve the member.

        Returns:
            Ok(Member), or Err with a user-facing message.
        """
        email, password = email.strip(), password.strip()
        if not email or not password:
            return Err("Please enter your e-mail and password.")

        self.last_error = None
        try:
            self._auth.sign_in(email, password)
        except AuthError as e:
            logger.info(f"Sign-in failed for {email}: {e.code}")
            return Err(auth_error_message(e.code))

        self._resolve()
        if self._current is None:
            return Err(self.last_error or GENERIC_SIGN_IN_ERROR)
        return Ok(self._current)

    def sign_out(self) -> None:
        self._auth.sign_out()
        self._current = None
