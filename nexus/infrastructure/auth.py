"""Authentication collaborator.

The hosted identity provider is reduced to sign-in/out, a session-change
callback and creation of accounts for other people through a secondary
session (so the admin doing it stays signed in). Failures raise AuthError
carrying the provider's error code.

LocalAuthService keeps accounts in memory and is used by tests and
offline setups.
"""

import hashlib
import logging
import re
import secrets
import uuid
from collections.abc import Callable
from typing import Protocol

from pydantic import BaseModel

from nexus.infrastructure.storage.document_store import Unsubscribe

logger = logging.getLogger(__name__)

EMAIL_ALREADY_IN_USE = "auth/email-already-in-use"
WEAK_PASSWORD = "auth/weak-password"
INVALID_EMAIL = "auth/invalid-email"
USER_NOT_FOUND = "auth/user-not-found"
WRONG_PASSWORD = "auth/wrong-password"
INVALID_CREDENTIAL = "auth/invalid-credential"
TOO_MANY_REQUESTS = "auth/too-many-requests"
NETWORK_REQUEST_FAILED = "auth/network-request-failed"

MIN_PASSWORD_LENGTH = 6

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class AuthUser(BaseModel):
    """Profile of an authenticated account."""

    uid: str
    email: str
    display_name: str | None = None


class AuthError(Exception):
    """An identity-provider call failed with a provider error code."""

    def __init__(self, code: str, message: str = "") -> None:
        super().__init__(message or code)
        self.code = code
        self.message = message or code


SessionCallback = Callable[[AuthUser | None], None]


class AuthService(Protocol):
    """Identity provider operations consumed by the session layer."""

    @property
    def current_user(self) -> AuthUser | None: ...

    def sign_in(self, email: str, password: str) -> AuthUser: ...

    def sign_out(self) -> None: ...

    def on_session_change(self, callback: SessionCallback) -> Unsubscribe: ...

    def create_secondary_user(self, email: str, password: str) -> str: ...


def _hash_password(password: str, salt: bytes) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, 100_000)


class LocalAuthService:
    """In-memory identity provider."""

    def __init__(self) -> None:
        self._accounts: dict[str, tuple[AuthUser, bytes, bytes]] = {}
        self._current: AuthUser | None = None
        self._callbacks: list[SessionCallback] = []

    @property
    def current_user(self) -> AuthUser | None:
        return self._current

    def _set_current(self, user: AuthUser | None) -> None:
        self._current = user
        for callback in list(self._callbacks):
            callback(user)

    def register(self, email: str, password: str, display_name: str | None = None) -> AuthUser:
        """Create an account.

        Raises:
            AuthError: invalid e-mail, weak password or duplicate e-mail.
        """
        key = email.strip().lower()
        if not _EMAIL_PATTERN.match(key):
            raise AuthError(INVALID_EMAIL, f"Invalid e-mail: {email}")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise AuthError(WEAK_PASSWORD, "Password should be at least 6 characters")
        if key in self._accounts:
            raise AuthError(EMAIL_ALREADY_IN_USE, f"E-mail already in use: {email}")

        user = AuthUser(uid=uuid.uuid4().hex, email=key, display_name=display_name)
        salt = secrets.token_bytes(16)
        self._accounts[key] = (user, salt, _hash_password(password, salt))
        logger.debug(f"Registered account {key}")
        return user

    def sign_in(self, email: str, password: str) -> AuthUser:
        key = email.strip().lower()
        if not _EMAIL_PATTERN.match(key):
            raise AuthError(INVALID_EMAIL)
        account = self._accounts.get(key)
        if account is None:
            raise AuthError(USER_NOT_FOUND)
        user, salt, digest = account
        if not secrets.compare_digest(_hash_password(password, salt), digest):
            raise AuthError(WRONG_PASSWORD)
        self._set_current(user)
        return user

    def sign_out(self) -> None:
        self._set_current(None)

    def on_session_change(self, callback: SessionCallback) -> Unsubscribe:
        """Register a callback; it fires immediately with the current user."""
        self._callbacks.append(callback)
        callback(self._current)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def create_secondary_user(self, email: str, password: str) -> str:
        """Create an account without touching the current session.

        Returns:
            The new account's uid.
        """
        return self.register(email, password).uid
