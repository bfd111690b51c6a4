"""Tests for session resolution."""

import pytest

from nexus.application.session import (
    GENERIC_SIGN_IN_ERROR,
    SUSPENDED_MESSAGE,
    SessionManager,
    auth_error_message,
    resolve_session_user,
)
from nexus.domain.member.models import Member
from nexus.domain.shared import Err, Ok
from nexus.domain.types import AccessLevel, MemberStatus
from nexus.infrastructure.auth import (
    NETWORK_REQUEST_FAILED,
    WRONG_PASSWORD,
    AuthUser,
    LocalAuthService,
)
from tests.conftest import put_member

BOSS = "boss@studio.test"


class TestResolveSessionUser:
    def test_matches_member_by_email_case_insensitively(self, member):
        result = resolve_session_user(AuthUser(uid="x", email="MIA@Studio.test"), [member])
        assert result == Ok(member)

    def test_suspended_member_is_rejected(self, member):
        suspended = member.model_copy(update={"status": MemberStatus.SUSPENDED})
        result = resolve_session_user(AuthUser(uid="x", email=member.email), [suspended])
        assert result == Err(SUSPENDED_MESSAGE)

    def test_super_admin_is_elevated(self):
        boss = Member(id="b", name="Bo", email=BOSS, role="Designer", access_level=AccessLevel.MEMBER)
        resolved = resolve_session_user(AuthUser(uid="b", email=BOSS), [boss], BOSS).value
        assert resolved.access_level == AccessLevel.ADMIN
        assert resolved.role == "CEO"

    def test_unknown_account_gets_member_profile(self):
        resolved = resolve_session_user(AuthUser(uid="new-uid", email="kai@studio.test"), []).value
        assert resolved.id == "new-uid"
        assert resolved.name == "kai"
        assert resolved.access_level == AccessLevel.MEMBER
        assert resolved.avatar.startswith("https://ui-avatars.com/api/?name=kai%40studio.test")

    def test_unknown_super_admin_is_created_as_admin(self):
        resolved = resolve_session_user(AuthUser(uid="b", email=BOSS, display_name="Bo"), [], BOSS).value
        assert resolved.name == "Bo"
        assert resolved.access_level == AccessLevel.ADMIN
        assert resolved.role == "CEO"


def test_auth_error_messages():
    assert auth_error_message(WRONG_PASSWORD) == "Incorrect e-mail or password."
    assert auth_error_message(NETWORK_REQUEST_FAILED).startswith("Network connection failed")
    assert auth_error_message("auth/something-new") == GENERIC_SIGN_IN_ERROR


class TestSessionManager:
    @pytest.fixture
    def auth(self):
        auth = LocalAuthService()
        auth.register("mia@studio.test", "secret1")
        return auth

    @pytest.fixture
    def session(self, auth, snapshots):
        session = SessionManager(auth, snapshots)
        session.start()
        return session

    def test_sign_in_resolves_member(self, session, store, member):
        put_member(store, member)
        assert session.sign_in(" mia@studio.test ", "secret1") == Ok(member)
        assert session.current_user == member

    def test_wrong_password(self, session):
        assert session.sign_in("mia@studio.test", "nope") == Err("Incorrect e-mail or password.")
        assert session.current_user is None

    def test_blank_credentials(self, session):
        assert isinstance(session.sign_in("", ""), Err)

    def test_suspension_signs_out(self, session, auth, store, member):
        put_member(store, member)
        session.sign_in("mia@studio.test", "secret1")

        put_member(store, member.model_copy(update={"status": MemberStatus.SUSPENDED}))

        assert session.current_user is None
        assert auth.current_user is None
        assert session.last_error == SUSPENDED_MESSAGE

    def test_member_edits_flow_into_session(self, session, store, member):
        put_member(store, member)
        session.sign_in("mia@studio.test", "secret1")

        put_member(store, member.model_copy(update={"access_level": AccessLevel.MANAGER}))

        assert session.current_user.access_level == AccessLevel.MANAGER

    def test_sign_out(self, session, auth):
        session.sign_in("mia@studio.test", "secret1")
        session.sign_out()
        assert session.current_user is None
        assert auth.current_user is None
