"""Member provisioning and profile updates.

New accounts are created through the identity provider's secondary
session so the administrator doing it stays signed in. Removing a member
only deletes the member document; the login account itself stays with
the provider.
"""

import logging

from nexus.domain.member.access import can_manage_members
from nexus.domain.member.models import Member
from nexus.domain.project.assets import AVATAR_IMAGE_LIMIT, validate_image_size
from nexus.domain.shared.result import Err, Ok, Result
from nexus.infrastructure.auth import EMAIL_ALREADY_IN_USE, WEAK_PASSWORD, AuthError, AuthService
from nexus.infrastructure.storage.document_store import MEMBERS, DocumentStore

logger = logging.getLogger(__name__)

DEFAULT_PASSWORD = "123456"


class MemberService:
    """Member writes against the store and the identity provider."""

    def __init__(self, store: DocumentStore, auth: AuthService) -> None:
        self._store = store
        self._auth = auth

    def _save(self, member: Member, failure: str) -> Result[Member, str]:
        try:
            self._store.put_document(MEMBERS, member.id, member.to_document())
        except Exception as e:
            logger.error(f"{failure} ({member.id}): {e}")
            return Err(failure)
        return Ok(member)

    def add_member(self, user: Member, member: Member, password: str | None = None) -> Result[Member, str]:
        """Provision a login account and store the member under its uid.

        Args:
            user: The member doing the provisioning.
            member: Profile to store; its id is replaced by the new uid.
            password: Initial password, DEFAULT_PASSWORD when omitted.

        Returns:
            Ok(stored Member), or Err with a message for the provider error.
        """
        if not can_manage_members(user):
            return Err("You do not have permission to add members")
        try:
            uid = self._auth.create_secondary_user(member.email, password or DEFAULT_PASSWORD)
        except AuthError as e:
            logger.error(f"Error creating account {member.email}: {e.code}")
            if e.code == EMAIL_ALREADY_IN_USE:
                return Err("This e-mail is already registered.")
            if e.code == WEAK_PASSWORD:
                return Err("Password is too weak (at least 6 characters).")
            return Err(f"Failed to create account: {e.message}")

        return self._save(member.model_copy(update={"id": uid}), "Failed to save member")

    def update_member(self, member: Member) -> Result[Member, str]:
        return self._save(member, "Failed to update member")

    def set_avatar(self, member: Member, data_url: str, size_bytes: int) -> Result[Member, str]:
        """Replace a member's avatar; an empty data_url removes it."""
        checked = validate_image_size(size_bytes, AVATAR_IMAGE_LIMIT)
        if isinstance(checked, Err):
            return checked
        return self._save(member.model_copy(update={"avatar": data_url or None}), "Failed to update avatar")

    def remove_member(self, user: Member, member_id: str) -> Result[str, str]:
        """Remove a member from the member list (the login account remains)."""
        if not can_manage_members(user):
            return Err("You do not have permission to remove members")
        try:
            self._store.delete_document(MEMBERS, member_id)
        except Exception as e:
            logger.error(f"Failed to remove member {member_id}: {e}")
            return Err("Failed to remove member")
        return Ok(member_id)
