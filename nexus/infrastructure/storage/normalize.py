"""Decode raw store documents into typed models.

Documents come from an untyped store and may have been written by older
versions of the app. Missing arrays are tolerated and filled in here, once,
so the rest of the code never sees a half-shaped entity. Anything else that
does not fit the model is a DocumentDecodeError.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from nexus.domain.announcement.models import Announcement
from nexus.domain.member.models import Member, Team
from nexus.domain.project.models import Project
from nexus.domain.project.stages import DEFAULT_STAGES
from nexus.infrastructure.storage.document_store import StoredDocument

M = TypeVar("M", bound=BaseModel)

PROJECT_LIST_FIELDS = (
    "teamMembers",
    "completedStages",
    "tasks",
    "chatMessages",
    "transactions",
    "proofing",
)
ANNOUNCEMENT_LIST_FIELDS = ("readBy", "targetMemberIds")
MEMBER_LIST_FIELDS = ("teams",)


class DocumentDecodeError(Exception):
    """A stored document could not be decoded into its model."""

    def __init__(self, collection: str, doc_id: str, reason: str) -> None:
        super().__init__(f"Cannot decode {collection}/{doc_id}: {reason}")
        self.collection = collection
        self.doc_id = doc_id
        self.reason = reason


def _with_lists(data: dict[str, Any], fields: tuple[str, ...]) -> dict[str, Any]:
    for name in fields:
        if not isinstance(data.get(name), list):
            data[name] = []
    return data


def _decode(model: type[M], collection: str, document: StoredDocument, data: dict[str, Any]) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise DocumentDecodeError(collection, document.id, f"{location}: {first['msg']}") from e


def _prepare(document: StoredDocument, collection: str) -> dict[str, Any]:
    if not isinstance(document.data, dict):
        raise DocumentDecodeError(collection, document.id, "document body is not an object")
    data = dict(document.data)
    if not data.get("id"):
        data["id"] = document.id
    return data


def normalize_project(
    document: StoredDocument,
    default_stages: tuple[str, ...] = DEFAULT_STAGES,
) -> Project:
    """Decode a project document.

    Missing arrays become empty lists; a missing or empty stage list
    becomes default_stages, and a missing current stage points at the
    first stage.
    """
    data = _with_lists(_prepare(document, "projects"), PROJECT_LIST_FIELDS)
    stages = data.get("stages")
    if not isinstance(stages, list) or not stages:
        data["stages"] = list(default_stages)
    if not data.get("stage"):
        data["stage"] = data["stages"][0]
    return _decode(Project, "projects", document, data)


def normalize_member(document: StoredDocument) -> Member:
    data = _with_lists(_prepare(document, "members"), MEMBER_LIST_FIELDS)
    return _decode(Member, "members", document, data)


def normalize_announcement(document: StoredDocument) -> Announcement:
    data = _with_lists(_prepare(document, "announcements"), ANNOUNCEMENT_LIST_FIELDS)
    return _decode(Announcement, "announcements", document, data)


def normalize_team(document: StoredDocument) -> Team:
    return _decode(Team, "teams", document, _prepare(document, "teams"))
