"""Tests for document stores, document decoding and the snapshot store."""

import pytest

from nexus.application.snapshot import DEFAULT_TEAMS, SnapshotStore
from nexus.domain.types import Priority, TaskStatus
from nexus.infrastructure.storage import (
    DocumentDecodeError,
    DocumentStoreError,
    InMemoryDocumentStore,
    JsonDocumentStore,
    StoredDocument,
    normalize_announcement,
    normalize_member,
    normalize_project,
    normalize_team,
)


class TestNormalizeProject:
    def test_missing_arrays_become_empty(self):
        project = normalize_project(StoredDocument(id="1", data={"name": "Bare", "stages": ["A", "B"]}))

        assert project.id == "1"
        assert project.tasks == []
        assert project.team_members == []
        assert project.completed_stages == []
        assert project.chat_messages == []
        assert project.transactions == []
        assert project.proofing == []
        assert project.current_stage == "A"

    def test_non_list_arrays_are_replaced(self):
        project = normalize_project(
            StoredDocument(id="1", data={"stages": ["A"], "stage": "A", "tasks": None, "teamMembers": "x"})
        )
        assert project.tasks == []
        assert project.team_members == []

    def test_empty_stages_use_defaults(self):
        project = normalize_project(StoredDocument(id="1", data={"stages": []}), ("Brief", "Ship"))
        assert project.stages == ["Brief", "Ship"]
        assert project.current_stage == "Brief"

    def test_camel_case_fields_and_legacy_labels(self):
        data = {
            "id": "42",
            "name": "Shop",
            "clientName": "Acme",
            "stage": "Design",
            "stages": ["Inquiry", "Design"],
            "completedStages": ["Inquiry"],
            "progress": 66.6,
            "budget": 12000.0,
            "budgetVisibleToMembers": True,
            "tasks": [{"id": "t1", "title": "Hero", "status": "進行中", "priority": "緊急"}],
        }
        project = normalize_project(StoredDocument(id="ignored", data=data))

        assert project.id == "42"
        assert project.client_name == "Acme"
        assert project.current_stage == "Design"
        assert project.progress == 67
        assert project.budget == "12000"
        assert project.budget_visible_to_members
        assert project.tasks[0].status == TaskStatus.IN_PROGRESS
        assert project.tasks[0].priority == Priority.CRITICAL

    def test_document_round_trip_uses_stage_key(self):
        project = normalize_project(StoredDocument(id="1", data={"stages": ["A", "B"], "stage": "B"}))
        document = project.to_document()
        assert document["stage"] == "B"
        assert "currentStage" not in document
        assert document["completedStages"] == []

    def test_structural_errors_raise(self):
        with pytest.raises(DocumentDecodeError) as exc_info:
            normalize_project(StoredDocument(id="1", data={"stages": ["A"], "riskLevel": "Extreme"}))
        assert exc_info.value.collection == "projects"
        assert exc_info.value.doc_id == "1"


def test_normalize_other_collections():
    member = normalize_member(StoredDocument(id="m1", data={"email": "a@b.test", "accessLevel": "Manager"}))
    assert member.id == "m1"
    assert member.teams == []

    announcement = normalize_announcement(StoredDocument(id="a1", data={"title": "Hi"}))
    assert announcement.read_by == []
    assert announcement.target_member_ids == []

    assert normalize_team(StoredDocument(id="t1", data={"name": "Team Z"})).name == "Team Z"

    with pytest.raises(DocumentDecodeError):
        normalize_member(StoredDocument(id="m2", data={"name": "No e-mail"}))


class TestInMemoryDocumentStore:
    def test_subscribe_delivers_initial_and_updates(self):
        store = InMemoryDocumentStore({"teams": {"t1": {"name": "Team A"}}})
        received = []
        unsubscribe = store.subscribe("teams", received.append)

        store.put_document("teams", "t2", {"name": "Team B"})
        unsubscribe()
        store.delete_document("teams", "t1")

        assert [[d.id for d in snapshot] for snapshot in received] == [["t1"], ["t1", "t2"]]
        assert [d.id for d in store.list_documents("teams")] == ["t2"]

    def test_documents_are_copied(self):
        store = InMemoryDocumentStore()
        data = {"name": "Team A"}
        store.put_document("teams", "t1", data)
        data["name"] = "changed"
        store.list_documents("teams")[0].data["name"] = "changed too"
        assert store.list_documents("teams")[0].data == {"name": "Team A"}


class TestJsonDocumentStore:
    def test_put_list_delete(self, tmp_path):
        store = JsonDocumentStore(tmp_path)
        received = []
        store.subscribe("projects", received.append)

        store.put_document("projects", "1", {"name": "One"})
        store.put_document("projects", "2", {"name": "Two"})
        assert (tmp_path / "projects" / "1.json").exists()
        assert [d.data["name"] for d in store.list_documents("projects")] == ["One", "Two"]

        store.delete_document("projects", "1")
        assert [d.id for d in received[-1]] == ["2"]

    def test_unreadable_documents_are_skipped(self, tmp_path):
        (tmp_path / "projects").mkdir()
        (tmp_path / "projects" / "bad.json").write_text("{not json", encoding="utf-8")
        (tmp_path / "projects" / "list.json").write_text("[1, 2]", encoding="utf-8")
        assert JsonDocumentStore(tmp_path).list_documents("projects") == []

    def test_path_like_ids_are_rejected(self, tmp_path):
        with pytest.raises(DocumentStoreError):
            JsonDocumentStore(tmp_path).put_document("projects", "../escape", {})


class TestSnapshotStore:
    def test_projects_newest_first_then_non_numeric(self, store, snapshots):
        for doc_id in ["1700000000000", "legacy-b", "1800000000000", "legacy-a"]:
            store.put_document("projects", doc_id, {"name": doc_id, "stages": ["A"]})

        assert [p.id for p in snapshots.snapshot.projects] == [
            "1800000000000",
            "1700000000000",
            "legacy-b",
            "legacy-a",
        ]

    def test_undecodable_documents_are_skipped(self, store, snapshots):
        store.put_document("members", "m1", {"email": "ok@studio.test"})
        store.put_document("members", "m2", {"name": "missing e-mail"})
        assert [m.id for m in snapshots.snapshot.members] == ["m1"]

    def test_default_teams_until_stored(self, store, snapshots):
        assert snapshots.snapshot.team_names == list(DEFAULT_TEAMS)
        store.put_document("teams", "t1", {"name": "Design"})
        assert snapshots.snapshot.team_names == ["Design"]

    def test_listeners_and_unbind(self):
        store = InMemoryDocumentStore()
        snapshots = SnapshotStore()
        seen = []
        snapshots.on_change(lambda s: seen.append(len(s.projects)))

        unbind = snapshots.bind(store)
        assert seen == [0, 0, 0, 0]

        store.put_document("projects", "1", {"stages": ["A"]})
        assert seen[-1] == 1

        unbind()
        store.put_document("projects", "2", {"stages": ["A"]})
        assert len(snapshots.snapshot.projects) == 1
