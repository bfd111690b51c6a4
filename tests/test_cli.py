"""Tests for the CLI commands."""

import json

import pytest
from typer.testing import CliRunner

from nexus import __version__
from nexus.domain.announcement.models import Announcement
from nexus.domain.member.models import Member
from nexus.domain.types import AccessLevel, RiskLevel
from nexus.infrastructure.storage.document_store import JsonDocumentStore
from nexus.interfaces.cli import app

runner = CliRunner()

PM = "pm@studio.test"


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("NEXUS_HOME", str(tmp_path / "home"))
    monkeypatch.delenv("NEXUS_USER", raising=False)
    monkeypatch.delenv("NEXUS_DATA_DIR", raising=False)
    return tmp_path / "data"


@pytest.fixture
def json_store(data_dir):
    store = JsonDocumentStore(data_dir / "store")
    pm = Member(id="u-pm", name="Pat", email=PM, access_level=AccessLevel.MANAGER, team="Team A")
    store.put_document("members", pm.id, pm.to_document())
    return store


def invoke(*args):
    return runner.invoke(app, [str(a) for a in args])


def test_version():
    result = invoke("--version")
    assert result.exit_code == 0
    assert __version__ in result.output


class TestProjectCommands:
    def test_create_list_and_stage(self, data_dir, json_store):
        created = invoke(
            "project", "create", "-n", "Shop redesign", "-s", "Inquiry", "-s", "Design",
            "-s", "Launch", "-u", PM, "--data-dir", data_dir,
        )
        assert created.exit_code == 0, created.output
        assert "Created project" in created.output

        [document] = json_store.list_documents("projects")
        assert document.data["name"] == "Shop redesign"
        assert document.data["team"] == "Team A"

        listed = invoke("project", "list", "-u", PM, "--data-dir", data_dir)
        assert "Shop redesign" in listed.output
        assert "Projects (1)" in listed.output

        staged = invoke("project", "stage", document.id, "Design", "-u", PM, "--data-dir", data_dir)
        assert staged.exit_code == 0, staged.output
        assert "StageAdvanced" in staged.output
        assert json_store.list_documents("projects")[0].data["progress"] == 67

    def test_unknown_member_cannot_create(self, data_dir, json_store):
        result = invoke("project", "create", "-s", "Inquiry", "-u", "guest@studio.test", "--data-dir", data_dir)
        assert result.exit_code == 1
        assert "permission" in result.output

    def test_user_is_required(self, data_dir, json_store):
        result = invoke("project", "list", "--data-dir", data_dir)
        assert result.exit_code == 1
        assert "No user specified" in result.output

    def test_fix_progress(self, data_dir, json_store):
        json_store.put_document(
            "projects", "1",
            {"name": "Legacy", "stages": ["A", "B"], "stage": "B", "progress": 10},
        )
        result = invoke("project", "fix-progress", "-u", PM, "--data-dir", data_dir)
        assert "Fixed progress on 1 project(s)" in result.output
        assert json_store.list_documents("projects")[0].data["progress"] == 100

    def test_fix_progress_needs_edit_rights(self, data_dir, json_store):
        result = invoke("project", "fix-progress", "-u", "guest@studio.test", "--data-dir", data_dir)
        assert result.exit_code == 1
        assert "permission" in result.output


class TestNotificationCommands:
    @pytest.fixture
    def seeded(self, json_store):
        announcement = Announcement(
            id="a1", title="Office closed", content="Friday", created_at="2025-05-20T09:00:00Z"
        )
        json_store.put_document("announcements", "a1", announcement.to_document())
        json_store.put_document(
            "projects", "1",
            {"name": "Risky", "stages": ["A"], "stage": "A", "riskLevel": RiskLevel.HIGH.value},
        )
        return json_store

    def test_list_and_read(self, data_dir, seeded):
        listed = invoke("notifications", "list", "-u", PM, "--data-dir", data_dir)
        assert "Unread notifications (2)" in listed.output
        assert "id=ann-a1" in listed.output
        assert "id=risk-1" in listed.output

        opened = invoke("notifications", "read", "ann-a1", "-u", PM, "--data-dir", data_dir)
        assert "Open: announcements" in opened.output
        assert seeded.list_documents("announcements")[0].data["readBy"] == ["u-pm"]

        project = invoke("notifications", "read", "risk-1", "-u", PM, "--data-dir", data_dir)
        assert "Open: project 1 (content)" in project.output

        after = invoke("notifications", "list", "-u", PM, "--data-dir", data_dir)
        assert "Unread notifications (0)" in after.output

    def test_read_all_and_clear(self, data_dir, seeded):
        invoke("notifications", "read-all", "-u", PM, "--data-dir", data_dir)
        read_tab = invoke("notifications", "list", "--read", "-u", PM, "--data-dir", data_dir)
        assert "Read notifications (2)" in read_tab.output

        invoke("notifications", "clear", "-u", PM, "--data-dir", data_dir)
        cleared = invoke("notifications", "list", "--read", "-u", PM, "--data-dir", data_dir)
        assert "Read notifications (0)" in cleared.output

        invoke("notifications", "clear", "--reset", "-u", PM, "--data-dir", data_dir)
        restored = invoke("notifications", "list", "-u", PM, "--data-dir", data_dir)
        assert "Unread notifications (1)" in restored.output

    def test_unknown_notification(self, data_dir, seeded):
        result = invoke("notifications", "read", "nope", "-u", PM, "--data-dir", data_dir)
        assert result.exit_code == 1


def test_theme_toggle(data_dir):
    assert invoke("theme", "show", "--data-dir", data_dir).output.strip() == "dark"
    assert "Theme: light" in invoke("theme", "toggle", "--data-dir", data_dir).output
    assert invoke("theme", "show", "--data-dir", data_dir).output.strip() == "light"

    state = json.loads((data_dir / "local_state.json").read_text(encoding="utf-8"))
    assert state["nexus_theme"] == "light"


def test_config_set(data_dir, tmp_path):
    result = invoke("config", "set", "ollama-model", "llama3.2")
    assert result.exit_code == 0

    saved = json.loads((tmp_path / "home" / "config.json").read_text(encoding="utf-8"))
    assert saved["ollama_model"] == "llama3.2"
    assert invoke("config", "set", "colour", "red").exit_code == 1
