"""Tests for the assistant features and the Ollama client wrapper."""

import pytest

from nexus.application.assistant_service import (
    BREAKDOWN_SCHEMA,
    CHAT_EMPTY_REPLY,
    CHAT_FAILURE_REPLY,
    RISK_NO_DATA,
    RISK_UNAVAILABLE,
    AssistantService,
)
from nexus.domain.project.models import Task
from nexus.domain.shared import Err, Ok
from nexus.domain.types import Priority, RiskLevel
from nexus.infrastructure.ai import ollama as ollama_client
from nexus.infrastructure.ai.ollama import OllamaClient


class FakeGenerator:
    """Returns canned results and records prompts."""

    def __init__(self, structured=None, text=None):
        self.structured = structured
        self.text = text
        self.prompts: list[str] = []
        self.conversations: list[tuple[str, list[dict[str, str]]]] = []

    def generate_structured(self, prompt, json_schema):
        self.prompts.append(prompt)
        return self.structured

    def generate_text(self, system_instruction, messages):
        self.conversations.append((system_instruction, messages))
        return self.text


class TestBreakDownTask:
    def test_returns_subtasks(self):
        generator = FakeGenerator(
            structured=Ok(
                [
                    {"title": "Wireframe", "priority": "High"},
                    {"title": "Copy", "priority": "Low"},
                    {"title": "Review", "priority": "Medium"},
                ]
            )
        )
        subtasks = AssistantService(generator).break_down_task("Landing page", "Bakery site")

        assert [s.title for s in subtasks] == ["Wireframe", "Copy", "Review"]
        assert subtasks[0].priority == Priority.HIGH
        assert '"Landing page"' in generator.prompts[0]

    @pytest.mark.parametrize(
        "structured",
        [Err("offline"), Ok({"title": "x"}), Ok([{"priority": "High"}])],
    )
    def test_failures_yield_nothing(self, structured):
        assert AssistantService(FakeGenerator(structured=structured)).break_down_task("t", "c") == []


class TestAnalyzeProjectRisks:
    def test_assessment(self, make_project):
        project = make_project(tasks=[Task(id="t1", title="Logo")])
        generator = FakeGenerator(structured=Ok({"riskLevel": "High", "analysis": "Scope creep"}))

        assessment = AssistantService(generator).analyze_project_risks(project)

        assert assessment.risk_level == RiskLevel.HIGH
        assert assessment.analysis == "Scope creep"
        assert "- Logo (Todo, Medium)" in generator.prompts[0]

    def test_unavailable(self, make_project):
        assessment = AssistantService(FakeGenerator(structured=Err("down"))).analyze_project_risks(make_project())
        assert assessment.risk_level == RiskLevel.LOW
        assert assessment.analysis == RISK_UNAVAILABLE

    def test_empty_answer(self, make_project):
        assessment = AssistantService(FakeGenerator(structured=Ok({}))).analyze_project_risks(make_project())
        assert assessment.analysis == RISK_NO_DATA


class TestChat:
    def test_reply_with_project_context(self, make_project, clock):
        generator = FakeGenerator(text=Ok("Ship the hero first."))
        service = AssistantService(generator, clock=clock)

        reply = service.chat([{"role": "assistant", "content": "Hello"}], "What next?", make_project())

        assert reply == "Ship the hero first."
        system, messages = generator.conversations[0]
        assert "Today's date: 2025-05-20." in system
        assert 'Current project: "Project 1000"' in system
        assert messages[-1] == {"role": "user", "content": "What next?"}

    def test_dashboard_context(self):
        generator = FakeGenerator(text=Ok("Hi"))
        AssistantService(generator).chat([], "Hi")
        assert "dashboard overview" in generator.conversations[0][0]

    def test_fallbacks(self):
        assert AssistantService(FakeGenerator(text=Err("boom"))).chat([], "Hi") == CHAT_FAILURE_REPLY
        assert AssistantService(FakeGenerator(text=Ok(""))).chat([], "Hi") == CHAT_EMPTY_REPLY


class TestOllamaClient:
    def test_generate_structured(self, monkeypatch):
        calls = {}

        def fake_generate(**kwargs):
            calls.update(kwargs)
            return {"response": ' [{"title": "A", "priority": "Low"}] '}

        monkeypatch.setattr(ollama_client.ollama, "generate", fake_generate)

        result = OllamaClient(model="tiny", max_tokens=64).generate_structured("p", BREAKDOWN_SCHEMA)

        assert result == Ok([{"title": "A", "priority": "Low"}])
        assert calls["model"] == "tiny"
        assert calls["format"] == BREAKDOWN_SCHEMA
        assert calls["options"] == {"num_predict": 64}

    def test_invalid_json(self, monkeypatch):
        monkeypatch.setattr(ollama_client.ollama, "generate", lambda **_: {"response": "not json"})
        assert isinstance(OllamaClient().generate_structured("p", {}), Err)

    def test_generate_text_prepends_system_prompt(self, monkeypatch):
        seen = {}

        def fake_chat(**kwargs):
            seen.update(kwargs)
            return {"message": {"content": " Hello there "}}

        monkeypatch.setattr(ollama_client.ollama, "chat", fake_chat)

        result = OllamaClient().generate_text("Be brief.", [{"role": "user", "content": "Hi"}])

        assert result == Ok("Hello there")
        assert seen["messages"][0] == {"role": "system", "content": "Be brief."}

    def test_connection_errors_become_err(self, monkeypatch):
        def refuse(*args, **kwargs):
            raise ConnectionError("connection refused")

        monkeypatch.setattr(ollama_client.ollama, "chat", refuse)
        monkeypatch.setattr(ollama_client.ollama, "list", refuse)

        client = OllamaClient()
        assert isinstance(client.generate_text("s", []), Err)
        assert client.is_available() is False
