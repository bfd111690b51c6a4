"""AI assistant features.

Task breakdown, project risk analysis and a project-aware chat assistant,
all on top of a TextGenerator. Every feature degrades to a fixed fallback
when the model is unreachable or answers with something unusable.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any, Protocol

from pydantic import BaseModel, ValidationError

from nexus.domain.project.models import Project
from nexus.domain.shared.clock import today_string, utc_now
from nexus.domain.shared.result import Err, Result
from nexus.domain.types import Priority, RiskLevel

logger = logging.getLogger(__name__)

RISK_UNAVAILABLE = "AI service is temporarily unavailable"
RISK_NO_DATA = "Unable to analyze the data"
CHAT_EMPTY_REPLY = "Sorry, I could not process that request."
CHAT_FAILURE_REPLY = "Sorry, something went wrong while reaching the assistant."

BREAKDOWN_SCHEMA: dict[str, Any] = {
    "type": "array",
    "minItems": 3,
    "maxItems": 5,
    "items": {
        "type": "object",
        "properties": {
            "title": {"type": "string"},
            "priority": {"type": "string", "enum": [Priority.LOW.value, Priority.MEDIUM.value, Priority.HIGH.value]},
        },
        "required": ["title", "priority"],
    },
}

RISK_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "riskLevel": {"type": "string", "enum": [r.value for r in RiskLevel]},
        "analysis": {"type": "string"},
    },
    "required": ["riskLevel", "analysis"],
}


class TextGenerator(Protocol):
    """A language model that can answer in constrained JSON or free text."""

    def generate_structured(self, prompt: str, json_schema: dict[str, Any]) -> Result[Any, str]: ...

    def generate_text(self, system_instruction: str, messages: list[dict[str, str]]) -> Result[str, str]: ...


class SuggestedSubtask(BaseModel):
    title: str
    priority: Priority = Priority.MEDIUM


class RiskAssessment(BaseModel):
    risk_level: RiskLevel
    analysis: str


class AssistantService:
    """Assistant features for projects and tasks."""

    def __init__(self, generator: TextGenerator, clock: Callable[[], datetime] = utc_now) -> None:
        self._generator = generator
        self._clock = clock

    def break_down_task(self, task_title: str, project_context: str) -> list[SuggestedSubtask]:
        """Split a task into 3-5 concrete subtasks.

        Returns:
            Suggested subtasks, or [] when generation fails.
        """
        prompt = (
            f'I have a web design / development task: "{task_title}".\n'
            f'Project background: "{project_context}".\n'
            "As a senior web project manager, break this task down into 3-5 "
            "concrete subtasks, each with a priority of Low, Medium or High."
        )
        result = self._generator.generate_structured(prompt, BREAKDOWN_SCHEMA)
        if isinstance(result, Err):
            logger.error(f"Task breakdown failed: {result.error}")
            return []
        if not isinstance(result.value, list):
            logger.warning("Task breakdown returned a non-list value")
            return []
        try:
            return [SuggestedSubtask.model_validate(item) for item in result.value]
        except ValidationError as e:
            logger.warning(f"Task breakdown returned malformed items: {e}")
            return []

    def analyze_project_risks(self, project: Project) -> RiskAssessment:
        """Ask the model for a risk level and a one-line recommendation.

        Falls back to Low with an explanatory text on failure.
        """
        task_summary = "\n".join(
            f"- {t.title} ({t.status.value}, {t.priority.value})" for t in project.tasks
        )
        prompt = (
            "Analyze the risks of the following web design project.\n"
            f"Project name: {project.name}\n"
            f"Current stage: {project.current_stage}\n"
            f"Description: {project.description}\n"
            f"Tasks:\n{task_summary}\n"
            f"Notes: {project.notes or 'None'}\n\n"
            "Judge the overall risk level (Low, Medium, High) and give one short "
            f"recommendation specific to the current stage ({project.current_stage})."
        )
        result = self._generator.generate_structured(prompt, RISK_SCHEMA)
        if isinstance(result, Err):
            logger.error(f"Risk analysis failed: {result.error}")
            return RiskAssessment(risk_level=RiskLevel.LOW, analysis=RISK_UNAVAILABLE)
        if not result.value:
            return RiskAssessment(risk_level=RiskLevel.LOW, analysis=RISK_NO_DATA)
        try:
            value = result.value
            return RiskAssessment(risk_level=value["riskLevel"], analysis=value["analysis"])
        except (KeyError, TypeError, ValidationError) as e:
            logger.warning(f"Risk analysis returned malformed data: {e}")
            return RiskAssessment(risk_level=RiskLevel.LOW, analysis=RISK_UNAVAILABLE)

    def _system_instruction(self, project: Project | None, now: datetime) -> str:
        if project is not None:
            context = (
                f'Current project: "{project.name}", stage: "{project.current_stage}", '
                f'client: "{project.client_name}".'
            )
        else:
            context = "The user is on the dashboard overview."
        return (
            "You are Nexus, a project management assistant for web design and "
            "software development teams.\n"
            f"Today's date: {today_string(now)}.\n"
            f"{context}\n"
            "Answer concisely and professionally, drawing on UI/UX, frontend and "
            "backend expertise, and give concrete next steps that fit the "
            "project's current stage."
        )

    def chat(
        self,
        history: list[dict[str, str]],
        message: str,
        project: Project | None = None,
    ) -> str:
        """Reply to a user message in the context of an optional project.

        Returns:
            The assistant's reply, or a fixed apology on failure.
        """
        messages = [*history, {"role": "user", "content": message}]
        result = self._generator.generate_text(self._system_instruction(project, self._clock()), messages)
        if isinstance(result, Err):
            logger.error(f"Assistant chat failed: {result.error}")
            return CHAT_FAILURE_REPLY
        return result.value or CHAT_EMPTY_REPLY
