"""AI assistant CLI commands.

Runs task breakdown, risk analysis and chat against the configured
Ollama model.
"""

from typing import Optional

import typer

from nexus.application.assistant_service import AssistantService
from nexus.domain.project.models import Project
from nexus.infrastructure.ai.ollama import OllamaClient
from nexus.interfaces.cli.common import (
    Workspace,
    data_dir_option,
    open_workspace,
    print_error,
    print_header,
    print_warning,
)

app = typer.Typer(help="AI assistant commands")


def _assistant(workspace: Workspace) -> AssistantService:
    client = OllamaClient(model=workspace.config.ollama_model)
    if not client.is_available():
        print_warning("Ollama is not reachable; answers will fall back to defaults.")
    return AssistantService(client)


def _project(workspace: Workspace, project_id: str | None) -> Project | None:
    if project_id is None:
        return None
    project = workspace.snapshots.snapshot.project(project_id)
    if project is None:
        print_error(f"Project not found: {project_id}")
        raise typer.Exit(1)
    return project


@app.command("breakdown")
def breakdown(
    title: str = typer.Argument(..., help="Task title"),
    project_id: Optional[str] = typer.Option(None, "--project", "-p", help="Project for context"),
    data_dir: Optional[str] = data_dir_option(),
) -> None:
    """Suggest 3-5 subtasks for a task."""
    workspace = open_workspace(data_dir)
    project = _project(workspace, project_id)
    context = (project.description or project.name) if project else ""

    subtasks = _assistant(workspace).break_down_task(title, context)
    if not subtasks:
        print_error("No suggestions available.")
        raise typer.Exit(1)
    print_header(f"Subtasks for: {title}")
    for subtask in subtasks:
        typer.echo(f"- [{subtask.priority.value}] {subtask.title}")


@app.command("risk")
def risk(
    project_id: str = typer.Argument(..., help="Project id"),
    data_dir: Optional[str] = data_dir_option(),
) -> None:
    """Assess a project's risk level."""
    workspace = open_workspace(data_dir)
    assessment = _assistant(workspace).analyze_project_risks(_project(workspace, project_id))
    typer.echo(f"Risk: {assessment.risk_level.value}")
    typer.echo(assessment.analysis)


@app.command("chat")
def chat(
    message: str = typer.Argument(..., help="Question for the assistant"),
    project_id: Optional[str] = typer.Option(None, "--project", "-p", help="Project in focus"),
    data_dir: Optional[str] = data_dir_option(),
) -> None:
    """Ask the project assistant a question."""
    workspace = open_workspace(data_dir)
    typer.echo(_assistant(workspace).chat([], message, _project(workspace, project_id)))
