"""Project CLI commands.

Commands for listing projects and driving their stage workflow.
"""

from typing import Optional

import typer

from nexus.application.project_service import ProjectDraft, ProjectService
from nexus.domain.member.access import can_view_budget, filter_visible_projects
from nexus.domain.project.finance import budget_usage_percent
from nexus.domain.project.models import Project
from nexus.domain.shared import Err
from nexus.interfaces.cli.common import (
    Workspace,
    data_dir_option,
    open_workspace,
    print_error,
    print_header,
    print_info,
    print_success,
    require_user,
    user_option,
)

app = typer.Typer(help="Project commands")


def _service(workspace: Workspace) -> ProjectService:
    return ProjectService(
        workspace.store,
        workspace.snapshots,
        default_stages=tuple(workspace.config.default_stages),
    )


def _stage_line(project: Project) -> str:
    chips = []
    for stage in project.stages:
        if stage == project.current_stage:
            chips.append(typer.style(f"[{stage}]", bold=True))
        elif stage in project.completed_stages:
            chips.append(f"{stage} ✓")
        else:
            chips.append(stage)
    return " > ".join(chips)


# =============================================================================
# Commands
# =============================================================================


@app.command("list")
def list_projects(
    query: str = typer.Option("", "--query", "-q", help="Filter by project or client name"),
    user: Optional[str] = user_option(),
    data_dir: Optional[str] = data_dir_option(),
) -> None:
    """List the projects visible to the acting member."""
    workspace = open_workspace(data_dir, user)
    member = require_user(workspace)
    projects = filter_visible_projects(member, workspace.snapshots.snapshot.projects, query)

    print_header(f"Projects ({len(projects)})")
    if not projects:
        print_info("No projects.")
        return
    for project in projects:
        typer.echo(f"{project.id}  {project.name}  [{project.category}]  {project.progress}%")
        typer.echo(f"    {_stage_line(project)}")
        if project.budget and can_view_budget(member, project):
            typer.echo(f"    Budget: {project.budget} ({budget_usage_percent(project):.0f}% used)")


@app.command("create")
def create(
    name: str = typer.Option("", "--name", "-n", help="Project name"),
    client: str = typer.Option("", "--client", help="Client name"),
    category: str = typer.Option("", "--category", help="Category"),
    stages: list[str] = typer.Option([], "--stage", "-s", help="Stage name (repeatable, in order)"),
    due_date: str = typer.Option("", "--due", help="Due date (YYYY-MM-DD)"),
    budget: str = typer.Option("", "--budget", help="Budget amount"),
    user: Optional[str] = user_option(),
    data_dir: Optional[str] = data_dir_option(),
) -> None:
    """Create a project.

    Example:
        nexus project create -n "Shop redesign" -s Inquiry -s Design -s Launch
    """
    workspace = open_workspace(data_dir, user)
    draft = ProjectDraft(
        name=name,
        client=client,
        category=category,
        stages=stages or list(workspace.config.default_stages),
        due_date=due_date,
        budget=budget,
    )
    result = _service(workspace).create_project(require_user(workspace), draft)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)
    print_success(f"Created project {result.value.id} ({result.value.name})")


@app.command("stage")
def stage(
    project_id: str = typer.Argument(..., help="Project id"),
    name: str = typer.Argument(..., help="Stage to click"),
    user: Optional[str] = user_option(),
    data_dir: Optional[str] = data_dir_option(),
) -> None:
    """Click a stage: advance to it, step back from it, or toggle it."""
    workspace = open_workspace(data_dir, user)
    result = _service(workspace).click_stage(require_user(workspace), project_id, name)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)

    project, event = result.value
    if event is None:
        print_info("Nothing to change.")
    else:
        print_success(f"{type(event).__name__}: now at {project.current_stage} ({project.progress}%)")
    typer.echo(_stage_line(project))


@app.command("stages")
def edit_stages(
    project_id: str = typer.Argument(..., help="Project id"),
    names: list[str] = typer.Argument(..., help="New stage list, in order"),
    user: Optional[str] = user_option(),
    data_dir: Optional[str] = data_dir_option(),
) -> None:
    """Replace a project's stage list."""
    workspace = open_workspace(data_dir, user)
    result = _service(workspace).edit_stages(require_user(workspace), project_id, names)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)
    print_success("Stages updated")
    typer.echo(_stage_line(result.value))


@app.command("fix-progress")
def fix_progress(
    user: Optional[str] = user_option(),
    data_dir: Optional[str] = data_dir_option(),
) -> None:
    """Recompute every project's progress from its completed stages."""
    workspace = open_workspace(data_dir, user)
    result = _service(workspace).fix_all_project_progress(require_user(workspace))
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)

    repair = result.value
    print_success(f"Fixed progress on {len(repair.fixed)} project(s)")
    if repair.failed:
        print_error(f"Failed to update {len(repair.failed)} project(s): {', '.join(repair.failed)}")
        raise typer.Exit(1)
