"""Stage / progress state machine.

Each project walks an ordered list of named stages. A pointer marks the
current stage and an independent set marks stages verified as complete.
Clicking a stage drives every transition:

- a stage ahead of the pointer advances to it and recomputes progress
  from its index, marking every earlier stage complete;
- the current stage steps back one stage with a fixed progress decrement;
- any other stage flips its completion flag only.

All functions are pure - they return a new Project and never mutate input.
"""

from nexus.domain.project.events import (
    StageAdvanced,
    StageCompletionToggled,
    StageEvent,
    StageRegressed,
    StagesEdited,
)
from nexus.domain.project.models import Project
from nexus.domain.shared.numbers import round_half_up
from nexus.domain.shared.result import Err, Ok, Result

DEFAULT_STAGES: tuple[str, ...] = ("Inquiry",)

# Inserted when an edit leaves a project with no stages at all.
FALLBACK_STAGE = "Project Start"

REGRESS_STEP = 5


def effective_stages(project: Project, default_stages: tuple[str, ...] = DEFAULT_STAGES) -> list[str]:
    """Return the project's stages, or the defaults when it has none."""
    if project.stages:
        return list(project.stages)
    return list(default_stages)


def progress_for_index(index: int, total: int) -> int:
    """Progress for a pointer at 0-based index out of total stages.

    Example:
        progress_for_index(1, 3)  # -> 67
    """
    if total <= 0:
        return 0
    return round_half_up((index + 1) / total * 100)


def click_stage(
    project: Project,
    target: str,
    default_stages: tuple[str, ...] = DEFAULT_STAGES,
) -> Result[tuple[Project, StageEvent | None], str]:
    """Apply a click on a stage chip.

    Args:
        project: Project whose workflow is being driven.
        target: Name of the clicked stage.
        default_stages: Stages used when the project has none.

    Returns:
        Ok((updated_project, event)). The event is None when the first
        stage is re-clicked, which changes nothing.
        Err(str) if target is not one of the project's stages.
    """
    stages = effective_stages(project, default_stages)
    if target not in stages:
        return Err(f"Unknown stage: {target}")

    current_index = stages.index(project.current_stage) if project.current_stage in stages else -1
    target_index = stages.index(target)

    if target == project.current_stage:
        if current_index <= 0:
            return Ok((project, None))
        previous = stages[current_index - 1]
        progress = max(0, project.progress - REGRESS_STEP)
        updated = project.model_copy(
            update={
                "current_stage": previous,
                "completed_stages": [s for s in project.completed_stages if s != target],
                "progress": progress,
            }
        )
        event = StageRegressed(
            project_id=project.id,
            from_stage=target,
            to_stage=previous,
            progress=progress,
        )
        return Ok((updated, event))

    if target_index > current_index:
        progress = progress_for_index(target_index, len(stages))
        newly_completed = [
            s for s in stages[:target_index] if s not in project.completed_stages
        ]
        updated = project.model_copy(
            update={
                "current_stage": target,
                "progress": progress,
                "completed_stages": [*project.completed_stages, *newly_completed],
            }
        )
        event = StageAdvanced(
            project_id=project.id,
            from_stage=project.current_stage,
            to_stage=target,
            progress=progress,
        )
        return Ok((updated, event))

    completed = target in project.completed_stages
    if completed:
        new_completed = [s for s in project.completed_stages if s != target]
    else:
        new_completed = [*project.completed_stages, target]
    updated = project.model_copy(update={"completed_stages": new_completed})
    return Ok((updated, StageCompletionToggled(project_id=project.id, stage=target, completed=not completed)))


def edit_stages(project: Project, new_stages: list[str]) -> tuple[Project, StagesEdited]:
    """Replace a project's stage list.

    Blank and duplicate names are dropped. An empty result becomes
    [FALLBACK_STAGE]. If the current stage is gone the pointer resets to the
    first stage, and completion marks for removed stages are dropped.
    Progress is left untouched; the next stage click recomputes it.

    Args:
        project: Project being edited.
        new_stages: Stage names in their new order.

    Returns:
        Tuple of (updated_project, StagesEdited event).
    """
    cleaned: list[str] = []
    for name in new_stages:
        name = name.strip()
        if name and name not in cleaned:
            cleaned.append(name)
    if not cleaned:
        cleaned = [FALLBACK_STAGE]

    current = project.current_stage if project.current_stage in cleaned else cleaned[0]
    updated = project.model_copy(
        update={
            "stages": cleaned,
            "current_stage": current,
            "completed_stages": [s for s in project.completed_stages if s in cleaned],
        }
    )
    return updated, StagesEdited(project_id=project.id, stages=cleaned, current_stage=current)


def recompute_progress(project: Project, default_stages: tuple[str, ...] = DEFAULT_STAGES) -> int:
    """Progress implied by the completion marks.

    100 when the pointer sits on the last stage, otherwise the share of
    stages marked complete.
    """
    stages = effective_stages(project, default_stages)
    if project.current_stage == stages[-1]:
        return 100
    return round_half_up(len(project.completed_stages) / len(stages) * 100)


def stage_invariants_hold(project: Project) -> bool:
    """Check current_stage is a stage and completed stages are a subset."""
    stages = set(project.stages)
    return project.current_stage in stages and set(project.completed_stages) <= stages
