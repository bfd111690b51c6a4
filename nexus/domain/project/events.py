"""Project domain events.

Immutable records of stage-workflow changes, returned alongside the
updated project by the stage state machine.
"""

from nexus.domain.shared.events import DomainEvent


class StageAdvanced(DomainEvent):
    """The current stage moved forward to a later stage."""

    project_id: str
    from_stage: str
    to_stage: str
    progress: int


class StageRegressed(DomainEvent):
    """The current stage was clicked again and stepped back one stage."""

    project_id: str
    from_stage: str
    to_stage: str
    progress: int


class StageCompletionToggled(DomainEvent):
    """A stage other than the current one was marked or unmarked complete."""

    project_id: str
    stage: str
    completed: bool


class StagesEdited(DomainEvent):
    """The stage list of a project was rewritten."""

    project_id: str
    stages: list[str]
    current_stage: str


StageEvent = StageAdvanced | StageRegressed | StageCompletionToggled
