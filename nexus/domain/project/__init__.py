"""Project domain package.

The project aggregate: models, the stage state machine, budget
arithmetic, image limits and stage events.
"""

from nexus.domain.project.assets import (
    AVATAR_IMAGE_LIMIT,
    NOTES_IMAGE_LIMIT,
    PROJECT_IMAGE_LIMIT,
    validate_image_size,
)
from nexus.domain.project.events import (
    StageAdvanced,
    StageCompletionToggled,
    StageEvent,
    StageRegressed,
    StagesEdited,
)
from nexus.domain.project.finance import (
    PortfolioSummary,
    budget_total,
    budget_usage_percent,
    expenses_by_category,
    portfolio_summary,
    received,
    remaining,
    spent,
)
from nexus.domain.project.models import (
    ChatMessage,
    PaymentStatus,
    ProjectLinks,
    Project,
    ProofingRound,
    SubTask,
    Task,
    Transaction,
)
from nexus.domain.project.stages import (
    DEFAULT_STAGES,
    FALLBACK_STAGE,
    REGRESS_STEP,
    click_stage,
    edit_stages,
    effective_stages,
    progress_for_index,
    recompute_progress,
    stage_invariants_hold,
)

__all__ = [
    # Models
    "Project",
    "Task",
    "SubTask",
    "ChatMessage",
    "Transaction",
    "ProofingRound",
    "PaymentStatus",
    "ProjectLinks",
    # Stages
    "DEFAULT_STAGES",
    "FALLBACK_STAGE",
    "REGRESS_STEP",
    "click_stage",
    "edit_stages",
    "effective_stages",
    "progress_for_index",
    "recompute_progress",
    "stage_invariants_hold",
    # Events
    "StageEvent",
    "StageAdvanced",
    "StageRegressed",
    "StageCompletionToggled",
    "StagesEdited",
    # Finance
    "PortfolioSummary",
    "budget_total",
    "budget_usage_percent",
    "expenses_by_category",
    "portfolio_summary",
    "received",
    "remaining",
    "spent",
    # Assets
    "PROJECT_IMAGE_LIMIT",
    "NOTES_IMAGE_LIMIT",
    "AVATAR_IMAGE_LIMIT",
    "validate_image_size",
]
