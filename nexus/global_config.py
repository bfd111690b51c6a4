"""Global configuration storage for Nexus.

Stores deployment settings in ~/.nexus/config.json (the directory can be
moved with NEXUS_HOME).
"""

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from nexus.application.snapshot import DEFAULT_TEAMS
from nexus.domain.project.stages import DEFAULT_STAGES
from nexus.infrastructure.ai.ollama import DEFAULT_MODEL

logger = logging.getLogger(__name__)

CONFIG_FILE = "config.json"


class NexusConfig(BaseModel):
    """Deployment settings."""

    data_dir: str | None = None
    ollama_model: str = DEFAULT_MODEL
    super_admin_email: str | None = None
    default_stages: list[str] = Field(default_factory=lambda: list(DEFAULT_STAGES))
    default_teams: list[str] = Field(default_factory=lambda: list(DEFAULT_TEAMS))

    def resolved_data_dir(self) -> Path:
        """Directory holding the document store and local state."""
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return get_config_dir() / "data"


def get_config_dir() -> Path:
    """Get the Nexus config directory."""
    config_dir = Path(os.environ.get("NEXUS_HOME") or Path.home() / ".nexus")
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_global_config() -> NexusConfig:
    """Load global configuration, falling back to defaults."""
    config_file = get_config_dir() / CONFIG_FILE
    if config_file.exists():
        try:
            data = json.loads(config_file.read_text(encoding="utf-8"))
            return NexusConfig(**data)
        except (json.JSONDecodeError, ValidationError, TypeError) as e:
            logger.warning(f"Ignoring invalid config {config_file}: {e}")
    return NexusConfig()


def save_global_config(config: NexusConfig) -> None:
    """Save global configuration."""
    config_file = get_config_dir() / CONFIG_FILE
    config_file.write_text(
        json.dumps(config.model_dump(), indent=2),
        encoding="utf-8",
    )
