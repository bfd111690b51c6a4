"""CLI command groups for Nexus.

This package contains individual command groups that are registered
with the main Typer app. Each module provides a set of related commands.

Command groups:
- notifications: Notification feed (list, read, delete, read-all, clear)
- project: Project list and stage workflow (list, create, stage, stages, fix-progress)
- theme: Theme preference (show, toggle)
- assist: AI assistant (breakdown, risk, chat)
- config: Global configuration (show, set)
"""

from nexus.interfaces.cli.commands import assist, config, notifications, project, theme

__all__ = ["notifications", "project", "theme", "assist", "config"]
