"""AI infrastructure for Nexus.

Wraps the Ollama server behind the text-generator interface used by the
assistant service.
"""

from nexus.infrastructure.ai.ollama import DEFAULT_MODEL, OllamaClient

__all__ = [
    "DEFAULT_MODEL",
    "OllamaClient",
]
