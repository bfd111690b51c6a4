"""Ollama client wrapper with Result-based error handling.

Backs the assistant features: JSON-constrained generation for task
breakdown and risk analysis, and multi-turn chat.
"""

import json
import logging
from typing import Any

import ollama

from nexus.domain.shared.result import Err, Ok, Result

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "qwen2.5:7b"


class OllamaClient:
    """Text generator backed by a local Ollama server.

    Example:
        client = OllamaClient()
        if client.is_available():
            result = client.generate_text("You are helpful.", [{"role": "user", "content": "Hi"}])
            if isinstance(result, Ok):
                reply = result.value
    """

    def __init__(self, model: str = DEFAULT_MODEL, max_tokens: int = 1024) -> None:
        """Initialize the Ollama client.

        Args:
            model: Model used for every request.
            max_tokens: Upper bound on generated tokens per request.
        """
        self._model = model
        self._max_tokens = max_tokens
        self._available: bool | None = None

    @property
    def model(self) -> str:
        return self._model

    def is_available(self) -> bool:
        """Check if the Ollama server is reachable (cached after first call)."""
        if self._available is not None:
            return self._available

        try:
            ollama.list()
            self._available = True
        except Exception as e:
            logger.debug(f"Ollama not reachable: {e}")
            self._available = False

        return self._available

    def generate_structured(self, prompt: str, json_schema: dict[str, Any]) -> Result[Any, str]:
        """Generate a JSON value that follows json_schema.

        Args:
            prompt: Instruction for the model.
            json_schema: JSON schema passed as the response format.

        Returns:
            Ok(parsed JSON value) if successful,
            Err(str) with error message if the call or parsing failed.
        """
        try:
            response = ollama.generate(
                model=self._model,
                prompt=prompt,
                format=json_schema,
                options={"num_predict": self._max_tokens},
            )
        except Exception as e:
            logger.error(f"Structured generation failed: {e}")
            return Err(f"Generation error: {e}")

        text = response["response"].strip()
        try:
            return Ok(json.loads(text))
        except json.JSONDecodeError as e:
            logger.warning(f"Model returned invalid JSON: {e}")
            return Err(f"Invalid JSON from model: {e}")

    def generate_text(self, system_instruction: str, messages: list[dict[str, str]]) -> Result[str, str]:
        """Continue a conversation.

        Args:
            system_instruction: System prompt framing the assistant.
            messages: Prior turns as {"role": "user"|"assistant", "content": ...}.

        Returns:
            Ok(str) with the reply, Err(str) with error message if failed.
        """
        try:
            response = ollama.chat(
                model=self._model,
                messages=[{"role": "system", "content": system_instruction}, *messages],
                options={"num_predict": self._max_tokens},
            )
            return Ok(response["message"]["content"].strip())

        except Exception as e:
            logger.error(f"Chat generation failed: {e}")
            return Err(f"Generation error: {e}")
