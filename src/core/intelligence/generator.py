# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Text generation port.

The decision core never talks to a language model directly. Anything
that wants free text (topic rationale, a follow-up question, a
difficulty suggestion) goes through the narrow TextGenerator protocol
defined here. LiteLLMGenerator is the production adapter; tests pass a
fake.

Example:
    >>> from src.core.intelligence.generator import LiteLLMGenerator
    >>> generator = LiteLLMGenerator(get_settings().generation)
    >>> result = generator.generate("You are a tutor.", "Suggest a topic.", {})
    >>> print(result.content)
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

import litellm

from src.core.config.settings import GenerationSettings
from src.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    """Text returned by a generator.

    Attributes:
        content: Generated text.
        model: Model that produced it.
        raw_response: Provider response object, if any.
    """

    content: str
    model: str
    raw_response: object | None = field(default=None, repr=False, compare=False)


class GenerationError(Exception):
    """Exception raised when text generation fails.

    Attributes:
        message: Error description.
        model: Model that caused the error.
        original_error: Original exception if any.
    """

    def __init__(
        self,
        message: str,
        model: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        self.message = message
        self.model = model
        self.original_error = original_error
        super().__init__(self.message)


class TextGenerator(Protocol):
    """Anything that can turn a prompt pair into text."""

    def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        context: Mapping[str, Any],
    ) -> GenerationResult: ...


class LiteLLMGenerator:
    """TextGenerator backed by LiteLLM's synchronous completion call.

    The provider is selected by the model prefix (``ollama/``,
    ``openai/``, ``anthropic/``...). API base and key are passed per call
    rather than through environment variables.

    Attributes:
        model: LiteLLM model identifier.
    """

    def __init__(self, settings: GenerationSettings) -> None:
        self._settings = settings
        self.model = settings.model
        self._configure_litellm()

        logger.info(
            "generator_initialized",
            model=self.model,
            timeout=settings.timeout,
            max_retries=settings.max_retries,
        )

    def _configure_litellm(self) -> None:
        litellm.drop_params = True

    def _provider_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if self._settings.api_base:
            params["api_base"] = self._settings.api_base
        if self._settings.api_key is not None:
            params["api_key"] = self._settings.api_key.get_secret_value()
        return params

    def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        context: Mapping[str, Any],
    ) -> GenerationResult:
        """Generate a completion.

        Args:
            system_prompt: Instructions for the model.
            user_prompt: The request itself.
            context: Extra key/value context, appended to the system prompt.

        Returns:
            GenerationResult with the generated text.

        Raises:
            GenerationError: If the provider call fails for any reason.
            ValueError: If user_prompt is empty.
        """
        if not user_prompt or not user_prompt.strip():
            raise ValueError("Prompt cannot be empty")

        system = system_prompt
        if context:
            lines = "\n".join(f"- {key}: {value}" for key, value in context.items())
            system = f"{system_prompt}\n\nContext:\n{lines}"

        messages = [
            {"role": "system", "content": system},
            {"role": "user", "content": user_prompt},
        ]

        try:
            response = litellm.completion(
                model=self.model,
                messages=messages,
                temperature=self._settings.temperature,
                max_tokens=self._settings.max_tokens,
                timeout=self._settings.timeout,
                num_retries=self._settings.max_retries,
                **self._provider_params(),
            )
            content = response.choices[0].message.content or ""
        except Exception as e:
            logger.error(
                "generation_failed",
                model=self.model,
                prompt_length=len(user_prompt),
                error=str(e),
            )
            raise GenerationError(
                message=f"Completion failed: {e}",
                model=self.model,
                original_error=e,
            ) from e

        logger.debug("generation_completed", model=self.model, length=len(content))
        return GenerationResult(content=content, model=self.model, raw_response=response)
