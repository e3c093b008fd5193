# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the LiteLLM text generator adapter."""

from unittest.mock import MagicMock, patch

import litellm
import pytest

from src.core.config.settings import GenerationSettings
from src.core.intelligence.generator import GenerationError, LiteLLMGenerator

COMPLETION = "src.core.intelligence.generator.litellm.completion"


def _response(content: str | None) -> MagicMock:
    response = MagicMock()
    response.choices[0].message.content = content
    return response


@pytest.fixture
def generation_settings() -> GenerationSettings:
    return GenerationSettings(model="ollama/test-model", timeout=5, max_retries=2)


class TestLiteLLMGenerator:
    """Tests for LiteLLMGenerator."""

    def test_init_drops_unsupported_params(self, generation_settings) -> None:
        litellm.drop_params = False

        generator = LiteLLMGenerator(generation_settings)

        assert litellm.drop_params is True
        assert generator.model == "ollama/test-model"

    def test_generate_passes_settings_and_context(self, generation_settings) -> None:
        generator = LiteLLMGenerator(generation_settings)

        with patch(COMPLETION, return_value=_response("How was your trip?")) as completion:
            result = generator.generate("You are a tutor.", "Continue.", {"topic": "Travel"})

        assert result.content == "How was your trip?"
        assert result.model == "ollama/test-model"

        kwargs = completion.call_args.kwargs
        assert kwargs["model"] == "ollama/test-model"
        assert kwargs["timeout"] == 5
        assert kwargs["num_retries"] == 2
        assert "api_key" not in kwargs
        system, user = kwargs["messages"]
        assert system["role"] == "system"
        assert system["content"] == "You are a tutor.\n\nContext:\n- topic: Travel"
        assert user == {"role": "user", "content": "Continue."}

    def test_provider_params(self) -> None:
        settings = GenerationSettings(
            model="openai/gpt-4o-mini",
            api_base="http://localhost:4000",
            api_key="sk-test",  # type: ignore[arg-type]
        )
        generator = LiteLLMGenerator(settings)

        with patch(COMPLETION, return_value=_response("ok")) as completion:
            generator.generate("system", "prompt", {})

        kwargs = completion.call_args.kwargs
        assert kwargs["api_base"] == "http://localhost:4000"
        assert kwargs["api_key"] == "sk-test"
        assert kwargs["messages"][0]["content"] == "system"

    def test_missing_content_is_empty(self, generation_settings) -> None:
        generator = LiteLLMGenerator(generation_settings)

        with patch(COMPLETION, return_value=_response(None)):
            result = generator.generate("system", "prompt", {})

        assert result.content == ""

    def test_empty_prompt_raises(self, generation_settings) -> None:
        generator = LiteLLMGenerator(generation_settings)

        with patch(COMPLETION) as completion:
            with pytest.raises(ValueError, match="Prompt cannot be empty"):
                generator.generate("system", "   ", {})

        completion.assert_not_called()

    def test_provider_error_is_wrapped(self, generation_settings) -> None:
        generator = LiteLLMGenerator(generation_settings)
        failure = TimeoutError("request timed out")

        with patch(COMPLETION, side_effect=failure):
            with pytest.raises(GenerationError) as exc_info:
                generator.generate("system", "prompt", {})

        assert exc_info.value.model == "ollama/test-model"
        assert exc_info.value.original_error is failure
        assert "request timed out" in exc_info.value.message
