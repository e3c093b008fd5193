# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Intelligence module for model-assisted suggestions.

This module provides:
- The TextGenerator port and its LiteLLM adapter
- Topic, difficulty and continuation suggestions that fall back to the
  deterministic planner when generation fails

Example:
    >>> from src.core.intelligence import LiteLLMGenerator, suggest_topic
    >>> generator = LiteLLMGenerator(get_settings().generation)
    >>> suggest_topic(generator, profile, history, 62.0, "evening")
"""

from src.core.intelligence.generator import (
    GenerationError,
    GenerationResult,
    LiteLLMGenerator,
    TextGenerator,
)
from src.core.intelligence.suggestions import (
    clamp_level,
    extract_json,
    suggest_continuation,
    suggest_difficulty,
    suggest_topic,
)

__all__ = [
    # Port
    "TextGenerator",
    "GenerationResult",
    "GenerationError",
    "LiteLLMGenerator",
    # Suggestions
    "suggest_topic",
    "suggest_difficulty",
    "suggest_continuation",
    "extract_json",
    "clamp_level",
]
