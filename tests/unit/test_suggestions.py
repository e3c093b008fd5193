# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for model-assisted planning suggestions."""

import random

import pytest

from src.core.intelligence.generator import GenerationError
from src.core.intelligence.suggestions import (
    MAX_PROMPT_CHARS,
    clamp_level,
    extract_json,
    suggest_continuation,
    suggest_difficulty,
    suggest_topic,
)
from src.core.planning.constants import AdjustmentStrength, PromptType
from src.core.planning.continuation import continuation_prompt
from src.core.planning.difficulty import adjust_difficulty
from src.core.planning.topics import select_topic
from src.models import LanguageLevel

STEADY_REPLY = "We usually walk to the park after lunch"


class TestHelpers:
    def test_extract_json_from_chatty_reply(self) -> None:
        text = 'Sure! Here you go: {"topic": "Travel", "reason": "likes trips"} Enjoy.'

        assert extract_json(text) == {"topic": "Travel", "reason": "likes trips"}

    def test_extract_json_keeps_nested_objects(self) -> None:
        text = '{"topic": "Travel", "meta": {"why": "x"}, "reason": "fun"}'

        assert extract_json(text) == {"topic": "Travel", "meta": {"why": "x"}, "reason": "fun"}

    def test_extract_json_brace_inside_string(self) -> None:
        text = 'Idea: {"topic": "Maths {fun}", "reason": "curious"}'

        assert extract_json(text)["topic"] == "Maths {fun}"

    def test_extract_json_prefers_fenced_block(self) -> None:
        text = 'Use {braces} wisely.\n```json\n{"topic": "Travel", "tags": {"a": 1}}\n```\nDone.'

        assert extract_json(text) == {"topic": "Travel", "tags": {"a": 1}}

    def test_extract_json_without_object(self) -> None:
        with pytest.raises(ValueError):
            extract_json("Travel would be nice")

    def test_extract_json_invalid_object(self) -> None:
        with pytest.raises(ValueError):
            extract_json("{topic: Travel}")

    @pytest.mark.parametrize(
        ("current", "suggested", "expected"),
        [
            (LanguageLevel.BEGINNER, LanguageLevel.PROFICIENT, LanguageLevel.ELEMENTARY),
            (LanguageLevel.ADVANCED, LanguageLevel.BEGINNER, LanguageLevel.UPPER_INTERMEDIATE),
            (LanguageLevel.INTERMEDIATE, LanguageLevel.INTERMEDIATE, LanguageLevel.INTERMEDIATE),
        ],
    )
    def test_clamp_level(
        self, current: LanguageLevel, suggested: LanguageLevel, expected: LanguageLevel
    ) -> None:
        assert clamp_level(current, suggested) == expected


class TestSuggestTopic:
    """Tests for suggest_topic."""

    def test_without_generator_matches_planner(self, intermediate_profile, improving_history) -> None:
        suggested = suggest_topic(None, intermediate_profile, improving_history, 50.0, "afternoon")

        assert suggested == select_topic(intermediate_profile, improving_history, 50.0, "afternoon")

    def test_model_topic_keeps_planner_figures(
        self, fake_generator, intermediate_profile, improving_history
    ) -> None:
        generator = fake_generator('{"topic": "Board Games", "reason": "Fits your hobbies"}')

        suggested = suggest_topic(
            generator, intermediate_profile, improving_history, 50.0, "afternoon",
        )

        assert suggested.topic == "Board Games"
        assert suggested.reason == "Fits your hobbies"
        assert suggested.confidence == pytest.approx(0.6)
        assert suggested.difficulty == LanguageLevel.INTERMEDIATE

        _, _, context = generator.calls[0]
        assert context["planner_choice"] == "Technology"
        assert context["recent_topics"] == "Weather, Shopping, Daily Routines, Sports"

    @pytest.mark.parametrize(
        "response",
        [GenerationError("timeout", model="fake"), "Board games, probably", '{"reason": "no topic"}'],
    )
    def test_falls_back_to_planner(
        self, fake_generator, intermediate_profile, improving_history, response
    ) -> None:
        generator = fake_generator(response)

        suggested = suggest_topic(
            generator, intermediate_profile, improving_history, 50.0, "afternoon",
        )

        assert suggested.topic == "Technology"

    @pytest.mark.parametrize("topic", ["Weather", "  daily routines "])
    def test_recent_model_topic_falls_back(
        self, fake_generator, intermediate_profile, improving_history, topic: str
    ) -> None:
        generator = fake_generator('{"topic": "' + topic + '", "reason": "again"}')

        suggested = suggest_topic(
            generator, intermediate_profile, improving_history, 50.0, "afternoon",
        )

        assert suggested == select_topic(intermediate_profile, improving_history, 50.0, "afternoon")
        assert suggested.topic == "Technology"

    def test_model_topic_outside_window_is_kept(
        self, fake_generator, intermediate_profile, improving_history
    ) -> None:
        generator = fake_generator('{"topic": "Weather", "reason": "been a while"}')

        suggested = suggest_topic(
            generator, intermediate_profile, improving_history, 50.0, "afternoon",
            recent_topic_window=1,
        )

        assert suggested.topic == "Weather"

    def test_fallback_without_history_is_seeded(self, fake_generator, beginner_profile) -> None:
        generator = fake_generator(RuntimeError("connection refused"))

        suggested = suggest_topic(
            generator, beginner_profile, [], 50.0, "morning", rng=random.Random(5),
        )

        assert suggested == select_topic(beginner_profile, [], 50.0, "morning", rng=random.Random(5))


class TestSuggestDifficulty:
    """Tests for suggest_difficulty."""

    def test_model_suggestion_is_clamped(self, fake_generator, beginner_profile, conversation) -> None:
        generator = fake_generator('{"level": "PROFICIENT", "reason": "Very fluent"}')

        adjustment = suggest_difficulty(generator, beginner_profile, conversation([STEADY_REPLY] * 3))

        assert adjustment.recommended_difficulty == LanguageLevel.ELEMENTARY
        assert adjustment.strength == AdjustmentStrength.MODERATE
        assert adjustment.reason == "Very fluent"

    def test_same_level_is_minor(self, fake_generator, beginner_profile, conversation) -> None:
        generator = fake_generator('{"level": "beginner"}')

        adjustment = suggest_difficulty(generator, beginner_profile, conversation([STEADY_REPLY] * 3))

        assert adjustment.recommended_difficulty == LanguageLevel.BEGINNER
        assert adjustment.strength == AdjustmentStrength.MINOR

    def test_unknown_level_falls_back(self, fake_generator, beginner_profile, conversation) -> None:
        turns = conversation([STEADY_REPLY] * 3)
        generator = fake_generator('{"level": "expert"}')

        adjustment = suggest_difficulty(generator, beginner_profile, turns)

        assert adjustment == adjust_difficulty(beginner_profile, turns)


class TestSuggestContinuation:
    """Tests for suggest_continuation."""

    def test_first_line_without_quotes(self, fake_generator, engaged_turns) -> None:
        generator = fake_generator('"What did you cook last weekend?"\nExtra commentary')

        prompt = suggest_continuation(generator, "Food and Cooking", engaged_turns)

        assert prompt.message == "What did you cook last weekend?"
        assert prompt.type == PromptType.CONTINUATION
        assert prompt.context == "Food and Cooking"

    def test_persona_voice_in_system_prompt(
        self, fake_generator, engaged_turns, persona_manager
    ) -> None:
        generator = fake_generator("Tell me more!")
        persona = persona_manager.get_persona("friendly_tutor")

        suggest_continuation(generator, "Travel", engaged_turns, persona)

        system_prompt, _, context = generator.calls[0]
        assert system_prompt.startswith("You are Maya")
        assert context["topic"] == "Travel"

    @pytest.mark.parametrize("response", ["   ", "x" * (MAX_PROMPT_CHARS + 1)])
    def test_invalid_output_falls_back(self, fake_generator, engaged_turns, response) -> None:
        prompt = suggest_continuation(fake_generator(response), "Travel", engaged_turns)

        assert prompt == continuation_prompt("Travel")

    def test_without_generator(self, engaged_turns) -> None:
        assert suggest_continuation(None, "Travel", engaged_turns) == continuation_prompt("Travel")
