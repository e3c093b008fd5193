# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Model-assisted planning suggestions.

Each function first computes the deterministic planner result, then asks
the text generator for a suggestion and validates it. Any failure (the
call raising, a timeout, unparsable or invalid content) logs a warning
and returns the deterministic result unchanged, so callers never see a
generation error.
"""

import json
import random
import re
from collections.abc import Sequence
from typing import Any

from src.core.intelligence.generator import TextGenerator
from src.core.personas.models import Persona
from src.core.planning.constants import AdjustmentStrength, PromptType, PromptUrgency
from src.core.planning.context import ConversationPrompt, DifficultyAdjustment, TopicRecommendation
from src.core.planning.continuation import continuation_prompt
from src.core.planning.difficulty import adjust_difficulty
from src.core.planning.topics import (
    DEFAULT_RECENT_TOPIC_WINDOW,
    chronological,
    recent_topics,
    select_topic,
)
from src.models import ConversationTurn, LanguageLevel, SessionMetrics, SessionRecord, UserProfile
from src.utils.datetime import TimeOfDay
from src.utils.logging import get_logger

logger = get_logger(__name__)

_JSON_FENCE = re.compile(r"```(?:json)?\s*([\s\S]*?)```")
_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")

# Longest generated follow-up accepted as a spoken prompt
MAX_PROMPT_CHARS = 300

TOPIC_SYSTEM_PROMPT = (
    "You plan conversation topics for a language learner. "
    'Reply with JSON only: {"topic": "...", "reason": "..."}.'
)
DIFFICULTY_SYSTEM_PROMPT = (
    "You calibrate conversation difficulty for a language learner. Levels: "
    + ", ".join(level.value for level in LanguageLevel.ordered())
    + '. Reply with JSON only: {"level": "...", "reason": "..."}.'
)
CONTINUATION_SYSTEM_PROMPT = (
    "You are a language tutor. Ask one short, friendly follow-up question "
    "that keeps the learner talking. Reply with the question only."
)


def extract_json(text: str) -> dict[str, Any]:
    """Parse the JSON object in generated ``text``.

    A fenced ```json block wins; otherwise the span from the first ``{``
    to the last ``}`` is parsed, so nested objects survive.

    Raises:
        ValueError: If no object is found or it is not valid JSON.
    """
    fenced = _JSON_FENCE.search(text)
    if fenced is not None:
        text = fenced.group(1)

    match = _JSON_OBJECT.search(text)
    if match is None:
        raise ValueError("No JSON object in generated content")
    data = json.loads(match.group(0))
    if not isinstance(data, dict):
        raise ValueError("Generated JSON is not an object")
    return data


def _require_text(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Missing '{key}' in generated content")
    return value.strip()


def _recent_transcript(turns: Sequence[ConversationTurn], limit: int = 6) -> str:
    return "\n".join(f"{turn.sender.value}: {turn.content}" for turn in turns[-limit:])


def clamp_level(current: LanguageLevel, suggested: LanguageLevel) -> LanguageLevel:
    """Limit a suggested level to one step from the current one."""
    if suggested.rank > current.rank:
        return current.next_level()
    if suggested.rank < current.rank:
        return current.previous_level()
    return current


def suggest_topic(
    generator: TextGenerator | None,
    profile: UserProfile,
    session_history: Sequence[SessionRecord],
    current_engagement: float,
    time_of_day: TimeOfDay,
    recent_topic_window: int = DEFAULT_RECENT_TOPIC_WINDOW,
    rng: random.Random | None = None,
) -> TopicRecommendation:
    """Topic recommendation, refined by the model when one is available.

    A model topic covered within the recent-topic window is discarded.
    """
    baseline = select_topic(
        profile,
        session_history,
        current_engagement,
        time_of_day,
        recent_topic_window=recent_topic_window,
        rng=rng,
    )
    if generator is None:
        return baseline

    context = {
        "level": profile.current_level.value,
        "goals": ", ".join(goal.value for goal in profile.learning_goals),
        "preferred_topics": ", ".join(profile.preferred_topics),
        "recent_topics": ", ".join(record.topic for record in chronological(session_history)[-5:]),
        "engagement": round(current_engagement, 1),
        "time_of_day": time_of_day,
        "planner_choice": baseline.topic,
    }
    try:
        result = generator.generate(
            TOPIC_SYSTEM_PROMPT,
            "Suggest the next conversation topic for this learner.",
            context,
        )
        data = extract_json(result.content)
        topic = _require_text(data, "topic")
        excluded = {name.casefold() for name in recent_topics(session_history, recent_topic_window)}
        if topic.casefold() in excluded:
            raise ValueError(f"Topic '{topic}' was covered recently")
        reason = data.get("reason") or baseline.reason
    except Exception as e:
        logger.warning("topic_suggestion_fallback", error=str(e), topic=baseline.topic)
        return baseline

    return TopicRecommendation(
        topic=topic,
        difficulty=baseline.difficulty,
        reason=str(reason),
        confidence=baseline.confidence,
        estimated_duration_minutes=baseline.estimated_duration_minutes,
    )


def suggest_difficulty(
    generator: TextGenerator | None,
    profile: UserProfile,
    recent_turns: Sequence[ConversationTurn],
    performance_metrics: SessionMetrics | None = None,
) -> DifficultyAdjustment:
    """Difficulty adjustment, refined by the model when one is available.

    A model suggestion further than one level away is clamped.
    """
    baseline = adjust_difficulty(profile, recent_turns, performance_metrics)
    if generator is None:
        return baseline

    context: dict[str, Any] = {
        "current_level": profile.current_level.value,
        "planner_choice": baseline.recommended_difficulty.value,
        "recent_turns": _recent_transcript(recent_turns),
    }
    if performance_metrics is not None:
        context["grammar_accuracy"] = performance_metrics.grammar_accuracy
        context["fluency_score"] = performance_metrics.fluency_score

    try:
        result = generator.generate(
            DIFFICULTY_SYSTEM_PROMPT,
            "Which level should the rest of this session use?",
            context,
        )
        data = extract_json(result.content)
        suggested = LanguageLevel(_require_text(data, "level").lower())
        reason = data.get("reason") or baseline.reason
    except Exception as e:
        logger.warning(
            "difficulty_suggestion_fallback",
            error=str(e),
            level=baseline.recommended_difficulty.value,
        )
        return baseline

    recommended = clamp_level(profile.current_level, suggested)
    strength = (
        AdjustmentStrength.MINOR
        if recommended == profile.current_level
        else AdjustmentStrength.MODERATE
    )
    return DifficultyAdjustment(
        current_difficulty=profile.current_level,
        recommended_difficulty=recommended,
        reason=str(reason),
        strength=strength,
    )


def suggest_continuation(
    generator: TextGenerator | None,
    current_topic: str,
    turns: Sequence[ConversationTurn],
    persona: Persona | None = None,
) -> ConversationPrompt:
    """Follow-up question, generated in the persona's voice when possible."""
    baseline = continuation_prompt(current_topic)
    if generator is None:
        return baseline

    system_prompt = CONTINUATION_SYSTEM_PROMPT
    if persona is not None:
        system_prompt = f"{persona.get_system_prompt_segment()}\n\n{CONTINUATION_SYSTEM_PROMPT}"

    try:
        result = generator.generate(
            system_prompt,
            "Continue the conversation.",
            {"topic": current_topic, "recent_turns": _recent_transcript(turns)},
        )
        lines = result.content.strip().splitlines()
        message = lines[0].strip().strip('"') if lines else ""
        if not message:
            raise ValueError("Empty continuation")
        if len(message) > MAX_PROMPT_CHARS:
            raise ValueError("Continuation too long")
    except Exception as e:
        logger.warning("continuation_suggestion_fallback", error=str(e), topic=current_topic)
        return baseline

    return ConversationPrompt(
        type=PromptType.CONTINUATION,
        message=message,
        context=current_topic,
        urgency=PromptUrgency.LOW,
    )
