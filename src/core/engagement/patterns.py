# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Disengagement pattern detection.

Five independent checks over the same turn window. A check whose
minimum sample size is not met is skipped (not reported), which is
different from a check that ran and found nothing.
"""

from collections.abc import Callable, Sequence
from statistics import fmean

from src.core.engagement.constants import (
    FRUSTRATION_KEYWORDS,
    PATTERN_CONFIDENCE,
    PatternName,
    PatternThresholds,
)
from src.core.engagement.context import DisengagementPattern
from src.core.engagement.signals import response_latencies, user_turns
from src.models import ConversationTurn

_DESCRIPTIONS = {
    PatternName.DECREASING_VERBOSITY: "Learner responses are getting shorter",
    PatternName.INCREASING_LATENCY: "Learner is taking longer to respond",
    PatternName.REPETITIVE_RESPONSES: "Learner is giving minimal or repetitive answers",
    PatternName.DECLINING_CONFIDENCE: "Speech recognition confidence is decreasing",
    PatternName.FRUSTRATION_INDICATORS: "Learner is expressing frustration or confusion",
}


def split_halves(values: Sequence[float]) -> tuple[float, float]:
    """Means of the first and second half; an odd middle goes to the second half."""
    middle = len(values) // 2
    return fmean(values[:middle]), fmean(values[middle:])


def has_decreasing_verbosity(turns: Sequence[ConversationTurn]) -> bool | None:
    users = user_turns(turns)
    if len(users) < PatternThresholds.MIN_USER_TURNS:
        return None
    first, second = split_halves([turn.word_count for turn in users])
    return second < first * PatternThresholds.VERBOSITY_RATIO


def has_increasing_latency(turns: Sequence[ConversationTurn]) -> bool | None:
    if len(turns) < PatternThresholds.MIN_TURNS_FOR_LATENCY:
        return None
    latencies = response_latencies(turns)
    if len(latencies) < PatternThresholds.MIN_LATENCY_SAMPLES:
        return None
    first, second = split_halves(latencies)
    return second > first * PatternThresholds.LATENCY_RATIO


def has_repetitive_responses(turns: Sequence[ConversationTurn]) -> bool | None:
    users = user_turns(turns)
    if len(users) < PatternThresholds.MIN_USER_TURNS:
        return None
    recent = users[-PatternThresholds.REPETITION_WINDOW:]
    short = sum(1 for turn in recent if turn.word_count <= PatternThresholds.SHORT_RESPONSE_WORDS)
    required = min(
        PatternThresholds.REPETITION_MIN_COUNT,
        len(recent) * PatternThresholds.REPETITION_SHARE,
    )
    return short >= required


def has_declining_confidence(turns: Sequence[ConversationTurn]) -> bool | None:
    users = user_turns(turns)
    if len(users) < PatternThresholds.MIN_USER_TURNS:
        return None
    scores = [turn.confidence for turn in users if turn.confidence is not None]
    if len(scores) < PatternThresholds.MIN_CONFIDENCE_SAMPLES:
        return None
    first, second = split_halves(scores)
    return second < first * PatternThresholds.CONFIDENCE_RATIO


def has_frustration_keywords(turns: Sequence[ConversationTurn]) -> bool | None:
    users = user_turns(turns)
    if not users:
        return None
    return any(
        keyword in turn.content.lower()
        for turn in users
        for keyword in FRUSTRATION_KEYWORDS
    )


_CHECKS: tuple[tuple[PatternName, Callable[[Sequence[ConversationTurn]], bool | None]], ...] = (
    (PatternName.DECREASING_VERBOSITY, has_decreasing_verbosity),
    (PatternName.INCREASING_LATENCY, has_increasing_latency),
    (PatternName.REPETITIVE_RESPONSES, has_repetitive_responses),
    (PatternName.DECLINING_CONFIDENCE, has_declining_confidence),
    (PatternName.FRUSTRATION_INDICATORS, has_frustration_keywords),
)


def detect_disengagement_patterns(
    turns: Sequence[ConversationTurn],
) -> tuple[DisengagementPattern, ...]:
    """Scan a turn window for known disengagement patterns.

    Args:
        turns: Conversation turns in chronological order.

    Returns:
        Patterns found, in a fixed check order. Each carries the fixed
        confidence associated with its check.
    """
    return tuple(
        DisengagementPattern(
            pattern=name.value,
            confidence=PATTERN_CONFIDENCE[name],
            description=_DESCRIPTIONS[name],
        )
        for name, check in _CHECKS
        if check(turns)
    )
