# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Difficulty adjustment.

Rules, first match wins:

    improving, no struggle areas, fatigue < 0.5   -> one level up    (moderate)
    declining, or more than 2 struggle areas      -> one level down  (moderate)
    fatigue > 0.7                                 -> one level down  (minor)
    otherwise                                     -> maintain        (minor)

A single call never moves more than one level.
"""

from collections.abc import Sequence

from src.core.engagement.patterns import split_halves
from src.core.engagement.signals import user_turns
from src.core.planning.constants import (
    AdjustmentStrength,
    DifficultyThresholds,
    PerformanceTrend,
)
from src.core.planning.context import DifficultyAdjustment
from src.models import ConversationTurn, SessionMetrics, UserProfile
from src.utils.logging import get_logger

logger = get_logger(__name__)


def turn_quality_trend(turns: Sequence[ConversationTurn]) -> PerformanceTrend:
    """Compare per-turn quality (words x confidence) across halves of the window."""
    users = user_turns(turns)
    if len(users) < DifficultyThresholds.MIN_TURNS_FOR_TREND:
        return PerformanceTrend.STABLE

    scores = [
        turn.word_count * (
            turn.confidence if turn.confidence is not None
            else DifficultyThresholds.DEFAULT_TURN_CONFIDENCE
        )
        for turn in users
    ]
    first, second = split_halves(scores)
    if first == 0:
        return PerformanceTrend.IMPROVING if second > 0 else PerformanceTrend.STABLE

    change = (second - first) / first
    if change > DifficultyThresholds.TURN_TREND_DELTA:
        return PerformanceTrend.IMPROVING
    if change < -DifficultyThresholds.TURN_TREND_DELTA:
        return PerformanceTrend.DECLINING
    return PerformanceTrend.STABLE


def struggling_areas(metrics: SessionMetrics | None) -> list[str]:
    if metrics is None:
        return []

    areas: list[str] = []
    if metrics.grammar_accuracy < DifficultyThresholds.STRUGGLE_SCORE:
        areas.append("grammar")
    if metrics.fluency_score < DifficultyThresholds.STRUGGLE_SCORE:
        areas.append("fluency")
    for category in DifficultyThresholds.STRUGGLE_CATEGORIES:
        if category in metrics.error_categories:
            areas.append(category)
    return areas


def fatigue_level(
    turns: Sequence[ConversationTurn],
    session_duration_sec: float,
) -> float:
    """Fatigue estimate: max of a duration component and a slowdown component.

    The duration component reaches 1 after an hour. The slowdown component
    is the relative growth of the gap between learner turns from the first
    half of the window to the second, capped at 1.
    """
    duration_fatigue = min(session_duration_sec / DifficultyThresholds.FATIGUE_HORIZON_SECONDS, 1.0)

    users = user_turns(turns)
    intervals = [
        (current.timestamp - previous.timestamp).total_seconds()
        for previous, current in zip(users, users[1:])
    ]
    if len(intervals) < 2:
        return duration_fatigue

    first, second = split_halves(intervals)
    if first <= 0:
        return duration_fatigue
    slowdown_fatigue = min((second - first) / first, 1.0)
    return max(duration_fatigue, slowdown_fatigue)


def adjust_difficulty(
    profile: UserProfile,
    recent_turns: Sequence[ConversationTurn],
    performance_metrics: SessionMetrics | None = None,
) -> DifficultyAdjustment:
    """Recommend the difficulty for the rest of the session.

    Args:
        profile: Learner profile (current level).
        recent_turns: Recent conversation turns.
        performance_metrics: Current session metrics, when available.

    Returns:
        DifficultyAdjustment at most one level from the current level.
    """
    current = profile.current_level
    trend = turn_quality_trend(recent_turns)
    areas = struggling_areas(performance_metrics)
    duration = performance_metrics.duration if performance_metrics else 0.0
    fatigue = fatigue_level(recent_turns, duration)

    if (
        trend == PerformanceTrend.IMPROVING
        and not areas
        and fatigue < DifficultyThresholds.LOW_FATIGUE
    ):
        recommended = current.next_level()
        reason = "Learner showing consistent improvement, ready for more challenge"
        strength = AdjustmentStrength.MODERATE
    elif trend == PerformanceTrend.DECLINING or len(areas) > DifficultyThresholds.MAX_STRUGGLE_AREAS:
        recommended = current.previous_level()
        detail = ", ".join(areas) if areas else "declining responses"
        reason = f"Learner struggling with {detail}, reducing difficulty"
        strength = AdjustmentStrength.MODERATE
    elif fatigue > DifficultyThresholds.HIGH_FATIGUE:
        recommended = current.previous_level()
        reason = "High fatigue detected, reducing difficulty to maintain engagement"
        strength = AdjustmentStrength.MINOR
    else:
        recommended = current
        reason = "Maintaining current difficulty"
        strength = AdjustmentStrength.MINOR

    logger.debug(
        "difficulty_adjusted",
        current=current.value,
        recommended=recommended.value,
        trend=trend.value,
        struggling=areas,
        fatigue=round(fatigue, 3),
    )
    return DifficultyAdjustment(
        current_difficulty=current,
        recommended_difficulty=recommended,
        reason=reason,
        strength=strength,
    )
