# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Session-level recommendations: length, focus areas, motivation."""

import random
from collections.abc import Sequence

from src.core.planning.constants import (
    BASE_SESSION_MINUTES,
    FOCUS_AREA_RULES,
    GOAL_FOCUS_AREAS,
    MAX_FOCUS_AREAS,
    MOTIVATIONAL_MESSAGES,
    STREAK_CELEBRATION_DAYS,
    STRONG_SCORE,
    SessionLengthRules,
)
from src.models import LearningGoal, ProgressMetrics, SessionRecord, UserProfile


def _most_recent(history: Sequence[SessionRecord], count: int) -> list[SessionRecord]:
    return sorted(history, key=lambda record: record.start_time, reverse=True)[:count]


def completion_rate(history: Sequence[SessionRecord]) -> float | None:
    """Mean share of the planned session length actually spent, capped at 1 per session."""
    recent = _most_recent(history, SessionLengthRules.RECENT_SESSIONS)
    if not recent:
        return None
    rates = [
        min(1.0, record.metrics.duration / 60.0 / SessionLengthRules.PLANNED_MINUTES)
        for record in recent
    ]
    return sum(rates) / len(rates)


def recommend_session_length(
    profile: UserProfile,
    session_history: Sequence[SessionRecord],
) -> int:
    """Recommended session length in minutes, between 10 and 45."""
    minutes = BASE_SESSION_MINUTES.get(profile.current_level, 20)

    rate = completion_rate(session_history)
    if rate is not None:
        if rate > SessionLengthRules.HIGH_COMPLETION:
            minutes += SessionLengthRules.STEP_MINUTES
        elif rate < SessionLengthRules.LOW_COMPLETION:
            minutes -= SessionLengthRules.STEP_MINUTES

    return max(SessionLengthRules.MIN_MINUTES, min(SessionLengthRules.MAX_MINUTES, minutes))


def identify_focus_areas(
    progress: ProgressMetrics,
    learning_goals: Sequence[LearningGoal],
) -> list[LearningGoal]:
    """Goals to emphasise next session.

    Weak progress areas come first; when nothing is weak, the first two
    stated goals are used. At most three areas are returned.
    """
    areas = [
        goal for attribute, threshold, goal in FOCUS_AREA_RULES
        if getattr(progress, attribute) < threshold
    ]
    if not areas:
        areas = list(learning_goals[:GOAL_FOCUS_AREAS])
    return areas[:MAX_FOCUS_AREAS]


def motivational_message(
    profile: UserProfile,
    session_history: Sequence[SessionRecord],
    rng: random.Random | None = None,
) -> str:
    """Short motivational line for the start of a session."""
    latest = _most_recent(session_history, 1)
    if latest:
        metrics = latest[0].metrics
        if metrics.grammar_accuracy > STRONG_SCORE:
            return "Your grammar has been spot-on lately! Ready to tackle some new challenges?"
        if metrics.fluency_score > STRONG_SCORE:
            return "Your fluency is really improving! Let's keep the momentum going."

    streak = profile.progress_metrics.streak_days
    if streak > STREAK_CELEBRATION_DAYS:
        return f"Amazing {streak}-day streak! Keep it going!"

    return (rng or random.Random()).choice(MOTIVATIONAL_MESSAGES)
