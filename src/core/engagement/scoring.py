# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Engagement scoring and risk classification.

The score is an additive model over EngagementSignals: start from a
baseline of 50, apply one independent adjustment per signal, then clamp
to [0, 100]. Each adjustment is exposed separately so it can be tested
in isolation.
"""

from collections.abc import Iterable

from src.core.engagement.constants import (
    PRIORITY_RANK,
    EmotionalTone,
    EngagementThresholds,
    InterventionUrgency,
    ParticipationLevel,
    ResponseTimeThresholds,
    RiskLevel,
    ScoreWeights,
)
from src.core.engagement.context import EngagementAction, EngagementSignals
from src.models import UserProfile

_TONE_ADJUSTMENT = {
    EmotionalTone.POSITIVE: ScoreWeights.POSITIVE_TONE,
    EmotionalTone.NEUTRAL: 0.0,
    EmotionalTone.NEGATIVE: ScoreWeights.NEGATIVE_TONE,
}

_PARTICIPATION_ADJUSTMENT = {
    ParticipationLevel.HIGH: ScoreWeights.HIGH_PARTICIPATION,
    ParticipationLevel.MEDIUM: 0.0,
    ParticipationLevel.LOW: ScoreWeights.LOW_PARTICIPATION,
}


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def latency_adjustment(response_latency_ms: float) -> float:
    if response_latency_ms < ResponseTimeThresholds.FAST:
        return ScoreWeights.FAST_RESPONSE
    if response_latency_ms > ResponseTimeThresholds.SLOW:
        return ScoreWeights.SLOW_RESPONSE
    return 0.0


def score_adjustments(signals: EngagementSignals) -> dict[str, float]:
    """Per-signal contributions to the engagement score, keyed by signal."""
    return {
        "latency": latency_adjustment(signals.response_latency_ms),
        "complexity": signals.message_complexity * ScoreWeights.COMPLEXITY,
        "tone": _TONE_ADJUSTMENT[signals.emotional_tone],
        "participation": _PARTICIPATION_ADJUSTMENT[signals.participation_level],
        "frustration": (
            len(signals.frustration_indicators) * ScoreWeights.PER_FRUSTRATION_INDICATOR
        ),
        "confidence": (
            (signals.confidence_level - ScoreWeights.CONFIDENCE_PIVOT) * ScoreWeights.CONFIDENCE
        ),
    }


def score_engagement(
    signals: EngagementSignals,
    profile: UserProfile | None = None,
) -> float:
    """Combine signals into a 0-100 engagement score.

    Args:
        signals: Extracted engagement signals.
        profile: Reserved for per-learner calibration; currently unused.

    Returns:
        Engagement score clamped to [0, 100].
    """
    raw = ScoreWeights.BASELINE + sum(score_adjustments(signals).values())
    return clamp(raw, 0.0, 100.0)


def classify_risk(score: float, signals: EngagementSignals) -> RiskLevel:
    if (
        score < EngagementThresholds.CRITICAL
        or len(signals.frustration_indicators) > EngagementThresholds.MAX_FRUSTRATION_INDICATORS
    ):
        return RiskLevel.HIGH
    if score < EngagementThresholds.LOW or signals.emotional_tone == EmotionalTone.NEGATIVE:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def intervention_urgency(
    score: float,
    risk: RiskLevel,
    signals: EngagementSignals,
) -> InterventionUrgency:
    if risk == RiskLevel.HIGH or score < EngagementThresholds.CRITICAL:
        return InterventionUrgency.HIGH
    if risk == RiskLevel.MEDIUM or len(signals.frustration_indicators) > 1:
        return InterventionUrgency.MEDIUM
    if score < EngagementThresholds.MEDIUM:
        return InterventionUrgency.LOW
    return InterventionUrgency.NONE


def sort_actions(actions: Iterable[EngagementAction]) -> tuple[EngagementAction, ...]:
    """Stable sort: priority descending, then expected impact descending."""
    return tuple(
        sorted(
            actions,
            key=lambda action: (PRIORITY_RANK[action.priority], action.expected_impact),
            reverse=True,
        )
    )
