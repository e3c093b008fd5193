# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Per-turn engagement analysis.

Ties the pipeline together: feature extraction, scoring, risk,
urgency, recommended actions and pattern labels. Also provides the
sliding-window real-time monitor.
"""

from collections.abc import Sequence
from datetime import datetime, timedelta

from src.core.engagement.constants import (
    EngagementThresholds,
    EngagementTrend,
    FeatureLimits,
    InterventionUrgency,
    MonitoringDefaults,
    PatternName,
    ResponseTimeThresholds,
)
from src.core.engagement.context import (
    EngagementAnalysis,
    EngagementSignals,
    RealtimeEngagement,
)
from src.core.engagement.interventions import recommend_actions
from src.core.engagement.patterns import detect_disengagement_patterns
from src.core.engagement.scoring import classify_risk, intervention_urgency, score_engagement
from src.core.engagement.signals import conversation_span_seconds, extract_signals, user_turns
from src.models import ConversationTurn, UserProfile
from src.utils.datetime import ensure_utc, utc_now
from src.utils.logging import get_logger

logger = get_logger(__name__)


def signal_pattern_labels(signals: EngagementSignals) -> list[str]:
    """Pattern labels read directly off the extracted signals."""
    labels: list[str] = []
    if signals.response_latency_ms > ResponseTimeThresholds.SLOW:
        labels.append(PatternName.SLOW_RESPONSES.value)
    if signals.message_complexity < FeatureLimits.SIMPLE_COMPLEXITY:
        labels.append(PatternName.SIMPLE_RESPONSES.value)
    if signals.frustration_indicators:
        labels.append(PatternName.FRUSTRATION_DETECTED.value)
    if signals.confidence_level < FeatureLimits.LOW_CONFIDENCE:
        labels.append(PatternName.LOW_CONFIDENCE.value)
    return labels


def _unique(labels: Sequence[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(labels))


def analyze_engagement(
    turns: Sequence[ConversationTurn],
    profile: UserProfile | None = None,
    session_duration_sec: float | None = None,
) -> EngagementAnalysis:
    """Analyse learner engagement over a run of conversation turns.

    Args:
        turns: Conversation turns in chronological order.
        profile: Learner profile, when known.
        session_duration_sec: Elapsed session time in seconds. Defaults to
            the span between the first and last turn.

    Returns:
        A fully populated EngagementAnalysis. Histories without learner
        turns yield the neutral default (score 50, low risk).
    """
    if not user_turns(turns):
        return EngagementAnalysis.create_default()

    if session_duration_sec is None:
        session_duration_sec = conversation_span_seconds(turns)

    signals = extract_signals(turns, session_duration_sec)
    score = score_engagement(signals, profile)
    risk = classify_risk(score, signals)
    urgency = intervention_urgency(score, risk, signals)

    labels = signal_pattern_labels(signals)
    labels.extend(p.pattern for p in detect_disengagement_patterns(turns))

    analysis = EngagementAnalysis(
        overall_engagement=score,
        risk_level=risk,
        recommended_actions=recommend_actions(signals, score, profile),
        detected_patterns=_unique(labels),
        intervention_urgency=urgency,
        signals=signals,
    )

    logger.debug(
        "engagement_analyzed",
        score=round(score, 2),
        risk=risk.value,
        urgency=urgency.value,
        patterns=list(analysis.detected_patterns),
        turn_count=len(turns),
    )
    return analysis


def _window_score(turns: Sequence[ConversationTurn], window_seconds: int) -> float:
    if not user_turns(turns):
        return EngagementAnalysis.create_default().overall_engagement
    return score_engagement(extract_signals(turns, window_seconds))


def monitor_realtime_engagement(
    turns: Sequence[ConversationTurn],
    window_seconds: int = MonitoringDefaults.WINDOW_SECONDS,
    now: datetime | None = None,
) -> RealtimeEngagement:
    """Score the latest time window and compare it with the one before.

    Args:
        turns: Recent conversation turns.
        window_seconds: Width of each window.
        now: Reference time; defaults to the current UTC time.

    Returns:
        RealtimeEngagement with the trend between windows and an alert
        level for the latest window.
    """
    reference = ensure_utc(now) if now is not None else utc_now()
    window = timedelta(seconds=window_seconds)
    cutoff = reference - window
    previous_cutoff = cutoff - window

    current_turns = [t for t in turns if t.timestamp > cutoff]
    previous_turns = [t for t in turns if previous_cutoff < t.timestamp <= cutoff]

    current = _window_score(current_turns, window_seconds)
    previous = _window_score(previous_turns, window_seconds)

    difference = current - previous
    if difference > MonitoringDefaults.TREND_DELTA:
        trend = EngagementTrend.IMPROVING
    elif difference < -MonitoringDefaults.TREND_DELTA:
        trend = EngagementTrend.DECLINING
    else:
        trend = EngagementTrend.STABLE

    if current < EngagementThresholds.CRITICAL:
        alert = InterventionUrgency.HIGH
    elif current < EngagementThresholds.LOW:
        alert = InterventionUrgency.MEDIUM
    elif trend == EngagementTrend.DECLINING and current < EngagementThresholds.MEDIUM:
        alert = InterventionUrgency.LOW
    else:
        alert = InterventionUrgency.NONE

    return RealtimeEngagement(
        current_engagement=current,
        previous_engagement=previous,
        trend=trend,
        alert_level=alert,
        window_seconds=window_seconds,
    )
