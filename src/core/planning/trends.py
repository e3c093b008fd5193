# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Multi-session performance trend analysis."""

from collections.abc import Sequence
from datetime import datetime
from statistics import pvariance

from src.core.engagement.patterns import split_halves
from src.core.planning.constants import (
    BASELINE_RECOMMENDATION,
    TREND_RECOMMENDATIONS,
    PerformanceTrend,
    TrendThresholds,
)
from src.core.planning.context import TrendAnalysis
from src.models import SessionRecord, Timeframe
from src.utils.datetime import days_before

_TIMEFRAME_DAYS = {
    Timeframe.WEEK: TrendThresholds.WEEK_DAYS,
    Timeframe.MONTH: TrendThresholds.MONTH_DAYS,
}


def filter_by_timeframe(
    history: Sequence[SessionRecord],
    timeframe: Timeframe,
    now: datetime | None = None,
) -> list[SessionRecord]:
    """Sessions started within the timeframe, oldest first."""
    ordered = sorted(history, key=lambda record: record.start_time)
    days = _TIMEFRAME_DAYS.get(timeframe)
    if days is None:
        return ordered
    cutoff = days_before(days, now)
    return [record for record in ordered if record.start_time >= cutoff]


def classify_trend(scores: Sequence[float]) -> PerformanceTrend:
    if len(scores) < TrendThresholds.MIN_SESSIONS:
        return PerformanceTrend.STABLE
    first, second = split_halves(scores)
    difference = second - first
    if difference > TrendThresholds.SCORE_DELTA:
        return PerformanceTrend.IMPROVING
    if difference < -TrendThresholds.SCORE_DELTA:
        return PerformanceTrend.DECLINING
    return PerformanceTrend.STABLE


def trend_confidence(scores: Sequence[float]) -> float:
    """Higher variance, lower confidence; bounded to [0.3, 0.95]."""
    if len(scores) < TrendThresholds.MIN_SCORES_FOR_CONFIDENCE:
        return TrendThresholds.DEFAULT_CONFIDENCE
    confidence = 1 - pvariance(scores) / TrendThresholds.VARIANCE_SCALE
    return max(TrendThresholds.MIN_CONFIDENCE, min(TrendThresholds.MAX_CONFIDENCE, confidence))


def analyze_trend(
    session_history: Sequence[SessionRecord],
    timeframe: Timeframe = Timeframe.ALL,
    now: datetime | None = None,
) -> TrendAnalysis:
    """Classify whether performance is improving, stable or declining.

    Sessions are filtered to the timeframe and ordered by start time; the
    per-session score is the mean of grammar accuracy and fluency. The
    first half of the series is compared with the second.

    Args:
        session_history: Past sessions, any order.
        timeframe: ``week``, ``month`` or ``all``.
        now: Reference time for the timeframe cutoff.

    Returns:
        TrendAnalysis. Fewer than two sessions (before filtering) always
        yields stable with confidence 0.5 and a baseline recommendation.
    """
    if len(session_history) < TrendThresholds.MIN_SESSIONS:
        return TrendAnalysis(
            trend=PerformanceTrend.STABLE,
            confidence=TrendThresholds.DEFAULT_CONFIDENCE,
            recommendations=(BASELINE_RECOMMENDATION,),
            session_count=len(session_history),
        )

    sessions = filter_by_timeframe(session_history, timeframe, now)
    scores = [record.metrics.performance_score for record in sessions]
    trend = classify_trend(scores)

    return TrendAnalysis(
        trend=trend,
        confidence=trend_confidence(scores),
        recommendations=TREND_RECOMMENDATIONS[trend],
        session_count=len(sessions),
    )
