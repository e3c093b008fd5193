# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Engagement analysis.

Components:
- signals: feature extraction from conversation turns
- scoring: additive engagement score, risk and urgency
- patterns: disengagement pattern detection
- interventions: rule tables for corrective actions
- analyzer: the per-turn pipeline and real-time monitor

Example:
    >>> from src.core.engagement import analyze_engagement
    >>> analysis = analyze_engagement(turns, profile, session_duration_sec=300)
    >>> analysis.risk_level
    <RiskLevel.LOW: 'low'>
"""

from src.core.engagement.analyzer import analyze_engagement, monitor_realtime_engagement
from src.core.engagement.constants import (
    ActionPriority,
    ActionType,
    EmotionalTone,
    EngagementThresholds,
    EngagementTrend,
    InterventionUrgency,
    ParticipationLevel,
    PatternName,
    RiskLevel,
)
from src.core.engagement.context import (
    DisengagementPattern,
    EngagementAction,
    EngagementAnalysis,
    EngagementSignals,
    InterventionPlan,
    RealtimeEngagement,
)
from src.core.engagement.interventions import generate_interventions, recommend_actions
from src.core.engagement.patterns import detect_disengagement_patterns
from src.core.engagement.scoring import score_engagement
from src.core.engagement.signals import extract_signals

__all__ = [
    # Pipeline
    "analyze_engagement",
    "monitor_realtime_engagement",
    "extract_signals",
    "score_engagement",
    "detect_disengagement_patterns",
    "generate_interventions",
    "recommend_actions",
    # Types
    "DisengagementPattern",
    "EngagementAction",
    "EngagementAnalysis",
    "EngagementSignals",
    "InterventionPlan",
    "RealtimeEngagement",
    # Enums
    "ActionPriority",
    "ActionType",
    "EmotionalTone",
    "EngagementThresholds",
    "EngagementTrend",
    "InterventionUrgency",
    "ParticipationLevel",
    "PatternName",
    "RiskLevel",
]
