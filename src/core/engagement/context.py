# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Engagement data structures.

Everything here is derived and ephemeral: computed fresh for each
analysis call and never persisted. The dataclasses are frozen so that
identical inputs produce equal, hashable-by-value outputs.
"""

from dataclasses import dataclass, field
from typing import Any

from src.core.engagement.constants import (
    ActionPriority,
    ActionType,
    EmotionalTone,
    EngagementTrend,
    InterventionUrgency,
    ParticipationLevel,
    RiskLevel,
)


@dataclass(frozen=True)
class EngagementSignals:
    """Scalar features extracted from a run of conversation turns.

    Attributes:
        response_latency_ms: Mean agent-to-learner response time.
        message_complexity: Mean learner message complexity (0-1).
        emotional_tone: Keyword-based sentiment of learner turns.
        participation_level: Message rate and length classification.
        frustration_indicators: Distinct frustration labels, first-seen order.
        confidence_level: Mean transcription confidence (0-1).
    """

    response_latency_ms: float
    message_complexity: float
    emotional_tone: EmotionalTone
    participation_level: ParticipationLevel
    frustration_indicators: tuple[str, ...] = ()
    confidence_level: float = 0.5

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "response_latency_ms": self.response_latency_ms,
            "message_complexity": self.message_complexity,
            "emotional_tone": self.emotional_tone.value,
            "participation_level": self.participation_level.value,
            "frustration_indicators": list(self.frustration_indicators),
            "confidence_level": self.confidence_level,
        }


@dataclass(frozen=True)
class EngagementAction:
    """A recommended corrective action.

    Attributes:
        type: What to do.
        priority: How important it is.
        description: Human-readable explanation for the tutor.
        expected_impact: Estimated benefit (0-1).
    """

    type: ActionType
    priority: ActionPriority
    description: str
    expected_impact: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "priority": self.priority.value,
            "description": self.description,
            "expected_impact": self.expected_impact,
        }


@dataclass(frozen=True)
class DisengagementPattern:
    """A behavioural signature found in the turn window."""

    pattern: str
    confidence: float
    description: str


@dataclass(frozen=True)
class EngagementAnalysis:
    """Complete per-turn engagement assessment.

    Attributes:
        overall_engagement: Score on the 0-100 scale.
        risk_level: Coarse need-for-intervention classification.
        recommended_actions: Actions sorted by priority then impact.
        detected_patterns: Distinct pattern labels, first-seen order.
        intervention_urgency: How soon the tutor should act.
        signals: The features the score was computed from, if any.
    """

    overall_engagement: float
    risk_level: RiskLevel
    recommended_actions: tuple[EngagementAction, ...] = ()
    detected_patterns: tuple[str, ...] = ()
    intervention_urgency: InterventionUrgency = InterventionUrgency.NONE
    signals: EngagementSignals | None = None

    @property
    def needs_intervention(self) -> bool:
        return self.intervention_urgency != InterventionUrgency.NONE

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "overall_engagement": self.overall_engagement,
            "risk_level": self.risk_level.value,
            "recommended_actions": [a.to_dict() for a in self.recommended_actions],
            "detected_patterns": list(self.detected_patterns),
            "intervention_urgency": self.intervention_urgency.value,
            "signals": self.signals.to_dict() if self.signals else None,
        }

    @classmethod
    def create_default(cls) -> "EngagementAnalysis":
        """Neutral analysis used when there is nothing to analyse."""
        return cls(
            overall_engagement=50.0,
            risk_level=RiskLevel.LOW,
            recommended_actions=(),
            detected_patterns=(),
            intervention_urgency=InterventionUrgency.NONE,
        )


@dataclass(frozen=True)
class InterventionPlan:
    """Actions partitioned by horizon.

    Attributes:
        immediate: Act on the current turn.
        short_term: Apply over the next few turns.
        long_term: Carry into future sessions.
    """

    immediate: tuple[EngagementAction, ...] = ()
    short_term: tuple[EngagementAction, ...] = ()
    long_term: tuple[EngagementAction, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.immediate or self.short_term or self.long_term)


@dataclass(frozen=True)
class RealtimeEngagement:
    """Result of monitoring the most recent time window.

    Attributes:
        current_engagement: Score of the latest window.
        previous_engagement: Score of the window before it.
        trend: Direction between the two windows.
        alert_level: Urgency of any alert raised.
        window_seconds: Width of each window.
    """

    current_engagement: float
    previous_engagement: float
    trend: EngagementTrend
    alert_level: InterventionUrgency
    window_seconds: int = field(default=60)

    @property
    def should_alert(self) -> bool:
        return self.alert_level != InterventionUrgency.NONE
