# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Rule tables mapping engagement state to corrective actions.

Two entry points:
- recommend_actions: the per-turn action list carried on EngagementAnalysis
- generate_interventions: actions partitioned into immediate, short-term
  and long-term horizons
"""

from src.core.engagement.constants import (
    ActionPriority,
    ActionType,
    EngagementThresholds,
    InterventionUrgency,
    ParticipationLevel,
    PatternName,
    ResponseTimeThresholds,
)
from src.core.engagement.context import (
    EngagementAction,
    EngagementAnalysis,
    EngagementSignals,
    InterventionPlan,
)
from src.core.engagement.scoring import sort_actions
from src.models import UserProfile


def recommend_actions(
    signals: EngagementSignals,
    score: float,
    profile: UserProfile | None = None,
) -> tuple[EngagementAction, ...]:
    """Turn-level actions, sorted by priority then expected impact."""
    actions: list[EngagementAction] = []

    if score < EngagementThresholds.ENCOURAGEMENT:
        actions.append(
            EngagementAction(
                type=ActionType.ENCOURAGEMENT,
                priority=ActionPriority.HIGH,
                description="Provide encouragement and positive reinforcement",
                expected_impact=0.6,
            )
        )

    if signals.response_latency_ms > ResponseTimeThresholds.SLOW:
        actions.append(
            EngagementAction(
                type=ActionType.DIFFICULTY_ADJUST,
                priority=ActionPriority.MEDIUM,
                description="Simplify the conversation; the learner is responding slowly",
                expected_impact=0.5,
            )
        )

    if signals.frustration_indicators:
        actions.append(
            EngagementAction(
                type=ActionType.TOPIC_CHANGE,
                priority=ActionPriority.HIGH,
                description="Switch to a more comfortable topic to relieve frustration",
                expected_impact=0.7,
            )
        )

    if signals.participation_level == ParticipationLevel.LOW:
        actions.append(
            EngagementAction(
                type=ActionType.AGENT_SWITCH,
                priority=ActionPriority.MEDIUM,
                description="Try a tutor persona with a more interactive style",
                expected_impact=0.4,
            )
        )

    return sort_actions(actions)


def _interest_description(profile: UserProfile, current_topic: str) -> str:
    if profile.preferred_topics:
        return f"Switch to a topic from the learner's interests: {', '.join(profile.preferred_topics)}"
    return f"Move away from '{current_topic}' to a lighter topic"


def generate_interventions(
    analysis: EngagementAnalysis,
    profile: UserProfile,
    current_topic: str,
) -> InterventionPlan:
    """Partition corrective actions by the horizon they apply to.

    Args:
        analysis: Current engagement analysis.
        profile: Learner profile (preferred topics feed topic changes).
        current_topic: Topic under discussion.

    Returns:
        InterventionPlan whose horizons are each sorted by priority then
        expected impact.
    """
    immediate: list[EngagementAction] = []
    short_term: list[EngagementAction] = []
    long_term: list[EngagementAction] = []

    if analysis.intervention_urgency == InterventionUrgency.HIGH:
        immediate.append(
            EngagementAction(
                type=ActionType.ENCOURAGEMENT,
                priority=ActionPriority.HIGH,
                description="Provide immediate emotional support and encouragement",
                expected_impact=0.7,
            )
        )
        if analysis.overall_engagement < EngagementThresholds.CRITICAL:
            immediate.append(
                EngagementAction(
                    type=ActionType.BREAK_SUGGESTION,
                    priority=ActionPriority.HIGH,
                    description="Suggest a short break to reset engagement",
                    expected_impact=0.6,
                )
            )
    elif analysis.intervention_urgency == InterventionUrgency.MEDIUM:
        immediate.append(
            EngagementAction(
                type=ActionType.TOPIC_CHANGE,
                priority=ActionPriority.MEDIUM,
                description=_interest_description(profile, current_topic),
                expected_impact=0.5,
            )
        )

    if analysis.overall_engagement < EngagementThresholds.MEDIUM:
        short_term.append(
            EngagementAction(
                type=ActionType.DIFFICULTY_ADJUST,
                priority=ActionPriority.MEDIUM,
                description="Adjust difficulty to the learner's comfort level",
                expected_impact=0.6,
            )
        )
        short_term.append(
            EngagementAction(
                type=ActionType.AGENT_SWITCH,
                priority=ActionPriority.LOW,
                description="Consider switching to a different tutor persona",
                expected_impact=0.4,
            )
        )

    if PatternName.DECLINING_PERFORMANCE.value in analysis.detected_patterns:
        long_term.append(
            EngagementAction(
                type=ActionType.DIFFICULTY_ADJUST,
                priority=ActionPriority.MEDIUM,
                description="Recommend easier topics for upcoming sessions",
                expected_impact=0.5,
            )
        )

    return InterventionPlan(
        immediate=sort_actions(immediate),
        short_term=sort_actions(short_term),
        long_term=sort_actions(long_term),
    )
