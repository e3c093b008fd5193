# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for engagement interventions."""

from src.core.engagement.constants import (
    ActionPriority,
    ActionType,
    EmotionalTone,
    InterventionUrgency,
    ParticipationLevel,
    RiskLevel,
)
from src.core.engagement.context import EngagementAction, EngagementAnalysis, EngagementSignals
from src.core.engagement.interventions import generate_interventions, recommend_actions
from src.core.engagement.scoring import sort_actions
from src.models import UserProfile


def _analysis(
    score: float,
    urgency: InterventionUrgency,
    risk: RiskLevel = RiskLevel.LOW,
    patterns: tuple[str, ...] = (),
) -> EngagementAnalysis:
    return EngagementAnalysis(
        overall_engagement=score,
        risk_level=risk,
        detected_patterns=patterns,
        intervention_urgency=urgency,
    )


class TestSortActions:
    """Tests for action ordering."""

    def test_priority_then_impact(self) -> None:
        actions = [
            EngagementAction(ActionType.AGENT_SWITCH, ActionPriority.LOW, "a", 0.9),
            EngagementAction(ActionType.ENCOURAGEMENT, ActionPriority.HIGH, "b", 0.6),
            EngagementAction(ActionType.TOPIC_CHANGE, ActionPriority.HIGH, "c", 0.7),
            EngagementAction(ActionType.DIFFICULTY_ADJUST, ActionPriority.MEDIUM, "d", 0.5),
        ]

        ordered = sort_actions(actions)

        assert [a.description for a in ordered] == ["c", "b", "d", "a"]


class TestRecommendActions:
    """Tests for turn-level actions."""

    def test_all_rules_fire_in_order(self) -> None:
        signals = EngagementSignals(
            response_latency_ms=20000,
            message_complexity=0.2,
            emotional_tone=EmotionalTone.NEGATIVE,
            participation_level=ParticipationLevel.LOW,
            frustration_indicators=("help_requested",),
            confidence_level=0.3,
        )

        actions = recommend_actions(signals, 20.0)

        assert [a.type for a in actions] == [
            ActionType.TOPIC_CHANGE,
            ActionType.ENCOURAGEMENT,
            ActionType.DIFFICULTY_ADJUST,
            ActionType.AGENT_SWITCH,
        ]
        assert [a.expected_impact for a in actions] == [0.7, 0.6, 0.5, 0.4]

    def test_engaged_learner_needs_nothing(self) -> None:
        signals = EngagementSignals(
            response_latency_ms=2000,
            message_complexity=0.7,
            emotional_tone=EmotionalTone.POSITIVE,
            participation_level=ParticipationLevel.HIGH,
        )

        assert recommend_actions(signals, 85.0) == ()


class TestGenerateInterventions:
    """Tests for horizon-partitioned interventions."""

    def test_high_urgency_critical_score(self, beginner_profile: UserProfile) -> None:
        plan = generate_interventions(
            _analysis(10, InterventionUrgency.HIGH, RiskLevel.HIGH),
            beginner_profile,
            "Weather",
        )

        assert [a.type for a in plan.immediate] == [
            ActionType.ENCOURAGEMENT,
            ActionType.BREAK_SUGGESTION,
        ]
        assert [a.type for a in plan.short_term] == [
            ActionType.DIFFICULTY_ADJUST,
            ActionType.AGENT_SWITCH,
        ]
        assert plan.short_term[1].priority == ActionPriority.LOW
        assert plan.long_term == ()

    def test_high_urgency_without_break(self, beginner_profile: UserProfile) -> None:
        """Test that a break is only suggested below the critical score."""
        plan = generate_interventions(
            _analysis(30, InterventionUrgency.HIGH, RiskLevel.HIGH),
            beginner_profile,
            "Weather",
        )

        assert [a.type for a in plan.immediate] == [ActionType.ENCOURAGEMENT]

    def test_medium_urgency_uses_preferred_topics(self, beginner_profile: UserProfile) -> None:
        plan = generate_interventions(
            _analysis(55, InterventionUrgency.MEDIUM, RiskLevel.MEDIUM),
            beginner_profile,
            "Weather",
        )

        assert len(plan.immediate) == 1
        action = plan.immediate[0]
        assert action.type == ActionType.TOPIC_CHANGE
        assert action.priority == ActionPriority.MEDIUM
        assert "Food and Cooking" in action.description
        assert plan.short_term == ()

    def test_medium_urgency_without_preferences(self) -> None:
        profile = UserProfile.create_default("learner-1")

        plan = generate_interventions(
            _analysis(55, InterventionUrgency.MEDIUM, RiskLevel.MEDIUM),
            profile,
            "Weather",
        )

        assert "Weather" in plan.immediate[0].description

    def test_declining_performance_is_long_term(self, beginner_profile: UserProfile) -> None:
        plan = generate_interventions(
            _analysis(60, InterventionUrgency.NONE, patterns=("declining_performance",)),
            beginner_profile,
            "Weather",
        )

        assert [a.type for a in plan.long_term] == [ActionType.DIFFICULTY_ADJUST]
        assert plan.immediate == ()

    def test_engaged_learner_gets_empty_plan(self, beginner_profile: UserProfile) -> None:
        plan = generate_interventions(
            _analysis(80, InterventionUrgency.NONE),
            beginner_profile,
            "Weather",
        )

        assert plan.is_empty
