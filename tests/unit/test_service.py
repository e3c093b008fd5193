# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the tutoring decision service and learner store."""

import random
from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from src.core.config.settings import GenerationSettings, Settings
from src.core.coordination import CoordinationAction
from src.core.engagement import ActionType
from src.core.orchestration import (
    InMemoryLearnerStore,
    LearnerNotFoundError,
    TutoringDecisionService,
)
from src.core.planning.constants import PerformanceTrend
from src.core.planning.continuation import continuation_prompt
from src.models import LanguageLevel, LearningGoal


@pytest.fixture
def store(intermediate_profile, declining_history) -> InMemoryLearnerStore:
    return InMemoryLearnerStore(
        profiles=[intermediate_profile],
        history={intermediate_profile.user_id: declining_history},
    )


@pytest.fixture
def service(store, persona_manager, test_settings) -> TutoringDecisionService:
    return TutoringDecisionService(
        store, persona_manager, settings=test_settings, rng=random.Random(1)
    )


class TestInMemoryLearnerStore:
    def test_unknown_learner_raises(self) -> None:
        with pytest.raises(LearnerNotFoundError) as exc_info:
            InMemoryLearnerStore().get_user_profile("nobody")

        assert exc_info.value.user_id == "nobody"

    def test_history_is_a_copy(self, store, intermediate_profile) -> None:
        history = store.get_session_history(intermediate_profile.user_id)
        history.clear()

        assert len(store.get_session_history(intermediate_profile.user_id)) == 4
        assert store.get_session_history("nobody") == []

    def test_add_session_and_save_profile(self, session_factory, base_time, beginner_profile) -> None:
        store = InMemoryLearnerStore()
        store.save_user_profile(beginner_profile)
        store.add_session(beginner_profile.user_id, session_factory("s", "Travel", base_time, 70.0))

        assert store.get_user_profile(beginner_profile.user_id) == beginner_profile
        assert len(store.get_session_history(beginner_profile.user_id)) == 1


class TestTutoringDecisionService:
    """Tests for the service pipelines."""

    def test_unknown_learner_gets_default_profile(self, service) -> None:
        profile = service.load_profile("new-learner")

        assert profile.current_level == LanguageLevel.BEGINNER
        assert profile.learning_goals == (LearningGoal.CONVERSATION_FLUENCY,)

    def test_process_turn_flags_declining_history(
        self, service, intermediate_profile, engaged_turns
    ) -> None:
        decision = service.process_turn(
            intermediate_profile.user_id, engaged_turns, "Travel", session_duration_sec=120,
        )

        assert decision.trend.trend == PerformanceTrend.DECLINING
        assert "declining_performance" in decision.analysis.detected_patterns
        assert [a.type for a in decision.interventions.long_term] == [ActionType.DIFFICULTY_ADJUST]

    def test_process_turn_without_history(self, service, disengaged_turns) -> None:
        decision = service.process_turn("new-learner", disengaged_turns, "Weather")

        assert decision.trend.trend == PerformanceTrend.STABLE
        assert "declining_performance" not in decision.analysis.detected_patterns
        assert decision.interventions.immediate

    def test_plan_session(self, service, intermediate_profile) -> None:
        now = datetime(2025, 3, 10, 14, 0, tzinfo=timezone.utc)

        plan = service.plan_session(intermediate_profile.user_id, now=now)

        assert plan.trend.trend == PerformanceTrend.DECLINING
        assert plan.topic.topic == "Technology"
        assert plan.session_length_minutes == 25
        assert plan.focus_areas == (LearningGoal.GRAMMAR_ACCURACY, LearningGoal.CONVERSATION_FLUENCY)
        assert plan.motivational_message
        assert [rec.persona_id for rec in plan.recommended_personas] == [
            "strict_teacher",
            "conversation_partner",
            "friendly_tutor",
        ]

    def test_plan_session_uses_generator(
        self, store, persona_manager, test_settings, fake_generator, intermediate_profile
    ) -> None:
        generator = fake_generator('{"topic": "Space Travel", "reason": "Loves technology"}')
        service = TutoringDecisionService(store, persona_manager, generator, test_settings)

        plan = service.plan_session(
            intermediate_profile.user_id, now=datetime(2025, 3, 10, 14, 0, tzinfo=timezone.utc),
        )

        assert plan.topic.topic == "Space Travel"
        assert len(generator.calls) == 1

    def test_plan_session_rejects_recent_model_topic(
        self, store, persona_manager, test_settings, fake_generator, intermediate_profile
    ) -> None:
        generator = fake_generator('{"topic": "Weather", "reason": "Familiar ground"}')
        service = TutoringDecisionService(store, persona_manager, generator, test_settings)

        plan = service.plan_session(
            intermediate_profile.user_id, now=datetime(2025, 3, 10, 14, 0, tzinfo=timezone.utc),
        )

        assert plan.topic.topic == "Technology"

    def test_disabled_generation_ignores_generator(
        self, store, persona_manager, fake_generator, engaged_turns
    ) -> None:
        generator = fake_generator("Where would you go next?")
        settings = Settings(generation=GenerationSettings(enabled=False))
        service = TutoringDecisionService(store, persona_manager, generator, settings)

        prompt = service.continuation(engaged_turns, "Travel", persona_id="friendly_tutor")

        assert prompt == continuation_prompt("Travel")
        assert generator.calls == []

    def test_recommend_difficulty(self, service, intermediate_profile, conversation) -> None:
        adjustment = service.recommend_difficulty(
            intermediate_profile.user_id, conversation(["fine"] * 3),
        )

        assert adjustment.current_difficulty == LanguageLevel.INTERMEDIATE

    def test_coordinate_uses_stored_profile(self, service, intermediate_profile, engaged_turns) -> None:
        state = service.coordinator.initialize("s1", intermediate_profile)

        result = service.coordinate(
            {"s1": state}, "s1", intermediate_profile.user_id, engaged_turns,
        )

        assert result.success is True
        assert result.decision.action == CoordinationAction.MAINTAIN

    def test_coordinate_unknown_session(self, service, engaged_turns) -> None:
        result = service.coordinate({}, "missing", "new-learner", engaged_turns)

        assert result.success is False


class TestFromSettings:
    """Tests for the settings-driven factory."""

    def test_generation_disabled(self, store) -> None:
        settings = Settings(environment="test", generation=GenerationSettings(enabled=False))

        service = TutoringDecisionService.from_settings(store, settings)

        assert service.coordinator is not None
        assert service.continuation([], "Travel") == continuation_prompt("Travel")

    def test_generation_enabled_builds_litellm_generator(self, store) -> None:
        settings = Settings(environment="test", generation=GenerationSettings(model="ollama/test"))

        with patch("src.core.orchestration.service.LiteLLMGenerator") as generator_cls:
            TutoringDecisionService.from_settings(store, settings)

        generator_cls.assert_called_once_with(settings.generation)
