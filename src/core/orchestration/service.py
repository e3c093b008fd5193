# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tutoring decision service.

Thin facade that wires the learner store, the persona catalog and the
optional text generator to the decision core. It runs two pipelines:

    process_turn:  engagement analysis -> trend check -> interventions
    plan_session:  trend -> topic -> length -> focus areas -> motivation -> personas

Per-session coordination state stays with the caller; the service
forwards it to the PersonaCoordinator unchanged.

Example:
    >>> service = TutoringDecisionService(store, PersonaManager())
    >>> decision = service.process_turn("user-1", turns, current_topic="travel")
    >>> decision.interventions.immediate
"""

import random
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from datetime import datetime

from src.core.config.settings import Settings, get_settings
from src.core.coordination import CoordinationResult, CoordinationState, PersonaCoordinator
from src.core.engagement import (
    EngagementAnalysis,
    InterventionPlan,
    PatternName,
    analyze_engagement,
    generate_interventions,
)
from src.core.intelligence.generator import LiteLLMGenerator, TextGenerator
from src.core.intelligence.suggestions import (
    suggest_continuation,
    suggest_difficulty,
    suggest_topic,
)
from src.core.orchestration.stores import LearnerNotFoundError, LearnerStore
from src.core.personas.manager import PersonaManager, PersonaRecommendation
from src.core.planning import (
    ConversationPrompt,
    DifficultyAdjustment,
    PerformanceTrend,
    TopicRecommendation,
    TrendAnalysis,
    analyze_trend,
    identify_focus_areas,
    motivational_message,
    recommend_session_length,
)
from src.models import ConversationTurn, LearningGoal, SessionMetrics, Timeframe, UserProfile
from src.utils.datetime import ensure_utc, time_of_day, utc_now
from src.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


@dataclass(frozen=True)
class TurnDecision:
    """Everything the per-turn pipeline produced."""

    analysis: EngagementAnalysis
    interventions: InterventionPlan
    trend: TrendAnalysis


@dataclass(frozen=True)
class SessionPlan:
    """Opening plan for a new session."""

    topic: TopicRecommendation
    trend: TrendAnalysis
    session_length_minutes: int
    focus_areas: tuple[LearningGoal, ...]
    motivational_message: str
    recommended_personas: tuple[PersonaRecommendation, ...] = ()


class TutoringDecisionService:
    """Orchestrates the decision core for one deployment.

    Attributes:
        coordinator: Persona coordinator over the same catalog.
    """

    def __init__(
        self,
        store: LearnerStore,
        personas: PersonaManager,
        generator: TextGenerator | None = None,
        settings: Settings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            store: Learner profile and history reader.
            personas: Persona catalog.
            generator: Optional text generator for model-assisted
                suggestions. Ignored when generation is disabled.
            settings: Application settings (defaults to get_settings()).
            rng: Randomness source for phrase and fallback choices.
        """
        self._settings = settings or get_settings()
        self._store = store
        self._personas = personas
        self._generator = generator if self._settings.generation.enabled else None
        self._rng = rng or random.Random()
        self.coordinator = PersonaCoordinator(personas)

    @classmethod
    def from_settings(
        cls,
        store: LearnerStore,
        settings: Settings | None = None,
        rng: random.Random | None = None,
    ) -> "TutoringDecisionService":
        """Build a fully wired service from settings.

        Configures logging, loads the persona catalog (with the configured
        override directory) and creates a LiteLLM generator when
        generation is enabled.
        """
        settings = settings or get_settings()
        setup_logging(settings)

        generator = (
            LiteLLMGenerator(settings.generation) if settings.generation.enabled else None
        )
        service = cls(
            store,
            PersonaManager.from_settings(settings),
            generator=generator,
            settings=settings,
            rng=rng,
        )
        logger.info(
            "decision_service_started",
            environment=settings.environment,
            generation_enabled=generator is not None,
        )
        return service

    def load_profile(self, user_id: str) -> UserProfile:
        """Profile from the store, or a default beginner profile."""
        try:
            return self._store.get_user_profile(user_id)
        except LearnerNotFoundError:
            logger.info("profile_defaulted", user_id=user_id)
            return UserProfile.create_default(user_id)

    # =========================================================================
    # Per-turn pipeline
    # =========================================================================

    def process_turn(
        self,
        user_id: str,
        turns: Sequence[ConversationTurn],
        current_topic: str,
        session_duration_sec: float | None = None,
    ) -> TurnDecision:
        """Analyse the conversation so far and plan interventions.

        A declining multi-session trend adds ``declining_performance`` to
        the detected patterns so the long-term plan reacts to it.
        """
        profile = self.load_profile(user_id)
        history = self._store.get_session_history(user_id)

        analysis = analyze_engagement(turns, profile, session_duration_sec)
        trend = analyze_trend(history)

        declining = PatternName.DECLINING_PERFORMANCE.value
        if trend.trend == PerformanceTrend.DECLINING and declining not in analysis.detected_patterns:
            analysis = replace(
                analysis,
                detected_patterns=analysis.detected_patterns + (declining,),
            )

        interventions = generate_interventions(analysis, profile, current_topic)

        logger.debug(
            "turn_processed",
            user_id=user_id,
            engagement=analysis.overall_engagement,
            urgency=analysis.intervention_urgency.value,
            trend=trend.trend.value,
        )
        return TurnDecision(analysis=analysis, interventions=interventions, trend=trend)

    def recommend_difficulty(
        self,
        user_id: str,
        recent_turns: Sequence[ConversationTurn],
        performance_metrics: SessionMetrics | None = None,
    ) -> DifficultyAdjustment:
        profile = self.load_profile(user_id)
        return suggest_difficulty(self._generator, profile, recent_turns, performance_metrics)

    def continuation(
        self,
        turns: Sequence[ConversationTurn],
        current_topic: str,
        persona_id: str | None = None,
    ) -> ConversationPrompt:
        """Follow-up question in the active persona's voice."""
        persona = (
            self._personas.get_persona(persona_id)
            if persona_id and self._personas.has_persona(persona_id)
            else None
        )
        return suggest_continuation(self._generator, current_topic, turns, persona)

    def coordinate(
        self,
        states: Mapping[str, CoordinationState],
        session_id: str,
        user_id: str,
        turns: Sequence[ConversationTurn],
        session_metrics: SessionMetrics | None = None,
    ) -> CoordinationResult:
        profile = self.load_profile(user_id)
        return self.coordinator.coordinate(states, session_id, turns, session_metrics, profile)

    # =========================================================================
    # Session planning pipeline
    # =========================================================================

    def plan_session(
        self,
        user_id: str,
        current_engagement: float = 50.0,
        now: datetime | None = None,
    ) -> SessionPlan:
        """Plan the opening of a new session.

        Args:
            user_id: Learner identifier.
            current_engagement: Latest engagement score, if known.
            now: Reference time for time of day and trend windows.
        """
        reference = ensure_utc(now) if now is not None else utc_now()
        profile = self.load_profile(user_id)
        history = self._store.get_session_history(user_id)

        trend = analyze_trend(history, Timeframe.MONTH, now=reference)
        topic = suggest_topic(
            self._generator,
            profile,
            history,
            current_engagement,
            time_of_day(reference),
            recent_topic_window=self._settings.planner.recent_topic_window,
            rng=self._rng,
        )
        plan = SessionPlan(
            topic=topic,
            trend=trend,
            session_length_minutes=recommend_session_length(profile, history),
            focus_areas=tuple(
                identify_focus_areas(profile.progress_metrics, profile.learning_goals)
            ),
            motivational_message=motivational_message(profile, history, self._rng),
            recommended_personas=tuple(
                self._personas.recommend_personas(profile.learning_goals)
            ),
        )

        logger.info(
            "session_planned",
            user_id=user_id,
            topic=topic.topic,
            trend=trend.trend.value,
            length_minutes=plan.session_length_minutes,
            personas=[rec.persona_id for rec in plan.recommended_personas],
        )
        return plan
