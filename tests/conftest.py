# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Conversation builders with controlled timing and confidence
- Sample learner profiles and session histories
- The shipped persona catalog
- A scripted text generator standing in for LiteLLM
"""

import random
from collections.abc import Callable, Mapping, Sequence
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest

from src.core.config.settings import Settings, clear_settings_cache
from src.core.intelligence.generator import GenerationError, GenerationResult
from src.core.personas.manager import PersonaManager
from src.models import (
    ConversationTurn,
    LanguageLevel,
    LearningGoal,
    ProgressMetrics,
    Sender,
    SessionMetrics,
    SessionRecord,
    UserProfile,
)

BASE_TIME = datetime(2025, 3, 10, 9, 0, tzinfo=timezone.utc)

ConversationBuilder = Callable[..., list[ConversationTurn]]


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (several components wired together)"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _fresh_settings() -> None:
    """Make every test read settings from a clean cache."""
    clear_settings_cache()


@pytest.fixture
def test_settings() -> Settings:
    """Settings for tests, with generation enabled."""
    return Settings(environment="test", log_level="DEBUG")


# =============================================================================
# Conversation Fixtures
# =============================================================================


def _expand(value: Any, count: int) -> list[Any]:
    if isinstance(value, (list, tuple)):
        assert len(value) == count, "per-turn values must match the message count"
        return list(value)
    return [value] * count


def build_conversation(
    user_messages: Sequence[str],
    latency_sec: float | Sequence[float] = 2.0,
    confidence: float | None | Sequence[float | None] = 0.9,
    gap_sec: float = 5.0,
    start: datetime = BASE_TIME,
    agent_message: str = "Tell me more about that.",
) -> list[ConversationTurn]:
    """Alternate agent and learner turns.

    Each exchange is an agent turn followed by the learner's reply after
    ``latency_sec``; the next agent turn comes ``gap_sec`` after the reply.
    """
    count = len(user_messages)
    latencies = _expand(latency_sec, count)
    confidences = _expand(confidence, count)

    turns: list[ConversationTurn] = []
    moment = start
    for index, (message, latency, score) in enumerate(zip(user_messages, latencies, confidences)):
        turns.append(
            ConversationTurn(
                id=f"agent-{index}",
                sender=Sender.AGENT,
                content=agent_message,
                timestamp=moment,
            )
        )
        moment += timedelta(seconds=latency)
        turns.append(
            ConversationTurn(
                id=f"user-{index}",
                sender=Sender.USER,
                content=message,
                timestamp=moment,
                confidence=score,
            )
        )
        moment += timedelta(seconds=gap_sec)
    return turns


@pytest.fixture
def base_time() -> datetime:
    return BASE_TIME


@pytest.fixture
def conversation() -> ConversationBuilder:
    """Builder for agent/learner conversations (see build_conversation)."""
    return build_conversation


@pytest.fixture
def engaged_turns() -> list[ConversationTurn]:
    """Four long, positive, confident learner replies with quick responses."""
    return build_conversation(
        [
            "I really love cooking with my family on weekends because everyone brings a new recipe to try together",
            "Last summer we visited the coast and enjoyed wonderful seafood at a small harbour restaurant nearby",
            "My favourite dish is probably lasagne since my grandmother taught me how to prepare it properly",
            "I would like to learn more Italian recipes and maybe travel there next year with close friends",
        ],
        latency_sec=2.0,
        confidence=0.9,
    )


@pytest.fixture
def disengaged_turns() -> list[ConversationTurn]:
    """Three one-word learner replies, slow and low confidence."""
    return build_conversation(
        ["yes", "yes", "yes"],
        latency_sec=20.0,
        confidence=0.4,
    )


# =============================================================================
# Learner Fixtures
# =============================================================================


@pytest.fixture
def beginner_profile() -> UserProfile:
    return UserProfile(
        user_id="learner-beginner",
        current_level=LanguageLevel.BEGINNER,
        learning_goals=(LearningGoal.CONVERSATION_FLUENCY,),
        preferred_topics=("Food and Cooking", "Travel"),
    )


@pytest.fixture
def intermediate_profile() -> UserProfile:
    return UserProfile(
        user_id="learner-intermediate",
        current_level=LanguageLevel.INTERMEDIATE,
        learning_goals=(
            LearningGoal.GRAMMAR_ACCURACY,
            LearningGoal.CONVERSATION_FLUENCY,
        ),
        preferred_topics=("Technology", "Hobbies and Interests"),
        progress_metrics=ProgressMetrics(
            grammar_progress=0.8,
            fluency_progress=0.75,
            vocabulary_growth=0.7,
            confidence_level=0.65,
            sessions_completed=12,
            streak_days=3,
        ),
    )


def make_session(
    session_id: str,
    topic: str,
    start_time: datetime,
    performance: float,
    duration_minutes: float = 20.0,
    error_categories: tuple[str, ...] = (),
) -> SessionRecord:
    """Session whose grammar and fluency both equal ``performance``."""
    return SessionRecord(
        session_id=session_id,
        topic=topic,
        persona_id="friendly_tutor",
        start_time=start_time,
        metrics=SessionMetrics(
            duration=duration_minutes * 60,
            words_spoken=300,
            grammar_accuracy=performance,
            fluency_score=performance,
            error_categories=error_categories,
        ),
    )


@pytest.fixture
def session_factory() -> Callable[..., SessionRecord]:
    return make_session


@pytest.fixture
def improving_history(base_time: datetime) -> list[SessionRecord]:
    """Four sessions over the last week scoring 65, 72, 78, 85."""
    topics = ("Weather", "Shopping", "Daily Routines", "Sports")
    scores = (65.0, 72.0, 78.0, 85.0)
    return [
        make_session(f"s-{i}", topic, base_time - timedelta(days=6 - i * 2), score)
        for i, (topic, score) in enumerate(zip(topics, scores))
    ]


@pytest.fixture
def declining_history(base_time: datetime) -> list[SessionRecord]:
    """Four sessions scoring 85, 80, 62, 55."""
    topics = ("Weather", "Shopping", "Daily Routines", "Sports")
    scores = (85.0, 80.0, 62.0, 55.0)
    return [
        make_session(f"s-{i}", topic, base_time - timedelta(days=6 - i * 2), score)
        for i, (topic, score) in enumerate(zip(topics, scores))
    ]


# =============================================================================
# Persona Fixtures
# =============================================================================


@pytest.fixture
def personas_dir() -> Path:
    """The shipped personas configuration directory."""
    return Path(__file__).parent.parent / "config" / "personas"


@pytest.fixture
def persona_manager(personas_dir: Path) -> PersonaManager:
    return PersonaManager(personas_dir=personas_dir)


# =============================================================================
# Generation Fixtures
# =============================================================================


class FakeGenerator:
    """Scripted TextGenerator.

    Returns the queued responses in order; an Exception instance in the
    queue is raised instead of returned.
    """

    def __init__(self, *responses: str | Exception) -> None:
        self._responses = list(responses)
        self.calls: list[tuple[str, str, dict[str, Any]]] = []

    def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        context: Mapping[str, Any],
    ) -> GenerationResult:
        self.calls.append((system_prompt, user_prompt, dict(context)))
        if not self._responses:
            raise GenerationError("No scripted response left", model="fake")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return GenerationResult(content=response, model="fake")


@pytest.fixture
def fake_generator() -> Callable[..., FakeGenerator]:
    """Factory: fake_generator("reply", GenerationError("boom"), ...)."""
    return FakeGenerator


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)
