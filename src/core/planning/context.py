# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Planning results."""

from dataclasses import dataclass
from typing import Any

from src.core.planning.constants import (
    AdjustmentStrength,
    PerformanceTrend,
    PromptType,
    PromptUrgency,
)
from src.models import LanguageLevel


@dataclass(frozen=True)
class TopicRecommendation:
    """Suggested next conversation topic.

    Attributes:
        topic: Topic name.
        difficulty: Level the topic should be pitched at.
        reason: Why it was chosen.
        confidence: Confidence in the choice (0-1).
        estimated_duration_minutes: Expected time on the topic.
    """

    topic: str
    difficulty: LanguageLevel
    reason: str
    confidence: float
    estimated_duration_minutes: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "topic": self.topic,
            "difficulty": self.difficulty.value,
            "reason": self.reason,
            "confidence": self.confidence,
            "estimated_duration_minutes": self.estimated_duration_minutes,
        }


@dataclass(frozen=True)
class DifficultyAdjustment:
    """Recommended change (or no change) in conversation difficulty."""

    current_difficulty: LanguageLevel
    recommended_difficulty: LanguageLevel
    reason: str
    strength: AdjustmentStrength

    @property
    def level_change(self) -> int:
        """Signed number of levels moved (+1 harder, -1 easier)."""
        return self.recommended_difficulty.rank - self.current_difficulty.rank

    def to_dict(self) -> dict[str, Any]:
        return {
            "current_difficulty": self.current_difficulty.value,
            "recommended_difficulty": self.recommended_difficulty.value,
            "reason": self.reason,
            "strength": self.strength.value,
        }


@dataclass(frozen=True)
class TrendAnalysis:
    """Multi-session performance trend."""

    trend: PerformanceTrend
    confidence: float
    recommendations: tuple[str, ...]
    session_count: int = 0


@dataclass(frozen=True)
class ConversationPrompt:
    """A single nudge the tutor can say to keep the conversation going."""

    type: PromptType
    message: str
    context: str
    urgency: PromptUrgency
