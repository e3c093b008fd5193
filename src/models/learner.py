# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Learner profile models.

Profiles are supplied by the learner store and are read-only inputs to
every decision function.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class LanguageLevel(str, Enum):
    """Proficiency levels, totally ordered from beginner to proficient."""

    BEGINNER = "beginner"
    ELEMENTARY = "elementary"
    INTERMEDIATE = "intermediate"
    UPPER_INTERMEDIATE = "upper_intermediate"
    ADVANCED = "advanced"
    PROFICIENT = "proficient"

    @classmethod
    def ordered(cls) -> list["LanguageLevel"]:
        return list(cls)

    @property
    def rank(self) -> int:
        return LanguageLevel.ordered().index(self)

    def next_level(self) -> "LanguageLevel":
        """One level up, saturating at proficient."""
        levels = LanguageLevel.ordered()
        return levels[min(self.rank + 1, len(levels) - 1)]

    def previous_level(self) -> "LanguageLevel":
        """One level down, saturating at beginner."""
        levels = LanguageLevel.ordered()
        return levels[max(self.rank - 1, 0)]

    def distance_to(self, other: "LanguageLevel") -> int:
        return abs(self.rank - other.rank)


class LearningGoal(str, Enum):
    """What the learner wants to improve."""

    CONVERSATION_FLUENCY = "conversation_fluency"
    GRAMMAR_ACCURACY = "grammar_accuracy"
    PRONUNCIATION_IMPROVEMENT = "pronunciation_improvement"
    VOCABULARY_EXPANSION = "vocabulary_expansion"
    CONFIDENCE_BUILDING = "confidence_building"


class ProgressMetrics(BaseModel):
    """Long-running progress figures, updated externally after each session.

    Ratios are in [0, 1]; counts are non-negative.
    """

    model_config = ConfigDict(frozen=True)

    grammar_progress: float = Field(default=0.0, ge=0.0, le=1.0)
    fluency_progress: float = Field(default=0.0, ge=0.0, le=1.0)
    vocabulary_growth: float = Field(default=0.0, ge=0.0, le=1.0)
    confidence_level: float = Field(default=0.0, ge=0.0, le=1.0)
    sessions_completed: int = Field(default=0, ge=0)
    streak_days: int = Field(default=0, ge=0)


class UserProfile(BaseModel):
    """A learner's profile.

    Attributes:
        user_id: Learner identifier.
        current_level: Current proficiency level.
        learning_goals: Stated goals, in the learner's order of importance.
        preferred_topics: Conversation topics, most preferred first.
        preferred_personas: Tutor persona ids, most preferred first.
        target_language: Language being learned.
        native_language: Learner's first language.
        progress_metrics: Long-running progress figures.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(..., min_length=1)
    current_level: LanguageLevel = LanguageLevel.BEGINNER
    learning_goals: tuple[LearningGoal, ...] = ()
    preferred_topics: tuple[str, ...] = ()
    preferred_personas: tuple[str, ...] = ()
    target_language: str = "English"
    native_language: str | None = None
    progress_metrics: ProgressMetrics = Field(default_factory=ProgressMetrics)

    @classmethod
    def create_default(cls, user_id: str) -> "UserProfile":
        """Profile used when the store has nothing for this learner."""
        return cls(
            user_id=user_id,
            current_level=LanguageLevel.BEGINNER,
            learning_goals=(LearningGoal.CONVERSATION_FLUENCY,),
        )
