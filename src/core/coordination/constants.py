# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Persona coordination constants."""

from enum import Enum

from src.models import LanguageLevel, LearningGoal


class CoordinationMode(str, Enum):
    """How personas share a session."""

    SEQUENTIAL = "sequential"
    COLLABORATIVE = "collaborative"
    ADAPTIVE = "adaptive"


class CoordinationAction(str, Enum):
    """Outcome of a coordination check."""

    MAINTAIN = "maintain"
    TRANSITION = "transition"
    COLLABORATE = "collaborate"


class TransitionStyle(str, Enum):
    """Whether a handoff is announced to the learner."""

    SMOOTH = "smooth"
    EXPLICIT = "explicit"


class CollaborationMode(str, Enum):
    """Role templates for two or more personas working together."""

    SPECIALIZED_SUPPORT = "specialized_support"
    PEER_REVIEW = "peer_review"


class CollaborationRole(str, Enum):
    MAIN_TUTOR = "main_tutor"
    SPECIALIST = "specialist"
    PRESENTER = "presenter"
    REVIEWER = "reviewer"


class CoordinationThresholds:
    """Engagement and metric cut-offs for coordination decisions."""

    # Engagement at or above this with low risk keeps the current persona
    PERFORMING_WELL = 70
    # Session grammar/fluency (0-100) below this counts as an unmet goal
    GOAL_GAP = 70


# Personas referenced by the selection rules
FRIENDLY_TUTOR = "friendly_tutor"
STRICT_TEACHER = "strict_teacher"
CONVERSATION_PARTNER = "conversation_partner"
PRONUNCIATION_COACH = "pronunciation_coach"

LEVEL_DEFAULT_PERSONAS: dict[LanguageLevel, str] = {
    LanguageLevel.BEGINNER: FRIENDLY_TUTOR,
    LanguageLevel.ELEMENTARY: FRIENDLY_TUTOR,
    LanguageLevel.INTERMEDIATE: CONVERSATION_PARTNER,
    LanguageLevel.UPPER_INTERMEDIATE: STRICT_TEACHER,
    LanguageLevel.ADVANCED: STRICT_TEACHER,
    LanguageLevel.PROFICIENT: CONVERSATION_PARTNER,
}

NOVICE_LEVELS = frozenset({LanguageLevel.BEGINNER, LanguageLevel.ELEMENTARY})

DEFAULT_SESSION_GOALS: tuple[LearningGoal, ...] = (LearningGoal.CONVERSATION_FLUENCY,)

DEFAULT_TRANSITION_TRIGGERS: tuple[str, ...] = (
    "engagement_below_70",
    "frustration_detected",
    "goal_not_progressing",
)

MAX_SUPPORTING_PERSONAS = 2
