# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enums, thresholds and lexicons for engagement analysis.

The numeric weights below are hand-tuned and calibrated against existing
tutoring behaviour. Change them only together with the tests that pin
the resulting scores.
"""

import re
from enum import Enum


class EmotionalTone(str, Enum):
    """Coarse sentiment of the learner's turns."""

    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class ParticipationLevel(str, Enum):
    """How actively the learner is taking part."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RiskLevel(str, Enum):
    """How urgently the learner needs an intervention."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class InterventionUrgency(str, Enum):
    """Urgency attached to an engagement analysis."""

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ActionType(str, Enum):
    """Kinds of corrective action the tutor can take."""

    TOPIC_CHANGE = "topic_change"
    DIFFICULTY_ADJUST = "difficulty_adjust"
    ENCOURAGEMENT = "encouragement"
    BREAK_SUGGESTION = "break_suggestion"
    AGENT_SWITCH = "agent_switch"


class ActionPriority(str, Enum):
    """Priority of an engagement action."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return PRIORITY_RANK[self]


PRIORITY_RANK = {
    ActionPriority.LOW: 1,
    ActionPriority.MEDIUM: 2,
    ActionPriority.HIGH: 3,
}


class EngagementTrend(str, Enum):
    """Direction of engagement between two monitoring windows."""

    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


# =============================================================================
# Thresholds
# =============================================================================

class EngagementThresholds:
    """Score thresholds on the 0-100 engagement scale."""

    HIGH = 70
    MEDIUM = 40
    LOW = 25
    CRITICAL = 15

    # Below this the turn-level rules recommend encouragement.
    ENCOURAGEMENT = MEDIUM

    # Risk escalates to high above this many frustration indicators.
    MAX_FRUSTRATION_INDICATORS = 2


class ResponseTimeThresholds:
    """Agent-to-learner response latency thresholds, in milliseconds."""

    FAST = 3000
    SLOW = 15000
    DEFAULT = 5000.0


class ScoreWeights:
    """Additive adjustments applied to the baseline engagement score."""

    BASELINE = 50.0
    FAST_RESPONSE = 20.0
    SLOW_RESPONSE = -20.0
    COMPLEXITY = 25.0
    POSITIVE_TONE = 15.0
    NEGATIVE_TONE = -25.0
    HIGH_PARTICIPATION = 20.0
    LOW_PARTICIPATION = -20.0
    PER_FRUSTRATION_INDICATOR = -10.0
    CONFIDENCE = 30.0
    CONFIDENCE_PIVOT = 0.5


class FeatureLimits:
    """Normalisation caps and participation thresholds for feature extraction."""

    WORD_COUNT_CAP = 20
    WORD_LENGTH_CAP = 6
    DEFAULT_CONFIDENCE = 0.5

    HIGH_MESSAGES_PER_MINUTE = 2
    HIGH_WORDS_PER_MESSAGE = 8
    MEDIUM_MESSAGES_PER_MINUTE = 1
    MEDIUM_WORDS_PER_MESSAGE = 4

    SIMPLE_COMPLEXITY = 0.3
    LOW_CONFIDENCE = 0.5


class PatternThresholds:
    """Ratios and sample sizes for disengagement pattern detection."""

    MIN_USER_TURNS = 3
    MIN_TURNS_FOR_LATENCY = 4
    MIN_LATENCY_SAMPLES = 2
    MIN_CONFIDENCE_SAMPLES = 3

    VERBOSITY_RATIO = 0.7
    LATENCY_RATIO = 1.5
    CONFIDENCE_RATIO = 0.8

    REPETITION_WINDOW = 5
    SHORT_RESPONSE_WORDS = 2
    REPETITION_SHARE = 0.6
    REPETITION_MIN_COUNT = 3


class MonitoringDefaults:
    """Real-time monitoring window and trend sensitivity."""

    WINDOW_SECONDS = 60
    TREND_DELTA = 10.0


# =============================================================================
# Lexicons
# =============================================================================

POSITIVE_KEYWORDS = (
    "good", "great", "excellent", "love", "like", "enjoy", "happy", "wonderful",
)

NEGATIVE_KEYWORDS = (
    "bad", "terrible", "hate", "dislike", "sad", "angry", "frustrated", "difficult",
)

# Label -> pattern, matched at most once per turn.
FRUSTRATION_PATTERNS: dict[str, re.Pattern[str]] = {
    "comprehension_difficulty": re.compile(r"don'?t understand", re.IGNORECASE),
    "difficulty_complaint": re.compile(r"too (hard|difficult)", re.IGNORECASE),
    "confusion_expressed": re.compile(r"(confused|lost)", re.IGNORECASE),
    "help_requested": re.compile(r"(help|stuck)", re.IGNORECASE),
    "inability_expressed": re.compile(r"(can'?t|cannot)", re.IGNORECASE),
}

FRUSTRATION_KEYWORDS = (
    "difficult", "hard", "confused", "don't understand", "can't",
    "frustrated", "stuck", "help", "wrong", "mistake", "error",
)


class PatternName(str, Enum):
    """Labels reported in ``EngagementAnalysis.detected_patterns``."""

    SLOW_RESPONSES = "slow_responses"
    SIMPLE_RESPONSES = "simple_responses"
    FRUSTRATION_DETECTED = "frustration_detected"
    LOW_CONFIDENCE = "low_confidence"
    DECREASING_VERBOSITY = "decreasing_verbosity"
    INCREASING_LATENCY = "increasing_latency"
    REPETITIVE_RESPONSES = "repetitive_responses"
    DECLINING_CONFIDENCE = "declining_confidence"
    FRUSTRATION_INDICATORS = "frustration_indicators"
    DECLINING_PERFORMANCE = "declining_performance"


PATTERN_CONFIDENCE = {
    PatternName.DECREASING_VERBOSITY: 0.8,
    PatternName.INCREASING_LATENCY: 0.7,
    PatternName.REPETITIVE_RESPONSES: 0.9,
    PatternName.DECLINING_CONFIDENCE: 0.75,
    PatternName.FRUSTRATION_INDICATORS: 0.85,
}
