# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enums, weights and static tables for session planning."""

from enum import Enum

from src.models import LanguageLevel, LearningGoal


class PerformanceTrend(str, Enum):
    """Direction of learner performance over time."""

    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


class AdjustmentStrength(str, Enum):
    """How strong a difficulty change is."""

    MINOR = "minor"
    MODERATE = "moderate"
    MAJOR = "major"


class PromptType(str, Enum):
    """Kind of conversational nudge."""

    CONTINUATION = "continuation"
    ENCOURAGEMENT = "encouragement"


class PromptUrgency(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# =============================================================================
# Topic selection
# =============================================================================

class TopicWeights:
    """Weights of the four topic scoring sources (sum to 1)."""

    PERFORMANCE = 0.4
    TIME_OF_DAY = 0.3
    ENGAGEMENT = 0.2
    PREFERENCE = 0.1

    MAX_CONFIDENCE = 0.95
    FALLBACK_CONFIDENCE = 0.6
    FALLBACK_DURATION_MINUTES = 15


class TopicEngagementThresholds:
    """Engagement bounds that narrow or widen the candidate topic set."""

    LOW = 30
    HIGH = 70


TIME_OF_DAY_TOPICS: dict[str, tuple[str, ...]] = {
    "morning": ("Daily Routines", "Work and Career", "Health and Fitness", "News and Current Events"),
    "afternoon": ("Hobbies and Interests", "Travel Experiences", "Food and Cooking", "Technology"),
    "evening": ("Entertainment", "Family and Friends", "Books and Movies", "Personal Reflection"),
}

# Under low engagement only preferred topics containing one of these survive.
EASY_TOPIC_MARKERS = ("hobbies", "entertainment", "food", "travel")

CHALLENGING_TOPICS = ("Philosophy", "Science", "Politics", "Abstract Concepts")

FALLBACK_TOPICS: dict[LanguageLevel, tuple[str, ...]] = {
    LanguageLevel.BEGINNER: ("Daily Routines", "Family and Friends", "Food and Drinks", "Weather"),
    LanguageLevel.ELEMENTARY: ("Hobbies", "Shopping", "Transportation", "Health"),
    LanguageLevel.INTERMEDIATE: (
        "Travel Experiences", "Hobbies and Interests", "Work and Career", "Current Events",
    ),
    LanguageLevel.UPPER_INTERMEDIATE: (
        "Cultural Topics", "Social Issues", "Technology", "Education",
    ),
    LanguageLevel.ADVANCED: (
        "Cultural Differences", "Technology and Society", "Environmental Issues",
        "Philosophy and Ethics",
    ),
    LanguageLevel.PROFICIENT: (
        "Complex Debates", "Abstract Concepts", "Professional Topics", "Academic Discussions",
    ),
}

TOPIC_DURATION_MINUTES: dict[LanguageLevel, int] = {
    LanguageLevel.BEGINNER: 10,
    LanguageLevel.ELEMENTARY: 12,
    LanguageLevel.INTERMEDIATE: 15,
    LanguageLevel.UPPER_INTERMEDIATE: 18,
    LanguageLevel.ADVANCED: 20,
    LanguageLevel.PROFICIENT: 25,
}


# =============================================================================
# Difficulty and trends
# =============================================================================

class DifficultyThresholds:
    """Struggle, fatigue and turn-trend thresholds."""

    STRUGGLE_SCORE = 60.0
    MAX_STRUGGLE_AREAS = 2
    STRUGGLE_CATEGORIES = ("pronunciation", "vocabulary")

    LOW_FATIGUE = 0.5
    HIGH_FATIGUE = 0.7
    FATIGUE_HORIZON_SECONDS = 3600.0

    MIN_TURNS_FOR_TREND = 3
    TURN_TREND_DELTA = 0.1
    DEFAULT_TURN_CONFIDENCE = 0.5


class TrendThresholds:
    """Multi-session trend classification."""

    MIN_SESSIONS = 2
    MIN_SCORES_FOR_CONFIDENCE = 3
    SCORE_DELTA = 5.0
    VARIANCE_SCALE = 1000.0
    MIN_CONFIDENCE = 0.3
    MAX_CONFIDENCE = 0.95
    DEFAULT_CONFIDENCE = 0.5

    WEEK_DAYS = 7
    MONTH_DAYS = 30


BASELINE_RECOMMENDATION = "Continue practicing regularly to establish performance baseline"

TREND_RECOMMENDATIONS: dict[PerformanceTrend, tuple[str, ...]] = {
    PerformanceTrend.IMPROVING: (
        "Great progress! Consider increasing conversation difficulty",
        "Try practicing with different tutor personalities",
        "Explore more complex topics to challenge yourself",
    ),
    PerformanceTrend.DECLINING: (
        "Consider reviewing recent feedback and focusing on problem areas",
        "Try shorter, more focused practice sessions",
        "Work with a supportive tutor for encouragement",
    ),
    PerformanceTrend.STABLE: (
        "Maintain a consistent practice schedule",
        "Try varying conversation topics for broader exposure",
        "Set specific learning goals for upcoming sessions",
    ),
}


# =============================================================================
# Continuation and stall prompts
# =============================================================================

class StallThresholds:
    """When a stalled conversation needs a nudge."""

    SILENCE_SECONDS = 10
    LOW_ENGAGEMENT = 30


SILENCE_PROMPTS = (
    "I'm here when you're ready to continue. Take your time!",
    "No rush! What would you like to talk about?",
    "I'm listening. Feel free to share your thoughts.",
    "Would you like to try a different topic or continue with our current conversation?",
)

ENGAGEMENT_PROMPTS = (
    "I notice you might be finding this challenging. Would you like to try something different?",
    "Let's make this more interesting! What topics do you enjoy talking about?",
    "How are you feeling about our conversation so far? We can adjust if needed.",
    "Would you prefer to practice with a different type of conversation?",
)

FRUSTRATION_SUPPORT_PROMPTS = (
    "You're doing great! Language learning takes time, and every mistake is progress.",
    "I can sense this might be frustrating. Remember, making errors is part of learning!",
    "Let's take it step by step. You're improving with each conversation.",
    "Don't worry about perfection. Focus on communication, you're doing well!",
)

CONTINUATION_TEMPLATE = "That's interesting! Can you tell me more about {topic}?"


# =============================================================================
# Session recommendations
# =============================================================================

class SessionLengthRules:
    """Session length in minutes."""

    PLANNED_MINUTES = 20.0
    RECENT_SESSIONS = 5
    HIGH_COMPLETION = 0.9
    LOW_COMPLETION = 0.6
    STEP_MINUTES = 5
    MIN_MINUTES = 10
    MAX_MINUTES = 45


BASE_SESSION_MINUTES: dict[LanguageLevel, int] = {
    LanguageLevel.BEGINNER: 10,
    LanguageLevel.ELEMENTARY: 15,
    LanguageLevel.INTERMEDIATE: 20,
    LanguageLevel.UPPER_INTERMEDIATE: 25,
    LanguageLevel.ADVANCED: 30,
    LanguageLevel.PROFICIENT: 35,
}

# (progress attribute, threshold, goal) checked in order.
FOCUS_AREA_RULES: tuple[tuple[str, float, LearningGoal], ...] = (
    ("grammar_progress", 0.7, LearningGoal.GRAMMAR_ACCURACY),
    ("fluency_progress", 0.7, LearningGoal.CONVERSATION_FLUENCY),
    ("vocabulary_growth", 0.6, LearningGoal.VOCABULARY_EXPANSION),
    ("confidence_level", 0.6, LearningGoal.CONFIDENCE_BUILDING),
)
MAX_FOCUS_AREAS = 3
GOAL_FOCUS_AREAS = 2

MOTIVATIONAL_MESSAGES = (
    "Ready to continue your language journey? Let's make today's session count!",
    "Your consistency is paying off! Time for another great practice session.",
    "Every conversation brings you closer to fluency. Let's dive in!",
    "You're making excellent progress! Ready to challenge yourself today?",
    "Practice makes perfect, and you're doing amazing! Let's continue.",
)
STRONG_SCORE = 80.0
STREAK_CELEBRATION_DAYS = 5
