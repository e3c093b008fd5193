# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Autonomous session planning.

Components:
- topics: weighted topic selection with a level-based fallback
- difficulty: one-level-per-call difficulty adjustment
- trends: multi-session performance trend analysis
- continuation: templated nudges for stalled conversations
- session: session length, focus areas and motivational messages
"""

from src.core.planning.constants import (
    AdjustmentStrength,
    PerformanceTrend,
    PromptType,
    PromptUrgency,
)
from src.core.planning.context import (
    ConversationPrompt,
    DifficultyAdjustment,
    TopicRecommendation,
    TrendAnalysis,
)
from src.core.planning.continuation import continuation_prompt, detect_stall_and_respond
from src.core.planning.difficulty import adjust_difficulty
from src.core.planning.session import (
    identify_focus_areas,
    motivational_message,
    recommend_session_length,
)
from src.core.planning.topics import estimate_topic_duration, fallback_topic, select_topic
from src.core.planning.trends import analyze_trend

__all__ = [
    # Operations
    "select_topic",
    "fallback_topic",
    "estimate_topic_duration",
    "adjust_difficulty",
    "analyze_trend",
    "continuation_prompt",
    "detect_stall_and_respond",
    "recommend_session_length",
    "identify_focus_areas",
    "motivational_message",
    # Types
    "ConversationPrompt",
    "DifficultyAdjustment",
    "TopicRecommendation",
    "TrendAnalysis",
    "AdjustmentStrength",
    "PerformanceTrend",
    "PromptType",
    "PromptUrgency",
]
