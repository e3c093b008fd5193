# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Input value types shared by every decision component.

- conversation: conversation turns
- learner: learner profile, levels, goals and progress
- session: per-session metrics and session history records
"""

from src.models.conversation import ConversationTurn, Sender
from src.models.learner import (
    LanguageLevel,
    LearningGoal,
    ProgressMetrics,
    UserProfile,
)
from src.models.session import SessionMetrics, SessionRecord, Timeframe

__all__ = [
    "ConversationTurn",
    "Sender",
    "LanguageLevel",
    "LearningGoal",
    "ProgressMetrics",
    "UserProfile",
    "SessionMetrics",
    "SessionRecord",
    "Timeframe",
]
