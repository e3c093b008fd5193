# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Orchestration facade over the decision core.

Architecture:
    caller -> TutoringDecisionService -> engagement / planning / coordination
                     |
               LearnerStore (profiles, session history)
                     |
               TextGenerator (optional, with rule-based fallback)

Usage:
    from src.core.orchestration import InMemoryLearnerStore, TutoringDecisionService

    service = TutoringDecisionService(InMemoryLearnerStore([profile]), PersonaManager())
    plan = service.plan_session(profile.user_id)
"""

from src.core.orchestration.service import SessionPlan, TurnDecision, TutoringDecisionService
from src.core.orchestration.stores import (
    InMemoryLearnerStore,
    LearnerNotFoundError,
    LearnerStore,
)

__all__ = [
    # Service
    "TutoringDecisionService",
    "TurnDecision",
    "SessionPlan",
    # Store
    "LearnerStore",
    "InMemoryLearnerStore",
    "LearnerNotFoundError",
]
