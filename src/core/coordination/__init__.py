# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Multi-persona coordination.

Usage:
    from src.core.coordination import PersonaCoordinator, TransitionStyle

    coordinator = PersonaCoordinator(persona_manager)
    states = {"session-1": coordinator.initialize("session-1", profile)}
    result = coordinator.coordinate(states, "session-1", turns, metrics, profile)
    if result.success and result.decision.action == CoordinationAction.TRANSITION:
        handoff = coordinator.execute_transition(
            states, "session-1", result.decision.target_persona,
            TransitionStyle.EXPLICIT, result.decision.reason,
        )
        states["session-1"] = handoff.state
"""

from src.core.coordination.constants import (
    CollaborationMode,
    CollaborationRole,
    CoordinationAction,
    CoordinationMode,
    CoordinationThresholds,
    TransitionStyle,
)
from src.core.coordination.coordinator import PersonaCoordinator, unmet_goals
from src.core.coordination.state import (
    CollaborationPlan,
    CollaborationResult,
    CollaborationStep,
    CoordinationDecision,
    CoordinationResult,
    CoordinationState,
    TransitionRecord,
    TransitionResult,
)

__all__ = [
    # Coordinator
    "PersonaCoordinator",
    "unmet_goals",
    # State and results
    "CoordinationState",
    "CoordinationDecision",
    "CoordinationResult",
    "TransitionRecord",
    "TransitionResult",
    "CollaborationPlan",
    "CollaborationStep",
    "CollaborationResult",
    # Enums
    "CollaborationMode",
    "CollaborationRole",
    "CoordinationAction",
    "CoordinationMode",
    "CoordinationThresholds",
    "TransitionStyle",
]
