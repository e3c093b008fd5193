# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Coordination state and results.

CoordinationState is owned by the caller, typically in a mapping of
session id to state. Coordinator operations never mutate a state; they
return a new one with ``dataclasses.replace``.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime
from types import MappingProxyType

from src.core.coordination.constants import (
    CollaborationMode,
    CollaborationRole,
    CoordinationAction,
    CoordinationMode,
    TransitionStyle,
)
from src.models import LearningGoal


@dataclass(frozen=True)
class TransitionRecord:
    """One persona handoff in a session."""

    from_persona: str
    to_persona: str
    reason: str
    style: TransitionStyle
    timestamp: datetime


@dataclass(frozen=True)
class CoordinationState:
    """Which personas run a session and how.

    Attributes:
        session_id: Session identifier.
        primary_persona: Persona currently speaking.
        supporting_personas: Personas available for handoff or collaboration.
        mode: How personas share the session.
        session_goals: Goals the session is working towards.
        transition_triggers: Conditions that prompt a coordination check.
        history: Past handoffs, oldest first.
    """

    session_id: str
    primary_persona: str
    supporting_personas: tuple[str, ...] = ()
    mode: CoordinationMode = CoordinationMode.SEQUENTIAL
    session_goals: tuple[LearningGoal, ...] = ()
    transition_triggers: tuple[str, ...] = ()
    history: tuple[TransitionRecord, ...] = ()

    def with_primary(self, persona_id: str, record: TransitionRecord) -> "CoordinationState":
        """New state with ``persona_id`` speaking and the old primary in support."""
        supporting = (self.primary_persona,) + tuple(
            p for p in self.supporting_personas
            if p not in (persona_id, self.primary_persona)
        )
        return replace(
            self,
            primary_persona=persona_id,
            supporting_personas=supporting,
            history=self.history + (record,),
        )


@dataclass(frozen=True)
class CoordinationDecision:
    """Result of a coordination check.

    Attributes:
        action: maintain, transition or collaborate.
        current_persona: Persona speaking when the check ran.
        target_persona: Persona to hand over to or collaborate with.
        reason: Human-readable explanation.
        engagement: Engagement score the decision was based on.
        unmet_goals: Goals the decision tried to address.
    """

    action: CoordinationAction
    current_persona: str
    reason: str
    engagement: float
    target_persona: str | None = None
    unmet_goals: tuple[LearningGoal, ...] = ()


@dataclass(frozen=True)
class CoordinationResult:
    """Either a decision or an explicit failure (unknown session)."""

    success: bool
    decision: CoordinationDecision | None = None
    error: str | None = None

    @classmethod
    def ok(cls, decision: CoordinationDecision) -> "CoordinationResult":
        return cls(success=True, decision=decision)

    @classmethod
    def failure(cls, error: str) -> "CoordinationResult":
        return cls(success=False, error=error)


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of a persona handoff.

    Attributes:
        success: Whether the handoff happened.
        transition_message: What the outgoing persona says (may be empty
            for smooth handoffs without a bridge phrase).
        new_persona_introduction: What the incoming persona says first.
        state: Updated coordination state on success.
        error: Failure reason otherwise.
    """

    success: bool
    transition_message: str = ""
    new_persona_introduction: str = ""
    state: CoordinationState | None = None
    error: str | None = None


@dataclass(frozen=True)
class CollaborationStep:
    persona_id: str
    action: str


@dataclass(frozen=True)
class CollaborationPlan:
    """Roles and turn order for personas working together."""

    mode: CollaborationMode
    roles: Mapping[str, CollaborationRole] = field(default_factory=dict)
    sequence: tuple[CollaborationStep, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "roles", MappingProxyType(dict(self.roles)))


@dataclass(frozen=True)
class CollaborationResult:
    success: bool
    plan: CollaborationPlan | None = None
    instructions: str = ""
    state: CoordinationState | None = None
    error: str | None = None
