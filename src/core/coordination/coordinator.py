# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Multi-persona coordinator.

Decides which tutor persona speaks, when to hand over to another one and
how two personas split a session. The coordinator reads the persona
catalog but keeps no per-session state of its own: callers pass the
mapping of session id to CoordinationState in and store whatever state
comes back.

Decision procedure for ``coordinate``:

1. Engagement at or above 70 with low risk: maintain.
2. Otherwise collect the unmet goals (weak grammar or fluency in the
   session metrics, frustration or low confidence in the analysis; the
   session goals when none of these apply).
3. Score every other persona by how many unmet goals it specialises in.
   A single best persona (ties broken by level suitability) means
   transition; otherwise collaborate with the first candidate, or
   maintain when the catalog has no other persona.

Example:
    >>> coordinator = PersonaCoordinator(PersonaManager())
    >>> state = coordinator.initialize("session-1", profile)
    >>> states = {state.session_id: state}
    >>> result = coordinator.coordinate(states, "session-1", turns, metrics, profile)
    >>> result.decision.action
    <CoordinationAction.MAINTAIN: 'maintain'>
"""

from collections.abc import Mapping, Sequence
from dataclasses import replace
from datetime import datetime

from src.core.coordination.constants import (
    DEFAULT_SESSION_GOALS,
    DEFAULT_TRANSITION_TRIGGERS,
    FRIENDLY_TUTOR,
    LEVEL_DEFAULT_PERSONAS,
    MAX_SUPPORTING_PERSONAS,
    NOVICE_LEVELS,
    PRONUNCIATION_COACH,
    CollaborationMode,
    CollaborationRole,
    CoordinationAction,
    CoordinationMode,
    CoordinationThresholds,
    TransitionStyle,
)
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
from src.core.engagement import EngagementAnalysis, PatternName, RiskLevel, analyze_engagement
from src.core.personas.manager import PersonaManager
from src.core.personas.models import Persona
from src.models import ConversationTurn, LearningGoal, SessionMetrics, UserProfile
from src.utils.datetime import ensure_utc, utc_now
from src.utils.logging import get_logger

logger = get_logger(__name__)

_CONFIDENCE_PATTERNS = frozenset({
    PatternName.FRUSTRATION_DETECTED.value,
    PatternName.FRUSTRATION_INDICATORS.value,
    PatternName.LOW_CONFIDENCE.value,
    PatternName.DECLINING_CONFIDENCE.value,
})


def _no_session(session_id: str) -> str:
    return f"No active session found for '{session_id}'"


def unmet_goals(
    metrics: SessionMetrics | None,
    analysis: EngagementAnalysis,
    session_goals: Sequence[LearningGoal],
) -> tuple[LearningGoal, ...]:
    """Goals the current session is visibly falling short on.

    Falls back to the session goals when nothing specific is lagging.
    """
    goals: list[LearningGoal] = []
    if metrics is not None:
        if metrics.grammar_accuracy < CoordinationThresholds.GOAL_GAP:
            goals.append(LearningGoal.GRAMMAR_ACCURACY)
        if metrics.fluency_score < CoordinationThresholds.GOAL_GAP:
            goals.append(LearningGoal.CONVERSATION_FLUENCY)
    if _CONFIDENCE_PATTERNS.intersection(analysis.detected_patterns):
        goals.append(LearningGoal.CONFIDENCE_BUILDING)
    return tuple(goals) if goals else tuple(session_goals)


class PersonaCoordinator:
    """Stateless coordination rules over a persona catalog."""

    def __init__(self, personas: PersonaManager) -> None:
        self._personas = personas

    # =========================================================================
    # Initialization
    # =========================================================================

    def select_primary_persona(
        self,
        profile: UserProfile,
        session_goals: Sequence[LearningGoal],
        preferred_persona: str | None = None,
    ) -> str:
        """Choose the persona that opens a session.

        Order: explicit preference, the learner's stated preferences, a
        pronunciation goal, novice level, the first goal's specialist, the
        level default and finally the catalog default.
        """
        if preferred_persona and self._personas.has_persona(preferred_persona):
            return preferred_persona

        for persona_id in profile.preferred_personas:
            if self._personas.has_persona(persona_id):
                return persona_id

        if (
            LearningGoal.PRONUNCIATION_IMPROVEMENT in session_goals
            and self._personas.has_persona(PRONUNCIATION_COACH)
        ):
            return PRONUNCIATION_COACH

        if profile.current_level in NOVICE_LEVELS and self._personas.has_persona(FRIENDLY_TUTOR):
            return FRIENDLY_TUTOR

        if session_goals:
            specialists = self._personas.specialists_for(session_goals[0])
            if specialists:
                return specialists[0].id

        level_default = LEVEL_DEFAULT_PERSONAS.get(profile.current_level)
        if level_default and self._personas.has_persona(level_default):
            return level_default

        return self._personas.default_persona_id

    def initialize(
        self,
        session_id: str,
        profile: UserProfile,
        session_goals: Sequence[LearningGoal] | None = None,
        preferred_persona: str | None = None,
    ) -> CoordinationState:
        """Build the opening coordination state for a session.

        Args:
            session_id: Session identifier.
            profile: Learner profile.
            session_goals: Goals for this session; defaults to the
                profile's goals, then to conversation fluency.
            preferred_persona: Persona requested for this session.
        """
        goals = tuple(session_goals or profile.learning_goals or DEFAULT_SESSION_GOALS)
        primary = self.select_primary_persona(profile, goals, preferred_persona)

        supporting: list[str] = []
        primary_specialties = (
            self._personas.get_persona(primary).specialties
            if self._personas.has_persona(primary)
            else []
        )
        for goal in goals:
            if goal in primary_specialties:
                continue
            specialists = self._personas.specialists_for(goal, exclude=(primary,))
            if specialists and specialists[0].id not in supporting:
                supporting.append(specialists[0].id)
        supporting = supporting[:MAX_SUPPORTING_PERSONAS]

        if len(goals) > 2 and supporting:
            mode = CoordinationMode.COLLABORATIVE
        elif supporting:
            mode = CoordinationMode.ADAPTIVE
        else:
            mode = CoordinationMode.SEQUENTIAL

        state = CoordinationState(
            session_id=session_id,
            primary_persona=primary,
            supporting_personas=tuple(supporting),
            mode=mode,
            session_goals=goals,
            transition_triggers=DEFAULT_TRANSITION_TRIGGERS,
        )
        logger.info(
            "coordination_initialized",
            session_id=session_id,
            primary=primary,
            supporting=supporting,
            mode=mode.value,
        )
        return state

    # =========================================================================
    # Decisions
    # =========================================================================

    def _best_candidate(
        self,
        current: str,
        goals: Sequence[LearningGoal],
        profile: UserProfile,
    ) -> tuple[Persona | None, list[Persona]]:
        """Return (unique best persona or None, all top-coverage candidates)."""
        candidates = [p for p in self._personas.list_personas() if p.id != current]
        scored = [(p.coverage(list(goals)), p) for p in candidates]
        best = max((score for score, _ in scored), default=0)
        if best == 0:
            return None, []

        top = [p for score, p in scored if score == best]
        if len(top) == 1:
            return top[0], top

        suited = [p for p in top if p.suits_level(profile.current_level)]
        if len(suited) == 1:
            return suited[0], top
        return None, top

    def _collaborator(self, current: str, top: list[Persona]) -> str | None:
        if top:
            return top[0].id
        default = self._personas.default_persona_id
        if default != current and self._personas.has_persona(default):
            return default
        others = [pid for pid in self._personas.list_persona_ids() if pid != current]
        return others[0] if others else None

    def coordinate(
        self,
        states: Mapping[str, CoordinationState],
        session_id: str,
        turns: Sequence[ConversationTurn],
        session_metrics: SessionMetrics | None,
        profile: UserProfile,
        analysis: EngagementAnalysis | None = None,
    ) -> CoordinationResult:
        """Decide whether to maintain, transition or collaborate.

        Args:
            states: Caller-owned session states.
            session_id: Session to coordinate.
            turns: Conversation so far.
            session_metrics: Current session metrics, if any.
            profile: Learner profile.
            analysis: Precomputed engagement analysis for ``turns``.

        Returns:
            CoordinationResult; a failure when the session is unknown.
        """
        state = states.get(session_id)
        if state is None:
            logger.warning("coordination_unknown_session", session_id=session_id)
            return CoordinationResult.failure(_no_session(session_id))

        if analysis is None:
            duration = session_metrics.duration if session_metrics else None
            analysis = analyze_engagement(turns, profile, duration)
        score = analysis.overall_engagement
        current = state.primary_persona

        if score >= CoordinationThresholds.PERFORMING_WELL and analysis.risk_level == RiskLevel.LOW:
            decision = CoordinationDecision(
                action=CoordinationAction.MAINTAIN,
                current_persona=current,
                reason=f"Current persona is performing well (engagement {score:.0f})",
                engagement=score,
            )
        else:
            goals = unmet_goals(session_metrics, analysis, state.session_goals)
            goal_names = ", ".join(goal.value for goal in goals)
            best, top = self._best_candidate(current, goals, profile)
            target = self._collaborator(current, top) if best is None else None
            if best is not None:
                decision = CoordinationDecision(
                    action=CoordinationAction.TRANSITION,
                    current_persona=current,
                    target_persona=best.id,
                    reason=(
                        f"Low engagement ({score:.0f}); {best.name} specialises in {goal_names}"
                    ),
                    engagement=score,
                    unmet_goals=goals,
                )
            elif target is None:
                decision = CoordinationDecision(
                    action=CoordinationAction.MAINTAIN,
                    current_persona=current,
                    reason=(
                        f"Low engagement ({score:.0f}) but no other persona is available"
                    ),
                    engagement=score,
                    unmet_goals=goals,
                )
            else:
                decision = CoordinationDecision(
                    action=CoordinationAction.COLLABORATE,
                    current_persona=current,
                    target_persona=target,
                    reason=(
                        f"Low engagement ({score:.0f}); no single persona covers "
                        f"{goal_names}, sharing the session"
                    ),
                    engagement=score,
                    unmet_goals=goals,
                )

        logger.debug(
            "coordination_decided",
            session_id=session_id,
            action=decision.action.value,
            current=current,
            target=decision.target_persona,
            engagement=round(score, 1),
        )
        return CoordinationResult.ok(decision)

    # =========================================================================
    # Transitions
    # =========================================================================

    def execute_transition(
        self,
        states: Mapping[str, CoordinationState],
        session_id: str,
        target_persona_id: str,
        style: TransitionStyle,
        reason: str,
        now: datetime | None = None,
    ) -> TransitionResult:
        """Hand the session over to another persona.

        Explicit handoffs announce the change in the outgoing persona's
        voice; smooth ones use its short bridge phrase. Both return the
        incoming persona's introduction.

        Returns:
            TransitionResult carrying the new state, or success=False with
            an error for an unknown session or persona.
        """
        state = states.get(session_id)
        if state is None:
            return TransitionResult(success=False, error=_no_session(session_id))
        if not self._personas.has_persona(target_persona_id):
            return TransitionResult(
                success=False,
                error=f"Persona '{target_persona_id}' not found",
            )
        if target_persona_id == state.primary_persona:
            return TransitionResult(
                success=False,
                error=f"Persona '{target_persona_id}' is already active",
            )

        target = self._personas.get_persona(target_persona_id)
        outgoing = (
            self._personas.get_persona(state.primary_persona)
            if self._personas.has_persona(state.primary_persona)
            else self._personas.get_default_persona()
        )

        if style == TransitionStyle.EXPLICIT:
            message = outgoing.format_response("handoff", target=target.name, reason=reason).strip()
        else:
            message = outgoing.format_response("smooth_handoff")
        introduction = target.format_response("introduction")

        record = TransitionRecord(
            from_persona=state.primary_persona,
            to_persona=target.id,
            reason=reason,
            style=style,
            timestamp=ensure_utc(now) if now is not None else utc_now(),
        )
        new_state = state.with_primary(target.id, record)

        logger.info(
            "persona_transition",
            session_id=session_id,
            from_persona=record.from_persona,
            to_persona=record.to_persona,
            style=style.value,
        )
        return TransitionResult(
            success=True,
            transition_message=message,
            new_persona_introduction=introduction,
            state=new_state,
        )

    # =========================================================================
    # Collaboration
    # =========================================================================

    def plan_collaboration(
        self,
        states: Mapping[str, CoordinationState],
        session_id: str,
        persona_ids: Sequence[str],
        mode: CollaborationMode,
    ) -> CollaborationResult:
        """Assign roles and a three-step sequence to collaborating personas.

        specialized_support: the first persona is main_tutor, the rest are
        specialists. peer_review: the first persona presents, the rest
        review.
        """
        state = states.get(session_id)
        if state is None:
            return CollaborationResult(success=False, error=_no_session(session_id))

        missing = [pid for pid in persona_ids if not self._personas.has_persona(pid)]
        if missing:
            return CollaborationResult(
                success=False,
                error=f"Unknown personas: {', '.join(missing)}",
            )
        if len(set(persona_ids)) < 2:
            return CollaborationResult(
                success=False,
                error="Collaboration needs at least two distinct personas",
            )

        lead, *others = list(dict.fromkeys(persona_ids))
        partner = others[0]

        if mode == CollaborationMode.SPECIALIZED_SUPPORT:
            roles = {lead: CollaborationRole.MAIN_TUTOR}
            roles.update({pid: CollaborationRole.SPECIALIST for pid in others})
            sequence = (
                CollaborationStep(lead, "Lead the conversation and set the context"),
                CollaborationStep(partner, "Step in for focused practice on the weak area"),
                CollaborationStep(lead, "Resume the conversation and consolidate"),
            )
            summary = f"{lead} leads; {', '.join(others)} provide specialist support"
        else:
            roles = {lead: CollaborationRole.PRESENTER}
            roles.update({pid: CollaborationRole.REVIEWER for pid in others})
            sequence = (
                CollaborationStep(lead, "Present the material"),
                CollaborationStep(partner, "Review the learner's answers and give feedback"),
                CollaborationStep(lead, "Summarise the feedback and agree next steps"),
            )
            summary = f"{lead} presents; {', '.join(others)} review"

        plan = CollaborationPlan(mode=mode, roles=roles, sequence=sequence)
        instructions = f"Collaboration mode {mode.value}: {summary}."
        new_state = replace(
            state,
            primary_persona=lead,
            supporting_personas=tuple(others),
            mode=CoordinationMode.COLLABORATIVE,
        )

        logger.debug(
            "collaboration_planned",
            session_id=session_id,
            mode=mode.value,
            personas=list(roles),
        )
        return CollaborationResult(
            success=True,
            plan=plan,
            instructions=instructions,
            state=new_state,
        )
