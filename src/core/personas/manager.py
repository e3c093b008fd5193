# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Persona catalog.

PersonaManager holds the loaded personas and answers lookup questions
(by id, by specialty, by level). It holds no per-session state; which
persona is active in a session is owned by the caller.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from src.core.config.settings import Settings
from src.core.personas.loader import load_all_personas
from src.core.personas.models import Persona
from src.models import LanguageLevel, LearningGoal
from src.utils.logging import get_logger

logger = get_logger(__name__)

# A persona matching some goal scores between 70% and 100% of its match_weight,
# in proportion to the share of goals it covers.
GOAL_MATCH_FLOOR = 0.7
FALLBACK_MATCH_SCORE = 0.7
MAX_RECOMMENDATIONS = 3


@dataclass(frozen=True)
class PersonaRecommendation:
    """A persona ranked for a set of learning goals."""

    persona_id: str
    persona_name: str
    match_score: float
    reason: str
    specialties: tuple[LearningGoal, ...]
    recommended_for: tuple[LearningGoal, ...]


class PersonaNotFoundError(Exception):
    """Raised when a requested persona is not in the catalog."""

    def __init__(self, persona_id: str) -> None:
        self.persona_id = persona_id
        super().__init__(f"Persona '{persona_id}' not found")


class PersonaManager:
    """Read-only catalog of tutor personas.

    Attributes:
        default_persona_id: Persona used when no rule selects another.
    """

    def __init__(
        self,
        personas_dir: Path | None = None,
        default_persona_id: str = "friendly_tutor",
        override_dir: Path | None = None,
        personas: Mapping[str, Persona] | None = None,
    ) -> None:
        """Initialize the catalog.

        Args:
            personas_dir: Persona YAML directory (defaults to config/personas).
            default_persona_id: Fallback persona id.
            override_dir: Optional directory merged over personas_dir.
            personas: Preloaded personas; skips disk loading when given.
        """
        if personas is None:
            personas = load_all_personas(personas_dir, override_dir)
        self._personas: dict[str, Persona] = dict(personas)
        self.default_persona_id = default_persona_id

        logger.info(
            "persona_manager_initialized",
            persona_count=len(self._personas),
            default_persona=default_persona_id,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "PersonaManager":
        return cls(
            override_dir=settings.persona.directory,
            default_persona_id=settings.persona.default_persona_id,
        )

    def get_persona(self, persona_id: str) -> Persona:
        """Get a persona by id.

        Raises:
            PersonaNotFoundError: If the persona is unknown or disabled.
        """
        persona = self._personas.get(persona_id)
        if persona is None or not persona.enabled:
            raise PersonaNotFoundError(persona_id)
        return persona

    def get_default_persona(self) -> Persona:
        return self.get_persona(self.default_persona_id)

    def has_persona(self, persona_id: str) -> bool:
        persona = self._personas.get(persona_id)
        return persona is not None and persona.enabled

    def list_personas(self) -> list[Persona]:
        """Enabled personas in catalog order."""
        return [p for p in self._personas.values() if p.enabled]

    def list_persona_ids(self) -> list[str]:
        return [p.id for p in self.list_personas()]

    def specialists_for(
        self,
        goal: LearningGoal,
        exclude: tuple[str, ...] = (),
    ) -> list[Persona]:
        """Personas specialising in ``goal``, in catalog order."""
        return [
            p for p in self.list_personas()
            if p.specializes_in(goal) and p.id not in exclude
        ]

    def suitable_for_level(self, level: LanguageLevel) -> list[Persona]:
        """Personas that list ``level`` among their suitable levels."""
        return [p for p in self.list_personas() if level in p.suitable_levels]

    def recommend_personas(
        self,
        goals: Sequence[LearningGoal],
        limit: int = MAX_RECOMMENDATIONS,
    ) -> list[PersonaRecommendation]:
        """Rank personas by how well they serve the learner's goals.

        A persona matching ``m`` of ``n`` goals scores
        ``match_weight * (0.7 + 0.3 * m / n)``. Personas matching nothing
        are left out; when none match, the default persona is offered on
        its own.

        Args:
            goals: The learner's goals.
            limit: Maximum number of recommendations.

        Returns:
            Recommendations, best first; ties keep catalog order.
        """
        recommendations: list[PersonaRecommendation] = []
        for persona in self.list_personas():
            matched = tuple(goal for goal in goals if persona.specializes_in(goal))
            if not matched:
                continue
            ratio = len(matched) / len(goals)
            score = persona.match_weight * (GOAL_MATCH_FLOOR + (1 - GOAL_MATCH_FLOOR) * ratio)
            strengths = persona.strengths or [goal.value for goal in persona.specialties]
            recommendations.append(
                PersonaRecommendation(
                    persona_id=persona.id,
                    persona_name=persona.name,
                    match_score=score,
                    reason=f"Specializes in {' and '.join(strengths)}",
                    specialties=tuple(persona.specialties),
                    recommended_for=matched,
                )
            )

        if not recommendations:
            if not self.has_persona(self.default_persona_id):
                return []
            default = self.get_default_persona()
            return [
                PersonaRecommendation(
                    persona_id=default.id,
                    persona_name=default.name,
                    match_score=FALLBACK_MATCH_SCORE,
                    reason="Great for general conversation practice",
                    specialties=tuple(default.specialties),
                    recommended_for=tuple(default.specialties),
                )
            ]

        recommendations.sort(key=lambda rec: rec.match_score, reverse=True)
        return recommendations[:limit]
