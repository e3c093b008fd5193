# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tutor persona data models.

A persona defines HOW a tutor speaks to the learner (identity, voice,
templates, behaviour) and WHAT it is good at (specialty goals and
suitable levels). The coordinator uses the latter to pick, switch and
pair personas.
"""

from enum import Enum

from pydantic import BaseModel, Field

from src.models import LanguageLevel, LearningGoal


class Tone(str, Enum):
    """Voice tone options for persona communication."""

    WARM = "warm"
    FRIENDLY = "friendly"
    PRECISE = "precise"
    CASUAL = "casual"
    ENCOURAGING = "encouraging"
    CALM = "calm"


class SpeakingRate(str, Enum):
    """Speech synthesis pace."""

    SLOW = "slow"
    MEDIUM = "medium"
    FAST = "fast"


class CorrectionStyle(str, Enum):
    """How the persona handles learner mistakes."""

    GENTLE = "gentle"
    DIRECT = "direct"
    IMPLICIT = "implicit"
    REPETITION = "repetition"


class PersonaIdentity(BaseModel):
    """Who the persona is.

    Attributes:
        role: Short role description (e.g. "Friendly language tutor").
        character: Personality description used in prompts.
        traits: Personality traits.
    """

    role: str = Field(..., min_length=1)
    character: str = Field(..., min_length=1)
    traits: list[str] = Field(default_factory=list)


class PersonaVoice(BaseModel):
    """How the persona sounds."""

    tone: Tone = Tone.WARM
    speaking_rate: SpeakingRate = SpeakingRate.MEDIUM
    language: str = Field(default="en-US", description="BCP 47 language tag")
    max_sentences: int = Field(default=2, ge=1, description="Upper bound on sentences per reply")


class PersonaTemplates(BaseModel):
    """Phrases kept consistent across the session.

    Templates may contain ``{name}``, ``{topic}``, ``{target}`` and
    ``{reason}`` placeholders filled at runtime.
    """

    greeting: str = "Hi! I'm {name}. What would you like to talk about today?"
    encouragement: str = "You're doing great, keep going!"
    struggle_support: str = "No worries, let's take it one step at a time."
    continuation: str = "That's interesting! Can you tell me more about {topic}?"
    handoff: str = "I'm going to hand you over to {target}. {reason}"
    smooth_handoff: str = "Let's keep going from here."
    introduction: str = "Hi, I'm {name}! Let's continue together."


class PersonaBehavior(BaseModel):
    """Teaching behaviour knobs.

    Attributes:
        correction_style: How mistakes are corrected.
        encouragement_frequency: Share of replies carrying praise (0-1).
        challenge_level: Willingness to push harder material (0-1).
        patience_level: Tolerance for repeated mistakes (0-1).
    """

    correction_style: CorrectionStyle = CorrectionStyle.GENTLE
    encouragement_frequency: float = Field(default=0.5, ge=0.0, le=1.0)
    challenge_level: float = Field(default=0.5, ge=0.0, le=1.0)
    patience_level: float = Field(default=0.7, ge=0.0, le=1.0)


class Persona(BaseModel):
    """Complete tutor persona definition.

    Attributes:
        id: Unique identifier, also the YAML file stem.
        name: Display name.
        description: One-line description used in handoff messages.
        identity: Who the persona is.
        voice: How it sounds.
        templates: Fixed phrases.
        behavior: Teaching behaviour.
        specialties: Learning goals this persona is strongest at.
        suitable_levels: Levels the persona is a good default for.
        strengths: Short phrases naming what the persona is good at.
        match_weight: Base score of a goal match when recommending personas.
        enabled: Whether the persona can be selected.
    """

    id: str = Field(..., min_length=1, pattern=r"^[a-z][a-z0-9_]*$")
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    identity: PersonaIdentity
    voice: PersonaVoice = Field(default_factory=PersonaVoice)
    templates: PersonaTemplates = Field(default_factory=PersonaTemplates)
    behavior: PersonaBehavior = Field(default_factory=PersonaBehavior)
    specialties: list[LearningGoal] = Field(default_factory=list)
    suitable_levels: list[LanguageLevel] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    match_weight: float = Field(default=0.8, ge=0.0, le=1.0)
    enabled: bool = True

    def specializes_in(self, goal: LearningGoal) -> bool:
        return goal in self.specialties

    def suits_level(self, level: LanguageLevel) -> bool:
        return not self.suitable_levels or level in self.suitable_levels

    def coverage(self, goals: list[LearningGoal]) -> int:
        """Number of the given goals this persona specialises in."""
        return sum(1 for goal in goals if goal in self.specialties)

    def get_system_prompt_segment(self) -> str:
        """Persona description to include in a text-generation system prompt."""
        parts = [
            f"You are {self.name}, {self.identity.role}.",
            "",
            "Character:",
            self.identity.character,
            "",
            "Communication Style:",
            f"- Tone: {self.voice.tone.value}",
            f"- At most {self.voice.max_sentences} sentences per reply",
            f"- Correction style: {self.behavior.correction_style.value}",
        ]
        if self.identity.traits:
            parts.append(f"- Traits: {', '.join(self.identity.traits)}")
        if self.specialties:
            parts.append("")
            parts.append(f"Focus areas: {', '.join(g.value for g in self.specialties)}")
        return "\n".join(parts)

    def format_response(self, template_name: str, **kwargs: str) -> str:
        """Fill a template by name.

        ``{name}`` defaults to the persona's own name.

        Raises:
            AttributeError: If the template does not exist.
        """
        template = getattr(self.templates, template_name)
        values = {"name": self.name, **kwargs}
        return template.format(**values)
