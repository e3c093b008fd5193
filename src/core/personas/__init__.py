# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tutor persona catalog.

Personas shipped in config/personas/:
- friendly_tutor: patient, encouraging tutor (default)
- strict_teacher: precise teacher focused on accuracy
- conversation_partner: casual partner for everyday topics
- pronunciation_coach: methodical pronunciation specialist

Usage:
    from src.core.personas import PersonaManager

    manager = PersonaManager()
    coach = manager.get_persona("pronunciation_coach")
    manager.specialists_for(LearningGoal.GRAMMAR_ACCURACY)
    manager.recommend_personas([LearningGoal.GRAMMAR_ACCURACY])
"""

from src.core.personas.loader import (
    PersonaLoadError,
    get_personas_directory,
    load_all_personas,
    load_persona,
)
from src.core.personas.manager import (
    PersonaManager,
    PersonaNotFoundError,
    PersonaRecommendation,
)
from src.core.personas.models import (
    CorrectionStyle,
    Persona,
    PersonaBehavior,
    PersonaIdentity,
    PersonaTemplates,
    PersonaVoice,
    SpeakingRate,
    Tone,
)

__all__ = [
    # Models
    "Persona",
    "PersonaIdentity",
    "PersonaVoice",
    "PersonaTemplates",
    "PersonaBehavior",
    "Tone",
    "SpeakingRate",
    "CorrectionStyle",
    # Loading
    "load_persona",
    "load_all_personas",
    "get_personas_directory",
    "PersonaLoadError",
    # Manager
    "PersonaManager",
    "PersonaNotFoundError",
    "PersonaRecommendation",
]
