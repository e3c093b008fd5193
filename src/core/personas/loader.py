# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Persona YAML loader.

Personas are read from ``config/personas`` at the repository root and
validated against the Persona model. An optional override directory is
deep-merged over the shipped definitions, file by file.
"""

from pathlib import Path
from typing import Any

from pydantic import ValidationError

from src.core.config.yaml_loader import YAMLLoadError, load_layered_directory, load_yaml
from src.core.personas.models import Persona
from src.utils.logging import get_logger

logger = get_logger(__name__)


class PersonaLoadError(Exception):
    """Raised when a persona fails to load or validate."""

    def __init__(self, persona_id: str, reason: str) -> None:
        self.persona_id = persona_id
        self.reason = reason
        super().__init__(f"Failed to load persona '{persona_id}': {reason}")


def get_personas_directory() -> Path:
    """Default personas directory (``<repo>/config/personas``)."""
    return Path(__file__).parent.parent.parent.parent / "config" / "personas"


def _build_persona(persona_id: str, document: dict[str, Any]) -> Persona:
    data = dict(document.get("persona", document))
    data.setdefault("id", persona_id)
    try:
        return Persona.model_validate(data)
    except ValidationError as e:
        raise PersonaLoadError(persona_id, f"validation failed: {e}") from e


def load_persona(persona_id: str, personas_dir: Path | None = None) -> Persona:
    """Load a single persona from ``<personas_dir>/<persona_id>.yaml``.

    Raises:
        PersonaLoadError: Missing file, bad YAML or failed validation.
    """
    path = (personas_dir or get_personas_directory()) / f"{persona_id}.yaml"
    try:
        document = load_yaml(path)
    except YAMLLoadError as e:
        raise PersonaLoadError(persona_id, e.reason) from e
    return _build_persona(persona_id, document)


def load_all_personas(
    personas_dir: Path | None = None,
    override_dir: Path | None = None,
) -> dict[str, Persona]:
    """Load every enabled persona, preserving file name order.

    Args:
        personas_dir: Base directory (defaults to config/personas).
        override_dir: Optional directory merged over the base.

    Returns:
        Mapping of persona id to Persona.

    Raises:
        PersonaLoadError: If a directory cannot be read or any persona
            fails validation. A broken catalog is a deployment error.
    """
    personas_dir = personas_dir or get_personas_directory()
    try:
        documents = load_layered_directory(personas_dir, override_dir)
    except YAMLLoadError as e:
        raise PersonaLoadError("*", e.reason) from e

    personas: dict[str, Persona] = {}
    for stem, document in documents.items():
        persona = _build_persona(stem, document)
        if not persona.enabled:
            logger.debug("skipped_disabled_persona", persona_id=persona.id)
            continue
        personas[persona.id] = persona

    logger.info("personas_loaded", count=len(personas), persona_ids=list(personas))
    return personas
