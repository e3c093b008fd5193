# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package.

- Settings: Pydantic-based settings loaded from environment variables
- YAML loader: utilities for loading the persona catalog and overrides

Example:
    >>> from src.core.config import get_settings
    >>> get_settings().persona.default_persona_id
    'friendly_tutor'
"""

from src.core.config.settings import (
    GenerationSettings,
    PersonaSettings,
    PlannerSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from src.core.config.yaml_loader import (
    YAMLLoadError,
    deep_merge,
    load_layered_directory,
    load_yaml,
    load_yaml_directory,
)

__all__ = [
    "GenerationSettings",
    "PersonaSettings",
    "PlannerSettings",
    "Settings",
    "clear_settings_cache",
    "get_settings",
    "YAMLLoadError",
    "deep_merge",
    "load_layered_directory",
    "load_yaml",
    "load_yaml_directory",
]
