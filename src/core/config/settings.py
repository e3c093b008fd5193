# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application configuration settings using Pydantic Settings.

Settings are read from environment variables (and an optional ``.env``
file). Each concern has its own settings class with a dedicated env
prefix; the root Settings class aggregates them.

Scoring weights and thresholds are deliberately NOT settings. They live
as named constants next to the algorithms that use them.

Example:
    >>> from src.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> settings.planner.recent_topic_window
    5
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class GenerationSettings(BaseSettings):
    """Text generation backend configuration (LiteLLM).

    Attributes:
        enabled: When False, model-assisted suggestions go straight to
            the rule-based path.
        model: LiteLLM model identifier (provider prefix routes the call).
        api_base: Optional base URL for self-hosted providers.
        api_key: Optional API key passed through to the provider.
        timeout: Request timeout in seconds.
        max_retries: Retry attempts handled by LiteLLM.
        temperature: Sampling temperature.
        max_tokens: Completion token limit.
    """

    model_config = SettingsConfigDict(
        env_prefix="GENERATION_",
        extra="ignore",
    )

    enabled: bool = True
    model: str = "ollama/qwen2.5:7b"
    api_base: str | None = None
    api_key: SecretStr | None = None
    timeout: float = Field(default=20.0, gt=0)
    max_retries: int = Field(default=1, ge=0)
    temperature: float = Field(default=0.4, ge=0.0, le=2.0)
    max_tokens: int = Field(default=400, gt=0)


class PlannerSettings(BaseSettings):
    """Session planning configuration.

    Attributes:
        recent_topic_window: How many recently covered topics are excluded
            from topic selection.
    """

    model_config = SettingsConfigDict(
        env_prefix="PLANNER_",
        extra="ignore",
    )

    recent_topic_window: int = Field(default=5, ge=0)


class PersonaSettings(BaseSettings):
    """Tutor persona catalog configuration.

    Attributes:
        directory: Optional directory whose persona files are deep-merged
            over the shipped ``config/personas`` definitions.
        default_persona_id: Persona used when no rule selects another.
    """

    model_config = SettingsConfigDict(
        env_prefix="PERSONA_",
        extra="ignore",
    )

    directory: Path | None = None
    default_persona_id: str = "friendly_tutor"


class Settings(BaseSettings):
    """Main application settings aggregating all subsettings.

    Use get_settings() to obtain a cached instance.

    Attributes:
        environment: Current environment.
        debug: Enable debug mode.
        log_level: Logging level.
        generation: Text generation settings.
        planner: Session planning settings.
        persona: Persona catalog settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    generation: GenerationSettings = Field(default_factory=GenerationSettings)
    planner: PlannerSettings = Field(default_factory=PlannerSettings)
    persona: PersonaSettings = Field(default_factory=PersonaSettings)

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Call clear_settings_cache() to reload from the environment.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() re-reads env."""
    get_settings.cache_clear()
