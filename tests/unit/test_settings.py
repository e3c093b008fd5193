# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for application settings."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from src.core.config.settings import (
    GenerationSettings,
    PersonaSettings,
    PlannerSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)


class TestGenerationSettings:
    """Tests for GenerationSettings."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        settings = GenerationSettings()

        assert settings.enabled is True
        assert settings.model == "ollama/qwen2.5:7b"
        assert settings.api_base is None
        assert settings.api_key is None
        assert settings.timeout == 20.0
        assert settings.max_retries == 1

    def test_loads_from_environment(self) -> None:
        """Test that settings load from environment variables."""
        env = {
            "GENERATION_ENABLED": "false",
            "GENERATION_MODEL": "openai/gpt-4o-mini",
            "GENERATION_API_KEY": "sk-env",
            "GENERATION_TIMEOUT": "7.5",
        }

        with patch.dict(os.environ, env, clear=False):
            settings = GenerationSettings()

        assert settings.enabled is False
        assert settings.model == "openai/gpt-4o-mini"
        assert settings.api_key is not None
        assert settings.api_key.get_secret_value() == "sk-env"
        assert settings.timeout == 7.5

    def test_api_key_hidden_in_repr(self) -> None:
        """Test that the API key never appears in the repr."""
        settings = GenerationSettings(api_key="sk-secret")  # type: ignore[arg-type]

        assert "sk-secret" not in repr(settings)

    def test_invalid_timeout_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GenerationSettings(timeout=0)


class TestPlannerSettings:
    """Tests for PlannerSettings."""

    def test_default_values(self) -> None:
        assert PlannerSettings().recent_topic_window == 5

    def test_loads_from_environment(self) -> None:
        with patch.dict(os.environ, {"PLANNER_RECENT_TOPIC_WINDOW": "3"}, clear=False):
            settings = PlannerSettings()

        assert settings.recent_topic_window == 3

    def test_negative_window_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PlannerSettings(recent_topic_window=-1)


class TestPersonaSettings:
    """Tests for PersonaSettings."""

    def test_default_values(self) -> None:
        settings = PersonaSettings()

        assert settings.directory is None
        assert settings.default_persona_id == "friendly_tutor"

    def test_loads_from_environment(self) -> None:
        env = {
            "PERSONA_DIRECTORY": "/etc/tutor/personas",
            "PERSONA_DEFAULT_PERSONA_ID": "conversation_partner",
        }

        with patch.dict(os.environ, env, clear=False):
            settings = PersonaSettings()

        assert settings.directory == Path("/etc/tutor/personas")
        assert settings.default_persona_id == "conversation_partner"


class TestSettings:
    """Tests for main Settings class."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        settings = Settings()

        assert settings.environment == "development"
        assert settings.debug is False
        assert settings.log_level == "INFO"

    def test_subsettings_loaded(self) -> None:
        """Test that all subsettings are loaded."""
        settings = Settings()

        assert isinstance(settings.generation, GenerationSettings)
        assert isinstance(settings.planner, PlannerSettings)
        assert isinstance(settings.persona, PersonaSettings)

    def test_invalid_environment_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(environment="qa")  # type: ignore[arg-type]

    def test_is_development_property(self) -> None:
        """Test is_development property."""
        dev_settings = Settings(environment="development")
        prod_settings = Settings(environment="production")

        assert dev_settings.is_development is True
        assert prod_settings.is_development is False

    def test_is_production_property(self) -> None:
        """Test is_production property."""
        dev_settings = Settings(environment="development")
        prod_settings = Settings(environment="production")

        assert dev_settings.is_production is False
        assert prod_settings.is_production is True


class TestGetSettings:
    """Tests for get_settings function."""

    def test_returns_settings_instance(self) -> None:
        """Test that get_settings returns a Settings instance."""
        clear_settings_cache()

        settings = get_settings()

        assert isinstance(settings, Settings)

    def test_returns_cached_instance(self) -> None:
        """Test that get_settings returns cached instance."""
        clear_settings_cache()

        settings1 = get_settings()
        settings2 = get_settings()

        assert settings1 is settings2

    def test_clear_cache_allows_reload(self) -> None:
        """Test that clearing cache picks up changed environment."""
        clear_settings_cache()
        settings1 = get_settings()

        with patch.dict(os.environ, {"PLANNER_RECENT_TOPIC_WINDOW": "2"}, clear=False):
            clear_settings_cache()
            settings2 = get_settings()

        assert settings1 is not settings2
        assert settings2.planner.recent_topic_window == 2
