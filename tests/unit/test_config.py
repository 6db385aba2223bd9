"""Unit tests for ServiceBaseSettings and get_settings()."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from service_base.config import ServiceBaseSettings, get_settings


class TestDefaults:
    def test_defaults(self) -> None:
        """
        GIVEN a clean environment
        WHEN settings are loaded
        THEN every field has its default.
        """
        settings = ServiceBaseSettings()
        assert settings.log_level == "INFO"
        assert settings.log_renderer == "console"
        assert settings.log_calls is False
        assert settings.application_service_path == "app/services/application_service.py"
        assert settings.types_path == "app/models/types.py"


class TestEnvironment:
    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """
        GIVEN SERVICE_BASE_* variables in the environment
        WHEN settings are loaded
        THEN the variables win over defaults.
        """
        monkeypatch.setenv("SERVICE_BASE_LOG_RENDERER", "json")
        monkeypatch.setenv("SERVICE_BASE_LOG_CALLS", "true")
        monkeypatch.setenv("SERVICE_BASE_TYPES_PATH", "src/app/types.py")

        settings = ServiceBaseSettings()

        assert settings.log_renderer == "json"
        assert settings.log_calls is True
        assert settings.types_path == "src/app/types.py"

    def test_log_level_is_normalised(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """
        GIVEN SERVICE_BASE_LOG_LEVEL=" debug "
        WHEN settings are loaded
        THEN the level is "DEBUG".
        """
        monkeypatch.setenv("SERVICE_BASE_LOG_LEVEL", " debug ")
        assert ServiceBaseSettings().log_level == "DEBUG"

    def test_invalid_renderer_is_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """
        GIVEN an unknown renderer
        WHEN settings are loaded
        THEN ValidationError is raised.
        """
        monkeypatch.setenv("SERVICE_BASE_LOG_RENDERER", "xml")
        with pytest.raises(ValidationError):
            ServiceBaseSettings()

    def test_unrelated_variables_are_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SERVICE_BASE_UNKNOWN", "x")
        assert ServiceBaseSettings().log_level == "INFO"


class TestGetSettings:
    def test_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_cache_clear_reloads(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """
        GIVEN a cached instance and a changed environment
        WHEN the cache is cleared
        THEN a new instance reflects the environment.
        """
        first = get_settings()
        monkeypatch.setenv("SERVICE_BASE_LOG_LEVEL", "WARNING")
        get_settings.cache_clear()
        assert get_settings() is not first
        assert get_settings().log_level == "WARNING"
