"""
Shared fixtures for the service-base test suite.

Loads the stub fixtures plugin and isolates global state (cached
settings, structlog configuration) between tests.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
import structlog

from service_base.config import get_settings

pytest_plugins = ["service_base.testing.plugin"]


@pytest.fixture(autouse=True)
def _isolate_global_state(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Fresh settings from a clean environment and default structlog config for every test."""
    for name in (
        "SERVICE_BASE_LOG_LEVEL",
        "SERVICE_BASE_LOG_RENDERER",
        "SERVICE_BASE_LOG_CALLS",
        "SERVICE_BASE_APPLICATION_SERVICE_PATH",
        "SERVICE_BASE_TYPES_PATH",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    structlog.reset_defaults()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()
