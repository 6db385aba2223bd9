"""
pytest plugin exposing the service stubs as fixtures.

Opt in from a conftest.py:

    pytest_plugins = ["service_base.testing.plugin"]

then:

    def test_signup_page(stub_service_success):
        stub_service_success(CreateUser, success=user)
"""

from __future__ import annotations

from functools import partial
from typing import Any, Callable

import pytest

from service_base.testing.stubs import stub_service_failure as _stub_failure
from service_base.testing.stubs import stub_service_success as _stub_success


@pytest.fixture()
def stub_service_success(monkeypatch: pytest.MonkeyPatch) -> Callable[..., Any]:
    """Bound stub_service_success(service_class, success=None); undone after the test."""
    return partial(_stub_success, monkeypatch)


@pytest.fixture()
def stub_service_failure(monkeypatch: pytest.MonkeyPatch) -> Callable[..., Any]:
    """Bound stub_service_failure(service_class, failure, matched=False); undone after the test."""
    return partial(_stub_failure, monkeypatch)
