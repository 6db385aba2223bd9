"""Test support: service stubs, Result assertions and an opt-in pytest plugin."""

from service_base.testing.assertions import ResultAssertions
from service_base.testing.stubs import stub_service_failure, stub_service_success

__all__ = ["ResultAssertions", "stub_service_failure", "stub_service_success"]
