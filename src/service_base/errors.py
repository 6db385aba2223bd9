"""
Exceptions raised by service_base.

Expected business outcomes travel on the failure track as Failure values.
The classes here cover the other kind of error: a service declared or
called incorrectly, a match that forgot a case, or a caller that asked
for an exception instead of a Failure via run_or_raise().
"""

from __future__ import annotations

from typing import Any, Iterable


class ArgumentDefinitionError(ValueError):
    """An argument() declaration that cannot work as written."""


class UnknownArgumentsError(TypeError):
    """A service was called with names it does not declare."""

    def __init__(self, service_name: str, names: Iterable[str]) -> None:
        self.names = tuple(names)
        super().__init__(f"{service_name} provided invalid arguments: {', '.join(map(str, self.names))}")


class NonExhaustiveMatchError(RuntimeError):
    """A result match that does not handle every outcome."""


class ServiceNotSuccessful(Exception):
    """Raised by Service.run_or_raise() when the service returns a Failure."""

    def __init__(self, failure: Any) -> None:
        super().__init__("Failed to call service")
        self.failure = failure
