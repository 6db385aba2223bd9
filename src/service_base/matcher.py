"""
Block-style matching over a Result.

A handler receives a ResultMatcher and registers one callback per outcome
it cares about. The matcher then calls the first callback whose case fits
the result and returns what it returned:

    def handle(on):
        on.success(lambda user: user.id)

        @on.failure("not_found")
        def _(error):
            return None

        @on.failure
        def _(error):
            raise RuntimeError(error)

    user_id = CreateUser.run(email="a@b.c", match=handle)

Patterns narrow a case. A payload fits a pattern when it equals it, is an
instance of it (for class patterns), or is a tuple whose first element
equals it, so Failure(("not_found", 42)) fits on.failure("not_found").

Both a success and a failure case must be registered, otherwise
NonExhaustiveMatchError is raised before any callback runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from service_base.errors import NonExhaustiveMatchError
from service_base.result import Failure, Result, Success


@dataclass(frozen=True, slots=True)
class MatchCase:
    patterns: tuple[Any, ...]
    handler: Callable[[Any], Any]


def pattern_matches(pattern: Any, payload: Any) -> bool:
    if isinstance(pattern, type):
        return isinstance(payload, pattern)
    if payload == pattern:
        return True
    return isinstance(payload, tuple) and len(payload) > 0 and payload[0] == pattern


class ResultMatcher:
    """Collects success/failure cases for one Result and resolves them."""

    def __init__(self, result: Result[Any, Any]) -> None:
        if not isinstance(result, Result):
            raise TypeError(f"Can only match a Result, got {type(result).__name__}")
        self._result = result
        self._cases: dict[str, list[MatchCase]] = {"success": [], "failure": []}

    def success(self, *args: Any) -> Any:
        """Register a success case: on.success(fn), on.success(pattern, fn) or as a decorator."""
        return self._register("success", args)

    def failure(self, *args: Any) -> Any:
        """Register a failure case: on.failure(fn), on.failure(pattern, fn) or as a decorator."""
        return self._register("failure", args)

    def resolve(self, handler: Callable[[ResultMatcher], Any]) -> Any:
        handler(self)
        self._ensure_exhaustive()

        match self._result:
            case Success(value):
                track, payload = "success", value
            case Failure(error):
                track, payload = "failure", error

        for case in self._cases[track]:
            if self._case_matches(track, case, payload):
                return case.handler(payload)
        return None

    def _register(self, track: str, args: tuple[Any, ...]) -> Any:
        if args and callable(args[-1]) and not isinstance(args[-1], type):
            *patterns, handler = args
            self._cases[track].append(MatchCase(tuple(patterns), handler))
            return handler

        def decorator(handler: Callable[[Any], Any]) -> Callable[[Any], Any]:
            self._cases[track].append(MatchCase(tuple(args), handler))
            return handler

        return decorator

    def _ensure_exhaustive(self) -> None:
        unhandled = [track for track, cases in self._cases.items() if not cases]
        if unhandled:
            raise NonExhaustiveMatchError(f"cases +{', '.join(unhandled)}+ not handled")

    def _case_matches(self, track: str, case: MatchCase, payload: Any) -> bool:
        if not case.patterns:
            return True
        return any(pattern_matches(pattern, payload) for pattern in case.patterns)


def match_result(result: Result[Any, Any], handler: Callable[[ResultMatcher], Any] | None) -> Any:
    """Return the result untouched without a handler, the matched value with one."""
    if handler is None:
        return result
    return ResultMatcher(result).resolve(handler)
