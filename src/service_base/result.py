"""
Result — the success/failure value every service returns.

A Result[T, E] is either Success(value: T) or Failure(error: E).
Transformations short-circuit on the failure track, so a chain of steps
only spells out the happy path:

    ┌───────────┐   flat_map    ┌───────────┐   flat_map    ┌──────────┐
    │ validate  │──Success──────│  enrich   │──Success──────│ persist  │──→ Result
    └─────┬─────┘               └─────┬─────┘               └─────┬────┘
          │ Failure                   │ Failure                   │ Failure
          └───────────────────────────┴───────────────────────────┴──→ Result

The failure payload is whatever the service wants to report: a string,
a symbolic tag, a (tag, detail) tuple, an exception, a domain object.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Generic, Iterable, TypeVar

if TYPE_CHECKING:
    from service_base.matcher import ResultMatcher

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
R = TypeVar("R")


class Result(Generic[T, E]):
    """
    Two possible states:
      - Success(value) — the happy path
      - Failure(error) — the error track

    Usage:
        >>> Result.success(42).map(lambda x: x * 2).value()
        84

        >>> Result.failure("bad input").map(lambda x: x * 2).is_failure()
        True
    """

    # ──────────────────────── Introspection ────────────────────────

    def is_success(self) -> bool:
        return isinstance(self, Success)

    def is_failure(self) -> bool:
        return isinstance(self, Failure)

    def value(self) -> T:
        """
        Extract the success value. Raises ValueError if called on a Failure.

        Prefer .either(), .match() or match/case for safe access.
        """
        match self:
            case Success(v):
                return v
            case Failure(err):
                raise ValueError(f"Cannot get value from a Failure: {err!r}")
        raise TypeError("unreachable")  # pragma: no cover

    def error(self) -> E:
        """Extract the failure payload. Raises ValueError if called on a Success."""
        match self:
            case Failure(err):
                return err
            case Success(v):
                raise ValueError(f"Cannot get error from a Success: {v!r}")
        raise TypeError("unreachable")  # pragma: no cover

    # ──────────────────────── Core Transformations ────────────────────────

    def either(self, on_success: Callable[[T], R], on_failure: Callable[[E], R]) -> R:
        """
        Apply one of two functions depending on the state.

            result.either(
                on_success=lambda user: f"Hello {user.name}",
                on_failure=lambda err: f"Error: {err}",
            )
        """
        match self:
            case Success(v):
                return on_success(v)
            case Failure(err):
                return on_failure(err)
        raise TypeError("unreachable")  # pragma: no cover

    def map(self, mapper: Callable[[T], U]) -> Result[U, E]:
        """Transform the success value. Short-circuits on failure."""
        match self:
            case Success(v):
                return Success(mapper(v))
            case Failure(_):
                return self  # type: ignore[return-value]
        raise TypeError("unreachable")  # pragma: no cover

    def map_failure(self, mapper: Callable[[E], U]) -> Result[T, U]:
        """Transform the failure payload. Passes success through unchanged."""
        match self:
            case Success(_):
                return self  # type: ignore[return-value]
            case Failure(err):
                return Failure(mapper(err))
        raise TypeError("unreachable")  # pragma: no cover

    def flat_map(self, mapper: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """
        Chain a Result-returning function. Short-circuits on failure.

            def positive(x: int) -> Result[int, str]:
                return Result.success(x) if x > 0 else Result.failure("must be positive")

            Result.success(5).flat_map(positive)   # → Success(5)
            Result.success(-1).flat_map(positive)  # → Failure('must be positive')
        """
        match self:
            case Success(v):
                return mapper(v)
            case Failure(_):
                return self  # type: ignore[return-value]
        raise TypeError("unreachable")  # pragma: no cover

    def ensure(self, predicate: Callable[[T], bool], error: E) -> Result[T, E]:
        """Turn a success into Failure(error) unless predicate holds."""
        return self.flat_map(lambda v: Success(v) if predicate(v) else Failure(error))

    # ──────────────────────── Side Effects ────────────────────────

    def peek(self, action: Callable[[T], Any]) -> Result[T, E]:
        """Run a side effect on the success value without altering the Result."""
        match self:
            case Success(v):
                action(v)
        return self

    def peek_failure(self, action: Callable[[E], Any]) -> Result[T, E]:
        match self:
            case Failure(err):
                action(err)
        return self

    # ──────────────────────── Recovery ────────────────────────

    def recover(self, recovery_fn: Callable[[E], T]) -> Result[T, E]:
        match self:
            case Success(_):
                return self
            case Failure(err):
                return Success(recovery_fn(err))
        raise TypeError("unreachable")  # pragma: no cover

    def get_or_else(self, default: T) -> T:
        match self:
            case Success(v):
                return v
            case _:
                return default

    def get_or_else_get(self, fallback: Callable[[E], T]) -> T:
        return self.either(lambda v: v, fallback)

    # ──────────────────────── Matching ────────────────────────

    def match(self, handler: Callable[[ResultMatcher], Any]) -> Any:
        """
        Resolve this Result through block-style matching.

            result.match(lambda on: (
                on.success(lambda user: user.id),
                on.failure(lambda error: None),
            ))
        """
        from service_base.matcher import ResultMatcher

        return ResultMatcher(self).resolve(handler)

    # ──────────────────────── Static Factories ────────────────────────

    @staticmethod
    def success(value: T = None) -> Result[T, Any]:  # type: ignore[assignment]
        return Success(value)

    @staticmethod
    def failure(error: E) -> Result[Any, E]:
        return Failure(error)

    @staticmethod
    def attempt(
        computation: Callable[[], T],
        *exceptions: type[BaseException],
    ) -> Result[T, BaseException]:
        """
        Run a computation that may raise, capturing the listed exceptions.

            Result.attempt(lambda: int(raw), ValueError)  # Failure(ValueError(...))

        Exceptions not listed propagate. With no exceptions listed, any
        Exception is captured.
        """
        catch = exceptions or (Exception,)
        try:
            return Success(computation())
        except catch as e:
            return Failure(e)

    @staticmethod
    def all_of(results: Iterable[Result[T, E]]) -> Result[list[T], E]:
        """Collect Results into a Result of list; the first failure wins."""
        values: list[T] = []
        for r in results:
            match r:
                case Success(v):
                    values.append(v)
                case Failure(_):
                    return r  # type: ignore[return-value]
        return Success(values)

    # ──────────────────────── Dunder methods ────────────────────────

    def __bool__(self) -> bool:
        """`if result:` holds only on Success."""
        return self.is_success()


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class Success(Result[T, E]):
    """The success track. `Success()` carries None, for steps with nothing to report."""

    _value: T

    def __init__(self, value: T = None) -> None:  # type: ignore[assignment]
        object.__setattr__(self, "_value", value)

    def __repr__(self) -> str:
        return f"Success({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Success):
            return self._value == other._value
        if isinstance(other, Result):
            return False
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("Success", self._value))


Success.__match_args__ = ("_value",)


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class Failure(Result[T, E]):
    """The failure track. A failure always carries a reason."""

    _error: E

    def __init__(self, error: E) -> None:
        if error is None:
            raise TypeError("Failure error must not be None")
        object.__setattr__(self, "_error", error)

    def __repr__(self) -> str:
        return f"Failure({self._error!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Failure):
            return self._error == other._error
        if isinstance(other, Result):
            return False
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("Failure", self._error))


Failure.__match_args__ = ("_error",)
