"""
Service — the base class for single-purpose business operations.

A service declares its inputs with argument(), implements call(), and
returns a Result instead of raising on expected errors:

    class CreateUser(Service):
        email = argument(Types.String, description="Login e-mail")
        admin = argument(Types.Bool, default=False)

        def call(self):
            user = self.step(self.find_or_build())
            if user.persisted:
                return Failure("already_registered")
            return Success(user.save())

    # Result form
    result = CreateUser.run(email="a@b.c")

    # Block form
    CreateUser.run(email="a@b.c", match=lambda on: (
        on.success(lambda user: redirect(user)),
        on.failure("already_registered", lambda _: render_login()),
        on.failure(lambda error: render_error(error)),
    ))

Input validation happens before call(): unknown names raise
UnknownArgumentsError, bad values raise pydantic's ValidationError.
Transactions, persistence and retries belong to the host application.
"""

from __future__ import annotations

import inspect
import time
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, ClassVar, Mapping, NotRequired, TypedDict

import structlog
from pydantic import ConfigDict, TypeAdapter, with_config

from service_base.arguments import Argument
from service_base.config import get_settings
from service_base.errors import ServiceNotSuccessful, UnknownArgumentsError
from service_base.matcher import ResultMatcher, match_result
from service_base.result import Failure, Result, Success
from service_base.types import type_name

log = structlog.get_logger(__name__)


class _StepHalted(BaseException):
    """Carries a Failure out of call(). BaseException, so `except Exception` in call() lets it through."""

    def __init__(self, failure: Failure[Any, Any]) -> None:
        super().__init__(failure)
        self.failure = failure


@dataclass(frozen=True, slots=True)
class ArgumentDescription:
    """One row of Service.schema_definition()."""

    name: str
    type: str
    description: str | None
    required: bool
    default: Any = None


class Service:
    """
    Base class for services. Subclasses declare arguments and implement call().

    Instances are built with validated arguments and are read-only with
    respect to them; everything else on the instance (memoised steps via
    functools.cached_property, for instance) behaves like a plain object.
    """

    ServiceNotSuccessful = ServiceNotSuccessful

    service_description_text: ClassVar[str | None] = None

    _argument_definitions: ClassVar[dict[str, Argument]] = {}
    _arguments_adapter: ClassVar[TypeAdapter[Any] | None] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._refresh_arguments()

    def __init__(self, arguments: Mapping[str, Any] | None = None, /, **kwargs: Any) -> None:
        provided = {**(arguments or {}), **kwargs}
        cls = type(self)
        cls._validate_args(provided)
        self._arguments = MappingProxyType(cls._coerce_arguments(provided))

    # ──────────────────────── Entry points ────────────────────────

    @classmethod
    def run(
        cls,
        arguments: Mapping[str, Any] | None = None,
        /,
        *,
        match: Callable[[ResultMatcher], Any] | None = None,
        **kwargs: Any,
    ) -> Any:
        """
        Validate arguments, execute call() and return its Result.

        With match= the Result is resolved through a ResultMatcher and the
        value returned by the matching case is returned instead. Calling
        with no arguments works when every argument has a default or is
        optional.
        """
        result = cls(arguments, **kwargs)._execute()
        return match_result(result, match)

    @classmethod
    def run_or_raise(cls, arguments: Mapping[str, Any] | None = None, /, **kwargs: Any) -> Result[Any, Any]:
        """Like run(), but a Failure raises ServiceNotSuccessful carrying the failure payload."""
        if "match" in kwargs:
            raise TypeError(f"{cls.__name__}.run_or_raise() does not accept match=; use run(match=...)")
        result = cls.run(arguments, **kwargs)
        if result.is_failure():
            raise ServiceNotSuccessful(result.error())
        return result

    def call(self) -> Result[Any, Any]:
        """The service body. Every subclass must implement it and return a Result."""
        raise NotImplementedError(f"{type(self).__name__} must implement call()")

    def step(self, result: Result[Any, Any]) -> Any:
        """
        Unwrap a step's Success value, or stop call() with its Failure.

            def call(self):
                user = self.step(FindUser.run(id=self.user_id))
                order = self.step(self.build_order(user))
                return Success(order)
        """
        if not isinstance(result, Result):
            raise TypeError(f"step() expects a Result, got {type(result).__name__}")
        match result:
            case Success(value):
                return value
            case Failure(_):
                raise _StepHalted(result)

    def _execute(self) -> Result[Any, Any]:
        name = type(self).__name__
        log_calls = get_settings().log_calls
        if log_calls:
            log.debug("service.started", service=name)
        start = time.monotonic()

        try:
            result = self.call()
        except _StepHalted as halted:
            result = halted.failure
        except Exception as e:
            log.error("service.raised", service=name, error=str(e), error_type=type(e).__name__)
            raise

        if not isinstance(result, Result):
            raise TypeError(f"{name}.call() must return a Result, got {type(result).__name__}")

        if log_calls:
            log.debug(
                "service.completed",
                service=name,
                outcome="success" if result.is_success() else "failure",
                duration_ms=round((time.monotonic() - start) * 1000, 3),
            )
        return result

    # ──────────────────────── Arguments ────────────────────────

    @property
    def arguments(self) -> dict[str, Any]:
        """Every argument and its validated value."""
        return dict(self._arguments)

    @classmethod
    def add_argument(cls, name: str, type: Any, **configuration: Any) -> None:
        """Declare an argument on an existing class: Service.add_argument("count", Types.Integer)."""
        definition = Argument(type, **configuration)
        definition.__set_name__(cls, name)
        setattr(cls, name, definition)
        cls._refresh_arguments()
        pending = list(cls.__subclasses__())
        while pending:
            subclass = pending.pop()
            subclass._refresh_arguments()
            pending.extend(subclass.__subclasses__())

    @classmethod
    def _refresh_arguments(cls) -> None:
        definitions: dict[str, Argument] = {}
        for klass in reversed(cls.__mro__):
            for name, value in vars(klass).items():
                if isinstance(value, Argument):
                    definitions[name] = value
                elif name in definitions:
                    del definitions[name]
        cls._argument_definitions = definitions
        cls._arguments_adapter = None

    @classmethod
    def _validate_args(cls, provided: Mapping[str, Any]) -> None:
        """Refuse names that are not declared as arguments."""
        invalid = [name for name in provided if name not in cls._argument_definitions]
        if invalid:
            raise UnknownArgumentsError(cls.__name__, invalid)

    @classmethod
    def _coerce_arguments(cls, provided: Mapping[str, Any]) -> dict[str, Any]:
        payload = {
            name: definition.default
            for name, definition in cls._argument_definitions.items()
            if definition.has_default and name not in provided
        }
        payload.update(provided)
        validated = cls._adapter().validate_python(payload)
        return {
            name: validated.get(name)
            for name, definition in cls._argument_definitions.items()
            if name in validated or definition.optional
        }

    @classmethod
    def _adapter(cls) -> TypeAdapter[Any]:
        if cls.__dict__.get("_arguments_adapter") is None:
            fields: dict[str, Any] = {}
            for name, definition in cls._argument_definitions.items():
                annotation = definition.annotation
                fields[name] = annotation if definition.required else NotRequired[annotation]
            schema = TypedDict(f"{cls.__name__}Arguments", fields)  # type: ignore[misc]
            schema = with_config(ConfigDict(extra="forbid", title=cls.__name__))(schema)
            cls._arguments_adapter = TypeAdapter(schema)
        return cls._arguments_adapter  # type: ignore[return-value]

    # ──────────────────────── Introspection ────────────────────────

    @classmethod
    def service_description(cls) -> str:
        """service_description_text, else the first paragraph of the class docstring, else "No description"."""
        if cls.__dict__.get("service_description_text"):
            return cls.__dict__["service_description_text"]
        doc = cls.__dict__.get("__doc__")
        if not doc:
            return "No description"
        return inspect.cleandoc(doc).split("\n\n")[0].replace("\n", " ")

    @classmethod
    def schema_definition(cls) -> list[ArgumentDescription]:
        """Describe every declared argument."""
        return [
            ArgumentDescription(
                name=name,
                type=type_name(definition.type),
                description=definition.description,
                required=definition.required,
                default=definition.default if definition.has_default else None,
            )
            for name, definition in cls._argument_definitions.items()
        ]

    @classmethod
    def describe(cls) -> str:
        lines = [f"{cls.__name__}: {cls.service_description()}", "Arguments"]
        for arg in cls.schema_definition():
            lines.append(f"  {arg.name} ({arg.type}): {arg.description or ''}")
        return "\n".join(lines)

    @classmethod
    def pretty_print(cls) -> None:
        """Log the service description and its arguments, one line per event."""
        for line in cls.describe().splitlines():
            log.info(line)

    def __repr__(self) -> str:
        values = ", ".join(f"{name}={value!r}" for name, value in self._arguments.items())
        return f"{type(self).__name__}({values})"
