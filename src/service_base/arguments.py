"""
The argument DSL — typed, optionally-defaulted inputs declared on a service.

    class PublishPost(Service):
        post_id = argument(Types.Integer, description="Post to publish")
        notify = argument(Types.Bool, default=True)
        note = argument(Types.String, optional=True)

Validation and coercion are delegated to pydantic: every argument type is
an annotation pydantic can validate. This module only checks that a
declaration makes sense and exposes the validated values as read-only
attributes on the service instance.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from service_base.errors import ArgumentDefinitionError


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()

# Service.run() keyword reserved for the match handler.
_RESERVED_NAMES = frozenset({"match"})


class Argument:
    """
    A declared service input. Works as a read-only data descriptor.

    required  — the key must be given
    default   — the key may be omitted; the default is used
    optional  — the key may be omitted and the value may be None
    """

    def __init__(
        self,
        type: Any,
        *,
        description: str | None = None,
        default: Any = MISSING,
        optional: bool = False,
    ) -> None:
        self.type = type
        self.description = description or None
        self.default = default
        self.optional = optional
        self.name: str | None = None

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    @property
    def required(self) -> bool:
        return not self.has_default and not self.optional

    @property
    def annotation(self) -> Any:
        """The annotation pydantic validates: Optional[type] for optional arguments."""
        if self.optional:
            return Optional[self.type]
        return self.type

    def __set_name__(self, owner: type, name: str) -> None:
        from service_base.service import Service

        if not (isinstance(owner, type) and issubclass(owner, Service)):
            raise TypeError(
                f"argument {name!r} should be declared on a Service subclass, "
                f"not on {getattr(owner, '__name__', owner)!r}"
            )
        if name.startswith("_") or name in _RESERVED_NAMES or hasattr(Service, name):
            raise ArgumentDefinitionError(
                f"{name!r} cannot be used as an argument name on {owner.__name__}"
            )
        self._validate_frozen_default(name)
        self._validate_optional_or_default(name)
        self._validate_default_type(name)
        self.name = name

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return instance._arguments[self.name]

    def __set__(self, instance: Any, value: Any) -> None:
        raise AttributeError(f"argument {self.name!r} is read-only")

    def __repr__(self) -> str:
        parts = [f"{self.name!s}", repr(self.type)]
        if self.has_default:
            parts.append(f"default={self.default!r}")
        if self.optional:
            parts.append("optional=True")
        return f"Argument({', '.join(parts)})"

    # ──────────────────────── Declaration checks ────────────────────────

    def _validate_frozen_default(self, name: str) -> None:
        """A default is shared by every call, so it has to be immutable."""
        if not self.has_default:
            return
        if isinstance(self.default, MappingProxyType):
            return
        try:
            hash(self.default)
        except TypeError:
            raise ArgumentDefinitionError(
                f"{self.default!r} provided as a default value for {name} is mutable. "
                "Please provide an immutable default (a tuple, frozenset or MappingProxyType)."
            ) from None

    def _validate_optional_or_default(self, name: str) -> None:
        if self.optional and self.has_default and self.default is not None:
            raise ArgumentDefinitionError(
                f"{name} cannot specify both a default value and optional=True. "
                "Only specify a default value if the value is optional."
            )

    def _validate_default_type(self, name: str) -> None:
        if not self.has_default:
            return
        try:
            TypeAdapter(self.annotation).validate_python(self.default)
        except ValidationError as e:
            raise ArgumentDefinitionError(
                f"{self.default!r} is not a valid default for {name}: {e.errors()[0]['msg']}"
            ) from e


def argument(
    type: Any,
    *,
    description: str | None = None,
    default: Any = MISSING,
    optional: bool = False,
) -> Any:
    """
    Declare a service argument.

    Returns an Argument descriptor; the return type is Any so a class body
    like `count = argument(Types.Integer)` type-checks as a plain value.
    """
    return Argument(type, description=description, default=default, optional=optional)
