"""
Named type catalogue for service arguments.

Every member is an annotation pydantic understands, so validation and
coercion stay pydantic's job. Scalar members of Types are strict: a String
argument refuses 42. Types.Coercible holds the lax counterparts that
convert compatible input ("42" becomes 42). Array values arrive as
tuples (lists are accepted and converted), Hash accepts any mapping.

Host applications extend the catalogue by subclassing:

    class Type(Types):
        Email = Types.constrained(Types.String, pattern=r".+@.+")
"""

from __future__ import annotations

import datetime as dt
import decimal
from typing import Annotated, Any, Callable, Literal, Optional, get_args, get_origin

from pydantic import AfterValidator, BeforeValidator, Field, InstanceOf, Strict


def _stringify(value: Any) -> Any:
    if isinstance(value, (int, float, decimal.Decimal)) and not isinstance(value, bool):
        return str(value)
    return value


class Types:
    """Strict argument types plus builders for composite ones."""

    String = Annotated[str, Strict()]
    Integer = Annotated[int, Strict()]
    Float = Annotated[float, Strict()]
    Decimal = Annotated[decimal.Decimal, Strict()]
    Bool = Annotated[bool, Strict()]
    Boolean = Bool
    Date = Annotated[dt.date, Strict()]
    DateTime = Annotated[dt.datetime, Strict()]
    Time = Annotated[dt.time, Strict()]
    Array = tuple
    Hash = dict
    Any = Any
    Nil = None

    UpCasedString = Annotated[str, Strict(), AfterValidator(str.upper)]

    class Coercible:
        String = Annotated[str, BeforeValidator(_stringify)]
        Integer = int
        Float = float
        Decimal = decimal.Decimal
        Bool = bool
        Date = dt.date
        DateTime = dt.datetime

    @staticmethod
    def enum(*values: Any) -> Any:
        """A closed set of accepted values: Types.enum("draft", "published")."""
        if not values:
            raise ValueError("enum() needs at least one value")
        return Literal[values]

    @staticmethod
    def instance(cls: type) -> Any:
        """Any instance of cls, checked with isinstance and never coerced."""
        return InstanceOf[cls]

    @staticmethod
    def array_of(item: Any) -> Any:
        return tuple[item, ...]

    @staticmethod
    def hash_of(key: Any, value: Any) -> Any:
        return dict[key, value]

    @staticmethod
    def optional(tp: Any) -> Any:
        return Optional[tp]

    @staticmethod
    def constrained(tp: Any, **constraints: Any) -> Any:
        """Attach pydantic Field constraints: constrained(Types.Integer, gt=0)."""
        return Annotated[tp, Field(**constraints)]

    @staticmethod
    def constructor(tp: Any, fn: Callable[[Any], Any]) -> Any:
        """Validate as tp, then pass the value through fn."""
        return Annotated[tp, AfterValidator(fn)]


def _catalogue() -> list[tuple[str, Any]]:
    entries: list[tuple[str, Any]] = []
    for prefix, namespace in (("", Types), ("Coercible.", Types.Coercible)):
        for name, member in vars(namespace).items():
            if name.startswith("_") or name == "Coercible" or isinstance(member, staticmethod):
                continue
            entries.append((prefix + name, member))
    return entries


# Boolean is listed after Bool, so an alias renders under its first name.
_NAMED_TYPES = _catalogue()


def _catalogue_name(tp: Any) -> str | None:
    for name, member in _NAMED_TYPES:
        if member is tp or (get_origin(member) is Annotated and member == tp):
            return name
    return None


def type_name(tp: Any) -> str:
    """
    Human-readable name of an argument type, for introspection output.

    Catalogue members render with their catalogue name ("String",
    "Coercible.Integer"); anything else falls back to its class name or
    its typing repr.
    """
    name = _catalogue_name(tp)
    if name is not None:
        return name
    if get_origin(tp) is Annotated:
        # Nested Annotated flattens, so constrained(Types.String, ...) is
        # Annotated[str, Strict(), FieldInfo]; peel metadata off the end.
        base, *metadata = get_args(tp)
        for end in range(len(metadata) - 1, 0, -1):
            name = _catalogue_name(Annotated[(base, *metadata[:end])])
            if name is not None:
                return name
        return type_name(base)
    if isinstance(tp, type):
        return tp.__name__
    return repr(tp).replace("typing.", "")
