"""
Module to coerce document values to the types of destination fields.

The types that a coercer exists for are the admissible field types: scalar types whose values
can be assigned from a document leaf value. Collections and nested objects are not
admissible.

Coercers operate on non-null values; optionality of a field is handled by the caller, which
looks up the coercer of the field type with optionality stripped.
"""

import enum
import iso8601

from contextlib import suppress
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from fieldpatch.error import CoercionError
from fieldpatch.numeric import Width
from fieldpatch.types import is_subclass, split_annotated, strip_annotations, strip_optional
from typing import Any, Generic, TypeVar
from uuid import UUID


PT = TypeVar("PT")  # Python type hint


def _received(value: Any) -> str:
    return type(value).__name__


class Coercer(Generic[PT]):
    """
    Base class for coercion of document values to a Python type.

    Parameters:
    • python_type: type hint of the destination field, stripped of optionality
    """

    _cache = {}

    def __init__(self, python_type: Any):
        self.python_type = python_type
        self.raw_type = strip_annotations(python_type)

    @staticmethod
    def handles(python_type: Any) -> bool:
        """Return True if the coercer handles the specified Python type."""
        raise NotImplementedError

    @classmethod
    def get(cls, python_type: Any) -> "Coercer[PT]":
        """
        Return a coercer that handles the specified Python type. Raises TypeError if the type
        is not admissible.
        """
        with suppress(KeyError, TypeError):  # unhashable types are not cached
            return Coercer._cache[python_type]
        for coercer_class in Coercer.__subclasses__():
            if coercer_class.handles(python_type):
                coercer = coercer_class(python_type)
                with suppress(TypeError):
                    Coercer._cache[python_type] = coercer
                return coercer
        raise TypeError(f"no coercer for {python_type}")

    def coerce(self, value: Any) -> PT:
        """Coerce a non-null document value to the Python type."""
        raise NotImplementedError


# ----- Enum -----


class EnumCoercer(Coercer[enum.Enum]):
    """
    Coerces a value to the enumeration member that has that value. Boolean values are only
    accepted by enumerations that have boolean member values.
    """

    @staticmethod
    def handles(python_type: Any) -> bool:
        return is_subclass(strip_annotations(python_type), enum.Enum)

    def coerce(self, value: Any) -> enum.Enum:
        if isinstance(value, bool) and not any(
            isinstance(member.value, bool) for member in self.raw_type
        ):
            raise CoercionError(f"expecting {self.raw_type.__name__}; received bool")
        try:
            return self.raw_type(value)
        except ValueError:
            raise CoercionError(f"not a {self.raw_type.__name__} value: {value!r}")


# ----- str -----


class StrCoercer(Coercer[str]):
    """Passes through string values."""

    @staticmethod
    def handles(python_type: Any) -> bool:
        return is_subclass(strip_annotations(python_type), str)

    def coerce(self, value: Any) -> str:
        if not isinstance(value, str):
            raise CoercionError(f"expecting str; received {_received(value)}")
        return value if self.raw_type is str else self.raw_type(value)


# ----- bool -----


class BoolCoercer(Coercer[bool]):
    """Passes through boolean values."""

    @staticmethod
    def handles(python_type: Any) -> bool:
        return strip_annotations(python_type) is bool

    def coerce(self, value: Any) -> bool:
        if not isinstance(value, bool):
            raise CoercionError(f"expecting bool; received {_received(value)}")
        return value


# ----- int -----


class IntCoercer(Coercer[int]):
    """
    Coerces integer values to an integer type. If the type is annotated with a Width, the
    value is narrowed to that width; out-of-range values wrap around.
    """

    @staticmethod
    def handles(python_type: Any) -> bool:
        python_type = strip_annotations(python_type)
        return is_subclass(python_type, int) and not is_subclass(python_type, bool)

    def __init__(self, python_type: Any):
        super().__init__(python_type)
        _, annotations = split_annotated(python_type)
        self.width = next((a for a in annotations if isinstance(a, Width)), None)

    def coerce(self, value: Any) -> int:
        if not isinstance(value, int) or isinstance(value, bool):
            raise CoercionError(f"expecting int; received {_received(value)}")
        if self.width:
            value = self.width.narrow(value)
        return value if self.raw_type is int else self.raw_type(value)


# ----- float -----


class FloatCoercer(Coercer[float]):
    """Coerces float and integer values to float."""

    @staticmethod
    def handles(python_type: Any) -> bool:
        return is_subclass(strip_annotations(python_type), float)

    def coerce(self, value: Any) -> float:
        if isinstance(value, bool) or not isinstance(value, int | float):
            raise CoercionError(f"expecting float; received {_received(value)}")
        return float(value)


# ----- Decimal -----


class DecimalCoercer(Coercer[Decimal]):
    """
    Coerces integer, float and numeric string values to Decimal. Float values are converted
    through their shortest string representation.
    """

    @staticmethod
    def handles(python_type: Any) -> bool:
        return is_subclass(strip_annotations(python_type), Decimal)

    def coerce(self, value: Any) -> Decimal:
        match value:
            case bool():
                raise CoercionError("expecting Decimal; received bool")
            case Decimal():
                return value
            case int() | float() | str():
                try:
                    return Decimal(str(value))
                except InvalidOperation:
                    raise CoercionError(f"not a decimal number: {value!r}")
        raise CoercionError(f"expecting Decimal; received {_received(value)}")


# ----- date -----


class DateCoercer(Coercer[date]):
    """
    Coerces date values and RFC 3339 date strings (e.g. "2018-06-16") to date.
    """

    @staticmethod
    def handles(python_type: Any) -> bool:
        python_type = strip_annotations(python_type)
        return is_subclass(python_type, date) and not is_subclass(python_type, datetime)

    def coerce(self, value: Any) -> date:
        if isinstance(value, datetime):
            raise CoercionError("expecting date; received datetime")
        if isinstance(value, date):
            return value
        if not isinstance(value, str):
            raise CoercionError(f"expecting date; received {_received(value)}")
        try:
            return date.fromisoformat(value)
        except ValueError:
            raise CoercionError(f"not an RFC 3339 date: {value!r}")


# ----- datetime -----


class DatetimeCoercer(Coercer[datetime]):
    """
    Coerces datetime values and ISO 8601 formatted strings to datetime. A string without a
    timezone offset yields a naive datetime.

    Example: "2020-04-07T12:34:56.789012Z".
    """

    @staticmethod
    def handles(python_type: Any) -> bool:
        return is_subclass(strip_annotations(python_type), datetime)

    def coerce(self, value: Any) -> datetime:
        if isinstance(value, datetime):
            return value
        if not isinstance(value, str):
            raise CoercionError(f"expecting datetime; received {_received(value)}")
        try:
            return iso8601.parse_date(value, default_timezone=None)
        except iso8601.ParseError:
            raise CoercionError(f"not an ISO 8601 datetime: {value!r}")


# ----- UUID -----


class UUIDCoercer(Coercer[UUID]):
    """Coerces UUID values and their string representations to UUID."""

    @staticmethod
    def handles(python_type: Any) -> bool:
        return is_subclass(strip_annotations(python_type), UUID)

    def coerce(self, value: Any) -> UUID:
        if isinstance(value, UUID):
            return value
        if not isinstance(value, str):
            raise CoercionError(f"expecting UUID; received {_received(value)}")
        try:
            return UUID(value)
        except ValueError:
            raise CoercionError(f"not a UUID: {value!r}")


def is_admissible(type_hint: Any) -> bool:
    """
    Return if a field of the specified type can be assigned from a document value.

    Admissible types are str, bool, int (including fixed-width integer types), float,
    Decimal, date, datetime, UUID and enumerations, each optionally annotated or optional.
    """
    try:
        Coercer.get(strip_optional(type_hint))
    except TypeError:
        return False
    return True
