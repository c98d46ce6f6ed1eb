"""Module to manage types and type hints."""

import types
import typing

from collections.abc import Iterable
from types import NoneType
from typing import Any


def split_annotated(type_hint: Any) -> tuple[Any, tuple[Any, ...]]:
    """Return a tuple separating the python type and annotations."""
    if not typing.get_origin(type_hint) is typing.Annotated:
        return type_hint, ()
    args = typing.get_args(type_hint)
    return args[0], args[1:]


def strip_annotations(type_hint: Any) -> Any:
    """Return the python type of a type hint, stripped of any annotations."""
    return split_annotated(type_hint)[0]


def is_union(type_hint: Any) -> bool:
    """Return if the specified type hint is a union type."""
    python_type, _ = split_annotated(type_hint)
    return typing.get_origin(python_type) in {types.UnionType, typing.Union}


def is_optional(type_hint: Any) -> bool:
    """
    Return if the specified type is optional.

    A type is optional if its type hint matches any of the following:
    • None
    • Optional[...]
    • Union[..., None]
    • ... | None
    """
    python_type, _ = split_annotated(type_hint)
    if not is_union(python_type):
        return python_type is NoneType
    for arg in typing.get_args(python_type):
        if is_optional(arg):
            return True
    return False


def strip_optional(type_hint):
    """Return a union type with optionality stripped."""
    python_type, annotations = split_annotated(type_hint)
    if not is_union(python_type):
        return type_hint
    args = (strip_optional(arg) for arg in typing.get_args(python_type) if arg is not NoneType)
    python_type = union_type(args)
    if not annotations:
        return python_type
    return typing.Annotated[tuple([python_type, *annotations])]


def union_annotations(type_hint: Any) -> tuple[Any, ...]:
    """
    Return the annotations of a type hint, including annotations of the members of a union
    type hint.
    """
    python_type, annotations = split_annotated(type_hint)
    if is_union(python_type):
        for arg in typing.get_args(python_type):
            annotations += union_annotations(arg)
    return annotations


def is_subclass(cls: Any, class_or_tuple: type | tuple[type, ...]) -> bool:
    """A more forgiving issubclass."""
    try:
        return issubclass(cls, class_or_tuple)
    except TypeError:
        return False


def is_instance(obj: Any, class_or_tuple: type | tuple[type, ...]) -> bool:
    """A more forgiving isinstance."""
    try:
        return isinstance(obj, class_or_tuple)
    except TypeError:
        return False


def union_type(type_hints: Iterable[Any]) -> types.UnionType:
    """Construct a union type from an iterable of types."""
    types = iter(type_hints)
    try:
        result = types.__next__()
    except StopIteration:
        return NoneType
    while True:
        try:
            result |= types.__next__()
        except StopIteration:
            break
    return result
