"""
Destination field inspection module.

The fields of a destination type are its public, instance-level attributes that are declared
with a type annotation, and its public properties. Fields inherited from base classes are
included. Fields are reported whether or not their types can be patched; type admissibility
is a concern of the patch itself.
"""

import dataclasses
import functools
import keyword
import typing

from fieldpatch.annotation import ReadOnly
from fieldpatch.data import datacls
from fieldpatch.types import union_annotations
from typing import Any, ClassVar


# keywords have _ suffix in attribute names (e.g. "class_", "from_", ...)
_kw = {k + "_": k for k in keyword.kwlist}


@datacls
class Field:
    """
    Describes a field of a destination type.

    Parameters and attributes:
    • name: name of the field in a source document
    • attr: name of the attribute in the destination object
    • type: type hint of the field
    • settable: whether the field can be written
    """

    name: str
    attr: str
    type: Any
    settable: bool


def _is_class_var(hint: Any) -> bool:
    return hint is ClassVar or typing.get_origin(hint) is ClassVar


def _is_read_only(hint: Any) -> bool:
    return ReadOnly(True) in union_annotations(hint)


def _is_frozen(python_type: type) -> bool:
    params = getattr(python_type, "__dataclass_params__", None)
    return bool(params and params.frozen)


def _property_type(prop: property) -> Any:
    if prop.fget is None:
        return Any
    return typing.get_type_hints(prop.fget, include_extras=True).get("return", Any)


@functools.lru_cache(maxsize=256)
def get_fields(python_type: type) -> tuple[Field, ...]:
    """
    Return the fields of a destination type.

    Parameters:
    • python_type: type of the destination object

    A field is not settable if it is a property without a setter, a field of a frozen
    dataclass, or annotated with ReadOnly(True).

    Attributes that are assigned at runtime without a class-level annotation are not fields.
    """

    if not isinstance(python_type, type):
        raise TypeError(f"expecting a class; received {python_type!r}")

    frozen = _is_frozen(python_type)
    fields = {}

    for attr, hint in typing.get_type_hints(python_type, include_extras=True).items():
        if attr.startswith("_") or _is_class_var(hint) or isinstance(hint, dataclasses.InitVar):
            continue
        fields[attr] = Field(
            name=_kw.get(attr, attr),
            attr=attr,
            type=hint,
            settable=not frozen and not _is_read_only(hint),
        )

    for cls in reversed(python_type.__mro__):
        for attr, member in vars(cls).items():
            if attr.startswith("_") or not isinstance(member, property):
                continue
            hint = _property_type(member)
            fields[attr] = Field(
                name=_kw.get(attr, attr),
                attr=attr,
                type=hint,
                settable=member.fset is not None and not frozen and not _is_read_only(hint),
            )

    return tuple(fields.values())
