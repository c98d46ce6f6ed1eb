"""
Partial modification (patch) module.

A patch copies the fields named in a source document onto the matching fields of a
destination object, leaving all other fields of the destination untouched. This is the
semantics of an HTTP PATCH request that carries a sparse representation of a resource:

    document = fieldpatch.document.loads(request_body)
    patch(document, employee)

Partial effect: unknown document fields are detected before any field is written, so an
UnknownFieldError leaves the destination unmodified. All other errors are raised as fields are
written in document order; fields written before the failing field remain written. To check
and coerce every field before writing any, set the atomic option.
"""

import logging

from collections.abc import Callable, Iterator
from fieldpatch.coerce import Coercer
from fieldpatch.data import datacls
from fieldpatch.document import Document, extract
from fieldpatch.error import (
    AmbiguousFieldError,
    CoercionError,
    InvalidArgumentError,
    NotWritableError,
    NullNotAllowedError,
    UnknownFieldError,
    UnsupportedFieldTypeError,
    wrap_exception,
)
from fieldpatch.fields import Field, get_fields
from fieldpatch.types import is_optional, strip_optional
from fieldpatch.validation import ValidationError, validate
from types import NoneType
from typing import Any


_logger = logging.getLogger(__name__)


@datacls
class PatchOptions:
    """
    Options that control how a document is applied to a destination object.

    Parameters and attributes:
    • ignore_case: match field names without regard to letter case  [True]
    • ignore_unknown_fields: skip document fields with no matching destination field  [False]
    • atomic: check and coerce all fields before writing any  [False]

    Case-insensitive matching compares names character by character, using the simple
    uppercase mapping of each character; it is not locale-sensitive. Characters whose uppercase
    form is more than one character (e.g. "ß") match only themselves.
    """

    ignore_case: bool = True
    ignore_unknown_fields: bool = False
    atomic: bool = False

    def __post_init__(self):
        validate(self, PatchOptions)


def _upper(c: str) -> str:
    u = c.upper()
    return u if len(u) == 1 else c


def _ordinal_fold(name: str) -> str:
    return "".join(_upper(c) for c in name)


def _key_function(ignore_case: bool) -> Callable[[str], str]:
    return _ordinal_fold if ignore_case else lambda name: name


class _Matcher:
    """Matches document field names to destination fields."""

    def __init__(self, fields: tuple[Field, ...], key: Callable[[str], str]):
        self.key = key
        self.exact = {field.name: field for field in fields}
        self.keyed = {}
        for field in fields:
            self.keyed.setdefault(key(field.name), []).append(field)

    def __contains__(self, name: str) -> bool:
        return self.key(name) in self.keyed

    def match(self, name: str) -> Field | None:
        if field := self.exact.get(name):
            return field
        candidates = self.keyed.get(self.key(name), ())
        if len(candidates) > 1:
            raise AmbiguousFieldError(name, (field.name for field in candidates))
        return candidates[0] if candidates else None


def _coerce(field: Field, coercer: Coercer, value: Any) -> Any:
    if value is None:
        if not is_optional(field.type):
            raise NullNotAllowedError(field.name)
        return None
    with CoercionError.path_on_error(field.name):
        value = coercer.coerce(value)
        with wrap_exception(catch=ValidationError, throw=CoercionError):
            validate(value, field.type)
    return value


def _prepare(
    fields: dict[str, Any], matcher: _Matcher, python_type: type
) -> Iterator[tuple[Field, Any]]:
    for name, value in fields.items():
        field = matcher.match(name)
        if field is None:
            continue
        if not field.settable:
            raise NotWritableError(field.name, python_type)
        try:
            coercer = Coercer.get(strip_optional(field.type))
        except TypeError as te:
            raise UnsupportedFieldTypeError(field.name, field.type) from te
        yield field, _coerce(field, coercer, value)


def patch(source: Document, destination: Any, options: PatchOptions | None = None) -> NoneType:
    """
    Apply a source document to a destination object.

    Parameters:
    • source: document containing the fields to update
    • destination: object to update
    • options: options that control the patch  [default options]

    Errors:
    • InvalidArgumentError: source or destination is None
    • TypeMismatchError: source is not a Document
    • UnknownFieldError: document has fields not in destination, and unknown fields are not
      ignored; nothing is written
    • AmbiguousFieldError: a document field matches more than one destination field
    • NotWritableError: a matched destination field cannot be written
    • UnsupportedFieldTypeError: a matched destination field type cannot be patched
    • NullNotAllowedError: a null value is patched into a field that is not optional
    • CoercionError: a value cannot be coerced to the type of its field
    """

    if source is None:
        raise InvalidArgumentError("source is required")
    if destination is None:
        raise InvalidArgumentError("destination is required")
    if options is None:
        options = PatchOptions()

    fields = extract(source)
    python_type = type(destination)
    matcher = _Matcher(get_fields(python_type), _key_function(options.ignore_case))

    if _logger.isEnabledFor(logging.DEBUG):
        _logger.debug(
            "patch %s with %d field(s): %s",
            python_type.__qualname__,
            len(fields),
            ", ".join(fields),
        )

    if not options.ignore_unknown_fields:
        unknown = [name for name in fields if name not in matcher]
        if unknown:
            raise UnknownFieldError(unknown, python_type)

    writes = _prepare(fields, matcher, python_type)
    if options.atomic:
        writes = list(writes)

    for field, value in writes:
        try:
            setattr(destination, field.attr, value)
        except AttributeError as ae:
            raise NotWritableError(field.name, python_type) from ae
        _logger.debug("patched field %s", field.name)
