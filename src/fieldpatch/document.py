"""
Source document module.

A document is the decoded form of a patch request body: an immutable, ordered mapping of
top-level field names to values. Leaf values are str, bool, None, int, float or an atomic
value such as datetime; nested objects and arrays may be present, but are opaque to a patch.

Integers in a document are always held at the widest signed width (64 bits). Narrowing to the
width of a destination field is performed when the document is applied.
"""

import json

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from fieldpatch.error import DecodeError, InvalidArgumentError, TypeMismatchError
from typing import Any


INT_MIN = -(1 << 63)
INT_MAX = (1 << 63) - 1


def _check_int(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        if not INT_MIN <= value <= INT_MAX:
            raise ValueError(f"integer out of 64-bit range: {value}")
    return value


class Document(Mapping[str, Any]):
    """
    Top-level fields of a decoded source document.

    Parameters:
    • fields: mapping of field names to values

    Documents are normally obtained through the loads function; decoders of other formats can
    construct them directly.
    """

    __slots__ = {"_fields"}

    def __init__(self, fields: Mapping[str, Any]):
        if not isinstance(fields, Mapping):
            raise TypeError(f"expecting mapping; received {type(fields)}")
        for key, value in fields.items():
            if not isinstance(key, str):
                raise TypeError(f"document field name must be str; received {type(key)}")
            _check_int(value)
        self._fields = dict(fields)

    def __getitem__(self, name: str) -> Any:
        return self._fields[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self):
        return f"Document({self._fields!r})"


@contextmanager
def _wrap(exception):
    try:
        yield
    except Exception as e:
        if isinstance(e, exception):
            raise
        raise exception(str(e)) from e


def _parse_int(s: str) -> int:
    with _wrap(DecodeError):
        return _check_int(int(s))


def _parse_constant(s: str):
    raise DecodeError(f"unsupported JSON constant: {s}")


def loads(data: str | bytes | bytearray) -> Document:
    """
    Decode a JSON object into a document.

    Parameters:
    • data: JSON text, or UTF-8, UTF-16 or UTF-32 encoded bytes

    Integers outside the signed 64-bit range and the non-standard NaN and Infinity constants
    are rejected. Raises DecodeError if the data does not decode to a JSON object.
    """
    if not isinstance(data, str | bytes | bytearray):
        raise DecodeError(f"expecting str or bytes; received {type(data)}")
    with _wrap(DecodeError):
        value = json.loads(data, parse_int=_parse_int, parse_constant=_parse_constant)
    if not isinstance(value, dict):
        raise DecodeError(f"expecting JSON object; received {type(value).__name__}")
    return Document(value)


def extract(source: Document) -> dict[str, Any]:
    """
    Return the top-level fields of a source document, in document order.

    Raises InvalidArgumentError if source is None, and TypeMismatchError if source is not a
    Document.
    """
    if source is None:
        raise InvalidArgumentError("source is required")
    if not isinstance(source, Document):
        raise TypeMismatchError(f"expecting source of type Document; received {type(source)}")
    return dict(source.items())
