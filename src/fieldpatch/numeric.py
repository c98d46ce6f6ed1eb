"""
Module for fixed-width integer types.

Document integers are always decoded at the widest signed width (64 bits). Destination
fields declare a narrower width through a Width annotation; the aliases in this module are
the conventional way to do so:

    @dataclass
    class Reading:
        sensor: Int16
        offset: Int8 | None

Narrowing behaves like a native integer cast: out-of-range values wrap around in two's
complement, without an overflow check.
"""

import functools

from fieldpatch.annotation import Annotation
from fieldpatch.validation import validate_arguments
from typing import Annotated, Any


WIDTHS = (8, 16, 32, 64)


def narrow(value: int, bits: int, signed: bool = True) -> int:
    """
    Return an integer value narrowed to a bit width.

    Parameters:
    • value: integer value to narrow
    • bits: bit width of the result
    • signed: whether the result is a signed (two's complement) integer
    """
    value &= (1 << bits) - 1
    if signed and value >> (bits - 1):
        value -= 1 << bits
    return value


to_int8 = functools.partial(narrow, bits=8)
to_int16 = functools.partial(narrow, bits=16)
to_int32 = functools.partial(narrow, bits=32)
to_int64 = functools.partial(narrow, bits=64)
to_uint8 = functools.partial(narrow, bits=8, signed=False)
to_uint16 = functools.partial(narrow, bits=16, signed=False)
to_uint32 = functools.partial(narrow, bits=32, signed=False)
to_uint64 = functools.partial(narrow, bits=64, signed=False)


class Width(Annotation):
    """
    Type annotation to express the bit width of an integer.

    Parameters:
    • value: number of bits; one of 8, 16, 32 or 64
    • signed: whether the integer is signed  [True]
    """

    __slots__ = {"signed"}

    @validate_arguments
    def __init__(self, value: int, signed: bool = True):
        if value not in WIDTHS:
            raise ValueError(f"unsupported integer width: {value}")
        self.value = value
        self.signed = signed

    def __repr__(self):
        return f"Width({self.value!r}, signed={self.signed!r})"

    def __eq__(self, other: Any):
        return super().__eq__(other) and self.signed == other.signed

    def __hash__(self):
        return hash((self.__class__, self.value, self.signed))

    @property
    def min(self) -> int:
        return -(1 << (self.value - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        return (1 << (self.value - 1 if self.signed else self.value)) - 1

    def narrow(self, value: int) -> int:
        """Return value narrowed to this width."""
        return narrow(value, self.value, self.signed)


Int8 = Annotated[int, Width(8)]
Int16 = Annotated[int, Width(16)]
Int32 = Annotated[int, Width(32)]
Int64 = Annotated[int, Width(64)]
UInt8 = Annotated[int, Width(8, signed=False)]
UInt16 = Annotated[int, Width(16, signed=False)]
UInt32 = Annotated[int, Width(32, signed=False)]
UInt64 = Annotated[int, Width(64, signed=False)]
