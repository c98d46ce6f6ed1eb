"""Module for type hint annotations."""


from fieldpatch.validation import validate_arguments
from typing import Any


class Annotation:
    """Base class for annotations."""

    __slots__ = {"value"}

    def __repr__(self):
        return f"{type(self).__name__}({self.value!r})"

    def __str__(self):
        return str(self.value)

    def __eq__(self, other: Any):
        return type(self) == type(other) and self.value == other.value

    def __hash__(self):
        try:
            return hash((self.__class__, self.value))
        except TypeError:
            return super().__hash__()


class ReadOnly(Annotation):
    """
    Type annotation to indicate a value is read-only. A field annotated with ReadOnly(True)
    is never written by a patch.
    """

    @validate_arguments
    def __init__(self, value: bool):
        self.value = value
