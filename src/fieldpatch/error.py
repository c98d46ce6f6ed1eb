"""
Patch error module.

Every error raised by a patch derives from PatchError, as well as from the built-in exception
that most closely describes it. Each error class carries the HTTP status that an endpoint
applying the patch should respond with:

• status: HTTP status code (int)
• phrase: HTTP reason phrase

Errors caused by the request document (unknown fields, values that cannot be coerced) are
client errors. Errors caused by the destination type or by the calling code are server errors.
"""

from collections.abc import Iterable
from contextlib import contextmanager
from http import HTTPStatus
from typing import Any


class PatchError(Exception):
    """Base class for patch errors."""

    status = HTTPStatus.INTERNAL_SERVER_ERROR.value
    phrase = HTTPStatus.INTERNAL_SERVER_ERROR.phrase


class ClientError(PatchError):
    """Base class for errors caused by the source document."""

    status = HTTPStatus.BAD_REQUEST.value
    phrase = HTTPStatus.BAD_REQUEST.phrase


class ServerError(PatchError):
    """Base class for errors caused by the destination or the caller."""


class InvalidArgumentError(ServerError, ValueError):
    """Raised if a required argument is None."""


class TypeMismatchError(ServerError, TypeError):
    """Raised if a source is not a document produced by the sanctioned decoder."""


class UnknownFieldError(ClientError, ValueError):
    """
    Raised if a source document contains fields that are not present in the destination.

    Attributes:
    • names: names of all unknown fields, in document order
    • python_type: type of the destination object
    """

    def __init__(self, names: Iterable[str], python_type: type):
        names = list(names)
        super().__init__(
            f"source document has fields that are not present in destination of type "
            f"{_qualname(python_type)}: {', '.join(names)}"
        )
        self.names = names
        self.python_type = python_type


class NotWritableError(ServerError, AttributeError):
    """
    Raised if a matched destination field cannot be written.

    Attributes:
    • name: name of the destination field
    • python_type: type of the destination object
    """

    def __init__(self, name: str, python_type: type):
        super().__init__(
            f"cannot write to field {name} of destination type {_qualname(python_type)}"
        )
        self.name = name  # after AttributeError.__init__, which resets it
        self.python_type = python_type


class UnsupportedFieldTypeError(ServerError, TypeError):
    """
    Raised if the type of a matched destination field cannot be assigned from a document
    value. Collection and nested object fields always raise this error.

    Attributes:
    • name: name of the destination field
    • type: type hint of the destination field
    """

    def __init__(self, name: str, type: Any):
        super().__init__(f"unsupported type for field {name}: {type}")
        self.name = name
        self.type = type


class AmbiguousFieldError(ServerError, LookupError):
    """
    Raised if a document field name matches more than one destination field when ignoring
    case, and none of them exactly.

    Attributes:
    • name: name of the document field
    • candidates: names of the matching destination fields
    """

    def __init__(self, name: str, candidates: Iterable[str]):
        candidates = list(candidates)
        super().__init__(
            f"document field {name} matches multiple destination fields: "
            f"{', '.join(candidates)}"
        )
        self.name = name
        self.candidates = candidates


class NullNotAllowedError(ClientError, ValueError):
    """
    Raised if a document field value is null, and the destination field is not optional.

    Attributes:
    • name: name of the destination field
    """

    def __init__(self, name: str):
        super().__init__(f"null value not allowed for field {name}")
        self.name = name


class CoercionError(ClientError, ValueError):
    """
    Raised if a document value cannot be coerced to the type of its destination field.

    Attributes:
    • message: description of the error
    • path: location of the error, beginning with the field name
    """

    def __init__(self, message: str | None = None, path: list[str | int] | None = None):
        self.message = message
        self.path = path

    def __repr__(self):
        return f"{self.__class__.__name__}({self.message!r}, {self.path!r})"

    def __str__(self):
        return " ".join(str(s) for s in (self.message, self.path) if s is not None)

    @staticmethod
    @contextmanager
    def path_on_error(path: list[str | int] | str | int):
        """Context manager to add to error path in the event that a CoercionError is raised."""
        try:
            yield
        except CoercionError as ce:
            if ce.path is None:
                ce.path = []
            match path:
                case str() | int():
                    ce.path.insert(0, path)
                case list():
                    ce.path = path + ce.path
            raise


class DecodeError(ClientError, ValueError):
    """Raised if a source document cannot be decoded."""


@contextmanager
def wrap_exception(
    catch: type[BaseException] | tuple[type[BaseException], ...] = Exception,
    throw: type[BaseException] = PatchError,
):
    """
    Return a context manager that catches exception(s) and raises a different exception,
    chaining the caught exception as its cause. Exceptions that are already of the type to
    be thrown pass through unchanged.

    Parameters:
    • catch: exception class or tuple of exception classes to catch
    • throw: exception class to raise
    """
    try:
        yield
    except throw:
        raise
    except catch as e:
        if message := str(e):
            raise throw(message) from e
        raise throw from e


def _qualname(python_type: type) -> str:
    return f"{python_type.__module__}.{python_type.__qualname__}"
