import pytest

import fieldpatch.error as error


def test_status():
    assert error.UnknownFieldError(["a"], dict).status == 400
    assert error.NullNotAllowedError("a").status == 400
    assert error.CoercionError("a").status == 400
    assert error.DecodeError("a").status == 400
    assert error.NotWritableError("a", dict).status == 500
    assert error.UnsupportedFieldTypeError("a", list).status == 500
    assert error.InvalidArgumentError("a").status == 500
    assert error.TypeMismatchError("a").phrase == "Internal Server Error"
    assert error.ClientError.phrase == "Bad Request"


def test_builtin_bases():
    assert issubclass(error.InvalidArgumentError, ValueError)
    assert issubclass(error.TypeMismatchError, TypeError)
    assert issubclass(error.UnknownFieldError, ValueError)
    assert issubclass(error.NotWritableError, AttributeError)
    assert issubclass(error.UnsupportedFieldTypeError, TypeError)
    assert issubclass(error.AmbiguousFieldError, LookupError)
    assert issubclass(error.NullNotAllowedError, ValueError)
    assert issubclass(error.CoercionError, ValueError)


def test_unknown_field_message():
    class Foo:
        pass

    e = error.UnknownFieldError(iter(["a", "b"]), Foo)
    assert e.names == ["a", "b"]
    assert str(e).endswith("test_unknown_field_message.<locals>.Foo: a, b")


def test_coercion_error_path():
    with pytest.raises(error.CoercionError) as exc_info:
        with error.CoercionError.path_on_error("a"):
            with error.CoercionError.path_on_error(["b", 1]):
                raise error.CoercionError("oops")
    assert exc_info.value.path == ["a", "b", 1]
    assert str(exc_info.value) == "oops ['a', 'b', 1]"


def test_wrap_exception():
    try:
        with error.wrap_exception(catch=ValueError, throw=RuntimeError):
            raise ValueError("oops")
    except RuntimeError as re:
        cause = re.__cause__
        assert type(cause) is ValueError
        assert cause.args == ("oops",)
        assert re.args == ("oops",)


def test_wrap_exception_passthrough():
    with pytest.raises(error.CoercionError) as exc_info:
        with error.wrap_exception(catch=ValueError, throw=error.CoercionError):
            raise error.CoercionError("oops", ["a"])
    assert exc_info.value.path == ["a"]
    assert exc_info.value.__cause__ is None


def test_wrap_exception_uncaught():
    with pytest.raises(KeyError):
        with error.wrap_exception(catch=ValueError, throw=RuntimeError):
            raise KeyError("a")
