import enum
import pytest

from dataclasses import make_dataclass
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from fieldpatch.coerce import Coercer, is_admissible
from fieldpatch.error import CoercionError
from fieldpatch.numeric import Int8, Int16, Int32, Int64, UInt8, UInt16, UInt32, UInt64
from fieldpatch.validation import MaxLen
from typing import Annotated, Any, Literal, Optional, TypedDict, Union
from uuid import UUID


class Color(enum.Enum):
    RED = "red"
    GREEN = "green"


class Size(enum.IntEnum):
    SMALL = 1
    LARGE = 2


class Mode(enum.Enum):
    OFF = 0
    ON = 1


class Toggle(enum.Enum):
    NO = False
    YES = True


class Name(str):
    pass


def _coerce(python_type, value):
    return Coercer.get(python_type).coerce(value)


# ----- admissibility -----


def test_admissible_scalars():
    for python_type in (str, bool, int, float, Decimal, date, datetime, UUID, Color, Size):
        assert is_admissible(python_type)
        assert is_admissible(Optional[python_type])
        assert is_admissible(python_type | None)


def test_admissible_widths():
    for python_type in (Int8, Int16, Int32, Int64, UInt8, UInt16, UInt32, UInt64):
        assert is_admissible(python_type)
        assert is_admissible(python_type | None)


def test_admissible_annotated():
    assert is_admissible(Annotated[str, MaxLen(3)])
    assert is_admissible(Annotated[str | None, MaxLen(3)])


def test_inadmissible_collections():
    for python_type in (list, list[str], dict, dict[str, int], set[int], tuple[int, ...]):
        assert not is_admissible(python_type)
        assert not is_admissible(Optional[python_type])


def test_inadmissible_composites():
    DC = make_dataclass("DC", (("a", str),))
    TD = TypedDict("TD", {"a": str})
    assert not is_admissible(DC)
    assert not is_admissible(DC | None)
    assert not is_admissible(TD)


def test_inadmissible_other():
    assert not is_admissible(Any)
    assert not is_admissible(type(None))
    assert not is_admissible(str | int)
    assert not is_admissible(Union[str, int, None])
    assert not is_admissible(Literal["a", "b"])
    assert not is_admissible(bytes)


def test_no_coercer():
    with pytest.raises(TypeError):
        Coercer.get(list[str])


def test_cached():
    assert Coercer.get(Int8) is Coercer.get(Int8)
    assert Coercer.get(Int8) is not Coercer.get(UInt8)


# ----- str -----


def test_str():
    assert _coerce(str, "a") == "a"


def test_str_subclass():
    value = _coerce(Name, "a")
    assert value == "a"
    assert type(value) is Name


def test_str_error():
    for value in (1, 1.5, True, [], {}):
        with pytest.raises(CoercionError):
            _coerce(str, value)


# ----- bool -----


def test_bool():
    assert _coerce(bool, True) is True
    assert _coerce(bool, False) is False


def test_bool_error():
    for value in (1, 0, "true"):
        with pytest.raises(CoercionError):
            _coerce(bool, value)


# ----- int -----


def test_int():
    assert _coerce(int, 1 << 62) == 1 << 62


def test_int_error():
    for value in (True, 1.0, "1"):
        with pytest.raises(CoercionError):
            _coerce(int, value)


def test_int_width_in_range():
    assert _coerce(Int8, -128) == -128
    assert _coerce(Int8, 127) == 127
    assert _coerce(Int16, -32768) == -32768
    assert _coerce(Int32, 2147483647) == 2147483647
    assert _coerce(Int64, -(1 << 63)) == -(1 << 63)
    assert _coerce(UInt8, 255) == 255
    assert _coerce(UInt16, 65535) == 65535


def test_int_width_overflow():
    assert _coerce(Int8, 255) == -1
    assert _coerce(Int16, 65535) == -1
    assert _coerce(Int32, 4294967296) == 0
    assert _coerce(UInt8, -2) == 254
    assert _coerce(UInt32, -1) == 4294967295
    assert _coerce(UInt64, -1) == (1 << 64) - 1


# ----- float -----


def test_float():
    assert _coerce(float, 1.5) == 1.5


def test_float_widening():
    value = _coerce(float, 3)
    assert value == 3.0
    assert isinstance(value, float)


def test_float_error():
    for value in (True, "1.5", None):
        with pytest.raises(CoercionError):
            _coerce(float, value)


# ----- Decimal -----


def test_decimal():
    assert _coerce(Decimal, 1) == Decimal(1)
    assert _coerce(Decimal, 0.1) == Decimal("0.1")
    assert _coerce(Decimal, "12.345") == Decimal("12.345")
    assert _coerce(Decimal, Decimal("1.5")) == Decimal("1.5")


def test_decimal_error():
    for value in (True, "abc", []):
        with pytest.raises(CoercionError):
            _coerce(Decimal, value)


# ----- date -----


def test_date():
    value = date(2018, 6, 16)
    assert _coerce(date, value) is value
    assert _coerce(date, "2018-06-16") == value


def test_date_error():
    for value in ("2018-06-16T12:00:00Z-x", "June 16", 20180616, datetime(2018, 6, 16)):
        with pytest.raises(CoercionError):
            _coerce(date, value)


# ----- datetime -----


def test_datetime():
    value = datetime(2020, 4, 7, 12, 34, 56, tzinfo=timezone.utc)
    assert _coerce(datetime, value) is value


def test_datetime_string_utc():
    assert _coerce(datetime, "2020-04-07T12:34:56.789012Z") == datetime(
        2020, 4, 7, 12, 34, 56, 789012, tzinfo=timezone.utc
    )


def test_datetime_string_offset():
    value = _coerce(datetime, "2020-04-07T12:34:56+02:00")
    assert value.utcoffset() == timedelta(hours=2)


def test_datetime_string_naive():
    value = _coerce(datetime, "2020-04-07T12:34:56")
    assert value == datetime(2020, 4, 7, 12, 34, 56)
    assert value.tzinfo is None


def test_datetime_error():
    for value in ("yesterday", 1586262896, date(2020, 4, 7)):
        with pytest.raises(CoercionError):
            _coerce(datetime, value)


# ----- UUID -----


def test_uuid():
    value = UUID("5b3f1d7a-0e7b-4d1e-9f0c-3f5a2e7c9b11")
    assert _coerce(UUID, value) is value
    assert _coerce(UUID, str(value)) == value


def test_uuid_error():
    for value in ("not-a-uuid", 123):
        with pytest.raises(CoercionError):
            _coerce(UUID, value)


# ----- Enum -----


def test_enum():
    assert _coerce(Color, "red") is Color.RED
    assert _coerce(Size, 2) is Size.LARGE


def test_enum_error():
    with pytest.raises(CoercionError):
        _coerce(Color, "blue")
    with pytest.raises(CoercionError):
        _coerce(Size, 3)
    with pytest.raises(CoercionError):
        _coerce(Size, True)
    with pytest.raises(CoercionError):
        _coerce(Mode, True)
    with pytest.raises(CoercionError):
        _coerce(Mode, False)


def test_enum_bool_values():
    assert _coerce(Toggle, True) is Toggle.YES
    assert _coerce(Toggle, False) is Toggle.NO
    assert _coerce(Mode, 1) is Mode.ON
