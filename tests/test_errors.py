import pytest

from errors import (
    BitDataViewError,
    BitRangeError,
    BitTypeError,
    CapacityError,
    check_int,
    check_uint,
    is_integer,
)


def test_hierarchy_matches_builtins():
    assert issubclass(BitTypeError, TypeError)
    assert issubclass(BitRangeError, ValueError)
    assert issubclass(CapacityError, BitRangeError)
    for cls in (BitTypeError, BitRangeError, CapacityError):
        assert issubclass(cls, BitDataViewError)


def test_is_integer_rejects_bool_and_float():
    assert is_integer(3)
    assert not is_integer(True)
    assert not is_integer(3.0)


def test_check_uint():
    assert check_uint(5, 5) == 5
    with pytest.raises(BitRangeError):
        check_uint(6, 5)
    with pytest.raises(BitRangeError):
        check_uint(-1, 5)
    with pytest.raises(BitTypeError, match="width"):
        check_uint("1", 5, "width")


def test_check_int():
    assert check_int(-128, -128, 127) == -128
    with pytest.raises(BitRangeError):
        check_int(128, -128, 127)
    with pytest.raises(BitTypeError):
        check_int(False, -1, 1)
