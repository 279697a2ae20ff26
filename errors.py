class BitDataViewError(Exception):
    """Base class for every error raised by the bit data view.

    Subclasses also derive from the matching builtin exception, so callers
    may catch either ``BitDataViewError`` or ``TypeError``/``ValueError``.
    """


class BitTypeError(BitDataViewError, TypeError):
    """An argument is not an integer where one is required, or has the
    wrong type."""


class BitRangeError(BitDataViewError, ValueError):
    """A width, offset or value lies outside its allowed bounds."""


class CapacityError(BitRangeError):
    """A fixed-capacity buffer would have to grow to complete the call."""


def is_integer(value) -> bool:
    """Return True for real integers, rejecting ``bool``.

    :param value: Object to test.
    :returns: Whether ``value`` is an ``int`` and not a ``bool``.
    :rtype: bool
    """
    return isinstance(value, int) and not isinstance(value, bool)


def check_uint(value, max_value: int, name: str = "value") -> int:
    """Validate ``0 <= value <= max_value``.

    :param value: Candidate unsigned integer.
    :param max_value: Inclusive upper bound.
    :type max_value: int
    :param name: Argument name used in error messages.
    :type name: str
    :returns: ``value`` unchanged.
    :rtype: int
    :raises BitTypeError: If ``value`` is not an integer.
    :raises BitRangeError: If ``value`` is out of range.
    """
    if not is_integer(value):
        raise BitTypeError(f"{name} ({value!r}) must be integer")
    if not 0 <= value <= max_value:
        raise BitRangeError(f"{name} ({value}) must be Uint <= {max_value}")
    return value


def check_int(value, min_value: int, max_value: int,
              name: str = "value") -> int:
    """Validate ``min_value <= value <= max_value``.

    :param value: Candidate integer.
    :param min_value: Inclusive lower bound.
    :type min_value: int
    :param max_value: Inclusive upper bound.
    :type max_value: int
    :param name: Argument name used in error messages.
    :type name: str
    :returns: ``value`` unchanged.
    :rtype: int
    :raises BitTypeError: If ``value`` is not an integer.
    :raises BitRangeError: If ``value`` is out of range.
    """
    if not is_integer(value):
        raise BitTypeError(f"{name} ({value!r}) must be integer")
    if not min_value <= value <= max_value:
        raise BitRangeError(
            f"{name} ({value}) must be {min_value} <= Int <= {max_value}"
        )
    return value
