import enum
import random

from errors import BitRangeError


class EndiannessMode(enum.IntEnum):
    """Order of the 8-bit chunks of a multi-byte value."""

    LITTLE_ENDIAN = 0
    BIG_ENDIAN = 1


def _to_mode(mode) -> EndiannessMode:
    try:
        return EndiannessMode(mode)
    except ValueError:
        raise BitRangeError(f"Invalid endianness mode: {mode!r}") from None


class Endianness:
    """Mutable byte order setting, little-endian unless told otherwise.

    Unlike :class:`bitnumbering.BitNumbering` nothing needs to be rebound
    when it changes: the codec reads it on every multi-byte operation.
    """

    def __init__(
        self, initial: EndiannessMode = EndiannessMode.LITTLE_ENDIAN
    ):
        self._mode = _to_mode(initial)

    def is_little_endian(self) -> bool:
        return self._mode == EndiannessMode.LITTLE_ENDIAN

    def is_big_endian(self) -> bool:
        return self._mode == EndiannessMode.BIG_ENDIAN

    def get(self) -> EndiannessMode:
        return self._mode

    def set(self, mode: EndiannessMode) -> bool:
        """Switch to ``mode``.

        :param mode: New byte order.
        :type mode: EndiannessMode
        :returns: True if the byte order changed.
        :rtype: bool
        :raises BitRangeError: If ``mode`` is not a known byte order.
        """
        mode = _to_mode(mode)
        changed = mode != self._mode
        self._mode = mode
        return changed

    def set_little_endian(self) -> bool:
        return self.set(EndiannessMode.LITTLE_ENDIAN)

    def set_big_endian(self) -> bool:
        return self.set(EndiannessMode.BIG_ENDIAN)

    def set_random(self) -> bool:
        return self.set(random.choice(list(EndiannessMode)))

    def struct_prefix(self) -> str:
        """Return the ``struct`` byte order character, ``'<'`` or ``'>'``."""
        return "<" if self.is_little_endian() else ">"

    def __str__(self) -> str:
        return self._mode.name
