import enum
import random
from typing import Callable, Optional

from errors import BitRangeError


class BitNumberingMode(enum.IntEnum):
    """Which physical bit of a byte holds logical bit 0."""

    LSB = 0
    MSB = 1


def _to_mode(mode) -> BitNumberingMode:
    try:
        return BitNumberingMode(mode)
    except ValueError:
        raise BitRangeError(f"Invalid bit numbering mode: {mode!r}") from None


class BitNumbering:
    """Mutable significant-bit setting shared with a bit data view.

    The owner passes ``on_change``; it is called synchronously with the new
    mode every time :meth:`set` actually changes the value, before
    :meth:`set` returns.

    :ivar on_change: Optional listener ``on_change(mode)``.
    :type on_change: Optional[Callable[[BitNumberingMode], None]]
    """

    def __init__(
        self,
        initial: BitNumberingMode = BitNumberingMode.LSB,
        on_change: Optional[Callable[[BitNumberingMode], None]] = None,
    ):
        self._mode = _to_mode(initial)
        self.on_change = on_change

    def is_lsb(self) -> bool:
        return self._mode == BitNumberingMode.LSB

    def is_msb(self) -> bool:
        return self._mode == BitNumberingMode.MSB

    def get(self) -> BitNumberingMode:
        return self._mode

    def set(self, mode: BitNumberingMode) -> bool:
        """Switch to ``mode``.

        :param mode: New bit numbering.
        :type mode: BitNumberingMode
        :returns: True if the mode changed.
        :rtype: bool
        :raises BitRangeError: If ``mode`` is not a known mode.
        """
        mode = _to_mode(mode)
        changed = mode != self._mode
        self._mode = mode
        if changed and self.on_change is not None:
            self.on_change(mode)
        return changed

    def set_lsb(self) -> bool:
        return self.set(BitNumberingMode.LSB)

    def set_msb(self) -> bool:
        return self.set(BitNumberingMode.MSB)

    def set_random(self) -> bool:
        """Pick LSB or MSB at random; handy for fuzzing protocol code."""
        return self.set(random.choice(list(BitNumberingMode)))

    def __str__(self) -> str:
        return self._mode.name
