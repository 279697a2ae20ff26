"""Single-bit primitives for LSB and MSB bit numbering.

Addresses count bits from the start of the backing storage, not from the
front of the stored window. Nothing here checks bounds: these run in the
innermost loop of every codec path.
"""
from typing import Callable, NamedTuple, Union

from bitnumbering import BitNumberingMode

Storage = Union[bytearray, memoryview]


class BitAddressing(NamedTuple):
    """The three primitives that must always be swapped together."""

    set_bit: Callable[[Storage, int], None]
    clear_bit: Callable[[Storage, int], None]
    read_bit: Callable[[Storage, int], int]


def _set_bit_lsb(data: Storage, address: int) -> None:
    data[address >> 3] |= 1 << (address & 7)


def _clear_bit_lsb(data: Storage, address: int) -> None:
    data[address >> 3] &= ~(1 << (address & 7)) & 0xFF


def _read_bit_lsb(data: Storage, address: int) -> int:
    return (data[address >> 3] >> (address & 7)) & 1


def _set_bit_msb(data: Storage, address: int) -> None:
    data[address >> 3] |= 1 << (7 - (address & 7))


def _clear_bit_msb(data: Storage, address: int) -> None:
    data[address >> 3] &= ~(1 << (7 - (address & 7))) & 0xFF


def _read_bit_msb(data: Storage, address: int) -> int:
    return (data[address >> 3] >> (7 - (address & 7))) & 1


LSB_ADDRESSING = BitAddressing(_set_bit_lsb, _clear_bit_lsb, _read_bit_lsb)
MSB_ADDRESSING = BitAddressing(_set_bit_msb, _clear_bit_msb, _read_bit_msb)


def addressing_for(mode: BitNumberingMode) -> BitAddressing:
    """Return the primitive set for ``mode``.

    :param mode: Active bit numbering.
    :type mode: BitNumberingMode
    :returns: Matching set/clear/read primitives.
    :rtype: BitAddressing
    """
    if mode == BitNumberingMode.MSB:
        return MSB_ADDRESSING
    return LSB_ADDRESSING
