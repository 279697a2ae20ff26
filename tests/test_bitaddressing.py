import pytest

from bitaddressing import LSB_ADDRESSING, MSB_ADDRESSING, addressing_for
from bitnumbering import BitNumberingMode


def test_lsb_bit_zero_is_lowest_physical_bit():
    data = bytearray(2)
    LSB_ADDRESSING.set_bit(data, 0)
    LSB_ADDRESSING.set_bit(data, 9)
    assert data == bytearray([0x01, 0x02])
    assert LSB_ADDRESSING.read_bit(data, 9) == 1
    LSB_ADDRESSING.clear_bit(data, 0)
    assert data == bytearray([0x00, 0x02])


def test_msb_bit_zero_is_highest_physical_bit():
    data = bytearray(2)
    MSB_ADDRESSING.set_bit(data, 0)
    MSB_ADDRESSING.set_bit(data, 15)
    assert data == bytearray([0x80, 0x01])
    assert MSB_ADDRESSING.read_bit(data, 0) == 1
    assert MSB_ADDRESSING.read_bit(data, 1) == 0
    MSB_ADDRESSING.clear_bit(data, 15)
    assert data == bytearray([0x80, 0x00])


@pytest.mark.parametrize("addressing", [LSB_ADDRESSING, MSB_ADDRESSING])
def test_clear_leaves_neighbours(addressing):
    data = bytearray([0xFF])
    addressing.clear_bit(data, 3)
    assert bin(data[0]).count("1") == 7
    assert addressing.read_bit(data, 3) == 0


def test_addressing_for_mode():
    assert addressing_for(BitNumberingMode.LSB) is LSB_ADDRESSING
    assert addressing_for(BitNumberingMode.MSB) is MSB_ADDRESSING
