import pytest

from bitnumbering import BitNumbering, BitNumberingMode
from errors import BitRangeError


def test_default_is_lsb():
    bn = BitNumbering()
    assert bn.is_lsb()
    assert not bn.is_msb()
    assert bn.get() == BitNumberingMode.LSB
    assert str(bn) == "LSB"


def test_set_reports_change_and_notifies_once():
    seen = []
    bn = BitNumbering(on_change=seen.append)
    assert bn.set_msb() is True
    assert bn.set_msb() is False
    assert bn.is_msb()
    assert seen == [BitNumberingMode.MSB]
    assert bn.set(BitNumberingMode.LSB) is True
    assert seen == [BitNumberingMode.MSB, BitNumberingMode.LSB]


def test_set_accepts_plain_int_and_rejects_unknown():
    bn = BitNumbering()
    bn.set(1)
    assert bn.get() is BitNumberingMode.MSB
    with pytest.raises(BitRangeError):
        bn.set(7)
    assert bn.get() is BitNumberingMode.MSB
    with pytest.raises(BitRangeError):
        BitNumbering(2)


def test_set_random_lands_on_a_valid_mode():
    bn = BitNumbering()
    for _ in range(20):
        bn.set_random()
        assert bn.get() in (BitNumberingMode.LSB, BitNumberingMode.MSB)
