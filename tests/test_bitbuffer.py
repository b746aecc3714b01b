import pytest
from hypothesis import given, strategies as st

from qrforge.bitbuffer import BitBuffer


def test_append_bits_msb_first():
    bb = BitBuffer()
    bb.append_bits(5, 3)
    assert bb == [True, False, True]


def test_append_zero_length_leaves_buffer_unchanged():
    bb = BitBuffer()
    bb.append_bits(1, 1)
    bb.append_bits(0, 0)
    assert bb == [True]


def test_successive_appends_concatenate():
    bb = BitBuffer()
    bb.append_bits(0xEC, 8)
    bb.append_bits(0x11, 8)
    assert len(bb) == 16
    assert bb[:8] == [True, True, True, False, True, True, False, False]


@pytest.mark.parametrize("val,length", [(0, -1), (0, 32), (8, 3), (1, 0), (-1, 4)])
def test_out_of_range_rejected(val, length):
    bb = BitBuffer()
    with pytest.raises(ValueError):
        bb.append_bits(val, length)
    assert bb == []


@given(st.integers(min_value=0, max_value=31).flatmap(
    lambda n: st.tuples(st.integers(min_value=0, max_value=(1 << n) - 1), st.just(n))))
def test_round_trip(pair):
    val, length = pair
    bb = BitBuffer()
    bb.append_bits(val, length)
    assert len(bb) == length
    assert sum(int(bit) << i for i, bit in enumerate(reversed(bb))) == val