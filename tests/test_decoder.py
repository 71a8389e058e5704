import numpy as np
import pytest

from cdma.decoder import ZERO_CORRELATION_BIT, correlate, decode
from cdma.errors import InvalidSizeError
from cdma.spreader import spread_bits


@pytest.mark.parametrize("row", range(8))
def test_single_station_round_trip(walsh8, row):
    bits = np.random.default_rng(row).integers(0, 2, size=50)
    signal = spread_bits(bits, walsh8[row])

    assert decode(signal, walsh8[row]).tolist() == bits.tolist()


def test_correlation_is_plus_minus_n(walsh8):
    signal = spread_bits([1, 0, 1], walsh8[2])
    assert correlate(signal, walsh8[2]).tolist() == [8, -8, 8]


def test_zero_correlation_decodes_to_zero(walsh8):
    assert ZERO_CORRELATION_BIT == 0

    # Чужой код: корреляция с сигналом ровно 0
    signal = spread_bits([1, 1, 0], walsh8[1])
    assert correlate(signal, walsh8[2]).tolist() == [0, 0, 0]
    assert decode(signal, walsh8[2]).tolist() == [0, 0, 0]

    assert decode(np.zeros(16, dtype=int), walsh8[0]).tolist() == [0, 0]


def test_trailing_chips_are_ignored(walsh8):
    signal = np.concatenate([spread_bits([1, 0], walsh8[3]), [5, -5, 5]])

    assert decode(signal, walsh8[3]).tolist() == [1, 0]


def test_signal_shorter_than_code(walsh8):
    assert decode([1, 1, 1], walsh8[0]).tolist() == []


def test_decode_does_not_mutate_inputs(walsh8):
    signal = spread_bits([1, 0, 1, 1], walsh8[4])
    before = signal.copy()
    code = walsh8[4].copy()

    decode(signal, code)

    assert np.array_equal(signal, before)
    assert np.array_equal(code, walsh8[4])


def test_empty_code():
    with pytest.raises(InvalidSizeError):
        decode([1, -1], [])
