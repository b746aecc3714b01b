import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from qrforge.ecc import Ecc, num_data_codewords
from qrforge.qrcode import DataTooLongError, QrCode
from qrforge.segment import Mode, QrSegment


def grid(qr):
    return [[qr.get_module(x, y) for x in range(qr.size)] for y in range(qr.size)]


def read_format_copies(qr):
    size = qr.size
    first_positions = (
        [(8, i) for i in range(6)]
        + [(8, 7), (8, 8), (7, 8)]
        + [(14 - i, 8) for i in range(9, 15)]
    )
    second_positions = (
        [(size - 1 - i, 8) for i in range(8)]
        + [(8, size - 15 + i) for i in range(8, 15)]
    )

    def value(positions):
        return sum(1 << i for i, (x, y) in enumerate(positions) if qr.get_module(x, y))

    return value(first_positions), value(second_positions)


def read_version_copies(qr):
    size = qr.size
    a_val = sum(1 << i for i in range(18) if qr.get_module(size - 11 + i % 3, i // 3))
    b_val = sum(1 << i for i in range(18) if qr.get_module(i // 3, size - 11 + i % 3))
    return a_val, b_val


def check_finder(qr, cx, cy):
    for dy in range(-3, 4):
        for dx in range(-3, 4):
            dist = max(abs(dx), abs(dy))
            assert qr.get_module(cx + dx, cy + dy) == (dist != 2)


def test_hello_world_fits_version_one_and_boosts():
    qr = QrCode.encode_text("Hello, world!", Ecc.LOW)
    assert qr.version == 1
    assert qr.size == 21
    assert qr.error_correction_level == Ecc.MEDIUM


def test_finder_patterns_and_dark_module():
    qr = QrCode.encode_text("Hello, world!", Ecc.LOW)
    size = qr.size
    check_finder(qr, 3, 3)
    check_finder(qr, size - 4, 3)
    check_finder(qr, 3, size - 4)
    assert qr.get_module(8, size - 8) is True
    assert qr.get_module(7, 7) is False


def test_timing_patterns_alternate():
    qr = QrCode.encode_text("314159265358979323846264338327950288419716939937510", Ecc.MEDIUM)
    for i in range(8, qr.size - 8):
        assert qr.get_module(i, 6) == (i % 2 == 0)
        assert qr.get_module(6, i) == (i % 2 == 0)


def test_out_of_bounds_is_light():
    qr = QrCode.encode_text("A", Ecc.LOW)
    assert qr.get_module(-1, 0) is False
    assert qr.get_module(0, -1) is False
    assert qr.get_module(qr.size, 0) is False
    assert qr.get_module(0, qr.size) is False


@pytest.mark.parametrize("mask", range(8))
def test_forced_mask_is_recorded_in_format_bits(mask):
    segs = QrSegment.make_segments("https://example.com/")
    qr = QrCode.encode_segments(segs, Ecc.HIGH, QrCode.MIN_VERSION, QrCode.MAX_VERSION, mask, True)
    assert qr.mask == mask
    first, second = read_format_copies(qr)
    assert first == second
    decoded = (first ^ 0x5412) >> 10
    assert decoded == (qr.error_correction_level.format_bits() << 3 | mask)


def test_automatic_mask_in_range_and_deterministic():
    a = QrCode.encode_text("DOLLAR-AMOUNT:$39.87 PERCENTAGE:100.00% OPERATIONS:+-*/", Ecc.HIGH)
    b = QrCode.encode_text("DOLLAR-AMOUNT:$39.87 PERCENTAGE:100.00% OPERATIONS:+-*/", Ecc.HIGH)
    assert 0 <= a.mask <= 7
    assert a.mask == b.mask
    assert grid(a) == grid(b)


def test_different_masks_give_different_grids():
    segs = QrSegment.make_segments("https://example.com/")
    m0 = QrCode.encode_segments(segs, Ecc.HIGH, mask=0)
    m1 = QrCode.encode_segments(segs, Ecc.HIGH, mask=1)
    assert m0.version == m1.version
    assert grid(m0) != grid(m1)


def test_version_information_for_large_symbols():
    qr = QrCode.encode_text("a" * 300, Ecc.HIGH)
    assert qr.version >= 7
    first, second = read_version_copies(qr)
    assert first == second
    assert first >> 12 == qr.version


def test_min_version_is_respected():
    qr = QrCode.encode_segments(QrSegment.make_segments("HI"), Ecc.LOW, min_version=5)
    assert qr.version == 5
    assert qr.size == 5 * 4 + 17


def test_boost_disabled_keeps_level():
    segs = QrSegment.make_segments("HI")
    qr = QrCode.encode_segments(segs, Ecc.LOW, boost_ecl=False)
    assert qr.error_correction_level == Ecc.LOW


def test_empty_text_encodes_in_smallest_version():
    qr = QrCode.encode_text("", Ecc.LOW)
    assert qr.version == 1
    assert qr.error_correction_level == Ecc.HIGH


def test_encode_binary_matches_byte_segment():
    data = "Golden ratio \u03c6 = 1.".encode("utf-8")
    a = QrCode.encode_binary(data, Ecc.LOW)
    b = QrCode.encode_segments([QrSegment.make_bytes(data)], Ecc.LOW)
    assert grid(a) == grid(b)
    assert a.version == b.version


def test_encode_text_matches_manual_segments_for_numeric():
    digits = "41421356237309504880168872420969807856967187537694807317667973799"
    a = QrCode.encode_text(digits, Ecc.LOW)
    b = QrCode.encode_segments([QrSegment.make_numeric(digits)], Ecc.LOW)
    assert grid(a) == grid(b)


def test_kanji_segment_encodes():
    chars = [0x0035, 0x1002, 0x0FC0, 0x0AED, 0x0AD7]
    bits = []
    for c in chars:
        bits.extend(((c >> i) & 1) == 1 for i in reversed(range(13)))
    seg = QrSegment(Mode.KANJI, len(chars), bits)
    qr = QrCode.encode_segments([seg], Ecc.LOW)
    assert qr.version == 1
    first, second = read_format_copies(qr)
    assert first == second


def test_low_level_constructor():
    codewords = bytes(num_data_codewords(1, Ecc.LOW))
    qr = QrCode(1, Ecc.LOW, codewords, 0)
    assert qr.size == 21
    assert qr.mask == 0
    assert qr.error_correction_level == Ecc.LOW


def test_constructor_rejects_wrong_codeword_count():
    with pytest.raises(ValueError):
        QrCode(1, Ecc.LOW, bytes(num_data_codewords(1, Ecc.LOW) + 1), 0)


@pytest.mark.parametrize("version", [0, 41])
def test_constructor_rejects_bad_version(version):
    with pytest.raises(ValueError, match="Version value out of range"):
        QrCode(version, Ecc.LOW, b"", 0)


@pytest.mark.parametrize("mask", [-2, 8])
def test_constructor_rejects_bad_mask(mask):
    with pytest.raises(ValueError, match="Mask value out of range"):
        QrCode(1, Ecc.LOW, bytes(num_data_codewords(1, Ecc.LOW)), mask)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"min_version": 0},
        {"max_version": 41},
        {"min_version": 10, "max_version": 9},
        {"mask": -2},
        {"mask": 8},
    ],
)
def test_encode_segments_rejects_bad_arguments(kwargs):
    with pytest.raises(ValueError, match="Invalid value"):
        QrCode.encode_segments(QrSegment.make_segments("A"), Ecc.LOW, **kwargs)


def test_data_too_long_reports_lengths():
    with pytest.raises(DataTooLongError, match="Data length = .* bits, Max capacity = .* bits"):
        QrCode.encode_segments(QrSegment.make_segments("x" * 100), Ecc.LOW, max_version=1)


def test_binary_beyond_capacity_raises():
    with pytest.raises(DataTooLongError):
        QrCode.encode_binary(bytes(2954), Ecc.LOW)


def test_binary_at_documented_capacity_fits():
    qr = QrCode.encode_binary(bytes(2953), Ecc.LOW)
    assert qr.version == 40
    assert qr.size == 177


def test_segment_too_long():
    seg = QrSegment(Mode.NUMERIC, 1 << 14, [])
    with pytest.raises(DataTooLongError, match="Segment too long"):
        QrCode.encode_segments([seg], Ecc.LOW)


def test_data_too_long_is_value_error():
    with pytest.raises(ValueError):
        QrCode.encode_text("x" * 5000, Ecc.HIGH)


@settings(max_examples=25, deadline=None)
@given(
    data=st.binary(max_size=120),
    ecl=st.sampled_from(list(Ecc)),
)
def test_random_binary_invariants(data, ecl):
    qr = QrCode.encode_binary(data, ecl)
    assert qr.size == qr.version * 4 + 17
    assert qr.error_correction_level.value >= ecl.value
    first, second = read_format_copies(qr)
    assert first == second
    assert (first ^ 0x5412) >> 10 == (qr.error_correction_level.format_bits() << 3 | qr.mask)
    assert qr.get_module(8, qr.size - 8) is True