"""QR Code symbols: construction from segments, function patterns, masking."""

from __future__ import annotations

from itertools import cycle
from typing import Callable, Iterable, Sequence

from qrforge.bitbuffer import BitBuffer
from qrforge.ecc import (
    ECC_CODEWORDS_PER_BLOCK,
    MAX_VERSION,
    MIN_VERSION,
    NUM_ERROR_CORRECTION_BLOCKS,
    Ecc,
    num_data_codewords,
    num_raw_data_modules,
    reed_solomon_compute_divisor,
    reed_solomon_compute_remainder,
)
from qrforge.segment import QrSegment

_PENALTY_N1 = 3
_PENALTY_N2 = 3
_PENALTY_N3 = 40
_PENALTY_N4 = 10

_MASK_PATTERNS: tuple[Callable[[int, int], bool], ...] = (
    lambda x, y: (x + y) % 2 == 0,
    lambda x, y: y % 2 == 0,
    lambda x, y: x % 3 == 0,
    lambda x, y: (x + y) % 3 == 0,
    lambda x, y: (x // 3 + y // 2) % 2 == 0,
    lambda x, y: x * y % 2 + x * y % 3 == 0,
    lambda x, y: (x * y % 2 + x * y % 3) % 2 == 0,
    lambda x, y: ((x + y) % 2 + x * y % 3) % 2 == 0,
)


class DataTooLongError(ValueError):
    """Raised when the supplied data does not fit any QR Code version in the allowed range."""


def _get_bit(x: int, i: int) -> bool:
    return ((x >> i) & 1) != 0


class QrCode:
    """An immutable square grid of dark and light modules forming a QR Code symbol.

    Covers QR Code Model 2: versions 1 to 40, all four error correction levels.
    """

    MIN_VERSION = MIN_VERSION
    MAX_VERSION = MAX_VERSION

    def __init__(self, version: int, ecl: Ecc, data_codewords: bytes | Sequence[int], mask: int) -> None:
        """Build a symbol from data codewords (segment headers and padding included, ECC excluded).

        ``mask`` is 0 to 7 to force a pattern, or -1 to choose the best one automatically.
        """
        if version < MIN_VERSION or version > MAX_VERSION:
            raise ValueError("Version value out of range")
        if mask < -1 or mask > 7:
            raise ValueError("Mask value out of range")
        self._version = version
        self._ecl = ecl
        self._size = version * 4 + 17
        self._modules = [[False] * self._size for _ in range(self._size)]
        self._is_function = [[False] * self._size for _ in range(self._size)]

        self._draw_function_patterns()
        all_codewords = self._add_ecc_and_interleave(bytes(data_codewords))
        self._draw_codewords(all_codewords)

        if mask == -1:
            min_penalty = None
            for candidate in range(8):
                self._apply_mask(candidate)
                self._draw_format_bits(candidate)
                penalty = self._penalty_score()
                if min_penalty is None or penalty < min_penalty:
                    mask = candidate
                    min_penalty = penalty
                self._apply_mask(candidate)  # XOR undoes the mask
        self._mask = mask
        self._apply_mask(mask)
        self._draw_format_bits(mask)

        self._grid = tuple(tuple(row) for row in self._modules)
        del self._modules
        del self._is_function

    # ---- Factories ----

    @staticmethod
    def encode_text(text: str, ecl: Ecc) -> QrCode:
        """Return a QR Code for the text at the given (or a boosted) error correction level."""
        return QrCode.encode_segments(QrSegment.make_segments(text), ecl)

    @staticmethod
    def encode_binary(data: bytes | Iterable[int], ecl: Ecc) -> QrCode:
        """Return a QR Code holding the bytes in byte mode."""
        return QrCode.encode_segments([QrSegment.make_bytes(data)], ecl)

    @staticmethod
    def encode_segments(
        segs: Sequence[QrSegment],
        ecl: Ecc,
        min_version: int = MIN_VERSION,
        max_version: int = MAX_VERSION,
        mask: int = -1,
        boost_ecl: bool = True,
    ) -> QrCode:
        """Return a QR Code for the segments, using the smallest version in the range that fits."""
        if not (MIN_VERSION <= min_version <= max_version <= MAX_VERSION) or mask < -1 or mask > 7:
            raise ValueError("Invalid value")

        version = min_version
        while True:
            capacity_bits = num_data_codewords(version, ecl) * 8
            used_bits = QrSegment.get_total_bits(segs, version)
            if used_bits is not None and used_bits <= capacity_bits:
                break
            if version >= max_version:
                if used_bits is None:
                    raise DataTooLongError("Segment too long")
                raise DataTooLongError(
                    f"Data length = {used_bits} bits, Max capacity = {capacity_bits} bits"
                )
            version += 1

        if boost_ecl:
            for new_ecl in (Ecc.MEDIUM, Ecc.QUARTILE, Ecc.HIGH):
                if used_bits <= num_data_codewords(version, new_ecl) * 8:
                    ecl = new_ecl

        bb = BitBuffer()
        for seg in segs:
            bb.append_bits(seg.mode.mode_bits, 4)
            bb.append_bits(seg.num_chars, seg.mode.num_char_count_bits(version))
            bb.extend(seg.data)

        capacity_bits = num_data_codewords(version, ecl) * 8
        bb.append_bits(0, min(4, capacity_bits - len(bb)))
        bb.append_bits(0, -len(bb) % 8)
        for pad_byte in cycle((0xEC, 0x11)):
            if len(bb) >= capacity_bits:
                break
            bb.append_bits(pad_byte, 8)

        codewords = bytearray(len(bb) // 8)
        for i, bit in enumerate(bb):
            if bit:
                codewords[i >> 3] |= 1 << (7 - (i & 7))
        return QrCode(version, ecl, bytes(codewords), mask)

    # ---- Public accessors ----

    @property
    def version(self) -> int:
        """The version number, 1 to 40."""
        return self._version

    @property
    def size(self) -> int:
        """The width and height in modules, 21 to 177."""
        return self._size

    @property
    def error_correction_level(self) -> Ecc:
        """The error correction level actually used."""
        return self._ecl

    @property
    def mask(self) -> int:
        """The mask pattern used, 0 to 7."""
        return self._mask

    def get_module(self, x: int, y: int) -> bool:
        """Return True for a dark module; coordinates out of bounds are light."""
        return 0 <= x < self._size and 0 <= y < self._size and self._grid[y][x]

    # ---- Drawing function modules ----

    def _draw_function_patterns(self) -> None:
        size = self._size
        for i in range(size):
            self._set_function_module(6, i, i % 2 == 0)
            self._set_function_module(i, 6, i % 2 == 0)

        self._draw_finder_pattern(3, 3)
        self._draw_finder_pattern(size - 4, 3)
        self._draw_finder_pattern(3, size - 4)

        positions = self._alignment_pattern_positions()
        last = len(positions) - 1
        for i, px in enumerate(positions):
            for j, py in enumerate(positions):
                if (i, j) not in ((0, 0), (0, last), (last, 0)):
                    self._draw_alignment_pattern(px, py)

        self._draw_format_bits(0)  # placeholder mask, overwritten later
        self._draw_version()

    def _draw_format_bits(self, mask: int) -> None:
        data = self._ecl.format_bits() << 3 | mask
        rem = data
        for _ in range(10):
            rem = (rem << 1) ^ ((rem >> 9) * 0x537)
        bits = (data << 10 | rem) ^ 0x5412
        size = self._size

        for i in range(6):
            self._set_function_module(8, i, _get_bit(bits, i))
        self._set_function_module(8, 7, _get_bit(bits, 6))
        self._set_function_module(8, 8, _get_bit(bits, 7))
        self._set_function_module(7, 8, _get_bit(bits, 8))
        for i in range(9, 15):
            self._set_function_module(14 - i, 8, _get_bit(bits, i))

        for i in range(8):
            self._set_function_module(size - 1 - i, 8, _get_bit(bits, i))
        for i in range(8, 15):
            self._set_function_module(8, size - 15 + i, _get_bit(bits, i))
        self._set_function_module(8, size - 8, True)

    def _draw_version(self) -> None:
        if self._version < 7:
            return
        rem = self._version
        for _ in range(12):
            rem = (rem << 1) ^ ((rem >> 11) * 0x1F25)
        bits = self._version << 12 | rem
        for i in range(18):
            bit = _get_bit(bits, i)
            a = self._size - 11 + i % 3
            b = i // 3
            self._set_function_module(a, b, bit)
            self._set_function_module(b, a, bit)

    def _draw_finder_pattern(self, x: int, y: int) -> None:
        for dy in range(-4, 5):
            for dx in range(-4, 5):
                dist = max(abs(dx), abs(dy))
                xx, yy = x + dx, y + dy
                if 0 <= xx < self._size and 0 <= yy < self._size:
                    self._set_function_module(xx, yy, dist not in (2, 4))

    def _draw_alignment_pattern(self, x: int, y: int) -> None:
        for dy in range(-2, 3):
            for dx in range(-2, 3):
                self._set_function_module(x + dx, y + dy, max(abs(dx), abs(dy)) != 1)

    def _set_function_module(self, x: int, y: int, is_dark: bool) -> None:
        self._modules[y][x] = is_dark
        self._is_function[y][x] = True

    # ---- Codewords and masking ----

    def _add_ecc_and_interleave(self, data: bytes) -> bytes:
        ver, ecl = self._version, self._ecl
        if len(data) != num_data_codewords(ver, ecl):
            raise ValueError("Invalid argument")
        num_blocks = NUM_ERROR_CORRECTION_BLOCKS[ecl.value][ver]
        block_ecc_len = ECC_CODEWORDS_PER_BLOCK[ecl.value][ver]
        raw_codewords = num_raw_data_modules(ver) // 8
        num_short_blocks = num_blocks - raw_codewords % num_blocks
        short_block_len = raw_codewords // num_blocks

        divisor = reed_solomon_compute_divisor(block_ecc_len)
        blocks: list[list[int]] = []
        k = 0
        for i in range(num_blocks):
            dat_len = short_block_len - block_ecc_len + (0 if i < num_short_blocks else 1)
            dat = list(data[k:k + dat_len])
            k += dat_len
            ecc = reed_solomon_compute_remainder(dat, divisor)
            if i < num_short_blocks:
                dat.append(0)
            blocks.append(dat + ecc)

        pad_index = short_block_len - block_ecc_len
        result = bytes(
            block[i]
            for i in range(len(blocks[0]))
            for j, block in enumerate(blocks)
            if i != pad_index or j >= num_short_blocks
        )
        assert len(result) == raw_codewords
        return result

    def _draw_codewords(self, data: bytes) -> None:
        if len(data) != num_raw_data_modules(self._version) // 8:
            raise ValueError("Invalid argument")
        bits = [_get_bit(byte, 7 - j) for byte in data for j in range(8)]
        size = self._size
        i = 0
        right = size - 1
        while right >= 1:
            if right == 6:
                right = 5
            upward = ((right + 1) & 2) == 0
            for vert in range(size):
                y = size - 1 - vert if upward else vert
                for x in (right, right - 1):
                    if not self._is_function[y][x] and i < len(bits):
                        self._modules[y][x] = bits[i]
                        i += 1
            right -= 2
        assert i == len(bits)

    def _apply_mask(self, mask: int) -> None:
        if mask < 0 or mask > 7:
            raise ValueError("Mask value out of range")
        pattern = _MASK_PATTERNS[mask]
        for y, (row, func_row) in enumerate(zip(self._modules, self._is_function)):
            for x, is_func in enumerate(func_row):
                if not is_func and pattern(x, y):
                    row[x] = not row[x]

    def _penalty_score(self) -> int:
        modules = self._modules
        result = sum(self._line_penalty(row) for row in modules)
        result += sum(self._line_penalty(col) for col in zip(*modules))

        for upper, lower in zip(modules, modules[1:]):
            for x in range(self._size - 1):
                color = upper[x]
                if color == upper[x + 1] == lower[x] == lower[x + 1]:
                    result += _PENALTY_N2

        dark = sum(sum(row) for row in modules)
        total = self._size * self._size
        k = (abs(dark * 20 - total * 10) + total - 1) // total - 1
        result += k * _PENALTY_N4
        return result

    def _line_penalty(self, line: Sequence[bool]) -> int:
        result = 0
        run_color = False
        run_len = 0
        history = [0] * 7
        for color in line:
            if color == run_color:
                run_len += 1
                if run_len == 5:
                    result += _PENALTY_N1
                elif run_len > 5:
                    result += 1
            else:
                self._finder_penalty_add_history(run_len, history)
                if not run_color:
                    result += self._finder_penalty_count_patterns(history) * _PENALTY_N3
                run_color = color
                run_len = 1
        result += self._finder_penalty_terminate_and_count(run_color, run_len, history) * _PENALTY_N3
        return result

    @staticmethod
    def _finder_penalty_count_patterns(history: list[int]) -> int:
        n = history[1]
        core = n > 0 and history[2] == n and history[3] == n * 3 and history[4] == n and history[5] == n
        return (int(core and history[0] >= n * 4 and history[6] >= n)
                + int(core and history[6] >= n * 4 and history[0] >= n))

    def _finder_penalty_terminate_and_count(self, run_color: bool, run_len: int, history: list[int]) -> int:
        if run_color:
            self._finder_penalty_add_history(run_len, history)
            run_len = 0
        run_len += self._size
        self._finder_penalty_add_history(run_len, history)
        return self._finder_penalty_count_patterns(history)

    def _finder_penalty_add_history(self, run_len: int, history: list[int]) -> None:
        if history[0] == 0:
            run_len += self._size
        history.insert(0, run_len)
        history.pop()

    def _alignment_pattern_positions(self) -> list[int]:
        ver = self._version
        if ver == 1:
            return []
        num_align = ver // 7 + 2
        step = (ver * 8 + num_align * 3 + 5) // (num_align * 4 - 4) * 2
        return [6] + sorted(self._size - 7 - i * step for i in range(num_align - 1))