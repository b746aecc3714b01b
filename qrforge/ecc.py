"""Error correction levels, capacity tables and Reed-Solomon arithmetic."""

from __future__ import annotations

from enum import Enum

MIN_VERSION = 1
MAX_VERSION = 40


class Ecc(Enum):
    """The error correction level in a QR Code symbol."""

    LOW = 0  # tolerates about 7% erroneous codewords
    MEDIUM = 1  # about 15%
    QUARTILE = 2  # about 25%
    HIGH = 3  # about 30%

    def format_bits(self) -> int:
        """Return the 2-bit value used for this level in the format information."""
        return _FORMAT_BITS[self]


_FORMAT_BITS = {Ecc.LOW: 1, Ecc.MEDIUM: 0, Ecc.QUARTILE: 3, Ecc.HIGH: 2}


# Index 0 of each row is padding and holds an illegal value.
ECC_CODEWORDS_PER_BLOCK: tuple[tuple[int, ...], ...] = (
    (-1, 7, 10, 15, 20, 26, 18, 20, 24, 30, 18, 20, 24, 26, 30, 22, 24, 28, 30, 28, 28,
     28, 28, 30, 30, 26, 28, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),
    (-1, 10, 16, 26, 18, 24, 16, 18, 22, 22, 26, 30, 22, 22, 24, 24, 28, 28, 26, 26, 26,
     26, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28),
    (-1, 13, 22, 18, 26, 18, 24, 18, 22, 20, 24, 28, 26, 24, 20, 30, 24, 28, 28, 26, 30,
     28, 30, 30, 30, 30, 28, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),
    (-1, 17, 28, 22, 16, 22, 28, 26, 26, 24, 28, 24, 28, 22, 24, 24, 30, 28, 28, 26, 28,
     30, 24, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),
)

NUM_ERROR_CORRECTION_BLOCKS: tuple[tuple[int, ...], ...] = (
    (-1, 1, 1, 1, 1, 1, 2, 2, 2, 2, 4, 4, 4, 4, 4, 6, 6, 6, 6, 7, 8,
     8, 9, 9, 10, 12, 12, 12, 13, 14, 15, 16, 17, 18, 19, 19, 20, 21, 22, 24, 25),
    (-1, 1, 1, 1, 2, 2, 4, 4, 4, 5, 5, 5, 8, 9, 9, 10, 10, 11, 13, 14, 16,
     17, 17, 18, 20, 21, 23, 25, 26, 28, 29, 31, 33, 35, 37, 38, 40, 43, 45, 47, 49),
    (-1, 1, 1, 2, 2, 4, 4, 6, 6, 8, 8, 8, 10, 12, 16, 12, 17, 16, 18, 21, 20,
     23, 23, 25, 27, 29, 34, 34, 35, 38, 40, 43, 45, 48, 51, 53, 56, 59, 62, 65, 68),
    (-1, 1, 1, 2, 4, 4, 4, 5, 6, 8, 8, 11, 11, 16, 16, 18, 16, 19, 21, 25, 25,
     25, 34, 30, 32, 35, 37, 40, 42, 45, 48, 51, 54, 57, 60, 63, 66, 70, 74, 77, 81),
)


def num_raw_data_modules(ver: int) -> int:
    """Return the number of data bits a symbol of this version holds, remainder bits included."""
    if ver < MIN_VERSION or ver > MAX_VERSION:
        raise ValueError("Version number out of range")
    result = (16 * ver + 128) * ver + 64
    if ver >= 2:
        num_align = ver // 7 + 2
        result -= (25 * num_align - 10) * num_align - 55
        if ver >= 7:
            result -= 36
    return result


def num_data_codewords(ver: int, ecl: Ecc) -> int:
    """Return the number of 8-bit data codewords for this version and error correction level."""
    return (
        num_raw_data_modules(ver) // 8
        - ECC_CODEWORDS_PER_BLOCK[ecl.value][ver] * NUM_ERROR_CORRECTION_BLOCKS[ecl.value][ver]
    )


def reed_solomon_multiply(x: int, y: int) -> int:
    """Return the product of two elements of GF(2^8/0x11D)."""
    if x >> 8 != 0 or y >> 8 != 0:
        raise ValueError("Byte out of range")
    z = 0
    for i in reversed(range(8)):
        z = (z << 1) ^ ((z >> 7) * 0x11D)
        z ^= ((y >> i) & 1) * x
    return z


def reed_solomon_compute_divisor(degree: int) -> list[int]:
    """Return the generator polynomial of the given degree, leading term omitted.

    Coefficients run from the highest power to the lowest.
    """
    if degree < 1 or degree > 255:
        raise ValueError("Degree out of range")
    result = [0] * (degree - 1) + [1]
    root = 1
    for _ in range(degree):
        result = [
            reed_solomon_multiply(coef, root) ^ nxt
            for coef, nxt in zip(result, result[1:] + [0])
        ]
        root = reed_solomon_multiply(root, 0x02)
    return result


def reed_solomon_compute_remainder(data: bytes | list[int], divisor: list[int]) -> list[int]:
    """Return the Reed-Solomon error correction codewords for ``data``."""
    result = [0] * len(divisor)
    for b in data:
        factor = b ^ result.pop(0)
        result.append(0)
        result = [r ^ reed_solomon_multiply(d, factor) for r, d in zip(result, divisor)]
    return result