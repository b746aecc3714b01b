"""Segments of character, binary and control data in a QR Code symbol."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from qrforge.bitbuffer import BitBuffer

ALPHANUMERIC_CHARSET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:"
_ALPHANUMERIC_INDEX = {ch: i for i, ch in enumerate(ALPHANUMERIC_CHARSET)}
_DIGITS = frozenset("0123456789")


class Mode(Enum):
    """How a segment's data bits are interpreted."""

    NUMERIC = (0x1, 10, 12, 14)
    ALPHANUMERIC = (0x2, 9, 11, 13)
    BYTE = (0x4, 8, 16, 16)
    KANJI = (0x8, 8, 10, 12)
    ECI = (0x7, 0, 0, 0)

    def __init__(self, mode_bits: int, cc0: int, cc1: int, cc2: int) -> None:
        self.mode_bits = mode_bits
        self._char_count_bits = (cc0, cc1, cc2)

    def num_char_count_bits(self, ver: int) -> int:
        """Return the width of the character count field at the given version."""
        return self._char_count_bits[(ver + 7) // 17]


@dataclass(frozen=True)
class QrSegment:
    """An immutable segment: a mode, a character count and the data bits.

    The character count must agree with the mode and the data length,
    but that is not checked.
    """

    mode: Mode
    num_chars: int
    data: tuple[bool, ...]

    def __post_init__(self) -> None:
        if self.num_chars < 0:
            raise ValueError("Invalid value")
        object.__setattr__(self, "data", tuple(bool(b) for b in self.data))

    @staticmethod
    def make_bytes(data: bytes | bytearray | Iterable[int]) -> QrSegment:
        """Return a byte mode segment holding the given bytes."""
        raw = bytes(data)
        bb = BitBuffer()
        for b in raw:
            bb.append_bits(b, 8)
        return QrSegment(Mode.BYTE, len(raw), bb)

    @staticmethod
    def make_numeric(digits: str) -> QrSegment:
        """Return a numeric mode segment for a string of decimal digits."""
        if not QrSegment.is_numeric(digits):
            raise ValueError("String contains non-numeric characters")
        bb = BitBuffer()
        for start in range(0, len(digits), 3):
            chunk = digits[start:start + 3]
            bb.append_bits(int(chunk), len(chunk) * 3 + 1)
        return QrSegment(Mode.NUMERIC, len(digits), bb)

    @staticmethod
    def make_alphanumeric(text: str) -> QrSegment:
        """Return an alphanumeric mode segment for the given text.

        Allowed characters: 0-9, A-Z (upper case), space and ``$%*+-./:``.
        """
        if not QrSegment.is_alphanumeric(text):
            raise ValueError("String contains unencodable characters in alphanumeric mode")
        bb = BitBuffer()
        for start in range(0, len(text), 2):
            pair = text[start:start + 2]
            if len(pair) == 2:
                value = _ALPHANUMERIC_INDEX[pair[0]] * 45 + _ALPHANUMERIC_INDEX[pair[1]]
                bb.append_bits(value, 11)
            else:
                bb.append_bits(_ALPHANUMERIC_INDEX[pair], 6)
        return QrSegment(Mode.ALPHANUMERIC, len(text), bb)

    @staticmethod
    def make_segments(text: str) -> list[QrSegment]:
        """Return zero or more segments representing the text in the most compact single mode."""
        if text == "":
            return []
        if QrSegment.is_numeric(text):
            return [QrSegment.make_numeric(text)]
        if QrSegment.is_alphanumeric(text):
            return [QrSegment.make_alphanumeric(text)]
        return [QrSegment.make_bytes(text.encode("utf-8"))]

    @staticmethod
    def make_eci(assign_val: int) -> QrSegment:
        """Return an Extended Channel Interpretation designator segment."""
        bb = BitBuffer()
        if assign_val < 0:
            raise ValueError("ECI assignment value out of range")
        if assign_val < (1 << 7):
            bb.append_bits(assign_val, 8)
        elif assign_val < (1 << 14):
            bb.append_bits(2, 2)
            bb.append_bits(assign_val, 14)
        elif assign_val < 1_000_000:
            bb.append_bits(6, 3)
            bb.append_bits(assign_val, 21)
        else:
            raise ValueError("ECI assignment value out of range")
        return QrSegment(Mode.ECI, 0, bb)

    @staticmethod
    def is_numeric(text: str) -> bool:
        """Tell whether every character is an ASCII digit."""
        return all(ch in _DIGITS for ch in text)

    @staticmethod
    def is_alphanumeric(text: str) -> bool:
        """Tell whether every character is in the alphanumeric mode character set."""
        return all(ch in _ALPHANUMERIC_INDEX for ch in text)

    @staticmethod
    def get_total_bits(segs: Sequence[QrSegment], version: int) -> int | None:
        """Return the bits needed to encode the segments at the version.

        Returns None if some segment has too many characters for its count field.
        """
        total = 0
        for seg in segs:
            ccbits = seg.mode.num_char_count_bits(version)
            if seg.num_chars >= (1 << ccbits):
                return None
            total += 4 + ccbits + len(seg.data)
        return total