"""An appendable sequence of bits."""

from __future__ import annotations


class BitBuffer(list):
    """A list of booleans that grows by appending fixed-width integers, MSB first."""

    def append_bits(self, val: int, length: int) -> None:
        """Append the ``length`` low-order bits of ``val``, most significant first.

        Requires ``0 <= length <= 31`` and ``0 <= val < 2**length``.
        """
        if length < 0 or length > 31 or val >> length != 0:
            raise ValueError("Value out of range")
        self.extend(((val >> i) & 1) != 0 for i in reversed(range(length)))