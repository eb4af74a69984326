"""Fixed-length bit vectors packed most-significant bit first."""

from __future__ import annotations

import operator
from typing import Callable

_NO_STORAGE = "Can't print vector."


class BoolVector:
    """A vector of booleans packed eight per byte.

    Bit 0 is the high bit of byte 0.  A vector may carry more storage bytes
    than its bit length needs (see :meth:`resize_bytes`); bit access is
    always limited to the bit length.
    """

    __slots__ = ("_bits", "_data")

    def __init__(self, bits: int = 0) -> None:
        if bits < 0:
            raise ValueError("bit count must not be negative")
        self._bits = bits
        self._data = bytearray(self.calculate_bytes(bits))

    @classmethod
    def from_string(cls, text: str) -> "BoolVector":
        """Build a vector with one bit per character; any character but '0' is set."""
        vector = cls(len(text))
        for position, char in enumerate(text):
            if char != "0":
                vector.set_bit(position)
        return vector

    @staticmethod
    def calculate_bytes(bits: int) -> int:
        """Return the number of bytes needed to hold ``bits`` bits."""
        if bits >= 1:
            return (bits - 1) // 8 + 1
        return 0

    def byte_count(self) -> int:
        """Number of storage bytes currently held."""
        return len(self._data)

    def to_bytes(self) -> bytes:
        """The raw storage bytes."""
        return bytes(self._data)

    def copy(self) -> "BoolVector":
        clone = BoolVector()
        clone._bits = self._bits
        clone._data = bytearray(self._data)
        return clone

    def _locate(self, position: int) -> tuple[int, int] | None:
        if not 0 <= position < self._bits:
            return None
        index = position // 8
        if index >= len(self._data):
            return None
        return index, 1 << (7 - position % 8)

    def set_bit(self, position: int) -> None:
        """Set a bit; positions outside the vector are ignored."""
        located = self._locate(position)
        if located is not None:
            index, mask = located
            self._data[index] |= mask

    def clear_bit(self, position: int) -> None:
        """Clear a bit; positions outside the vector are ignored."""
        located = self._locate(position)
        if located is not None:
            index, mask = located
            self._data[index] &= ~mask & 0xFF

    def get_bit(self, position: int) -> bool:
        """Return a bit; positions outside the vector read as False."""
        located = self._locate(position)
        if located is None:
            return False
        index, mask = located
        return bool(self._data[index] & mask)

    def is_zero(self) -> bool:
        """True if the vector has storage and every stored bit is clear.

        An empty vector is not considered zero.
        """
        if not self._bits or not self._data:
            return False
        return not any(self._data)

    def first_set_bit(self) -> int:
        """Position of the first set bit in storage; ValueError if there is none."""
        for index, byte in enumerate(self._data):
            if byte:
                return index * 8 + (8 - byte.bit_length())
        raise ValueError("no set bit in vector")

    def resize(self, new_size: int) -> None:
        """Change the bit length, keeping the leading storage bytes."""
        if new_size < 0:
            raise ValueError("bit count must not be negative")
        data = bytearray(self.calculate_bytes(new_size))
        kept = self._data[: len(data)]
        data[: len(kept)] = kept
        self._data = data
        self._bits = new_size

    def resize_bytes(self, nbytes: int) -> None:
        """Change the storage size without touching the bit length.

        A vector without storage is left as it is.
        """
        if nbytes < 0:
            raise ValueError("byte count must not be negative")
        if not self._data:
            return
        data = bytearray(nbytes)
        kept = self._data[:nbytes]
        data[: len(kept)] = kept
        self._data = data

    def invert(self) -> None:
        """Flip every bit, clearing the padding of the last byte."""
        if not self._bits or not self._data:
            return
        self._data = bytearray(~byte & 0xFF for byte in self._data)
        shift = 8 * len(self._data) - self._bits
        mask = (0xFF << shift) & 0xFF if 0 <= shift < 8 else 0
        self._data[-1] &= mask

    def _valid_mask(self, width: int) -> int:
        kept = min(self._bits, width)
        return ((1 << kept) - 1) << (width - kept)

    def _shift(self, shift: int, towards_end: bool) -> None:
        if shift < 0:
            raise ValueError("shift must not be negative")
        if not self._bits or not self._data:
            return
        width = 8 * len(self._data)
        value = int.from_bytes(self._data, "big")
        value = value >> shift if towards_end else value << shift
        value &= self._valid_mask(width)
        self._data = bytearray(value.to_bytes(len(self._data), "big"))

    def shift_right(self, shift: int) -> None:
        """Move every bit ``shift`` positions towards the end of the vector."""
        self._shift(shift, towards_end=True)

    def shift_left(self, shift: int) -> None:
        """Move every bit ``shift`` positions towards the start of the vector."""
        self._shift(shift, towards_end=False)

    def __len__(self) -> int:
        return self._bits

    def _combine(self, other: object, op: Callable[[int, int], int]) -> "BoolVector":
        if not isinstance(other, BoolVector):
            return NotImplemented
        if not self._bits or not other._bits:
            return BoolVector()
        result = BoolVector(max(self._bits, other._bits))
        size = len(result._data)
        own = self._data[:size]
        result._data[: len(own)] = own
        for index, byte in enumerate(other._data[:size]):
            result._data[index] = op(result._data[index], byte) & 0xFF
        return result

    def __or__(self, other: object) -> "BoolVector":
        return self._combine(other, operator.or_)

    def __and__(self, other: object) -> "BoolVector":
        return self._combine(other, operator.and_)

    def __xor__(self, other: object) -> "BoolVector":
        return self._combine(other, operator.xor)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoolVector):
            return NotImplemented
        return self._bits == other._bits and self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        if not self._data:
            return _NO_STORAGE
        return " ".join(f"{byte:08b}" for byte in self._data)

    def __repr__(self) -> str:
        return f"BoolVector(bits={self._bits}, data={bytes(self._data)!r})"