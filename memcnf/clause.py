"""CNF clauses held as pairs of bit vectors, and formulas made of them."""

from __future__ import annotations

from typing import Iterator

from memcnf.boolvector import BoolVector


def _widened(vector: BoolVector) -> BoolVector:
    """A copy whose bit length covers all of the source's storage bytes."""
    return BoolVector.from_string("".join(f"{byte:08b}" for byte in vector.to_bytes()))


class Clause:
    """A disjunction: set bits of ``positive`` are plain literals, of ``negative`` negated ones."""

    __slots__ = ("positive", "negative", "position")

    def __init__(self, bits: int = 0) -> None:
        self.positive = BoolVector(bits)
        self.negative = BoolVector(bits)
        self.position = 0

    @staticmethod
    def _update(
        target: BoolVector,
        other: BoolVector,
        position: int,
        var_type: str,
        max_bytes: int,
        setting: bool,
    ) -> int:
        new_bits = position + (1 if var_type == "variable" else 2)
        required = new_bits // 8 + 1
        if required > target.byte_count() or len(target) == 0:
            max_bytes = max(max_bytes, required)
            target.resize(new_bits)
            other.resize_bytes(max_bytes)
        if setting:
            target.set_bit(position)
        else:
            target.clear_bit(position)
        return max_bytes

    def set_positive_bit(self, position: int, var_type: str, max_bytes: int) -> int:
        """Set a positive literal, growing storage as needed; return the new byte maximum."""
        return self._update(self.positive, self.negative, position, var_type, max_bytes, True)

    def clear_positive_bit(self, position: int, var_type: str, max_bytes: int) -> int:
        """Clear a positive literal, growing storage as needed; return the new byte maximum."""
        return self._update(self.positive, self.negative, position, var_type, max_bytes, False)

    def set_negative_bit(self, position: int, var_type: str, max_bytes: int) -> int:
        """Set a negated literal, growing storage as needed; return the new byte maximum."""
        return self._update(self.negative, self.positive, position, var_type, max_bytes, True)

    def clear_negative_bit(self, position: int, var_type: str, max_bytes: int) -> int:
        """Clear a negated literal, growing storage as needed; return the new byte maximum."""
        return self._update(self.negative, self.positive, position, var_type, max_bytes, False)

    def resize(self, new_size: int) -> None:
        self.positive.resize(new_size)
        self.negative.resize(new_size)

    def resize_bytes(self, nbytes: int) -> None:
        self.positive.resize_bytes(nbytes)
        self.negative.resize_bytes(nbytes)

    def copy(self) -> "Clause":
        clone = Clause()
        clone.positive = self.positive.copy()
        clone.negative = self.negative.copy()
        clone.position = self.position
        return clone

    def __str__(self) -> str:
        return f"  Positive vars: {self.positive}\n  Negative vars: {self.negative}"

    def __repr__(self) -> str:
        return f"Clause(position={self.position}, positive={self.positive!r}, negative={self.negative!r})"


class CNF:
    """An ordered conjunction of clauses.

    A new formula holds a single empty clause, which the first real clause
    is expected to replace through :meth:`replace_first`.
    """

    def __init__(self) -> None:
        self._clauses: list[Clause] = [Clause()]

    def add(self, clause: Clause) -> None:
        """Append a copy whose vectors span all of the clause's storage bytes."""
        added = Clause()
        added.positive = _widened(clause.positive)
        added.negative = _widened(clause.negative)
        added.position = clause.position
        self._clauses.append(added)

    def replace_first(self, clause: Clause) -> None:
        """Replace the leading clause with a copy of ``clause``."""
        if self._clauses:
            self._clauses[0] = clause.copy()
        else:
            self._clauses.append(clause.copy())

    def remove(self, clause: Clause) -> None:
        """Remove the given clause object; ValueError if it is not in the formula."""
        for index, existing in enumerate(self._clauses):
            if existing is clause:
                del self._clauses[index]
                return
        raise ValueError("clause is not part of this formula")

    def resize_all(self, nbytes: int) -> None:
        """Give every clause vector that has storage ``nbytes`` bytes."""
        for clause in self._clauses:
            clause.resize_bytes(nbytes)

    def __iter__(self) -> Iterator[Clause]:
        return iter(self._clauses)

    def __len__(self) -> int:
        return len(self._clauses)

    def __str__(self) -> str:
        return "\n".join(
            f"Clause {number}:\n{clause}\n"
            for number, clause in enumerate(self._clauses, start=1)
        )