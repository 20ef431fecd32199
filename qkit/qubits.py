"""
Qubit addressing by bitmask.

A single qubit at bit position i is identified by the mask 2^i, and a value
with several bits set denotes a set of qubits. QubitMask makes the
difference between "one qubit" and "a set of qubits" explicit.
"""

from typing import List


class QubitMask(int):
    """Immutable set of qubits encoded as an integer bitmask."""

    def __new__(cls, value: int = 0):
        value = int(value)
        if value < 0:
            raise ValueError(f"qubit mask must be non-negative, got {value}")
        return super().__new__(cls, value)

    @classmethod
    def of(cls, value) -> "QubitMask":
        """Coerce an int (or QubitMask) to a QubitMask."""
        if isinstance(value, QubitMask):
            return value
        return cls(value)

    @classmethod
    def bit(cls, i: int) -> "QubitMask":
        """Mask of the single qubit at bit position i."""
        return cls(1 << i)

    @classmethod
    def range(cls, count: int, start: int = 0) -> "QubitMask":
        """Mask of `count` consecutive qubits starting at bit `start`."""
        return cls(((1 << count) - 1) << start)

    def bits(self) -> List["QubitMask"]:
        """Decompose into single-qubit masks, lowest bit first."""
        result = []
        value = int(self)
        while value:
            low = value & -value
            result.append(QubitMask(low))
            value ^= low
        return result

    def positions(self) -> List[int]:
        """Bit positions of the qubits in this mask, ascending."""
        return [q.bit_length() - 1 for q in self.bits()]

    def count(self) -> int:
        return bin(self).count("1")

    def is_single(self) -> bool:
        return self != 0 and (self & (self - 1)) == 0

    def require_single(self) -> "QubitMask":
        if not self.is_single():
            raise ValueError(f"expected a single-qubit mask, got {int(self):#x}")
        return self

    def __contains__(self, other) -> bool:
        other = int(other)
        return (int(self) & other) == other

    def __or__(self, other):
        return QubitMask(int(self) | int(other))

    __ror__ = __or__

    def __and__(self, other):
        return QubitMask(int(self) & int(other))

    __rand__ = __and__

    def __xor__(self, other):
        return QubitMask(int(self) ^ int(other))

    __rxor__ = __xor__

    def __lshift__(self, n):
        return QubitMask(int(self) << n)

    def __rshift__(self, n):
        return QubitMask(int(self) >> n)

    def __repr__(self):
        return f"QubitMask({int(self):#x})"
