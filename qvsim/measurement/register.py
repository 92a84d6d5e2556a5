"""Classical bit register written by measurements."""

from __future__ import annotations

from typing import Dict, Iterator, Optional

from ..circuit.core import Condition


class ClassicalRegister:
    """
    Mapping from classical bit index (the measured qubit's index) to 0/1.

    Bits that were never written read as 0.
    """

    def __init__(self) -> None:
        self._bits: Dict[int, int] = {}

    def __getitem__(self, bit: int) -> int:
        return self._bits.get(bit, 0)

    def __setitem__(self, bit: int, value: int) -> None:
        if bit < 0:
            raise ValueError(f"Classical bit index must be non-negative, got {bit}")
        if value not in (0, 1):
            raise ValueError(f"Classical bit value must be 0 or 1, got {value}")
        self._bits[bit] = int(value)

    def __contains__(self, bit: object) -> bool:
        return bit in self._bits

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._bits))

    def __len__(self) -> int:
        return len(self._bits)

    def __repr__(self) -> str:
        return f"ClassicalRegister({self.to_dict()!r})"

    def get(self, bit: int, default: int = 0) -> int:
        return self._bits.get(bit, default)

    def clear(self) -> None:
        self._bits.clear()

    def satisfies(self, condition: Optional[Condition]) -> bool:
        """Return True if there is no condition or the bit holds the required value."""
        if condition is None:
            return True
        return self.get(condition.bit) == condition.value

    def to_dict(self) -> Dict[int, int]:
        """Return a copy of the written bits, ordered by bit index."""
        return {bit: self._bits[bit] for bit in sorted(self._bits)}
