"""Exception types raised by the simulation engine."""

from __future__ import annotations


class SimulatorError(Exception):
    """Base class for all qvsim engine errors."""


class QubitLimitError(SimulatorError, MemoryError):
    """Raised when a statevector would exceed the configured qubit ceiling."""

    def __init__(self, n_qubits: int, max_qubits: int) -> None:
        self.n_qubits = n_qubits
        self.max_qubits = max_qubits
        n_bytes = 2 * 8 * (1 << n_qubits)
        super().__init__(
            f"Refusing to allocate a {n_qubits}-qubit statevector "
            f"({n_bytes} bytes); the configured ceiling is {max_qubits} qubits."
        )


class UnknownGateError(SimulatorError, ValueError):
    """Raised when a gate descriptor names a type the engine does not know."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown gate type {name!r}.")


class InvariantViolationError(SimulatorError):
    """Raised when an internal state invariant (e.g. unit norm) is broken."""


__all__ = [
    "SimulatorError",
    "QubitLimitError",
    "UnknownGateError",
    "InvariantViolationError",
]
