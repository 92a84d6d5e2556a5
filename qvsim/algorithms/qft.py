"""Quantum Fourier Transform macros built from H, CP and SWAP kernels."""

from __future__ import annotations

import math

from ..backend.kernels import apply_cp, apply_h, apply_swap
from ..backend.statevector import StateVector


def _reverse_qubits(state: StateVector) -> None:
    """Reverse the qubit order with floor(n/2) SWAPs."""
    n = state.n_qubits
    for index in range(n // 2):
        apply_swap(state, index, n - 1 - index)


def apply_qft(state: StateVector) -> None:
    """
    Apply the QFT to every qubit of state, in place.

    For each target i: H(i), then CP(pi / 2**(j - i)) with control j for
    every j > i. The qubit order is reversed at the end.
    """
    n = state.n_qubits
    for target in range(n):
        apply_h(state, target)
        for control in range(target + 1, n):
            apply_cp(state, control, target, math.pi / (1 << (control - target)))
    _reverse_qubits(state)


def apply_iqft(state: StateVector) -> None:
    """Apply the inverse QFT: the QFT sequence reversed with negated angles."""
    n = state.n_qubits
    _reverse_qubits(state)
    for target in reversed(range(n)):
        for control in reversed(range(target + 1, n)):
            apply_cp(state, control, target, -math.pi / (1 << (control - target)))
        apply_h(state, target)
