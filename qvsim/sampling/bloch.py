"""Per-qubit Bloch vectors of a multi-qubit pure state."""

from __future__ import annotations

from typing import List

import torch

from ..backend.statevector import StateVector


def bloch_vector(state: StateVector, qubit: int) -> List[float]:
    """
    Bloch vector [x, y, z] of one qubit's reduced state.

    Summed over amplitude pairs (a0, a1) that differ only in the qubit's bit:

        x = 2 Re(a0 conj(a1))
        y = 2 Im(a0 conj(a1))  = 2 (ia rb - ra ib)
        z = |a0|^2 - |a1|^2

    The length is 1 when the qubit is unentangled and below 1 otherwise.
    """
    state.check_qubit(qubit)
    ra, ia = state.select({qubit: 0})
    rb, ib = state.select({qubit: 1})

    x = 2.0 * float((ra * rb + ia * ib).sum())
    y = 2.0 * float((ia * rb - ra * ib).sum())
    z = float((ra * ra + ia * ia).sum() - (rb * rb + ib * ib).sum())
    return [x, y, z]


def bloch_vectors(state: StateVector) -> List[List[float]]:
    """Bloch vector of every qubit, indexed by qubit."""
    return [bloch_vector(state, q) for q in range(state.n_qubits)]


def purity(vector: List[float]) -> float:
    """Squared length x^2 + y^2 + z^2 of a Bloch vector."""
    return float(torch.tensor(vector, dtype=torch.float64).pow(2).sum())
