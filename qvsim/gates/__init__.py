"""Gate vocabulary and standard gate matrices."""

from .kinds import SINGLE_QUBIT_KINDS, TWO_QUBIT_KINDS, GateKind, parse_gate_kind
from .standard import get_gate_matrix

__all__ = [
    "GateKind",
    "SINGLE_QUBIT_KINDS",
    "TWO_QUBIT_KINDS",
    "parse_gate_kind",
    "get_gate_matrix",
]
