"""Closed vocabulary of gate kinds understood by the engine."""

from __future__ import annotations

from enum import Enum

from ..errors import UnknownGateError


class GateKind(str, Enum):
    """Every operation a gate descriptor may name."""

    # Single-qubit unitaries
    I = "I"
    X = "X"
    Y = "Y"
    Z = "Z"
    H = "H"
    S = "S"
    SDG = "SDG"
    T = "T"
    TDG = "TDG"
    SX = "SX"
    SXDG = "SXDG"
    P = "P"
    RX = "RX"
    RY = "RY"
    RZ = "RZ"
    R = "R"
    U = "U"

    # Multi-qubit unitaries
    CNOT = "CNOT"
    CZ = "CZ"
    CY = "CY"
    CP = "CP"
    SWAP = "SWAP"
    TOFFOLI = "TOFFOLI"

    # Non-unitary and structural operations
    MEASURE = "MEASURE"
    RESET = "RESET"
    BARRIER = "BARRIER"
    QFT = "QFT"
    IQFT = "IQFT"

    @property
    def n_params(self) -> int:
        """Number of float parameters the gate takes."""
        return _N_PARAMS.get(self, 0)

    @property
    def is_two_qubit(self) -> bool:
        return self in TWO_QUBIT_KINDS

    @property
    def is_single_qubit_unitary(self) -> bool:
        return self in SINGLE_QUBIT_KINDS


SINGLE_QUBIT_KINDS = frozenset(
    {
        GateKind.I,
        GateKind.X,
        GateKind.Y,
        GateKind.Z,
        GateKind.H,
        GateKind.S,
        GateKind.SDG,
        GateKind.T,
        GateKind.TDG,
        GateKind.SX,
        GateKind.SXDG,
        GateKind.P,
        GateKind.RX,
        GateKind.RY,
        GateKind.RZ,
        GateKind.R,
        GateKind.U,
    }
)

TWO_QUBIT_KINDS = frozenset(
    {GateKind.CNOT, GateKind.CZ, GateKind.CY, GateKind.CP, GateKind.SWAP}
)

_N_PARAMS = {
    GateKind.P: 1,
    GateKind.RX: 1,
    GateKind.RY: 1,
    GateKind.RZ: 1,
    GateKind.R: 1,
    GateKind.CP: 1,
    GateKind.U: 3,
}

_ALIASES = {
    "CX": GateKind.CNOT,
    "CCX": GateKind.TOFFOLI,
    "CCNOT": GateKind.TOFFOLI,
    "S_DAG": GateKind.SDG,
    "SDAG": GateKind.SDG,
    "T_DAG": GateKind.TDG,
    "TDAG": GateKind.TDG,
    "SX_DAG": GateKind.SXDG,
    "PHASE": GateKind.P,
    "CPHASE": GateKind.CP,
    "ID": GateKind.I,
    "M": GateKind.MEASURE,
    "U3": GateKind.U,
}


def parse_gate_kind(name: str | GateKind) -> GateKind:
    """
    Resolve a gate type name (case-insensitive, aliases allowed) to a GateKind.

    Raises
    ------
    UnknownGateError
        If the name is not a known gate type or alias.
    """
    if isinstance(name, GateKind):
        return name
    if not isinstance(name, str):
        raise UnknownGateError(repr(name))
    key = name.strip().upper()
    if key in _ALIASES:
        return _ALIASES[key]
    try:
        return GateKind(key)
    except ValueError:
        raise UnknownGateError(name) from None


__all__ = [
    "GateKind",
    "SINGLE_QUBIT_KINDS",
    "TWO_QUBIT_KINDS",
    "parse_gate_kind",
]
