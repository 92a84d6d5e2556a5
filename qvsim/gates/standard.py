"""Standard single-qubit gate matrices.

These 2x2 matrices back the generic butterfly kernel used for gate kinds
that have no closed-form kernel, and serve as references in tests. They are
never expanded to full-register matrices.
"""

from __future__ import annotations

import cmath
import math
from typing import Callable, Dict, Optional, Sequence

import torch

from .kinds import GateKind


def _resolve(dtype: torch.dtype | None, device: torch.device | None):
    if dtype is None:
        dtype = torch.complex128
    if device is None:
        device = torch.device("cpu")
    return dtype, device


def _matrix(rows, dtype, device) -> torch.Tensor:
    dtype, device = _resolve(dtype, device)
    return torch.tensor(rows, dtype=dtype, device=device)


def I(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """Identity gate."""
    return _matrix([[1.0, 0.0], [0.0, 1.0]], dtype, device)


def X(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """Pauli-X gate (bit-flip, NOT gate)."""
    return _matrix([[0.0, 1.0], [1.0, 0.0]], dtype, device)


def Y(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """Pauli-Y gate."""
    return _matrix([[0.0, -1.0j], [1.0j, 0.0]], dtype, device)


def Z(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """Pauli-Z gate (phase-flip)."""
    return _matrix([[1.0, 0.0], [0.0, -1.0]], dtype, device)


def H(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """Hadamard gate."""
    s = 1.0 / math.sqrt(2.0)
    return _matrix([[s, s], [s, -s]], dtype, device)


def S(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """S gate (phase gate, sqrt(Z))."""
    return _matrix([[1.0, 0.0], [0.0, 1.0j]], dtype, device)


def Sdg(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """Adjoint of the S gate."""
    return _matrix([[1.0, 0.0], [0.0, -1.0j]], dtype, device)


def T(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """T gate (pi/8 gate, sqrt(S))."""
    return _matrix([[1.0, 0.0], [0.0, cmath.exp(1.0j * math.pi / 4.0)]], dtype, device)


def Tdg(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """Adjoint of the T gate."""
    return _matrix([[1.0, 0.0], [0.0, cmath.exp(-1.0j * math.pi / 4.0)]], dtype, device)


def SX(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """
    Square root of X.

    Matrix form:
        1/2 [[1 + i, 1 - i],
             [1 - i, 1 + i]]
    """
    return _matrix(
        [[0.5 + 0.5j, 0.5 - 0.5j], [0.5 - 0.5j, 0.5 + 0.5j]], dtype, device
    )


def SXdg(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """Adjoint of the square root of X."""
    return _matrix(
        [[0.5 - 0.5j, 0.5 + 0.5j], [0.5 + 0.5j, 0.5 - 0.5j]], dtype, device
    )


def P(
    theta: float,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """Phase gate diag(1, e^{i theta})."""
    return _matrix([[1.0, 0.0], [0.0, cmath.exp(1.0j * theta)]], dtype, device)


def RX(
    theta: float,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """
    Rotation gate around X-axis: RX(theta) = exp(-i theta X / 2).

    Matrix form:
        [[cos(theta/2), -i sin(theta/2)],
         [-i sin(theta/2), cos(theta/2)]]
    """
    c = math.cos(theta / 2.0)
    s = math.sin(theta / 2.0)
    return _matrix([[c, -1.0j * s], [-1.0j * s, c]], dtype, device)


def RY(
    theta: float,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """
    Rotation gate around Y-axis: RY(theta) = exp(-i theta Y / 2).

    Matrix form:
        [[cos(theta/2), -sin(theta/2)],
         [sin(theta/2), cos(theta/2)]]
    """
    c = math.cos(theta / 2.0)
    s = math.sin(theta / 2.0)
    return _matrix([[c, -s], [s, c]], dtype, device)


def RZ(
    theta: float,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """
    Rotation gate around Z-axis: RZ(theta) = exp(-i theta Z / 2).

    Matrix form:
        [[e^{-i theta/2}, 0],
         [0, e^{i theta/2}]]
    """
    return _matrix(
        [[cmath.exp(-0.5j * theta), 0.0], [0.0, cmath.exp(0.5j * theta)]], dtype, device
    )


def U(
    theta: float,
    phi: float,
    lam: float,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """
    General single-qubit rotation U(theta, phi, lambda).

    Matrix form:
        [[cos(theta/2), -e^{i lambda} sin(theta/2)],
         [e^{i phi} sin(theta/2), e^{i (phi + lambda)} cos(theta/2)]]
    """
    c = math.cos(theta / 2.0)
    s = math.sin(theta / 2.0)
    return _matrix(
        [
            [c, -cmath.exp(1.0j * lam) * s],
            [cmath.exp(1.0j * phi) * s, cmath.exp(1.0j * (phi + lam)) * c],
        ],
        dtype,
        device,
    )


_FIXED: Dict[GateKind, Callable[..., torch.Tensor]] = {
    GateKind.I: I,
    GateKind.X: X,
    GateKind.Y: Y,
    GateKind.Z: Z,
    GateKind.H: H,
    GateKind.S: S,
    GateKind.SDG: Sdg,
    GateKind.T: T,
    GateKind.TDG: Tdg,
    GateKind.SX: SX,
    GateKind.SXDG: SXdg,
}

_ROTATIONS: Dict[str, Callable[..., torch.Tensor]] = {"X": RX, "Y": RY, "Z": RZ}

_PARAMETRIC: Dict[GateKind, Callable[..., torch.Tensor]] = {
    GateKind.P: P,
    GateKind.RX: RX,
    GateKind.RY: RY,
    GateKind.RZ: RZ,
    GateKind.U: U,
}


def get_gate_matrix(
    kind: GateKind,
    params: Sequence[float] = (),
    axis: Optional[str] = None,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> Optional[torch.Tensor]:
    """
    Look up the 2x2 matrix of a single-qubit gate kind.

    Returns None for kinds that are not single-qubit unitaries.

    Raises
    ------
    ValueError
        If the number of parameters does not match the gate, or an R gate
        has no valid axis.
    """
    if kind in _FIXED:
        return _FIXED[kind](dtype=dtype, device=device)

    if kind is GateKind.R:
        if axis is None or axis.upper() not in _ROTATIONS:
            raise ValueError(f"Gate R requires axis 'x', 'y' or 'z', got {axis!r}.")
        kind_fn = _ROTATIONS[axis.upper()]
    elif kind in _PARAMETRIC:
        kind_fn = _PARAMETRIC[kind]
    else:
        return None

    if len(params) != kind.n_params:
        raise ValueError(
            f"Gate {kind.value} requires exactly {kind.n_params} parameter(s), got {len(params)}."
        )
    return kind_fn(*(float(p) for p in params), dtype=dtype, device=device)


__all__ = [
    "I",
    "X",
    "Y",
    "Z",
    "H",
    "S",
    "Sdg",
    "T",
    "Tdg",
    "SX",
    "SXdg",
    "P",
    "RX",
    "RY",
    "RZ",
    "U",
    "get_gate_matrix",
]
