"""In-place gate kernels for :class:`~qvsim.backend.statevector.StateVector`.

Every kernel pairs up amplitudes whose indices differ only in the target
bit (optionally restricted to indices where control bits are 1) and applies
a 2x2 update to each pair. Pairs are addressed through strided views of the
state's ``re``/``im`` tensors, so no full-register matrix and no second
full-size buffer is ever built. Temporaries are at most one half-block.

All kernels are exact permutations or rotations of amplitude pairs and
therefore preserve the norm; none renormalizes.

Invalid topologies (a two-qubit gate whose control equals its target, or a
Toffoli with coincident indices) are treated as no-ops and logged.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence, Tuple

import torch

from ..diagnostics import assert_normalized, is_debug_enabled
from ..logging import get_logger
from .statevector import StateVector

logger = get_logger(__name__)

_SQRT1_2 = 1.0 / math.sqrt(2.0)


def _verify(state: StateVector) -> None:
    if is_debug_enabled():
        assert_normalized(state.re, state.im, atol=1e-6)


def _pair(
    state: StateVector, qubit: int, controls: Iterable[int] = ()
) -> Tuple[torch.Tensor, torch.Tensor, torch.Tensor, torch.Tensor]:
    """Return (re0, im0, re1, im1) views for the target bit = 0 / 1 halves."""
    fixed = {c: 1 for c in controls}
    fixed[qubit] = 0
    re0, im0 = state.select(fixed)
    fixed[qubit] = 1
    re1, im1 = state.select(fixed)
    return re0, im0, re1, im1


def _swap_(a: torch.Tensor, b: torch.Tensor) -> None:
    tmp = a.clone()
    a.copy_(b)
    b.copy_(tmp)


def _distinct(name: str, *qubits: int) -> bool:
    if len(set(qubits)) != len(qubits):
        logger.warning("%s on coincident qubits %s ignored", name, qubits)
        return False
    return True


def _check(state: StateVector, *qubits: int) -> None:
    for q in qubits:
        state.check_qubit(q)


# ---------------------------------------------------------------------------
# Single-qubit kernels (with optional control qubits)
# ---------------------------------------------------------------------------


def apply_x(state: StateVector, qubit: int, controls: Sequence[int] = ()) -> None:
    """Pauli-X: swap the two amplitudes of every pair."""
    _check(state, qubit, *controls)
    re0, im0, re1, im1 = _pair(state, qubit, controls)
    _swap_(re0, re1)
    _swap_(im0, im1)
    _verify(state)


def apply_y(state: StateVector, qubit: int, controls: Sequence[int] = ()) -> None:
    """
    Pauli-Y: (a0, a1) -> (-i a1, i a0).

    In components: new0 = (im1, -re1), new1 = (-im0, re0).
    """
    _check(state, qubit, *controls)
    re0, im0, re1, im1 = _pair(state, qubit, controls)
    old_re0 = re0.clone()
    old_im0 = im0.clone()
    re0.copy_(im1)
    im0.copy_(re1).neg_()
    re1.copy_(old_im0).neg_()
    im1.copy_(old_re0)
    _verify(state)


def _rotate_phase_(re: torch.Tensor, im: torch.Tensor, theta: float) -> None:
    """Multiply the amplitudes held in (re, im) by e^{i theta}."""
    c = math.cos(theta)
    s = math.sin(theta)
    old_re = re.clone()
    re.mul_(c).sub_(im * s)
    im.mul_(c).add_(old_re * s)


def apply_phase(
    state: StateVector, qubit: int, theta: float, controls: Sequence[int] = ()
) -> None:
    """
    Phase gate P(theta): multiply the bit=1 amplitude by e^{i theta}.

    Z, S, Sdg, T and Tdg are P(pi), P(pi/2), P(-pi/2), P(pi/4), P(-pi/4).
    With controls this is the controlled-phase CP(theta).
    """
    _check(state, qubit, *controls)
    fixed = {c: 1 for c in controls}
    fixed[qubit] = 1
    re1, im1 = state.select(fixed)
    _rotate_phase_(re1, im1, theta)
    _verify(state)


def apply_z(state: StateVector, qubit: int) -> None:
    """Pauli-Z as P(pi)."""
    apply_phase(state, qubit, math.pi)


def apply_h(state: StateVector, qubit: int) -> None:
    """Hadamard butterfly: (a0, a1) -> ((a0 + a1), (a0 - a1)) / sqrt(2)."""
    _check(state, qubit)
    re0, im0, re1, im1 = _pair(state, qubit)
    for a, b in ((re0, re1), (im0, im1)):
        old_a = a.clone()
        a.add_(b).mul_(_SQRT1_2)
        b.neg_().add_(old_a).mul_(_SQRT1_2)
    _verify(state)


def apply_rx(state: StateVector, qubit: int, theta: float) -> None:
    """
    RX(theta): new0 = c a0 - i s a1, new1 = -i s a0 + c a1,
    with c = cos(theta/2), s = sin(theta/2).
    """
    _check(state, qubit)
    c = math.cos(theta / 2.0)
    s = math.sin(theta / 2.0)
    re0, im0, re1, im1 = _pair(state, qubit)
    r0, i0 = re0.clone(), im0.clone()
    re0.mul_(c).add_(im1 * s)
    im0.mul_(c).sub_(re1 * s)
    re1.mul_(c).add_(i0 * s)
    im1.mul_(c).sub_(r0 * s)
    _verify(state)


def apply_ry(state: StateVector, qubit: int, theta: float) -> None:
    """RY(theta): new0 = c a0 - s a1, new1 = s a0 + c a1."""
    _check(state, qubit)
    c = math.cos(theta / 2.0)
    s = math.sin(theta / 2.0)
    re0, im0, re1, im1 = _pair(state, qubit)
    for a, b in ((re0, re1), (im0, im1)):
        old_a = a.clone()
        a.mul_(c).sub_(b * s)
        b.mul_(c).add_(old_a * s)
    _verify(state)


def apply_rz(state: StateVector, qubit: int, theta: float) -> None:
    """RZ(theta): a0 *= e^{-i theta/2}, a1 *= e^{i theta/2}."""
    _check(state, qubit)
    re0, im0, re1, im1 = _pair(state, qubit)
    _rotate_phase_(re0, im0, -theta / 2.0)
    _rotate_phase_(re1, im1, theta / 2.0)
    _verify(state)


_ROTATION_KERNELS = {"X": apply_rx, "Y": apply_ry, "Z": apply_rz}


def apply_rotation(state: StateVector, axis: str, qubit: int, theta: float) -> None:
    """Rotation R(axis, theta) about the x, y or z axis."""
    key = axis.upper() if isinstance(axis, str) else axis
    if key not in _ROTATION_KERNELS:
        raise ValueError(f"Rotation axis must be 'x', 'y' or 'z', got {axis!r}")
    _ROTATION_KERNELS[key](state, qubit, theta)


def apply_matrix(
    state: StateVector,
    qubit: int,
    matrix: torch.Tensor,
    controls: Sequence[int] = (),
) -> None:
    """
    Apply an arbitrary 2x2 complex matrix [[a, b], [c, d]] to every pair:
    new0 = a x0 + b x1, new1 = c x0 + d x1.

    The matrix is not checked for unitarity.
    """
    m = torch.as_tensor(matrix, dtype=torch.complex128)
    if m.shape != (2, 2):
        raise ValueError(f"matrix must have shape (2, 2), got {tuple(m.shape)}")
    _check(state, qubit, *controls)
    a, b, c, d = (complex(v) for v in m.reshape(-1).tolist())

    re0, im0, re1, im1 = _pair(state, qubit, controls)
    r0, i0, r1, i1 = re0.clone(), im0.clone(), re1.clone(), im1.clone()

    re0.copy_(a.real * r0 - a.imag * i0 + b.real * r1 - b.imag * i1)
    im0.copy_(a.real * i0 + a.imag * r0 + b.real * i1 + b.imag * r1)
    re1.copy_(c.real * r0 - c.imag * i0 + d.real * r1 - d.imag * i1)
    im1.copy_(c.real * i0 + c.imag * r0 + d.real * i1 + d.imag * r1)
    _verify(state)


# ---------------------------------------------------------------------------
# Two- and three-qubit kernels
# ---------------------------------------------------------------------------


def apply_cnot(state: StateVector, control: int, target: int) -> None:
    """CNOT: where the control bit is 1, swap the target-bit pair."""
    _check(state, control, target)
    if not _distinct("CNOT", control, target):
        return
    apply_x(state, target, controls=(control,))


def apply_cy(state: StateVector, control: int, target: int) -> None:
    """Controlled-Y: Y update on pairs where the control bit is 1."""
    _check(state, control, target)
    if not _distinct("CY", control, target):
        return
    apply_y(state, target, controls=(control,))


def apply_cz(state: StateVector, control: int, target: int) -> None:
    """Controlled-Z: negate amplitudes where both bits are 1."""
    _check(state, control, target)
    if not _distinct("CZ", control, target):
        return
    re11, im11 = state.select({control: 1, target: 1})
    re11.neg_()
    im11.neg_()
    _verify(state)


def apply_cp(state: StateVector, control: int, target: int, theta: float) -> None:
    """Controlled-phase: multiply the |11> component by e^{i theta}."""
    _check(state, control, target)
    if not _distinct("CP", control, target):
        return
    apply_phase(state, target, theta, controls=(control,))


def apply_swap(state: StateVector, qubit1: int, qubit2: int) -> None:
    """SWAP: exchange amplitudes whose two bits differ, once per pair."""
    _check(state, qubit1, qubit2)
    if not _distinct("SWAP", qubit1, qubit2):
        return
    re01, im01 = state.select({qubit1: 0, qubit2: 1})
    re10, im10 = state.select({qubit1: 1, qubit2: 0})
    _swap_(re01, re10)
    _swap_(im01, im10)
    _verify(state)


def apply_toffoli(state: StateVector, control1: int, control2: int, target: int) -> None:
    """Toffoli (CCX): where both control bits are 1, swap the target-bit pair."""
    _check(state, control1, control2, target)
    if not _distinct("TOFFOLI", control1, control2, target):
        return
    apply_x(state, target, controls=(control1, control2))


__all__ = [
    "apply_x",
    "apply_y",
    "apply_z",
    "apply_phase",
    "apply_h",
    "apply_rx",
    "apply_ry",
    "apply_rz",
    "apply_rotation",
    "apply_matrix",
    "apply_cnot",
    "apply_cy",
    "apply_cz",
    "apply_cp",
    "apply_swap",
    "apply_toffoli",
]
