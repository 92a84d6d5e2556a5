"""Statevector storage and in-place gate kernels."""

from .kernels import (
    apply_cnot,
    apply_cp,
    apply_cy,
    apply_cz,
    apply_h,
    apply_matrix,
    apply_phase,
    apply_rotation,
    apply_rx,
    apply_ry,
    apply_rz,
    apply_swap,
    apply_toffoli,
    apply_x,
    apply_y,
    apply_z,
)
from .statevector import NORM_EPSILON, StateVector

__all__ = [
    "StateVector",
    "NORM_EPSILON",
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
