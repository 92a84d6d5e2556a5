"""Stochastic single-qubit noise channels on a pure statevector.

The channels are unravelled as Monte-Carlo wavefunction trajectories: each
call draws from the supplied generator and applies one branch of the channel
to the state in place. Averaged over many trajectories they reproduce the
corresponding Kraus channel.
"""

from __future__ import annotations

import math
from typing import Optional

import torch

from ..backend.kernels import apply_x, apply_y, apply_z
from ..backend.statevector import StateVector
from ..core.rng import uniform
from ..measurement.collapse import force_set_zero


def _check_probability(p: float, label: str) -> None:
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"{label} probability must be in [0, 1], got {p}")


def decay_probability(duration: float, time_constant: float) -> float:
    """
    Probability of a decay event within duration: 1 - exp(-duration / tau).

    An infinite time constant gives 0.
    """
    if time_constant <= 0.0:
        raise ValueError(f"time_constant must be positive, got {time_constant}")
    if math.isinf(time_constant):
        return 0.0
    return 1.0 - math.exp(-duration / time_constant)


def amplitude_damping(
    state: StateVector,
    qubit: int,
    p: float,
    generator: Optional[torch.Generator] = None,
) -> bool:
    """
    One trajectory step of amplitude damping (T1 relaxation) with decay
    probability p.

    A jump happens with probability p * P(1); the qubit is then forced to
    |0>. Otherwise the no-jump branch scales every amplitude with the
    qubit's bit set by sqrt(1 - p) and renormalizes.

    Returns
    -------
    bool
        True if a jump occurred.
    """
    _check_probability(p, "Amplitude damping")
    state.check_qubit(qubit)
    if p == 0.0:
        return False

    p1 = state.prob_one(qubit)
    if uniform(generator) < p * p1:
        force_set_zero(state, qubit)
        return True

    re1, im1 = state.select({qubit: 1})
    factor = math.sqrt(1.0 - p)
    re1.mul_(factor)
    im1.mul_(factor)
    state.normalize()
    return False


def phase_damping(
    state: StateVector,
    qubit: int,
    p: float,
    generator: Optional[torch.Generator] = None,
) -> bool:
    """
    One trajectory step of dephasing (T2): with probability p apply Z.

    Returns
    -------
    bool
        True if the phase flip was applied.
    """
    _check_probability(p, "Phase damping")
    state.check_qubit(qubit)
    if p == 0.0:
        return False
    if uniform(generator) < p:
        apply_z(state, qubit)
        return True
    return False


_PAULIS = (("X", apply_x), ("Y", apply_y), ("Z", apply_z))


def depolarizing(
    state: StateVector,
    qubit: int,
    p: float,
    generator: Optional[torch.Generator] = None,
) -> Optional[str]:
    """
    One trajectory step of the depolarizing channel: with probability p
    apply X, Y or Z, each with probability p/3.

    Returns
    -------
    str or None
        The name of the applied Pauli, or None for the identity branch.
    """
    _check_probability(p, "Depolarizing")
    state.check_qubit(qubit)
    if p == 0.0:
        return None
    u = uniform(generator)
    if u >= p:
        return None
    name, kernel = _PAULIS[min(int(3.0 * u / p), 2)]
    kernel(state, qubit)
    return name
