"""Projective measurement and forced collapse on a statevector."""

from __future__ import annotations

import math
from typing import Optional

import torch

from ..backend.statevector import NORM_EPSILON, StateVector
from ..core.rng import uniform
from ..logging import get_logger

logger = get_logger(__name__)

# Outcome probabilities below this are treated as zero.
PROB_EPSILON = 1e-12


def _weight(re: torch.Tensor, im: torch.Tensor) -> float:
    return float((re * re).sum() + (im * im).sum())


def measure_and_collapse(
    state: StateVector,
    qubit: int,
    generator: Optional[torch.Generator] = None,
) -> int:
    """
    Measure one qubit in the computational basis and collapse the state.

    The outcome is 1 if a uniform draw falls below P(1), else 0. Amplitudes
    inconsistent with the outcome are zeroed and the survivors are rescaled
    by 1/sqrt(P(outcome)).

    If P(outcome) is ~0 (only reachable through rounding) the state is left
    untouched and 0 is returned, so no division by zero takes place.

    Parameters
    ----------
    state:
        State to measure, modified in place.
    qubit:
        Qubit index.
    generator:
        Random source for the outcome draw.

    Returns
    -------
    int
        The measured bit.
    """
    state.check_qubit(qubit)
    re0, im0 = state.select({qubit: 0})
    re1, im1 = state.select({qubit: 1})
    p1 = _weight(re1, im1)

    outcome = 1 if uniform(generator) < p1 else 0
    if outcome == 1:
        p_outcome = p1
        keep, drop = (re1, im1), (re0, im0)
    else:
        p_outcome = _weight(re0, im0)
        keep, drop = (re0, im0), (re1, im1)

    if p_outcome < PROB_EPSILON:
        logger.debug(
            "measurement of qubit %d hit a zero-probability branch (p=%.3e)",
            qubit,
            p_outcome,
        )
        return 0

    scale = 1.0 / math.sqrt(p_outcome)
    drop[0].zero_()
    drop[1].zero_()
    keep[0].mul_(scale)
    keep[1].mul_(scale)
    return outcome


def force_set_zero(state: StateVector, qubit: int) -> None:
    """
    Force a qubit into |0>: zero every amplitude with the qubit's bit set,
    then renormalize.

    Used by RESET and by the amplitude-damping jump, where the collapse to
    |0> is known in advance. If the bit-clear subspace is empty (the qubit
    is in |1> with certainty), the bit-set amplitudes are moved onto their
    bit-clear partners first so the result is still a normalized state.
    """
    state.check_qubit(qubit)
    re0, im0 = state.select({qubit: 0})
    re1, im1 = state.select({qubit: 1})

    if math.sqrt(_weight(re0, im0)) < NORM_EPSILON:
        re0.copy_(re1)
        im0.copy_(im1)

    re1.zero_()
    im1.zero_()
    state.normalize()
