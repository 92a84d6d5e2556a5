"""Concrete noise models."""

from __future__ import annotations

from typing import Optional

import torch

from ..backend.statevector import StateVector
from ..logging import get_logger
from .base import NoiseModel
from .channels import amplitude_damping, decay_probability, depolarizing, phase_damping
from .profile import NoiseProfile

logger = get_logger(__name__)


class ThermalRelaxationNoise(NoiseModel):
    """
    T1/T2 noise from a device profile.

    After each gate every qubit, idle or not, undergoes one amplitude
    damping step with p = 1 - exp(-duration / t1) followed by one phase
    damping step with p = 1 - exp(-duration / t2).
    """

    def __init__(self, profile: NoiseProfile) -> None:
        self.profile = profile

    def __repr__(self) -> str:
        return f"ThermalRelaxationNoise(t1={self.profile.t1}, t2={self.profile.t2})"

    def apply(
        self,
        state: StateVector,
        duration: float,
        generator: Optional[torch.Generator] = None,
    ) -> None:
        p_decay = decay_probability(duration, self.profile.t1)
        p_phase = decay_probability(duration, self.profile.t2)
        for qubit in range(state.n_qubits):
            if amplitude_damping(state, qubit, p_decay, generator):
                logger.debug("amplitude damping jump on qubit %d", qubit)
            if phase_damping(state, qubit, p_phase, generator):
                logger.debug("dephasing flip on qubit %d", qubit)


class DepolarizingNoise(NoiseModel):
    """
    Depolarizing noise with a fixed per-step probability p on every qubit.

    The step duration is ignored.
    """

    def __init__(self, p: float) -> None:
        if not 0.0 <= p <= 1.0:
            raise ValueError(f"Depolarizing probability must be in [0, 1], got {p}")
        self.p = float(p)

    def __repr__(self) -> str:
        return f"DepolarizingNoise(p={self.p})"

    def apply(
        self,
        state: StateVector,
        duration: float,
        generator: Optional[torch.Generator] = None,
    ) -> None:
        for qubit in range(state.n_qubits):
            applied = depolarizing(state, qubit, self.p, generator)
            if applied is not None:
                logger.debug("depolarizing %s on qubit %d", applied, qubit)
