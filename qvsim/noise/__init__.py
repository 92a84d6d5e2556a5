"""Stochastic noise for statevector trajectories.

Channels are unravelled as Monte-Carlo wavefunction steps driven by an
explicit random generator.
"""

from .base import NoiseModel
from .channels import amplitude_damping, decay_probability, depolarizing, phase_damping
from .models import DepolarizingNoise, ThermalRelaxationNoise
from .profile import NoiseProfile

__all__ = [
    "NoiseModel",
    "NoiseProfile",
    "ThermalRelaxationNoise",
    "DepolarizingNoise",
    "amplitude_damping",
    "phase_damping",
    "depolarizing",
    "decay_probability",
]
