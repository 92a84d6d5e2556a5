"""Base class for per-step noise models."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

import torch

from ..backend.statevector import StateVector


class NoiseModel(ABC):
    """
    A noise model applied to the whole register after every executed gate.

    Implementations draw all randomness from the generator they are given,
    so a seeded generator makes a noisy run reproducible.
    """

    @abstractmethod
    def apply(
        self,
        state: StateVector,
        duration: float,
        generator: Optional[torch.Generator] = None,
    ) -> None:
        """
        Apply one step of noise to every qubit of state, in place.

        Args:
            state: The statevector to mutate.
            duration: Elapsed time of the step, in the unit of the model's
                time constants.
            generator: Random source.
        """
