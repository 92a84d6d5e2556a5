"""Random source helpers.

Every stochastic operation in the engine (measurement collapse, noise jumps,
shot sampling) draws from an explicit ``torch.Generator`` so that runs can be
made reproducible by seeding it.
"""

from __future__ import annotations

from typing import Optional

import torch


def make_generator(seed: Optional[int] = None) -> torch.Generator:
    """
    Create a CPU torch.Generator.

    If seed is None the generator is seeded non-deterministically.
    """
    generator = torch.Generator(device="cpu")
    if seed is None:
        generator.seed()
    else:
        generator.manual_seed(int(seed))
    return generator


def uniform(generator: Optional[torch.Generator] = None) -> float:
    """Draw one float from Uniform[0, 1)."""
    return float(torch.rand((), generator=generator, dtype=torch.float64))


def uniforms(n: int, generator: Optional[torch.Generator] = None) -> torch.Tensor:
    """Draw n floats from Uniform[0, 1) as a float64 CPU tensor."""
    return torch.rand((n,), generator=generator, dtype=torch.float64)
