"""Pytest configuration and shared fixtures for qvsim tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- Small helpers for building reference states
"""

import os

import numpy as np
import pytest
import torch


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function")
def torch_rng() -> torch.Generator:
    """Provide a deterministic torch RNG for measurement, noise and sampling.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    from qvsim.core.rng import make_generator

    return make_generator(_seed())


@pytest.fixture(scope="function")
def random_state(rng: np.random.Generator):
    """Factory for normalized random StateVectors."""
    from qvsim.backend import StateVector

    def _make(n_qubits: int) -> StateVector:
        dim = 1 << n_qubits
        amps = rng.normal(size=dim) + 1j * rng.normal(size=dim)
        amps /= np.linalg.norm(amps)
        return StateVector.from_amplitudes(torch.from_numpy(amps))

    return _make


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Auto-use fixture to set global random seeds for reproducibility."""
    np.random.seed(_seed())
    torch.manual_seed(_seed())
    if torch.cuda.is_available():
        torch.cuda.manual_seed_all(_seed())


@pytest.fixture(autouse=True)
def _restore_debug_mode():
    """Leave debug mode as each test found it."""
    from qvsim.diagnostics import is_debug_enabled, set_debug_enabled

    original = is_debug_enabled()
    yield
    set_debug_enabled(original)
