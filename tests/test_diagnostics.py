"""Tests for diagnostics and debug mode."""

import pytest
import torch

from qvsim.backend import StateVector, kernels
from qvsim.diagnostics import (
    assert_normalized,
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
    state_norm,
)
from qvsim.errors import InvariantViolationError, SimulatorError


class TestStateNorm:
    def test_norm(self):
        re = torch.tensor([0.6, 0.0], dtype=torch.float64)
        im = torch.tensor([0.0, 0.8], dtype=torch.float64)
        assert state_norm(re, im) == pytest.approx(1.0)

    def test_shape_mismatch(self):
        with pytest.raises(ValueError, match="same shape"):
            state_norm(torch.zeros(2), torch.zeros(4))


class TestAssertNormalized:
    def test_passes_for_unit_norm(self):
        state = StateVector(3)
        assert_normalized(state.re, state.im)

    def test_raises_for_bad_norm(self):
        re = torch.tensor([1.0, 1.0], dtype=torch.float64)
        with pytest.raises(InvariantViolationError, match="not normalized"):
            assert_normalized(re, torch.zeros(2, dtype=torch.float64))

    def test_raises_for_nan(self):
        re = torch.tensor([float("nan"), 0.0], dtype=torch.float64)
        with pytest.raises(InvariantViolationError, match="finite"):
            assert_normalized(re, torch.zeros(2, dtype=torch.float64))

    def test_error_hierarchy(self):
        assert issubclass(InvariantViolationError, SimulatorError)


def test_debug_mode_toggle_and_context() -> None:
    """Debug mode toggles globally and restores after a context block."""
    set_debug_enabled(False)
    assert not is_debug_enabled()

    with debug_context(True):
        assert is_debug_enabled()
    assert not is_debug_enabled()

    set_debug_enabled(True)
    with debug_context(False):
        assert not is_debug_enabled()
    assert is_debug_enabled()


def test_debug_mode_catches_corrupted_state() -> None:
    """With debug mode on, a kernel applied to an unnormalized state fails loudly."""
    state = StateVector(1)
    state.re.fill_(1.0)
    kernels.apply_x(state, 0)

    with debug_context(True):
        with pytest.raises(InvariantViolationError):
            kernels.apply_x(state, 0)
