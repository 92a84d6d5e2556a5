"""Tests for measurement collapse, forced reset and the classical register."""

import math

import numpy as np
import pytest
import torch

from qvsim.backend import StateVector, kernels
from qvsim.circuit import Condition
from qvsim.core.rng import make_generator
from qvsim.measurement import ClassicalRegister, force_set_zero, measure_and_collapse


class TestMeasureAndCollapse:
    """Tests for projective single-qubit measurement."""

    def test_deterministic_zero(self, torch_rng):
        state = StateVector(2)
        assert measure_and_collapse(state, 0, torch_rng) == 0
        assert state.re.tolist() == [1.0, 0.0, 0.0, 0.0]

    def test_deterministic_one(self, torch_rng):
        state = StateVector(2)
        kernels.apply_x(state, 1)
        assert measure_and_collapse(state, 1, torch_rng) == 1
        assert state.probabilities().tolist() == pytest.approx([0.0, 0.0, 1.0, 0.0])

    def test_collapse_is_normalized_and_consistent(self, torch_rng):
        """After measuring, every surviving amplitude agrees with the outcome."""
        for _ in range(20):
            state = StateVector(3)
            for q in range(3):
                kernels.apply_h(state, q)
            outcome = measure_and_collapse(state, 1, torch_rng)
            assert state.norm() == pytest.approx(1.0)
            assert state.prob_one(1) == pytest.approx(float(outcome))

    def test_bell_pair_correlated(self, torch_rng):
        """Measuring one half of a Bell pair fixes the other."""
        for _ in range(20):
            state = StateVector(2)
            kernels.apply_h(state, 0)
            kernels.apply_cnot(state, 0, 1)
            first = measure_and_collapse(state, 0, torch_rng)
            second = measure_and_collapse(state, 1, torch_rng)
            assert first == second

    def test_outcome_frequencies(self):
        """P(1) = sin^2(theta/2) after RY(theta)."""
        generator = make_generator(123)
        theta = 1.2
        trials = 4000
        ones = 0
        for _ in range(trials):
            state = StateVector(1)
            kernels.apply_ry(state, 0, theta)
            ones += measure_and_collapse(state, 0, generator)
        assert ones / trials == pytest.approx(math.sin(theta / 2) ** 2, abs=0.03)

    def test_zero_probability_branch_leaves_state(self):
        """If the chosen outcome has ~0 probability the state is untouched."""
        state = StateVector(1)
        state.re.zero_()
        assert measure_and_collapse(state, 0, make_generator(0)) == 0
        assert state.re.tolist() == [0.0, 0.0]

    def test_seeded_reproducibility(self):
        outcomes = []
        for _ in range(2):
            generator = make_generator(7)
            run = []
            for _ in range(10):
                state = StateVector(1)
                kernels.apply_h(state, 0)
                run.append(measure_and_collapse(state, 0, generator))
            outcomes.append(run)
        assert outcomes[0] == outcomes[1]


class TestForceSetZero:
    """Tests for the forced |0> projection used by RESET and decay jumps."""

    def test_from_superposition(self):
        state = StateVector(2)
        kernels.apply_h(state, 0)
        kernels.apply_h(state, 1)
        force_set_zero(state, 1)
        assert state.probabilities().tolist() == pytest.approx([0.5, 0.5, 0.0, 0.0])

    def test_from_one_moves_amplitude(self):
        """A qubit certainly in |1> ends up in |0>, keeping the other qubits."""
        state = StateVector(2)
        kernels.apply_x(state, 0)
        kernels.apply_h(state, 1)
        force_set_zero(state, 0)
        np.testing.assert_allclose(
            state.probabilities().numpy(), [0.5, 0.0, 0.5, 0.0], atol=1e-12
        )
        assert state.norm() == pytest.approx(1.0)

    def test_entangled(self):
        state = StateVector(2)
        kernels.apply_h(state, 0)
        kernels.apply_cnot(state, 0, 1)
        force_set_zero(state, 1)
        assert state.probabilities().tolist() == pytest.approx([1.0, 0.0, 0.0, 0.0])


class TestClassicalRegister:
    """Tests for ClassicalRegister."""

    def test_unwritten_bits_read_zero(self):
        register = ClassicalRegister()
        assert register[5] == 0
        assert 5 not in register
        assert len(register) == 0

    def test_write_and_read(self):
        register = ClassicalRegister()
        register[2] = 1
        register[0] = 0
        assert register[2] == 1
        assert list(register) == [0, 2]
        assert register.to_dict() == {0: 0, 2: 1}

    def test_rejects_bad_values(self):
        register = ClassicalRegister()
        with pytest.raises(ValueError):
            register[0] = 2
        with pytest.raises(ValueError):
            register[-1] = 1

    def test_satisfies(self):
        register = ClassicalRegister()
        assert register.satisfies(None)
        assert register.satisfies(Condition(3, 0))
        assert not register.satisfies(Condition(3, 1))
        register[3] = 1
        assert register.satisfies(Condition(3, 1))

    def test_clear(self):
        register = ClassicalRegister()
        register[1] = 1
        register.clear()
        assert register.to_dict() == {}
