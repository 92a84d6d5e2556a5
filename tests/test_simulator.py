"""End-to-end tests for the circuit runner."""

import io
import logging
import math

import pytest

import qvsim
from qvsim.circuit import GateOp, QuantumCircuit
from qvsim.config import DeviceTiming, SimulatorConfig
from qvsim.errors import QubitLimitError, UnknownGateError
from qvsim.gates import GateKind
from qvsim.logging import configure_logging
from qvsim.noise import DepolarizingNoise, NoiseProfile
from qvsim.simulator import RunState, Simulator, run


BELL = [{"type": "H", "wire": 0}, {"type": "CNOT", "wire": 0, "target": 1}]


def _captured_warnings(fn):
    stream = io.StringIO()
    configure_logging(level=logging.WARNING, stream=stream)
    try:
        result = fn()
    finally:
        configure_logging(level=logging.WARNING)
    return result, stream.getvalue()


class TestIdealRuns:
    """Noiseless circuits with known outcomes."""

    def test_bell_pair(self):
        result = Simulator(2, seed=1).run(BELL, shots=4000)
        assert set(result.counts) <= {"00", "11"}
        assert sum(result.counts.values()) == 4000
        assert result.counts["00"] / 4000 == pytest.approx(0.5, abs=0.05)
        assert result.statevector["re"] == pytest.approx([1 / math.sqrt(2), 0.0, 0.0, 1 / math.sqrt(2)])

    @pytest.mark.parametrize("second_control", [0, 1])
    def test_ghz(self, second_control):
        circuit = QuantumCircuit(3).h(0).cx(0, 1).cx(second_control, 2)
        result = Simulator(3, seed=2).run(circuit, shots=1000)
        assert set(result.counts) <= {"000", "111"}
        for vector in result.bloch_vectors:
            assert vector == pytest.approx([0.0, 0.0, 0.0], abs=1e-12)

    def test_x_on_highest_qubit(self):
        result = Simulator(3, seed=0).run([{"type": "X", "wire": 2}], shots=50)
        assert result.counts == {"100": 50}
        assert result.bloch_vectors[2] == pytest.approx([0.0, 0.0, -1.0])
        assert result.bloch_vectors[0] == pytest.approx([0.0, 0.0, 1.0])

    def test_empty_circuit(self):
        result = Simulator(2, seed=0).run([], shots=10)
        assert result.counts == {"00": 10}
        assert result.classical_register == {}

    def test_toffoli_from_dict(self):
        gates = [
            {"type": "X", "wire": 0},
            {"type": "X", "wire": 1},
            {"type": "CCX", "controls": [0, 1], "target": 2},
        ]
        assert Simulator(3, seed=0).run(gates, shots=8).counts == {"111": 8}

    def test_qft_then_iqft(self):
        gates = [{"type": "X", "wire": 1}, {"type": "QFT"}, {"type": "IQFT"}]
        result = Simulator(3, seed=0).run(gates, shots=20)
        assert result.counts == {"010": 20}

    def test_reset(self):
        gates = [{"type": "H", "wire": 0}, {"type": "X", "wire": 1}, {"type": "RESET", "wire": 1}]
        result = Simulator(2, seed=3).run(gates, shots=200)
        assert set(result.counts) <= {"00", "01"}

    def test_barrier_is_noop(self):
        gates = [{"type": "X", "wire": 0}, {"type": "BARRIER"}]
        assert Simulator(1, seed=0).run(gates, shots=5).counts == {"1": 5}

    def test_parametric_and_matrix_gates(self):
        """SX twice is X; U(pi, 0, pi) is X."""
        circuit = QuantumCircuit(2).sx(0).sx(0).u(math.pi, 0.0, math.pi, 1)
        assert Simulator(2, seed=0).run(circuit, shots=10).counts == {"11": 10}

    def test_mixed_gateops_and_dicts(self):
        gates = [GateOp(GateKind.H, wire=0), {"type": "cx", "wire": 0, "target": 1}]
        result = Simulator(2, seed=0).run(gates, shots=100)
        assert set(result.counts) <= {"00", "11"}

    def test_seeded_runs_repeat(self):
        a = Simulator(2, seed=9).run(BELL, shots=300)
        b = Simulator(2, seed=9).run(BELL, shots=300)
        assert a.counts == b.counts


class TestMeasurementAndConditions:
    """Mid-circuit measurement and classically conditioned gates."""

    def test_measure_records_register(self):
        gates = [{"type": "X", "wire": 0}, {"type": "MEASURE", "wire": 0}]
        result = Simulator(2, seed=0).run(gates, shots=10)
        assert result.classical_register == {0: 1}

    def test_condition_true_executes(self):
        gates = [
            {"type": "X", "wire": 0},
            {"type": "MEASURE", "wire": 0},
            {"type": "X", "wire": 1, "condition": {"bit": 0, "value": 1}},
        ]
        result = Simulator(2, seed=0).run(gates, shots=10)
        assert result.counts == {"11": 10}
        assert result.metadata == {"executed": 3, "skipped": 0}

    def test_condition_false_skips(self):
        gates = [
            {"type": "MEASURE", "wire": 0},
            {"type": "X", "wire": 1, "condition": {"bit": 0, "value": 1}},
        ]
        result = Simulator(2, seed=0).run(gates, shots=10)
        assert result.counts == {"00": 10}
        assert result.metadata["skipped"] == 1

    def test_unwritten_bit_reads_zero(self):
        circuit = QuantumCircuit(1).x(0).c_if(4, 0)
        assert Simulator(1, seed=0).run(circuit, shots=3).counts == {"1": 3}

    def test_teleport_style_correction(self):
        """Measured Bell pair followed by conditional X leaves qubit 1 in |0>."""
        circuit = (
            QuantumCircuit(2)
            .h(0)
            .cx(0, 1)
            .measure(0)
            .x(1)
            .c_if(0, 1)
        )
        for seed in range(8):
            result = Simulator(2, seed=seed).run(circuit, shots=20)
            outcome = result.classical_register[0]
            expected = "0" + str(outcome)
            assert result.counts == {expected: 20}


class TestNoise:
    """Runs with a T1/T2 profile."""

    def test_infinite_times_match_noiseless(self):
        noisy = Simulator(2, noise_profile={"t1": math.inf, "t2": math.inf}, seed=4)
        ideal = Simulator(2, seed=4)
        assert noisy.run(BELL, shots=500).counts == ideal.run(BELL, shots=500).counts

    def test_nested_device_profile(self):
        """A device dict carrying t2 only under its noise block runs."""
        device = {
            "name": "Custom Hardware",
            "num_qubits": 5,
            "noise": {"name": "Custom", "t1": 50, "t2": 30, "gate_error_1q": 0.001, "gate_error_2q": 0.01},
            "t1": 50,
            "layout": "grid",
            "grid_width": 3,
            "grid_height": 2,
        }
        sim = Simulator(2, noise_profile=device, seed=0)
        assert sim.noise_profile.t2 == 30.0
        result = sim.run(BELL, shots=100)
        assert sum(result.counts.values()) == 100

    def test_tiny_t1_decays_to_ground(self):
        profile = NoiseProfile(t1=1e-6, t2=1e6)
        result = Simulator(2, noise_profile=profile, seed=0).run(
            [{"type": "X", "wire": 0}, {"type": "X", "wire": 1}], shots=100
        )
        assert result.counts == {"00": 100}

    def test_noisy_run_stays_normalized(self):
        profile = {"name": "Custom Chip", "t1": 5.0, "t2": 2.0}
        circuit = QuantumCircuit(3).h(0).cx(0, 1).cx(1, 2).rx(0.3, 2).qft()
        result = Simulator(3, noise_profile=profile, seed=5).run(circuit, shots=100)
        norm = sum(r * r + i * i for r, i in zip(result.statevector["re"], result.statevector["im"]))
        assert norm == pytest.approx(1.0, abs=1e-9)

    def test_explicit_noise_model(self):
        sim = Simulator(1, noise_model=DepolarizingNoise(0.0), seed=0)
        assert sim.run([{"type": "X", "wire": 0}], shots=5).counts == {"1": 5}

    def test_custom_timing(self):
        """Zero-length gates never decay."""
        config = SimulatorConfig(timing=DeviceTiming(0.0, 0.0))
        sim = Simulator(1, noise_profile=NoiseProfile(t1=1e-6, t2=1e-6), config=config, seed=0)
        assert sim.run([{"type": "X", "wire": 0}], shots=5).counts == {"1": 5}

    def test_uncoupled_pair_warns(self):
        profile = NoiseProfile(t1=math.inf, t2=math.inf, name="line", coupling_map=[(0, 1), (1, 2)])
        sim = Simulator(3, noise_profile=profile, seed=0)
        result, log = _captured_warnings(
            lambda: sim.run([{"type": "X", "wire": 0}, {"type": "CNOT", "wire": 0, "target": 2}], shots=5)
        )
        assert result.counts == {"101": 5}
        assert "uncoupled" in log

    def test_uncoupled_toffoli_warns(self):
        profile = NoiseProfile(t1=math.inf, t2=math.inf, name="line", coupling_map=[(0, 1), (1, 2)])
        sim = Simulator(3, noise_profile=profile, seed=0)
        gates = [
            {"type": "X", "wire": 0},
            {"type": "X", "wire": 1},
            {"type": "TOFFOLI", "controls": [0, 1], "target": 2},
        ]
        result, log = _captured_warnings(lambda: sim.run(gates, shots=5))
        assert result.counts == {"111": 5}
        assert "TOFFOLI on uncoupled qubits (0, 2)" in log
        assert "(1, 2)" not in log


class TestErrors:
    """Validation and error propagation."""

    def test_qubit_limit(self):
        with pytest.raises(QubitLimitError):
            Simulator(5, config=SimulatorConfig(max_qubits=4))

    def test_negative_qubits(self):
        with pytest.raises(ValueError):
            Simulator(-1)

    @pytest.mark.parametrize("shots", [0, -1, 1.5])
    def test_bad_shots(self, shots):
        with pytest.raises(ValueError, match="shots"):
            Simulator(1).run([], shots=shots)

    def test_unknown_gate_strict(self):
        sim = Simulator(1)
        with pytest.raises(UnknownGateError):
            sim.run([{"type": "FOO", "wire": 0}], shots=1)
        assert sim.state is RunState.IDLE

    def test_unknown_gate_lenient(self):
        sim = Simulator(1, config=SimulatorConfig(strict_gates=False), seed=0)
        result, log = _captured_warnings(
            lambda: sim.run([{"type": "FOO", "wire": 0}, {"type": "X", "wire": 0}], shots=4)
        )
        assert result.counts == {"1": 4}
        assert "FOO" in log

    def test_gate_qubit_out_of_range(self):
        with pytest.raises(ValueError, match="out of range"):
            Simulator(2).run([{"type": "H", "wire": 2}], shots=1)

    def test_missing_target(self):
        with pytest.raises(ValueError, match="target"):
            Simulator(2).run([{"type": "CNOT", "wire": 0}], shots=1)

    def test_bad_entry_type(self):
        with pytest.raises(TypeError):
            Simulator(1).run(["H"], shots=1)

    def test_circuit_size_mismatch(self):
        with pytest.raises(ValueError, match="qubits"):
            Simulator(2).run(QuantumCircuit(3), shots=1)


class TestRunnerSurface:
    """Lifecycle state, defaults and serialisation."""

    def test_state_transitions(self):
        sim = Simulator(1, seed=0)
        assert sim.state is RunState.IDLE
        sim.run([], shots=1)
        assert sim.state is RunState.DONE

    def test_default_shots(self):
        sim = Simulator(1, config=SimulatorConfig(default_shots=17), seed=0)
        result = sim.run([])
        assert result.shots == 17
        assert result.counts == {"0": 17}

    def test_as_dict(self):
        data = Simulator(1, seed=0).run([{"type": "H", "wire": 0}], shots=10).as_dict()
        assert set(data) == {"counts", "blochVectors", "classicalRegister", "statevector"}
        assert data["blochVectors"][0] == pytest.approx([1.0, 0.0, 0.0])

    def test_runs_are_independent(self):
        sim = Simulator(1, seed=0)
        sim.run([{"type": "X", "wire": 0}, {"type": "MEASURE", "wire": 0}], shots=1)
        result = sim.run([], shots=3)
        assert result.counts == {"0": 3}
        assert result.classical_register == {}

    def test_module_level_run(self):
        result = run(2, BELL, shots=64, seed=1)
        assert sum(result.counts.values()) == 64

    def test_package_exports(self):
        assert qvsim.Simulator is Simulator
        assert qvsim.__version__
