"""qvsim - a PyTorch-backed quantum statevector simulation engine."""

__version__ = "0.1.0"

# Algorithms
from .algorithms import apply_iqft, apply_qft

# Backend operations
from .backend import (
    NORM_EPSILON,
    StateVector,
    apply_cnot,
    apply_cp,
    apply_cy,
    apply_cz,
    apply_h,
    apply_matrix,
    apply_phase,
    apply_rotation,
    apply_rx,
    apply_ry,
    apply_rz,
    apply_swap,
    apply_toffoli,
    apply_x,
    apply_y,
    apply_z,
)

# Circuit IR
from .circuit import Condition, GateOp, QuantumCircuit

# Configuration
from .config import DeviceTiming, SimulatorConfig
from .core import Device, default_device, device, make_generator

# Diagnostics
from .diagnostics import (
    assert_normalized,
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
    state_norm,
)
from .errors import (
    InvariantViolationError,
    QubitLimitError,
    SimulatorError,
    UnknownGateError,
)
from .gates import GateKind, get_gate_matrix, parse_gate_kind

# I/O
from .io import circuit_to_json, dump_circuit, json_to_circuit, load_circuit

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Measurement
from .measurement import ClassicalRegister, force_set_zero, measure_and_collapse

# Noise
from .noise import (
    DepolarizingNoise,
    NoiseModel,
    NoiseProfile,
    ThermalRelaxationNoise,
    amplitude_damping,
    decay_probability,
    depolarizing,
    phase_damping,
)

# Sampling
from .sampling import (
    bloch_vector,
    bloch_vectors,
    counts_to_probs,
    format_bitstring,
    marginal_counts,
    sample_counts,
)

# Simulator
from .simulator import RunResult, RunState, Simulator, run

__all__ = [
    "__version__",
    # Backend
    "StateVector",
    "NORM_EPSILON",
    "apply_x",
    "apply_y",
    "apply_z",
    "apply_h",
    "apply_phase",
    "apply_rx",
    "apply_ry",
    "apply_rz",
    "apply_rotation",
    "apply_matrix",
    "apply_cnot",
    "apply_cy",
    "apply_cz",
    "apply_cp",
    "apply_swap",
    "apply_toffoli",
    # Gates and circuits
    "GateKind",
    "parse_gate_kind",
    "get_gate_matrix",
    "Condition",
    "GateOp",
    "QuantumCircuit",
    # Algorithms
    "apply_qft",
    "apply_iqft",
    # Measurement
    "ClassicalRegister",
    "measure_and_collapse",
    "force_set_zero",
    # Noise
    "NoiseModel",
    "NoiseProfile",
    "ThermalRelaxationNoise",
    "DepolarizingNoise",
    "amplitude_damping",
    "phase_damping",
    "depolarizing",
    "decay_probability",
    # Sampling
    "sample_counts",
    "format_bitstring",
    "counts_to_probs",
    "marginal_counts",
    "bloch_vector",
    "bloch_vectors",
    # Simulator
    "Simulator",
    "RunResult",
    "RunState",
    "run",
    # Configuration and devices
    "SimulatorConfig",
    "DeviceTiming",
    "Device",
    "device",
    "default_device",
    "make_generator",
    # I/O
    "circuit_to_json",
    "json_to_circuit",
    "load_circuit",
    "dump_circuit",
    # Errors
    "SimulatorError",
    "QubitLimitError",
    "UnknownGateError",
    "InvariantViolationError",
    # Logging and diagnostics
    "get_logger",
    "set_log_level",
    "configure_logging",
    "state_norm",
    "assert_normalized",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
