"""Circuit runner: one reset-execute-sample pass over a gate list."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import torch

from ..algorithms.qft import apply_iqft, apply_qft
from ..backend import kernels
from ..backend.statevector import StateVector
from ..circuit.core import GateOp, QuantumCircuit
from ..config import SimulatorConfig
from ..core.rng import make_generator
from ..errors import QubitLimitError
from ..gates.kinds import GateKind
from ..gates.standard import get_gate_matrix
from ..io.json_ir import gates_from_dicts
from ..logging import get_logger
from ..measurement.collapse import force_set_zero, measure_and_collapse
from ..measurement.register import ClassicalRegister
from ..noise.base import NoiseModel
from ..noise.models import ThermalRelaxationNoise
from ..noise.profile import NoiseProfile
from ..sampling.bloch import bloch_vectors
from ..sampling.counts import sample_counts

logger = get_logger(__name__)

GateList = Union[QuantumCircuit, Iterable[Union[GateOp, Mapping[str, Any]]]]


class RunState(str, Enum):
    """Lifecycle of a Simulator run."""

    IDLE = "idle"
    RESETTING = "resetting"
    EXECUTING = "executing"
    SAMPLING = "sampling"
    DONE = "done"


@dataclass
class RunResult:
    """
    Outputs of one circuit run.

    Attributes
    ----------
    counts:
        Bitstring -> shot count, qubit 0 rightmost.
    bloch_vectors:
        One [x, y, z] per qubit.
    classical_register:
        Measured bit values keyed by qubit index.
    statevector:
        Raw amplitudes ``{"re": [...], "im": [...]}``, for debugging and
        visualization only.
    shots:
        Number of shots sampled.
    """

    counts: Dict[str, int]
    bloch_vectors: List[List[float]]
    classical_register: Dict[int, int]
    statevector: Dict[str, List[float]]
    shots: int
    metadata: Dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "counts": dict(self.counts),
            "blochVectors": [list(v) for v in self.bloch_vectors],
            "classicalRegister": dict(self.classical_register),
            "statevector": {k: list(v) for k, v in self.statevector.items()},
        }


class Simulator:
    """
    Statevector simulator for a fixed number of qubits.

    Each call to :meth:`run` allocates a fresh StateVector and
    ClassicalRegister; nothing is shared between runs except the random
    generator.

    Parameters
    ----------
    n_qubits:
        Register size.
    noise_profile:
        Optional T1/T2 profile (a NoiseProfile or a device dict). None
        means ideal simulation.
    noise_model:
        Explicit NoiseModel, overriding the one derived from noise_profile.
    config:
        Engine settings. Defaults to ``SimulatorConfig()``.
    seed:
        Seed for a new generator. Ignored if generator is given.
    generator:
        Random source shared by measurement, noise and sampling.

    Raises
    ------
    QubitLimitError
        If n_qubits exceeds ``config.max_qubits``.
    """

    def __init__(
        self,
        n_qubits: int,
        noise_profile: Optional[Union[NoiseProfile, Mapping[str, Any]]] = None,
        noise_model: Optional[NoiseModel] = None,
        config: Optional[SimulatorConfig] = None,
        seed: Optional[int] = None,
        generator: Optional[torch.Generator] = None,
    ) -> None:
        if isinstance(n_qubits, bool) or not isinstance(n_qubits, int) or n_qubits < 0:
            raise ValueError(f"n_qubits must be a non-negative integer, got {n_qubits!r}")
        self.config = config if config is not None else SimulatorConfig()
        if n_qubits > self.config.max_qubits:
            raise QubitLimitError(n_qubits, self.config.max_qubits)

        if isinstance(noise_profile, Mapping):
            noise_profile = NoiseProfile.from_dict(noise_profile)
        self.n_qubits = n_qubits
        self.noise_profile = noise_profile
        if noise_model is None and noise_profile is not None:
            noise_model = ThermalRelaxationNoise(noise_profile)
        self.noise_model = noise_model

        self.generator = generator if generator is not None else make_generator(seed)
        self.state = RunState.IDLE

    def __repr__(self) -> str:
        return (
            f"Simulator(n_qubits={self.n_qubits}, noise_model={self.noise_model!r}, "
            f"state={self.state.value!r})"
        )

    def _normalize_ops(self, gates: GateList) -> List[GateOp]:
        if isinstance(gates, QuantumCircuit):
            if gates.n_qubits != self.n_qubits:
                raise ValueError(
                    f"Circuit has {gates.n_qubits} qubits but the simulator has {self.n_qubits}."
                )
            return list(gates.ops)

        ops: List[GateOp] = []
        pending: List[Mapping[str, Any]] = []
        for item in gates:
            if isinstance(item, GateOp):
                ops.extend(gates_from_dicts(pending, strict=self.config.strict_gates))
                pending = []
                ops.append(item)
            elif isinstance(item, Mapping):
                pending.append(item)
            else:
                raise TypeError(
                    f"Gate list entries must be GateOp or dict, got {type(item).__name__}"
                )
        ops.extend(gates_from_dicts(pending, strict=self.config.strict_gates))

        for op in ops:
            for q in op.qubits:
                if q < 0 or q >= self.n_qubits:
                    raise ValueError(
                        f"Gate {op.kind.value} uses qubit {q}, out of range "
                        f"[0, {self.n_qubits})."
                    )
        return ops

    def run(self, gates: GateList, shots: Optional[int] = None) -> RunResult:
        """
        Execute a gate list from |0...0> and sample the final state.

        Parameters
        ----------
        gates:
            A QuantumCircuit, or an ordered iterable of GateOp objects and/or
            descriptor dicts.
        shots:
            Positive shot count. Defaults to ``config.default_shots``.

        Raises
        ------
        ValueError
            For a non-positive shot count or malformed gates.
        UnknownGateError
            For unknown gate type names when strict parsing is on.
        """
        if shots is None:
            shots = self.config.default_shots
        if isinstance(shots, bool) or not isinstance(shots, int) or shots < 1:
            raise ValueError(f"shots must be a positive integer, got {shots!r}")

        ops = self._normalize_ops(gates)

        try:
            self.state = RunState.RESETTING
            sv = StateVector(
                self.n_qubits, device=self.config.device, max_qubits=self.config.max_qubits
            )
            register = ClassicalRegister()

            self.state = RunState.EXECUTING
            executed = 0
            for op in ops:
                if self.execute(sv, op, register):
                    executed += 1

            self.state = RunState.SAMPLING
            counts = sample_counts(sv, shots, self.generator)
            result = RunResult(
                counts=counts,
                bloch_vectors=bloch_vectors(sv),
                classical_register=register.to_dict(),
                statevector=sv.to_dict(),
                shots=shots,
                metadata={"executed": executed, "skipped": len(ops) - executed},
            )
        except Exception:
            self.state = RunState.IDLE
            raise

        self.state = RunState.DONE
        logger.info(
            "run finished: %d qubits, %d ops (%d executed), %d shots",
            self.n_qubits,
            len(ops),
            executed,
            shots,
        )
        return result

    def execute(self, sv: StateVector, op: GateOp, register: ClassicalRegister) -> bool:
        """
        Execute one operation on sv, honouring its classical condition and
        applying noise afterwards.

        Returns False if the operation was skipped by its condition.
        """
        if not register.satisfies(op.condition):
            logger.debug("skipping %s: condition %s not met", op.kind.value, op.condition)
            return False

        kind = op.kind
        if kind is GateKind.BARRIER:
            return True

        self._dispatch(sv, op, register)

        if self.noise_model is not None:
            duration = self.config.timing.duration(op.touched(sv.n_qubits))
            self.noise_model.apply(sv, duration, self.generator)
        return True

    def _dispatch(self, sv: StateVector, op: GateOp, register: ClassicalRegister) -> None:
        kind = op.kind
        if kind is GateKind.MEASURE:
            register[op.wire] = measure_and_collapse(sv, op.wire, self.generator)
        elif kind is GateKind.RESET:
            force_set_zero(sv, op.wire)
        elif kind is GateKind.QFT:
            apply_qft(sv)
        elif kind is GateKind.IQFT:
            apply_iqft(sv)
        elif kind.is_two_qubit:
            self._check_coupling(op, op.wire, op.target)
            _apply_two_qubit(sv, op)
        elif kind is GateKind.TOFFOLI:
            c1, c2 = op.controls
            self._check_coupling(op, c1, op.target)
            self._check_coupling(op, c2, op.target)
            kernels.apply_toffoli(sv, c1, c2, op.target)
        else:
            _apply_single_qubit(sv, op)

    def _check_coupling(self, op: GateOp, qubit1: int, qubit2: int) -> None:
        profile = self.noise_profile
        if profile is not None and not profile.is_coupled(qubit1, qubit2):
            logger.warning(
                "%s on uncoupled qubits (%d, %d) for device %r",
                op.kind.value,
                qubit1,
                qubit2,
                profile.name,
            )


def _apply_two_qubit(sv: StateVector, op: GateOp) -> None:
    kind = op.kind
    if kind is GateKind.CNOT:
        kernels.apply_cnot(sv, op.wire, op.target)
    elif kind is GateKind.CZ:
        kernels.apply_cz(sv, op.wire, op.target)
    elif kind is GateKind.CY:
        kernels.apply_cy(sv, op.wire, op.target)
    elif kind is GateKind.CP:
        kernels.apply_cp(sv, op.wire, op.target, op.params[0])
    elif kind is GateKind.SWAP:
        kernels.apply_swap(sv, op.wire, op.target)
    else:
        raise AssertionError(f"unhandled two-qubit gate {kind}")


_PHASES = {
    GateKind.Z: math.pi,
    GateKind.S: math.pi / 2.0,
    GateKind.SDG: -math.pi / 2.0,
    GateKind.T: math.pi / 4.0,
    GateKind.TDG: -math.pi / 4.0,
}


def _apply_single_qubit(sv: StateVector, op: GateOp) -> None:
    kind = op.kind
    q = op.wire
    if kind is GateKind.X:
        kernels.apply_x(sv, q)
    elif kind is GateKind.Y:
        kernels.apply_y(sv, q)
    elif kind in _PHASES:
        kernels.apply_phase(sv, q, _PHASES[kind])
    elif kind is GateKind.P:
        kernels.apply_phase(sv, q, op.params[0])
    elif kind is GateKind.H:
        kernels.apply_h(sv, q)
    elif kind is GateKind.RX:
        kernels.apply_rx(sv, q, op.params[0])
    elif kind is GateKind.RY:
        kernels.apply_ry(sv, q, op.params[0])
    elif kind is GateKind.RZ:
        kernels.apply_rz(sv, q, op.params[0])
    elif kind is GateKind.R:
        kernels.apply_rotation(sv, op.axis, q, op.params[0])
    else:
        matrix = get_gate_matrix(kind, op.params, op.axis)
        if matrix is None:
            raise AssertionError(f"unhandled gate {kind}")
        kernels.apply_matrix(sv, q, matrix)


def run(
    n_qubits: int,
    gates: GateList,
    shots: Optional[int] = None,
    noise_profile: Optional[Union[NoiseProfile, Mapping[str, Any]]] = None,
    seed: Optional[int] = None,
    config: Optional[SimulatorConfig] = None,
) -> RunResult:
    """Build a Simulator and run gates once."""
    simulator = Simulator(n_qubits, noise_profile=noise_profile, config=config, seed=seed)
    return simulator.run(gates, shots=shots)
