"""Circuit IR: gate descriptors and an ordered circuit builder."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ..gates.kinds import GateKind, parse_gate_kind

_AXES = ("X", "Y", "Z")


@dataclass(frozen=True)
class Condition:
    """
    Classical condition attached to a gate: the gate runs only if classical
    bit ``bit`` currently holds ``value``.
    """

    bit: int
    value: int

    def __post_init__(self) -> None:
        if self.bit < 0:
            raise ValueError(f"Condition bit must be non-negative, got {self.bit}")
        if self.value not in (0, 1):
            raise ValueError(f"Condition value must be 0 or 1, got {self.value}")


@dataclass(frozen=True)
class GateOp:
    """
    A single operation in a circuit.

    Attributes
    ----------
    kind:
        Gate kind. Strings are resolved through ``parse_gate_kind``.
    wire:
        Operand qubit. For two-qubit gates this is the control (or the first
        operand of SWAP). Ignored by QFT, IQFT and BARRIER.
    target:
        Second operand of two-qubit gates and the target of TOFFOLI.
    controls:
        The two control qubits of TOFFOLI. Empty for every other kind.
    params:
        Float parameters (angles in radians).
    axis:
        Rotation axis ('x', 'y' or 'z') for the R gate.
    condition:
        Optional classical condition.
    """

    kind: GateKind
    wire: int = 0
    target: Optional[int] = None
    controls: Tuple[int, ...] = ()
    params: Tuple[float, ...] = ()
    axis: Optional[str] = None
    condition: Optional[Condition] = None

    def __post_init__(self) -> None:
        kind = parse_gate_kind(self.kind)
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "controls", tuple(int(c) for c in self.controls))
        object.__setattr__(self, "params", tuple(float(p) for p in self.params))

        if self.wire < 0:
            raise ValueError(f"wire must be non-negative, got {self.wire}")

        if kind.is_two_qubit and self.target is None:
            raise ValueError(f"Gate {kind.value} requires a target qubit.")

        if kind is GateKind.TOFFOLI:
            if self.target is None or len(self.controls) != 2:
                raise ValueError(
                    "Gate TOFFOLI requires exactly two controls and a target, "
                    f"got controls={self.controls} target={self.target}."
                )
        elif self.controls:
            raise ValueError(f"Gate {kind.value} does not take a controls list.")

        if len(self.params) != kind.n_params:
            raise ValueError(
                f"Gate {kind.value} requires exactly {kind.n_params} parameter(s), "
                f"got {len(self.params)}."
            )

        if kind is GateKind.R:
            if self.axis is None or self.axis.upper() not in _AXES:
                raise ValueError(f"Gate R requires axis 'x', 'y' or 'z', got {self.axis!r}.")
            object.__setattr__(self, "axis", self.axis.lower())

        if self.condition is not None and not isinstance(self.condition, Condition):
            raise TypeError(
                f"condition must be a Condition, got {type(self.condition).__name__}"
            )

    @property
    def qubits(self) -> Tuple[int, ...]:
        """Qubits named by this operation (empty for register-wide macros)."""
        kind = self.kind
        if kind in (GateKind.QFT, GateKind.IQFT, GateKind.BARRIER):
            return ()
        if kind is GateKind.TOFFOLI:
            return (*self.controls, self.target)
        if kind.is_two_qubit:
            return (self.wire, self.target)
        return (self.wire,)

    def touched(self, n_qubits: int) -> int:
        """Number of distinct qubits this operation acts on in an n-qubit register."""
        if self.kind in (GateKind.QFT, GateKind.IQFT):
            return n_qubits
        return len(set(self.qubits))

    def with_condition(self, bit: int, value: int) -> "GateOp":
        """Return a copy of this operation conditioned on classical bit == value."""
        return dataclasses.replace(self, condition=Condition(bit=bit, value=value))


class QuantumCircuit:
    """
    Ordered list of gate operations on n_qubits.

    Builder methods return the circuit so calls can be chained::

        circuit = QuantumCircuit(2).h(0).cx(0, 1).measure(0).measure(1)
    """

    def __init__(self, n_qubits: int) -> None:
        if n_qubits < 0:
            raise ValueError("QuantumCircuit requires n_qubits >= 0.")
        self._n_qubits = int(n_qubits)
        self._ops: List[GateOp] = []

    @property
    def n_qubits(self) -> int:
        """Return the number of qubits in this circuit."""
        return self._n_qubits

    @property
    def ops(self) -> Tuple[GateOp, ...]:
        """Return a read-only tuple of all operations."""
        return tuple(self._ops)

    def append(self, op: GateOp) -> "QuantumCircuit":
        """Append an operation after checking its qubit indices."""
        for q in op.qubits:
            if q < 0 or q >= self._n_qubits:
                raise ValueError(
                    f"Qubit index {q} is out of range for this circuit "
                    f"(n_qubits={self._n_qubits})."
                )
        self._ops.append(op)
        return self

    def add_gate(
        self,
        kind: GateKind | str,
        wire: int = 0,
        target: Optional[int] = None,
        params: Optional[Sequence[float]] = None,
        condition: Optional[Condition] = None,
    ) -> "QuantumCircuit":
        """Append a gate by kind name."""
        return self.append(
            GateOp(
                kind=kind,
                wire=wire,
                target=target,
                params=tuple(params or ()),
                condition=condition,
            )
        )

    def c_if(self, bit: int, value: int) -> "QuantumCircuit":
        """Condition the most recently added operation on a classical bit."""
        if not self._ops:
            raise ValueError("c_if() needs a preceding operation.")
        self._ops[-1] = self._ops[-1].with_condition(bit, value)
        return self

    # Single-qubit builders

    def i(self, q: int) -> "QuantumCircuit":
        return self.add_gate(GateKind.I, q)

    def x(self, q: int) -> "QuantumCircuit":
        return self.add_gate(GateKind.X, q)

    def y(self, q: int) -> "QuantumCircuit":
        return self.add_gate(GateKind.Y, q)

    def z(self, q: int) -> "QuantumCircuit":
        return self.add_gate(GateKind.Z, q)

    def h(self, q: int) -> "QuantumCircuit":
        return self.add_gate(GateKind.H, q)

    def s(self, q: int) -> "QuantumCircuit":
        return self.add_gate(GateKind.S, q)

    def sdg(self, q: int) -> "QuantumCircuit":
        return self.add_gate(GateKind.SDG, q)

    def t(self, q: int) -> "QuantumCircuit":
        return self.add_gate(GateKind.T, q)

    def tdg(self, q: int) -> "QuantumCircuit":
        return self.add_gate(GateKind.TDG, q)

    def sx(self, q: int) -> "QuantumCircuit":
        return self.add_gate(GateKind.SX, q)

    def p(self, theta: float, q: int) -> "QuantumCircuit":
        return self.add_gate(GateKind.P, q, params=(theta,))

    def rx(self, theta: float, q: int) -> "QuantumCircuit":
        return self.add_gate(GateKind.RX, q, params=(theta,))

    def ry(self, theta: float, q: int) -> "QuantumCircuit":
        return self.add_gate(GateKind.RY, q, params=(theta,))

    def rz(self, theta: float, q: int) -> "QuantumCircuit":
        return self.add_gate(GateKind.RZ, q, params=(theta,))

    def r(self, axis: str, theta: float, q: int) -> "QuantumCircuit":
        return self.append(GateOp(GateKind.R, wire=q, params=(theta,), axis=axis))

    def u(self, theta: float, phi: float, lam: float, q: int) -> "QuantumCircuit":
        return self.add_gate(GateKind.U, q, params=(theta, phi, lam))

    # Multi-qubit builders

    def cx(self, control: int, target: int) -> "QuantumCircuit":
        return self.add_gate(GateKind.CNOT, control, target)

    cnot = cx

    def cy(self, control: int, target: int) -> "QuantumCircuit":
        return self.add_gate(GateKind.CY, control, target)

    def cz(self, control: int, target: int) -> "QuantumCircuit":
        return self.add_gate(GateKind.CZ, control, target)

    def cp(self, theta: float, control: int, target: int) -> "QuantumCircuit":
        return self.add_gate(GateKind.CP, control, target, params=(theta,))

    def swap(self, q1: int, q2: int) -> "QuantumCircuit":
        return self.add_gate(GateKind.SWAP, q1, q2)

    def ccx(self, control1: int, control2: int, target: int) -> "QuantumCircuit":
        return self.append(
            GateOp(
                GateKind.TOFFOLI,
                wire=control1,
                target=target,
                controls=(control1, control2),
            )
        )

    toffoli = ccx

    # Non-unitary and structural operations

    def measure(self, q: int) -> "QuantumCircuit":
        return self.add_gate(GateKind.MEASURE, q)

    def reset(self, q: int) -> "QuantumCircuit":
        return self.add_gate(GateKind.RESET, q)

    def barrier(self) -> "QuantumCircuit":
        return self.add_gate(GateKind.BARRIER)

    def qft(self) -> "QuantumCircuit":
        return self.add_gate(GateKind.QFT)

    def iqft(self) -> "QuantumCircuit":
        return self.add_gate(GateKind.IQFT)

    # Inspection

    def copy(self) -> "QuantumCircuit":
        """Return a copy of this circuit."""
        new = QuantumCircuit(self._n_qubits)
        new._ops.extend(self._ops)
        return new

    def __len__(self) -> int:
        return len(self._ops)

    def __iter__(self) -> Iterator[GateOp]:
        return iter(self._ops)

    def gate_counts(self) -> Dict[str, int]:
        """Return a dictionary mapping gate kind names to their counts."""
        counts: Dict[str, int] = {}
        for op in self._ops:
            name = op.kind.value
            counts[name] = counts.get(name, 0) + 1
        return counts

    def depth(self) -> int:
        """
        Estimate the circuit depth as the minimum number of sequential layers
        required if operations on disjoint qubits run in parallel.

        QFT, IQFT and BARRIER occupy every qubit.
        """
        if not self._ops:
            return 0

        qubit_layer = [0] * self._n_qubits
        max_layer = 0

        for op in self._ops:
            qubits = op.qubits or tuple(range(self._n_qubits))
            earliest = max((qubit_layer[q] for q in qubits), default=0)
            layer = earliest + 1
            for q in qubits:
                qubit_layer[q] = layer
            max_layer = max(max_layer, layer)

        return max_layer
