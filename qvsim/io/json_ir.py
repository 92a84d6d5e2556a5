"""JSON gate-list import and export.

Gate lists arrive from editors as plain dicts::

    {"type": "CNOT", "wire": 0, "target": 1}
    {"type": "RX", "wire": 2, "params": [1.5708]}
    {"type": "X", "wire": 1, "condition": {"bit": 0, "value": 1}}
    {"type": "TOFFOLI", "controls": [0, 1], "target": 2}

A document is either a bare list of such dicts or an object::

    {"version": "qvsim-json-1.0", "n_qubits": 3, "gates": [...]}

Gate type names are case-insensitive and accept the aliases listed in
:mod:`qvsim.gates.kinds`.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from ..circuit.core import Condition, GateOp, QuantumCircuit
from ..errors import UnknownGateError
from ..gates.kinds import GateKind, parse_gate_kind
from ..logging import get_logger

logger = get_logger(__name__)

JSON_VERSION = "qvsim-json-1.0"

_WIRELESS = (GateKind.QFT, GateKind.IQFT, GateKind.BARRIER)


def _int_field(data: Mapping[str, Any], key: str, kind: GateKind) -> int:
    if data.get(key) is None:
        raise ValueError(f"Gate {kind.value} requires field {key!r}.")
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)) or int(value) != value:
        raise ValueError(f"Field {key!r} of gate {kind.value} must be an integer, got {value!r}.")
    return int(value)


def _params(data: Mapping[str, Any]) -> tuple:
    raw = data.get("params")
    if raw is None:
        return ()
    if isinstance(raw, (int, float)):
        return (float(raw),)
    return tuple(float(p) for p in raw)


def _condition(data: Mapping[str, Any]) -> Optional[Condition]:
    raw = data.get("condition")
    if raw is None:
        return None
    if not isinstance(raw, Mapping) or "bit" not in raw or "value" not in raw:
        raise ValueError(f"condition must be an object with 'bit' and 'value', got {raw!r}")
    return Condition(bit=int(raw["bit"]), value=int(raw["value"]))


def gate_from_dict(data: Mapping[str, Any]) -> GateOp:
    """
    Parse one gate descriptor dict into a GateOp.

    Raises
    ------
    UnknownGateError
        If the type name is unknown.
    ValueError
        If a required field is missing or malformed.
    """
    name = data.get("type", data.get("name"))
    if name is None:
        raise ValueError(f"Gate descriptor has no 'type': {dict(data)!r}")
    kind = parse_gate_kind(name)

    params = _params(data)
    condition = _condition(data)

    if kind in _WIRELESS:
        return GateOp(kind, wire=int(data.get("wire", 0) or 0), condition=condition)

    if kind is GateKind.TOFFOLI:
        target = _int_field(data, "target", kind)
        if data.get("controls") is not None:
            controls = tuple(int(c) for c in data["controls"])
        else:
            controls = (_int_field(data, "wire", kind), _int_field(data, "control2", kind))
        return GateOp(
            kind,
            wire=controls[0] if controls else 0,
            target=target,
            controls=controls,
            condition=condition,
        )

    wire = _int_field(data, "wire", kind)
    target = _int_field(data, "target", kind) if kind.is_two_qubit else None
    return GateOp(
        kind,
        wire=wire,
        target=target,
        params=params,
        axis=data.get("axis"),
        condition=condition,
    )


def gates_from_dicts(
    items: Iterable[Mapping[str, Any]],
    strict: bool = True,
) -> List[GateOp]:
    """
    Parse a sequence of gate descriptor dicts.

    With strict=False, descriptors naming an unknown gate type are logged
    and dropped instead of raising UnknownGateError.
    """
    ops: List[GateOp] = []
    for position, item in enumerate(items):
        try:
            ops.append(gate_from_dict(item))
        except UnknownGateError as exc:
            if strict:
                raise
            logger.warning("dropping gate #%d: %s", position, exc)
    return ops


def gate_to_dict(op: GateOp) -> Dict[str, Any]:
    """Convert a GateOp to its descriptor dict."""
    out: Dict[str, Any] = {"type": op.kind.value}
    if op.kind is GateKind.TOFFOLI:
        out["controls"] = list(op.controls)
        out["target"] = op.target
    elif op.kind not in _WIRELESS:
        out["wire"] = op.wire
        if op.target is not None:
            out["target"] = op.target
    if op.params:
        out["params"] = list(op.params)
    if op.axis is not None:
        out["axis"] = op.axis
    if op.condition is not None:
        out["condition"] = {"bit": op.condition.bit, "value": op.condition.value}
    return out


def circuit_to_json(
    circuit: QuantumCircuit, metadata: Optional[dict] = None
) -> Dict[str, Any]:
    """Convert a QuantumCircuit to a JSON document."""
    result: Dict[str, Any] = {
        "version": JSON_VERSION,
        "n_qubits": circuit.n_qubits,
        "gates": [gate_to_dict(op) for op in circuit.ops],
    }
    if metadata:
        result["metadata"] = metadata
    return result


def json_to_circuit(
    obj: Union[Mapping[str, Any], Sequence[Mapping[str, Any]]],
    n_qubits: Optional[int] = None,
    strict: bool = True,
) -> QuantumCircuit:
    """
    Build a QuantumCircuit from a JSON document.

    n_qubits overrides the document's value and is required for bare lists.
    """
    if isinstance(obj, Mapping):
        if "gates" not in obj:
            raise ValueError("JSON circuit object must contain a 'gates' list.")
        gates = obj["gates"]
        if n_qubits is None:
            n_qubits = obj.get("n_qubits")
    else:
        gates = obj
    if n_qubits is None:
        raise ValueError("n_qubits is required when the document does not specify it.")

    circuit = QuantumCircuit(int(n_qubits))
    for op in gates_from_dicts(gates, strict=strict):
        circuit.append(op)
    return circuit


def load_circuit(path: str, n_qubits: Optional[int] = None, strict: bool = True) -> QuantumCircuit:
    """
    Load a QuantumCircuit from a JSON file.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If the file is not valid JSON or describes an invalid circuit.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            obj = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"JSON circuit file not found: {path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in file {path}: {e}")
    return json_to_circuit(obj, n_qubits=n_qubits, strict=strict)


def dump_circuit(circuit: QuantumCircuit, path: str) -> None:
    """Write a QuantumCircuit to a JSON file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(circuit_to_json(circuit), f, indent=2, ensure_ascii=False)


__all__ = [
    "JSON_VERSION",
    "gate_from_dict",
    "gates_from_dicts",
    "gate_to_dict",
    "circuit_to_json",
    "json_to_circuit",
    "load_circuit",
    "dump_circuit",
]
