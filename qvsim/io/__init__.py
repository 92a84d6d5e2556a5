"""JSON import and export of gate lists."""

from .json_ir import (
    JSON_VERSION,
    circuit_to_json,
    dump_circuit,
    gate_from_dict,
    gate_to_dict,
    gates_from_dicts,
    json_to_circuit,
    load_circuit,
)

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
