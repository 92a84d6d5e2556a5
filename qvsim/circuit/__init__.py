"""Circuit IR types."""

from .core import Condition, GateOp, QuantumCircuit

__all__ = ["Condition", "GateOp", "QuantumCircuit"]
