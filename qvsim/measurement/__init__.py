"""Measurement, forced collapse and the classical register."""

from .collapse import PROB_EPSILON, force_set_zero, measure_and_collapse
from .register import ClassicalRegister

__all__ = [
    "measure_and_collapse",
    "force_set_zero",
    "ClassicalRegister",
    "PROB_EPSILON",
]
