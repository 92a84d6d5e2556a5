"""Shot sampling and per-qubit observables."""

from .bloch import bloch_vector, bloch_vectors, purity
from .counts import (
    counts_to_probs,
    format_bitstring,
    marginal_counts,
    sample_counts,
    sample_indices,
)

__all__ = [
    "sample_counts",
    "sample_indices",
    "format_bitstring",
    "counts_to_probs",
    "marginal_counts",
    "bloch_vector",
    "bloch_vectors",
    "purity",
]
