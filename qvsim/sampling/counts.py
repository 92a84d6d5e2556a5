"""Shot sampling from a final statevector.

Bitstring convention: character ``n - 1 - k`` of a bitstring is the value of
qubit ``k``, i.e. qubit 0 is the rightmost character. This is the natural
binary rendering of the amplitude index.
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional, Sequence

import torch

from ..backend.statevector import StateVector
from ..core.rng import uniforms


def format_bitstring(index: int, n_qubits: int) -> str:
    """Render an amplitude index as an n-bit string, qubit 0 rightmost."""
    if n_qubits == 0:
        return ""
    return format(index, f"0{n_qubits}b")


def sample_indices(
    probs: torch.Tensor,
    n_shots: int,
    generator: Optional[torch.Generator] = None,
) -> torch.Tensor:
    """
    Draw n_shots basis indices from a probability vector.

    Each shot takes one uniform draw r and selects the first index whose
    cumulative probability exceeds r. Draws beyond the final cumulative
    value (rounding) select the last index.

    Returns
    -------
    torch.Tensor
        int64 CPU tensor of shape (n_shots,).
    """
    if probs.ndim != 1 or probs.shape[0] == 0:
        raise ValueError(f"probs must be a non-empty 1D tensor, got shape {tuple(probs.shape)}")
    if n_shots < 1:
        raise ValueError(f"n_shots must be >= 1, got {n_shots}")

    cdf = torch.cumsum(probs.detach().to(device="cpu", dtype=torch.float64), dim=0)
    draws = uniforms(n_shots, generator)
    indices = torch.searchsorted(cdf, draws, right=True)
    return torch.clamp(indices, max=probs.shape[0] - 1)


def sample_counts(
    state: StateVector,
    shots: int,
    generator: Optional[torch.Generator] = None,
) -> Dict[str, int]:
    """
    Sample the final state shots times and count the bitstrings.

    The state is sampled from its fixed final distribution; the circuit is
    not re-run per shot.

    Returns
    -------
    Dict[str, int]
        Mapping from bitstring (qubit 0 rightmost) to count, ordered by
        bitstring.
    """
    if isinstance(shots, bool) or not isinstance(shots, int) or shots < 1:
        raise ValueError(f"shots must be a positive integer, got {shots!r}")

    indices = sample_indices(state.probabilities(), shots, generator)
    values, tallies = torch.unique(indices, return_counts=True)
    return {
        format_bitstring(int(v), state.n_qubits): int(c)
        for v, c in zip(values.tolist(), tallies.tolist())
    }


def counts_to_probs(counts: Mapping[str, int]) -> Dict[str, float]:
    """Convert bitstring counts to a probability distribution."""
    total = sum(counts.values())
    if total <= 0:
        raise ValueError("Total count must be positive.")
    return {k: v / float(total) for k, v in counts.items()}


def marginal_counts(counts: Mapping[str, int], qubits: Sequence[int]) -> Dict[str, int]:
    """
    Marginalize bitstring counts onto a subset of qubits.

    The output bitstrings list the kept qubits with the first entry of
    ``qubits`` rightmost, following the same convention as the input.
    """
    out: Dict[str, int] = {}
    for bitstring, count in counts.items():
        n = len(bitstring)
        for q in qubits:
            if q < 0 or q >= n:
                raise ValueError(f"qubit index {q} out of range [0, {n})")
        key = "".join(bitstring[n - 1 - q] for q in reversed(qubits))
        out[key] = out.get(key, 0) + count
    return out
