"""Benchmark shot sampling."""

import time
from typing import Dict

from qvsim.backend import StateVector, kernels
from qvsim.core.rng import make_generator
from qvsim.sampling import sample_counts


def benchmark_sampling(
    n_qubits: int,
    n_shots: int = 10000,
    device: str = "sv_cpu",
) -> Dict[str, float]:
    """Benchmark bitstring counting from a uniform superposition.

    Args:
        n_qubits: Number of qubits.
        n_shots: Number of shots (samples).
        device: Device name ('sv_cpu' or 'sv_cuda').

    Returns:
        Dictionary with timing results.
    """
    state = StateVector(n_qubits, device=device)
    for q in range(n_qubits):
        kernels.apply_h(state, q)
    generator = make_generator(0)

    # Warmup
    sample_counts(state, 100, generator)

    start = time.perf_counter()
    counts = sample_counts(state, n_shots, generator)
    end = time.perf_counter()

    total_time = end - start
    return {
        "n_qubits": n_qubits,
        "n_shots": n_shots,
        "distinct_outcomes": len(counts),
        "total_time_sec": total_time,
        "time_per_shot_sec": total_time / n_shots,
        "shots_per_sec": n_shots / total_time,
    }


if __name__ == "__main__":
    print("Benchmarking measurement sampling...")

    for n_qubits in (4, 10, 16):
        results = benchmark_sampling(n_qubits=n_qubits, n_shots=100_000)
        print(f"{n_qubits} qubits, 100000 shots:")
        print(f"  Time per shot: {results['time_per_shot_sec']*1e9:.1f} ns")
        print(f"  Distinct outcomes: {results['distinct_outcomes']}")
