"""Benchmark gate kernels and full circuit runs."""

import time
from typing import Dict, Optional

import qvsim as qv
from qvsim.backend import StateVector, kernels


def benchmark_gate_application(
    n_qubits: int,
    n_gates: int = 1000,
    device: str = "sv_cpu",
) -> Dict[str, float]:
    """Benchmark in-place single- and two-qubit kernels.

    Args:
        n_qubits: Number of qubits (>= 2).
        n_gates: Number of gates to apply.
        device: Device name ('sv_cpu' or 'sv_cuda').

    Returns:
        Dictionary with timing results.
    """
    state = StateVector(n_qubits, device=device)
    ops = [
        lambda q: kernels.apply_h(state, q),
        lambda q: kernels.apply_x(state, q),
        lambda q: kernels.apply_rz(state, q, 0.3),
        lambda q: kernels.apply_cnot(state, q, (q + 1) % n_qubits),
    ]

    # Warmup
    for _ in range(10):
        kernels.apply_h(state, 0)

    start = time.perf_counter()
    for i in range(n_gates):
        ops[i % len(ops)](i % n_qubits)
    end = time.perf_counter()

    total_time = end - start
    return {
        "n_qubits": n_qubits,
        "n_gates": n_gates,
        "total_time_sec": total_time,
        "time_per_gate_sec": total_time / n_gates,
        "gates_per_sec": n_gates / total_time,
    }


def benchmark_noisy_run(
    n_qubits: int,
    depth: int = 20,
    shots: int = 1024,
    noise_profile: Optional[Dict[str, float]] = None,
) -> Dict[str, float]:
    """Benchmark Simulator.run on a layered H/CNOT circuit with T1/T2 noise.

    Args:
        n_qubits: Number of qubits (>= 2).
        depth: Number of H + CNOT-ladder layers.
        shots: Shots sampled at the end.
        noise_profile: Device dict with t1/t2. Defaults to t1=50, t2=25.

    Returns:
        Dictionary with timing results.
    """
    if noise_profile is None:
        noise_profile = {"t1": 50.0, "t2": 25.0}

    circuit = qv.QuantumCircuit(n_qubits)
    for _ in range(depth):
        for q in range(n_qubits):
            circuit.h(q)
        for q in range(n_qubits - 1):
            circuit.cx(q, q + 1)

    sim = qv.Simulator(n_qubits, noise_profile=noise_profile, seed=0)
    start = time.perf_counter()
    sim.run(circuit, shots=shots)
    end = time.perf_counter()

    total_time = end - start
    return {
        "n_qubits": n_qubits,
        "n_ops": len(circuit),
        "total_time_sec": total_time,
        "time_per_op_sec": total_time / len(circuit),
    }


if __name__ == "__main__":
    print("Benchmarking gate application...")

    results = benchmark_gate_application(n_qubits=12, n_gates=1000)
    print("Statevector kernels (12 qubits, 1000 gates):")
    print(f"  Time per gate: {results['time_per_gate_sec']*1e6:.2f} us")
    print(f"  Gates per second: {results['gates_per_sec']:.0f}")

    noisy = benchmark_noisy_run(n_qubits=8, depth=10)
    print(f"\nNoisy run (8 qubits, {noisy['n_ops']} ops, t1=50 t2=25):")
    print(f"  Time per op: {noisy['time_per_op_sec']*1e3:.2f} ms")
