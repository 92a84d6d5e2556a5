"""Bell and GHZ states, ideal and under T1/T2 noise.

Builds the circuits both with the fluent QuantumCircuit API and as plain
JSON-style gate dicts, runs them through the Simulator and prints counts
and per-qubit Bloch vectors.
"""

from __future__ import annotations

import qvsim as qv


def _print_result(title: str, result: qv.RunResult) -> None:
    print(title)
    for bitstring, count in result.counts.items():
        print(f"  {bitstring}: {count}")
    for qubit, (x, y, z) in enumerate(result.bloch_vectors):
        print(f"  q{qubit} bloch = ({x:+.3f}, {y:+.3f}, {z:+.3f})")


def main() -> None:
    """Run Bell and GHZ circuits with and without noise."""
    bell = [
        {"type": "H", "wire": 0},
        {"type": "CNOT", "wire": 0, "target": 1},
    ]
    _print_result("Bell (ideal):", qv.run(2, bell, shots=1024, seed=0))

    ghz = qv.QuantumCircuit(3).h(0).cx(0, 1).cx(1, 2)
    _print_result("GHZ (ideal):", qv.Simulator(3, seed=0).run(ghz, shots=1024))

    chip = {"name": "Custom Chip", "layout": "grid", "t1": 0.5, "t2": 0.25}
    noisy = qv.Simulator(3, noise_profile=chip, seed=0)
    _print_result("GHZ (t1=0.5us, t2=0.25us):", noisy.run(ghz, shots=1024))

    print("Done.")


if __name__ == "__main__":
    main()
