"""Engine configuration.

Configuration is carried by frozen dataclasses validated on construction.
Two settings can be overridden from the environment:

- ``QVSIM_MAX_QUBITS``: qubit ceiling for statevector allocation (default 24).
- ``QVSIM_DEFAULT_SHOTS``: shot count used when ``run`` is called without one
  (default 1024).
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field

_MAX_QUBITS_ENV_VAR = "QVSIM_MAX_QUBITS"
_DEFAULT_SHOTS_ENV_VAR = "QVSIM_DEFAULT_SHOTS"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer, got {raw!r}")


DEFAULT_MAX_QUBITS = _env_int(_MAX_QUBITS_ENV_VAR, 24)
DEFAULT_SHOTS = _env_int(_DEFAULT_SHOTS_ENV_VAR, 1024)


@dataclass(frozen=True)
class DeviceTiming:
    """
    Nominal gate durations used to turn T1/T2 into per-step decay
    probabilities.

    Durations are expressed in the same unit as the noise profile's T1/T2
    (microseconds): 0.020 is 20 ns, 0.050 is 50 ns.
    """

    single_qubit_gate_time: float = 0.020
    multi_qubit_gate_time: float = 0.050

    def __post_init__(self) -> None:
        for name in ("single_qubit_gate_time", "multi_qubit_gate_time"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0.0:
                raise ValueError(f"{name} must be a finite non-negative number, got {value}")

    def duration(self, n_touched: int) -> float:
        """Return the step duration for a gate touching n_touched qubits."""
        if n_touched >= 2:
            return self.multi_qubit_gate_time
        return self.single_qubit_gate_time


@dataclass(frozen=True)
class SimulatorConfig:
    """
    Settings for a Simulator instance.

    Attributes
    ----------
    max_qubits:
        Allocation ceiling. Asking for more qubits raises QubitLimitError.
    default_shots:
        Shot count used by ``Simulator.run`` when none is given.
    strict_gates:
        If True, unknown gate type names in descriptor dicts raise
        UnknownGateError. If False they are logged and dropped.
    device:
        Device name for amplitude storage ("sv_cpu" or "sv_cuda").
    timing:
        Gate durations used by the T1/T2 noise model.
    """

    max_qubits: int = DEFAULT_MAX_QUBITS
    default_shots: int = DEFAULT_SHOTS
    strict_gates: bool = True
    device: str = "sv_cpu"
    timing: DeviceTiming = field(default_factory=DeviceTiming)

    def __post_init__(self) -> None:
        if self.max_qubits < 0:
            raise ValueError(f"max_qubits must be >= 0, got {self.max_qubits}")
        if self.default_shots < 1:
            raise ValueError(f"default_shots must be >= 1, got {self.default_shots}")
