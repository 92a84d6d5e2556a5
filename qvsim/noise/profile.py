"""Device noise profile (T1/T2 coherence times)."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Tuple


@dataclass(frozen=True)
class NoiseProfile:
    """
    Coherence times of a device, in microseconds.

    Attributes
    ----------
    t1:
        Energy relaxation time. ``math.inf`` disables amplitude damping.
    t2:
        Dephasing time. ``math.inf`` disables phase damping.
    name:
        Optional device name.
    coupling_map:
        Optional list of coupled qubit pairs. Pairs are undirected. When
        present, two-qubit gates on uncoupled pairs are reported.
    """

    t1: float
    t2: float
    name: Optional[str] = None
    coupling_map: Optional[Tuple[Tuple[int, int], ...]] = None

    def __post_init__(self) -> None:
        for label in ("t1", "t2"):
            value = float(getattr(self, label))
            if math.isnan(value) or value <= 0.0:
                raise ValueError(f"{label} must be a positive number, got {value}")
            object.__setattr__(self, label, value)

        if self.coupling_map is not None:
            pairs = []
            for pair in self.coupling_map:
                if len(pair) != 2:
                    raise ValueError(f"coupling_map entries must be pairs, got {pair!r}")
                pairs.append((int(pair[0]), int(pair[1])))
            object.__setattr__(self, "coupling_map", tuple(pairs))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "NoiseProfile":
        """
        Build a profile from a device dict such as
        ``{"name": "Custom Chip", "layout": "grid", "t1": 50, "t2": 25}``.

        A value missing at the top level is read from a nested ``noise``
        object, as in ``{"t1": 50, "noise": {"t1": 50, "t2": 30}}``. Keys
        other than t1, t2, name, noise and coupling_map are ignored.

        Raises
        ------
        ValueError
            If t1 or t2 is missing.
        """
        nested = data.get("noise")
        if not isinstance(nested, Mapping):
            nested = {}
        times = {}
        for key in ("t1", "t2"):
            value = data.get(key)
            times[key] = nested.get(key) if value is None else value
        missing = [key for key, value in times.items() if value is None]
        if missing:
            raise ValueError(f"Noise profile is missing required field(s): {missing}")
        coupling: Optional[Sequence[Sequence[int]]] = data.get("coupling_map")
        return cls(
            t1=float(times["t1"]),
            t2=float(times["t2"]),
            name=data.get("name"),
            coupling_map=tuple(tuple(p) for p in coupling) if coupling else None,
        )

    def to_dict(self) -> dict:
        out: dict = {"t1": self.t1, "t2": self.t2}
        if self.name is not None:
            out["name"] = self.name
        if self.coupling_map is not None:
            out["coupling_map"] = [list(p) for p in self.coupling_map]
        return out

    def is_coupled(self, qubit1: int, qubit2: int) -> bool:
        """Return True if the pair is coupled (always True without a coupling map)."""
        if self.coupling_map is None:
            return True
        return (qubit1, qubit2) in self.coupling_map or (qubit2, qubit1) in self.coupling_map
