"""Circuit runner."""

from .core import RunResult, RunState, Simulator, run

__all__ = ["Simulator", "RunResult", "RunState", "run"]
