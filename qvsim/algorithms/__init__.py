"""Register-wide gate macros."""

from .qft import apply_iqft, apply_qft

__all__ = ["apply_qft", "apply_iqft"]
