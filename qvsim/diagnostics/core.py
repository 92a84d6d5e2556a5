"""Diagnostic checks on split real/imaginary statevectors."""

from __future__ import annotations

import torch

from ..errors import InvariantViolationError


def state_norm(re: torch.Tensor, im: torch.Tensor) -> float:
    """
    Compute the L2 norm of a state given its real and imaginary parts.

    Parameters
    ----------
    re, im:
        Real tensors of identical shape holding the amplitude components.

    Returns
    -------
    float
        sqrt(sum(re**2 + im**2)).
    """
    if re.shape != im.shape:
        raise ValueError(
            f"re and im must have the same shape, got {tuple(re.shape)} "
            f"and {tuple(im.shape)}"
        )
    return float(torch.sqrt((re * re).sum() + (im * im).sum()))


def assert_normalized(
    re: torch.Tensor,
    im: torch.Tensor,
    atol: float = 1e-6,
) -> None:
    """
    Assert that a statevector has norm ~1 within a tolerance.

    Raises
    ------
    InvariantViolationError
        If the norm is non-finite or differs from 1 by more than atol.
    """
    norm = state_norm(re, im)
    if not torch.isfinite(torch.tensor(norm)):
        raise InvariantViolationError("State norm is not finite.")
    if abs(norm - 1.0) > atol:
        raise InvariantViolationError(
            f"State is not normalized within tolerance {atol}. Norm found: {norm}"
        )
