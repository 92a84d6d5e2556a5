"""Dense statevector storage with split real/imaginary components.

The state of ``n_qubits`` qubits is held as two parallel float64 tensors
``re`` and ``im`` of length ``2**n_qubits``. Bit ``k`` of an amplitude index
is the computational-basis value of qubit ``k`` (qubit 0 is the least
significant bit).

Gate, noise and measurement routines never allocate a second full-size
buffer. They address the sub-blocks of the state where chosen qubits hold
fixed bit values through strided views (see :meth:`StateVector.select`) and
update those views in place.
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence, Tuple

import numpy as np
import torch

from ..config import DEFAULT_MAX_QUBITS
from ..core.device import Device, resolve_device
from ..diagnostics import state_norm
from ..errors import QubitLimitError
from ..logging import get_logger

logger = get_logger(__name__)

# Norms below this are treated as a collapsed-to-zero state.
NORM_EPSILON = 1e-9


class StateVector:
    """
    An n-qubit pure state stored as two dense real tensors.

    Parameters
    ----------
    n_qubits:
        Number of qubits (>= 0).
    device:
        Device spec for storage. Defaults to the CPU statevector device.
    max_qubits:
        Allocation ceiling. Defaults to the configured ``QVSIM_MAX_QUBITS``.

    Raises
    ------
    QubitLimitError
        If n_qubits exceeds max_qubits. Raised before any allocation.
    """

    def __init__(
        self,
        n_qubits: int,
        device: Device | torch.device | str | None = None,
        max_qubits: Optional[int] = None,
    ) -> None:
        if isinstance(n_qubits, bool) or not isinstance(n_qubits, int):
            raise TypeError(f"n_qubits must be an int, got {type(n_qubits).__name__}")
        if n_qubits < 0:
            raise ValueError(f"n_qubits must be >= 0, got {n_qubits}")

        ceiling = DEFAULT_MAX_QUBITS if max_qubits is None else max_qubits
        if n_qubits > ceiling:
            raise QubitLimitError(n_qubits, ceiling)

        self._device = resolve_device(device)
        self._n_qubits = n_qubits
        self._size = 1 << n_qubits

        torch_device = self._device.as_torch_device()
        self.re = torch.zeros(self._size, dtype=self._device.dtype, device=torch_device)
        self.im = torch.zeros(self._size, dtype=self._device.dtype, device=torch_device)
        self.reset()

    @classmethod
    def from_amplitudes(
        cls,
        amplitudes: torch.Tensor | Sequence[complex],
        device: Device | torch.device | str | None = None,
        max_qubits: Optional[int] = None,
    ) -> "StateVector":
        """
        Build a StateVector from a sequence of complex amplitudes.

        The amplitudes are copied and not renormalized.
        """
        amps = torch.as_tensor(amplitudes, dtype=torch.complex128).reshape(-1)
        dim = amps.shape[0]
        if dim == 0 or dim & (dim - 1) != 0:
            raise ValueError(f"Statevector length must be a power of 2, got {dim}.")
        state = cls(dim.bit_length() - 1, device=device, max_qubits=max_qubits)
        state.re.copy_(amps.real.to(state.re))
        state.im.copy_(amps.imag.to(state.im))
        return state

    @property
    def n_qubits(self) -> int:
        """Number of qubits."""
        return self._n_qubits

    @property
    def size(self) -> int:
        """Number of amplitudes, 2**n_qubits."""
        return self._size

    @property
    def device(self) -> Device:
        """Storage device."""
        return self._device

    def __repr__(self) -> str:
        return f"StateVector(n_qubits={self._n_qubits}, device={self._device.name!r})"

    def reset(self) -> None:
        """Set the state to |0...0>."""
        self.re.zero_()
        self.im.zero_()
        self.re[0] = 1.0

    def norm(self) -> float:
        """Return the L2 norm of the state."""
        return state_norm(self.re, self.im)

    def normalize(self) -> bool:
        """
        Rescale the state to unit norm in place.

        Returns False (and leaves the state untouched) if the norm is below
        NORM_EPSILON, which signals a collapse onto an empty subspace.
        """
        norm = self.norm()
        if norm < NORM_EPSILON:
            logger.debug("normalize() skipped: norm %.3e below threshold", norm)
            return False
        self.re.div_(norm)
        self.im.div_(norm)
        return True

    def probabilities(self) -> torch.Tensor:
        """Return the Born-rule probability of every basis index."""
        return self.re * self.re + self.im * self.im

    def check_qubit(self, qubit: int) -> None:
        """Raise ValueError if qubit is not a valid index for this state."""
        if qubit < 0 or qubit >= self._n_qubits:
            raise ValueError(f"qubit index {qubit} out of range [0, {self._n_qubits})")

    def select(self, fixed: Mapping[int, int]) -> Tuple[torch.Tensor, torch.Tensor]:
        """
        Return in-place views of the amplitudes whose index has the given
        bit values.

        Parameters
        ----------
        fixed:
            Mapping qubit -> bit (0 or 1). Qubits must be distinct and in
            range.

        Returns
        -------
        (re_view, im_view)
            Views sharing storage with ``re`` and ``im``. Two selections over
            the same set of qubits have identical shapes and line up element
            by element, differing only in the fixed bit values.
        """
        shape = []
        index = []
        upper = self._n_qubits
        for qubit in sorted(fixed, reverse=True):
            self.check_qubit(qubit)
            bit = fixed[qubit]
            if bit not in (0, 1):
                raise ValueError(f"bit value for qubit {qubit} must be 0 or 1, got {bit}")
            shape.append(1 << (upper - qubit - 1))
            index.append(slice(None))
            shape.append(2)
            index.append(bit)
            upper = qubit
        shape.append(1 << upper)
        index.append(slice(None))

        idx = tuple(index)
        return self.re.view(shape)[idx], self.im.view(shape)[idx]

    def prob_one(self, qubit: int) -> float:
        """Return the probability that measuring qubit yields 1."""
        re1, im1 = self.select({qubit: 1})
        return float((re1 * re1).sum() + (im1 * im1).sum())

    def to_complex(self) -> torch.Tensor:
        """Return a complex128 copy of the amplitudes."""
        return torch.complex(self.re, self.im).to(torch.complex128)

    def to_numpy(self) -> np.ndarray:
        """Return the amplitudes as a complex128 numpy array."""
        return self.to_complex().detach().cpu().numpy()

    def to_dict(self) -> dict:
        """Return plain-list copies of the amplitude arrays."""
        return {
            "re": self.re.detach().cpu().tolist(),
            "im": self.im.detach().cpu().tolist(),
        }


__all__ = ["StateVector", "NORM_EPSILON"]
