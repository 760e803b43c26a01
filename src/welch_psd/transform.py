"""Transform Engine: windowing, forward FFT and magnitude conversion.

The estimator treats the engine as a pure, stateless function from
``length`` real samples to ``length`` magnitudes.  Every operation
works in place on the first ``length`` entries of caller-owned
``float64`` buffers, so the estimator can keep its working memory
preallocated.

:class:`NumpyTransformEngine` is the default implementation.  Any
object satisfying :class:`TransformEngine` can be injected into
:class:`~welch_psd.estimator.PsdEstimator` instead.
"""

from enum import Enum
from typing import Protocol

import numpy as np

from welch_psd.windows import WindowType, window_coefficients


class WindowDirection(Enum):
    """Whether a window is applied (``FORWARD``) or undone (``REVERSE``)."""

    FORWARD = "forward"
    REVERSE = "reverse"


class TransformEngine(Protocol):
    """Interface the estimator needs from a transform implementation."""

    def apply_window(
        self,
        real: np.ndarray,
        length: int,
        window: WindowType,
        direction: WindowDirection,
    ) -> None:
        ...

    def forward_transform(
        self,
        real: np.ndarray,
        imag: np.ndarray,
        length: int,
    ) -> None:
        ...

    def magnitude_from_complex(
        self,
        real: np.ndarray,
        imag: np.ndarray,
        length: int,
    ) -> None:
        ...


def _check_buffer(name: str, buf: np.ndarray, length: int) -> None:
    if length < 1 or buf.shape[0] < length:
        raise ValueError(
            f"{name} buffer holds {buf.shape[0]} values, "
            f"cannot operate on {length}"
        )


class NumpyTransformEngine:
    """Transform Engine backed by :mod:`numpy.fft`.

    Example:
        >>> engine = NumpyTransformEngine()
        >>> real = np.array([1.0, -1.0, 1.0, -1.0])
        >>> imag = np.zeros(4)
        >>> engine.forward_transform(real, imag, 4)
        >>> engine.magnitude_from_complex(real, imag, 4)
        >>> int(np.argmax(real))
        2
    """

    def apply_window(
        self,
        real: np.ndarray,
        length: int,
        window: WindowType,
        direction: WindowDirection = WindowDirection.FORWARD,
    ) -> None:
        """Multiply (or divide) ``real[:length]`` by the window weights.

        In ``REVERSE`` direction samples under a zero weight are left
        as they are.

        Args:
            real: Signal buffer, modified in place.
            length: Number of leading entries to process.
            window: Window kind.
            direction: ``FORWARD`` to apply, ``REVERSE`` to undo.
        """
        _check_buffer("real", real, length)
        coeffs = window_coefficients(window, length)
        view = real[:length]
        if direction == WindowDirection.FORWARD:
            np.multiply(view, coeffs, out=view)
        else:
            np.divide(view, coeffs, out=view, where=coeffs != 0.0)

    def forward_transform(
        self,
        real: np.ndarray,
        imag: np.ndarray,
        length: int,
    ) -> None:
        """Replace ``real``/``imag`` with their unnormalized forward DFT."""
        _check_buffer("real", real, length)
        _check_buffer("imag", imag, length)
        spectrum = np.fft.fft(real[:length] + 1j * imag[:length])
        real[:length] = spectrum.real
        imag[:length] = spectrum.imag

    def magnitude_from_complex(
        self,
        real: np.ndarray,
        imag: np.ndarray,
        length: int,
    ) -> None:
        """Store ``|real + j*imag|`` into ``real[:length]``."""
        _check_buffer("real", real, length)
        _check_buffer("imag", imag, length)
        np.hypot(real[:length], imag[:length], out=real[:length])
