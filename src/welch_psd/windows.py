"""Window functions and their energy correction factors.

Each :class:`WindowType` maps to a symmetric tapering window and to
the energy correction factor that compensates its attenuation in the
averaged power estimate.  The estimator multiplies the averaged bins
by the square of that factor.
"""

from enum import Enum
from functools import lru_cache
from typing import Dict, Union

import numpy as np


class WindowType(Enum):
    """Supported window functions."""

    RECTANGLE = "rectangle"
    HAMMING = "hamming"
    HANN = "hann"
    BLACKMAN = "blackman"
    BARTLETT = "bartlett"


#: Energy correction factor per window kind.
WINDOW_CORRECTION: Dict[WindowType, float] = {
    WindowType.RECTANGLE: 1.0,
    WindowType.HAMMING: 1.59,
    WindowType.HANN: 1.63,
    WindowType.BLACKMAN: 1.97,
    WindowType.BARTLETT: 1.73,
}

# Accepted aliases for parse_window
_ALIASES: Dict[str, WindowType] = {
    "rect": WindowType.RECTANGLE,
    "rectangular": WindowType.RECTANGLE,
    "boxcar": WindowType.RECTANGLE,
    "hanning": WindowType.HANN,
    "triangle": WindowType.BARTLETT,
}


def parse_window(name: Union[str, WindowType]) -> WindowType:
    """Resolve a window name to a :class:`WindowType`.

    Matching is case-insensitive and accepts a few common aliases
    (``hanning``, ``boxcar``, ``triangle``...).

    Args:
        name: Window name, or an existing :class:`WindowType`.

    Returns:
        The matching :class:`WindowType`.

    Raises:
        ValueError: If *name* is not a known window.
    """
    if isinstance(name, WindowType):
        return name

    key = str(name).strip().lower()
    if key in _ALIASES:
        return _ALIASES[key]
    try:
        return WindowType(key)
    except ValueError:
        raise ValueError(f"Unknown window type: {name}")


def correction_factor(window: WindowType) -> float:
    """Return the energy correction factor for *window*."""
    return WINDOW_CORRECTION[window]


@lru_cache(maxsize=32)
def window_coefficients(window: WindowType, length: int) -> np.ndarray:
    """Generate a symmetric window of *length* points.

    The array is cached per ``(window, length)`` and marked read-only,
    so repeated segments of the same size never rebuild it.

    Args:
        window: Window kind.
        length: Number of points (``>= 1``).

    Returns:
        Read-only ``float64`` array of window weights.

    Raises:
        ValueError: If *length* is not positive or *window* is unknown.
    """
    if length < 1:
        raise ValueError(f"Window length must be positive, got {length}")

    if window == WindowType.RECTANGLE:
        coeffs = np.ones(length, dtype=np.float64)
    elif window == WindowType.HAMMING:
        coeffs = np.hamming(length)
    elif window == WindowType.HANN:
        coeffs = np.hanning(length)
    elif window == WindowType.BLACKMAN:
        coeffs = np.blackman(length)
    elif window == WindowType.BARTLETT:
        coeffs = np.bartlett(length)
    else:
        raise ValueError(f"Unknown window type: {window}")

    coeffs = np.asarray(coeffs, dtype=np.float64)
    coeffs.flags.writeable = False
    return coeffs
