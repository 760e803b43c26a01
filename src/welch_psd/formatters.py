"""Human-readable formatters for bin frequencies and densities.

Frequencies get an ``Hz`` / ``kHz`` / ``MHz`` / ``GHz`` suffix with at
most two decimals; densities are printed in scientific notation so
that values spanning many decades stay comparable in a table.
"""

import math
from typing import Optional, Union

# Frequency thresholds
_ONE_KHZ: int = 1_000
_ONE_MHZ: int = 1_000_000
_ONE_GHZ: int = 1_000_000_000


def format_frequency(value: Optional[Union[int, float]]) -> str:
    """Format a frequency in Hz to a human-readable string.

    * ``None``, ``NaN`` or negative → ``""``
    * < 1 kHz → ``"<n> Hz"``
    * < 1 MHz → ``"<n> kHz"``
    * < 1 GHz → ``"<n> MHz"``
    * ≥ 1 GHz → ``"<n> GHz"``

    Values keep up to 2 decimal places with trailing zeros stripped
    (``0.5 Hz``, ``12.25 kHz``, ``3 MHz``).

    Args:
        value: Frequency in Hz, or ``None``.

    Returns:
        Formatted string, or ``""`` for unusable values.
    """
    if value is None:
        return ""

    float_val = float(value)
    if math.isnan(float_val) or float_val < 0:
        return ""

    if float_val < _ONE_KHZ:
        return f"{_format_decimal(float_val)} Hz"

    if float_val < _ONE_MHZ:
        return f"{_format_decimal(float_val / _ONE_KHZ)} kHz"

    if float_val < _ONE_GHZ:
        return f"{_format_decimal(float_val / _ONE_MHZ)} MHz"

    return f"{_format_decimal(float_val / _ONE_GHZ)} GHz"


def format_density(value: Optional[float], precision: int = 4) -> str:
    """Format a PSD value in scientific notation.

    * ``None`` or ``NaN`` → ``""``
    * Otherwise → e.g. ``"1.2346e-03"`` for ``precision=4``

    Args:
        value: Density in units² / Hz, or ``None``.
        precision: Digits after the decimal point.

    Returns:
        Formatted string, or ``""`` for ``None`` / ``NaN``.
    """
    if value is None or math.isnan(value):
        return ""
    return f"{value:.{precision}e}"


def _format_decimal(value: float) -> str:
    """Format a float with up to 2 decimal places, trailing zeros stripped.

    Args:
        value: The number to format.

    Returns:
        Formatted string (e.g. ``"10"``, ``"10.1"`` or ``"0.25"``).
    """
    formatted = f"{value:.2f}"
    if "." in formatted:
        formatted = formatted.rstrip("0").rstrip(".")
    return formatted
