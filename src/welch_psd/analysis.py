"""Helpers for consuming a finalized PSD estimate.

The estimator hands back ``sample_count`` bins of which only the
one-sided half ``[0, sample_count // 2]`` is meaningful.  These
functions slice that half, attach bin frequencies, and compute the
summary figures the CLI reports (dominant bin, spectral
concentration, total power).
"""

from typing import List, Sequence

import numpy as np

from welch_psd.models import PsdBin


def bin_frequencies(sample_count: int, sample_frequency: float) -> np.ndarray:
    """Return the centre frequency of every meaningful bin.

    Args:
        sample_count: Samples per segment.
        sample_frequency: Sampling rate in Hz.

    Returns:
        ``float64`` array of ``sample_count // 2 + 1`` frequencies,
        spaced ``sample_frequency / sample_count`` apart from 0 Hz.

    Raises:
        ValueError: If *sample_count* is not positive.
    """
    if sample_count < 1:
        raise ValueError(f"sample_count must be positive, got {sample_count}")
    indices = np.arange(sample_count // 2 + 1, dtype=np.float64)
    return indices * (float(sample_frequency) / sample_count)


def meaningful_bins(result: Sequence[float], sample_count: int) -> np.ndarray:
    """Slice the one-sided bins ``[0, sample_count // 2]`` out of *result*."""
    return np.asarray(result, dtype=np.float64)[: sample_count // 2 + 1]


def to_bins(
    result: Sequence[float],
    sample_count: int,
    sample_frequency: float,
) -> List[PsdBin]:
    """Convert an estimator result into :class:`PsdBin` rows.

    Args:
        result: Output of
            :meth:`~welch_psd.estimator.PsdEstimator.get_result`.
        sample_count: Samples per segment.
        sample_frequency: Sampling rate in Hz.

    Returns:
        One :class:`PsdBin` per meaningful bin, DC first.
    """
    density = meaningful_bins(result, sample_count)
    freqs = bin_frequencies(sample_count, sample_frequency)
    return [
        PsdBin(index=i, frequency=float(f), density=float(d))
        for i, (f, d) in enumerate(zip(freqs, density))
    ]


def dominant_bin(psd: Sequence[float]) -> int:
    """Index of the strongest non-DC bin.

    Falls back to bin 0 when *psd* holds a single bin.

    Raises:
        ValueError: If *psd* is empty.
    """
    values = np.asarray(psd, dtype=np.float64)
    if values.size == 0:
        raise ValueError("Cannot find the dominant bin of an empty spectrum")
    if values.size == 1:
        return 0
    return int(np.argmax(values[1:])) + 1


def spectral_concentration(psd: Sequence[float], index: int) -> float:
    """Fraction of the total bin energy held by bin *index*.

    Returns ``0.0`` for an all-zero spectrum.
    """
    values = np.asarray(psd, dtype=np.float64)
    total = float(values.sum())
    if total <= 0.0:
        return 0.0
    return float(values[index]) / total


def total_power(
    psd: Sequence[float],
    sample_count: int,
    sample_frequency: float,
) -> float:
    """Integrate the one-sided density over frequency.

    Args:
        psd: Meaningful bins of a finalized estimate.
        sample_count: Samples per segment.
        sample_frequency: Sampling rate in Hz.

    Returns:
        ``sum(psd) * sample_frequency / sample_count``.
    """
    values = np.asarray(psd, dtype=np.float64)
    return float(values.sum()) * float(sample_frequency) / sample_count
