"""Data model for the PSD estimator.

This module defines the configuration record held by
:class:`~welch_psd.estimator.PsdEstimator`, its two-state machine,
and :class:`PsdBin`, the per-bin row handed to result consumers.
"""

from dataclasses import dataclass
from enum import Enum

from welch_psd.windows import WindowType


class EstimatorState(Enum):
    """Accumulation state of a :class:`~welch_psd.estimator.PsdEstimator`.

    ``IDLE`` means the accumulator holds either a finalized result or
    stale content and will be cleared by the next segment.
    ``ACCUMULATING`` means it holds an unaveraged running sum.
    """

    IDLE = "idle"
    ACCUMULATING = "accumulating"


@dataclass(frozen=True)
class EstimatorConfig:
    """Active segment configuration.

    Attributes:
        sample_count: Samples per segment.
        sample_frequency: Sampling rate in Hz.
        window: Window applied before the forward transform.
    """

    sample_count: int
    sample_frequency: float
    window: WindowType = WindowType.HAMMING

    @property
    def bin_width(self) -> float:
        """Frequency resolution in Hz (``sample_frequency / sample_count``)."""
        return self.sample_frequency / self.sample_count

    @property
    def meaningful_bin_count(self) -> int:
        """Number of one-sided bins (``sample_count // 2 + 1``)."""
        return self.sample_count // 2 + 1


@dataclass
class PsdBin:
    """A single frequency bin of a finalized PSD estimate.

    Attributes:
        index: Bin index (0 is DC).
        frequency: Bin centre frequency in Hz.
        density: Power spectral density in units² / Hz.
    """

    index: int = 0
    frequency: float = 0.0
    density: float = 0.0
