"""Streaming Welch power spectral density estimator.

This module provides :class:`PsdEstimator`, a stateful accumulator
that ingests fixed-size integer segments one at a time, sums their
one-sided periodograms into a preallocated bin buffer, and converts
that sum in place into an averaged, window-corrected PSD when the
result is read.

The estimator is a two-state machine:

* ``IDLE`` — the buffer holds a finalized result (or stale content
  from an earlier configuration).  The next segment clears it first.
* ``ACCUMULATING`` — the buffer holds an unaveraged running sum of
  ``segment_count`` periodograms.

Reading the result while ``ACCUMULATING`` averages the sum and
returns to ``IDLE``; reading while ``IDLE`` returns the buffer
unchanged, so repeated reads are cheap and never re-average.

Note:
    :meth:`PsdEstimator.setup` does not clear the buffer.  A
    :meth:`~PsdEstimator.get_result` between ``setup`` and the first
    :meth:`~PsdEstimator.compute_segment` returns whatever the buffer
    held before, sliced to the new sample count.
"""

import logging
import math
import numbers
from typing import Optional, Sequence, Union

import numpy as np

from welch_psd.errors import (
    ConfigurationError,
    SegmentError,
    SegmentLengthError,
)
from welch_psd.models import EstimatorConfig, EstimatorState
from welch_psd.transform import (
    NumpyTransformEngine,
    TransformEngine,
    WindowDirection,
)
from welch_psd.windows import WindowType, correction_factor, parse_window

logger = logging.getLogger(__name__)

#: Default accumulator capacity in bins.
DEFAULT_SAMPLES_COUNT_MAX: int = 1024


class PsdEstimator:
    """Welch PSD accumulator over a fixed-capacity bin buffer.

    All buffers are allocated once, in the constructor, with
    ``samples_count_max`` entries.  Later calls only work on the
    leading ``sample_count`` entries.

    Not thread-safe: use one instance per signal channel, from a
    single execution context.

    Example:
        >>> est = PsdEstimator(samples_count_max=64)
        >>> est.setup(sample_count=8, sample_frequency=8)
        >>> est.compute_segment([0, 7, 10, 7, 0, -7, -10, -7])
        >>> psd = est.get_result()
        >>> psd.shape
        (8,)
    """

    def __init__(
        self,
        samples_count_max: int = DEFAULT_SAMPLES_COUNT_MAX,
        engine: Optional[TransformEngine] = None,
    ) -> None:
        """Allocate the accumulator and working buffers.

        Args:
            samples_count_max: Capacity of every internal buffer.
            engine: Transform Engine to use; defaults to
                :class:`~welch_psd.transform.NumpyTransformEngine`.

        Raises:
            ConfigurationError: If *samples_count_max* is not a
                positive integer.
        """
        if not _is_integer(samples_count_max) or samples_count_max < 1:
            raise ConfigurationError(
                f"samples_count_max must be a positive integer, "
                f"got {samples_count_max!r}"
            )

        self._capacity = int(samples_count_max)
        self._engine: TransformEngine = engine or NumpyTransformEngine()

        self._bins = np.zeros(self._capacity, dtype=np.float64)
        self._real = np.zeros(self._capacity, dtype=np.float64)
        self._imag = np.zeros(self._capacity, dtype=np.float64)
        # Callers cannot flip a buffer-backed read-only array back to writeable
        self._result = np.frombuffer(
            memoryview(self._bins).toreadonly(), dtype=np.float64
        )

        self._config: Optional[EstimatorConfig] = None
        self._segment_count = 0
        self._state = EstimatorState.IDLE

    @property
    def samples_count_max(self) -> int:
        """Fixed capacity of the bin accumulator."""
        return self._capacity

    @property
    def config(self) -> Optional[EstimatorConfig]:
        """Active configuration, or ``None`` before the first ``setup``."""
        return self._config

    @property
    def state(self) -> EstimatorState:
        return self._state

    @property
    def segment_count(self) -> int:
        """Segments accumulated since the buffer was last cleared."""
        return self._segment_count

    @property
    def meaningful_bin_count(self) -> int:
        """Leading bins of :meth:`get_result` that carry PSD values."""
        return self._require_config().meaningful_bin_count

    def setup(
        self,
        sample_count: int,
        sample_frequency: float,
        window: Union[str, WindowType] = WindowType.HAMMING,
    ) -> None:
        """Configure the segment length, sampling rate and window.

        Resets the segment counter (state becomes ``IDLE``) but leaves
        the accumulator contents untouched; they are cleared lazily by
        the next :meth:`compute_segment`.

        Args:
            sample_count: Samples per segment, in
                ``[1, samples_count_max]``.
            sample_frequency: Sampling rate in Hz, finite and ``> 0``.
            window: Window kind or name.

        Raises:
            ConfigurationError: If any argument is out of range.
        """
        if not _is_integer(sample_count):
            raise ConfigurationError(
                f"sample_count must be an integer, got {sample_count!r}"
            )
        if not 1 <= sample_count <= self._capacity:
            raise ConfigurationError(
                f"sample_count must be in [1, {self._capacity}], "
                f"got {sample_count}"
            )
        if (
            isinstance(sample_frequency, bool)
            or not isinstance(sample_frequency, numbers.Real)
            or not math.isfinite(sample_frequency)
            or sample_frequency <= 0
        ):
            raise ConfigurationError(
                f"sample_frequency must be a positive finite number, "
                f"got {sample_frequency!r}"
            )
        try:
            window_type = parse_window(window)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc

        self._config = EstimatorConfig(
            sample_count=int(sample_count),
            sample_frequency=float(sample_frequency),
            window=window_type,
        )
        self._segment_count = 0
        self._state = EstimatorState.IDLE

        logger.debug(
            "PSD setup: sample_count=%d sample_frequency=%g window=%s",
            self._config.sample_count,
            self._config.sample_frequency,
            window_type.value,
        )

    def compute_segment(self, samples: Sequence[int]) -> None:
        """Add the periodogram of one segment to the accumulator.

        The segment mean is removed, the configured window applied,
        and the magnitude spectrum squared and scaled to a one-sided
        density (every bin except DC doubled).

        Args:
            samples: Exactly ``sample_count`` signed integers.

        Raises:
            ConfigurationError: If :meth:`setup` was never called.
            SegmentLengthError: If the segment length differs from
                ``sample_count``.
            SegmentError: If the segment is not one-dimensional
                integer data.
        """
        config = self._require_config()
        n = config.sample_count
        segment = self._check_segment(samples, n)

        if self._state == EstimatorState.IDLE:
            self.clear()

        real = self._real
        imag = self._imag

        average = float(np.mean(segment, dtype=np.float64))
        np.subtract(segment, average, out=real[:n])
        imag[:n] = 0.0

        self._engine.apply_window(real, n, config.window, WindowDirection.FORWARD)
        self._engine.forward_transform(real, imag, n)
        self._engine.magnitude_from_complex(real, imag, n)

        power = real[:n]
        np.square(power, out=power)
        power /= config.sample_frequency
        power /= n
        # One-sided spectrum: fold negative frequencies, DC excluded
        power[1:] *= 2.0

        self._bins[:n] += power

        self._segment_count += 1
        self._state = EstimatorState.ACCUMULATING

    def get_result(self) -> np.ndarray:
        """Return the averaged, window-corrected PSD.

        If segments were accumulated since the last read, the running
        sum is divided by the segment count and multiplied by the
        squared window correction factor, in place, and the counter is
        reset.  Otherwise the buffer is returned as is.

        Returns:
            Read-only view of the first ``sample_count`` bins.  Only
            the first ``sample_count // 2 + 1`` are meaningful.  The
            view shares memory with the accumulator and stays
            unchanged until the next :meth:`compute_segment` or
            :meth:`setup`.

        Raises:
            ConfigurationError: If :meth:`setup` was never called.
        """
        config = self._require_config()
        n = config.sample_count

        if self._state == EstimatorState.ACCUMULATING:
            correction = correction_factor(config.window)
            bins = self._bins[:n]
            bins /= self._segment_count
            bins *= correction * correction

            logger.debug("PSD finalized over %d segment(s)", self._segment_count)

            self._segment_count = 0
            self._state = EstimatorState.IDLE

        return self._result[:n]

    def clear(self) -> None:
        """Zero the first ``sample_count`` bins; the counter is kept.

        Raises:
            ConfigurationError: If :meth:`setup` was never called.
        """
        n = self._require_config().sample_count
        self._bins[:n] = 0.0

    def _require_config(self) -> EstimatorConfig:
        if self._config is None:
            raise ConfigurationError("PSD estimator is not configured; call setup() first")
        return self._config

    @staticmethod
    def _check_segment(samples: Sequence[int], n: int) -> np.ndarray:
        segment = np.asarray(samples)
        if segment.ndim != 1:
            raise SegmentError(
                f"Segment must be one-dimensional, got shape {segment.shape}"
            )
        if segment.shape[0] != n:
            raise SegmentLengthError(
                f"Segment holds {segment.shape[0]} samples, expected {n}"
            )
        if segment.dtype.kind not in "iu":
            raise SegmentError(
                f"Segment samples must be integers, got dtype {segment.dtype}"
            )
        return segment


def _is_integer(value: object) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)
