"""Text parser for raw integer sample streams.

This module provides :class:`SegmentParser`, a stateful parser that
ingests text lines of integer samples, concatenates them into one
continuous stream, and cuts that stream into complete segments of a
fixed sample count for :class:`~welch_psd.estimator.PsdEstimator`.
"""

import re
from typing import List, Optional

import numpy as np

_SEPARATORS = re.compile(r"[,;\s]+")


def _convert_line(line: str, line_number: Optional[int] = None) -> List[int]:
    """Split a single text line into integer samples.

    Samples may be separated by commas, semicolons or whitespace.
    Blank lines and lines starting with ``#`` yield no samples.

    Args:
        line: A single line of text.
        line_number: 1-based line number, used in error messages.

    Returns:
        The samples on the line, in order.

    Raises:
        ValueError: If a token is not an integer.
    """
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return []

    samples: List[int] = []
    for token in _SEPARATORS.split(stripped):
        if not token:
            continue
        try:
            samples.append(int(token))
        except ValueError:
            where = f" on line {line_number}" if line_number is not None else ""
            raise ValueError(f"Invalid integer sample {token!r}{where}")
    return samples


class SegmentParser:
    """Stateful parser that groups integer samples into segments.

    Each call to :meth:`add_line` parses one text line and appends
    its samples to the pending stream.  Every time the stream holds
    ``sample_count`` samples, a segment is cut off.  Call
    :meth:`convert` to peek at the complete segments, or
    :meth:`pop_segments` to take them; samples that do not fill a
    whole segment remain in :attr:`remainder`.

    Example:
        >>> parser = SegmentParser(sample_count=4)
        >>> parser.add_line("1, 2, 3")
        >>> parser.add_line("4 5")
        >>> len(parser.convert()), parser.remainder
        (1, 1)
    """

    def __init__(self, sample_count: int) -> None:
        """Initialize with an empty stream.

        Args:
            sample_count: Samples per segment (``>= 1``).

        Raises:
            ValueError: If *sample_count* is not positive.
        """
        if sample_count < 1:
            raise ValueError(f"sample_count must be positive, got {sample_count}")
        self._sample_count = sample_count
        self._pending: List[int] = []
        self._segments: List[np.ndarray] = []
        self._line_number = 0

    @property
    def remainder(self) -> int:
        """Number of trailing samples not yet forming a segment."""
        return len(self._pending)

    def add_line(self, line: str) -> None:
        """Parse a single line and cut off any completed segments.

        Args:
            line: A single line of sample text.

        Raises:
            ValueError: If the line contains a non-integer token.
        """
        self._line_number += 1
        self._pending.extend(_convert_line(line, self._line_number))

        n = self._sample_count
        while len(self._pending) >= n:
            self._segments.append(np.asarray(self._pending[:n], dtype=np.int64))
            del self._pending[:n]

    def pop_segments(self) -> List[np.ndarray]:
        """Return the segments completed so far and forget them."""
        segments = self._segments
        self._segments = []
        return segments

    def convert(self) -> List[np.ndarray]:
        """Return the complete segments not yet taken by :meth:`pop_segments`.

        Returns:
            List of ``int64`` arrays of ``sample_count`` samples each,
            in stream order.
        """
        return list(self._segments)
