"""File input for raw sample streams.

This module reads text files of integer samples through
:class:`~welch_psd.parser.SegmentParser` and returns them as
fixed-size segments ready for
:meth:`~welch_psd.estimator.PsdEstimator.compute_segment`.
"""

import logging
from pathlib import Path
from typing import Iterator, List, Union

import numpy as np

from welch_psd.parser import SegmentParser

logger = logging.getLogger(__name__)


def iter_segments(
    path: Union[str, Path],
    sample_count: int,
) -> Iterator[np.ndarray]:
    """Yield complete segments from a sample file as they are read.

    Trailing samples that do not fill a whole segment are dropped
    (and logged).

    Args:
        path: Path to the sample file.
        sample_count: Samples per segment.

    Yields:
        ``int64`` arrays of exactly *sample_count* samples.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: If the file contains a non-integer sample.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Sample file not found: {path}")

    parser = SegmentParser(sample_count)
    with open(path, "r", encoding="utf-8") as fh:
        for line in fh:
            parser.add_line(line.rstrip("\n\r"))
            yield from parser.pop_segments()

    if parser.remainder:
        logger.warning(
            "%s: dropped %d trailing sample(s) that do not fill a segment of %d",
            path, parser.remainder, sample_count,
        )


def load_segments(
    path: Union[str, Path],
    sample_count: int,
) -> List[np.ndarray]:
    """Load every complete segment of a sample file.

    Args:
        path: Path to the sample file.
        sample_count: Samples per segment.

    Returns:
        Segments in file order.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: If the file contains a non-integer sample.
    """
    return list(iter_segments(path, sample_count))
