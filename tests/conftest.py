"""Shared test fixtures and helpers for welch_psd tests."""

import logging
from pathlib import Path

import numpy as np
import pytest

from welch_psd.estimator import PsdEstimator

# One cycle of a sine sampled 8 times, odd-symmetric about its centre
SINE_SEGMENT = [-38, -92, -92, -38, 38, 92, 92, 38]


@pytest.fixture
def estimator() -> PsdEstimator:
    """Return an unconfigured estimator with a 64-bin accumulator."""
    return PsdEstimator(samples_count_max=64)


@pytest.fixture
def sine_segment() -> np.ndarray:
    """Return the 8-sample single-cycle sine segment."""
    return np.array(SINE_SEGMENT, dtype=np.int16)


@pytest.fixture
def samples_file(tmp_path: Path) -> Path:
    """Write three sine segments (plus 3 stray samples) to a text file."""
    path = tmp_path / "samples.txt"
    lines = ["# three cycles of an 8-sample sine"]
    for _ in range(3):
        lines.append(", ".join(str(v) for v in SINE_SEGMENT[:4]))
        lines.append(" ".join(str(v) for v in SINE_SEGMENT[4:]))
    lines.append("")
    lines.append("1 2 3")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo any handler/level changes made through ``setup_logging``."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("welch_psd").setLevel(logging.NOTSET)
