"""YAML configuration for the estimator and its command-line harness.

The file format is::

    estimator:
      samples_count_max: 1024
      sample_count: 256
      sample_frequency: 1000.0
      window: hamming
      segments_per_result: 0
    logging:
      level: INFO

Both top-level sections and every key are optional; omitted values
take the defaults of :class:`EstimatorSettings` and
:class:`LoggingSettings`.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from welch_psd.estimator import DEFAULT_SAMPLES_COUNT_MAX
from welch_psd.logs import parse_log_level
from welch_psd.windows import parse_window


@dataclass
class EstimatorSettings:
    """Estimator parameters.

    Attributes:
        samples_count_max: Accumulator capacity.
        sample_count: Samples per segment.
        sample_frequency: Sampling rate in Hz.
        window: Window name (see :class:`~welch_psd.windows.WindowType`).
        segments_per_result: Segments averaged into each reported
            result; ``0`` averages the whole input once.
    """

    samples_count_max: int = DEFAULT_SAMPLES_COUNT_MAX
    sample_count: int = 256
    sample_frequency: float = 1000.0
    window: str = "hamming"
    segments_per_result: int = 0


@dataclass
class LoggingSettings:
    """Logging configuration."""

    level: str = "WARNING"


@dataclass
class AppConfig:
    """Top-level configuration object."""

    estimator: EstimatorSettings = field(default_factory=EstimatorSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)


_INT_KEYS = ("samples_count_max", "sample_count", "segments_per_result")


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ValueError(
            f"Invalid config: '{name}' must be a mapping "
            f"(got {type(section).__name__})"
        )
    return section


def validate_config_yaml(data: object) -> None:
    """Validate that parsed YAML data has the expected structure.

    Checks:

    1. Top-level value is a mapping (or empty).
    2. Only ``estimator`` and ``logging`` sections are present.
    3. Estimator keys are known, integers are integers, the sampling
       rate is a positive number, ``sample_count`` fits within
       ``samples_count_max`` and the window name is known.
    4. ``logging.level`` is a known level name.

    Args:
        data: The object returned by ``yaml.safe_load()``.

    Raises:
        ValueError: If the data does not conform.  The message
            describes the first problem found.
    """
    if data is None:
        return
    if not isinstance(data, dict):
        raise ValueError(
            "Invalid config: expected a mapping at the top level, "
            f"got {type(data).__name__}"
        )

    unknown = set(data) - {"estimator", "logging"}
    if unknown:
        raise ValueError(
            f"Invalid config: unknown section(s) {', '.join(sorted(map(str, unknown)))}"
        )

    est = _section(data, "estimator")
    known = set(EstimatorSettings.__dataclass_fields__)
    unknown = set(est) - known
    if unknown:
        raise ValueError(
            f"Invalid config: unknown estimator key(s) {', '.join(sorted(map(str, unknown)))}"
        )

    for key in _INT_KEYS:
        if key in est:
            val = est[key]
            if isinstance(val, bool) or not isinstance(val, int):
                raise ValueError(
                    f"Invalid config: estimator.{key} must be an integer "
                    f"(got {type(val).__name__})"
                )
            minimum = 0 if key == "segments_per_result" else 1
            if val < minimum:
                raise ValueError(
                    f"Invalid config: estimator.{key} must be >= {minimum}, got {val}"
                )

    if "sample_frequency" in est:
        fs = est["sample_frequency"]
        if isinstance(fs, bool) or not isinstance(fs, (int, float)) or not fs > 0:
            raise ValueError(
                "Invalid config: estimator.sample_frequency must be a "
                f"positive number, got {fs!r}"
            )

    defaults = EstimatorSettings()
    count = est.get("sample_count", defaults.sample_count)
    capacity = est.get("samples_count_max", defaults.samples_count_max)
    if count > capacity:
        raise ValueError(
            f"Invalid config: estimator.sample_count ({count}) exceeds "
            f"samples_count_max ({capacity})"
        )

    if "window" in est:
        try:
            parse_window(est["window"])
        except ValueError as exc:
            raise ValueError(f"Invalid config: estimator.window: {exc}") from exc

    log = _section(data, "logging")
    unknown = set(log) - {"level"}
    if unknown:
        raise ValueError(
            f"Invalid config: unknown logging key(s) {', '.join(sorted(map(str, unknown)))}"
        )
    if "level" in log:
        level = log["level"]
        if not isinstance(level, str):
            raise ValueError(
                "Invalid config: logging.level must be a level name "
                f"(got {type(level).__name__})"
            )
        try:
            parse_log_level(level)
        except ValueError as exc:
            raise ValueError(f"Invalid config: logging.level: {exc}") from exc


def load_config(path: Optional[Union[str, Path]] = None) -> AppConfig:
    """Load a YAML configuration file into an :class:`AppConfig`.

    Args:
        path: Path to the YAML file, or ``None`` for defaults.

    Returns:
        A validated :class:`AppConfig`.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: If the file content is invalid.
    """
    if path is None:
        return AppConfig()

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)

    validate_config_yaml(data)
    data = data or {}

    est = _section(data, "estimator")
    log = _section(data, "logging")
    return AppConfig(
        estimator=EstimatorSettings(**est),
        logging=LoggingSettings(**log),
    )
