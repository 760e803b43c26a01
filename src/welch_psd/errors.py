"""Exception hierarchy for the PSD estimator.

All errors are raised synchronously by the operation that detects
them; nothing is retried internally.  Each concrete error also
derives from :class:`ValueError` so callers that only care about
"bad input" can catch that.
"""


class PsdError(Exception):
    """Base class for every error raised by :mod:`welch_psd`."""


class ConfigurationError(PsdError, ValueError):
    """Invalid estimator configuration, or use before ``setup``."""


class SegmentError(PsdError, ValueError):
    """A segment that cannot be processed (wrong shape or dtype)."""


class SegmentLengthError(SegmentError):
    """Segment length does not match the configured sample count."""
