"""Tests for window generation and the correction factor table."""

import numpy as np
import pytest

from welch_psd.windows import (
    WINDOW_CORRECTION,
    WindowType,
    correction_factor,
    parse_window,
    window_coefficients,
)


class TestParseWindow:
    """Window name resolution."""

    @pytest.mark.parametrize("name,expected", [
        ("hamming", WindowType.HAMMING),
        ("HAMMING", WindowType.HAMMING),
        (" Hann ", WindowType.HANN),
        ("hanning", WindowType.HANN),
        ("boxcar", WindowType.RECTANGLE),
        ("rectangle", WindowType.RECTANGLE),
        ("triangle", WindowType.BARTLETT),
        ("blackman", WindowType.BLACKMAN),
    ])
    def test_known_names(self, name, expected) -> None:
        """Names and aliases resolve to window types."""
        assert parse_window(name) == expected

    def test_enum_passthrough(self) -> None:
        """WindowType members pass through."""
        assert parse_window(WindowType.BLACKMAN) is WindowType.BLACKMAN

    def test_unknown_name(self) -> None:
        """Unknown names are rejected."""
        with pytest.raises(ValueError, match="Unknown window type"):
            parse_window("flattop")


class TestCorrectionTable:
    """Energy correction factors."""

    def test_every_window_has_a_factor(self) -> None:
        """The correction table covers every window."""
        assert set(WINDOW_CORRECTION) == set(WindowType)

    def test_hamming_factor(self) -> None:
        """Hamming uses 1.59."""
        assert correction_factor(WindowType.HAMMING) == pytest.approx(1.59)

    def test_rectangle_is_uncorrected(self) -> None:
        """The rectangle needs no correction."""
        assert correction_factor(WindowType.RECTANGLE) == 1.0


class TestWindowCoefficients:
    """Symmetric window weights."""

    def test_hamming_endpoints_and_peak(self) -> None:
        """Hamming runs from 0.08 to 1.0 at the centre."""
        coeffs = window_coefficients(WindowType.HAMMING, 9)
        assert coeffs[0] == pytest.approx(0.08)
        assert coeffs[-1] == pytest.approx(0.08)
        assert coeffs[4] == pytest.approx(1.0)

    @pytest.mark.parametrize("window", list(WindowType))
    def test_symmetric(self, window) -> None:
        """Windows are symmetric."""
        coeffs = window_coefficients(window, 16)
        np.testing.assert_allclose(coeffs, coeffs[::-1], atol=1e-12)

    def test_rectangle_is_ones(self) -> None:
        """The rectangle window is all ones."""
        np.testing.assert_array_equal(
            window_coefficients(WindowType.RECTANGLE, 5), np.ones(5)
        )

    def test_single_point(self) -> None:
        """A one-point window is 1.0."""
        assert window_coefficients(WindowType.HAMMING, 1).tolist() == [1.0]

    def test_cached_and_read_only(self) -> None:
        """Coefficients are cached and read-only."""
        first = window_coefficients(WindowType.HANN, 32)
        assert window_coefficients(WindowType.HANN, 32) is first
        assert not first.flags.writeable

    def test_non_positive_length(self) -> None:
        """Length must be positive."""
        with pytest.raises(ValueError):
            window_coefficients(WindowType.HAMMING, 0)
