"""Tests for SegmentParser — splitting text sample streams into segments."""

import numpy as np
import pytest

from welch_psd.parser import SegmentParser, _convert_line


class TestConvertLine:
    """Single-line tokenizing."""

    def test_mixed_separators(self) -> None:
        """Commas, semicolons and whitespace all separate samples."""
        assert _convert_line("1, -2;3\t4   5") == [1, -2, 3, 4, 5]

    def test_blank_and_comment(self) -> None:
        """Blank and comment lines hold no samples."""
        assert _convert_line("") == []
        assert _convert_line("   ") == []
        assert _convert_line("# header") == []

    def test_trailing_separator(self) -> None:
        """A trailing separator is ignored."""
        assert _convert_line("7, 8,") == [7, 8]

    def test_invalid_token_names_line(self) -> None:
        """The error names the line number."""
        with pytest.raises(ValueError, match="line 3"):
            _convert_line("1, 2.5", line_number=3)


class TestSegmentParser:
    """Stream accumulation across lines."""

    def test_segments_span_lines(self) -> None:
        """A segment may start on one line and end on the next."""
        parser = SegmentParser(sample_count=4)
        parser.add_line("1 2 3")
        parser.add_line("4 5 6")
        parser.add_line("7 8 9")

        segments = parser.convert()
        assert len(segments) == 2
        assert segments[0].tolist() == [1, 2, 3, 4]
        assert segments[1].tolist() == [5, 6, 7, 8]
        assert segments[0].dtype == np.int64
        assert parser.remainder == 1

    def test_one_line_many_segments(self) -> None:
        """One line may hold several segments."""
        parser = SegmentParser(sample_count=2)
        parser.add_line("1 2 3 4 5 6")
        assert [s.tolist() for s in parser.convert()] == [[1, 2], [3, 4], [5, 6]]
        assert parser.remainder == 0

    def test_pop_segments_forgets(self) -> None:
        """Popped segments are not returned again."""
        parser = SegmentParser(sample_count=2)
        parser.add_line("1 2 3")
        assert len(parser.pop_segments()) == 1
        assert parser.pop_segments() == []
        parser.add_line("4")
        assert parser.pop_segments()[0].tolist() == [3, 4]

    def test_convert_after_pop_returns_only_new_segments(self) -> None:
        """convert() and pop_segments() share the pending segment list."""
        parser = SegmentParser(sample_count=2)
        parser.add_line("1 2 3 4")
        parser.pop_segments()
        assert parser.convert() == []

        parser.add_line("5 6")
        assert [s.tolist() for s in parser.convert()] == [[5, 6]]
        assert [s.tolist() for s in parser.pop_segments()] == [[5, 6]]

    def test_comment_lines_count_for_errors(self) -> None:
        """Comment lines still advance the line counter."""
        parser = SegmentParser(sample_count=2)
        parser.add_line("# samples")
        with pytest.raises(ValueError, match="line 2"):
            parser.add_line("1 x")

    def test_invalid_sample_count(self) -> None:
        """sample_count must be positive."""
        with pytest.raises(ValueError):
            SegmentParser(sample_count=0)
