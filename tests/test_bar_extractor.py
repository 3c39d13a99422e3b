"""
Tests for Bar Schedule Record Extraction

Tests the required-list and tally-list grammars.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tools.bar_extractor import (
    RequiredRecord, TallyRecord,
    extract_required, extract_tally, extract_records
)


class TestExtractRequired:
    """Tests for Page 1 (required list) extraction."""

    def test_single_line(self):
        """Quantity, diameter and mark are captured; interior integers dropped."""
        records = extract_required("60 Y12 3550 60 CL1")
        assert records == [RequiredRecord(required=60, diameter="Y12", mark="CL1")]

    def test_multiple_lines_keep_order(self):
        text = "60 Y12 3550 60 CL1\n24 R10 1200 24 A1\n10 Y16 900 10 LS1"
        records = extract_required(text)
        assert [r.mark for r in records] == ["CL1", "A1", "LS1"]
        assert [r.required for r in records] == [60, 24, 10]

    def test_multiple_records_on_one_line(self):
        """Records flattened onto one line by text extraction still split."""
        text = "60 Y12 3550 60 CL1 24 R10 1200 24 A1"
        records = extract_required(text)
        assert [r.mark for r in records] == ["CL1", "A1"]

    def test_extra_whitespace_between_tokens(self):
        records = extract_required("60   Y12\t3550\n60  CL1")
        assert records == [RequiredRecord(required=60, diameter="Y12", mark="CL1")]

    def test_headers_and_noise_skipped(self):
        text = (
            "BAR SCHEDULE REV B\n"
            "QTY DIA LENGTH NO MARK\n"
            "60 Y12 3550 60 CL1\n"
            "Drawn by: JS 2024\n"
        )
        records = extract_required(text)
        assert len(records) == 1
        assert records[0].mark == "CL1"

    def test_three_letter_mark(self):
        records = extract_required("4 T20 6000 4 ABC12")
        assert records[0].mark == "ABC12"

    def test_four_letter_mark_rejected(self):
        assert extract_required("60 Y12 3550 60 ABCD1") == []

    def test_missing_token_rejected(self):
        """A line missing one of the interior integers does not match."""
        assert extract_required("60 Y12 3550 CL1") == []

    def test_lowercase_tokens_rejected(self):
        assert extract_required("60 y12 3550 60 cl1") == []

    def test_no_boundary_before_quantity(self):
        """Digits glued to a preceding letter are not a quantity."""
        assert extract_required("X60 Y12 3550 60 CL1") == []

    def test_no_boundary_after_mark(self):
        assert extract_required("60 Y12 3550 60 CL1X") == []

    def test_non_ascii_digits_rejected(self):
        """Only 0-9 count as quantity digits."""
        assert extract_required("\u0666\u0660 Y12 3550 60 CL1") == []

    def test_no_break_space_between_tokens(self):
        records = extract_required("60\u00a0Y12\u00a03550 60 CL1")
        assert records == [RequiredRecord(required=60, diameter="Y12", mark="CL1")]

    def test_empty_input(self):
        assert extract_required("") == []
        assert extract_required(None) == []

    def test_records_are_immutable(self):
        record = extract_required("60 Y12 3550 60 CL1")[0]
        with pytest.raises(Exception):
            record.required = 1


class TestExtractTally:
    """Tests for Page 2+ (tally list) extraction."""

    def test_strict_format(self):
        records = extract_tally("16Y12-A1-200")
        assert records == [TallyRecord(count=16, diameter="Y12", mark="A1")]

    def test_tolerant_format(self):
        records = extract_tally("15 R10 - CL1 - 600")
        assert records == [TallyRecord(count=15, diameter="R10", mark="CL1")]

    def test_suffix_optional(self):
        assert extract_tally("16Y12-A1") == [TallyRecord(count=16, diameter="Y12", mark="A1")]

    @pytest.mark.parametrize("text", [
        "16Y12-A1-200",
        "16Y12-A1",
        "15R10-CL1-600",
        "3T25-ABC4-125",
    ])
    def test_strict_inputs_parse_identically_with_spaces(self, text):
        """Adding spaces around the first dash does not change the record."""
        spaced = text.replace("-", " - ", 1)
        assert extract_tally(text) == extract_tally(spaced)
        assert len(extract_tally(text)) == 1

    def test_multiple_callouts_keep_order(self):
        text = "15R10-CL1-600 13R10-CL1-600\n16Y12-A1-200"
        records = extract_tally(text)
        assert [(r.count, r.mark) for r in records] == [(15, "CL1"), (13, "CL1"), (16, "A1")]

    def test_missing_dash_rejected(self):
        assert extract_tally("16Y12A1") == []

    def test_missing_mark_rejected(self):
        assert extract_tally("16Y12-200") == []

    def test_four_letter_mark_rejected(self):
        assert extract_tally("16Y12-ABCD1") == []

    def test_callout_after_diameter_symbol(self):
        """A non-ASCII symbol before the count still leaves a word boundary."""
        records = extract_tally("\u00d816Y12-A1-200")
        assert records == [TallyRecord(count=16, diameter="Y12", mark="A1")]

    def test_non_ascii_digits_rejected(self):
        assert extract_tally("\u0661\u0666Y12-A1-200") == []

    def test_noise_skipped(self):
        text = "SECTION A-A\nSCALE 1:50\n16Y12-A1-200 T&B\nNOTE: cover 40mm"
        records = extract_tally(text)
        assert records == [TallyRecord(count=16, diameter="Y12", mark="A1")]

    def test_empty_input(self):
        assert extract_tally("") == []
        assert extract_tally(None) == []


class TestHelpers:
    """Tests for small helpers."""

    def test_extract_records_returns_both_sides(self):
        required, tally = extract_records("60 Y12 3550 60 CL1", "15R10-CL1-600")
        assert required[0].mark == "CL1"
        assert tally[0].count == 15

