"""
Tests for Tally Aggregation
"""

import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tools.bar_extractor import TallyRecord, extract_tally
from tools.tally_aggregator import TallyGroup, aggregate


class TestAggregate:
    """Tests for grouping tally records by mark."""

    def test_counts_summed_per_mark(self):
        records = [
            TallyRecord(count=15, diameter="R10", mark="CL1"),
            TallyRecord(count=13, diameter="R10", mark="CL1"),
        ]
        grouped = aggregate(records)
        assert list(grouped) == ["CL1"]
        assert grouped["CL1"].total == 28
        assert grouped["CL1"].diameter == "R10"
        assert not grouped["CL1"].has_conflict

    def test_first_seen_mark_order(self):
        records = extract_tally("2Y10-B1 5Y12-A1 1Y10-B1")
        grouped = aggregate(records)
        assert list(grouped) == ["B1", "A1"]
        assert grouped["B1"].total == 3

    def test_first_diameter_wins(self, caplog):
        """A later disagreeing diameter is recorded but does not replace the first."""
        records = [
            TallyRecord(count=5, diameter="Y12", mark="A1"),
            TallyRecord(count=3, diameter="Y16", mark="A1"),
            TallyRecord(count=1, diameter="Y12", mark="A1"),
        ]
        with caplog.at_level(logging.WARNING):
            grouped = aggregate(records)

        group = grouped["A1"]
        assert group.total == 9
        assert group.diameter == "Y12"
        assert group.conflicting_diameters == ("Y16",)
        assert group.has_conflict
        assert "conflicts" in caplog.text

    def test_total_independent_of_order(self):
        records = extract_tally("5Y12-A1 3Y16-A1 2Y12-A1")
        forward = aggregate(records)["A1"]
        backward = aggregate(list(reversed(records)))["A1"]
        assert forward.total == backward.total == 10
        assert forward.diameter == "Y12"
        assert backward.diameter == "Y12"

    def test_zero_count(self):
        grouped = aggregate([TallyRecord(count=0, diameter="Y10", mark="Z1")])
        assert grouped["Z1"] == TallyGroup(mark="Z1", total=0, diameter="Y10")

    def test_empty(self):
        assert aggregate([]) == {}
