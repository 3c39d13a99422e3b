"""
Result Set and Mismatch Report
Sorted comparison rows plus the views derived from them.
"""

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional

from .override_store import OverrideStore
from .reconciler import ComparisonRow

logger = logging.getLogger(__name__)


NO_MISMATCHES = "None"

TABLE_COLUMNS = [
    "Bar Mark",
    "Required Qty",
    "Diameter (Req)",
    "Tally (Page 2+)",
    "Diameter (Extracted)",
    "Difference",
    "Diameter Match?",
    "Ignore",
]


@dataclass(frozen=True)
class RowFlags:
    """Which cells of a row should be highlighted."""
    quantity: bool
    diameter: bool

    @property
    def any(self) -> bool:
        return self.quantity or self.diameter


def mismatched_marks(rows: Iterable[ComparisonRow], overrides: Optional[OverrideStore]) -> List[str]:
    """
    Marks whose quantity or diameter disagrees and that are not ignored.

    Row order is preserved.
    """
    result = []
    for row in rows:
        if overrides is not None and overrides.is_ignored(row.mark):
            continue
        if row.diff != 0 or not row.diameter_match:
            result.append(row.mark)
    return result


def format_mismatch_report(marks: Iterable[str]) -> str:
    """Newline-separated marks, or "None" when there are none."""
    text = "\n".join(marks)
    return text or NO_MISMATCHES


def mismatch_report(rows: Iterable[ComparisonRow], overrides: Optional[OverrideStore]) -> str:
    return format_mismatch_report(mismatched_marks(rows, overrides))


class ResultSet:
    """
    Comparison rows bound to the session's override store.

    Ignore flags are read from the store on every call, so toggling a mark
    is reflected without re-running the comparison.
    """

    def __init__(self, rows: Iterable[ComparisonRow], overrides: Optional[OverrideStore] = None):
        self.overrides = overrides if overrides is not None else OverrideStore()
        self._rows = sorted(rows, key=lambda row: row.mark)

    @property
    def rows(self) -> List[ComparisonRow]:
        """Rows with the ignored field reflecting the current store."""
        return [
            row if row.ignored == self.overrides.is_ignored(row.mark)
            else replace(row, ignored=self.overrides.is_ignored(row.mark))
            for row in self._rows
        ]

    @property
    def marks(self) -> List[str]:
        return [row.mark for row in self._rows]

    def get(self, mark: str) -> Optional[ComparisonRow]:
        for row in self.rows:
            if row.mark == mark:
                return row
        return None

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self):
        return iter(self.rows)

    def row_flags(self, row: ComparisonRow) -> RowFlags:
        """Highlight quantity and diameter cells unless the mark is ignored."""
        if self.overrides.is_ignored(row.mark):
            return RowFlags(quantity=False, diameter=False)
        return RowFlags(quantity=row.diff != 0, diameter=not row.diameter_match)

    def mismatched_marks(self) -> List[str]:
        return mismatched_marks(self._rows, self.overrides)

    def mismatch_report(self) -> str:
        return format_mismatch_report(self.mismatched_marks())

    def summary(self) -> Dict[str, int]:
        """Counts for the CLI footer."""
        rows = self.rows
        return {
            "total_marks": len(rows),
            "quantity_mismatches": sum(1 for row in rows if row.diff != 0),
            "diameter_mismatches": sum(1 for row in rows if not row.diameter_match),
            "missing_from_tally": sum(1 for row in rows if not row.found),
            "ignored": sum(1 for row in rows if row.ignored),
            "reported": len(self.mismatched_marks()),
        }

    def format_table(self) -> str:
        """
        Render rows as a plain-text table.

        Highlighted cells are suffixed with "*".
        """
        if not self._rows:
            return "No comparison results."

        table = [TABLE_COLUMNS]
        for row in self.rows:
            flags = self.row_flags(row)
            qty_mark = "*" if flags.quantity else ""
            dia_mark = "*" if flags.diameter else ""
            table.append([
                row.mark,
                f"{row.required} (x2)" if row.section_view else str(row.required),
                row.required_diameter,
                f"{row.tally}{qty_mark}",
                f"{row.extracted_diameter}{dia_mark}",
                f"{row.diff}{qty_mark}",
                f"{'Yes' if row.diameter_match else 'No'}{dia_mark}",
                "x" if row.ignored else "",
            ])

        widths = [max(len(line[i]) for line in table) for i in range(len(TABLE_COLUMNS))]
        lines = []
        for i, line in enumerate(table):
            lines.append("  ".join(cell.ljust(widths[j]) for j, cell in enumerate(line)).rstrip())
            if i == 0:
                lines.append("  ".join("-" * w for w in widths))
        return "\n".join(lines)
