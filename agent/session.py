"""
Comparison Session
Holds the state a user builds up between comparisons: the two loaded
documents, the section-and-layout flag and the per-mark overrides.
"""

import logging
from typing import Optional, Dict, Any

from tools.config import ComparisonConfig
from tools.override_store import OverrideStore
from tools.pdf_text import DocumentText, read_document
from tools.reconciler import AdjustmentPolicy, ComparisonRow, DEFAULT_POLICY
from tools.result_set import ResultSet, NO_MISMATCHES

from .graph import run_comparison_workflow

logger = logging.getLogger(__name__)


class ComparisonSession:
    """
    One user's comparison session.

    Documents are re-read only when loaded; every compare() recomputes the
    rows from the current text. Overrides persist until clear_overrides().
    """

    def __init__(
        self,
        section_and_layout: bool = False,
        adjustment_policy: AdjustmentPolicy = DEFAULT_POLICY,
        overrides: Optional[OverrideStore] = None
    ):
        self.section_and_layout = bool(section_and_layout)
        self.adjustment_policy = AdjustmentPolicy.from_value(adjustment_policy)
        self.overrides = overrides if overrides is not None else OverrideStore()

        self.required_text: str = ""
        self.tally_text: str = ""
        self.required_source: Optional[str] = None
        self.tally_source: Optional[str] = None

        self.results: Optional[ResultSet] = None
        self.last_state: Optional[Dict[str, Any]] = None

    @classmethod
    def from_config(cls, config: ComparisonConfig) -> "ComparisonSession":
        """Create a session and apply configured overrides."""
        session = cls(
            section_and_layout=config.section_and_layout,
            adjustment_policy=config.adjustment_policy
        )
        for mark in config.ignore_marks:
            session.overrides.set_ignored(mark, True)
        for mark in config.section_view_marks:
            if not session.overrides.section_view(mark, session.section_and_layout):
                session.overrides.toggle_section_view(mark, session.section_and_layout)
        return session

    # ========================================
    # Document loading
    # ========================================

    def load_required_pdf(self, pdf_path: str) -> DocumentText:
        """Read the required-list PDF. An unreadable file leaves empty text."""
        doc = read_document(pdf_path)
        self.required_text = doc.full_text
        self.required_source = doc.filename
        return doc

    def load_tally_pdf(self, pdf_path: str) -> DocumentText:
        """Read the tally PDF. An unreadable file leaves empty text."""
        doc = read_document(pdf_path)
        self.tally_text = doc.full_text
        self.tally_source = doc.filename
        return doc

    def set_texts(self, required_text: Optional[str] = None, tally_text: Optional[str] = None):
        """Supply already extracted text for either side."""
        if required_text is not None:
            self.required_text = required_text
            self.required_source = "text"
        if tally_text is not None:
            self.tally_text = tally_text
            self.tally_source = "text"

    @property
    def can_compare(self) -> bool:
        """Both documents have produced some text."""
        return bool(self.required_text) and bool(self.tally_text)

    # ========================================
    # Comparison
    # ========================================

    def compare(self) -> ResultSet:
        """
        Run the comparison workflow on the current text.

        Returns:
            ResultSet bound to this session's overrides
        """
        if not self.can_compare:
            logger.warning("Comparing with an empty document; results may be empty")

        state = run_comparison_workflow(
            required_text=self.required_text,
            tally_text=self.tally_text,
            section_and_layout=self.section_and_layout,
            adjustment_policy=self.adjustment_policy,
            override_store=self.overrides
        )
        if state.get("last_error"):
            logger.error(f"Comparison finished with error: {state['last_error']}")

        rows = [ComparisonRow(**row) for row in state.get("rows") or []]
        self.last_state = state
        self.results = ResultSet(rows, self.overrides)
        return self.results

    def set_section_and_layout(self, value: bool):
        """Change the global flag. Takes effect on the next compare()."""
        self.section_and_layout = bool(value)

    # ========================================
    # Overrides
    # ========================================

    def toggle_ignore(self, mark: str) -> bool:
        """Flip a mark's ignore flag. The report reflects it immediately."""
        return self.overrides.toggle_ignore(mark)

    def toggle_section_view(self, mark: str) -> bool:
        """
        Flip a mark's section view flag.

        Only the double_required policy reads this flag; under it the
        comparison is re-run so the doubled quantity shows up at once.
        """
        value = self.overrides.toggle_section_view(mark, self.section_and_layout)
        if self.adjustment_policy is not AdjustmentPolicy.DOUBLE_REQUIRED:
            logger.warning(
                f"Section view for {mark} has no effect under the "
                f"{self.adjustment_policy.value} policy"
            )
        elif self.results is not None:
            self.compare()
        return value

    def clear_overrides(self):
        self.overrides.clear()

    # ========================================
    # Reports
    # ========================================

    def mismatch_report(self) -> str:
        """Mismatch report for the latest comparison ("None" before one runs)."""
        if self.results is None:
            return NO_MISMATCHES
        return self.results.mismatch_report()
