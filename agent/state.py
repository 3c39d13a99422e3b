"""
Workflow State Schema for the Bar Schedule Checker
Defines the state that flows through the LangGraph comparison workflow.
"""

from typing import TypedDict, List, Optional, Dict, Any
from datetime import datetime

from tools.reconciler import AdjustmentPolicy, DEFAULT_POLICY


class ComparisonState(TypedDict):
    """
    State schema for one comparison run.

    Records, groups and rows are stored as plain dicts so the state stays
    serializable; the tools layer works with the dataclasses.
    """

    # ========================
    # Input Configuration
    # ========================
    required_pdf: Optional[str]        # Page 1 PDF (required list)
    tally_pdf: Optional[str]           # Page 2+ PDF (tally list)
    required_text: Optional[str]       # Pre-extracted Page 1 text
    tally_text: Optional[str]          # Pre-extracted Page 2+ text
    section_and_layout: bool           # Global section-and-layout flag
    adjustment_policy: str             # AdjustmentPolicy value

    # ========================
    # Extraction
    # ========================
    page_counts: Dict[str, int]        # "required"/"tally" -> pages read

    # ========================
    # Parsed Data
    # ========================
    required_records: Optional[List[Dict]]
    tally_records: Optional[List[Dict]]
    tally_groups: Optional[Dict[str, Dict]]

    # ========================
    # Results
    # ========================
    rows: Optional[List[Dict]]         # ComparisonRow dicts, sorted by mark
    mismatched_marks: Optional[List[str]]
    mismatch_report: Optional[str]     # Newline-joined marks or "None"

    # ========================
    # Error Handling
    # ========================
    errors: List[str]                  # Non-fatal problems (unreadable PDF, etc.)
    last_error: Optional[str]          # Most recent node failure

    # ========================
    # Timing
    # ========================
    start_time: Optional[str]
    end_time: Optional[str]


def create_initial_state(
    required_pdf: str = None,
    tally_pdf: str = None,
    required_text: str = None,
    tally_text: str = None,
    section_and_layout: bool = False,
    adjustment_policy: AdjustmentPolicy = DEFAULT_POLICY
) -> ComparisonState:
    """
    Create initial state for a comparison run.

    Text arguments take priority over PDF paths for the same side.

    Args:
        required_pdf: Path to the required-list PDF
        tally_pdf: Path to the tally PDF
        required_text: Already extracted required-list text
        tally_text: Already extracted tally text
        section_and_layout: Global section-and-layout flag
        adjustment_policy: Policy the flag drives

    Returns:
        Initialized ComparisonState
    """
    return ComparisonState(
        # Input
        required_pdf=required_pdf,
        tally_pdf=tally_pdf,
        required_text=required_text,
        tally_text=tally_text,
        section_and_layout=bool(section_and_layout),
        adjustment_policy=AdjustmentPolicy.from_value(adjustment_policy).value,

        # Extraction
        page_counts={},

        # Parsed data
        required_records=None,
        tally_records=None,
        tally_groups=None,

        # Results
        rows=None,
        mismatched_marks=None,
        mismatch_report=None,

        # Error handling
        errors=[],
        last_error=None,

        # Timing
        start_time=datetime.now().isoformat(),
        end_time=None
    )


def get_state_summary(state: ComparisonState) -> Dict[str, Any]:
    """
    Get a summary of current state for logging/debugging.
    """
    return {
        "required_records": len(state.get("required_records") or []),
        "tally_records": len(state.get("tally_records") or []),
        "tally_marks": len(state.get("tally_groups") or {}),
        "rows": len(state.get("rows") or []),
        "mismatches": len(state.get("mismatched_marks") or []),
        "errors": len(state.get("errors") or []),
        "last_error": state.get("last_error")
    }
