"""
Node 5: Mismatch Report
Lists bar marks whose quantity or diameter disagrees and are not ignored.
"""

import logging
from datetime import datetime
from typing import Dict, Any

from langchain_core.runnables import RunnableConfig

from ..state import ComparisonState
from .reconcile_marks import get_override_store

logger = logging.getLogger(__name__)


def mismatch_report_node(state: ComparisonState, config: RunnableConfig) -> Dict[str, Any]:
    """
    Generate the plain-text mismatch report.

    Args:
        state: Current workflow state
        config: Run config carrying the override store

    Returns:
        State updates with mismatched_marks, mismatch_report, end_time
    """
    from tools.reconciler import ComparisonRow
    from tools.result_set import mismatched_marks, format_mismatch_report

    rows = [ComparisonRow(**row) for row in state.get("rows") or []]
    marks = mismatched_marks(rows, get_override_store(config))

    logger.info(f"{len(marks)} of {len(rows)} bar marks mismatched")

    return {
        "mismatched_marks": marks,
        "mismatch_report": format_mismatch_report(marks),
        "end_time": datetime.now().isoformat()
    }
