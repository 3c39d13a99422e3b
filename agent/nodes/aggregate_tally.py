"""
Node 3: Tally Aggregation
Groups tally records by bar mark.
"""

import logging
from dataclasses import asdict
from typing import Dict, Any

from ..state import ComparisonState

logger = logging.getLogger(__name__)


def aggregate_tally_node(state: ComparisonState) -> Dict[str, Any]:
    """
    Sum tally counts per bar mark.

    Args:
        state: Current workflow state

    Returns:
        State updates with tally_groups
    """
    from tools.bar_extractor import TallyRecord
    from tools.tally_aggregator import aggregate

    records = [TallyRecord(**r) for r in state.get("tally_records") or []]
    grouped = aggregate(records)

    conflicts = [mark for mark, group in grouped.items() if group.has_conflict]
    if conflicts:
        logger.warning(f"Conflicting tally diameters for: {', '.join(conflicts)}")

    return {
        "tally_groups": {mark: asdict(group) for mark, group in grouped.items()}
    }
