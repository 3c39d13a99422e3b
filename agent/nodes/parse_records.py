"""
Node 2: Record Parsing
Extracts required-list and tally records from the document text.
"""

import logging
from dataclasses import asdict
from typing import Dict, Any

from ..state import ComparisonState

logger = logging.getLogger(__name__)


def parse_records_node(state: ComparisonState) -> Dict[str, Any]:
    """
    Parse bar records from both texts.

    Missing text is treated as empty, which yields no records.

    Args:
        state: Current workflow state

    Returns:
        State updates with required_records and tally_records
    """
    from tools.bar_extractor import extract_required, extract_tally

    required_text = state.get("required_text") or ""
    tally_text = state.get("tally_text") or ""

    required = extract_required(required_text)
    tally = extract_tally(tally_text)

    if required_text and not required:
        logger.warning("No required-list records found in Page 1 text")
    if tally_text and not tally:
        logger.warning("No tally records found in Page 2+ text")

    logger.info(f"Parsed {len(required)} required records and {len(tally)} tally records")

    return {
        "required_records": [asdict(r) for r in required],
        "tally_records": [asdict(t) for t in tally],
        "last_error": None
    }
