"""
Input Router
Decides whether a run needs PDF extraction or already has its text.
"""

import logging
from typing import Literal

from ..state import ComparisonState

logger = logging.getLogger(__name__)


def route_input(state: ComparisonState) -> Literal["extract", "parse"]:
    """
    Route at the start of a run.

    Decision logic:
    - If both sides already carry text: go straight to parsing
    - Otherwise: extract the missing side(s) from PDF first

    Args:
        state: Current workflow state

    Returns:
        Next node: "extract" or "parse"
    """
    if state.get("required_text") is not None and state.get("tally_text") is not None:
        logger.debug("Text supplied for both documents, routing to parse")
        return "parse"

    logger.debug("Document text missing, routing to extract")
    return "extract"
