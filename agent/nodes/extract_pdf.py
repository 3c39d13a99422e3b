"""
Node 1: PDF Text Extraction
Extracts text from the required-list and tally PDFs using PyMuPDF.
"""

import logging
from typing import Dict, Any

from ..state import ComparisonState

logger = logging.getLogger(__name__)


SIDES = (
    ("required", "required_pdf", "required_text"),
    ("tally", "tally_pdf", "tally_text"),
)


def extract_pdf_node(state: ComparisonState) -> Dict[str, Any]:
    """
    Extract text from whichever PDFs have no text yet.

    An unreadable document degrades to empty text; the error is recorded in
    state["errors"] and the comparison continues.

    Args:
        state: Current workflow state

    Returns:
        State updates with required_text, tally_text, page_counts, errors
    """
    from tools.pdf_text import read_document

    updates: Dict[str, Any] = {}
    errors = list(state.get("errors") or [])
    page_counts = dict(state.get("page_counts") or {})

    for side, pdf_key, text_key in SIDES:
        if state.get(text_key) is not None:
            continue

        pdf_path = state.get(pdf_key)
        if not pdf_path:
            logger.warning(f"No {side} document supplied, using empty text")
            errors.append(f"No {side} document supplied")
            updates[text_key] = ""
            continue

        logger.info(f"Extracting {side} text from: {pdf_path}")
        doc = read_document(pdf_path)

        if doc.errors:
            errors.extend(f"{side}: {err}" for err in doc.errors)
        elif not doc.full_text.strip():
            logger.warning(f"No text layer found in {doc.filename}")
            errors.append(f"{side}: no text extracted from {doc.filename}")

        updates[text_key] = doc.full_text
        page_counts[side] = doc.page_count

    updates["errors"] = errors
    updates["page_counts"] = page_counts
    return updates
