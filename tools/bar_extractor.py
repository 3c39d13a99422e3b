"""
Bar Schedule Record Extractor
Pulls required-list and tally-list bar records out of loosely formatted text.

Two grammars are recognised:

    Required list (Page 1):  "60 Y12 3550 60 CL1"
        quantity, diameter, length (ignored), quantity (ignored), bar mark

    Tally list (Page 2+):    "16Y12-A1-200" or "15 R10 - CL1 - 600"
        count, diameter, "-", bar mark, optional "-spacing" (ignored)

Anything that does not match is skipped. Extraction never raises.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)


# Digits and word boundaries are ASCII-only ("٦" is not a digit, "Ø16Y12" has a
# boundary before 16). Whitespace stays Unicode so PDF no-break spaces match.
DIGITS = r'[0-9]+'
WORD_START = r'(?<![A-Za-z0-9_])'
WORD_END = r'(?![A-Za-z0-9_])'

# Diameter: one uppercase letter + digits (Y12, R10, T16)
DIAMETER_TOKEN = rf'[A-Z]{DIGITS}'

# Bar mark: one to three uppercase letters + digits (A1, CL1, LS12)
MARK_TOKEN = rf'[A-Z]{{1,3}}{DIGITS}'

REQUIRED_PATTERN = re.compile(
    rf'{WORD_START}({DIGITS})\s+({DIAMETER_TOKEN})\s+{DIGITS}\s+{DIGITS}\s+({MARK_TOKEN}){WORD_END}'
)

# Whitespace is tolerated around the diameter and the first dash. The
# trailing "-spacing" suffix only matches when written without spaces.
TALLY_PATTERN = re.compile(
    rf'{WORD_START}({DIGITS})\s*({DIAMETER_TOKEN})\s*-\s*({MARK_TOKEN})(?:-{DIGITS})?{WORD_END}'
)

NOT_FOUND = "N/A"


@dataclass(frozen=True)
class RequiredRecord:
    """One line of the required bar schedule."""
    required: int
    diameter: str
    mark: str


@dataclass(frozen=True)
class TallyRecord:
    """One bar callout from the tally pages."""
    count: int
    diameter: str
    mark: str


def extract_required(text: Optional[str]) -> List[RequiredRecord]:
    """
    Extract required-list records from Page 1 text.

    Args:
        text: Raw text of the required-list document (may be empty)

    Returns:
        Records in order of occurrence
    """
    if not text:
        return []

    records = []
    for match in REQUIRED_PATTERN.finditer(text):
        records.append(RequiredRecord(
            required=int(match.group(1)),
            diameter=match.group(2),
            mark=match.group(3)
        ))

    logger.debug(f"Extracted {len(records)} required records from {len(text)} chars")
    return records


def extract_tally(text: Optional[str]) -> List[TallyRecord]:
    """
    Extract tally-list records from Page 2+ text.

    Args:
        text: Raw text of the tally document (may be empty)

    Returns:
        Records in order of occurrence
    """
    if not text:
        return []

    records = []
    for match in TALLY_PATTERN.finditer(text):
        records.append(TallyRecord(
            count=int(match.group(1)),
            diameter=match.group(2),
            mark=match.group(3)
        ))

    logger.debug(f"Extracted {len(records)} tally records from {len(text)} chars")
    return records


def extract_records(
    required_text: Optional[str],
    tally_text: Optional[str]
) -> Tuple[List[RequiredRecord], List[TallyRecord]]:
    """Extract both sides of a comparison in one call."""
    return extract_required(required_text), extract_tally(tally_text)
