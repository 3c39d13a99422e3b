"""
Bar Schedule Reconciler
Joins required records against tally groups and derives comparison rows.

Section-and-layout drawings show each bar twice (once in section, once in
layout), so the tally over-counts by a factor of two. Two adjustment policies
exist; a run uses exactly one:

    HALVE_TALLY      the global flag halves every tally total (round half up)
    DOUBLE_REQUIRED  a per-mark section view flag doubles the required qty,
                     seeded from the global flag the first time a mark is seen

HALVE_TALLY is the supported policy and the default. DOUBLE_REQUIRED is a
secondary opt-in kept for the earlier per-mark behaviour; it is never active
unless selected explicitly.
"""

import logging
from dataclasses import dataclass, asdict, replace
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Dict, Iterable, List, Optional

from .bar_extractor import RequiredRecord, NOT_FOUND
from .override_store import OverrideStore
from .tally_aggregator import TallyGroup

logger = logging.getLogger(__name__)


class AdjustmentPolicy(Enum):
    """How the section-and-layout flag adjusts a comparison."""
    HALVE_TALLY = "halve_tally"
    DOUBLE_REQUIRED = "double_required"

    @classmethod
    def from_value(cls, value) -> "AdjustmentPolicy":
        """Accept an enum member or its string value (case-insensitive)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown adjustment policy '{value}' (expected one of: {valid})")


DEFAULT_POLICY = AdjustmentPolicy.HALVE_TALLY


@dataclass(frozen=True)
class ComparisonRow:
    """One bar mark from the required list compared against the tally."""
    mark: str
    required: int
    required_diameter: str
    effective_required: int
    tally: int
    extracted_diameter: str
    diff: int
    diameter_match: bool
    ignored: bool = False
    section_view: bool = False

    @property
    def found(self) -> bool:
        """True if the mark appeared anywhere in the tally."""
        return self.extracted_diameter != NOT_FOUND

    @property
    def is_mismatch(self) -> bool:
        """Quantity or diameter disagrees, regardless of ignore flag."""
        return self.diff != 0 or not self.diameter_match

    def to_dict(self) -> Dict:
        return asdict(self)


def halve_tally(total: int) -> int:
    """Halve a tally total, rounding .5 up (29 -> 15)."""
    return int((Decimal(total) / 2).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def merge_required(required: Iterable[RequiredRecord]) -> Dict[str, RequiredRecord]:
    """
    Collapse required records to one per mark.

    A mark listed more than once has its quantities summed. The first
    diameter is kept; a disagreeing later diameter is logged.
    """
    merged: Dict[str, RequiredRecord] = {}
    for record in required:
        existing = merged.get(record.mark)
        if existing is None:
            merged[record.mark] = record
            continue

        logger.warning(
            f"Bar mark {record.mark} listed more than once in required schedule, "
            f"summing {existing.required} + {record.required}"
        )
        if record.diameter != existing.diameter:
            logger.warning(
                f"Bar mark {record.mark}: required diameter {record.diameter} conflicts "
                f"with first listed {existing.diameter}, keeping {existing.diameter}"
            )
        merged[record.mark] = replace(existing, required=existing.required + record.required)
    return merged


def reconcile(
    required: Iterable[RequiredRecord],
    grouped: Dict[str, TallyGroup],
    overrides: Optional[OverrideStore] = None,
    section_and_layout: bool = False,
    policy: AdjustmentPolicy = DEFAULT_POLICY
) -> List[ComparisonRow]:
    """
    Build comparison rows for every distinct mark in the required list.

    Args:
        required: Required records in extraction order
        grouped: Tally groups from aggregate()
        overrides: Session override store (a fresh one if None)
        section_and_layout: Global section-and-layout flag
        policy: Which adjustment the flag drives

    Returns:
        Rows sorted by mark (ordinal string order, so "A10" < "A9")

    Raises:
        ValueError: If policy is not an AdjustmentPolicy or one of its
            values. This is a caller error; config and session validate the
            policy before a run, and record data never raises.
    """
    if overrides is None:
        overrides = OverrideStore()
    policy = AdjustmentPolicy.from_value(policy)

    merged = merge_required(required)

    if policy is AdjustmentPolicy.DOUBLE_REQUIRED:
        overrides.ensure_defaults(merged.keys(), section_and_layout)

    rows = []
    for mark, record in merged.items():
        group = grouped.get(mark)

        if group is None:
            tally = 0
            extracted_diameter = NOT_FOUND
            diameter_match = False
        else:
            tally = group.total
            if policy is AdjustmentPolicy.HALVE_TALLY and section_and_layout:
                tally = halve_tally(tally)
            extracted_diameter = group.diameter
            diameter_match = group.diameter == record.diameter

        section_view = (
            policy is AdjustmentPolicy.DOUBLE_REQUIRED
            and overrides.section_view(mark, section_and_layout)
        )
        effective_required = record.required * 2 if section_view else record.required

        rows.append(ComparisonRow(
            mark=mark,
            required=record.required,
            required_diameter=record.diameter,
            effective_required=effective_required,
            tally=tally,
            extracted_diameter=extracted_diameter,
            diff=tally - effective_required,
            diameter_match=diameter_match,
            ignored=overrides.is_ignored(mark),
            section_view=section_view
        ))

    rows.sort(key=lambda row: row.mark)

    unmatched = sum(1 for row in rows if not row.found)
    logger.info(
        f"Reconciled {len(rows)} bar marks ({unmatched} missing from tally, "
        f"policy={policy.value}, section_and_layout={section_and_layout})"
    )
    return rows
