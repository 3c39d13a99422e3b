"""
Tally Aggregator
Groups tally records by bar mark and sums their counts.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Tuple

from .bar_extractor import TallyRecord

logger = logging.getLogger(__name__)


@dataclass
class TallyGroup:
    """
    Running total for one bar mark.

    The diameter is taken from the first record seen for the mark. Later
    records with a different diameter do not change it; they are listed in
    conflicting_diameters instead.
    """
    mark: str
    total: int
    diameter: str
    conflicting_diameters: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def has_conflict(self) -> bool:
        return bool(self.conflicting_diameters)


def aggregate(records: Iterable[TallyRecord]) -> Dict[str, TallyGroup]:
    """
    Group tally records by mark in a single pass.

    Args:
        records: Tally records in extraction order

    Returns:
        Dict of mark -> TallyGroup, in first-seen mark order
    """
    grouped: Dict[str, TallyGroup] = {}

    for record in records:
        group = grouped.get(record.mark)
        if group is None:
            grouped[record.mark] = TallyGroup(
                mark=record.mark,
                total=record.count,
                diameter=record.diameter
            )
            continue

        group.total += record.count
        if record.diameter != group.diameter:
            group.conflicting_diameters = group.conflicting_diameters + (record.diameter,)
            logger.warning(
                f"Bar mark {record.mark}: diameter {record.diameter} conflicts with "
                f"first seen {group.diameter}, keeping {group.diameter}"
            )

    logger.debug(f"Aggregated tally into {len(grouped)} bar marks")
    return grouped
