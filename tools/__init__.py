# Bar schedule comparison tools
from .bar_extractor import (
    RequiredRecord,
    TallyRecord,
    extract_required,
    extract_tally,
    extract_records,
    NOT_FOUND,
)
from .tally_aggregator import TallyGroup, aggregate
from .override_store import OverrideStore
from .reconciler import (
    AdjustmentPolicy,
    ComparisonRow,
    reconcile,
    halve_tally,
    DEFAULT_POLICY,
)
from .result_set import (
    ResultSet,
    mismatched_marks,
    mismatch_report,
    format_mismatch_report,
    NO_MISMATCHES,
)

__all__ = [
    "RequiredRecord",
    "TallyRecord",
    "extract_required",
    "extract_tally",
    "extract_records",
    "NOT_FOUND",
    "TallyGroup",
    "aggregate",
    "OverrideStore",
    "AdjustmentPolicy",
    "ComparisonRow",
    "reconcile",
    "halve_tally",
    "DEFAULT_POLICY",
    "ResultSet",
    "mismatched_marks",
    "mismatch_report",
    "format_mismatch_report",
    "NO_MISMATCHES",
]
