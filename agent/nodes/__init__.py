# Workflow nodes
from .extract_pdf import extract_pdf_node
from .parse_records import parse_records_node
from .aggregate_tally import aggregate_tally_node
from .reconcile_marks import reconcile_marks_node, get_override_store, OVERRIDE_STORE_KEY
from .mismatch_report import mismatch_report_node

__all__ = [
    "extract_pdf_node",
    "parse_records_node",
    "aggregate_tally_node",
    "reconcile_marks_node",
    "get_override_store",
    "OVERRIDE_STORE_KEY",
    "mismatch_report_node",
]
