"""
Node 4: Reconciliation
Compares required quantities and diameters against the tally groups.
"""

import logging
from typing import Dict, Any, Optional

from langchain_core.runnables import RunnableConfig

from ..state import ComparisonState

logger = logging.getLogger(__name__)


OVERRIDE_STORE_KEY = "override_store"


def get_override_store(config: Optional[RunnableConfig]):
    """
    Fetch the session's OverrideStore from the run config.

    A run without one gets a fresh store, so overrides do not carry over.
    """
    from tools.override_store import OverrideStore

    store = ((config or {}).get("configurable") or {}).get(OVERRIDE_STORE_KEY)
    if store is None:
        logger.debug("No override store in run config, using an empty one")
        store = OverrideStore()
    return store


def reconcile_marks_node(state: ComparisonState, config: RunnableConfig) -> Dict[str, Any]:
    """
    Build comparison rows for every required bar mark.

    Args:
        state: Current workflow state
        config: Run config carrying the override store

    Returns:
        State updates with rows, or last_error
    """
    from tools.bar_extractor import RequiredRecord
    from tools.reconciler import reconcile
    from tools.tally_aggregator import TallyGroup

    try:
        required = [RequiredRecord(**r) for r in state.get("required_records") or []]
        grouped = {
            mark: TallyGroup(**group)
            for mark, group in (state.get("tally_groups") or {}).items()
        }

        rows = reconcile(
            required,
            grouped,
            overrides=get_override_store(config),
            section_and_layout=state.get("section_and_layout", False),
            policy=state.get("adjustment_policy")
        )

        return {
            "rows": [row.to_dict() for row in rows],
            "last_error": None
        }

    except Exception as e:
        logger.error(f"Reconciliation failed: {e}")
        return {
            "rows": [],
            "last_error": f"Reconciliation failed: {str(e)}"
        }
