"""
LangGraph Workflow Definition
Wires together nodes and edges for the bar schedule comparison.
"""

import logging
from typing import Dict, Any, Iterator, Tuple

from langgraph.graph import StateGraph, START, END

from tools.override_store import OverrideStore
from tools.reconciler import AdjustmentPolicy, DEFAULT_POLICY

from .state import ComparisonState, create_initial_state
from .nodes import (
    extract_pdf_node,
    parse_records_node,
    aggregate_tally_node,
    reconcile_marks_node,
    mismatch_report_node,
    OVERRIDE_STORE_KEY,
)
from .edges import route_input

logger = logging.getLogger(__name__)


def create_comparison_graph():
    """
    Create the LangGraph workflow for a bar schedule comparison.

    Graph structure:
    ```
       START
         │
    [route_input]
      │ extract   │ parse (text supplied)
      ▼           │
    extract_pdf   │
      │           │
      ▼           │
    parse_records ◄┘
      │
      ▼
    aggregate_tally
      │
      ▼
    reconcile_marks
      │
      ▼
    mismatch_report
      │
      ▼
     END
    ```

    No checkpointer is attached: a comparison is recomputed from scratch on
    every run and only the override store outlives it.

    Returns:
        Compiled StateGraph
    """
    workflow = StateGraph(ComparisonState)

    # ========================
    # Add Nodes
    # ========================

    # Node 1: Extract PDF text
    workflow.add_node("extract_pdf", extract_pdf_node)

    # Node 2: Parse required and tally records
    workflow.add_node("parse_records", parse_records_node)

    # Node 3: Group tally by bar mark
    workflow.add_node("aggregate_tally", aggregate_tally_node)

    # Node 4: Compare against required list
    workflow.add_node("reconcile_marks", reconcile_marks_node)

    # Node 5: Mismatch report
    workflow.add_node("mismatch_report", mismatch_report_node)

    # ========================
    # Add Edges
    # ========================

    workflow.add_conditional_edges(
        START,
        route_input,
        {
            "extract": "extract_pdf",
            "parse": "parse_records"
        }
    )

    workflow.add_edge("extract_pdf", "parse_records")
    workflow.add_edge("parse_records", "aggregate_tally")
    workflow.add_edge("aggregate_tally", "reconcile_marks")
    workflow.add_edge("reconcile_marks", "mismatch_report")
    workflow.add_edge("mismatch_report", END)

    return workflow.compile()


def _build_run(
    required_pdf: str,
    tally_pdf: str,
    required_text: str,
    tally_text: str,
    section_and_layout: bool,
    adjustment_policy: AdjustmentPolicy,
    override_store: OverrideStore
) -> Tuple[ComparisonState, Dict[str, Any]]:
    initial_state = create_initial_state(
        required_pdf=required_pdf,
        tally_pdf=tally_pdf,
        required_text=required_text,
        tally_text=tally_text,
        section_and_layout=section_and_layout,
        adjustment_policy=adjustment_policy
    )
    config = {
        "configurable": {
            OVERRIDE_STORE_KEY: override_store if override_store is not None else OverrideStore()
        }
    }
    return initial_state, config


def run_comparison_workflow(
    required_pdf: str = None,
    tally_pdf: str = None,
    required_text: str = None,
    tally_text: str = None,
    section_and_layout: bool = False,
    adjustment_policy: AdjustmentPolicy = DEFAULT_POLICY,
    override_store: OverrideStore = None
) -> Dict[str, Any]:
    """
    Run the complete comparison workflow.

    Args:
        required_pdf: Page 1 PDF path (ignored if required_text is given)
        tally_pdf: Page 2+ PDF path (ignored if tally_text is given)
        required_text: Already extracted Page 1 text
        tally_text: Already extracted Page 2+ text
        section_and_layout: Global section-and-layout flag
        adjustment_policy: Which adjustment the flag drives
        override_store: Session overrides (ignore/section view flags)

    Returns:
        Final workflow state with rows and mismatch report
    """
    graph = create_comparison_graph()
    initial_state, config = _build_run(
        required_pdf, tally_pdf, required_text, tally_text,
        section_and_layout, adjustment_policy, override_store
    )

    logger.info(f"Starting comparison workflow: {required_pdf or 'text'} vs {tally_pdf or 'text'}")

    try:
        final_state = graph.invoke(initial_state, config)
        logger.info("Workflow completed successfully")
        return final_state
    except Exception as e:
        logger.error(f"Workflow failed: {e}")
        raise


def stream_comparison_workflow(
    required_pdf: str = None,
    tally_pdf: str = None,
    required_text: str = None,
    tally_text: str = None,
    section_and_layout: bool = False,
    adjustment_policy: AdjustmentPolicy = DEFAULT_POLICY,
    override_store: OverrideStore = None
) -> Iterator[Tuple[str, Dict[str, Any]]]:
    """
    Stream the comparison workflow, yielding progress updates after each node.

    Same arguments as run_comparison_workflow.

    Yields:
        Tuple of (node_name, state_update_dict) after each node executes
    """
    graph = create_comparison_graph()
    initial_state, config = _build_run(
        required_pdf, tally_pdf, required_text, tally_text,
        section_and_layout, adjustment_policy, override_store
    )

    logger.info("Starting comparison workflow (streaming)")

    try:
        for update in graph.stream(initial_state, config, stream_mode="updates"):
            if update:
                node_name = list(update.keys())[0]
                yield (node_name, update[node_name])

        logger.info("Workflow streaming completed successfully")

    except Exception as e:
        logger.error(f"Workflow streaming failed: {e}")
        raise


def get_workflow_visualization() -> str:
    """
    Get ASCII visualization of the workflow graph.

    Returns:
        ASCII art representation of the graph
    """
    return """
    Bar Schedule Comparison Workflow
    ================================

                 ┌─────────────┐
                 │ route_input │
                 └──────┬──────┘
                        │
           ┌────────────┴────────────┐
        extract              text supplied
           │                         │
           ▼                         │
    ┌─────────────┐                  │
    │ extract_pdf │                  │
    │  (PyMuPDF)  │                  │
    └──────┬──────┘                  │
           └────────────┬────────────┘
                        ▼
               ┌────────────────┐
               │ parse_records  │  (Page 1 + Page 2+ grammars)
               └───────┬────────┘
                       ▼
               ┌────────────────┐
               │aggregate_tally │  (sum counts per bar mark)
               └───────┬────────┘
                       ▼
               ┌────────────────┐
               │reconcile_marks │  (diff, diameter match, overrides)
               └───────┬────────┘
                       ▼
               ┌────────────────┐
               │mismatch_report │
               └───────┬────────┘
                       ▼
                    ┌─────┐
                    │ END │
                    └─────┘
    """
