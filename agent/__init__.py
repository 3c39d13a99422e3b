# Bar Schedule Checker
from .graph import (
    create_comparison_graph,
    run_comparison_workflow,
    stream_comparison_workflow,
    get_workflow_visualization,
)
from .session import ComparisonSession
from .state import ComparisonState, create_initial_state

__all__ = [
    "create_comparison_graph",
    "run_comparison_workflow",
    "stream_comparison_workflow",
    "get_workflow_visualization",
    "ComparisonSession",
    "ComparisonState",
    "create_initial_state",
]
