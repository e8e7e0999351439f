"""LangGraph wiring."""
from __future__ import annotations

from collections.abc import Callable
from typing import Union

from langgraph.graph import END, START, StateGraph

from app.schemas import Tier
from orchestrator.nodes import extract_details, tier_analysis
from orchestrator.routing import route_decision
from orchestrator.state import GraphState, NodeDeps, NodeName

# source -> fixed target, or a selector returning one of BRANCH_TARGETS
TRANSITIONS: dict[str, Union[str, Callable[[GraphState], str]]] = {
    START: NodeName.EXTRACT_DETAILS.value,
    NodeName.EXTRACT_DETAILS.value: route_decision,
    NodeName.JUNIOR_ANALYSIS.value: END,
    NodeName.SENIOR_ANALYSIS.value: END,
}
BRANCH_TARGETS = [NodeName.JUNIOR_ANALYSIS.value, NodeName.SENIOR_ANALYSIS.value]


def build_handlers(deps: NodeDeps) -> dict[NodeName, Callable]:
    return {
        NodeName.EXTRACT_DETAILS: extract_details.build_node(deps),
        NodeName.JUNIOR_ANALYSIS: tier_analysis.build_node(deps, Tier.JUNIOR),
        NodeName.SENIOR_ANALYSIS: tier_analysis.build_node(deps, Tier.SENIOR),
    }


def build_graph(deps: NodeDeps):
    """Return a compiled LangGraph graph for the resume pipeline."""

    graph = StateGraph(GraphState)
    for name, handler in build_handlers(deps).items():
        graph.add_node(name.value, handler)

    for source, target in TRANSITIONS.items():
        if callable(target):
            graph.add_conditional_edges(source, target, {branch: branch for branch in BRANCH_TARGETS})
        else:
            graph.add_edge(source, target)

    return graph.compile()
