"""Graph preparation for diagram renderers."""

from schemaviz.graph.builder import (
    GraphData,
    GraphLink,
    GraphNode,
    assign_levels,
    build_graph,
    focus_model,
    search_tables,
)

__all__ = [
    "GraphData",
    "GraphLink",
    "GraphNode",
    "assign_levels",
    "build_graph",
    "focus_model",
    "search_tables",
]
