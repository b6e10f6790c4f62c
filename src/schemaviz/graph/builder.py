"""Graph preparation for renderers.

The parser keeps dangling relationships; this is the boundary where they
are dropped, because a renderer can only draw edges between drawn nodes.
"""

from typing import Any

from pydantic import BaseModel, Field

from schemaviz.schemas.base import Relationship, SchemaModel, Table


class GraphNode(BaseModel):
    """A table as a diagram node."""

    id: str = Field(..., description="Table id")
    type: str = Field(default="table", description="Node kind")
    data: Table = Field(..., description="The table")
    level: int = Field(default=0, description="Hierarchy level for tree layouts")


class GraphLink(BaseModel):
    """A relationship as a directed diagram edge."""

    source: str = Field(..., description="Source node id")
    target: str = Field(..., description="Target node id")
    column: str | None = Field(default=None, description="Referencing column")


class GraphData(BaseModel):
    """Nodes and links ready to be drawn."""

    nodes: list[GraphNode] = Field(default_factory=list)
    links: list[GraphLink] = Field(default_factory=list)

    def get_node(self, node_id: str) -> GraphNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()


def build_graph(model: SchemaModel) -> GraphData:
    """Convert a SchemaModel to nodes and links.

    Links whose source or target is not a node are filtered out.

    Args:
        model: Parsed schema

    Returns:
        GraphData with one node per table
    """
    nodes = [GraphNode(id=t.id, data=t) for t in model.tables]
    node_ids = {n.id for n in nodes}
    links = [
        GraphLink(source=r.source, target=r.target, column=r.column)
        for r in model.relationships
        if r.source in node_ids and r.target in node_ids
    ]
    return GraphData(nodes=nodes, links=links)


def assign_levels(graph: GraphData) -> GraphData:
    """Assign hierarchy levels so every source sits above its target.

    Levels are relaxed for at most ``len(nodes)`` rounds, which bounds the
    work on cyclic graphs.

    Args:
        graph: Graph to update in place

    Returns:
        The same graph, for chaining
    """
    by_id = {}
    for node in graph.nodes:
        node.level = 0
        by_id[node.id] = node

    for _ in range(len(graph.nodes)):
        changed = False
        for link in graph.links:
            source = by_id.get(link.source)
            target = by_id.get(link.target)
            if source and target and source.level <= target.level:
                source.level = target.level + 1
                changed = True
        if not changed:
            break

    return graph


def focus_model(model: SchemaModel, table_id: str) -> SchemaModel:
    """Reduce a model to one table and its direct neighbours.

    Args:
        model: Parsed schema
        table_id: Table to focus on

    Returns:
        A SchemaModel with the connected tables and relationships only
    """
    connected = {table_id}
    relationships: list[Relationship] = []

    for relationship in model.relationships:
        if table_id in (relationship.source, relationship.target):
            connected.add(relationship.source)
            connected.add(relationship.target)
            relationships.append(relationship)

    return SchemaModel(
        tables=[t for t in model.tables if t.id in connected],
        relationships=relationships,
        raw_content=model.raw_content,
    )


def search_tables(model: SchemaModel, term: str) -> list[Table]:
    """Find tables whose id or any column name contains ``term``.

    Matching is case-insensitive; an empty term matches every table.
    """
    term = term.lower()
    if not term:
        return list(model.tables)

    return [
        t for t in model.tables
        if term in t.id.lower() or any(term in c.name.lower() for c in t.columns)
    ]
