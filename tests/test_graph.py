"""Tests for diagram graph preparation."""

from pathlib import Path

from schemaviz.graph import assign_levels, build_graph, focus_model, search_tables
from schemaviz.schemas import Column, Relationship, SchemaModel, Table, parse_schema_file


SCHEMAS_DIR = Path(__file__).parent.parent / "examples" / "schemas"


def _model(*edges: tuple[str, str], tables: list[str] | None = None) -> SchemaModel:
    ids = tables if tables is not None else sorted({t for e in edges for t in e})
    return SchemaModel(
        tables=[Table(id=i) for i in ids],
        relationships=[Relationship(source=s, target=t) for s, t in edges],
    )


class TestBuildGraph:
    """Tests for build_graph."""

    def test_nodes_follow_tables(self):
        """Test one node per table in model order."""
        graph = build_graph(_model(tables=["b", "a"]))
        assert [n.id for n in graph.nodes] == ["b", "a"]
        assert graph.nodes[0].type == "table"
        assert graph.get_node("a").data == Table(id="a")

    def test_dangling_links_dropped(self):
        """Test links to tables outside the model are not drawn."""
        model = _model(("posts", "users"), ("posts", "ghosts"), tables=["posts", "users"])
        graph = build_graph(model)
        assert [(l.source, l.target) for l in graph.links] == [("posts", "users")]

    def test_django_fixture(self):
        """Test the settings model reference is dropped from the Django example."""
        model = parse_schema_file(SCHEMAS_DIR / "blog_models.py")
        graph = build_graph(model)
        assert len(model.relationships) == 4
        assert len(graph.links) == 3

    def test_to_dict(self):
        """Test serialization of nodes and links."""
        data = build_graph(_model(("a", "b"))).to_dict()
        assert data["links"] == [{"source": "a", "target": "b", "column": None}]
        assert data["nodes"][0]["data"] == {"id": "a", "columns": []}


class TestAssignLevels:
    """Tests for tree levels."""

    def test_chain(self):
        """Test every source sits one level above its target."""
        graph = assign_levels(build_graph(_model(("comments", "posts"), ("posts", "users"))))
        levels = {n.id: n.level for n in graph.nodes}
        assert levels == {"users": 0, "posts": 1, "comments": 2}

    def test_unlinked_nodes_stay_at_zero(self):
        """Test isolated tables keep level zero."""
        graph = assign_levels(build_graph(_model(tables=["a", "b"])))
        assert [n.level for n in graph.nodes] == [0, 0]

    def test_cycle_terminates(self):
        """Test a cycle does not loop forever."""
        graph = assign_levels(build_graph(_model(("a", "b"), ("b", "a"))))
        assert all(n.level <= len(graph.nodes) * 2 for n in graph.nodes)


class TestFocusModel:
    """Tests for focusing on one table."""

    def test_direct_neighbours_only(self):
        """Test the focus keeps the table and its direct neighbours."""
        model = _model(("comments", "posts"), ("posts", "users"), ("likes", "comments"))
        focused = focus_model(model, "posts")
        assert sorted(focused.table_ids()) == ["comments", "posts", "users"]
        assert [r.key for r in focused.relationships] == [
            ("comments", "posts", None),
            ("posts", "users", None),
        ]

    def test_isolated_table(self):
        """Test a table without relationships focuses to itself."""
        focused = focus_model(_model(("a", "b"), tables=["a", "b", "c"]), "c")
        assert focused.table_ids() == ["c"]
        assert focused.relationships == []


class TestSearchTables:
    """Tests for table search."""

    def _model(self) -> SchemaModel:
        return SchemaModel(tables=[
            Table(id="users", columns=[Column(name="email", type="string")]),
            Table(id="posts", columns=[Column(name="title", type="string")]),
        ])

    def test_matches_table_id(self):
        """Test case-insensitive matching on the table id."""
        assert [t.id for t in search_tables(self._model(), "USER")] == ["users"]

    def test_matches_column_name(self):
        """Test matching on a column name."""
        assert [t.id for t in search_tables(self._model(), "titl")] == ["posts"]

    def test_empty_term_matches_all(self):
        """Test an empty term returns every table."""
        assert len(search_tables(self._model(), "")) == 2

    def test_no_match(self):
        """Test an unknown term returns nothing."""
        assert search_tables(self._model(), "zzz") == []
