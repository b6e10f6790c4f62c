"""Tests for the SchemaViz CLI.

Tests cover:
- Parsing schema files to tables or JSON
- Dialect detection
- Graph export with focus and search
- Analysis with a mocked service
- Error cases
"""

import json
import tempfile
from pathlib import Path

import httpx
import pytest
from click.testing import CliRunner

from schemaviz.analysis import SchemaAnalyzer
from schemaviz.cli.main import cli
from schemaviz.constants import EXAMPLE_SCHEMA


# Test data paths
SCHEMAS_DIR = Path(__file__).parent.parent / "examples" / "schemas"
RAILS_FILE = SCHEMAS_DIR / "schema.rb"
SQL_FILE = SCHEMAS_DIR / "schema.sql"
PRISMA_FILE = SCHEMAS_DIR / "schema.prisma"
DJANGO_FILE = SCHEMAS_DIR / "blog_models.py"
CONFIG_FILE = SCHEMAS_DIR / "analysis.yaml"


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_output_dir():
    """Create temporary output directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def no_api_key(monkeypatch):
    """Remove every API key variable from the environment."""
    for name in ("SCHEMAVIZ_API_KEY", "GEMINI_API_KEY", "API_KEY"):
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# Parse Tests
# =============================================================================

class TestParse:
    """Tests for the parse command."""

    def test_parse_rails(self, runner):
        """Test the summary output for a Rails schema."""
        result = runner.invoke(cli, ["parse", str(RAILS_FILE)])

        assert result.exit_code == 0
        assert "rails" in result.output
        assert "authors" in result.output
        assert "reviewer_id" in result.output

    def test_parse_json(self, runner):
        """Test JSON output uses the serialized model shape."""
        result = runner.invoke(cli, ["parse", str(SQL_FILE), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [t["id"] for t in data["tables"]] == ["users", "posts", "comments", "tags"]
        assert len(data["relationships"]) == 3
        assert "rawContent" in data

    def test_parse_explicit_dialect(self, runner, temp_output_dir):
        """Test --dialect overrides detection."""
        path = temp_output_dir / "schema.txt"
        path.write_text("model User {\n  id Int @id\n}\n")

        result = runner.invoke(cli, ["parse", str(path), "--dialect", "prisma", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output)["tables"][0]["id"] == "User"

    def test_parse_to_file(self, runner, temp_output_dir):
        """Test writing the model to a file."""
        output = temp_output_dir / "out" / "model.json"

        result = runner.invoke(cli, ["parse", str(PRISMA_FILE), "-o", str(output)])

        assert result.exit_code == 0
        assert output.exists()
        data = json.loads(output.read_text())
        assert len(data["tables"]) == 4

    def test_parse_verbose_lists_columns(self, runner):
        """Test verbose output lists each column."""
        result = runner.invoke(cli, ["--verbose", "parse", str(DJANGO_FILE)])

        assert result.exit_code == 0
        assert "models.SlugField" in result.output

    def test_parse_missing_file(self, runner):
        """Test a missing file is rejected."""
        result = runner.invoke(cli, ["parse", "/nonexistent/schema.rb"])
        assert result.exit_code != 0

    def test_parse_invalid_dialect(self, runner):
        """Test an unknown dialect is rejected."""
        result = runner.invoke(cli, ["parse", str(RAILS_FILE), "--dialect", "graphql"])
        assert result.exit_code != 0


class TestDetect:
    """Tests for the detect command."""

    @pytest.mark.parametrize("path,dialect", [
        (RAILS_FILE, "rails"),
        (SQL_FILE, "sql"),
        (PRISMA_FILE, "prisma"),
        (DJANGO_FILE, "django"),
    ])
    def test_detect(self, runner, path, dialect):
        """Test the detected dialect is printed."""
        result = runner.invoke(cli, ["detect", str(path)])

        assert result.exit_code == 0
        assert result.output.strip() == dialect

    def test_detect_unreadable_file(self, runner, monkeypatch):
        """Test a file that cannot be decoded fails with a message."""
        def unreadable(path):
            raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")

        monkeypatch.setattr("schemaviz.cli.main.detect_dialect_from_path", unreadable)

        result = runner.invoke(cli, ["detect", str(SQL_FILE)])

        assert result.exit_code == 1
        assert "Error reading schema" in result.output


# =============================================================================
# Graph Tests
# =============================================================================

class TestGraph:
    """Tests for the graph command."""

    def test_graph_output(self, runner):
        """Test nodes, links and levels in the graph JSON."""
        result = runner.invoke(cli, ["graph", str(SQL_FILE)])

        assert result.exit_code == 0
        data = json.loads(result.output)
        levels = {n["id"]: n["level"] for n in data["nodes"]}
        assert levels["users"] == 0
        assert levels["posts"] == 1
        assert levels["comments"] == 2
        assert len(data["links"]) == 3

    def test_graph_drops_dangling_links(self, runner):
        """Test links to unknown models are dropped."""
        result = runner.invoke(cli, ["graph", str(DJANGO_FILE)])

        assert result.exit_code == 0
        targets = {link["target"] for link in json.loads(result.output)["links"]}
        assert "AUTH_USER_MODEL" not in targets

    def test_graph_focus(self, runner):
        """Test --focus keeps the table and its neighbours."""
        result = runner.invoke(cli, ["graph", str(RAILS_FILE), "--focus", "books"])

        assert result.exit_code == 0
        ids = sorted(n["id"] for n in json.loads(result.output)["nodes"])
        assert ids == ["authors", "books", "reviews"]

    def test_graph_focus_unknown_table(self, runner):
        """Test focusing on an unknown table fails."""
        result = runner.invoke(cli, ["graph", str(RAILS_FILE), "--focus", "nope"])

        assert result.exit_code == 1
        assert "Table 'nope' not found" in result.output

    def test_graph_search(self, runner):
        """Test --search filters nodes and their links."""
        result = runner.invoke(cli, ["graph", str(SQL_FILE), "--search", "body"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [n["id"] for n in data["nodes"]] == ["comments"]
        assert data["links"] == []

    def test_graph_to_file(self, runner, temp_output_dir):
        """Test writing the graph to a file."""
        output = temp_output_dir / "graph.json"

        result = runner.invoke(cli, ["graph", str(PRISMA_FILE), "-o", str(output)])

        assert result.exit_code == 0
        data = json.loads(output.read_text())
        assert len(data["nodes"]) == 4
        assert len(data["links"]) == 2


# =============================================================================
# Analyze Tests
# =============================================================================

class TestAnalyze:
    """Tests for the analyze command."""

    def test_missing_api_key(self, runner, no_api_key):
        """Test analysis without credentials fails with a retry hint."""
        result = runner.invoke(cli, ["analyze", str(RAILS_FILE)])

        assert result.exit_code == 1
        assert "API key is missing" in result.output
        assert "You can retry" in result.output

    def test_success(self, runner, monkeypatch):
        """Test a mocked successful analysis prints the report as JSON."""
        report = {"summary": "Books and reviews.", "potentialIssues": [], "suggestions": ["Index"]}
        envelope = {"candidates": [{"content": {"parts": [{"text": json.dumps(report)}]}}]}
        client = httpx.Client(transport=httpx.MockTransport(
            lambda request: httpx.Response(200, json=envelope)
        ))

        monkeypatch.setenv("SCHEMAVIZ_API_KEY", "test-key")
        monkeypatch.setattr(
            "schemaviz.cli.main.SchemaAnalyzer",
            lambda config: SchemaAnalyzer(config, client=client),
        )

        result = runner.invoke(cli, ["analyze", str(RAILS_FILE), "-c", str(CONFIG_FILE), "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output) == report

    def test_service_error(self, runner, monkeypatch):
        """Test a failing service exits with an error."""
        client = httpx.Client(transport=httpx.MockTransport(
            lambda request: httpx.Response(500)
        ))

        monkeypatch.setenv("SCHEMAVIZ_API_KEY", "test-key")
        monkeypatch.setattr(
            "schemaviz.cli.main.SchemaAnalyzer",
            lambda config: SchemaAnalyzer(config, client=client),
        )

        result = runner.invoke(cli, ["analyze", str(SQL_FILE)])

        assert result.exit_code == 1
        assert "Analysis failed" in result.output


# =============================================================================
# Example Tests
# =============================================================================

class TestExample:
    """Tests for the example command."""

    def test_example_stdout(self, runner):
        """Test the bundled example is printed."""
        result = runner.invoke(cli, ["example"])

        assert result.exit_code == 0
        assert 'create_table "comments"' in result.output

    def test_example_to_file_parses(self, runner, temp_output_dir):
        """Test the written example parses back to three tables."""
        output = temp_output_dir / "schema.rb"

        result = runner.invoke(cli, ["example", "-o", str(output)])
        assert result.exit_code == 0
        assert output.read_text() == EXAMPLE_SCHEMA

        result = runner.invoke(cli, ["parse", str(output), "--json"])
        assert len(json.loads(result.output)["tables"]) == 3
