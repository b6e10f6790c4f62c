"""Main CLI entry point for SchemaViz.

Parses schema files, exports diagram graphs and runs schema analysis from
the command line.
"""

from pathlib import Path
import json
import sys

import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from schemaviz import __version__
from schemaviz.analysis import AnalysisSession, AnalysisStatus, SchemaAnalyzer
from schemaviz.config import load_config
from schemaviz.constants import EXAMPLE_SCHEMA
from schemaviz.graph import assign_levels, build_graph, focus_model, search_tables
from schemaviz.schemas import Dialect, SchemaModel, SchemaParser, detect_dialect_from_path
from schemaviz.utils.helpers import configure_logging

console = Console()

DIALECT_CHOICES = [d.value for d in Dialect]


@click.group()
@click.version_option(version=__version__, prog_name="schemaviz")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """SchemaViz - Visualize database schemas as relationship graphs.

    Reads Rails schema.rb, SQL DDL, Prisma schemas and Django models.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(verbose)


@cli.command()
@click.argument("schema_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--dialect", "-d", type=click.Choice(DIALECT_CHOICES), help="Dialect (auto-detected if omitted)")
@click.option("--json", "as_json", is_flag=True, help="Print the model as JSON")
@click.option("--output", "-o", type=click.Path(), help="Write JSON to a file")
@click.pass_context
def parse(
    ctx: click.Context,
    schema_file: str,
    dialect: str | None,
    as_json: bool,
    output: str | None,
) -> None:
    """Parse a schema file.

    SCHEMA_FILE is the path to a schema.rb, .sql, .prisma or models.py file.
    """
    verbose = ctx.obj.get("verbose", False)

    try:
        parser = SchemaParser.from_file(schema_file, dialect)
        model = parser.parse()

        if output:
            _write_json(model.to_dict(), output)
            console.print(f"[green]Wrote {len(model.tables)} tables to {output}[/green]")
            return

        if as_json:
            click.echo(json.dumps(model.to_dict(), indent=2))
            return

        _print_model(model, parser.dialect, verbose)

    except Exception as e:
        _fail(f"Error parsing schema: {e}", verbose)


@cli.command()
@click.argument("schema_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def detect(ctx: click.Context, schema_file: str) -> None:
    """Print the detected dialect of a schema file."""
    try:
        click.echo(detect_dialect_from_path(schema_file).value)
    except Exception as e:
        _fail(f"Error reading schema: {e}", ctx.obj.get("verbose", False))


@cli.command()
@click.argument("schema_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--dialect", "-d", type=click.Choice(DIALECT_CHOICES), help="Dialect (auto-detected if omitted)")
@click.option("--focus", "-f", help="Only the given table and its neighbours")
@click.option("--search", "-s", help="Only tables whose name or columns match")
@click.option("--output", "-o", type=click.Path(), help="Output file (stdout if not specified)")
@click.option("--pretty", is_flag=True, help="Pretty print JSON output")
@click.pass_context
def graph(
    ctx: click.Context,
    schema_file: str,
    dialect: str | None,
    focus: str | None,
    search: str | None,
    output: str | None,
    pretty: bool,
) -> None:
    """Export diagram nodes and links as JSON.

    Relationships pointing at tables that are not in the file are dropped.
    """
    verbose = ctx.obj.get("verbose", False)

    try:
        model = SchemaParser.from_file(schema_file, dialect).parse()

        if focus:
            if model.get_table(focus) is None:
                _fail(f"Table '{focus}' not found", verbose)
            model = focus_model(model, focus)

        if search:
            matched = {t.id for t in search_tables(model, search)}
            model = SchemaModel(
                tables=[t for t in model.tables if t.id in matched],
                relationships=model.relationships,
                raw_content=model.raw_content,
            )

        data = assign_levels(build_graph(model)).to_dict()

        if output:
            _write_json(data, output)
            console.print(
                f"[green]Wrote {len(data['nodes'])} nodes and {len(data['links'])} links to {output}[/green]"
            )
        else:
            click.echo(json.dumps(data, indent=2 if pretty else None))

    except Exception as e:
        _fail(f"Error building graph: {e}", verbose)


@cli.command()
@click.argument("schema_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False), help="YAML config file")
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON")
@click.pass_context
def analyze(
    ctx: click.Context,
    schema_file: str,
    config_path: str | None,
    as_json: bool,
) -> None:
    """Analyze a schema file with the language model service.

    The API key is read from SCHEMAVIZ_API_KEY, GEMINI_API_KEY or API_KEY.
    """
    verbose = ctx.obj.get("verbose", False)

    try:
        config = load_config(config_path)
        content = Path(schema_file).read_text()
    except Exception as e:
        _fail(f"Error: {e}", verbose)

    session = AnalysisSession(SchemaAnalyzer(config))

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task("Analyzing schema...", total=None)
        status = session.run(content)

    if status == AnalysisStatus.ERROR:
        _fail(f"Analysis failed: {session.error}. You can retry.", False)

    report = session.report
    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        return

    console.print(Panel.fit(report.summary, title="Summary"))
    _print_findings("Potential Issues", report.potential_issues, "red")
    _print_findings("Suggestions", report.suggestions, "green")


@cli.command()
@click.option("--output", "-o", type=click.Path(), help="Output file (stdout if not specified)")
def example(output: str | None) -> None:
    """Print the bundled example Rails schema."""
    if output:
        Path(output).write_text(EXAMPLE_SCHEMA)
        console.print(f"[green]Created example schema: {output}[/green]")
    else:
        click.echo(EXAMPLE_SCHEMA)


def _print_model(model: SchemaModel, dialect: Dialect, verbose: bool) -> None:
    """Print tables and relationships."""
    console.print(Panel.fit(
        f"Dialect: [cyan]{dialect.value}[/cyan]\n"
        f"Tables: {len(model.tables)}\n"
        f"Relationships: {len(model.relationships)}",
        title="Schema",
    ))

    table = Table(title="Tables")
    table.add_column("Name", style="cyan")
    table.add_column("Columns", justify="right")
    table.add_column("Column Names")

    for t in model.tables:
        names = ", ".join(t.column_names())
        table.add_row(
            t.id,
            str(len(t.columns)),
            names[:60] + "..." if len(names) > 60 else names or "-",
        )

    console.print(table)

    if model.relationships:
        rels = Table(title="Relationships")
        rels.add_column("Source", style="cyan")
        rels.add_column("Target", style="green")
        rels.add_column("Column")

        known = set(model.table_ids())
        for r in model.relationships:
            target = r.target if r.target in known else f"[yellow]{r.target}[/yellow]"
            rels.add_row(r.source, target, r.column or "-")

        console.print(rels)

    if verbose:
        for t in model.tables:
            console.print(f"\n[cyan]{t.id}[/cyan]")
            for c in t.columns:
                details = f" [dim]{c.details}[/dim]" if c.details else ""
                console.print(f"  - {c.name}: {c.type}{details}")


def _print_findings(title: str, items: list[str], color: str) -> None:
    console.print(f"\n[{color}]{title}[/{color}]")
    if not items:
        console.print("  [dim]none[/dim]")
    for item in items:
        console.print(f"  - {item}")


def _write_json(data: dict, output: str) -> None:
    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def _fail(message: str, verbose: bool) -> None:
    console.print(f"[red]{message}[/red]")
    if verbose:
        import traceback
        console.print(traceback.format_exc())
    sys.exit(1)


if __name__ == "__main__":
    cli()
