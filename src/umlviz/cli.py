"""CLI interface for umlviz using Typer framework."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from umlviz import __description__, __version__
from umlviz.config import ImageFormat, UmlvizConfig, load_config
from umlviz.diagnostics import DiagnosticCollector
from umlviz.graph import DiagramGenerator, DotRenderer, GraphvizBackend, closure
from umlviz.logging import configure_logging
from umlviz.models import EntityKind, SchemaGraph, SchemaLoadError, load_schema

app = typer.Typer(
    name="umlviz",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"umlviz version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-V", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """umlviz - Class diagrams for schema definitions."""


def _load_inputs(schema: Path, config: Path | None, verbose: bool) -> tuple[UmlvizConfig, SchemaGraph]:
    """Load configuration and schema, exiting with status 1 on failure."""
    try:
        umlviz_config = load_config(config)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    configure_logging(umlviz_config.logging.level, verbose=verbose)

    try:
        graph = load_schema(schema)
    except SchemaLoadError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    return umlviz_config, graph


def _apply_overrides(config: UmlvizConfig, out: Path | None, format: str | None, source_only: bool) -> UmlvizConfig:
    output_updates = {}
    if out:
        output_updates["dir"] = str(out)
    if format:
        valid_formats = [f.value for f in ImageFormat]
        if format not in valid_formats:
            console.print(f"[red]Error:[/red] Invalid format '{format}'. Must be one of: {', '.join(valid_formats)}")
            raise typer.Exit(1)
        output_updates["format"] = ImageFormat(format)
    if source_only:
        output_updates["write_source"] = True

    updates = {}
    if output_updates:
        updates["output"] = config.output.model_copy(update=output_updates)
    if source_only:
        updates["renderer"] = config.renderer.model_copy(update={"enabled": False})
    return config.model_copy(update=updates) if updates else config


@app.command()
def render(
    schema: Annotated[
        Path,
        typer.Argument(help="Schema JSON document with entities and diagrams")
    ],
    out: Annotated[
        Path | None,
        typer.Option("--out", "-o", help="Output directory (default: from config, 'output')")
    ] = None,
    format: Annotated[
        str | None,
        typer.Option("--format", "-f", help="Image format: png, svg, pdf, jpg (default: png)")
    ] = None,
    diagram: Annotated[
        list[str] | None,
        typer.Option("--diagram", "-d", help="Only render this diagram (repeatable)")
    ] = None,
    no_all: Annotated[
        bool,
        typer.Option("--no-all", help="Skip the overview of every entity")
    ] = False,
    source_only: Annotated[
        bool,
        typer.Option("--source-only", help="Write .dot files without invoking Graphviz")
    ] = False,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Configuration file path (default: search for .umlviz.json)")
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
) -> None:
    """Render every diagram of a schema, plus the overview of all entities."""
    umlviz_config, graph = _load_inputs(schema, config, verbose)
    umlviz_config = _apply_overrides(umlviz_config, out, format, source_only)

    renderer = DotRenderer.from_config(umlviz_config)
    backend = GraphvizBackend(
        command=umlviz_config.renderer.command,
        image_format=ImageFormat(umlviz_config.output.format).value,
        timeout=umlviz_config.renderer.timeout,
    )
    diagnostics = DiagnosticCollector()
    generator = DiagramGenerator(umlviz_config, renderer, backend=backend, diagnostics=diagnostics)

    try:
        descriptions = generator.generate(graph, diagram or None, include_all=not no_all)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    output_dir = Path(umlviz_config.output.dir)
    report = generator.render_diagrams(descriptions, output_dir)

    table = Table(title="Diagrams")
    table.add_column("Diagram", style="cyan")
    table.add_column("Output")
    table.add_column("Status")
    for name in descriptions:
        if name in report.failed:
            table.add_row(name, str(report.failed[name].output_path), "[red]FAILED[/red]")
        elif name in report.rendered:
            table.add_row(name, str(report.rendered[name]), "[green]OK[/green]")
        elif name in report.sources:
            table.add_row(name, str(report.sources[name]), "[dim]source[/dim]")
    console.print(table)

    if diagnostics.warnings:
        console.print(f"[yellow]Warnings:[/yellow] {len(diagnostics.warnings)}")
    diagnostics.flush(output_dir)

    if not report.ok:
        for name, error in report.failed.items():
            console.print(f"[red]Error:[/red] {escape(name)}: {escape(str(error))}")
        raise typer.Exit(1)


@app.command()
def show(
    schema: Annotated[
        Path,
        typer.Argument(help="Schema JSON document with entities and diagrams")
    ],
    diagram: Annotated[
        str | None,
        typer.Option("--diagram", "-d", help="Diagram to print (default: overview of all entities)")
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Configuration file path (default: search for .umlviz.json)")
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
) -> None:
    """Print the DOT description of one diagram."""
    umlviz_config, graph = _load_inputs(schema, config, verbose)
    generator = DiagramGenerator(umlviz_config, DotRenderer.from_config(umlviz_config))

    if diagram is None:
        description = generator.generate_all(graph)
    elif diagram in graph.diagrams:
        description = generator.generate_diagram(graph, graph.diagrams[diagram])
    else:
        console.print(f"[red]Error:[/red] Unknown diagram '{diagram}'. Available: {', '.join(graph.diagrams)}")
        raise typer.Exit(1)

    # DOT attributes use square brackets, which rich would read as markup
    typer.echo(description, nl=False)


@app.command("closure")
def closure_command(
    schema: Annotated[
        Path,
        typer.Argument(help="Schema JSON document with entities and diagrams")
    ],
    seeds: Annotated[
        list[str],
        typer.Argument(help="Entity ids to start from")
    ],
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
) -> None:
    """List every entity reachable from the given seeds."""
    _, graph = _load_inputs(schema, None, verbose)
    reachable = closure(seeds, graph)

    for entity_id in sorted(reachable):
        typer.echo(entity_id)

    missing = [seed for seed in seeds if seed not in graph.entities]
    if missing:
        console.print(f"[yellow]Warning:[/yellow] Not defined: {', '.join(missing)}")


@app.command()
def entities(
    schema: Annotated[
        Path,
        typer.Argument(help="Schema JSON document with entities and diagrams")
    ],
) -> None:
    """Show the entities defined in a schema."""
    _, graph = _load_inputs(schema, None, False)

    table = Table(title=f"Entities ({len(graph.entities)})")
    table.add_column("Id", style="cyan")
    table.add_column("Kind")
    table.add_column("Fields", justify="right")
    table.add_column("Parents")
    for entity in graph.entities.values():
        kind = entity.kind.value if isinstance(entity.kind, EntityKind) else entity.kind
        count = len(entity.values) if kind == "enum" else len(entity.fields)
        parents = ", ".join(parent.type_id for parent in entity.parents)
        table.add_row(entity.id, kind, str(count), parents)
    console.print(table)
