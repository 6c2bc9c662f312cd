"""Command-line interface for component-ingest."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from component_ingest import __version__
from component_ingest.ai import GenerateComponentRequest, Synthesizer
from component_ingest.catalog import (
    ArtifactWriter,
    CatalogRegenerator,
    CreateComponentRequest,
    list_categories,
)
from component_ingest.config import AppConfig
from component_ingest.errors import IngestError
from component_ingest.orchestrator import ScrapePipeline
from component_ingest.sources import NormalizerRegistry

app = typer.Typer(
    name="component-ingest",
    help="Scrape documentation into catalog components.",
    rich_markup_mode="rich",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"component-ingest version {__version__}")
        raise typer.Exit()


def setup_logging(verbose: bool) -> None:
    logger = logging.getLogger("component_ingest")
    logger.handlers.clear()
    logger.addHandler(RichHandler(console=Console(stderr=True), show_path=verbose))
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False


def _config(ctx: typer.Context) -> AppConfig:
    return ctx.obj


def _run(coro):
    """Run a coroutine, turning pipeline errors into a clean exit."""
    try:
        return asyncio.run(coro)
    except IngestError as e:
        console.print(f"[red]{e.title}:[/red] {e.message}")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled.[/yellow]")
        raise typer.Exit(130)


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="TOML configuration file",
        exists=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
):
    """Scrape URLs, generate components and manage the component catalog."""
    config = AppConfig.from_toml(config_file) if config_file else AppConfig()
    config.verbose = verbose or config.verbose
    setup_logging(config.verbose)
    ctx.obj = config


@app.command()
def scrape(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="Page to scrape"),
    ai: bool = typer.Option(False, "--ai", help="Classify the page with the model"),
    as_json: bool = typer.Option(False, "--json", help="Print the full result as JSON"),
):
    """
    Fetch a URL and print its normalized content.

    Examples:

        component-ingest scrape https://github.com/owner/repo

        component-ingest scrape https://github.com/owner/repo/blob/main/README.md --ai --json
    """
    pipeline = ScrapePipeline(_config(ctx))
    content = _run(pipeline.scrape(url, classify=ai))

    if as_json:
        console.print_json(json.dumps(content.to_wire()))
        return

    meta = content.metadata
    table = Table(title=content.title or url, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Source", meta.source or meta.domain)
    if meta.repository:
        table.add_row("Repository", f"{meta.repository.owner}/{meta.repository.name}")
    if meta.file_path:
        table.add_row("File", f"{meta.file_path} ({meta.branch})")
    if meta.repo_structure:
        table.add_row("Entries", str(len(meta.repo_structure)))
    table.add_row("Content", f"{len(content.content):,} chars")
    table.add_row("Code blocks", str(len(content.code_blocks)))

    analysis = content.ai_analysis
    if analysis is not None:
        style = "yellow" if analysis.degraded else "green"
        table.add_row(
            "Suggestion",
            f"[{style}]{analysis.suggested_component_type}/"
            f"{analysis.suggested_category}/{analysis.suggested_name}[/{style}]"
            f" ({analysis.confidence:.0%}, {analysis.validation.data_quality} quality)",
        )
        for warning in analysis.validation.warnings:
            table.add_row("Warning", f"[yellow]{warning}[/yellow]")

    console.print(table)


@app.command()
def generate(
    ctx: typer.Context,
    component_type: str = typer.Argument(..., metavar="TYPE", help="agents, commands, mcps, settings, hooks or skills"),
    description: str = typer.Argument(..., help="What the component should do"),
    category: Optional[str] = typer.Option(None, "--category", help="Target category"),
    name: Optional[str] = typer.Option(None, "--name", help="Component name"),
    from_url: Optional[str] = typer.Option(
        None, "--from-url", help="Scrape this URL and use it as source material"
    ),
    write: bool = typer.Option(False, "--write", help="Save the result to the catalog"),
):
    """Generate a component with the model, optionally from a scraped page."""
    config = _config(ctx)
    catalog = config.catalog

    async def _generate():
        scraped = None
        if from_url:
            scraped = (await ScrapePipeline(config).scrape(from_url)).content
        synthesizer = Synthesizer(
            config.ai, catalog.components_path, catalog.resolve(catalog.best_practices_file)
        )
        data = await synthesizer.generate(
            GenerateComponentRequest(
                componentType=component_type,
                description=description,
                category=category,
                name=name,
                scrapedContent=scraped,
                documentationUrl=from_url,
            )
        )
        artifact = None
        if write:
            artifact = await ArtifactWriter(catalog.components_path).create(
                CreateComponentRequest(
                    type=data["componentType"],
                    category=data["category"],
                    name=data["name"],
                    description=description,
                    content=data["content"],
                )
            )
        return data, artifact

    data, artifact = _run(_generate())
    console.print(data["content"], markup=False, highlight=False)
    console.print(
        f"[dim]{data['metadata']['model']}, {data['metadata']['tokensUsed']} tokens[/dim]"
    )
    if artifact is not None:
        console.print(f"[green]Created {artifact.path}[/green]")


@app.command()
def create(
    ctx: typer.Context,
    component_type: str = typer.Argument(..., metavar="TYPE", help="Component type"),
    category: str = typer.Argument(..., help="Category (slugified)"),
    name: str = typer.Argument(..., help="Component name (slugified)"),
    description: str = typer.Argument(..., help="One-line description"),
    content_file: Optional[Path] = typer.Option(
        None,
        "--content-file",
        "-f",
        help="Use this file as the component body instead of the template",
        exists=True,
        dir_okay=False,
    ),
):
    """Write a component to the catalog without overwriting."""
    config = _config(ctx)
    request = CreateComponentRequest(
        type=component_type,
        category=category,
        name=name,
        description=description,
        content=content_file.read_text(encoding="utf-8") if content_file else None,
    )
    artifact = _run(ArtifactWriter(config.catalog.components_path).create(request))
    console.print(f"[green]Created {artifact.path}[/green]")


@app.command()
def categories(
    ctx: typer.Context,
    component_type: Optional[str] = typer.Option(None, "--type", "-t", help="Only this type"),
):
    """List the categories present in the catalog."""
    catalog = _config(ctx).catalog
    try:
        listing = list_categories(
            catalog.components_path, catalog.resolve(catalog.marketplace_file)
        )
    except IngestError as e:
        console.print(f"[red]{e.title}:[/red] {e.message}")
        raise typer.Exit(1)

    if component_type:
        listing = {component_type: listing.get(component_type, [])}

    table = Table(title="Catalog Categories")
    table.add_column("Type", style="cyan")
    table.add_column("Categories")
    for kind, names in listing.items():
        table.add_row(kind, ", ".join(names) or "[dim]none[/dim]")
    console.print(table)


@app.command()
def regenerate(ctx: typer.Context):
    """Run the catalog generation script."""
    catalog = _config(ctx).catalog
    regenerator = CatalogRegenerator(
        catalog.resolve(catalog.generation_script),
        cwd=catalog.root,
        timeout=catalog.regenerate_timeout_seconds,
        tail_lines=catalog.output_tail_lines,
    )
    for line in _run(regenerator.regenerate()):
        console.print(line, markup=False, highlight=False)
    console.print("[green]Catalog regenerated successfully[/green]")


@app.command()
def serve(
    ctx: typer.Context,
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Bind port"),
):
    """Serve the HTTP API with uvicorn."""
    from component_ingest.service import run_service

    run_service(_config(ctx), host=host, port=port)


@app.command("list-sources")
def list_sources():
    """List the host-specific normalizers."""
    table = Table(title="Source Normalizers")
    table.add_column("Name", style="cyan")
    table.add_column("Description")

    for normalizer in NormalizerRegistry.list_normalizers():
        table.add_row(normalizer.name, normalizer.description)

    console.print(table)


if __name__ == "__main__":
    app()
