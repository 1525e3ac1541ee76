"""Sources inspection commands."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ..config import Config, load_sources
from ..errors import ConfigurationError
from ..pipeline import BuildPipeline, select_adapter

console = Console()
sources_app = typer.Typer(help="Inspect configured sources")


@sources_app.command("list")
def sources_list(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Build config (YAML)"),
    sources: Optional[Path] = typer.Option(None, "--sources", "-s", help="Source document"),
) -> None:
    """Validate the source document and show how each source is fetched."""
    try:
        config = Config(config_path)
        config.override(sources_path=str(sources) if sources else None)
        configured = load_sources(config.sources_path)
        registry = BuildPipeline(config).registry
    except ConfigurationError as e:
        console.print(f"[red]❌ Configuration error: {e}[/red]")
        raise typer.Exit(1)

    if not configured:
        console.print("[yellow]No sources configured.[/yellow]")
        return

    table = Table(title="Configured Sources")
    table.add_column("Id", style="cyan")
    table.add_column("Company", style="magenta")
    table.add_column("Group", style="green")
    table.add_column("Type", style="yellow")
    table.add_column("Strategy", style="bold")
    table.add_column("URL", style="blue")

    for source in configured:
        adapter = select_adapter(source, registry)
        table.add_row(
            source.id,
            source.company,
            source.company_group,
            source.type,
            adapter.name,
            source.rss_url or source.page_url,
        )

    console.print(table)
