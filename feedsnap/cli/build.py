"""Build command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import Config
from ..errors import ConfigurationError
from ..pipeline import BuildPipeline

console = Console()


def build_command(
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Build config (YAML). Default: ./feedsnap.yaml if present",
    ),
    sources: Optional[Path] = typer.Option(
        None,
        "--sources",
        "-s",
        help="Source document. Default: sources.json",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Snapshot path. Default: docs/data/content.json",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Per-request timeout in seconds",
    ),
) -> None:
    """Fetch every source and write the content snapshot."""
    try:
        config = Config(config_path)
        config.override(
            sources_path=str(sources) if sources else None,
            output_path=str(output) if output else None,
            timeout=timeout,
        )

        BuildPipeline(config).run()

    except ConfigurationError as e:
        console.print(f"[red]❌ Configuration error: {e}[/red]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Build interrupted; snapshot not written[/yellow]")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]Build failed: {e}[/red]")
        raise typer.Exit(1)
