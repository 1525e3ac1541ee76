"""Build pipeline: sources -> fetch -> aggregate -> write."""

import asyncio
import time
from typing import Dict, List, Optional, Union

import httpx
import pendulum
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..config import Config, SourceConfig, load_sources
from ..ingestion import GraphApiScraper, ImageResolver, ScraperRegistry, create_client, default_registry, page_headers
from ..models import Snapshot, SourceResult
from .aggregate import aggregate
from .orchestrator import FetchOrchestrator
from .writer import write_snapshot

console = Console()


StageStats = Dict[str, Union[int, str]]


class PipelineStage:
    """One timed step of a build and the counts it reports."""

    def __init__(self, name: str, description: str, detail: str = ""):
        """
        Initialize pipeline stage.

        Args:
            name: Stage key shown in the summary table
            description: What the stage does
            detail: ``str.format`` template over ``stats`` for the summary row
        """
        self.name = name
        self.description = description
        self.detail = detail
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.success = False
        self.error: Optional[str] = None
        self.stats: StageStats = {}

    def start(self) -> None:
        self.start_time = time.monotonic()

    def complete(self, **stats: Union[int, str]) -> None:
        """Mark the stage done and record its counts."""
        self.end_time = time.monotonic()
        self.success = True
        self.stats.update(stats)

    def fail(self, error: str) -> None:
        self.end_time = time.monotonic()
        self.success = False
        self.error = error

    @property
    def duration(self) -> float:
        if self.start_time is None or self.end_time is None:
            return 0.0
        return self.end_time - self.start_time

    def describe(self) -> str:
        """Summary row text: the formatted counts, or why the stage failed."""
        if not self.success:
            return self.error or "Failed"
        return self.detail.format(**self.stats)


class BuildPipeline:
    """Runs one complete build and writes the snapshot."""

    def __init__(
        self,
        config: Config,
        registry: Optional[ScraperRegistry] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize build pipeline.

        Args:
            config: Configuration manager
            registry: Scraper capabilities; built-ins plus configured Graph API pages when omitted
            transport: HTTP transport override, used by tests
        """
        self.config = config
        self.registry = registry if registry is not None else self.create_registry()
        self.transport = transport
        self.stages = [
            PipelineStage("sources", "Loading sources", "{sources} sources"),
            PipelineStage("fetch", "Fetching sources", "{items} items, {warnings} warnings"),
            PipelineStage("aggregate", "Merging and sorting items", "{items} kept, {dropped} without link"),
            PipelineStage("write", "Writing snapshot", "{path}"),
        ]
        self.total_start_time: Optional[float] = None

    def create_registry(self) -> ScraperRegistry:
        """Built-in site scrapers plus one Graph API adapter per configured page."""
        registry = default_registry()
        settings = self.config.config
        for source_id, page_id in settings.facebook_pages.items():
            registry.register(
                source_id,
                GraphApiScraper(
                    page_id,
                    token_provider=self.config.get_facebook_token,
                    token_env=settings.facebook_token_env,
                ),
            )
        return registry

    async def fetch_all(self, sources: List[SourceConfig]) -> List[SourceResult]:
        """Fetch every source with one client for the whole run."""
        settings = self.config.config
        async with create_client(settings, transport=self.transport) as client:
            orchestrator = FetchOrchestrator(
                client,
                registry=self.registry,
                resolver=ImageResolver(client, headers=page_headers(settings)),
                image_concurrency=settings.image_concurrency,
            )
            return await orchestrator.run(sources)

    def run(self) -> Snapshot:
        """Run the build. ConfigurationError propagates; source failures do not."""
        self.total_start_time = time.time()
        try:
            return self._execute()
        finally:
            self._print_summary()

    def _execute(self) -> Snapshot:
        stage = self.stages[0]
        stage.start()
        try:
            sources = load_sources(self.config.sources_path)
        except Exception as e:
            stage.fail(str(e))
            raise
        stage.complete(sources=len(sources))

        stage = self.stages[1]
        stage.start()
        try:
            results = asyncio.run(self.fetch_all(sources))
        except Exception as e:
            stage.fail(str(e))
            raise
        stage.complete(
            warnings=sum(1 for r in results if r.warning),
            items=sum(len(r.items) for r in results),
        )

        stage = self.stages[2]
        stage.start()
        snapshot = aggregate(results, pendulum.now("UTC"))
        stage.complete(items=len(snapshot.items), dropped=count_dropped(results, snapshot))

        stage = self.stages[3]
        stage.start()
        try:
            path = write_snapshot(snapshot, self.config.output_path)
        except Exception as e:
            stage.fail(str(e))
            raise
        stage.complete(path=str(path))

        return snapshot

    def _print_summary(self):
        """Print build summary."""
        total_duration = time.time() - self.total_start_time if self.total_start_time else 0

        table = Table(title="Build Summary")
        table.add_column("Stage", style="cyan")
        table.add_column("Status", style="bold")
        table.add_column("Duration", style="yellow")
        table.add_column("Details", style="dim")

        for stage in self.stages:
            if stage.start_time is None:
                continue
            status = "[green]✓[/green]" if stage.success else "[red]✗[/red]"
            duration = f"{stage.duration:.1f}s" if stage.duration > 0 else "-"

            table.add_row(stage.name.title(), status, duration, stage.describe())

        console.print("\n")
        console.print(table)

        if all(stage.success for stage in self.stages):
            write_stage = self.stages[-1]
            console.print(Panel(
                f"[green]✅ Snapshot written[/green]\n\n"
                f"Items: {self.stages[2].stats.get('items', 0)}\n"
                f"Duration: {total_duration:.1f} seconds\n"
                f"Output: {write_stage.stats.get('path', '')}",
                style="green",
            ))
        else:
            failed = [s.name for s in self.stages if s.start_time is not None and not s.success]
            console.print(Panel(
                f"[red]❌ Build failed![/red]\n\n"
                f"Failed stages: {', '.join(failed) or 'interrupted'}\n"
                f"Duration: {total_duration:.1f} seconds",
                style="red",
            ))


def count_dropped(results: List[SourceResult], snapshot: Snapshot) -> int:
    return sum(len(r.items) for r in results) - len(snapshot.items)
