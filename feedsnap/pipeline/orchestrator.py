"""Fetch orchestrator: one source at a time, failures isolated per source."""

import asyncio
from typing import List, Optional

import httpx
from rich.console import Console

from ..config import SourceConfig
from ..ingestion import (
    FeedAdapter,
    ImageResolver,
    LinkOnlyAdapter,
    RawEntry,
    ScraperRegistry,
    SourceAdapter,
)
from ..models import Item, SourceResult
from .normalize import normalize_entry

console = Console()

_FEED_ADAPTER = FeedAdapter()
_LINK_ONLY_ADAPTER = LinkOnlyAdapter()


def select_adapter(source: SourceConfig, registry: ScraperRegistry) -> SourceAdapter:
    """Scraper when registered and no feed is configured, then feed, then link-only."""
    scraper = registry.get(source.id)
    if scraper is not None and not source.rss_url:
        return scraper
    if source.rss_url:
        return _FEED_ADAPTER
    return _LINK_ONLY_ADAPTER


class FetchOrchestrator:
    """Turn each configured source into a SourceResult."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        registry: Optional[ScraperRegistry] = None,
        resolver: Optional[ImageResolver] = None,
        image_concurrency: int = 4,
    ) -> None:
        """
        Initialize fetch orchestrator.

        Args:
            client: Shared HTTP client for this run
            registry: Scraper capabilities keyed by source id
            resolver: Image resolver; one bound to ``client`` when omitted
            image_concurrency: Article page fetches in flight within one source
        """
        self.client = client
        self.registry = registry if registry is not None else ScraperRegistry()
        self.resolver = resolver if resolver is not None else ImageResolver(client)
        self.image_concurrency = image_concurrency

    def select_adapter(self, source: SourceConfig) -> SourceAdapter:
        return select_adapter(source, self.registry)

    async def build_items(self, source: SourceConfig, entries: List[RawEntry]) -> List[Item]:
        """Resolve images concurrently and normalize, keeping entry order."""
        semaphore = asyncio.Semaphore(self.image_concurrency)

        async def build_with_semaphore(entry: RawEntry) -> Item:
            async with semaphore:
                images = await self.resolver.resolve(entry)
            return normalize_entry(entry, source, images)

        tasks = [build_with_semaphore(entry) for entry in entries]
        return list(await asyncio.gather(*tasks))

    async def fetch_source(self, source: SourceConfig) -> SourceResult:
        """Fetch one source. Adapter failures become the result's warning."""
        adapter = self.select_adapter(source)
        try:
            entries = await adapter.fetch(source, self.client)
            items = await self.build_items(source, entries)
        except Exception as e:
            return SourceResult(
                source=source,
                warning=f"{adapter.failure_label}: {str(e) or e.__class__.__name__}",
            )

        warning = adapter.empty_warning if not items else None
        return SourceResult(source=source, items=items, warning=warning)

    async def run(self, sources: List[SourceConfig]) -> List[SourceResult]:
        """Fetch every source sequentially, in registry order."""
        results: List[SourceResult] = []
        for source in sources:
            adapter = self.select_adapter(source)
            target = source.rss_url or adapter.name
            console.print(f"Fetching: [cyan]{source.id}[/cyan] ({target})")

            result = await self.fetch_source(source)
            if result.warning:
                console.print(f"  [yellow]⚠️  {result.warning}[/yellow]")
            else:
                console.print(f"  [green]✓[/green] {len(result.items)} items")
            results.append(result)

        return results
