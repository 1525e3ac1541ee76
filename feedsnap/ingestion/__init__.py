"""Source adapters: feeds, site scrapers, Graph API, images."""

from .adapters import LINK_ONLY_WARNING, LinkOnlyAdapter, SourceAdapter
from .graph_api import GraphApiScraper
from .http import create_client, page_headers
from .images import ImageResolver
from .models import Enclosure, MediaContent, MediaHints, RawEntry
from .rss_fetcher import FeedAdapter
from .scrapers import ScraperRegistry, SiteScraper, default_registry

__all__ = [
    "SourceAdapter",
    "LinkOnlyAdapter",
    "LINK_ONLY_WARNING",
    "FeedAdapter",
    "SiteScraper",
    "ScraperRegistry",
    "default_registry",
    "GraphApiScraper",
    "ImageResolver",
    "create_client",
    "page_headers",
    "RawEntry",
    "MediaHints",
    "MediaContent",
    "Enclosure",
]
