"""Source adapter interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

import httpx

from ..config import SourceConfig
from .models import RawEntry

LINK_ONLY_WARNING = "No rssUrl configured (link-only source)."


class SourceAdapter(ABC):
    """Abstract base class for everything that turns a source into raw entries."""

    #: Short name shown in the run log and in ``sources list``.
    name = "adapter"
    #: Prefix of the warning recorded when ``fetch`` raises.
    failure_label = "Fetch failed"
    #: Warning recorded when the adapter yields nothing by construction.
    empty_warning: Optional[str] = None

    @abstractmethod
    async def fetch(self, source: SourceConfig, client: httpx.AsyncClient) -> List[RawEntry]:
        """
        Fetch the raw entries of one source.

        Args:
            source: The source being processed
            client: Shared HTTP client for this run

        Returns:
            Raw entries in the order the source lists them

        Raises:
            FetchError, ScrapeError, httpx.HTTPError: the source could not be read
        """
        pass


class LinkOnlyAdapter(SourceAdapter):
    """Sources with neither a feed nor a scraper. Listed, never fetched."""

    name = "link-only"
    empty_warning = LINK_ONLY_WARNING

    async def fetch(self, source: SourceConfig, client: httpx.AsyncClient) -> List[RawEntry]:
        return []
