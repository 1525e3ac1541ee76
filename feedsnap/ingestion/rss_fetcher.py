"""RSS/Atom feed adapter."""

import calendar
import html
import re
from datetime import datetime, timezone
from typing import Any, List, Optional, Union

import feedparser
import httpx

from ..config import SourceConfig
from ..errors import FeedParseError, FetchError
from .adapters import SourceAdapter
from .http import describe_http_error
from .models import Enclosure, MediaContent, MediaHints, RawEntry

_TAG = re.compile(r"<[^>]+>")

# Structured (UTC struct_time) fields first, then the raw text they came from.
PARSED_DATE_FIELDS = ("published_parsed", "updated_parsed", "created_parsed")
TEXT_DATE_FIELDS = ("published", "updated", "created")


def strip_html(value: Optional[str]) -> str:
    """Drop tags and unescape entities."""
    if not value:
        return ""
    return html.unescape(_TAG.sub(" ", value))


def entry_published(entry: Any) -> Optional[Union[datetime, str]]:
    """Pick the publication date of a feed entry."""
    for field in PARSED_DATE_FIELDS:
        parsed = entry.get(field)
        if parsed:
            try:
                return datetime.fromtimestamp(calendar.timegm(parsed), tz=timezone.utc)
            except (OverflowError, ValueError, TypeError):
                continue
    for field in TEXT_DATE_FIELDS:
        text = entry.get(field)
        if text:
            return text
    return None


def entry_content(entry: Any) -> str:
    """HTML body of an entry: content:encoded, then summary, then description."""
    for block in entry.get("content") or []:
        value = block.get("value")
        if value:
            return value
    return entry.get("summary") or entry.get("description") or ""


def entry_media(entry: Any) -> MediaHints:
    """Collect enclosure, media:* and itunes:image hints."""
    enclosures = [
        Enclosure(url=e.get("href") or e.get("url"), type=e.get("type"))
        for e in entry.get("enclosures") or []
        if e.get("href") or e.get("url")
    ]
    media_content = [
        MediaContent(url=m["url"], medium=m.get("medium"), type=m.get("type"))
        for m in entry.get("media_content") or []
        if m.get("url")
    ]
    thumbnails = [t["url"] for t in entry.get("media_thumbnail") or [] if t.get("url")]

    itunes_image = None
    image = entry.get("image")
    if isinstance(image, dict):
        itunes_image = image.get("href") or image.get("url")

    return MediaHints(
        enclosures=enclosures,
        media_content=media_content,
        media_thumbnails=thumbnails,
        itunes_image=itunes_image,
    )


def entry_to_raw(entry: Any) -> RawEntry:
    """Map one feedparser entry to a RawEntry."""
    content = entry_content(entry)
    summary = entry.get("summary") or entry.get("description") or ""
    return RawEntry(
        title=entry.get("title") or "",
        link=entry.get("link") or "",
        published=entry_published(entry),
        snippet=strip_html(summary or content),
        content=content,
        media=entry_media(entry),
    )


def parse_feed(document: Union[bytes, str]) -> List[RawEntry]:
    """Parse a feed document into raw entries."""
    feed = feedparser.parse(document)
    if feed.bozo and not feed.entries:
        raise FeedParseError(f"Invalid feed: {feed.bozo_exception}")
    return [entry_to_raw(entry) for entry in feed.entries]


class FeedAdapter(SourceAdapter):
    """Fetch and parse a source's rssUrl."""

    name = "feed"
    failure_label = "Failed to fetch/parse feed"

    async def fetch(self, source: SourceConfig, client: httpx.AsyncClient) -> List[RawEntry]:
        try:
            response = await client.get(source.rss_url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise FetchError(describe_http_error(e)) from e

        return parse_feed(response.content)
