import time
from datetime import datetime, timezone

import httpx
import pytest

from feedsnap.errors import FeedParseError, FetchError
from feedsnap.ingestion import FeedAdapter
from feedsnap.ingestion.rss_fetcher import entry_content, entry_media, entry_published, parse_feed, strip_html
from tests.conftest import make_source, run_with_client

ATOM_FEED = b"""<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Atom</title>
  <id>urn:feed</id>
  <updated>2025-01-02T03:04:05Z</updated>
  <entry>
    <title>Only updated</title>
    <id>urn:1</id>
    <link href="https://atom.example/1"/>
    <updated>2025-01-02T03:04:05Z</updated>
    <summary>Plain summary</summary>
  </entry>
</feed>
"""


def test_parse_feed_maps_rss_entries(rss_feed):
    entries = parse_feed(rss_feed)

    assert len(entries) == 3
    older, newer, no_link = entries
    assert older.link == "http://x/older"
    assert older.published == datetime(2025, 12, 1, 9, 0, tzinfo=timezone.utc)
    assert "<img" in older.content
    assert older.snippet.split() == ["Older", "summary"]
    assert newer.media.media_thumbnails == ["https://x/thumb.jpg"]
    assert newer.content == "Newer summary"
    assert no_link.link == ""


def test_parse_feed_falls_back_to_updated_date():
    (entry,) = parse_feed(ATOM_FEED)

    assert entry.link == "https://atom.example/1"
    assert entry.published == datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert entry.snippet == "Plain summary"


def test_parse_feed_rejects_garbage():
    with pytest.raises(FeedParseError):
        parse_feed(b"this is not a feed <<<")


def test_entry_published_prefers_structured_fields():
    parsed = time.struct_time((2025, 6, 1, 12, 0, 0, 6, 152, 0))

    assert entry_published({"created_parsed": parsed, "published": "ignored"}) == datetime(
        2025, 6, 1, 12, 0, tzinfo=timezone.utc
    )


def test_entry_published_text_fallback_chain():
    assert entry_published({"updated": "Yesterday-ish"}) == "Yesterday-ish"
    assert entry_published({"created": "2025-06-01"}) == "2025-06-01"
    assert entry_published({}) is None


def test_entry_content_prefers_encoded_content():
    entry = {"content": [{"value": "<p>full</p>"}], "summary": "short"}

    assert entry_content(entry) == "<p>full</p>"
    assert entry_content({"summary": "short"}) == "short"
    assert entry_content({}) == ""


def test_entry_media_collects_hints():
    media = entry_media({
        "enclosures": [{"href": "https://x/e.jpg", "type": "image/jpeg"}, {"length": "1"}],
        "media_content": [{"url": "https://x/m.jpg", "medium": "image"}],
        "media_thumbnail": [{"url": "https://x/t.jpg"}],
        "image": {"href": "https://x/itunes.jpg"},
    })

    assert [e.url for e in media.enclosures] == ["https://x/e.jpg"]
    assert media.media_content[0].medium == "image"
    assert media.media_thumbnails == ["https://x/t.jpg"]
    assert media.itunes_image == "https://x/itunes.jpg"


def test_strip_html():
    assert strip_html("<p>Tom &amp; Jerry</p>").strip() == "Tom & Jerry"
    assert strip_html(None) == ""


def test_feed_adapter_fetches_rss_url(rss_feed):
    def handler(request):
        assert str(request.url) == "http://x/feed"
        return httpx.Response(200, content=rss_feed)

    entries = run_with_client(
        handler,
        lambda client: FeedAdapter().fetch(make_source(rssUrl="http://x/feed"), client),
    )

    assert [" ".join(e.title.split()) for e in entries] == ["Older post", "Newer post", "No link"]


def test_feed_adapter_http_error_raises_fetch_error():
    with pytest.raises(FetchError, match="Server error \\(502\\)"):
        run_with_client(
            lambda request: httpx.Response(502),
            lambda client: FeedAdapter().fetch(make_source(rssUrl="http://x/feed"), client),
        )


def test_feed_adapter_timeout_raises_fetch_error():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(FetchError, match="Request timed out"):
        run_with_client(
            handler,
            lambda client: FeedAdapter().fetch(make_source(rssUrl="http://x/feed"), client),
        )
