import asyncio
import json
from typing import Any, Awaitable, Callable, Dict, List

import httpx
import pytest

from feedsnap.config import SourceConfig
from feedsnap.models import Item


def make_source(**overrides: Any) -> SourceConfig:
    data: Dict[str, Any] = {
        "id": "a",
        "company": "Acme Fostering",
        "companyGroup": "ours",
        "type": "website",
        "pageUrl": "https://acme.example/news",
        "rssUrl": "",
    }
    data.update(overrides)
    return SourceConfig(**data)


def make_item(source_id: str = "a", title: str = "T", iso_date=None, link: str = "https://acme.example/x") -> Item:
    return Item(
        id=f"{source_id}:{title}",
        source_id=source_id,
        source_title=source_id,
        company="Acme",
        company_group="ours",
        type="website",
        page_url="https://acme.example",
        title=title,
        link=link,
        iso_date=iso_date,
    )


def run_with_client(
    handler: Callable[[httpx.Request], httpx.Response],
    work: Callable[[httpx.AsyncClient], Awaitable[Any]],
) -> Any:
    """Run ``work`` against a client whose requests are answered by ``handler``."""

    async def runner():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await work(client)

    return asyncio.run(runner())


RSS_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"
     xmlns:content="http://purl.org/rss/1.0/modules/content/"
     xmlns:media="http://search.yahoo.com/mrss/">
  <channel>
    <title>Acme news</title>
    <link>http://x/</link>
    <description>News</description>
    <item>
      <title>  Older   post </title>
      <link>http://x/older</link>
      <pubDate>Mon, 01 Dec 2025 09:00:00 +0000</pubDate>
      <description>&lt;p&gt;Older &lt;b&gt;summary&lt;/b&gt;&lt;/p&gt;</description>
      <content:encoded><![CDATA[<p><img src="https://x/logo.png"><img src="https://x/older.jpg"></p>]]></content:encoded>
    </item>
    <item>
      <title>Newer post</title>
      <link>http://x/newer</link>
      <pubDate>Fri, 26 Dec 2025 10:00:00 +0000</pubDate>
      <description>Newer summary</description>
      <media:thumbnail url="https://x/thumb.jpg"/>
    </item>
    <item>
      <title>No link</title>
      <pubDate>Sat, 27 Dec 2025 10:00:00 +0000</pubDate>
    </item>
  </channel>
</rss>
"""


@pytest.fixture
def rss_feed() -> bytes:
    return RSS_FEED


@pytest.fixture
def sources_file(tmp_path):
    def write(sources: List[Dict[str, Any]], name: str = "sources.json"):
        path = tmp_path / name
        path.write_text(json.dumps({"sources": sources}), encoding="utf-8")
        return path

    return write
