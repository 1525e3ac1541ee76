"""Featured image resolution."""

import re
from typing import Dict, List, Optional

import httpx
from rich.console import Console

from .http import describe_http_error
from .models import MediaHints, RawEntry

console = Console()

_ABSOLUTE_URL = re.compile(r"^https?://", re.IGNORECASE)
_IMAGE_EXTENSION = re.compile(r"\.(jpg|jpeg|png|gif|webp|svg)$", re.IGNORECASE)
_IMG_SRC = re.compile(r"""<img[^>]+src=["']([^"']+)["']""", re.IGNORECASE)


def _meta_pattern(attribute: str, name: str) -> re.Pattern:
    # Either attribute order: <meta property=".." content=".."> or content first.
    return re.compile(
        rf"""<meta[^>]+{attribute}=["']{name}["'][^>]*content=["']([^"']+)["']"""
        rf"""|<meta[^>]+content=["']([^"']+)["'][^>]*{attribute}=["']{name}["']""",
        re.IGNORECASE,
    )


# Scanned in order; per pattern only the first match counts.
PAGE_IMAGE_PATTERNS = (
    _meta_pattern("property", "og:image"),
    _meta_pattern("name", "twitter:image"),
    re.compile(r"""<article[^>]*>[\s\S]*?<img[^>]+src=["']([^"']+)["']""", re.IGNORECASE),
    re.compile(r"""<main[^>]*>[\s\S]*?<img[^>]+src=["']([^"']+)["']""", re.IGNORECASE),
)


def is_absolute_url(url: Optional[str]) -> bool:
    return bool(url) and bool(_ABSOLUTE_URL.match(url))


def has_image_extension(url: str) -> bool:
    path = url.split("#", 1)[0].split("?", 1)[0]
    return bool(_IMAGE_EXTENSION.search(path))


def find_page_image(page: str) -> Optional[str]:
    """Featured image of an article page: og:image, twitter:image, <article>, <main>."""
    for pattern in PAGE_IMAGE_PATTERNS:
        match = pattern.search(page)
        if not match:
            continue
        url = next((group for group in match.groups() if group), "").strip()
        if is_absolute_url(url):
            return url
    return None


def find_content_images(content: str) -> List[str]:
    """Absolute <img> sources of an HTML body, in document order."""
    return [src.strip() for src in _IMG_SRC.findall(content or "") if is_absolute_url(src.strip())]


def feed_hint_images(media: MediaHints, content: str) -> List[str]:
    """Candidate images from feed-native hints, best first.

    Duplicates are removed. When more than one candidate remains the first is
    dropped, as it is most often the site logo rather than article art.
    """
    candidates: List[str] = []

    for enclosure in media.enclosures:
        if has_image_extension(enclosure.url):
            candidates.append(enclosure.url)

    for item in media.media_content:
        if "image" in (item.medium or item.type or "").lower():
            candidates.append(item.url)

    candidates.extend(media.media_thumbnails)

    if media.itunes_image:
        candidates.append(media.itunes_image)

    candidates.extend(find_content_images(content))

    unique = list(dict.fromkeys(url.strip() for url in candidates if is_absolute_url(url.strip())))
    return unique[1:] if len(unique) > 1 else unique


class ImageResolver:
    """Pick the representative images of an entry."""

    def __init__(self, client: httpx.AsyncClient, headers: Optional[Dict[str, str]] = None) -> None:
        """
        Initialize image resolver.

        Args:
            client: Shared HTTP client for this run
            headers: Extra headers for article page requests
        """
        self.client = client
        self.headers = headers or {}

    async def fetch_featured_image(self, url: str) -> Optional[str]:
        """Fetch an article page and find its featured image. Never raises."""
        try:
            response = await self.client.get(url, headers=self.headers)
        except httpx.HTTPError as e:
            console.print(f"[dim]  No image from {url}: {describe_http_error(e)}[/dim]")
            return None
        except Exception as e:
            console.print(f"[dim]  No image from {url}: {e}[/dim]")
            return None

        if not response.is_success:
            return None

        try:
            return find_page_image(response.text)
        except Exception as e:
            console.print(f"[dim]  No image from {url}: {e}[/dim]")
            return None

    async def resolve(self, entry: RawEntry) -> List[str]:
        """Ordered candidate image URLs for an entry, possibly empty."""
        if entry.image:
            return [entry.image]

        link = entry.link.strip()
        if link:
            featured = await self.fetch_featured_image(link)
            if featured:
                return [featured]

        return feed_hint_images(entry.media, entry.content)
