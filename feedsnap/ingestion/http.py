"""HTTP client construction."""

from typing import Optional

import httpx

from ..config import BuildConfig


def create_client(
    config: BuildConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Create the client shared by every adapter during one run.

    The timeout applies to each request on its own.
    """
    return httpx.AsyncClient(
        timeout=config.timeout,
        follow_redirects=True,
        headers={"User-Agent": config.user_agent},
        transport=transport,
    )


def page_headers(config: BuildConfig) -> dict:
    """Headers for HTML page requests (article pages and listing pages)."""
    return {
        "User-Agent": config.page_user_agent,
        "Accept": "text/html,application/xhtml+xml",
    }


def describe_http_error(error: httpx.HTTPError) -> str:
    """Short, single-line description of an httpx failure."""
    if isinstance(error, httpx.HTTPStatusError):
        status = error.response.status_code
        if status == 404:
            return f"Not found (404) at {error.request.url}"
        if status == 403:
            return f"Access forbidden (403) at {error.request.url}"
        if status >= 500:
            return f"Server error ({status}) at {error.request.url}"
        return f"HTTP {status} at {error.request.url}"
    if isinstance(error, httpx.TimeoutException):
        return "Request timed out"
    return str(error) or error.__class__.__name__
