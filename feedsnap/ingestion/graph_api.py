"""Facebook Graph API adapter for page posts."""

from typing import Any, Callable, Dict, List, Optional

import httpx

from ..config import SourceConfig
from ..errors import FetchError, MissingCredentialError
from .adapters import SourceAdapter
from .http import describe_http_error
from .models import RawEntry

GRAPH_API_URL = "https://graph.facebook.com/v18.0"
POST_FIELDS = "id,message,created_time,permalink_url,full_picture,attachments{media,title,description}"
MAX_TITLE_LENGTH = 100


def post_title(post: Dict[str, Any]) -> str:
    """First line of the message, else the first attachment title."""
    message = post.get("message")
    if message:
        first_line = message.split("\n")[0]
        if len(first_line) > MAX_TITLE_LENGTH:
            return first_line[: MAX_TITLE_LENGTH - 3] + "..."
        return first_line

    attachments = (post.get("attachments") or {}).get("data") or []
    if attachments and attachments[0].get("title"):
        return attachments[0]["title"]

    return "Facebook Post"


def post_image(post: Dict[str, Any]) -> Optional[str]:
    if post.get("full_picture"):
        return post["full_picture"]
    attachments = (post.get("attachments") or {}).get("data") or []
    if not attachments:
        return None
    return ((attachments[0].get("media") or {}).get("image") or {}).get("src")


def post_to_raw(post: Dict[str, Any]) -> RawEntry:
    return RawEntry(
        title=post_title(post),
        link=post.get("permalink_url") or "",
        published=post.get("created_time"),
        snippet=post.get("message") or "",
        image=post_image(post),
    )


class GraphApiScraper(SourceAdapter):
    """Read a page's recent posts through the Graph API."""

    name = "graph-api"
    failure_label = "Graph API fetch failed"

    def __init__(
        self,
        page_id: str,
        token_provider: Callable[[], Optional[str]],
        token_env: str = "FACEBOOK_ACCESS_TOKEN",
        limit: int = 10,
    ) -> None:
        """
        Initialize Graph API adapter.

        Args:
            page_id: Page id or username
            token_provider: Returns the access token, or None when unset
            token_env: Name of the variable the token comes from, for messages
            limit: Number of posts to request (max 100)
        """
        self.page_id = page_id
        self.token_provider = token_provider
        self.token_env = token_env
        self.limit = limit

    async def fetch(self, source: SourceConfig, client: httpx.AsyncClient) -> List[RawEntry]:
        token = self.token_provider()
        if not token:
            raise MissingCredentialError(f"{self.token_env} is not set")

        try:
            response = await client.get(
                f"{GRAPH_API_URL}/{self.page_id}/posts",
                params={"fields": POST_FIELDS, "limit": self.limit, "access_token": token},
            )
        except httpx.HTTPError as e:
            raise FetchError(describe_http_error(e)) from e

        if not response.is_success:
            try:
                message = response.json().get("error", {}).get("message")
            except ValueError:
                message = None
            raise FetchError(f"Facebook API error: {message or response.reason_phrase}")

        posts = response.json().get("data") or []
        return [post_to_raw(post) for post in posts]
