"""Configuration models."""

import re
from typing import Any, Dict, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

_WHITESPACE = re.compile(r"\s+")

SOURCE_KEYS = {
    "id", "company", "companyGroup", "company_group", "type", "title",
    "pageUrl", "page_url", "rssUrl", "rss_url",
}


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _pick(data: Dict[str, Any], alias: str, name: str) -> Any:
    """Read a field by its document name, falling back to the attribute name."""
    if data.get(alias) not in (None, ""):
        return data[alias]
    return data.get(name)


def normalize_source_record(data: Dict[str, Any]) -> Dict[str, str]:
    """Trim and default one raw source record, keyed by document names."""
    source_id = _clean(data.get("id"))
    company = _clean(data.get("company"))
    title = _clean(data.get("title")) or company or source_id
    return {
        "id": source_id,
        "company": company,
        "companyGroup": (
            "competitor"
            if _clean(_pick(data, "companyGroup", "company_group")) == "competitor"
            else "ours"
        ),
        "type": "facebook" if _clean(data.get("type")) == "facebook" else "website",
        "title": _WHITESPACE.sub(" ", title).strip(),
        "pageUrl": _clean(_pick(data, "pageUrl", "page_url")),
        "rssUrl": _clean(_pick(data, "rssUrl", "rss_url")),
    }


class SourceConfig(BaseModel):
    """Source configuration from sources.json."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(..., min_length=1, description="Unique source key")
    company: str = Field(..., min_length=1, description="Company display name")
    company_group: Literal["ours", "competitor"] = Field(
        "ours", alias="companyGroup", description="Which side of the market the company is on"
    )
    type: Literal["website", "facebook"] = Field("website", description="Kind of page")
    title: str = Field("", description="Display title of the source")
    page_url: str = Field(..., min_length=1, alias="pageUrl", description="Human-facing page URL")
    rss_url: str = Field("", alias="rssUrl", description="Feed URL, empty for scraped or link-only sources")

    @model_validator(mode="before")
    @classmethod
    def normalize_fields(cls, data: Any) -> Any:
        """Trim strings and apply defaults before validation."""
        if isinstance(data, dict):
            extra = {key: value for key, value in data.items() if key not in SOURCE_KEYS}
            return {**extra, **normalize_source_record(data)}
        return data


class BuildConfig(BaseModel):
    """Main build configuration."""

    sources_path: str = Field("sources.json", description="Source document (JSON or YAML)")
    output_path: str = Field("docs/data/content.json", description="Snapshot written for the viewer")
    timeout: float = Field(20.0, description="Per-request timeout in seconds", ge=1.0, le=120.0)
    user_agent: str = Field(
        "github-pages-feed-aggregator (+https://github.com/)",
        description="User-Agent for feed and API requests",
    )
    page_user_agent: str = Field(
        "Mozilla/5.0",
        description="User-Agent for article and listing pages",
    )
    image_concurrency: int = Field(
        4, description="Concurrent article page fetches within one source", ge=1, le=16
    )
    facebook_token_env: str = Field(
        "FACEBOOK_ACCESS_TOKEN", description="Environment variable holding the Graph API token"
    )
    facebook_pages: Dict[str, str] = Field(
        default_factory=dict,
        description="Source id to Facebook page id/username for Graph API sources",
    )
