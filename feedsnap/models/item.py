"""Item model, the unit of content in a snapshot."""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

MAX_IMAGES = 10
UNTITLED = "(untitled)"


class Item(BaseModel):
    """Normalized article or post."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(..., description="Stable identity, '<sourceId>:<hash>'")
    source_id: str = Field(..., alias="sourceId")
    source_title: str = Field(..., alias="sourceTitle")
    company: str = Field(...)
    company_group: Literal["ours", "competitor"] = Field(..., alias="companyGroup")
    type: Literal["website", "facebook"] = Field(...)
    page_url: str = Field(..., alias="pageUrl")
    title: str = Field(UNTITLED, min_length=1, description="Normalized title")
    link: str = Field("", description="Absolute article URL; empty links are dropped")
    iso_date: Optional[str] = Field(None, alias="isoDate", description="UTC instant, ISO-8601")
    snippet: str = Field("", description="Normalized plain text summary")
    content: str = Field("", description="HTML body from the feed")
    images: List[str] = Field(default_factory=list, max_length=MAX_IMAGES)
