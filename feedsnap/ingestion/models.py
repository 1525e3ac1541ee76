"""Data models for ingestion."""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field


class MediaContent(BaseModel):
    """One media:content element of a feed entry."""

    url: str = Field(..., description="Media URL")
    medium: Optional[str] = Field(None, description="media:content medium attribute")
    type: Optional[str] = Field(None, description="MIME type")


class Enclosure(BaseModel):
    """One enclosure of a feed entry."""

    url: str = Field(..., description="Enclosure URL")
    type: Optional[str] = Field(None, description="MIME type")


class MediaHints(BaseModel):
    """Image hints carried by a feed entry."""

    enclosures: List[Enclosure] = Field(default_factory=list)
    media_content: List[MediaContent] = Field(default_factory=list)
    media_thumbnails: List[str] = Field(default_factory=list)
    itunes_image: Optional[str] = Field(None, description="itunes:image href")


class RawEntry(BaseModel):
    """One discovered article or post before normalization."""

    title: str = Field("", description="Title as published")
    link: str = Field("", description="Article URL")
    published: Optional[Union[datetime, str]] = Field(
        None, description="Publication date, structured or as published text"
    )
    snippet: str = Field("", description="Plain text summary")
    content: str = Field("", description="HTML body, if the source supplies one")
    image: Optional[str] = Field(None, description="Direct image URL supplied by the adapter")
    media: MediaHints = Field(default_factory=MediaHints, description="Feed-native image hints")
