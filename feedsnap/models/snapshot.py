"""Per-source results and the snapshot document."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config import SourceConfig
from .item import Item


class SourceResult(BaseModel):
    """Items produced by one source, and why there are fewer than expected."""

    source: SourceConfig
    items: List[Item] = Field(default_factory=list)
    warning: Optional[str] = Field(None, description="Why the source produced fewer or no items")


class SourceStatus(SourceConfig):
    """A source as listed in the snapshot."""

    warning: Optional[str] = Field(None)

    @classmethod
    def from_result(cls, result: SourceResult) -> "SourceStatus":
        return cls(**result.source.model_dump(by_alias=True), warning=result.warning)


class Snapshot(BaseModel):
    """The document the viewer reads."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    generated_at: str = Field(..., alias="generatedAt", description="Run instant, ISO-8601")
    sources: List[SourceStatus] = Field(default_factory=list)
    items: List[Item] = Field(default_factory=list)

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
