"""
Data Models / Schemas
Article record passed from the retrieval core to the outer layers
"""
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_AUTHOR = "Unknown"
DEFAULT_SITE_NAME = "Web"


class Source(BaseModel):
    """Grounding citation surfaced by the search tool"""
    model_config = ConfigDict(frozen=True)

    title: str
    uri: str


class ArticleRecord(BaseModel):
    """Reconstructed article; immutable once built"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field(..., min_length=1, description="Article title")
    content: str = Field(default="", description="Markdown body")
    author: str = Field(default=DEFAULT_AUTHOR, min_length=1)
    site_name: str = Field(default=DEFAULT_SITE_NAME, min_length=1, alias="siteName")
    url: str = Field(..., description="Requested URL, echoed verbatim")
    sources: List[Source] = Field(default_factory=list)

    @field_validator("sources", mode="before")
    @classmethod
    def _drop_incomplete_sources(cls, value: Any) -> List[Any]:
        if not value:
            return []
        kept: List[Any] = []
        for item in value:
            data = item.model_dump() if isinstance(item, Source) else dict(item or {})
            if str(data.get("title") or "").strip() and str(data.get("uri") or "").strip():
                kept.append(data)
        return kept

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict using the wire field names (siteName)"""
        return self.model_dump(mode="json", by_alias=True)


class HistoryEntry(BaseModel):
    """Lightweight projection of an ArticleRecord kept in reading history"""

    id: str
    url: str
    title: str
    timestamp: int = Field(..., description="Epoch milliseconds")
