"""Canonical article record produced by every source adapter."""

from typing import Any, List, Optional

from pendulum import DateTime
from pydantic import BaseModel, Field

from ..dates import parse_date
from .category import Category, SourceType


class Article(BaseModel):
    """Article model."""

    title: str = Field(..., description="Article title")
    url: str = Field(..., description="Article URL, treated as an opaque identifier")
    snippet: str = Field("", description="Plain-text summary, HTML stripped and length capped")
    published_date: str = Field(..., description="ISO-8601 publication date, or fetch time")
    source: str = Field(..., description="Human-readable outlet or provider name")

    # Derived fields attached by later stages
    category: Optional[Category] = Field(None, description="Assigned topical category")
    score: Optional[int] = Field(None, description="Relevance score")
    neighborhoods: List[str] = Field(default_factory=list, description="SF neighborhoods mentioned")
    source_type: Optional[SourceType] = Field(None, description="Tier of the originating provider")
    priority: Optional[int] = Field(None, description="Source priority weight (1-10)", ge=1, le=10)
    has_alert: bool = Field(False, description="Whether an alert keyword was found")
    alert_keywords: List[str] = Field(default_factory=list, description="Alert keywords found")

    class Config:
        """Pydantic config."""

        frozen = True

    @property
    def published_at(self) -> Optional[DateTime]:
        """Parsed publication date, or None when it cannot be parsed."""
        return parse_date(self.published_date)

    @property
    def text(self) -> str:
        """Title and snippet, used for keyword matching."""
        return f"{self.title} {self.snippet}"

    def with_derived(self, **fields: Any) -> "Article":
        """Return a copy with derived fields attached."""
        return self.model_copy(update=fields)
