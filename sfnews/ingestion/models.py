"""Data models for ingestion."""

from typing import List, Optional

from pydantic import BaseModel, Field

from ..models import Category


class FetchOptions(BaseModel):
    """Per-call options passed to a source adapter."""

    category: Optional[Category] = Field(None, description="Only return articles in this category")
    limit: int = Field(15, description="Maximum articles to return", ge=1, le=200)


class FeedItem(BaseModel):
    """Parsed feed entry, before conversion to an Article."""

    title: str = Field(..., description="Entry title")
    link: str = Field(..., description="Entry URL")
    description: str = Field("", description="Entry description (may contain markup)")
    content: str = Field("", description="Full content (content:encoded)")
    pub_date: Optional[str] = Field(None, description="Raw publication date")
    categories: List[str] = Field(default_factory=list, description="Declared category tags")
    source: Optional[str] = Field(None, description="Outlet named by the entry itself")
