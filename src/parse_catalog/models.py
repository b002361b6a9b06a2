"""Data models for parsed podcast pages."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from common.datetime import DATE_SENTINEL


@dataclass
class Episode:
    """One row of a podcast's episode table."""
    index: int
    name: str
    description: str
    release_date: datetime = DATE_SENTINEL


@dataclass
class PodcastRecord:
    """Everything extracted from a podcast detail page.

    `id` is the source URL so storing the same page twice converges to one row.
    """
    id: str = ""
    url: str = ""
    name: str = ""
    author: str = ""
    thumbnail_url: Optional[str] = None
    description: str = ""
    category: str = ""
    language: str = ""
    rating_count: int = 0
    website_url: Optional[str] = None
    author_other_works: Optional[list[str]] = None
    related_works: Optional[list[str]] = None
    episodes: list[Episode] = field(default_factory=list)
    last_release_date: datetime = DATE_SENTINEL
    crawled_at: Optional[datetime] = None
