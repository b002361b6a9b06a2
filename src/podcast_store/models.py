"""SQLAlchemy model for stored podcasts."""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class Podcast(Base):
    __tablename__ = "podcasts"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str] = mapped_column(Text, default="")
    author: Mapped[str] = mapped_column(Text, default="")
    thumbnail_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description: Mapped[str] = mapped_column(Text, default="")
    category: Mapped[str] = mapped_column(Text, default="")
    language: Mapped[str] = mapped_column(Text, default="")
    rating_count: Mapped[int] = mapped_column(Integer, default=0)
    website_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    author_other_works: Mapped[Optional[list]] = mapped_column(JSONB, nullable=True)
    related_works: Mapped[Optional[list]] = mapped_column(JSONB, nullable=True)
    episodes: Mapped[list] = mapped_column(JSONB, default=list)
    last_release_date: Mapped[datetime] = mapped_column(DateTime)
    crawled_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
