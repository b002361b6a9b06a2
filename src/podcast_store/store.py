"""Write podcast records to PostgreSQL, keyed by source URL."""

import logging
from typing import Any, Callable

from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from common.errors import SinkError
from common.serialization import serialize_dataclass
from parse_catalog.models import PodcastRecord
from podcast_store.models import Podcast

logger = logging.getLogger(__name__)


def podcast_values(record: PodcastRecord) -> dict[str, Any]:
    """Column values for a record; episodes are stored as JSON."""
    return {
        "id": record.id,
        "url": record.url,
        "name": record.name,
        "author": record.author,
        "thumbnail_url": record.thumbnail_url,
        "description": record.description,
        "category": record.category,
        "language": record.language,
        "rating_count": record.rating_count,
        "website_url": record.website_url,
        "author_other_works": record.author_other_works,
        "related_works": record.related_works,
        "episodes": [serialize_dataclass(episode) for episode in record.episodes],
        "last_release_date": record.last_release_date,
        "crawled_at": record.crawled_at,
    }


def upsert_podcast(record: PodcastRecord, session: Session) -> None:
    """Insert the record or overwrite the row with the same id."""
    values = podcast_values(record)
    stmt = insert(Podcast).values(**values)
    stmt = stmt.on_conflict_do_update(
        index_elements=["id"],
        set_={column: stmt.excluded[column] for column in values if column != "id"},
    )
    session.execute(stmt)
    session.commit()


class PodcastStore:
    """Document sink used by the podcast worker."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def save(self, record: PodcastRecord) -> None:
        if not record.id:
            raise SinkError("Podcast record has no id")
        try:
            with self._session_factory() as session:
                upsert_podcast(record, session)
        except SQLAlchemyError as e:
            raise SinkError(f"Failed to store {record.id}: {e}") from e
        logger.info("Stored podcast %s", record.id)
