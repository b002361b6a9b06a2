"""Database engine and session setup for the podcast store."""

import os
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from common.errors import ConfigError
from podcast_store.models import Base

load_dotenv()


def get_engine(database_url: Optional[str] = None) -> Engine:
    """Create an engine from `database_url` or the DATABASE_URL env var."""
    url = database_url or os.environ.get("DATABASE_URL")
    if not url:
        raise ConfigError("DATABASE_URL is not set")
    return create_engine(url, pool_pre_ping=True)


def get_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine)


def ensure_schema(engine: Engine) -> None:
    """Create the podcasts table if it doesn't exist."""
    Base.metadata.create_all(engine)
