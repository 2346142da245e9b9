"""Database engines and sessions."""

from __future__ import annotations

import logging
from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .models import Base

logger = logging.getLogger(__name__)

DEFAULT_DB_URL = "sqlite:///shiftmaker.db"


@lru_cache(maxsize=None)
def create_db_engine(db_url: str = DEFAULT_DB_URL, echo: bool = False) -> Engine:
    """One engine per URL for the life of the process."""
    logger.debug("Creating engine for %s", db_url)
    return create_engine(db_url, echo=echo)


def init_database(db_url: str = DEFAULT_DB_URL) -> None:
    """Create any missing tables."""
    Base.metadata.create_all(create_db_engine(db_url))
    logger.info("Database initialized: %s", db_url)


def get_session(db_url: str = DEFAULT_DB_URL) -> Session:
    return sessionmaker(bind=create_db_engine(db_url))()


def reset_database(db_url: str = DEFAULT_DB_URL) -> None:
    """Drop all tables and recreate them. Every stored row is lost."""
    engine = create_db_engine(db_url)
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    logger.warning("Database reset: %s", db_url)
