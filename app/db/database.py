# /app/db/database.py

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from app.core.config import get_settings


def build_engine(database_url: str) -> Engine:
    # The 'check_same_thread' argument is only needed for SQLite. Reads are
    # dispatched to worker threads, so the connection must not be pinned.
    engine_args = {"connect_args": {"check_same_thread": False}} if database_url.startswith("sqlite") else {}
    return create_engine(database_url, pool_pre_ping=True, **engine_args)


@lru_cache()
def get_engine() -> Engine:
    """One configured engine per process, built lazily from settings."""
    return build_engine(get_settings().database_url)


def create_tables(engine: Engine) -> None:
    # Importing the registry makes sure every model is attached to the metadata.
    from app.db.base import Base
    Base.metadata.create_all(bind=engine)
