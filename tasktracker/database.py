"""Database configuration for tasktracker.

This module creates the tables for the registered models.
Use db.session.get_session() for database sessions.
"""

import logging

from sqlalchemy import text
from sqlalchemy.engine import Engine, make_url
from sqlmodel import SQLModel

# Import models so they're registered with SQLModel.metadata
from .models import Task, User  # noqa: F401
from .db.session import get_engine

logger = logging.getLogger(__name__)


def describe_database(url: str) -> str:
    """Return the database URL with any password masked."""
    return make_url(url).render_as_string(hide_password=True)


def create_db_and_tables(engine: Engine = None) -> None:
    """Create all database tables."""
    engine = engine or get_engine()
    logger.info("Synchronizing database models...")
    SQLModel.metadata.create_all(engine)
    logger.info("Database models synchronized.")


def ping(engine: Engine = None) -> None:
    """Run a trivial query. Raises if the database is unreachable."""
    engine = engine or get_engine()
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))
