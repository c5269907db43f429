"""Database session management for tasktracker."""

from functools import lru_cache
from typing import Generator

from sqlalchemy.engine import Engine
from sqlmodel import Session, create_engine

from ..config import get_settings


@lru_cache
def get_engine() -> Engine:
    """Create the process-wide engine from DATABASE_URL."""
    settings = get_settings()
    connect_args = {}
    if settings.database_url.startswith("sqlite"):
        # requests are served from the threadpool
        connect_args["check_same_thread"] = False
    return create_engine(
        settings.database_url,
        echo=settings.sql_echo,
        connect_args=connect_args,
        pool_pre_ping=True,
    )


def get_session() -> Generator[Session, None, None]:
    """Get a database session scoped to one request.

    Yields:
        Session: Database session, closed when the request finishes

    Usage:
        @router.get("/")
        def handler(session: Session = Depends(get_session)):
            ...
    """
    with Session(get_engine()) as session:
        yield session
