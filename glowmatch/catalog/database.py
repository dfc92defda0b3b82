"""Database engine and session management."""

import logging
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from glowmatch import config
from glowmatch.catalog.orm import Base

# Configure module logger
logger = logging.getLogger(__name__)


def create_db_engine(database_url: str = config.DATABASE_URL, echo: bool = config.SQL_ECHO) -> Engine:
    """Create an engine for the given URL.

    SQLite connections are shared with the threadpool FastAPI runs sync
    endpoints in, so same-thread checking is disabled for them.
    """
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, echo=echo, connect_args=connect_args)


engine = create_db_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_session() -> Generator[Session, None, None]:
    """FastAPI dependency yielding one session per request."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def init_db(bind: Optional[Engine] = None) -> None:
    """Create catalog tables if they do not exist."""
    target = bind or engine
    logger.info(f"Creating catalog tables on {target.url.render_as_string(hide_password=True)}")
    Base.metadata.create_all(target)
