"""Engine and session factory built from application settings."""

import logging
import os
from functools import lru_cache
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from src.config.settings import get_settings
from src.db.base import Base

logger = logging.getLogger(__name__)

SessionLocal = sessionmaker(autoflush=False, expire_on_commit=False)


def create_db_engine(database_url: Optional[str] = None, echo: bool = False) -> Engine:
    """
    Create a SQLAlchemy engine.

    For file-backed SQLite URLs the parent directory is created first.

    Args:
        database_url: Database URL (default: from settings)
        echo: Whether to log SQL statements

    Returns:
        Configured Engine
    """
    settings = get_settings()
    url = database_url or settings.database_url

    if url.startswith("sqlite:///") and not url.endswith(":memory:"):
        db_dir = os.path.dirname(url[len("sqlite:///"):])
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

    return create_engine(url, echo=echo or settings.db_echo)


@lru_cache
def get_engine() -> Engine:
    """Application engine, created on first use."""
    return create_db_engine()


def get_session() -> Session:
    """Open a session on the application engine."""
    return SessionLocal(bind=get_engine())


def init_db(bind: Optional[Engine] = None) -> None:
    """Create all tables that do not exist yet."""
    # Import models so they register on Base.metadata
    from src.db import models  # noqa: F401

    target = bind or get_engine()
    Base.metadata.create_all(target)
    logger.info(f"Database schema ready ({target.url.render_as_string(hide_password=True)})")
