"""Database engine and per-request session handling."""

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from src.config import get_settings

settings = get_settings()


def build_engine(database_url: str) -> Engine:
    """Create an engine suited to the database backend in the URL."""
    if database_url.startswith("sqlite"):
        # SQLite connections are shared across the TestClient threads
        return create_engine(database_url, connect_args={"check_same_thread": False})
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


engine = build_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base: Any = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Yield one session per request and always close it."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    """Create the users and tasks tables if they do not exist."""
    # Models must be imported so they register with Base.metadata
    from src import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
