"""Database engine and session management."""

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from restaurant_cms.core.config import settings


def engine_options(database_url: str, debug: bool = False) -> dict[str, Any]:
    """SQLite is shared across request threads; server databases get connection health checks."""
    if database_url.startswith("sqlite"):
        return {"echo": debug, "connect_args": {"check_same_thread": False}}
    return {"echo": debug, "pool_pre_ping": True}


engine = create_engine(settings.database_url, **engine_options(settings.database_url, settings.debug))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session for the tenant lookups and admin writes."""
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
