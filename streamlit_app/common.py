"""Session and formatting helpers for the Streamlit staff dashboard."""

from datetime import datetime, timezone

from sqlalchemy.orm import Session

from restaurant_cms.db import session as db_session
from restaurant_cms.db.base import Base

Base.metadata.create_all(bind=db_session.engine)


def get_session() -> Session:
    """Open a session on the same database the web app uses."""
    return db_session.SessionLocal()


def now_string() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
