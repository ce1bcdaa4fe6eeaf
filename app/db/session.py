"""SQLAlchemy engine, session factory and declarative base."""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from ..core.config import settings

DB_URL = settings.database_url

# SQLite connections are shared by FastAPI's worker threads. Other engines
# ignore this argument.
CONNECT_ARGS = {"check_same_thread": False} if DB_URL.startswith("sqlite") else {}

engine = create_engine(DB_URL, connect_args=CONNECT_ARGS)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
# Parent class for every model in app/models.
Base = declarative_base()


def get_db():
    """FastAPI dependency that yields a session and guarantees cleanup."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
