# db.py
# Role: Database bootstrap for the expense tracker.
#       Builds the SQLAlchemy engine, session factory, and declarative Base.
#       SQLite databases run in WAL mode so reads are not blocked by a writer.

"""
Database setup for the expense tracker.

- Uses DATABASE_URL from config (SQLite at <project_root>/database/expenses.db by default)
- Ensures the 'database' folder exists for file-based SQLite URLs.
"""

import os

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from config import DATABASE_URL


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:")


def make_engine(url: str) -> Engine:
    """
    Create an engine for the given URL.

    For SQLite we need check_same_thread=False for FastAPI (threaded request
    handling). In-memory databases share one connection so every session
    sees the same tables.
    """
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True)

    if _is_memory_sqlite(url):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    db_path = url.split("sqlite:///", 1)[-1]
    db_dir = os.path.dirname(os.path.abspath(db_path))
    os.makedirs(db_dir, exist_ok=True)  # ensure folder exists

    engine = create_engine(url, connect_args={"check_same_thread": False})

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    return engine


engine = make_engine(DATABASE_URL)

# Standard session factory used via dependency injection (see app/deps.py:get_db)
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

# Declarative base class for ORM models
Base = declarative_base()
