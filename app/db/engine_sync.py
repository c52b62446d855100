# app/db/engine_sync.py
"""
SYNC engine shared by the API, the scheduler and the launcher.
SQLite (default) runs in WAL mode so the API and the scheduler process can
read and write the same file concurrently.
"""
import os
from typing import Generator

from sqlalchemy import event
from sqlmodel import Session, SQLModel, create_engine

DATABASE_URL = os.getenv("DATABASE_URL")

if DATABASE_URL is None:
    # Default to SQLite in data/db/
    DATA_DIR = os.path.join(os.path.dirname(__file__), "..", "..", "data")
    DATABASE_FILE = os.path.join(DATA_DIR, "db", "reminders.sqlite")
    os.makedirs(os.path.dirname(DATABASE_FILE), exist_ok=True)
    DATABASE_URL = f"sqlite:///{DATABASE_FILE}"

_is_sqlite = DATABASE_URL.startswith("sqlite")
_connect_args = {"check_same_thread": False} if _is_sqlite else {}

sync_engine = create_engine(DATABASE_URL, echo=False, connect_args=_connect_args)


if _is_sqlite:
    # WAL mode avoids "database is locked" between the API and scheduler processes
    @event.listens_for(sync_engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL;")
        cursor.close()


def get_sync_session() -> Generator[Session, None, None]:
    """
    Dependency for SYNC SQLModel session injection.
    Used by the API routers; jobs open their own Session(sync_engine).
    """
    with Session(sync_engine) as session:
        yield session


def create_sync_db_and_tables():
    """Create all tables registered on SQLModel.metadata."""
    # Registers the table models on the metadata
    from .. import models  # noqa: F401

    SQLModel.metadata.create_all(sync_engine)
