"""Database engine creation for the SQLite-backed store.

Operations run to completion one at a time, so the store uses a plain
synchronous engine and session rather than an async driver.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from infrastructure.settings import StoreSettings

__all__ = [
    "create_store_engine",
    "create_session_factory",
]


def create_store_engine(settings: StoreSettings) -> Engine:
    """Create the engine backing the persistent store.

    In-memory databases are pinned to a single connection so every session
    sees the same data; file databases get write-ahead logging for durability
    without blocking readers.

    Args:
        settings: Store settings

    Returns:
        Configured engine
    """
    if settings.is_in_memory:
        return create_engine(
            settings.url,
            echo=settings.echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )

    engine = create_engine(settings.url, echo=settings.echo)
    event.listen(engine, "connect", _enable_write_ahead_log)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a session factory bound to the store engine.

    Objects are not expired on commit: every read goes back to the database
    through an explicit lookup anyway.
    """
    return sessionmaker(bind=engine, expire_on_commit=False)


def _enable_write_ahead_log(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA synchronous=FULL")
    finally:
        cursor.close()
