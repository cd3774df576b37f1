"""Database infrastructure - shared engine and model primitives."""

from infrastructure.database.engines import create_session_factory, create_store_engine
from infrastructure.database.models import Base, TimestampMixin

__all__ = [
    "Base",
    "TimestampMixin",
    "create_session_factory",
    "create_store_engine",
]
