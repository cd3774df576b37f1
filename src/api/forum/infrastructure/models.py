"""SQLAlchemy ORM model for the keyed store.

All four collections share one table. Each row is addressed by the
collection namespace and the entry key; the value lives in a JSON payload.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from sqlalchemy import JSON, Integer, LargeBinary
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin
from shared_kernel.identifiers import MAX_OPAQUE_ID_LENGTH


class StoreNamespace(IntEnum):
    """Fixed namespace numbers of the four collections.

    These numbers are part of the persisted layout and must never change.
    """

    FORUMS = 0
    THREADS = 1
    MESSAGES = 2
    USERS = 3


class StoreEntryModel(Base, TimestampMixin):
    """ORM model for store_entries table.

    Keys are raw identifier bytes, so ordering by key enumerates entries in
    byte order.
    """

    __tablename__ = "store_entries"

    namespace: Mapped[int] = mapped_column(Integer, primary_key=True)
    key: Mapped[bytes] = mapped_column(
        LargeBinary(MAX_OPAQUE_ID_LENGTH), primary_key=True
    )
    payload: Mapped[Any] = mapped_column(JSON, nullable=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<StoreEntryModel(namespace={self.namespace}, key={self.key.hex()})>"
