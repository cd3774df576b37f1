"""Domain aggregates for the forum context.

Aggregates are immutable snapshots of stored entities. They enforce their
own field invariants without depending on infrastructure; cross-entity
rules (a thread's forum must exist) are checked by the application layer.
"""

from forum.domain.aggregates.forum import Forum
from forum.domain.aggregates.message import Message
from forum.domain.aggregates.thread import Thread
from forum.domain.aggregates.user import User

__all__ = [
    "Forum",
    "Message",
    "Thread",
    "User",
]
