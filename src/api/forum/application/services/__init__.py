"""Application services for the forum bounded context."""

from forum.application.services.forum_service import ForumService
from forum.application.services.message_service import MessageService
from forum.application.services.query_service import ForumQueryService
from forum.application.services.user_service import UserService

__all__ = [
    "ForumQueryService",
    "ForumService",
    "MessageService",
    "UserService",
]
