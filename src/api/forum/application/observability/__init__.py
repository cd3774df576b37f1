"""Domain-Oriented Observability for the forum application layer.

Probes for application service operations following Domain-Oriented
Observability patterns.
"""

from forum.application.observability.forum_service_probe import (
    DefaultForumServiceProbe,
    ForumServiceProbe,
)
from forum.application.observability.message_service_probe import (
    DefaultMessageServiceProbe,
    MessageServiceProbe,
)
from forum.application.observability.mutation_guard_probe import (
    DefaultMutationGuardProbe,
    MutationGuardProbe,
)
from forum.application.observability.query_service_probe import (
    DefaultQueryServiceProbe,
    QueryServiceProbe,
)
from forum.application.observability.user_service_probe import (
    DefaultUserServiceProbe,
    UserServiceProbe,
)

__all__ = [
    "ForumServiceProbe",
    "DefaultForumServiceProbe",
    "MessageServiceProbe",
    "DefaultMessageServiceProbe",
    "MutationGuardProbe",
    "DefaultMutationGuardProbe",
    "QueryServiceProbe",
    "DefaultQueryServiceProbe",
    "UserServiceProbe",
    "DefaultUserServiceProbe",
]
