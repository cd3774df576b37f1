"""Composition root for the forum store.

Builds the store, the guard registry and the services once per process
and releases them at exit. The host dispatch layer calls the services on
the returned ForumApplication; nothing reaches the store any other way.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from forum.application.mutation_guard import MutationGuards
from forum.application.services import (
    ForumQueryService,
    ForumService,
    MessageService,
    UserService,
)
from forum.infrastructure.store import ForumStore
from forum.ports.identifiers import IdentifierGenerator
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe, StartupProbe
from infrastructure.settings import Settings, StoreSettings, get_settings
from infrastructure.version import __version__


@dataclass
class ForumApplication:
    """Everything a request handler needs, wired to one store."""

    store: ForumStore
    guards: MutationGuards
    queries: ForumQueryService
    forums: ForumService
    messages: MessageService
    users: UserService
    app_name: str = "Forum Store"
    probe: StartupProbe = field(default_factory=DefaultStartupProbe)

    def close(self) -> None:
        """Release the store. The application is unusable afterwards."""
        self.store.close()
        self.probe.application_stopped(app_name=self.app_name)


def build_application(
    settings: Settings | None = None,
    store_settings: StoreSettings | None = None,
    id_generator: IdentifierGenerator | None = None,
    probe: StartupProbe | None = None,
) -> ForumApplication:
    """Open the store and wire every service to it.

    Args:
        settings: Application settings (environment by default)
        store_settings: Store settings (taken from settings by default)
        id_generator: Identifier source shared by the creating services
        probe: Optional startup probe

    Returns:
        A ready ForumApplication; call close() when done

    Raises:
        StoreAccessError: If the store cannot be opened
    """
    settings = settings or get_settings()
    store_settings = store_settings or settings.store
    probe = probe or DefaultStartupProbe()

    configure_logging(debug=settings.debug)

    store = ForumStore.open(store_settings)
    guards = MutationGuards()

    application = ForumApplication(
        store=store,
        guards=guards,
        queries=ForumQueryService(store),
        forums=ForumService(store, guards, id_generator=id_generator),
        messages=MessageService(store, guards, id_generator=id_generator),
        users=UserService(store, guards),
        app_name=settings.app_name,
        probe=probe,
    )

    probe.application_started(
        app_name=settings.app_name, version=__version__, store_url=store_settings.url
    )
    return application


@contextmanager
def open_application(
    settings: Settings | None = None,
    store_settings: StoreSettings | None = None,
    id_generator: IdentifierGenerator | None = None,
) -> Iterator[ForumApplication]:
    """Build the application for the duration of the block.

    Usage:
        with open_application() as app:
            app.forums.create_forum("General", "Anything goes")
    """
    application = build_application(
        settings=settings, store_settings=store_settings, id_generator=id_generator
    )
    try:
        yield application
    finally:
        application.close()
