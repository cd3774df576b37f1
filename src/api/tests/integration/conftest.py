"""Integration test fixtures for file-backed stores.

These fixtures open the store on a real SQLite file so tests can close it,
reopen it and check that state survived.
"""

from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager

import pytest

from forum.bootstrap import ForumApplication, open_application
from infrastructure.settings import Settings, StoreSettings


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: tests that exercise a real SQLite database file",
    )


@pytest.fixture
def integration_store_settings(tmp_path) -> StoreSettings:
    """Store settings pointing at a fresh database file."""
    return StoreSettings(path=str(tmp_path / "forum_store.db"))


@pytest.fixture
def integration_settings() -> Settings:
    return Settings(_env_file=None, app_name="Forum Store Integration")


@pytest.fixture
def open_app(
    integration_settings: Settings, integration_store_settings: StoreSettings
) -> Callable[[], AbstractContextManager[ForumApplication]]:
    """Factory opening the application on the shared database file.

    Each call starts a new process lifetime over the same file.
    """

    def _open() -> AbstractContextManager[ForumApplication]:
        return open_application(integration_settings, integration_store_settings)

    return _open


@pytest.fixture
def app(open_app) -> Iterator[ForumApplication]:
    """Provide an application over the database file."""
    with open_app() as application:
        yield application
