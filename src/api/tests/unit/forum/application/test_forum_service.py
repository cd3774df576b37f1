"""Unit tests for ForumService."""

from unittest.mock import create_autospec

import pytest

from forum.application.mutation_guard import MutationKind
from forum.application.observability import ForumServiceProbe
from forum.application.services import ForumService
from forum.domain.aggregates import Forum
from forum.domain.value_objects import ErrorType, OperationError, OperationResult
from forum.ports.exceptions import StoreAccessError


@pytest.fixture
def mock_probe():
    """Create mock probe."""
    return create_autospec(ForumServiceProbe, instance=True)


@pytest.fixture
def make_service(store, guards, mock_probe, sequential_ids):
    """Build a service whose generator yields the given ids."""

    def _make(*generated):
        return ForumService(
            store, guards, id_generator=sequential_ids(*generated), probe=mock_probe
        )

    return _make


class TestCreateForum:
    """Tests for create_forum."""

    def test_creates_forum(
        self, store, make_service, ids, mock_probe
    ):
        """Should store the forum and report its id."""
        forum_id = ids(1)
        service = make_service(forum_id)

        result = service.create_forum("General", "Anything goes")

        assert isinstance(result, OperationResult)
        assert result.message == f"Forum created - {forum_id}"
        assert result.entity_id == str(forum_id)
        assert store.forums.get(forum_id) == Forum(forum_id, "General", "Anything goes")
        mock_probe.forum_created.assert_called_once_with(
            forum_id=str(forum_id), name="General"
        )

    def test_collision_aborts_without_overwrite(
        self, store, make_service, ids, mock_probe
    ):
        """A generated id that is already taken yields CONFLICT."""
        forum_id = ids(1)
        service = make_service(forum_id, forum_id)
        service.create_forum("First", "kept")

        result = service.create_forum("Second", "dropped")

        assert isinstance(result, OperationError)
        assert result.error_type is ErrorType.CONFLICT
        assert store.forums.get(forum_id).name == "First"
        assert len(store.forums) == 1
        mock_probe.identifier_collision.assert_called_once_with(
            collection="forums", entity_id=str(forum_id)
        )

    def test_store_failure_is_unexpected(self, store, make_service, ids, monkeypatch):
        """Store errors map to a fixed message."""
        service = make_service(ids(1))

        def fail(key, value):
            raise StoreAccessError("disk I/O error")

        monkeypatch.setattr(store.forums, "insert", fail)

        result = service.create_forum("General", "Talk")

        assert result == OperationError(
            error_type=ErrorType.UNEXPECTED, message="Error creating forum"
        )

    def test_guard_is_set_during_call_and_cleared_after(
        self, guards, make_service, ids, store, monkeypatch
    ):
        """The creatingForum flag covers the whole operation."""
        seen = []
        original = store.forums.insert

        def spy(key, value):
            seen.append(guards.is_in_flight(MutationKind.CREATING_FORUM))
            original(key, value)

        monkeypatch.setattr(store.forums, "insert", spy)

        make_service(ids(1)).create_forum("General", "Talk")

        assert seen == [True]
        assert not guards.is_in_flight(MutationKind.CREATING_FORUM)


class TestCreateThread:
    """Tests for create_thread."""

    def test_creates_thread_in_existing_forum(
        self, store, make_service, ids, mock_probe
    ):
        """Should store a thread pointing at the forum."""
        forum_id, thread_id = ids(1), ids(2)
        service = make_service(forum_id, thread_id)
        service.create_forum("General", "Talk")

        result = service.create_thread("Intro", "Say hi", forum_id)

        assert result.message == f"Thread created - {thread_id}"
        assert store.threads.get(thread_id).forum_id == forum_id
        mock_probe.thread_created.assert_called_once_with(
            thread_id=str(thread_id), forum_id=str(forum_id), name="Intro"
        )

    def test_unknown_forum_is_validation_error(
        self, store, make_service, ids, mock_probe
    ):
        """No thread is written when the forum does not exist."""
        service = make_service(ids(2))

        result = service.create_thread("Intro", "Say hi", ids(9))

        assert result == OperationError(
            error_type=ErrorType.VALIDATION, message="Forum does not exist"
        )
        assert store.threads.is_empty()
        mock_probe.thread_rejected.assert_called_once()

    def test_thread_id_collision(self, store, make_service, ids):
        """A thread id already in use yields CONFLICT."""
        forum_id, thread_id = ids(1), ids(2)
        service = make_service(forum_id, thread_id, thread_id)
        service.create_forum("General", "Talk")
        service.create_thread("Intro", "first", forum_id)

        result = service.create_thread("Again", "second", forum_id)

        assert result.error_type is ErrorType.CONFLICT
        assert store.threads.get(thread_id).name == "Intro"

    def test_store_failure_is_unexpected(self, store, make_service, ids, monkeypatch):
        """Store errors map to a fixed message."""
        forum_id = ids(1)
        service = make_service(forum_id, ids(2))
        service.create_forum("General", "Talk")

        def fail(key, value):
            raise StoreAccessError("disk I/O error")

        monkeypatch.setattr(store.threads, "insert", fail)

        result = service.create_thread("Intro", "Hi", forum_id)

        assert result == OperationError(
            error_type=ErrorType.UNEXPECTED, message="Error creating thread"
        )
