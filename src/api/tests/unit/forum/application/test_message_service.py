"""Unit tests for MessageService."""

from unittest.mock import create_autospec

import pytest

from forum.application.observability import MessageServiceProbe
from forum.application.services import ForumService, MessageService
from forum.domain.value_objects import ErrorType, OperationError
from forum.ports.exceptions import StoreAccessError


@pytest.fixture
def mock_probe():
    """Create mock probe."""
    return create_autospec(MessageServiceProbe, instance=True)


@pytest.fixture
def caller(ids):
    return ids(200)


@pytest.fixture
def thread_id(store, guards, ids, sequential_ids):
    """Create a forum with one thread and return the thread id."""
    forum_service = ForumService(
        store, guards, id_generator=sequential_ids(ids(1), ids(2))
    )
    forum_service.create_forum("General", "Talk")
    forum_service.create_thread("Intro", "Say hi", ids(1))
    return ids(2)


@pytest.fixture
def make_service(store, guards, mock_probe, sequential_ids):
    def _make(*generated, clock=lambda: 1_700_000_000):
        return MessageService(
            store,
            guards,
            id_generator=sequential_ids(*generated),
            clock=clock,
            probe=mock_probe,
        )

    return _make


class TestCreateMessage:
    """Tests for create_message."""

    def test_appends_message(
        self, store, make_service, ids, caller, thread_id, mock_probe
    ):
        """Should store the message with caller as author."""
        message_id = ids(10)

        result = make_service(message_id).create_message(
            caller, "hello", "ipfs://bafy", thread_id
        )

        assert result.message == "Message created"
        assert result.entity_id == str(message_id)
        [message] = store.messages.get(thread_id)
        assert message.user_id == caller
        assert message.thread_id == thread_id
        assert message.timestamp == 1_700_000_000
        mock_probe.message_created.assert_called_once_with(
            message_id=str(message_id),
            thread_id=str(thread_id),
            user_id=str(caller),
            position=0,
        )

    def test_keeps_posting_order_over_timestamps(
        self, store, make_service, ids, caller, thread_id
    ):
        """Insertion order wins even if the clock goes backwards."""
        times = iter([300, 100, 200])
        service = make_service(ids(10), ids(11), ids(12), clock=lambda: next(times))

        for content in ("m1", "m2", "m3"):
            service.create_message(caller, content, "ipfs://x", thread_id)

        assert [m.content for m in store.messages.get(thread_id)] == ["m1", "m2", "m3"]

    def test_rejects_non_ipfs_url(
        self, store, make_service, ids, caller, thread_id, mock_probe
    ):
        """Bad image URLs leave the thread untouched."""
        result = make_service(ids(10)).create_message(
            caller, "hello", "https://example.com/a.png", thread_id
        )

        assert result == OperationError(
            error_type=ErrorType.VALIDATION,
            message="Image url must start with ipfs://",
        )
        assert store.messages.get(thread_id) is None
        mock_probe.message_rejected.assert_called_once()

    def test_rejects_unknown_thread(self, store, make_service, ids, caller):
        """Messages may only be posted to existing threads."""
        result = make_service(ids(10)).create_message(
            caller, "hello", "ipfs://x", ids(99)
        )

        assert result == OperationError(
            error_type=ErrorType.VALIDATION, message="Thread does not exist"
        )
        assert store.messages.is_empty()

    def test_collision_within_thread(
        self, store, make_service, ids, caller, thread_id, mock_probe
    ):
        """A message id already used in the thread aborts the post."""
        service = make_service(ids(10), ids(10))
        service.create_message(caller, "first", "ipfs://x", thread_id)

        result = service.create_message(caller, "second", "ipfs://x", thread_id)

        assert result.error_type is ErrorType.CONFLICT
        assert [m.content for m in store.messages.get(thread_id)] == ["first"]
        mock_probe.identifier_collision.assert_called_once()

    def test_collision_across_threads(
        self, store, guards, make_service, ids, caller, thread_id, sequential_ids
    ):
        """A message id issued in one thread is never reused in another."""
        ForumService(store, guards, id_generator=sequential_ids(ids(3))).create_thread(
            "Other", "Second thread", ids(1)
        )
        other_thread_id = ids(3)
        service = make_service(ids(10), ids(10))
        service.create_message(caller, "first", "ipfs://x", thread_id)

        result = service.create_message(caller, "second", "ipfs://x", other_thread_id)

        assert result.error_type is ErrorType.CONFLICT
        assert store.messages.get(other_thread_id) is None
        assert [m.content for m in store.messages.get(thread_id)] == ["first"]

    def test_store_failure_is_unexpected(
        self, store, make_service, ids, caller, thread_id, monkeypatch
    ):
        """Store errors map to the generic message."""

        def fail(key, value):
            raise StoreAccessError("disk I/O error")

        monkeypatch.setattr(store.messages, "insert", fail)

        result = make_service(ids(10)).create_message(
            caller, "hi", "ipfs://x", thread_id
        )

        assert result == OperationError(
            error_type=ErrorType.UNEXPECTED, message="Unexpected error"
        )
