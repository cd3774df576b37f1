"""Integration tests for the forum store on a SQLite file.

Each scenario drives the services the way the host dispatch layer would
and, where durability matters, reopens the database before checking.
"""

import sqlite3

import pytest

from forum.application.mutation_guard import MutationKind
from forum.domain.value_objects import (
    EntityId,
    ErrorType,
    OperationError,
    OperationResult,
    Role,
)

pytestmark = pytest.mark.integration

ALICE = EntityId.from_bytes(b"\x04")
BOB = EntityId.from_bytes(b"\x05")


def created_id(result: OperationResult) -> EntityId:
    assert isinstance(result, OperationResult), result
    return EntityId.from_string(result.entity_id)


class TestDurability:
    """State written in one process lifetime is visible in the next."""

    def test_forums_round_trip_across_reopen(self, open_app):
        """Forums created before a restart are listed and retrievable after."""
        with open_app() as app:
            f1 = created_id(app.forums.create_forum("F1", "first"))
            f2 = created_id(app.forums.create_forum("F2", "second"))

        with open_app() as app:
            forums = dict(app.queries.get_forums())

        assert set(forums) == {f1, f2}
        assert (forums[f1].name, forums[f1].description) == ("F1", "first")
        assert (forums[f2].name, forums[f2].description) == ("F2", "second")

    def test_message_order_survives_reopen(self, open_app):
        """m1, m2, m3 come back in that order after a restart."""
        with open_app() as app:
            forum_id = created_id(app.forums.create_forum("General", "Talk"))
            thread_id = created_id(app.forums.create_thread("T", "t", forum_id))
            for content in ("m1", "m2", "m3"):
                app.messages.create_message(ALICE, content, "ipfs://img", thread_id)

        with open_app() as app:
            messages = app.queries.get_thread_messages(thread_id)

        assert [m.content for m in messages] == ["m1", "m2", "m3"]
        assert all(m.user_id == ALICE for m in messages)

    def test_roles_survive_reopen(self, open_app):
        """The first registrant stays admin across restarts."""
        with open_app() as app:
            app.users.register(ALICE, "alice", "a.png")

        with open_app() as app:
            app.users.register(BOB, "bob", "b.png")
            alice = app.queries.get_user(ALICE)
            bob = app.queries.get_user(BOB)

        assert alice.role is Role.ADMIN
        assert bob.role is Role.REGULAR_USER

    def test_namespaces_are_stored_under_fixed_numbers(
        self, open_app, integration_store_settings
    ):
        """Rows land in namespaces 0 to 3 of the store_entries table."""
        with open_app() as app:
            forum_id = created_id(app.forums.create_forum("General", "Talk"))
            thread_id = created_id(app.forums.create_thread("T", "t", forum_id))
            app.messages.create_message(ALICE, "hi", "ipfs://img", thread_id)
            app.users.register(ALICE, "alice", "a.png")

        connection = sqlite3.connect(integration_store_settings.path)
        try:
            rows = connection.execute(
                "SELECT namespace, key FROM store_entries ORDER BY namespace"
            ).fetchall()
        finally:
            connection.close()

        assert rows == [
            (0, forum_id.value),
            (1, thread_id.value),
            (2, thread_id.value),
            (3, ALICE.value),
        ]


class TestReferentialIntegrity:
    """Writes that reference missing entities leave no trace."""

    def test_thread_for_unknown_forum(self, app):
        result = app.forums.create_thread("T", "t", EntityId.generate())

        assert isinstance(result, OperationError)
        assert result.error_type is ErrorType.VALIDATION
        assert app.queries.get_threads() == []

    def test_message_for_unknown_thread(self, app):
        result = app.messages.create_message(
            ALICE, "hi", "ipfs://img", EntityId.generate()
        )

        assert result.error_type is ErrorType.VALIDATION
        assert app.queries.get_messages() == []

    def test_message_with_bad_image_url(self, app):
        forum_id = created_id(app.forums.create_forum("General", "Talk"))
        thread_id = created_id(app.forums.create_thread("T", "t", forum_id))

        result = app.messages.create_message(ALICE, "hi", "https://img", thread_id)

        assert result.error_type is ErrorType.VALIDATION
        assert app.queries.get_thread_messages(thread_id).error_type is (
            ErrorType.NOT_FOUND
        )

    def test_every_thread_points_at_a_forum(self, app):
        """No reachable thread references a missing forum."""
        forum_id = created_id(app.forums.create_forum("General", "Talk"))
        app.forums.create_thread("T1", "t", forum_id)
        app.forums.create_thread("T2", "t", EntityId.generate())

        forum_ids = {forum_id for forum_id, _ in app.queries.get_forums()}
        threads = app.queries.get_threads()
        assert len(threads) == 1
        assert all(t.forum_id in forum_ids for _, t in threads)


class TestUserProfiles:
    """Registration and avatar changes."""

    def test_second_registration_conflicts_and_keeps_profile(self, app):
        app.users.register(ALICE, "alice", "a.png")

        result = app.users.register(ALICE, "other", "o.png")

        assert result.error_type is ErrorType.CONFLICT
        stored = app.queries.get_user(ALICE)
        assert (stored.name, stored.avatar, stored.role) == (
            "alice",
            "a.png",
            Role.ADMIN,
        )

    def test_change_avatar(self, open_app):
        """Only the avatar changes, and the change is durable."""
        with open_app() as app:
            app.users.register(ALICE, "alice", "a.png")
            assert app.users.change_avatar(ALICE, "b.png").message == "Avatar updated"

        with open_app() as app:
            stored = app.queries.get_user(ALICE)

        assert (stored.id, stored.name, stored.avatar, stored.role) == (
            ALICE,
            "alice",
            "b.png",
            Role.ADMIN,
        )

    def test_change_avatar_unregistered(self, app):
        result = app.users.change_avatar(BOB, "b.png")

        assert result.error_type is ErrorType.NOT_FOUND
        assert app.queries.get_users() == []


class TestGuards:
    """No guard flag stays set once its operation has returned."""

    def test_flags_clear_after_success_and_failure(self, app):
        forum_id = created_id(app.forums.create_forum("General", "Talk"))
        app.forums.create_thread("T", "t", EntityId.generate())
        app.messages.create_message(ALICE, "hi", "bad", EntityId.generate())
        app.users.register(ALICE, "alice", "a.png")
        app.users.register(ALICE, "alice", "a.png")
        app.users.change_avatar(BOB, "b.png")
        app.forums.create_thread("T", "t", forum_id)

        assert app.guards.snapshot() == {kind: False for kind in MutationKind}
