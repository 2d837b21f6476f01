# mypy: ignore-errors
"""Tests for emoji reactions."""

import pytest
from sqlalchemy import select

from setlist_board.core.errors import NotFoundError, ValidationError
from setlist_board.models import Notification


def test_toggle_adds_then_removes(services, alice, bob) -> None:
    post = services.posts.create_post(alice.id, "React to me")

    assert services.reactions.toggle_reaction(post.id, bob.id, "fire") == ("added", 1)
    assert services.reactions.toggle_reaction(post.id, bob.id, "fire") == ("removed", 0)


def test_count_is_per_emoji(services, alice, bob, carol) -> None:
    post = services.posts.create_post(alice.id, "React to me")
    services.reactions.toggle_reaction(post.id, bob.id, "fire")
    services.reactions.toggle_reaction(post.id, bob.id, "heart")

    assert services.reactions.toggle_reaction(post.id, carol.id, "fire") == ("added", 2)
    assert services.reactions.get_reaction_summary(post.id) == [("fire", 2), ("heart", 1)]


def test_adding_reaction_notifies_author_once(services, db_session, alice, bob) -> None:
    post = services.posts.create_post(alice.id, "React to me")
    services.reactions.toggle_reaction(post.id, bob.id, "fire")
    services.reactions.toggle_reaction(post.id, bob.id, "fire")

    notifications = db_session.execute(select(Notification)).scalars().all()
    assert len(notifications) == 1
    assert notifications[0].type == "reaction"
    assert notifications[0].user_id == alice.id
    assert notifications[0].actor_id == bob.id


def test_self_reaction_does_not_notify(services, db_session, alice) -> None:
    post = services.posts.create_post(alice.id, "Mine")
    services.reactions.toggle_reaction(post.id, alice.id, "fire")
    assert db_session.execute(select(Notification)).scalars().all() == []


def test_reaction_validation(services, alice, bob) -> None:
    post = services.posts.create_post(alice.id, "React to me")
    with pytest.raises(ValidationError):
        services.reactions.toggle_reaction(post.id, bob.id, "  ")
    with pytest.raises(ValidationError):
        services.reactions.toggle_reaction(post.id, bob.id, "x" * 33)
    with pytest.raises(NotFoundError):
        services.reactions.toggle_reaction("missing", bob.id, "fire")

    services.posts.delete_post(post.id, alice.id)
    with pytest.raises(NotFoundError):
        services.reactions.toggle_reaction(post.id, bob.id, "fire")
