# mypy: ignore-errors
"""Tests for the narrow post update primitives."""

from setlist_board.models import Post
from setlist_board.repositories.post_repo import PostRepository


def test_adjust_reply_count_floors_at_zero(db_session, make_post, alice) -> None:
    post = make_post(alice, "parent")
    repo = PostRepository(db_session)

    repo.adjust_reply_count(post.id, -1)
    db_session.commit()
    db_session.expire_all()
    assert db_session.get(Post, post.id).reply_count == 0

    repo.adjust_reply_count(post.id, 2)
    db_session.commit()
    db_session.expire_all()
    assert db_session.get(Post, post.id).reply_count == 2


def test_set_vote_counts_derives_score(db_session, make_post, alice) -> None:
    post = make_post(alice, "voted")
    repo = PostRepository(db_session)

    repo.set_vote_counts(post.id, 5, 2)
    db_session.commit()
    db_session.expire_all()
    stored = db_session.get(Post, post.id)
    assert (stored.upvote_count, stored.downvote_count, stored.vote_score) == (5, 2, 3)


def test_increment_flag_count_returns_new_value(db_session, make_post, alice) -> None:
    post = make_post(alice, "flagged")
    repo = PostRepository(db_session)
    assert repo.increment_flag_count(post.id) == 1
    assert repo.increment_flag_count(post.id) == 2


def test_get_visible_filters_invisible(db_session, make_post, alice) -> None:
    repo = PostRepository(db_session)
    shown = make_post(alice, "shown", moderation_status="flagged")
    gone = make_post(alice, "gone", is_deleted=True)

    assert repo.get_visible(shown.id).id == shown.id
    assert repo.get_visible(gone.id) is None
    assert repo.get_by_id(gone.id).id == gone.id
