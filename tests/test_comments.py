from __future__ import annotations

import pytest
from sqlalchemy.orm import Session

from socialnet.core.result import ErrorKind
from socialnet.crud import comment as comments
from socialnet.db.models import Comment


@pytest.mark.parametrize("content", ["", "   ", "\n\t"])
def test_blank_comment_is_invalid(db_session: Session, make_user, make_post, content: str) -> None:
    alice = make_user("alice")
    post = make_post(alice)

    result = comments.create_comment(db_session, alice.id, post.id, content)

    assert result.error == ErrorKind.INVALID_INPUT
    assert comments.get_post_comment_count(db_session, post.id) == 0


def test_create_trims_content(db_session: Session, make_user, make_post) -> None:
    alice = make_user("alice")
    post = make_post(alice)

    result = comments.create_comment(db_session, alice.id, post.id, "  hello  ")

    assert result.success
    assert result.data.content == "hello"
    assert result.data.is_deleted is False
    assert comments.get_post_comment_count(db_session, post.id) == 1


def test_comment_on_missing_or_deleted_post(db_session: Session, make_user, make_post) -> None:
    alice = make_user("alice")
    deleted = make_post(alice, is_deleted=True)

    assert comments.create_comment(db_session, alice.id, deleted.id, "hi").error == ErrorKind.NOT_FOUND
    assert comments.create_comment(db_session, alice.id, 777, "hi").error == ErrorKind.NOT_FOUND


def test_comments_disabled_inserts_nothing(db_session: Session, make_user, make_post) -> None:
    alice = make_user("alice")
    post = make_post(alice, comments_enabled=False)

    result = comments.create_comment(db_session, alice.id, post.id, "hi")

    assert result.error == ErrorKind.COMMENTS_DISABLED
    assert db_session.query(Comment).count() == 0


def test_update_by_author(db_session: Session, make_user, make_post) -> None:
    alice = make_user("alice")
    post = make_post(alice)
    created = comments.create_comment(db_session, alice.id, post.id, "first").data

    updated = comments.update_comment(db_session, created.id, alice.id, " second ")

    assert updated.success
    assert updated.data.content == "second"
    assert updated.data.updated_at >= created.updated_at
    assert comments.update_comment(db_session, created.id, alice.id, "  ").error == ErrorKind.INVALID_INPUT


def test_non_author_gets_not_found(db_session: Session, make_user, make_post) -> None:
    alice = make_user("alice")
    mallory = make_user("mallory")
    post = make_post(alice)
    created = comments.create_comment(db_session, alice.id, post.id, "mine").data

    update = comments.update_comment(db_session, created.id, mallory.id, "yours now")
    delete = comments.delete_comment(db_session, created.id, mallory.id)
    missing = comments.delete_comment(db_session, 12345, mallory.id)

    assert update.error == ErrorKind.NOT_FOUND
    assert delete.error == ErrorKind.NOT_FOUND
    # Same answer as for a comment that doesn't exist at all
    assert update.message == missing.message
    assert comments.get_comment_by_id(db_session, created.id).content == "mine"


def test_delete_is_soft_and_only_once(db_session: Session, make_user, make_post) -> None:
    alice = make_user("alice")
    post = make_post(alice)
    created = comments.create_comment(db_session, alice.id, post.id, "bye").data

    first = comments.delete_comment(db_session, created.id, alice.id)
    second = comments.delete_comment(db_session, created.id, alice.id)

    assert first.success
    assert first.data.is_deleted is False  # snapshot taken before the delete
    assert second.error == ErrorKind.NOT_FOUND
    row = db_session.get(Comment, created.id)
    assert row.is_deleted is True
    assert row.content == "bye"
    assert comments.get_comment_by_id(db_session, created.id) is None
    assert comments.get_post_comment_count(db_session, post.id) == 0
    assert comments.update_comment(db_session, created.id, alice.id, "back").error == ErrorKind.NOT_FOUND


def test_listing_newest_first_without_deleted(db_session: Session, make_user, make_post) -> None:
    alice = make_user("alice", full_name="Alice Liddell")
    bob = make_user("bob")
    ghost = make_user("ghost")
    post = make_post(alice)
    comments.create_comment(db_session, alice.id, post.id, "one")
    two = comments.create_comment(db_session, bob.id, post.id, "two").data
    comments.create_comment(db_session, ghost.id, post.id, "boo")
    comments.create_comment(db_session, alice.id, post.id, "three")
    comments.delete_comment(db_session, two.id, bob.id)
    ghost.is_deleted = True
    db_session.commit()

    listed = comments.get_post_comments(db_session, post.id)

    assert [c.content for c in listed] == ["three", "one"]
    assert listed[0].author_name == "Alice Liddell"
    assert listed[0].username == "alice"
    assert [c.content for c in comments.get_post_comments(db_session, post.id, limit=1, offset=1)] == ["one"]
    # Comment count only drops deleted comments, not comments by deleted users
    assert comments.get_post_comment_count(db_session, post.id) == 3


def test_comment_counts_batch(db_session: Session, make_user, make_post) -> None:
    alice = make_user("alice")
    p1 = make_post(alice)
    p2 = make_post(alice)
    comments.create_comment(db_session, alice.id, p1.id, "a")
    comments.create_comment(db_session, alice.id, p1.id, "b")
    gone = comments.create_comment(db_session, alice.id, p2.id, "c").data
    comments.delete_comment(db_session, gone.id, alice.id)

    assert comments.get_comment_counts(db_session, [p1.id, p2.id]) == {p1.id: 2}


def test_comment_by_deleted_author_is_hidden(db_session: Session, make_user, make_post) -> None:
    alice = make_user("alice")
    bob = make_user("bob")
    post = make_post(alice)
    created = comments.create_comment(db_session, bob.id, post.id, "soon gone").data

    bob.is_deleted = True
    db_session.commit()

    assert comments.get_comment_by_id(db_session, created.id) is None
    assert comments.get_post_comments(db_session, post.id) == []
