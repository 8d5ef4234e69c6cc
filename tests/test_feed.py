from __future__ import annotations

from sqlalchemy.orm import Session

from socialnet.crud import comment as comments
from socialnet.crud import feed
from socialnet.crud import follow as follows
from socialnet.crud import like as likes


def test_post_view_scenario(db_session: Session, make_user, make_post) -> None:
    user1 = make_user("user1")
    user2 = make_user("user2")
    follows.follow_user(db_session, user1.id, user2.id)
    p1 = make_post(user2, content="P1", comments_enabled=True)

    assert comments.create_comment(db_session, user1.id, p1.id, "hello").success
    assert comments.get_post_comment_count(db_session, p1.id) == 1
    assert likes.like_post(db_session, user1.id, p1.id).success
    assert likes.get_post_like_count(db_session, p1.id) == 1
    assert likes.has_user_liked_post(db_session, user1.id, p1.id)

    view = feed.get_post_view(db_session, p1.id, viewer_id=user1.id)

    assert view.like_count == 1
    assert view.comment_count == 1
    assert view.has_liked is True
    assert view.username == "user2"


def test_post_view_anonymous_and_missing(db_session: Session, make_user, make_post) -> None:
    alice = make_user("alice")
    post = make_post(alice)
    gone = make_post(alice, is_deleted=True)
    likes.like_post(db_session, alice.id, post.id)

    view = feed.get_post_view(db_session, post.id)

    assert view.like_count == 1
    assert view.has_liked is False
    assert feed.get_post_view(db_session, gone.id) is None
    assert feed.get_post_view(db_session, 31337, viewer_id=alice.id) is None


def test_feed_is_own_plus_followed_posts(db_session: Session, make_user, make_post) -> None:
    viewer = make_user("viewer")
    friend = make_user("friend")
    stranger = make_user("stranger")
    departed = make_user("departed")
    follows.follow_user(db_session, viewer.id, friend.id)
    follows.follow_user(db_session, viewer.id, departed.id)

    own = make_post(viewer, content="own")
    friend_old = make_post(friend, content="friend old")
    make_post(stranger, content="stranger")
    make_post(friend, content="friend deleted", is_deleted=True)
    make_post(departed, content="departed")
    friend_new = make_post(friend, content="friend new")
    departed.is_deleted = True
    db_session.commit()

    result = feed.get_feed(db_session, viewer.id, page=1, limit=10)

    assert [p.id for p in result.posts] == [friend_new.id, friend_old.id, own.id]
    assert result.pagination.has_more is False


def test_feed_pagination_and_has_more_heuristic(db_session: Session, make_user, make_post) -> None:
    viewer = make_user("viewer")
    friend = make_user("friend")
    follows.follow_user(db_session, viewer.id, friend.id)
    posts = [make_post(friend, content=f"post {i}") for i in range(4)]

    first = feed.get_feed(db_session, viewer.id, page=1, limit=2)
    second = feed.get_feed(db_session, viewer.id, page=2, limit=2)
    third = feed.get_feed(db_session, viewer.id, page=3, limit=2)

    assert [p.content for p in first.posts] == ["post 3", "post 2"]
    assert [p.content for p in second.posts] == ["post 1", "post 0"]
    # A full last page still reports has_more
    assert second.pagination.has_more is True
    assert third.posts == []
    assert third.pagination.has_more is False
    assert len(posts) == 4


def test_feed_enrichment_keeps_page_order(db_session: Session, make_user, make_post) -> None:
    viewer = make_user("viewer")
    friend = make_user("friend")
    follows.follow_user(db_session, viewer.id, friend.id)
    older = make_post(friend, content="older")
    newer = make_post(viewer, content="newer")
    likes.like_post(db_session, viewer.id, older.id)
    likes.like_post(db_session, friend.id, older.id)
    comments.create_comment(db_session, friend.id, newer.id, "nice")

    page = feed.get_feed(db_session, viewer.id)

    assert [(p.id, p.like_count, p.comment_count, p.has_liked) for p in page.posts] == [
        (newer.id, 0, 1, False),
        (older.id, 2, 0, True),
    ]


def test_user_posts_newest_first(db_session: Session, make_user, make_post) -> None:
    alice = make_user("alice")
    bob = make_user("bob")
    make_post(alice, content="a1")
    make_post(alice, content="a2", is_deleted=True)
    a3 = make_post(alice, content="a3")
    make_post(bob, content="b1")
    likes.like_post(db_session, bob.id, a3.id)

    as_bob = feed.get_user_posts(db_session, alice.id, viewer_id=bob.id)
    anonymous = feed.get_user_posts(db_session, alice.id)

    assert [p.content for p in as_bob.posts] == ["a3", "a1"]
    assert as_bob.posts[0].has_liked is True
    assert anonymous.posts[0].has_liked is False
    assert anonymous.pagination.page == 1
    assert anonymous.pagination.limit == 20
