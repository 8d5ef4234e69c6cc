"""Post views and the home feed.

A post view is the post joined with its author plus three engagement signals:
``like_count``, ``comment_count`` and whether the viewer has liked it.
Signals are fetched per page with grouped queries rather than one query per
post, and the page keeps the order the post query produced.

The feed is a single ordered query over the viewer's own posts and the posts
of everyone they follow. It is simple but it is the query that limits scale:
its cost grows with the viewer's follow fan-out.
"""
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from socialnet.core.errors import store_errors
from socialnet.crud import comment as comment_crud
from socialnet.crud import like as like_crud
from socialnet.db.models.follow import Follow
from socialnet.db.models.post import Post
from socialnet.db.models.user import User
from socialnet.schemas.post import Pagination, PostPage, PostView


def _post_query(db: Session):
    return (
        db.query(
            Post.id,
            Post.user_id,
            Post.content,
            Post.media_url,
            Post.comments_enabled,
            Post.created_at,
            Post.updated_at,
            User.username,
            User.full_name.label("author_name"),
        )
        .join(User, Post.user_id == User.id)
        .filter(Post.is_deleted == False)
    )


def _newest_first(query, page: int, limit: int):
    return (
        query.order_by(Post.created_at.desc(), Post.id.desc())
        .limit(limit)
        .offset((page - 1) * limit)
        .all()
    )


def enrich_posts(db: Session, rows, viewer_id: Optional[int] = None) -> List[PostView]:
    post_ids = [row.id for row in rows]
    like_counts = like_crud.get_like_counts(db, post_ids)
    comment_counts = comment_crud.get_comment_counts(db, post_ids)
    liked = like_crud.get_liked_post_ids(db, viewer_id, post_ids) if viewer_id is not None else set()

    return [
        PostView(
            **row._mapping,
            like_count=like_counts.get(row.id, 0),
            comment_count=comment_counts.get(row.id, 0),
            has_liked=row.id in liked,
        )
        for row in rows
    ]


def _page(db: Session, rows, viewer_id: Optional[int], page: int, limit: int) -> PostPage:
    return PostPage(
        posts=enrich_posts(db, rows, viewer_id),
        pagination=Pagination(page=page, limit=limit, has_more=len(rows) == limit),
    )


@store_errors("getting post")
def get_post_view(db: Session, post_id: int, viewer_id: Optional[int] = None) -> Optional[PostView]:
    row = _post_query(db).filter(Post.id == post_id).first()
    if not row:
        return None
    return enrich_posts(db, [row], viewer_id)[0]


@store_errors("getting user posts")
def get_user_posts(db: Session, target_user_id: int, viewer_id: Optional[int] = None,
                   page: int = 1, limit: int = 20) -> PostPage:
    rows = _newest_first(_post_query(db).filter(Post.user_id == target_user_id), page, limit)
    return _page(db, rows, viewer_id, page, limit)


@store_errors("getting feed")
def get_feed(db: Session, viewer_id: int, page: int = 1, limit: int = 20) -> PostPage:
    followed = select(Follow.following_id).where(Follow.follower_id == viewer_id)
    rows = _newest_first(
        _post_query(db).filter(
            or_(Post.user_id.in_(followed), Post.user_id == viewer_id),
            User.is_deleted == False,
        ),
        page,
        limit,
    )
    return _page(db, rows, viewer_id, page, limit)
