import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from socialnet.core.errors import store_errors
from socialnet.core.result import ErrorKind, Result
from socialnet.db.base import utcnow
from socialnet.db.models.comment import Comment
from socialnet.db.models.post import Post
from socialnet.db.models.user import User
from socialnet.schemas.comment import CommentOut, CommentWithAuthor

logger = logging.getLogger(__name__)

EMPTY_CONTENT = "Comment content is required"
NOT_FOUND_OR_NOT_OWNER = "Comment not found or not authorized"


def _owned_comment(db: Session, comment_id: int, user_id: int) -> Optional[Comment]:
    # One predicate for existence, ownership and deletion so that a
    # non-author can't tell an existing comment from a missing one
    return db.query(Comment).filter(
        Comment.id == comment_id,
        Comment.user_id == user_id,
        Comment.is_deleted == False
    ).first()


def _with_author(db: Session):
    return (
        db.query(
            Comment.id,
            Comment.post_id,
            Comment.content,
            Comment.created_at,
            Comment.updated_at,
            User.id.label("user_id"),
            User.username,
            User.full_name.label("author_name"),
        )
        .join(User, Comment.user_id == User.id)
        .filter(Comment.is_deleted == False, User.is_deleted == False)
    )


@store_errors("creating comment")
def create_comment(db: Session, user_id: int, post_id: int, content: str) -> Result:
    content = (content or "").strip()
    if not content:
        return Result.fail(ErrorKind.INVALID_INPUT, EMPTY_CONTENT)

    post = db.query(Post.id, Post.comments_enabled).filter(
        Post.id == post_id,
        Post.is_deleted == False
    ).first()
    if not post:
        return Result.fail(ErrorKind.NOT_FOUND, "Post not found")
    if not post.comments_enabled:
        return Result.fail(ErrorKind.COMMENTS_DISABLED, "Comments are disabled for this post")

    comment = Comment(user_id=user_id, post_id=post_id, content=content)
    db.add(comment)
    db.commit()
    db.refresh(comment)

    logger.info(f"User {user_id} commented on post {post_id}")
    return Result.ok(CommentOut.model_validate(comment))


@store_errors("updating comment")
def update_comment(db: Session, comment_id: int, user_id: int, content: str) -> Result:
    content = (content or "").strip()
    if not content:
        return Result.fail(ErrorKind.INVALID_INPUT, EMPTY_CONTENT)

    comment = _owned_comment(db, comment_id, user_id)
    if not comment:
        return Result.fail(ErrorKind.NOT_FOUND, NOT_FOUND_OR_NOT_OWNER)

    comment.content = content
    comment.updated_at = utcnow()
    db.commit()
    db.refresh(comment)

    return Result.ok(CommentOut.model_validate(comment))


@store_errors("deleting comment")
def delete_comment(db: Session, comment_id: int, user_id: int) -> Result:
    comment = _owned_comment(db, comment_id, user_id)
    if not comment:
        return Result.fail(ErrorKind.NOT_FOUND, NOT_FOUND_OR_NOT_OWNER)

    snapshot = CommentOut.model_validate(comment)
    comment.is_deleted = True
    db.commit()

    logger.info(f"User {user_id} deleted comment {comment_id}")
    return Result.ok(snapshot)


@store_errors("getting post comments")
def get_post_comments(db: Session, post_id: int, limit: int = 20, offset: int = 0) -> List[CommentWithAuthor]:
    rows = (
        _with_author(db)
        .filter(Comment.post_id == post_id)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )
    return [CommentWithAuthor.model_validate(row) for row in rows]


@store_errors("getting post comment count")
def get_post_comment_count(db: Session, post_id: int) -> int:
    return db.query(func.count(Comment.id)).filter(
        Comment.post_id == post_id,
        Comment.is_deleted == False
    ).scalar() or 0


@store_errors("getting comment counts")
def get_comment_counts(db: Session, post_ids: Iterable[int]) -> Dict[int, int]:
    post_ids = list(post_ids)
    if not post_ids:
        return {}
    rows = (
        db.query(Comment.post_id, func.count(Comment.id))
        .filter(Comment.post_id.in_(post_ids), Comment.is_deleted == False)
        .group_by(Comment.post_id)
        .all()
    )
    return {post_id: count for post_id, count in rows}


@store_errors("getting comment")
def get_comment_by_id(db: Session, comment_id: int) -> Optional[CommentWithAuthor]:
    row = _with_author(db).filter(Comment.id == comment_id).first()
    return CommentWithAuthor.model_validate(row) if row else None
