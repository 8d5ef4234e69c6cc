import logging
from typing import Dict, Iterable, List, Set

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from socialnet.core.errors import is_unique_violation, store_errors
from socialnet.core.result import ErrorKind, Result
from socialnet.db.models.like import Like
from socialnet.db.models.post import Post
from socialnet.db.models.user import User
from socialnet.schemas.like import LikeOut, LikedPost, PostLiker

logger = logging.getLogger(__name__)


@store_errors("liking post")
def like_post(db: Session, user_id: int, post_id: int) -> Result:
    post = db.query(Post.id).filter(Post.id == post_id, Post.is_deleted == False).first()
    if not post:
        return Result.fail(ErrorKind.NOT_FOUND, "Post not found")

    like = Like(user_id=user_id, post_id=post_id)
    db.add(like)
    try:
        db.commit()
    except IntegrityError as e:
        if not is_unique_violation(e, "uq_likes_user_post"):
            raise
        db.rollback()
        return Result.fail(ErrorKind.ALREADY_EXISTS, "Already liked this post")
    db.refresh(like)

    logger.info(f"User {user_id} liked post {post_id}")
    return Result.ok(LikeOut.model_validate(like))


@store_errors("unliking post")
def unlike_post(db: Session, user_id: int, post_id: int) -> Result:
    like = db.query(Like).filter(Like.user_id == user_id, Like.post_id == post_id).first()
    if not like:
        return Result.fail(ErrorKind.NOT_FOUND, "Post not liked")

    removed = LikeOut.model_validate(like)
    db.delete(like)
    db.commit()

    logger.info(f"User {user_id} unliked post {post_id}")
    return Result.ok(removed)


@store_errors("getting post likes")
def get_post_likes(db: Session, post_id: int, limit: int = 20, offset: int = 0) -> List[PostLiker]:
    rows = (
        db.query(User.id, User.username, User.full_name, Like.created_at.label("liked_at"))
        .select_from(Like)
        .join(User, Like.user_id == User.id)
        .filter(Like.post_id == post_id, User.is_deleted == False)
        .order_by(Like.created_at.desc(), Like.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )
    return [PostLiker.model_validate(row) for row in rows]


@store_errors("getting user likes")
def get_user_likes(db: Session, user_id: int, limit: int = 20, offset: int = 0) -> List[LikedPost]:
    """Posts ``user_id`` has liked, skipping deleted posts and deleted authors."""
    rows = (
        db.query(
            Post.id,
            Post.content,
            Post.media_url,
            Post.created_at,
            Like.created_at.label("liked_at"),
            User.id.label("user_id"),
            User.username,
            User.full_name.label("author_name"),
        )
        .select_from(Like)
        .join(Post, Like.post_id == Post.id)
        .join(User, Post.user_id == User.id)
        .filter(Like.user_id == user_id, Post.is_deleted == False, User.is_deleted == False)
        .order_by(Like.created_at.desc(), Like.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )
    return [LikedPost.model_validate(row) for row in rows]


@store_errors("getting post like count")
def get_post_like_count(db: Session, post_id: int) -> int:
    # Every like row counts, even when the post was deleted after being liked
    return db.query(func.count(Like.id)).filter(Like.post_id == post_id).scalar() or 0


@store_errors("checking like status")
def has_user_liked_post(db: Session, user_id: int, post_id: int) -> bool:
    return db.query(Like.id).filter(Like.user_id == user_id, Like.post_id == post_id).first() is not None


@store_errors("getting like counts")
def get_like_counts(db: Session, post_ids: Iterable[int]) -> Dict[int, int]:
    """Like count per post for a whole page in one grouped query."""
    post_ids = list(post_ids)
    if not post_ids:
        return {}
    rows = (
        db.query(Like.post_id, func.count(Like.id))
        .filter(Like.post_id.in_(post_ids))
        .group_by(Like.post_id)
        .all()
    )
    return {post_id: count for post_id, count in rows}


@store_errors("getting liked posts")
def get_liked_post_ids(db: Session, user_id: int, post_ids: Iterable[int]) -> Set[int]:
    post_ids = list(post_ids)
    if not post_ids:
        return set()
    rows = db.query(Like.post_id).filter(Like.user_id == user_id, Like.post_id.in_(post_ids)).all()
    return {row.post_id for row in rows}
