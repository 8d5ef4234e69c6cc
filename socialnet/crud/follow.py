"""Follow graph: directed follower -> following edges between users."""
import logging
from typing import List

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from socialnet.core.errors import is_unique_violation, store_errors
from socialnet.core.result import ErrorKind, Result
from socialnet.db.models.follow import Follow
from socialnet.db.models.user import User
from socialnet.schemas.follow import FollowOut, FollowedUser
from socialnet.schemas.user import FollowCounts

logger = logging.getLogger(__name__)


@store_errors("following user")
def follow_user(db: Session, follower_id: int, target_id: int) -> Result:
    if follower_id == target_id:
        return Result.fail(ErrorKind.SELF_REFERENCE, "Cannot follow yourself")

    target = db.query(User.id).filter(User.id == target_id, User.is_deleted == False).first()
    if not target:
        return Result.fail(ErrorKind.NOT_FOUND, "User not found")

    # The unique constraint decides duplicates, so two racing requests can't both win
    edge = Follow(follower_id=follower_id, following_id=target_id)
    db.add(edge)
    try:
        db.commit()
    except IntegrityError as e:
        if not is_unique_violation(e, "uq_follows_pair"):
            raise
        db.rollback()
        return Result.fail(ErrorKind.ALREADY_EXISTS, "Already following this user")
    db.refresh(edge)

    logger.info(f"User {follower_id} followed user {target_id}")
    return Result.ok(FollowOut.model_validate(edge))


@store_errors("unfollowing user")
def unfollow_user(db: Session, follower_id: int, target_id: int) -> Result:
    edge = db.query(Follow).filter(
        Follow.follower_id == follower_id,
        Follow.following_id == target_id
    ).first()
    if not edge:
        return Result.fail(ErrorKind.NOT_FOUND, "Not following this user")

    removed = FollowOut.model_validate(edge)
    db.delete(edge)
    db.commit()

    logger.info(f"User {follower_id} unfollowed user {target_id}")
    return Result.ok(removed)


def _edge_listing(db: Session, join_on, filter_on, user_id: int, limit: int, offset: int) -> List[FollowedUser]:
    rows = (
        db.query(
            User.id,
            User.username,
            User.full_name,
            User.created_at,
            Follow.created_at.label("followed_at"),
        )
        .select_from(Follow)
        .join(User, join_on == User.id)
        .filter(filter_on == user_id, User.is_deleted == False)
        .order_by(Follow.created_at.desc(), Follow.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )
    return [FollowedUser.model_validate(row) for row in rows]


@store_errors("getting following")
def get_following(db: Session, user_id: int, limit: int = 20, offset: int = 0) -> List[FollowedUser]:
    """Users that ``user_id`` follows, most recently followed first."""
    return _edge_listing(db, Follow.following_id, Follow.follower_id, user_id, limit, offset)


@store_errors("getting followers")
def get_followers(db: Session, user_id: int, limit: int = 20, offset: int = 0) -> List[FollowedUser]:
    """Users that follow ``user_id``, most recent follower first."""
    return _edge_listing(db, Follow.follower_id, Follow.following_id, user_id, limit, offset)


@store_errors("getting follow counts")
def get_follow_counts(db: Session, user_id: int) -> FollowCounts:
    # Counts every edge, including ones whose other end has been soft-deleted
    following = db.query(func.count(Follow.id)).filter(Follow.follower_id == user_id).scalar()
    followers = db.query(func.count(Follow.id)).filter(Follow.following_id == user_id).scalar()
    return FollowCounts(following=following or 0, followers=followers or 0)


@store_errors("checking follow status")
def is_following(db: Session, follower_id: int, following_id: int) -> bool:
    return db.query(Follow.id).filter(
        Follow.follower_id == follower_id,
        Follow.following_id == following_id
    ).first() is not None
