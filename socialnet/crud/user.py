import logging
from typing import List, Optional

from sqlalchemy import case, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from socialnet.core.errors import store_errors
from socialnet.core.result import ErrorKind, Result
from socialnet.crud import follow as follow_crud
from socialnet.db.models.user import User
from socialnet.schemas.user import UserOut, UserProfile

logger = logging.getLogger(__name__)


@store_errors("registering user")
def create_user(db: Session, username: str, full_name: str, email: str, hashed_password: str) -> Result:
    new_user = User(
        username=username,
        full_name=full_name.strip(),
        email=email,
        password=hashed_password,
    )
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return Result.fail(ErrorKind.ALREADY_EXISTS, "Username or email already registered")
    db.refresh(new_user)

    logger.info(f"Registered user {new_user.id} ({new_user.username})")
    return Result.ok(UserOut.model_validate(new_user))


@store_errors("getting user")
def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username, User.is_deleted == False).first()


@store_errors("getting user")
def get_active_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id, User.is_deleted == False).first()


@store_errors("getting user profile")
def get_user_profile(db: Session, user_id: int, viewer_id: Optional[int] = None) -> Optional[UserProfile]:
    user = get_active_user(db, user_id)
    if not user:
        return None

    following = False
    if viewer_id is not None:
        following = follow_crud.is_following(db, viewer_id, user.id)

    return UserProfile(
        **UserOut.model_validate(user).model_dump(),
        stats=follow_crud.get_follow_counts(db, user.id),
        is_following=following,
    )


@store_errors("searching users")
def search_users(db: Session, q: str, limit: int = 20, offset: int = 0) -> Result:
    """Case-insensitive substring search, username hits ranked before name hits."""
    term = (q or "").strip()
    if not term:
        return Result.fail(ErrorKind.INVALID_INPUT, "Search query is required")

    pattern = f"%{term}%"
    rank = case(
        (User.username.ilike(pattern), 1),
        (User.full_name.ilike(pattern), 2),
        else_=3,
    )
    users = (
        db.query(User)
        .filter(
            or_(User.username.ilike(pattern), User.full_name.ilike(pattern)),
            User.is_deleted == False
        )
        .order_by(rank, User.created_at.desc(), User.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )
    matches: List[UserOut] = [UserOut.model_validate(user) for user in users]
    return Result.ok(matches)
