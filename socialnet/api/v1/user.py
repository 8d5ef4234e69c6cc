from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy.orm import Session

from socialnet.core.config import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from socialnet.core.errors import unwrap
from socialnet.core.security import get_current_user, get_optional_user
from socialnet.crud import feed as feed_crud
from socialnet.crud import follow as follow_crud
from socialnet.crud import user as user_crud
from socialnet.db.models.user import User
from socialnet.db.session import get_db
from socialnet.schemas.follow import FollowedUser
from socialnet.schemas.post import PostPage
from socialnet.schemas.user import FollowCounts, UserOut, UserProfile

router = APIRouter()


# Static paths are declared before /{user_id} so they aren't shadowed by it
@router.get("/following")
def get_my_following(
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    following: List[FollowedUser] = follow_crud.get_following(db, current_user.id, limit, offset)
    return {"data": following, "pagination": {"limit": limit, "offset": offset}}


@router.get("/followers")
def get_my_followers(
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    followers: List[FollowedUser] = follow_crud.get_followers(db, current_user.id, limit, offset)
    return {"data": followers, "pagination": {"limit": limit, "offset": offset}}


@router.get("/stats")
def get_follow_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    stats: FollowCounts = follow_crud.get_follow_counts(db, current_user.id)
    return {"data": stats}


@router.get("/search")
def search_users(
    q: str = Query(..., max_length=100),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    users: List[UserOut] = unwrap(user_crud.search_users(db, q, limit, offset))
    return {"data": users, "pagination": {"limit": limit, "offset": offset}}


@router.get("/{user_id}")
def get_user_profile(
    user_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user)
):
    viewer_id = current_user.id if current_user else None
    profile: Optional[UserProfile] = user_crud.get_user_profile(db, user_id, viewer_id)
    if not profile:
        raise HTTPException(status_code=404, detail="User not found")
    return {"data": profile}


@router.get("/{user_id}/posts", response_model=PostPage)
def get_user_posts(
    user_id: int = Path(..., ge=1),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user)
):
    viewer_id = current_user.id if current_user else None
    return feed_crud.get_user_posts(db, user_id, viewer_id, page, limit)


@router.post("/{user_id}/follow")
def follow(
    user_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    edge = unwrap(follow_crud.follow_user(db, current_user.id, user_id))
    return {"message": "Successfully followed user", "data": edge}


@router.delete("/{user_id}/unfollow")
def unfollow(
    user_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    edge = unwrap(follow_crud.unfollow_user(db, current_user.id, user_id))
    return {"message": "Successfully unfollowed user", "data": edge}
