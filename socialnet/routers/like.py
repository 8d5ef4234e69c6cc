from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from socialnet.core.config import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from socialnet.core.errors import unwrap
from socialnet.core.security import get_current_user
from socialnet.crud import like as crud
from socialnet.db.models.user import User
from socialnet.db.session import get_db

router = APIRouter()


@router.post("/{post_id}", status_code=status.HTTP_201_CREATED)
def like_post(
    post_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    like = unwrap(crud.like_post(db, current_user.id, post_id))
    return {"message": "Post liked", "data": like}


@router.delete("/{post_id}")
def unlike_post(
    post_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    like = unwrap(crud.unlike_post(db, current_user.id, post_id))
    return {"message": "Like removed", "data": like}


@router.get("/user/me")
def get_my_likes(
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    posts = crud.get_user_likes(db, current_user.id, limit, offset)
    return {"data": posts, "pagination": {"limit": limit, "offset": offset}}


@router.get("/{post_id}")
def get_post_likes(
    post_id: int = Path(..., ge=1),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    likers = crud.get_post_likes(db, post_id, limit, offset)
    return {"data": likers, "pagination": {"limit": limit, "offset": offset}}


@router.get("/{post_id}/count")
def get_post_like_count(
    post_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return {"data": {"count": crud.get_post_like_count(db, post_id)}}


@router.get("/{post_id}/status")
def get_like_status(
    post_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return {"data": {"has_liked": crud.has_user_liked_post(db, current_user.id, post_id)}}
