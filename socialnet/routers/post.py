from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.orm import Session

from socialnet.core.config import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from socialnet.core.errors import unwrap
from socialnet.core.security import get_current_user, get_optional_user
from socialnet.crud import feed as feed_crud
from socialnet.crud import post as crud
from socialnet.db.models.user import User
from socialnet.db.session import get_db
from socialnet.schemas.post import PostCreate, PostPage

router = APIRouter()


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_post(
    post_in: PostCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    post = unwrap(crud.create_post(
        db,
        user_id=current_user.id,
        content=post_in.content,
        media_url=post_in.media_url,
        comments_enabled=post_in.comments_enabled,
    ))
    return {"message": "Post created successfully", "data": post}


# Posts from followed users plus the current user's own posts
@router.get("/feed", response_model=PostPage)
def get_feed(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return feed_crud.get_feed(db, current_user.id, page, limit)


#get posts of current user
@router.get("/me", response_model=PostPage)
def get_my_posts(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return feed_crud.get_user_posts(db, current_user.id, current_user.id, page, limit)


@router.get("/{post_id}")
def get_post_by_id(
    post_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user)
):
    viewer_id = current_user.id if current_user else None
    post = feed_crud.get_post_view(db, post_id, viewer_id)
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return {"post": post}


#delete post
@router.delete("/{post_id}")
def delete_post(
    post_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    post = unwrap(crud.delete_post(db, post_id, current_user.id))
    return {"message": "Post deleted successfully", "data": post}
