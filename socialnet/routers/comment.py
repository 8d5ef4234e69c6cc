from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.orm import Session

from socialnet.core.config import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from socialnet.core.errors import unwrap
from socialnet.core.security import get_current_user
from socialnet.crud import comment as crud
from socialnet.db.models.user import User
from socialnet.db.session import get_db
from socialnet.schemas.comment import CommentCreate, CommentUpdate

router = APIRouter()


@router.post("/{post_id}", status_code=status.HTTP_201_CREATED)
def create_comment(
    comment_in: CommentCreate,
    post_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    comment = unwrap(crud.create_comment(db, current_user.id, post_id, comment_in.content))
    return {"message": "Comment created successfully", "data": comment}


@router.put("/{comment_id}")
def update_comment(
    comment_in: CommentUpdate,
    comment_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    comment = unwrap(crud.update_comment(db, comment_id, current_user.id, comment_in.content))
    return {"message": "Comment updated successfully", "data": comment}


@router.delete("/{comment_id}")
def delete_comment(
    comment_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    comment = unwrap(crud.delete_comment(db, comment_id, current_user.id))
    return {"message": "Comment deleted successfully", "data": comment}


@router.get("/single/{comment_id}")
def get_comment_by_id(
    comment_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    comment = crud.get_comment_by_id(db, comment_id)
    if not comment:
        raise HTTPException(status_code=404, detail="Comment not found")
    return {"data": comment}


@router.get("/{post_id}")
def get_post_comments(
    post_id: int = Path(..., ge=1),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    comments = crud.get_post_comments(db, post_id, limit, offset)
    return {"data": comments, "pagination": {"limit": limit, "offset": offset}}


@router.get("/{post_id}/count")
def get_post_comment_count(
    post_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return {"data": {"count": crud.get_post_comment_count(db, post_id)}}
