import logging
from typing import Optional

from sqlalchemy.orm import Session

from socialnet.core.errors import store_errors
from socialnet.core.result import ErrorKind, Result
from socialnet.db.models.post import Post
from socialnet.schemas.post import PostOut

logger = logging.getLogger(__name__)


@store_errors("creating post")
def create_post(db: Session, user_id: int, content: str, media_url: Optional[str] = None,
                comments_enabled: bool = True) -> Result:
    content = (content or "").strip()
    if not content:
        return Result.fail(ErrorKind.INVALID_INPUT, "Post content is required")

    new_post = Post(
        user_id=user_id,
        content=content,
        media_url=media_url,
        comments_enabled=comments_enabled,
    )
    db.add(new_post)
    db.commit()
    db.refresh(new_post)

    logger.info(f"User {user_id} created post {new_post.id}")
    return Result.ok(PostOut.model_validate(new_post))


@store_errors("deleting post")
def delete_post(db: Session, post_id: int, user_id: int) -> Result:
    post = db.query(Post).filter(
        Post.id == post_id,
        Post.user_id == user_id,
        Post.is_deleted == False
    ).first()
    if not post:
        return Result.fail(ErrorKind.NOT_FOUND, "Post not found or unauthorized")

    snapshot = PostOut.model_validate(post)
    post.is_deleted = True
    db.commit()

    logger.info(f"User {user_id} deleted post {post_id}")
    return Result.ok(snapshot)
