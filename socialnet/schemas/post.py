from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional

class PostBase(BaseModel):
    content: str = Field(..., max_length=5000)
    media_url: Optional[str] = Field(None, max_length=2048)
    comments_enabled: bool = True

class PostCreate(PostBase):
    pass

class PostOut(PostBase):
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class PostWithAuthor(PostOut):
    username: str
    author_name: str

    class Config:
        from_attributes = True

class PostView(PostWithAuthor):
    like_count: int = 0
    comment_count: int = 0
    has_liked: bool = False

class Pagination(BaseModel):
    page: int
    limit: int
    # len(page) == limit; may be true on an exact last page
    has_more: bool

class PostPage(BaseModel):
    posts: List[PostView]
    pagination: Pagination
