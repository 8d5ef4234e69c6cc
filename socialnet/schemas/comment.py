from datetime import datetime
from pydantic import BaseModel, Field

class CommentCreate(BaseModel):
    content: str = Field(..., max_length=2000)


class CommentUpdate(CommentCreate):
    pass


class CommentOut(BaseModel):
    id: int
    user_id: int
    post_id: int
    content: str
    is_deleted: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CommentWithAuthor(BaseModel):
    id: int
    post_id: int
    content: str
    created_at: datetime
    updated_at: datetime
    user_id: int
    username: str
    author_name: str

    class Config:
        from_attributes = True
