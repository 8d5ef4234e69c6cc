from datetime import datetime
from typing import Optional
from pydantic import BaseModel

class LikeOut(BaseModel):
    id: int
    user_id: int
    post_id: int
    created_at: datetime

    class Config:
        from_attributes = True


class PostLiker(BaseModel):
    id: int
    username: str
    full_name: str
    liked_at: datetime

    class Config:
        from_attributes = True


class LikedPost(BaseModel):
    id: int
    content: str
    media_url: Optional[str] = None
    created_at: datetime
    liked_at: datetime
    user_id: int
    username: str
    author_name: str

    class Config:
        from_attributes = True
