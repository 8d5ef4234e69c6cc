from datetime import datetime
from pydantic import BaseModel

class FollowOut(BaseModel):
    id: int
    follower_id: int
    following_id: int
    created_at: datetime

    class Config:
        from_attributes = True


class FollowedUser(BaseModel):
    """A user on the other end of a follow edge."""
    id: int
    username: str
    full_name: str
    created_at: datetime
    followed_at: datetime

    class Config:
        from_attributes = True
