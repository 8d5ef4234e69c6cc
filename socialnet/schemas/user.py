from datetime import datetime
from pydantic import BaseModel, EmailStr, Field

class UserCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.]+$")
    full_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=72)


class UserOut(BaseModel):
    id: int
    username: str
    full_name: str
    created_at: datetime

    class Config:
        from_attributes = True


class FollowCounts(BaseModel):
    following: int
    followers: int


class UserProfile(UserOut):
    stats: FollowCounts
    is_following: bool = False
