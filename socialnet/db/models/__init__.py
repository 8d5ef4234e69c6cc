from .user import User
from .post import Post
from .follow import Follow
from .like import Like
from .comment import Comment
