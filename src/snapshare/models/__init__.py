"""SQLAlchemy models for the SnapShare post store."""

from .associations import PostTag, UserTag
from .folder import Folder
from .post import Comment, Image, Post
from .tag import Tag
from .user import User

__all__ = [
    "Comment", "Image", "Post",
    "PostTag", "UserTag",
    "Folder",
    "Tag",
    "User",
]
