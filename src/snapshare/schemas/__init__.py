"""Pydantic schemas and pagination containers."""

from .common import Page, PageRequest, PageResponse
from .post import PostCreate, PostResponse, PostUpdate
from .search import SearchDocument
from .user import PreferredTagsUpdate, UserResponse

__all__ = [
    "Page", "PageRequest", "PageResponse",
    "PostCreate", "PostResponse", "PostUpdate",
    "SearchDocument",
    "PreferredTagsUpdate", "UserResponse",
]
