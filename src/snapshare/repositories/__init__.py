"""Data access layer for the relational post store and the search index."""

from .post_repo import PostRepository
from .search_repo import SearchDocumentRepository
from .tag_repo import TagRepository

__all__ = ["PostRepository", "SearchDocumentRepository", "TagRepository"]
