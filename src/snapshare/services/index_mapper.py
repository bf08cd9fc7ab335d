"""Projection of post rows onto search documents."""
from __future__ import annotations

from collections.abc import Iterable

from snapshare.models.post import Post
from snapshare.models.tag import Tag
from snapshare.schemas.search import SearchDocument


def to_search_document(post: Post | None) -> SearchDocument | None:
    """Return the search document for ``post``, or None when there is no post."""
    if post is None:
        return None
    return SearchDocument(
        post_id=post.id,
        title=post.title,
        description=post.description,
        tags=map_tags(post.tags),
    )


def map_tags(tags: Iterable[Tag] | None) -> list[str]:
    """Flatten tags to their names. A missing tag list maps to an empty list."""
    if tags is None:
        return []
    return [tag.name for tag in tags]
