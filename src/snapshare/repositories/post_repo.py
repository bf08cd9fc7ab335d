"""Data access helpers for working with posts."""
from __future__ import annotations

from collections.abc import Iterator, Sequence

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from snapshare.models.post import Post
from snapshare.schemas.common import Page, PageRequest

__all__ = ["PostRepository"]


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_id(self, post_id: int) -> Post | None:
        """Return a post by identifier."""
        return self.session.get(Post, post_id)

    def find_all(self, page: PageRequest) -> Page[Post]:
        """Return one page of posts in natural (id) order, unfiltered."""
        total = self.count()
        if total == 0:
            return Page.empty(page)
        result = self.session.execute(
            select(Post).order_by(Post.id).offset(page.offset).limit(page.size)
        )
        return Page(content=list(result.scalars().unique()), request=page, total=total)

    def find_all_by_ids(self, ids: Sequence[int], page: PageRequest) -> Page[Post]:
        """Return the posts whose ids are in ``ids``, paginated by ``page``.

        Rows come back in the order of ``ids`` (first occurrence wins), so a
        caller passing ids ranked by the search index keeps that ranking.
        Ids with no matching row are skipped.
        """
        positions: dict[int, int] = {}
        for post_id in ids:
            positions.setdefault(post_id, len(positions))
        if not positions:
            return Page.empty(page)

        id_filter = Post.id.in_(list(positions))
        total = self.session.scalar(select(func.count()).select_from(Post).where(id_filter)) or 0
        if total == 0:
            return Page.empty(page)

        stmt = (
            select(Post)
            .where(id_filter)
            .order_by(case(positions, value=Post.id), Post.id)
            .offset(page.offset)
            .limit(page.size)
        )
        result = self.session.execute(stmt)
        return Page(content=list(result.scalars().unique()), request=page, total=total)

    def list_all(self) -> list[Post]:
        """Return every post ordered by id."""
        result = self.session.execute(select(Post).order_by(Post.id))
        return list(result.scalars().unique())

    def iter_batches(self, batch_size: int) -> Iterator[list[Post]]:
        """Yield every post in id order, ``batch_size`` rows at a time."""
        last_id = 0
        while True:
            result = self.session.execute(
                select(Post).where(Post.id > last_id).order_by(Post.id).limit(batch_size)
            )
            batch = list(result.scalars().unique())
            if not batch:
                return
            yield batch
            last_id = batch[-1].id

    def count(self) -> int:
        """Return the total number of posts."""
        return self.session.scalar(select(func.count()).select_from(Post)) or 0

    def save(self, post: Post) -> Post:
        """Add or update ``post`` and flush so that its id is assigned."""
        self.session.add(post)
        self.session.flush()
        return post

    def delete(self, post: Post) -> None:
        """Remove ``post`` and its owned records."""
        self.session.delete(post)
        self.session.flush()
