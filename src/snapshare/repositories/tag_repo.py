"""Data access helpers for tags."""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from snapshare.models.tag import Tag

__all__ = ["TagRepository"]


class TagRepository:
    """Lookup and on-demand creation of tags by name."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_names(self, names: Sequence[str]) -> list[Tag]:
        """Return existing tags whose names are in ``names``."""
        if not names:
            return []
        result = self.session.execute(select(Tag).where(Tag.name.in_(list(names))))
        return list(result.scalars())

    def get_or_create_many(self, names: Sequence[str]) -> list[Tag]:
        """Return one tag per distinct name, creating missing ones.

        The result follows the order of ``names``.
        """
        existing = {tag.name: tag for tag in self.find_by_names(names)}
        tags: list[Tag] = []
        for name in names:
            tag = existing.get(name)
            if tag is None:
                tag = Tag(name=name)
                self.session.add(tag)
                existing[name] = tag
            if tag not in tags:
                tags.append(tag)
        self.session.flush()
        return tags
