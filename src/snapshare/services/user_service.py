"""Feed preference bookkeeping for users."""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from snapshare.models.user import User
from snapshare.repositories.tag_repo import TagRepository

__all__ = ["get_user", "set_preferred_tags"]


def get_user(db: Session, user_id: int) -> User | None:
    """Return a single user by primary key."""
    return db.get(User, user_id)


def set_preferred_tags(db: Session, user: User, tag_names: Sequence[str]) -> User:
    """Replace the user's preferred tags, creating unknown tags on demand."""
    user.preferred_tags = TagRepository(db).get_or_create_many(tag_names)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
