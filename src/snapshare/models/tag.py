"""SQLAlchemy model for tags."""

from __future__ import annotations

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from snapshare.db.session import Base

TAG_NAME_MAX_LENGTH = 30


class Tag(Base):
    """A named label attached to posts and preferred by users.

    Posts and users reach their tags through ordered link rows
    (:class:`~snapshare.models.associations.PostTag`,
    :class:`~snapshare.models.associations.UserTag`).
    """

    __tablename__ = "tag"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String(TAG_NAME_MAX_LENGTH), unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"Tag(name={self.name!r})"
