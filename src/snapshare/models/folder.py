"""SQLAlchemy model for user-owned folders of posts."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from snapshare.db.session import Base
from snapshare.models.associations import folder_post

if TYPE_CHECKING:
    from snapshare.models.post import Post
    from snapshare.models.user import User


class Folder(Base):
    """Named collection of posts owned by a user."""

    __tablename__ = "folder"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    title: Mapped[str] = mapped_column(String(40), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    owner_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=False,
    )

    owner: Mapped[User] = relationship("User", back_populates="folders")
    posts: Mapped[list[Post]] = relationship(
        "Post",
        secondary=folder_post,
        back_populates="folders",
    )
