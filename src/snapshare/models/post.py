"""SQLAlchemy models for posts and the records hanging off them."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.ext.associationproxy import AssociationProxy, association_proxy
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from snapshare.db.session import Base
from snapshare.models.associations import PostTag, folder_post

if TYPE_CHECKING:
    from snapshare.models.folder import Folder
    from snapshare.models.tag import Tag
    from snapshare.models.user import User


class Post(Base):
    """System of record for a shared photo.

    Every post has exactly one search document in the OpenSearch index,
    linked back through ``postId``.
    """

    __tablename__ = "post"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    title: Mapped[str | None] = mapped_column(String(40), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    author_id: Mapped[int | None] = mapped_column(
        BigInteger,
        ForeignKey("app_user.id", ondelete="SET NULL"),
        nullable=True,
    )
    image_id: Mapped[int | None] = mapped_column(
        BigInteger,
        ForeignKey("image.id"),
        nullable=True,
        unique=True,
    )

    tag_links: Mapped[list[PostTag]] = relationship(
        PostTag,
        order_by=PostTag.position,
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    # Tags in the order they were given.
    tags: AssociationProxy[list[Tag]] = association_proxy(
        "tag_links",
        "tag",
        creator=lambda tag: PostTag(tag=tag),
    )
    author: Mapped[User | None] = relationship("User", back_populates="posts")
    comments: Mapped[list[Comment]] = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Comment.id",
    )
    image: Mapped[Image | None] = relationship(
        "Image",
        back_populates="post",
        cascade="all, delete-orphan",
        single_parent=True,
        lazy="joined",
    )
    folders: Mapped[list[Folder]] = relationship(
        "Folder",
        secondary=folder_post,
        back_populates="posts",
    )

    def __repr__(self) -> str:
        return f"Post(id={self.id!r}, title={self.title!r})"


class Comment(Base):
    """A text comment left on a post."""

    __tablename__ = "comment"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    author_username: Mapped[str | None] = mapped_column(String(30), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    post_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
    )

    post: Mapped[Post] = relationship("Post", back_populates="comments")


class Image(Base):
    """Reference to an uploaded image held in external blob storage."""

    __tablename__ = "image"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    file: Mapped[str] = mapped_column(Text, nullable=False)

    post: Mapped[Post | None] = relationship("Post", back_populates="image", uselist=False)
