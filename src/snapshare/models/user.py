"""SQLAlchemy model for registered users as seen by the feed."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.ext.associationproxy import AssociationProxy, association_proxy
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from snapshare.db.session import Base
from snapshare.models.associations import UserTag

if TYPE_CHECKING:
    from snapshare.models.folder import Folder
    from snapshare.models.post import Post
    from snapshare.models.tag import Tag


class User(Base):
    """Registered account.

    Only ``preferred_tags`` matters to the recommendation engine; credentials
    are handled by the authentication service.
    """

    __tablename__ = "app_user"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    username: Mapped[str] = mapped_column(String(30), unique=True, nullable=False)
    email: Mapped[str | None] = mapped_column(String(254), unique=True, nullable=True)

    preferred_tag_links: Mapped[list[UserTag]] = relationship(
        UserTag,
        order_by=UserTag.position,
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    preferred_tags: AssociationProxy[list[Tag]] = association_proxy(
        "preferred_tag_links",
        "tag",
        creator=lambda tag: UserTag(tag=tag),
    )
    posts: Mapped[list[Post]] = relationship("Post", back_populates="author")
    folders: Mapped[list[Folder]] = relationship(
        "Folder",
        back_populates="owner",
        cascade="all, delete-orphan",
    )

    @property
    def preferred_tag_names(self) -> list[str]:
        """Return the names of the user's preferred tags in stored order."""
        return [tag.name for tag in self.preferred_tags]
