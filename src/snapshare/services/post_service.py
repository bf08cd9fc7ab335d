"""Post lifecycle and keyword search across the post store and search index."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from snapshare.core.errors import ForbiddenActionError, PostNotFoundError
from snapshare.models.post import Image, Post
from snapshare.models.user import User
from snapshare.repositories.post_repo import PostRepository
from snapshare.repositories.search_repo import SearchDocumentRepository
from snapshare.repositories.tag_repo import TagRepository
from snapshare.schemas.common import Page, PageRequest
from snapshare.schemas.post import PostCreate, PostUpdate
from snapshare.services.index_mapper import to_search_document

logger = logging.getLogger(__name__)


class PostService:
    """Keeps post rows and their search documents in step.

    Every mutation flushes the row, writes the search document and only then
    commits, so a failing index write rolls the row change back instead of
    leaving the two stores out of sync.
    """

    def __init__(
        self,
        db: Session,
        search_repo: SearchDocumentRepository,
        *,
        post_repo: PostRepository | None = None,
        tag_repo: TagRepository | None = None,
    ) -> None:
        self.db = db
        self.search_repo = search_repo
        self.post_repo = post_repo or PostRepository(db)
        self.tag_repo = tag_repo or TagRepository(db)

    def get_post(self, post_id: int) -> Post:
        """Return a post or raise :class:`PostNotFoundError`."""
        post = self.post_repo.find_by_id(post_id)
        if post is None:
            logger.error("Post not found for ID: %s", post_id)
            raise PostNotFoundError(post_id)
        return post

    def list_posts(self, page: PageRequest) -> Page[Post]:
        return self.post_repo.find_all(page)

    def read_all_by_ids(self, ids: Sequence[int], page: PageRequest) -> Page[Post]:
        return self.post_repo.find_all_by_ids(ids, page)

    def create_post(self, data: PostCreate, author: User | None) -> Post:
        """Persist a new post and index it."""
        post = Post(
            title=data.title,
            description=data.description,
            author=author,
            tags=self.tag_repo.get_or_create_many(data.tags),
        )
        if data.image_url:
            post.image = Image(file=data.image_url)

        logger.info("Saving new post to database: %r", post)
        try:
            self.post_repo.save(post)
            self.search_repo.save(to_search_document(post))
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(post)
        return post

    def update_post(self, post_id: int, data: PostUpdate, actor: User) -> Post:
        """Apply ``data`` to a post owned by ``actor`` and re-index it."""
        post = self.get_post(post_id)
        self._ensure_author(post, actor)

        logger.info("Updating post: %s", post_id)
        changes = data.model_dump(exclude_unset=True)
        if "title" in changes and data.title is not None:
            post.title = data.title
        if "description" in changes:
            post.description = data.description
        if "tags" in changes:
            post.tags = self.tag_repo.get_or_create_many(data.tags or [])
        if "image_url" in changes:
            post.image = Image(file=data.image_url) if data.image_url else None

        try:
            self.post_repo.save(post)
            self.search_repo.save(to_search_document(post))
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(post)
        return post

    def delete_post(self, post_id: int, actor: User) -> None:
        """Delete a post owned by ``actor`` together with its search document."""
        logger.info("Attempting to delete post with ID: %s", post_id)
        post = self.get_post(post_id)
        self._ensure_author(post, actor)

        try:
            self.post_repo.delete(post)
            self.search_repo.delete_by_post_id(post_id)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("Successfully deleted post and its search document with ID: %s", post_id)

    def search(self, keyword: str, page: PageRequest) -> Page[Post]:
        """Full-text search over title and description.

        The index decides which post ids are on the requested page; the rows
        are then loaded from the post store with the same page request.
        """
        logger.info("Searching for posts with keyword: %s", keyword)
        documents = self.search_repo.find_by_title_or_description(keyword, page)
        if documents.is_empty:
            logger.warning("No posts found for keyword: %s", keyword)
            return Page.empty(page)

        ids = [document.post_id for document in documents]
        logger.info("Found %d posts in the search index. Retrieving from the database...", documents.total)
        return self.post_repo.find_all_by_ids(ids, page)

    @staticmethod
    def _ensure_author(post: Post, actor: User) -> None:
        if post.author_id != actor.id:
            logger.warning("User %s may not modify post %s", actor.id, post.id)
            raise ForbiddenActionError(f"Post {post.id} belongs to another user")
