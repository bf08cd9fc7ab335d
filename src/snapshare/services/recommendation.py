"""Personalised, tag-driven feed with a guest fallback."""
from __future__ import annotations

import logging
from collections.abc import Iterable

from snapshare.core.errors import AssociationServiceError, ServiceUnavailableError
from snapshare.models.post import Post
from snapshare.models.user import User
from snapshare.repositories.post_repo import PostRepository
from snapshare.repositories.search_repo import SearchDocumentRepository
from snapshare.schemas.common import Page, PageRequest
from snapshare.schemas.search import SearchDocument
from snapshare.services.association import AssociationClient

logger = logging.getLogger(__name__)


def merge_documents(*pages: Iterable[SearchDocument]) -> list[SearchDocument]:
    """Concatenate pages and drop repeated documents, keeping first occurrences."""
    seen: set[str | int] = set()
    merged: list[SearchDocument] = []
    for page in pages:
        for document in page:
            key = document.document_id if document.document_id is not None else document.post_id
            if key in seen:
                continue
            seen.add(key)
            merged.append(document)
    return merged


class RecommendationService:
    """Builds the home feed of a user from their preferred tags.

    The preferred tags are widened through the association service, then the
    index is asked three separate questions over the same page window: posts
    with any of the tags, posts with none of them, and untagged posts. Tag
    matches come first; the other two back-fill so a page never shrinks just
    because few posts match the user's interests.

    Users without preferences, and feeds that come back empty, get the guest
    feed. An unreachable association service is an error, not a fallback.
    """

    def __init__(
        self,
        post_repo: PostRepository,
        search_repo: SearchDocumentRepository,
        association_client: AssociationClient,
    ) -> None:
        self.post_repo = post_repo
        self.search_repo = search_repo
        self.association_client = association_client

    def recommended_posts(self, user: User, page: PageRequest) -> Page[Post]:
        tag_names = user.preferred_tag_names
        if not tag_names:
            logger.debug("User %s has no preferred tags, serving guest feed", user.id)
            return self.guest_posts(page)

        try:
            associated = self.association_client.get_associations(tag_names)
        except AssociationServiceError as exc:
            logger.error("Association service unavailable for user %s: %s", user.id, exc)
            raise ServiceUnavailableError() from exc

        combined_tags = list(dict.fromkeys([*tag_names, *associated]))

        with_tags = self.search_repo.find_posts_by_tags(combined_tags, page)
        excluding_tags = self.search_repo.find_posts_excluding_tags(combined_tags, page)
        without_tags = self.search_repo.find_posts_without_tags(page)

        documents = merge_documents(with_tags, excluding_tags, without_tags)
        if not documents:
            logger.info("No indexed posts to recommend for user %s, serving guest feed", user.id)
            return self.guest_posts(page)

        post_ids = [document.post_id for document in documents]
        return self.post_repo.find_all_by_ids(post_ids, page)

    def guest_posts(self, page: PageRequest) -> Page[Post]:
        """Unfiltered page of posts in natural order; no index involvement."""
        return self.post_repo.find_all(page)
