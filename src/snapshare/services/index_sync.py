"""Bootstrap and reconciliation of the search index from the post store."""
from __future__ import annotations

import logging

from snapshare.repositories.post_repo import PostRepository
from snapshare.repositories.search_repo import SearchDocumentRepository
from snapshare.services.index_mapper import to_search_document

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 500


class IndexSynchronizer:
    """Copies posts from the relational store into the search index.

    :meth:`sync_posts` is the startup bootstrap: it only populates an empty
    index, so calling it on every start is safe. It does not heal an index
    that is already partially populated; that is what the per-mutation writes
    in :class:`~snapshare.services.post_service.PostService` and the explicit
    :meth:`reindex_all` are for.
    """

    def __init__(
        self,
        post_repo: PostRepository,
        search_repo: SearchDocumentRepository,
        *,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        self.post_repo = post_repo
        self.search_repo = search_repo
        self.batch_size = batch_size

    def sync_posts(self) -> int:
        """Index every post if the index is empty; otherwise do nothing.

        Returns:
            The number of documents written (0 when the index was already populated).
        """
        self.search_repo.ensure_index()
        if self.search_repo.count() != 0:
            logger.info("Search index posts are already synchronized.")
            return 0

        indexed = self._index_all()
        logger.warning("Search index posts saved: %d", indexed)
        return indexed

    def reindex_all(self) -> int:
        """Upsert a document for every post regardless of the index state."""
        self.search_repo.ensure_index()
        total = self.post_repo.count()
        logger.info("Reindexing %d posts", total)
        indexed = self._index_all(total=total)
        logger.info("Reindex complete: %d documents", indexed)
        return indexed

    def _index_all(self, total: int | None = None) -> int:
        indexed = 0
        for batch in self.post_repo.iter_batches(self.batch_size):
            documents = [doc for doc in map(to_search_document, batch) if doc is not None]
            indexed += self.search_repo.save_all(documents)
            if total is not None:
                logger.info("Indexed %d/%d", indexed, total)
        return indexed
