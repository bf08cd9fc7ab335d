"""OpenSearch-backed store of post search documents."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from opensearchpy import NotFoundError, OpenSearch, helpers

from snapshare.core.settings import Settings
from snapshare.schemas.common import Page, PageRequest
from snapshare.schemas.search import SearchDocument

logger = logging.getLogger(__name__)

__all__ = ["INDEX_BODY", "SearchDocumentRepository", "build_client"]

INDEX_BODY: dict[str, Any] = {
    "settings": {
        "number_of_shards": 1,
        "number_of_replicas": 0,
    },
    "mappings": {
        "properties": {
            "title": {"type": "text"},
            "description": {"type": "text"},
            "postId": {"type": "long"},
            "tags": {"type": "keyword"},
        },
    },
}

# Best match first, then post id so that pages are stable between requests.
_SORT: list[dict[str, Any]] = [{"_score": "desc"}, {"postId": "asc"}]


def build_client(settings: Settings) -> OpenSearch:
    """Create a synchronous OpenSearch client from settings."""
    return OpenSearch(
        hosts=[settings.opensearch_url],
        timeout=settings.opensearch_timeout_seconds,
        use_ssl=settings.opensearch_url.startswith("https"),
        verify_certs=False,
    )


class SearchDocumentRepository:
    """Reads and writes :class:`SearchDocument` objects in one index.

    Documents are stored under ``_id == str(postId)`` so every write is an
    upsert keyed by the post, which keeps at most one document per post even
    when several processes bootstrap the index at the same time.
    """

    def __init__(
        self,
        client: OpenSearch,
        index_name: str = "feed",
        *,
        refresh: str = "false",
        min_should_match: str = "75%",
    ) -> None:
        self.client = client
        self.index_name = index_name
        self.refresh = refresh
        self.min_should_match = min_should_match

    @staticmethod
    def document_id_for(post_id: int) -> str:
        return str(post_id)

    # ------------------------------------------------------------------
    # Index management
    # ------------------------------------------------------------------

    def ensure_index(self) -> bool:
        """Create the index if it doesn't exist. Returns True when created."""
        if self.client.indices.exists(index=self.index_name):
            logger.debug("OpenSearch index '%s' already exists", self.index_name)
            return False
        self.client.indices.create(index=self.index_name, body=INDEX_BODY)
        logger.info("Created OpenSearch index '%s'", self.index_name)
        return True

    def count(self) -> int:
        """Return the number of documents in the index."""
        response = self.client.count(index=self.index_name)
        return int(response["count"])

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def save(self, document: SearchDocument) -> SearchDocument:
        """Upsert one document keyed by its post id."""
        document_id = self.document_id_for(document.post_id)
        self.client.index(
            index=self.index_name,
            id=document_id,
            body=document.to_source(),
            refresh=self.refresh,
        )
        return document.model_copy(update={"document_id": document_id})

    def save_all(self, documents: Sequence[SearchDocument]) -> int:
        """Bulk upsert documents; returns the number written.

        Any per-document failure raises ``opensearchpy.helpers.BulkIndexError``.
        """
        if not documents:
            return 0
        actions = [
            {
                "_op_type": "index",
                "_index": self.index_name,
                "_id": self.document_id_for(document.post_id),
                "_source": document.to_source(),
            }
            for document in documents
        ]
        success, _ = helpers.bulk(self.client, actions, refresh=self.refresh)
        logger.debug("OpenSearch bulk index: %d documents indexed", success)
        return success

    def delete_by_post_id(self, post_id: int) -> bool:
        """Delete the document of ``post_id``. Returns False if there was none."""
        try:
            self.client.delete(
                index=self.index_name,
                id=self.document_id_for(post_id),
                refresh=self.refresh,
            )
        except NotFoundError:
            logger.warning("No search document to delete for post %d", post_id)
            return False
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_by_post_id(self, post_id: int) -> SearchDocument | None:
        """Return the document linked to ``post_id``, if any."""
        response = self.client.search(
            index=self.index_name,
            body={"query": {"term": {"postId": post_id}}, "size": 1},
        )
        hits = response["hits"]["hits"]
        return SearchDocument.from_hit(hits[0]) if hits else None

    def find_by_title_or_description(self, keyword: str, page: PageRequest) -> Page[SearchDocument]:
        """Match ``keyword`` against title OR description.

        Each field is matched on its own with ``minimum_should_match``, so a
        document qualifies when enough of the keyword's terms occur in either
        field.
        """
        query = {
            "bool": {
                "should": [
                    {"match": {field: {"query": keyword, "minimum_should_match": self.min_should_match}}}
                    for field in ("title", "description")
                ],
                "minimum_should_match": 1,
            },
        }
        return self._search(query, page)

    def find_posts_by_tags(self, tags: Sequence[str], page: PageRequest) -> Page[SearchDocument]:
        """Documents carrying at least one of ``tags``."""
        query = {"bool": {"filter": [{"terms": {"tags": list(tags)}}]}}
        return self._search(query, page)

    def find_posts_excluding_tags(self, tags: Sequence[str], page: PageRequest) -> Page[SearchDocument]:
        """Documents carrying none of ``tags`` (including untagged ones)."""
        query = {"bool": {"must_not": [{"terms": {"tags": list(tags)}}]}}
        return self._search(query, page)

    def find_posts_without_tags(self, page: PageRequest) -> Page[SearchDocument]:
        """Documents with no tag values at all."""
        query = {"bool": {"must_not": [{"exists": {"field": "tags"}}]}}
        return self._search(query, page)

    def _search(self, query: dict[str, Any], page: PageRequest) -> Page[SearchDocument]:
        body: dict[str, Any] = {
            "query": query,
            "sort": _SORT,
            "from": page.offset,
            "size": page.size,
            "track_total_hits": True,
        }
        response = self.client.search(index=self.index_name, body=body)
        hits = response["hits"]
        total = hits["total"]
        if isinstance(total, dict):
            total = total["value"]
        documents = [SearchDocument.from_hit(hit) for hit in hits["hits"]]
        return Page(content=documents, request=page, total=int(total))
