"""Populate or rebuild the search index from the post store.

Without flags this runs the same empty-index bootstrap as application
startup. ``--force`` upserts a document for every post, which reconciles an
index that is populated but stale.
"""

from __future__ import annotations

import argparse
import logging

from snapshare.core.logging import configure_logging
from snapshare.core.settings import settings
from snapshare.db.session import SessionLocal
from snapshare.repositories.post_repo import PostRepository
from snapshare.repositories.search_repo import SearchDocumentRepository, build_client
from snapshare.services.index_sync import IndexSynchronizer

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--force",
        action="store_true",
        help="Reindex every post even if the index already has documents",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=settings.search_sync_batch_size,
        help="Number of posts read and bulk-indexed per round trip",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(settings.log_level)

    client = build_client(settings)
    search_repo = SearchDocumentRepository(
        client,
        settings.opensearch_index,
        refresh=settings.opensearch_refresh,
        min_should_match=settings.search_min_should_match,
    )
    try:
        with SessionLocal() as db:
            synchronizer = IndexSynchronizer(
                PostRepository(db),
                search_repo,
                batch_size=args.batch_size,
            )
            indexed = synchronizer.reindex_all() if args.force else synchronizer.sync_posts()
    finally:
        client.close()

    logger.info("Indexed %d documents into '%s'", indexed, settings.opensearch_index)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
