"""Main entry point for the SnapShare application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from opensearchpy.exceptions import OpenSearchException
from sqlalchemy.exc import SQLAlchemyError

from snapshare.api.v1 import posts_router, recommendations_router, users_router
from snapshare.api.v1.dependencies import get_association_client, get_search_repository
from snapshare.core.errors import ForbiddenActionError, PostNotFoundError, ServiceUnavailableError
from snapshare.core.logging import configure_logging
from snapshare.core.settings import settings
from snapshare.db.session import SessionLocal
from snapshare.repositories.post_repo import PostRepository
from snapshare.services.index_sync import IndexSynchronizer

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="SnapShare API",
    description="Photo-sharing backend with search and personalised feeds",
    version=settings.app_version,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware)

app.include_router(posts_router, prefix="/api/v1")
app.include_router(recommendations_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")


@app.exception_handler(ServiceUnavailableError)
async def service_unavailable_handler(request: Request, exc: ServiceUnavailableError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": str(exc)})


@app.exception_handler(PostNotFoundError)
async def post_not_found_handler(request: Request, exc: PostNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(ForbiddenActionError)
async def forbidden_handler(request: Request, exc: ForbiddenActionError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": str(exc)})


def run_index_sync() -> int:
    """Populate an empty search index from the post store.

    Failures abort startup only when ``SEARCH_SYNC_FAIL_FAST`` is set;
    otherwise the service starts and relies on per-post writes and the
    reindex command to fill the index later.
    """
    with SessionLocal() as db:
        synchronizer = IndexSynchronizer(
            PostRepository(db),
            get_search_repository(),
            batch_size=settings.search_sync_batch_size,
        )
        try:
            return synchronizer.sync_posts()
        except (OpenSearchException, SQLAlchemyError):
            if settings.search_sync_fail_fast:
                raise
            logger.exception("Initial search index sync failed; starting without it")
            return 0


@app.on_event("startup")
def on_startup() -> None:
    if settings.search_sync_on_startup:
        run_index_sync()


@app.on_event("shutdown")
def on_shutdown() -> None:
    # Only close clients that were actually created.
    if get_association_client.cache_info().currsize:
        get_association_client().close()
    if get_search_repository.cache_info().currsize:
        get_search_repository().client.close()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("snapshare.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
