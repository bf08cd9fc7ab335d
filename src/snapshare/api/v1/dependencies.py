"""Shared API dependencies: sessions, services, pagination and the caller."""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from snapshare.core.security import decode_access_token
from snapshare.core.settings import settings
from snapshare.db.session import get_db
from snapshare.models import User
from snapshare.repositories.post_repo import PostRepository
from snapshare.repositories.search_repo import SearchDocumentRepository, build_client
from snapshare.schemas.common import PageRequest
from snapshare.services.association import AssociationClient, build_association_client
from snapshare.services.post_service import PostService
from snapshare.services.recommendation import RecommendationService

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


@lru_cache
def get_search_repository() -> SearchDocumentRepository:
    """Return the process-wide search document repository."""
    return SearchDocumentRepository(
        build_client(settings),
        settings.opensearch_index,
        refresh=settings.opensearch_refresh,
        min_should_match=settings.search_min_should_match,
    )


@lru_cache
def get_association_client() -> AssociationClient:
    """Return the process-wide association service client."""
    return build_association_client(settings)


SearchRepoDep = Annotated[SearchDocumentRepository, Depends(get_search_repository)]
AssociationClientDep = Annotated[AssociationClient, Depends(get_association_client)]


def get_post_service(db: SessionDep, search_repo: SearchRepoDep) -> PostService:
    return PostService(db, search_repo)


def get_recommendation_service(
    db: SessionDep,
    search_repo: SearchRepoDep,
    association_client: AssociationClientDep,
) -> RecommendationService:
    return RecommendationService(PostRepository(db), search_repo, association_client)


PostServiceDep = Annotated[PostService, Depends(get_post_service)]
RecommendationServiceDep = Annotated[RecommendationService, Depends(get_recommendation_service)]


def get_page_request(
    page: int = Query(0, ge=0, description="Zero-based page number"),
    size: int | None = Query(None, ge=1, description="Page size"),
) -> PageRequest:
    """Build a page request, clamping the size to the configured maximum."""
    effective_size = min(size or settings.default_page_size, settings.max_page_size)
    return PageRequest(page=page, size=effective_size)


PageDep = Annotated[PageRequest, Depends(get_page_request)]


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from the bearer token.

    Raises:
        HTTPException: If the token is invalid or the user does not exist.
    """
    try:
        user_id = decode_access_token(credentials.credentials)
    except (JWTError, ValueError) as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err

    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


CurrentUserDep = Annotated[User, Depends(get_current_user)]