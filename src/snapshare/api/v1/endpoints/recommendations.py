"""Personalised and guest feeds."""

from fastapi import APIRouter

from snapshare.api.v1.dependencies import CurrentUserDep, PageDep, RecommendationServiceDep
from snapshare.schemas.common import PageResponse
from snapshare.schemas.post import PostResponse

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


@router.get("/posts", response_model=PageResponse[PostResponse])
def recommended_posts(
    current_user: CurrentUserDep,
    service: RecommendationServiceDep,
    page: PageDep,
) -> PageResponse[PostResponse]:
    """Feed built from the caller's preferred tags.

    Responds with 503 when the tag association service is unreachable.
    """
    posts = service.recommended_posts(current_user, page)
    return PageResponse.from_page(posts.map(PostResponse.model_validate))


@router.get("/guest", response_model=PageResponse[PostResponse])
def guest_posts(service: RecommendationServiceDep, page: PageDep) -> PageResponse[PostResponse]:
    """Unpersonalised feed for callers who are not signed in."""
    posts = service.guest_posts(page)
    return PageResponse.from_page(posts.map(PostResponse.model_validate))
