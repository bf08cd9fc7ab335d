"""Post-related endpoints: CRUD and keyword search."""

from fastapi import APIRouter, Query, Response, status

from snapshare.api.v1.dependencies import CurrentUserDep, PageDep, PostServiceDep
from snapshare.schemas.common import PageResponse
from snapshare.schemas.post import PostCreate, PostResponse, PostUpdate

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=PageResponse[PostResponse])
def list_posts(service: PostServiceDep, page: PageDep) -> PageResponse[PostResponse]:
    """List posts in natural order."""
    posts = service.list_posts(page)
    return PageResponse.from_page(posts.map(PostResponse.model_validate))


@router.get("/search", response_model=PageResponse[PostResponse])
def search_posts(
    service: PostServiceDep,
    page: PageDep,
    keyword: str = Query(..., min_length=1, description="Words to look for in title or description"),
) -> PageResponse[PostResponse]:
    """Full-text search over post titles and descriptions.

    A keyword without matches yields an empty page, not an error.
    """
    posts = service.search(keyword, page)
    return PageResponse.from_page(posts.map(PostResponse.model_validate))


@router.get("/{post_id}", response_model=PostResponse)
def get_post(post_id: int, service: PostServiceDep) -> PostResponse:
    """Get a specific post by ID."""
    return PostResponse.model_validate(service.get_post(post_id))


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    post_data: PostCreate,
    current_user: CurrentUserDep,
    service: PostServiceDep,
) -> PostResponse:
    """Create a post authored by the caller and index it for search."""
    return PostResponse.model_validate(service.create_post(post_data, current_user))


@router.put("/{post_id}", response_model=PostResponse)
def update_post(
    post_id: int,
    post_data: PostUpdate,
    current_user: CurrentUserDep,
    service: PostServiceDep,
) -> PostResponse:
    """Update a post owned by the caller; the search document follows."""
    return PostResponse.model_validate(service.update_post(post_id, post_data, current_user))


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    post_id: int,
    current_user: CurrentUserDep,
    service: PostServiceDep,
) -> Response:
    """Delete a post owned by the caller together with its search document."""
    service.delete_post(post_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
