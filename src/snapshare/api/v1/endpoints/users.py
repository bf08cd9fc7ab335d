"""Endpoints for the caller's own profile and feed preferences."""

from fastapi import APIRouter

from snapshare.api.v1.dependencies import CurrentUserDep, SessionDep
from snapshare.schemas.user import PreferredTagsUpdate, UserResponse
from snapshare.services.user_service import set_preferred_tags

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
def read_me(current_user: CurrentUserDep) -> UserResponse:
    """Return the caller and their preferred tags."""
    return UserResponse.model_validate(current_user)


@router.put("/me/preferred-tags", response_model=UserResponse)
def update_preferred_tags(
    payload: PreferredTagsUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> UserResponse:
    """Replace the caller's preferred tags."""
    user = set_preferred_tags(db, current_user, payload.tags)
    return UserResponse.model_validate(user)
