"""User-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from snapshare.schemas.post import normalize_tag_names


class PreferredTagsUpdate(BaseModel):
    """Replacement list of preferred tag names for the current user."""

    tags: list[str] = Field(default_factory=list, max_length=50)

    @field_validator("tags")
    @classmethod
    def _check_tags(cls, value: list[str]) -> list[str]:
        return normalize_tag_names(value)


class UserResponse(BaseModel):
    """Public view of a user and their feed preferences."""

    id: int
    username: str
    preferred_tags: list[str]

    @model_validator(mode="before")
    @classmethod
    def _flatten_tags(cls, data: object) -> object:
        if isinstance(data, dict):
            return data
        return {
            "id": getattr(data, "id", None),
            "username": getattr(data, "username", None),
            "preferred_tags": [tag.name for tag in getattr(data, "preferred_tags", None) or []],
        }

    model_config = ConfigDict(from_attributes=True)
