"""Post-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from snapshare.models.tag import TAG_NAME_MAX_LENGTH


def normalize_tag_names(names: list[str]) -> list[str]:
    cleaned: list[str] = []
    for name in names:
        name = name.strip()
        if not name:
            continue
        if len(name) > TAG_NAME_MAX_LENGTH:
            raise ValueError(f"Tag names are limited to {TAG_NAME_MAX_LENGTH} characters")
        if name not in cleaned:
            cleaned.append(name)
    return cleaned


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    title: str = Field(..., min_length=1, max_length=40, description="Post title")
    description: str | None = Field(None, max_length=5000, description="Free-text description")
    tags: list[str] = Field(default_factory=list, description="Tag names, created on demand")
    image_url: str | None = Field(None, description="URL of the uploaded image")

    @field_validator("tags")
    @classmethod
    def _check_tags(cls, value: list[str]) -> list[str]:
        return normalize_tag_names(value)


class PostUpdate(BaseModel):
    """Schema for partially updating a post; omitted fields are left untouched."""

    title: str | None = Field(None, min_length=1, max_length=40)
    description: str | None = Field(None, max_length=5000)
    tags: list[str] | None = None
    image_url: str | None = None

    @field_validator("tags")
    @classmethod
    def _check_tags(cls, value: list[str] | None) -> list[str] | None:
        return None if value is None else normalize_tag_names(value)


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    title: str | None
    description: str | None
    tags: list[str]
    author_id: int | None
    image_url: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _flatten_relations(cls, data: object) -> object:
        if isinstance(data, dict):
            return data

        image = getattr(data, "image", None)
        return {
            "id": getattr(data, "id", None),
            "title": getattr(data, "title", None),
            "description": getattr(data, "description", None),
            "tags": [tag.name for tag in getattr(data, "tags", None) or []],
            "author_id": getattr(data, "author_id", None),
            "image_url": image.file if image is not None else None,
        }

    model_config = ConfigDict(from_attributes=True)
