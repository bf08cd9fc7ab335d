"""Search document schema stored in the OpenSearch index."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SearchDocument(BaseModel):
    """Denormalized, full-text searchable projection of a post.

    ``document_id`` is the index-local ``_id`` and is never part of the stored
    source. ``post_id`` is serialized as ``postId`` and links the document
    back to its post row.
    """

    document_id: str | None = Field(default=None, exclude=True)
    post_id: int = Field(..., alias="postId")
    title: str | None = None
    description: str | None = None
    tags: list[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    def to_source(self) -> dict[str, Any]:
        """Return the JSON body written to the index."""
        return self.model_dump(by_alias=True)

    @classmethod
    def from_hit(cls, hit: dict[str, Any]) -> SearchDocument:
        """Build a document from an OpenSearch search hit or GET response."""
        source = dict(hit.get("_source") or {})
        source["document_id"] = hit.get("_id")
        return cls.model_validate(source)
