"""Shared pagination types used by repositories, services and the API."""
from __future__ import annotations

import math
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class PageRequest:
    """Zero-based offset pagination request."""

    page: int = 0
    size: int = 20

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValueError("page must be >= 0")
        if self.size < 1:
            raise ValueError("size must be >= 1")

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the total number of matching elements."""

    content: list[T]
    request: PageRequest
    total: int = 0

    @classmethod
    def empty(cls, request: PageRequest) -> Page[T]:
        return cls(content=[], request=request, total=0)

    @property
    def is_empty(self) -> bool:
        return not self.content

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.request.size) if self.total else 0

    def map(self, func: Callable[[T], U]) -> Page[U]:
        """Return a page with ``func`` applied to every element."""
        return Page(content=[func(item) for item in self.content], request=self.request, total=self.total)

    def __iter__(self) -> Iterator[T]:
        return iter(self.content)

    def __len__(self) -> int:
        return len(self.content)


class PageResponse(BaseModel, Generic[T]):
    """Serialized page returned by list endpoints."""

    items: list[T]
    page: int = Field(..., ge=0, description="Zero-based page number.")
    size: int = Field(..., ge=1, description="Requested page size.")
    total: int = Field(..., ge=0, description="Total number of matching elements.")
    total_pages: int = Field(..., ge=0)

    @classmethod
    def from_page(cls, page: Page[T]) -> PageResponse[T]:
        return cls(
            items=list(page.content),
            page=page.request.page,
            size=page.request.size,
            total=page.total,
            total_pages=page.total_pages,
        )
