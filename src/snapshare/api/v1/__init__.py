"""Version 1 API endpoints."""

from .endpoints import posts_router, recommendations_router, users_router

__all__ = [
    "posts_router",
    "recommendations_router",
    "users_router",
]
