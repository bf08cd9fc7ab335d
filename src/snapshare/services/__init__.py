"""Service layer for posts, search and recommendations."""
