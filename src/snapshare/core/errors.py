"""Error types raised by the SnapShare service layer.

Handlers registered in :mod:`snapshare.main` translate these into HTTP
responses; everything else (database and OpenSearch failures) propagates
unchanged.
"""

from __future__ import annotations

ASSOCIATION_SERVICE_UNAVAILABLE = "Association Service is unavailable"


class SnapShareError(RuntimeError):
    """Base class for domain errors."""


class PostNotFoundError(SnapShareError):
    """Raised when a post id does not resolve to a stored post."""

    def __init__(self, post_id: int) -> None:
        super().__init__(f"Post {post_id} not found")
        self.post_id = post_id


class ForbiddenActionError(SnapShareError):
    """Raised when a user acts on a resource they do not own."""


class AssociationServiceError(SnapShareError):
    """Raised by the association client for any transport or protocol failure."""


class ServiceUnavailableError(SnapShareError):
    """Raised when the tag association collaborator cannot be reached.

    Kept distinct from the empty-feed fallbacks so that callers can tell
    "upstream broken" apart from "nothing to recommend".
    """

    def __init__(self, message: str = ASSOCIATION_SERVICE_UNAVAILABLE) -> None:
        super().__init__(message)
