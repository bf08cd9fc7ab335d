"""Client for the external tag association service.

The association service takes a list of tag names and answers with related
tag names. It is a plain JSON-over-HTTP endpoint::

    POST <ASSOCIATION_SERVICE_URL>
    ["sunset", "beach"]          ->  ["sea", "summer", "sunset"]

Every transport, status or payload problem is reported as
:class:`~snapshare.core.errors.AssociationServiceError`.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import httpx

from snapshare.core.errors import AssociationServiceError
from snapshare.core.settings import Settings

logger = logging.getLogger(__name__)

MOCK_ASSOCIATIONS = ("car", "sunset", "love")


class AssociationClient:
    """Source of tag names related to a set of tags."""

    def get_associations(self, tags: Sequence[str]) -> list[str]:
        raise NotImplementedError

    def close(self) -> None:
        """Release any held connections."""


class AssociationServiceClient(AssociationClient):
    """Blocking HTTP client for the association service."""

    def __init__(
        self,
        service_url: str,
        *,
        timeout_seconds: float = 5.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.service_url = service_url
        self._client = http_client or httpx.Client(timeout=httpx.Timeout(timeout_seconds))

    def get_associations(self, tags: Sequence[str]) -> list[str]:
        """Return tag names associated with ``tags``.

        Raises:
            AssociationServiceError: On network errors, non-2xx responses or a
                body that is not a JSON list of strings.
        """
        try:
            response = self._client.post(self.service_url, json=list(tags))
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            logger.warning("Association service request failed: %s", exc)
            raise AssociationServiceError(f"Association request failed: {exc}") from exc
        except ValueError as exc:
            raise AssociationServiceError("Association service returned invalid JSON") from exc

        if payload is None:
            return []
        if not isinstance(payload, list):
            raise AssociationServiceError(
                f"Association service returned {type(payload).__name__}, expected a list"
            )
        if not all(isinstance(name, str) for name in payload):
            raise AssociationServiceError("Association service returned a non-string tag name")
        return payload

    def close(self) -> None:
        self._client.close()


class MockAssociationServiceClient(AssociationClient):
    """Fixed-answer client for local development without the real service."""

    def __init__(self, associations: Sequence[str] = MOCK_ASSOCIATIONS) -> None:
        self._associations = list(associations)

    def get_associations(self, tags: Sequence[str]) -> list[str]:
        return list(self._associations)


def build_association_client(settings: Settings) -> AssociationClient:
    """Return the mock client when configured, the HTTP client otherwise."""
    if settings.association_service_mock:
        logger.info("Using mock association service client")
        return MockAssociationServiceClient()
    return AssociationServiceClient(
        settings.association_service_url,
        timeout_seconds=settings.association_service_timeout_seconds,
    )
