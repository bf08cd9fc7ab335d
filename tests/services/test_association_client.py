"""Tests for the association service HTTP client."""

import json

import httpx
import pytest

from snapshare.core.errors import AssociationServiceError
from snapshare.core.settings import Settings
from snapshare.services.association import (
    MOCK_ASSOCIATIONS,
    AssociationClient,
    AssociationServiceClient,
    MockAssociationServiceClient,
    build_association_client,
)

SERVICE_URL = "http://associations.test/associations"


def _client(handler) -> AssociationServiceClient:
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return AssociationServiceClient(SERVICE_URL, http_client=http_client)


def test_posts_tag_list_and_returns_associations() -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=["sea", "summer"])

    assert _client(handler).get_associations(["beach"]) == ["sea", "summer"]
    assert seen == {"method": "POST", "url": SERVICE_URL, "body": ["beach"]}


def test_null_body_means_no_associations() -> None:
    client = _client(lambda request: httpx.Response(200, content=b"null"))

    assert client.get_associations(["beach"]) == []


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": "boom"}),
        httpx.Response(404),
        httpx.Response(200, content=b"not json"),
        httpx.Response(200, json={"tags": ["sea"]}),
    ],
)
def test_bad_responses_raise_association_error(response: httpx.Response) -> None:
    client = _client(lambda request: response)

    with pytest.raises(AssociationServiceError):
        client.get_associations(["beach"])


@pytest.mark.parametrize("payload", [["sea", None], [{}], ["sea", 3]])
def test_non_string_tag_names_raise_association_error(payload: list[object]) -> None:
    client = _client(lambda request: httpx.Response(200, json=payload))

    with pytest.raises(AssociationServiceError):
        client.get_associations(["beach"])


def test_transport_errors_raise_association_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(AssociationServiceError):
        _client(handler).get_associations(["beach"])


def test_mock_client_returns_fixed_associations() -> None:
    client = MockAssociationServiceClient()

    assert isinstance(client, AssociationClient)
    assert client.get_associations(["anything"]) == list(MOCK_ASSOCIATIONS)
    client.close()


def test_build_client_honours_mock_setting() -> None:
    mocked = Settings(SECRET_KEY="x", ASSOCIATION_SERVICE_MOCK=True)
    real = Settings(SECRET_KEY="x", ASSOCIATION_SERVICE_URL=SERVICE_URL)

    assert isinstance(build_association_client(mocked), MockAssociationServiceClient)
    client = build_association_client(real)
    assert type(client) is AssociationServiceClient
    assert client.service_url == SERVICE_URL
    client.close()
