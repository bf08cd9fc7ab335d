"""Tests for post endpoints."""

from fastapi import status

from snapshare.schemas.common import Page, PageRequest
from snapshare.schemas.search import SearchDocument


def test_list_posts_returns_page(client, make_post) -> None:
    make_post(title="first", tags=["sea"])
    make_post(title="second")

    response = client.get("/api/v1/posts", params={"size": 1})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["page"] == 0
    assert data["size"] == 1
    assert data["total"] == 2
    assert data["total_pages"] == 2
    assert [item["title"] for item in data["items"]] == ["first"]
    assert data["items"][0]["tags"] == ["sea"]


def test_get_post(client, make_post) -> None:
    post = make_post(title="sunset", image_url="https://cdn.example.com/1.jpg")

    response = client.get(f"/api/v1/posts/{post.id}")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["image_url"] == "https://cdn.example.com/1.jpg"


def test_get_missing_post_is_404(client) -> None:
    response = client.get("/api/v1/posts/999")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Post 999 not found"


def test_create_post_requires_token(client, search_repo) -> None:
    response = client.post("/api/v1/posts", json={"title": "sunset"})

    assert response.status_code in {status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN}
    search_repo.save.assert_not_called()


def test_create_post_rejects_bad_token(client) -> None:
    response = client.post(
        "/api/v1/posts",
        json={"title": "sunset"},
        headers={"Authorization": "Bearer not-a-jwt"},
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Could not validate credentials"


def test_create_post_indexes_it(client, auth_headers, test_user, search_repo) -> None:
    response = client.post(
        "/api/v1/posts",
        json={"title": "sunset", "description": "Evening", "tags": ["sea", " sea ", "sun"]},
        headers=auth_headers,
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["tags"] == ["sea", "sun"]
    assert data["author_id"] == test_user.id
    document = search_repo.save.call_args.args[0]
    assert document.post_id == data["id"]
    assert document.tags == ["sea", "sun"]


def test_create_post_validates_title(client, auth_headers) -> None:
    response = client.post("/api/v1/posts", json={"title": "x" * 41}, headers=auth_headers)

    assert response.status_code == 422


def test_update_foreign_post_is_forbidden(client, make_user, make_post, auth_headers) -> None:
    post = make_post(author=make_user(username="jane"))

    response = client.put(f"/api/v1/posts/{post.id}", json={"title": "mine"}, headers=auth_headers)

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_update_own_post(client, make_post, test_user, auth_headers, search_repo) -> None:
    post = make_post(author=test_user, tags=["sea"])

    response = client.put(f"/api/v1/posts/{post.id}", json={"tags": ["city"]}, headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["tags"] == ["city"]
    assert search_repo.save.call_args.args[0].tags == ["city"]


def test_delete_own_post(client, make_post, test_user, auth_headers, search_repo) -> None:
    post = make_post(author=test_user)

    response = client.delete(f"/api/v1/posts/{post.id}", headers=auth_headers)

    assert response.status_code == status.HTTP_204_NO_CONTENT
    search_repo.delete_by_post_id.assert_called_once_with(post.id)
    assert client.get(f"/api/v1/posts/{post.id}").status_code == status.HTTP_404_NOT_FOUND


def test_search_returns_posts_for_index_hits(client, make_post, search_repo) -> None:
    post = make_post(title="Life is beautiful")
    make_post(title="Other")
    search_repo.find_by_title_or_description.return_value = Page(
        content=[SearchDocument(document_id=str(post.id), post_id=post.id, title=post.title)],
        request=PageRequest(page=0, size=20),
        total=1,
    )

    response = client.get("/api/v1/posts/search", params={"keyword": "Life is"})

    assert response.status_code == status.HTTP_200_OK
    assert [item["id"] for item in response.json()["items"]] == [post.id]
    search_repo.find_by_title_or_description.assert_called_once_with("Life is", PageRequest(page=0, size=20))


def test_search_with_no_index_hits_is_empty_page(client, make_post) -> None:
    make_post(title="Life is beautiful")

    response = client.get("/api/v1/posts/search", params={"keyword": "Death"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"items": [], "page": 0, "size": 20, "total": 0, "total_pages": 0}


def test_search_requires_keyword(client) -> None:
    assert client.get("/api/v1/posts/search").status_code == 422


def test_page_size_is_clamped(client) -> None:
    response = client.get("/api/v1/posts", params={"size": 1000})

    assert response.json()["size"] == 100
