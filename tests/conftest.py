# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["SEARCH_SYNC_ON_STARTUP"] = "false"

from snapshare.api.v1.dependencies import get_association_client, get_search_repository
from snapshare.core.security import create_access_token
from snapshare.db.session import Base
from snapshare.db.session import get_db as app_get_session
from snapshare.main import app as fastapi_app
from snapshare.models import Image, Post, Tag, User
from snapshare.repositories.search_repo import SearchDocumentRepository
from snapshare.schemas.common import Page, PageRequest
from snapshare.services.association import AssociationClient

TEST_DB_URL = "sqlite://"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture()
def search_repo(mocker: Any) -> Any:
    """Search repository double whose queries match nothing by default."""
    repo = mocker.MagicMock(spec=SearchDocumentRepository)
    nothing = Page.empty(PageRequest())
    repo.find_by_title_or_description.return_value = nothing
    repo.find_posts_by_tags.return_value = nothing
    repo.find_posts_excluding_tags.return_value = nothing
    repo.find_posts_without_tags.return_value = nothing
    repo.find_by_post_id.return_value = None
    repo.count.return_value = 0
    repo.ensure_index.return_value = False
    repo.delete_by_post_id.return_value = True
    repo.save.side_effect = lambda doc: doc.model_copy(update={"document_id": str(doc.post_id)})
    repo.save_all.side_effect = lambda docs: len(docs)
    return repo


@pytest.fixture()
def association_client(mocker: Any) -> Any:
    client = mocker.MagicMock(spec=AssociationClient)
    client.get_associations.return_value = []
    return client


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    db_session: Session,
    search_repo: Any,
    association_client: Any,
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_search_repository] = lambda: search_repo
    app.dependency_overrides[get_association_client] = lambda: association_client
    try:
        yield
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory persisting users with optional preferred tags."""

    def _make_user(username: str = "john_doe", preferred: list[str] | None = None) -> User:
        user = User(username=username, email=f"{username}@example.com")
        user.preferred_tags = [_tag(db_session, name) for name in preferred or []]
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Return a factory persisting posts directly in the post store."""

    def _make_post(
        title: str = "sunset",
        description: str | None = "Evening at the beach",
        tags: list[str] | None = None,
        author: User | None = None,
        image_url: str | None = None,
    ) -> Post:
        post = Post(title=title, description=description, author=author)
        post.tags = [_tag(db_session, name) for name in tags or []]
        if image_url:
            post.image = Image(file=image_url)
        db_session.add(post)
        db_session.commit()
        return post

    return _make_post


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    return make_user()


@pytest.fixture()
def headers_for() -> Callable[[User], dict[str, str]]:
    """Return a helper building bearer headers for any user."""

    def _headers_for(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _headers_for


@pytest.fixture()
def auth_headers(test_user: User, headers_for: Callable[[User], dict[str, str]]) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return headers_for(test_user)


def _tag(session: Session, name: str) -> Tag:
    tag = session.query(Tag).filter(Tag.name == name).first()
    if tag is None:
        tag = Tag(name=name)
        session.add(tag)
        session.flush()
    return tag
