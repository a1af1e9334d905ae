# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from datetime import UTC, datetime, timedelta
from typing import Any

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

os.environ.setdefault("PYTEST_RUNNING", "true")

from flodaz_community.core.settings import Settings
from flodaz_community.db.session import build_engine, build_session_factory, create_tables
from flodaz_community.main import create_app
from flodaz_community.models import Comment, Post
from flodaz_community.services.identity import IdentityClient, IdentityConfig
from flodaz_community.services.media import MediaClient, MediaConfig

TEST_DB_URL = "sqlite://"
IDENTITY_BASE_URL = "https://identity.test"
CDN_URL = "https://res.cloudinary.test/flodaz/image/upload/v1/flodaz_community"

ALICE_ID = "11111111-1111-1111-1111-111111111111"
BOB_ID = "22222222-2222-2222-2222-222222222222"
GHOST_ID = "99999999-9999-9999-9999-999999999999"


def make_test_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "environment": "development",
        "database_url": TEST_DB_URL,
        "supabase_url": IDENTITY_BASE_URL,
        "supabase_service_key": "service-role-key",
        "cloudinary_cloud_name": "flodaz",
        "cloudinary_api_key": "1234",
        "cloudinary_api_secret": "shh",
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def identity_handler(
    users: dict[str, dict[str, Any]],
    calls: list[httpx.Request] | None = None,
) -> Callable[[httpx.Request], httpx.Response]:
    """Serve the subset of the auth admin API the identity client uses."""

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        path = request.url.path
        if path == "/auth/v1/admin/users":
            return httpx.Response(200, json={"users": list(users.values()), "aud": "authenticated"})
        if path.startswith("/auth/v1/admin/users/"):
            user = users.get(path.rsplit("/", 1)[-1])
            if user is None:
                return httpx.Response(404, json={"msg": "User not found"})
            return httpx.Response(200, json=user)
        return httpx.Response(404)

    return handler


def media_handler(calls: list[httpx.Request] | None = None) -> Callable[[httpx.Request], httpx.Response]:
    """Answer every upload with a URL derived from the call count."""

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        index = len(calls) if calls is not None else 1
        return httpx.Response(200, json={"secure_url": f"{CDN_URL}/img{index}.jpg"})

    return handler


@pytest.fixture()
def identity_users() -> dict[str, dict[str, Any]]:
    """Raw auth-provider records keyed by user id."""
    return {
        ALICE_ID: {
            "id": ALICE_ID,
            "email": "alice@example.com",
            "user_metadata": {"full_name": "Alice Baker", "account_type": "pro"},
        },
        BOB_ID: {
            "id": BOB_ID,
            "email": "bob.smith@example.com",
            "user_metadata": {},
        },
    }


@pytest.fixture()
def identity_calls() -> list[httpx.Request]:
    return []


@pytest.fixture()
def media_calls() -> list[httpx.Request]:
    return []


@pytest.fixture()
def identity_client(
    identity_users: dict[str, dict[str, Any]], identity_calls: list[httpx.Request]
) -> IdentityClient:
    config = IdentityConfig(
        base_url=IDENTITY_BASE_URL, service_key="service-role-key", timeout_seconds=5.0
    )
    return IdentityClient(
        config, transport=httpx.MockTransport(identity_handler(identity_users, identity_calls))
    )


@pytest.fixture()
def media_client(media_calls: list[httpx.Request]) -> MediaClient:
    config = MediaConfig(
        cloud_name="flodaz",
        api_key="1234",
        api_secret="shh",
        folder="flodaz_community",
        timeout_seconds=5.0,
    )
    return MediaClient(config, transport=httpx.MockTransport(media_handler(media_calls)))


@pytest.fixture()
def test_settings() -> Settings:
    return make_test_settings()


@pytest.fixture()
def engine() -> Iterator[Engine]:
    engine = build_engine(TEST_DB_URL)
    create_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine):
    return build_session_factory(engine)


@pytest.fixture()
def db_session(session_factory) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def app(
    test_settings: Settings,
    engine: Engine,
    identity_client: IdentityClient,
    media_client: MediaClient,
) -> FastAPI:
    return create_app(
        test_settings,
        engine=engine,
        identity_client=identity_client,
        media_client=media_client,
    )


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Insert a post row directly, bypassing the API."""
    base = datetime(2024, 3, 5, 14, 0, tzinfo=UTC)
    minutes = iter(range(1, 10_000))

    def _make_post(**overrides: Any) -> Post:
        values: dict[str, Any] = {
            "user_id": ALICE_ID,
            "type": "text",
            "title": "Sourdough notes",
            "content": "Feed the starter twice a day.",
            "images": [],
            "tags": [],
            "created_at": base + timedelta(minutes=next(minutes)),
        }
        values.update(overrides)
        post = Post(**values)
        db_session.add(post)
        db_session.commit()
        db_session.refresh(post)
        return post

    return _make_post


@pytest.fixture()
def make_comment(db_session: Session) -> Callable[..., Comment]:
    """Insert a comment row directly, bypassing the API."""

    def _make_comment(post: Post, **overrides: Any) -> Comment:
        values: dict[str, Any] = {
            "post_id": post.id,
            "user_id": BOB_ID,
            "content": "Looks great!",
            "created_at": datetime(2024, 3, 6, 9, 30, tzinfo=UTC),
        }
        values.update(overrides)
        comment = Comment(**values)
        db_session.add(comment)
        db_session.commit()
        db_session.refresh(comment)
        return comment

    return _make_comment
