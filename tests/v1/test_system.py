# tests/v1/test_system.py
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from flodaz_community.core.errors import StoreError, UnknownError
from flodaz_community.main import ENDPOINTS, create_app
from flodaz_community.repositories import PostRepository
from flodaz_community.services import PostService
from tests.conftest import make_test_settings


def test_root_lists_endpoints(client):
    response = client.get("/")

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Welcome to Flodaz Community API"
    assert body["status"] == "running"
    assert body["endpoints"] == ENDPOINTS


def test_health_reports_connected_database(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "OK"
    assert body["message"] == "Server is running successfully!"
    assert body["database"] == "Connected"
    assert body["timestamp"].endswith("Z")


def test_health_stays_up_when_database_fails(client):
    with patch.object(PostRepository, "ping", side_effect=StoreError("Failed to reach the database")):
        response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["database"] == "Connection failed"


def test_health_unexpected_failure(client):
    with patch.object(PostRepository, "ping", side_effect=RuntimeError("driver exploded")):
        response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["database"] == "Unknown"
    assert body["message"] == "Server running, database connection not tested"


@pytest.mark.parametrize(
    ("method", "path"),
    [("GET", "/api/does-not-exist"), ("GET", "/nowhere"), ("DELETE", "/api/posts")],
)
def test_unknown_route(client, method, path):
    response = client.request(method, path)

    assert response.status_code == 404
    assert response.json() == {"error": "Route not found"}


def _raise_from_feed(settings, engine, identity_client, media_client):
    app = create_app(
        settings, engine=engine, identity_client=identity_client, media_client=media_client
    )
    with TestClient(app, raise_server_exceptions=False) as test_client:
        with patch.object(PostService, "list_feed", side_effect=RuntimeError("boom")):
            return test_client.get("/api/posts")


def test_unexpected_error_detail_in_development(engine, identity_client, media_client):
    response = _raise_from_feed(
        make_test_settings(environment="development"), engine, identity_client, media_client
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Something went wrong!", "message": "boom"}


def test_unexpected_error_detail_hidden_in_production(engine, identity_client, media_client):
    response = _raise_from_feed(
        make_test_settings(environment="production"), engine, identity_client, media_client
    )

    assert response.status_code == 500
    assert response.json() == {
        "error": "Something went wrong!",
        "message": "Internal server error",
    }


def test_store_failure_maps_to_500(client):
    with patch.object(PostRepository, "list_page", side_effect=StoreError("Failed to fetch posts")):
        response = client.get("/api/posts")

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch posts"}


def test_unconfigured_clients_still_serve(engine):
    app = create_app(
        make_test_settings(
            supabase_url=None,
            supabase_service_key=None,
            cloudinary_cloud_name=None,
        ),
        engine=engine,
    )

    with TestClient(app) as test_client:
        assert test_client.get("/api/posts").status_code == 200


def test_unexpected_error_without_text_uses_catch_all_message(engine, identity_client, media_client):
    app = create_app(
        make_test_settings(), engine=engine, identity_client=identity_client, media_client=media_client
    )
    with TestClient(app, raise_server_exceptions=False) as test_client:
        with patch.object(PostService, "list_feed", side_effect=RuntimeError()):
            response = test_client.get("/api/posts")

    assert response.status_code == UnknownError.status_code
    assert response.json() == {
        "error": "Something went wrong!",
        "message": "Something went wrong!",
    }
