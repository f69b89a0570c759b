"""
Pytest configuration and shared fixtures for blogcms tests.
"""
import httpx
import mongomock
import pytest
from unittest.mock import patch
from fastapi.testclient import TestClient

from blogcms.core.config import Settings
from blogcms.main import create_app

UPLOADED_URL = "https://res.cloudinary.com/demo/image/upload/blogs/cat.png"


@pytest.fixture
def settings():
    return Settings(
        mongo_db_name="blogcms_test",
        cloudinary_cloud_name="demo",
        cloudinary_api_key="key",
        cloudinary_api_secret="secret",
        deepl_api_key="deepl-key",
        deepl_api_url="https://deepl.test",
        max_upload_bytes=1024,
    )


@pytest.fixture
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture
def deepl_requests():
    """Requests seen by the fake DeepL server."""
    return []


@pytest.fixture
def deepl_transport(deepl_requests):
    def handler(request: httpx.Request):
        deepl_requests.append(request)
        return httpx.Response(
            200,
            json={"translations": [{"detected_source_language": "PL", "text": "Hello world"}]},
        )

    return httpx.MockTransport(handler)


@pytest.fixture
def app(settings, mongo_client, deepl_transport):
    return create_app(
        settings,
        client_factory=lambda s: mongo_client,
        translate_transport=deepl_transport,
    )


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def store(client, app):
    return app.state.store


@pytest.fixture
def mock_cloudinary():
    with patch("cloudinary.uploader.upload") as mock:
        mock.return_value = {"secure_url": UPLOADED_URL, "public_id": "blogs/cat"}
        yield mock


@pytest.fixture
def create_post(client):
    """POST a blog and return the JSON body."""
    def _create(title="First post", content="Treść posta", **fields):
        data = {"title": title, "content": content}
        data.update(fields)
        response = client.post("/api/blogs", data=data)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
