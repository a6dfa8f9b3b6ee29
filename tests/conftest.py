"""Shared fixtures: a fresh in-memory store and an API client per test."""

import os

# Settings are read at import time, so these must be set first
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SEED_DEMO_DATA", "false")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient

from jobreel.main import app
from jobreel.services.blob_storage import LocalBlobStore, get_blob_store
from jobreel.storage import MemStorage, get_storage

PASSWORD = "password123"


@pytest.fixture
def storage():
    return MemStorage()


@pytest.fixture
def blob_store(tmp_path):
    return LocalBlobStore(tmp_path / "media", "/media")


@pytest.fixture
def client(storage, blob_store):
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


def register(client, username, user_type="job_seeker", **extra):
    """Register through the API and return (user, auth headers)."""
    payload = {
        "username": username,
        "password": PASSWORD,
        "email": f"{username}@example.com",
        "full_name": username.title(),
        "user_type": user_type,
        **extra,
    }
    response = client.post("/api/auth/register", json=payload)
    assert response.status_code == 201, response.text
    body = response.json()
    return body["user"], {"Authorization": f"Bearer {body['access_token']}"}


@pytest.fixture
def employer(client):
    return register(client, "acme", user_type="employer", company_name="Acme")


@pytest.fixture
def seeker(client):
    return register(client, "pat", skills=["Python", "SQL"])


def post_video(client, headers, **fields):
    payload = {"title": "A video", "video_url": "https://cdn.example/v.mp4", **fields}
    response = client.post("/api/videos", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()
