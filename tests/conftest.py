"""Shared fixtures: an injectable fake CMS client and an app built around it."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from app.routers.feeds import limiter


def make_fake_client() -> SimpleNamespace:
    """Return an object with the ButterClient resource layout, all AsyncMocks."""
    return SimpleNamespace(
        post=SimpleNamespace(
            list=AsyncMock(return_value={"meta": {}, "data": []}),
            retrieve=AsyncMock(return_value={"meta": {}, "data": {}}),
        ),
        category=SimpleNamespace(
            list=AsyncMock(return_value={"data": []}),
            retrieve=AsyncMock(return_value={"data": {}}),
        ),
        page=SimpleNamespace(
            list=AsyncMock(return_value={"meta": {}, "data": []}),
            retrieve=AsyncMock(return_value={"data": {"fields": {}}}),
        ),
        feed=SimpleNamespace(retrieve=AsyncMock(return_value={"data": ""})),
    )


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Clear the slowapi in-memory counter before every test."""
    limiter._storage.reset()
    yield


@pytest.fixture
def settings() -> Settings:
    return Settings(butter_api_token="test-token", site_name="Test Site", environment="production")


@pytest.fixture
def fake_client() -> SimpleNamespace:
    return make_fake_client()


@pytest.fixture
def app(settings, fake_client):
    return create_app(settings=settings, client=fake_client)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
