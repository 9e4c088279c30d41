"""Fixtures for HTTP tests against an app backed by in-memory storage."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from intralink.config import Settings
from intralink.domain.model import User
from intralink.domain.service import JWTService
from intralink.interface.api.app import create_app
from tests.di import InMemoryStore, build_app_container


@pytest.fixture
def store():
    """Repositories shared by every request of one test."""
    return InMemoryStore()


@pytest.fixture
def app(store):
    return create_app(container=build_app_container(store))


@pytest.fixture
def seed(store):
    """Save users (and anything else) into the store before calling the API."""

    def _seed(*coroutines):
        async def _run():
            return [await coroutine for coroutine in coroutines]

        return asyncio.run(_run())

    return _seed


@pytest.fixture
def client_for(app):
    """Test client authenticated as the given user."""

    def _client(user: User | None = None) -> TestClient:
        client = TestClient(app)
        if user is not None:
            token = JWTService(Settings().auth).create_token(str(user.id))
            client.cookies.set("auth_token", token)
        return client

    return _client
