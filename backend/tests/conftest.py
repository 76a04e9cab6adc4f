"""
Pytest configuration and fixtures
"""
import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient
from pymongo.errors import ServerSelectionTimeoutError

from contact_manager.core.config import Settings
from contact_manager.main import create_app


class _UnavailableCollection:
    """Every call fails the way motor does when no server is reachable."""

    async def insert_one(self, document):
        raise ServerSelectionTimeoutError("localhost:27017: connection refused")

    def find(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("localhost:27017: connection refused")


class UnavailableDatabase:
    def __getitem__(self, name):
        return _UnavailableCollection()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, MONGODB_URI="", ENVIRONMENT="test")


@pytest.fixture
def database():
    """In-memory async MongoDB database, fresh per test."""
    return AsyncMongoMockClient()["contact_manager_test"]


@pytest.fixture
def unavailable_database():
    return UnavailableDatabase()


@pytest.fixture
def app(database, settings):
    return create_app(database=database, settings=settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
