from __future__ import annotations

from collections.abc import Callable, Generator, Iterator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from devconnector.api.main import create_app
from devconnector.config import Settings
from devconnector.data.db import Database

TEST_SECRET = "test-secret"


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a temporary SQLite database."""
    db_path = tmp_path / "api.db"
    return Settings(jwt_secret=TEST_SECRET, database_url=f"sqlite:///{db_path.as_posix()}")


@pytest.fixture
def database(settings: Settings) -> Iterator[Database]:
    db = Database(settings.database_url)
    db.create_tables()
    yield db
    # Dispose engine to release connections
    db.dispose()


@pytest.fixture
def session(database: Database) -> Iterator[Session]:
    with database.session() as s:
        yield s


@pytest.fixture
def app(settings: Settings, database: Database) -> FastAPI:
    return create_app(settings, database)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient]:
    """Create a test client for the API."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def register(client: TestClient) -> Callable[..., str]:
    """Return a helper that registers a user and returns their token."""

    def _register(name: str = "Alice", email: str = "a@x.com", password: str = "secret1") -> str:
        response = client.post(
            "/api/users", json={"name": name, "email": email, "password": password}
        )
        assert response.status_code == 200, response.text
        return response.json()["token"]

    return _register


def auth(token: str) -> dict[str, str]:
    """Headers carrying ``token``."""
    return {"x-auth-token": token}
