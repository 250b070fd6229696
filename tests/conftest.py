"""Shared fixtures: an app bound to a throwaway SQLite file and token helpers."""
from __future__ import annotations

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["LOG_FILE_PATH"] = ""

from collections.abc import Callable, Generator, Iterable

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from shop.core.config import settings
from shop.db.database import get_connection, init_db
from shop.main import create_app


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'shop.db'}"


@pytest.fixture
def conn(database_url):
    """A connection to a freshly initialised database."""
    init_db(database_url)
    connection = get_connection(database_url)
    yield connection
    connection.close()


@pytest.fixture
def other_conn(conn, database_url):
    """A second connection to the same database, for interleaving writes."""
    connection = get_connection(database_url)
    yield connection
    connection.close()


@pytest.fixture
def client(database_url) -> Generator[TestClient, None, None]:
    app = create_app(database_url)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_token() -> Callable[..., str]:
    def _make(roles: Iterable[str] | str = (), sub: str = "user-1", **claims) -> str:
        payload = {"sub": sub, "role": roles if isinstance(roles, str) else list(roles)}
        payload.update(claims)
        return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return _make


@pytest.fixture
def auth_headers(make_token) -> Callable[..., dict[str, str]]:
    def _headers(*roles: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {make_token(roles)}"}
    return _headers


@pytest.fixture
def employee(auth_headers) -> dict[str, str]:
    return auth_headers("employee")


@pytest.fixture
def manager(auth_headers) -> dict[str, str]:
    return auth_headers("manager")
