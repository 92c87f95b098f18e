"""
Pytest will auto-discover this file.
Fixtures shared by the registry, relay and API tests.
"""

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from chessrelay.config import make_config
from chessrelay.main import create_app
from chessrelay.pairing import NewGame, request_new_game
from chessrelay.rooms import RoomRegistry

ALLOWED_ORIGIN = "http://localhost:3000"


@pytest.fixture
def anyio_backend() -> str:
    """Async tests run on asyncio only (the server runs on it too)."""
    return "asyncio"


@pytest.fixture
def registry() -> RoomRegistry:
    return RoomRegistry()


@pytest.fixture
def paired(registry: RoomRegistry) -> tuple[NewGame, NewGame]:
    """A closed room: first request is white, second is black."""
    white = request_new_game(registry)
    black = request_new_game(registry)
    return white, black


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Fresh application (own registry) per test. Used as a context manager so all websockets share one event loop."""
    app = create_app(make_config(allowed_origins=[ALLOWED_ORIGIN]))
    with TestClient(app) as test_client:
        yield test_client
