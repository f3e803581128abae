"""
Pytest Configuration and Fixtures

Unit fixtures (in-memory store, TestClient with mocked infrastructure,
aiosqlite engines) and session-scoped fixtures for live tests against a
running stack.
"""

import os

from dotenv import load_dotenv

# ---------------------------------------------------------------------------
# Test environment defaults: MUST be set before any mail_notes imports.
#
# 1. Load .env first so that Docker-matching credentials are available.
# 2. setdefault fills in anything still missing (CI runners, fresh clones
#    without a .env file).
# ---------------------------------------------------------------------------
load_dotenv()  # .env → os.environ (no-op if file is missing)

_test_env = {
    "POSTGRES_USER": "notes",
    "POSTGRES_PASSWORD": "notes_password",
    "POSTGRES_HOST": "localhost",
    "POSTGRES_PORT": "5432",
    "POSTGRES_DB": "notes_db",
    "ENVIRONMENT": "test",
}
for _key, _value in _test_env.items():
    os.environ.setdefault(_key, _value)

# ---------------------------------------------------------------------------
# Imports (safe now that env vars are set)
# ---------------------------------------------------------------------------
import time  # noqa: E402
from collections.abc import AsyncGenerator, Callable, Generator  # noqa: E402
from contextlib import AbstractContextManager, contextmanager  # noqa: E402
from unittest.mock import AsyncMock, patch  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine  # noqa: E402

from mail_notes.api.notes import get_notes_service  # noqa: E402
from mail_notes.main import create_app  # noqa: E402
from mail_notes.repositories.memory import InMemoryNoteStore  # noqa: E402
from mail_notes.repositories.notes import NoteStore  # noqa: E402
from mail_notes.services.notes import NotesService  # noqa: E402

BASE_URL = os.getenv("NOTES_API_URL", "http://localhost:3000")


# ---------------------------------------------------------------------------
# Unit fixtures
# ---------------------------------------------------------------------------


class FailingStore:
    """NoteStore whose every call fails like an unreachable database."""

    async def insert(self, note_data):
        raise ConnectionError("store unreachable")

    async def list_by_message_id(self, message_id):
        raise ConnectionError("store unreachable")

    async def delete_by_id(self, note_id):
        raise ConnectionError("store unreachable")

    async def delete_all(self):
        raise ConnectionError("store unreachable")


@pytest.fixture
def memory_store() -> InMemoryNoteStore:
    """Fresh, empty in-memory note store."""
    return InMemoryNoteStore()


@pytest.fixture
def notes_service(memory_store: InMemoryNoteStore) -> NotesService:
    """NotesService wired to the in-memory store."""
    return NotesService(memory_store)


@pytest.fixture
def failing_store() -> FailingStore:
    """Store that raises on every operation."""
    return FailingStore()


@contextmanager
def running_client(app: FastAPI, store: NoteStore) -> Generator[TestClient, None, None]:
    """
    TestClient for ``app`` with infrastructure mocked out.

    TestClient triggers the lifespan handler, so the database wait and the
    schema initializer are patched; routes are served from ``store``.
    """
    with (
        patch("mail_notes.main.wait_for_db", new_callable=AsyncMock) as mock_db,
        patch("mail_notes.main.ensure_schema", new_callable=AsyncMock) as mock_schema,
    ):
        mock_db.return_value = True
        mock_schema.return_value = []
        app.dependency_overrides[get_notes_service] = lambda: NotesService(store)

        with TestClient(app) as client:
            yield client


@pytest.fixture
def client_factory() -> Callable[..., AbstractContextManager[TestClient]]:
    """Expose running_client to tests that need custom apps or stores."""
    return running_client


@pytest.fixture
def client(memory_store: InMemoryNoteStore) -> Generator[TestClient, None, None]:
    """TestClient for the default app backed by memory_store."""
    with running_client(create_app(), memory_store) as test_client:
        yield test_client


@pytest_asyncio.fixture
async def sqlite_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Async engine on an empty file-backed SQLite database."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}")
    yield engine
    await engine.dispose()


# ---------------------------------------------------------------------------
# Live fixtures (tests marked @pytest.mark.live)
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def wait_for_api():
    """
    Block until the API is ready or timeout expires.

    Polls /health endpoint with 1s intervals for up to 30s.
    Fails the test session if API is unreachable (Docker likely not running).
    """
    url = f"{BASE_URL}/health"
    timeout = 30
    start = time.time()

    print("\n[Test] Waiting for API...")
    while time.time() - start < timeout:
        try:
            res = httpx.get(url, timeout=1.0)
            if res.status_code == 200:
                print("API Ready")
                return
        except httpx.RequestError:
            time.sleep(1)

    pytest.fail("API unreachable. Is the server running?")


@pytest.fixture(scope="session")
def api_client(wait_for_api) -> Generator[httpx.Client, None, None]:
    """
    Pre-configured HTTP client for live tests.

    Yields:
        httpx.Client: Session-scoped client, automatically closed after tests.
    """
    with httpx.Client(base_url=BASE_URL, timeout=10.0) as client:
        yield client
