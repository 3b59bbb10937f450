from __future__ import annotations

from collections.abc import AsyncIterator, Iterator
from typing import Any

import pytest
import structlog
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import Session
from structlog.testing import LogCapture

from subway.config import get_settings
from subway.db.session import _engine_for, get_db, init_db
from subway.main import app


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'subway.db'}")
    monkeypatch.delenv("REQUEST_LOG_POINTCUT", raising=False)
    monkeypatch.delenv("REQUEST_LOG_PROPAGATE_ERRORS", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    get_settings.cache_clear()
    structlog.contextvars.clear_contextvars()
    database_url = get_settings().database_url
    init_db()

    yield

    _engine_for(database_url).dispose()
    _engine_for.cache_clear()
    get_settings.cache_clear()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def configure_env(monkeypatch: pytest.MonkeyPatch):
    """Set environment variables and drop the cached settings."""

    def _apply(**values: str) -> None:
        for key, value in values.items():
            monkeypatch.setenv(key, value)
        get_settings.cache_clear()

    return _apply


@pytest.fixture
def log_events() -> Iterator[list[dict[str, Any]]]:
    capture = LogCapture()
    structlog.configure(processors=[structlog.contextvars.merge_contextvars, capture])
    yield capture.entries
    structlog.reset_defaults()


@pytest.fixture
def db() -> Iterator[Session]:
    gen = get_db()
    session = next(gen)
    yield session
    gen.close()


@pytest.fixture
async def api_client() -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
