from __future__ import annotations

import uuid
from collections.abc import Mapping
from contextvars import Token
from typing import Any

import structlog


REQUEST_ID = "request_id"


def new_request_id() -> str:
    return str(uuid.uuid4())


def bind_request_id(request_id: str) -> Mapping[str, Token[Any]]:
    """Bind ``request_id`` for the current task/thread.

    Returns the tokens ``clear_request_id`` needs to restore the previous state.
    """

    return structlog.contextvars.bind_contextvars(**{REQUEST_ID: request_id})


def clear_request_id(tokens: Mapping[str, Token[Any]]) -> None:
    # Restores the previous binding: empty after a top-level call, the caller's id after a nested one.
    structlog.contextvars.reset_contextvars(**tokens)


def current_request_id() -> str | None:
    return structlog.contextvars.get_contextvars().get(REQUEST_ID)
