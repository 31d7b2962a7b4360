"""Shared-token authentication for API routes."""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING

from fastapi import Depends, Header, HTTPException, Request, status

if TYPE_CHECKING:
    from fit_tracker.containers import AppContainer


def _get_api_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


def token_matches(candidate: str | None, expected: str) -> bool:
    """Compare tokens in constant time."""
    if not candidate:
        return False
    return secrets.compare_digest(candidate, expected)


async def require_api_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include a valid API token."""
    if not token_matches(x_api_token, api_token):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
