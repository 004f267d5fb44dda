"""
FastAPI dependencies.

Services are built once in the application lifespan and kept on ``app.state``.
"""

import secrets

from fastapi import Depends, Header, HTTPException, Request, status

from translator.core.config import Settings, get_settings
from translator.services.history_store import HistoryStore
from translator.services.interaction_handler import InteractionHandler


def get_store(request: Request) -> HistoryStore:
    return request.app.state.store


def get_interaction_handler(request: Request) -> InteractionHandler:
    return request.app.state.interaction_handler


def require_admin_key(
    x_api_key: str | None = Header(default=None),
    config: Settings = Depends(get_settings),
) -> None:
    """
    Guard for the admin endpoints.

    Raises:
        HTTPException: 403 when no admin key is configured, 401 on a wrong key
    """
    if not config.admin_api_key:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin API is disabled",
        )
    if not x_api_key or not secrets.compare_digest(x_api_key, config.admin_api_key):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
        )
