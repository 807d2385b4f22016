"""Shared authorization and error-mapping helpers for API v1 route modules."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import HTTPException, status

from app.auth.rbac import require_scopes
from app.core.config import get_config
from app.core.dependencies import CurrentUser, get_current_user
from app.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InconsistentStateError,
    LedgerDeskException,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _extract_bearer_token(authorization: str | None) -> str:
    if authorization is None or not authorization.strip():
        raise AuthenticationError("Authorization header is required.")
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise AuthenticationError("Authorization header must use Bearer token.")
    return parts[1].strip()


def authorize(authorization: str | None, scopes: list[str]) -> CurrentUser:
    token = _extract_bearer_token(authorization)
    user = get_current_user(token=token, settings=get_config())
    require_scopes(user.role, scopes)
    return user


def map_auth_error(exc: Exception) -> tuple[int, str]:
    if isinstance(exc, AuthenticationError):
        return status.HTTP_401_UNAUTHORIZED, str(exc)
    if isinstance(exc, AuthorizationError):
        return status.HTTP_403_FORBIDDEN, str(exc)
    return status.HTTP_401_UNAUTHORIZED, "Unauthorized."


def require_user(authorization: str | None, scopes: list[str]) -> CurrentUser:
    """Authorize a request or raise the matching 401/403."""
    try:
        return authorize(authorization=authorization, scopes=scopes)
    except (AuthenticationError, AuthorizationError) as exc:
        code, detail = map_auth_error(exc)
        raise HTTPException(status_code=code, detail=detail) from exc


def map_domain_error(exc: LedgerDeskException) -> tuple[int, str]:
    if isinstance(exc, ValidationError):
        return status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc)
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND, str(exc)
    if isinstance(exc, ConflictError):
        return status.HTTP_409_CONFLICT, str(exc)
    if isinstance(exc, (AuthenticationError, AuthorizationError)):
        return map_auth_error(exc)
    if isinstance(exc, InconsistentStateError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc)
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal error."


@contextmanager
def domain_errors() -> Iterator[None]:
    """Translate service exceptions raised inside the block into HTTP errors."""
    try:
        yield
    except LedgerDeskException as exc:
        code, detail = map_domain_error(exc)
        if code >= 500:
            logger.error("api.domain_error", extra={"event": "api.domain_error"}, exc_info=exc)
        raise HTTPException(status_code=code, detail=detail) from exc
