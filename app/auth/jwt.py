"""HS256 JSON Web Tokens for API sign-in.

Tokens carry the user id (``sub``), email, role and a ``permissions_version``
that lets operators invalidate every issued token by bumping the config value.
``token_use`` separates short-lived access tokens from refresh tokens.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from app.core.exceptions import AuthenticationError

ACCESS = "access"
REFRESH = "refresh"
HEADER = {"alg": "HS256", "typ": "JWT"}


def _segment(data: dict[str, Any]) -> str:
    raw = json.dumps(data, separators=(",", ":"), sort_keys=True).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def _load_segment(segment: str) -> dict[str, Any]:
    padded = segment + "=" * (-len(segment) % 4)
    return json.loads(base64.urlsafe_b64decode(padded.encode("ascii")).decode("utf-8"))


def _signature(signing_input: str, secret: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), signing_input.encode("utf-8"), hashlib.sha256).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")


def _require_secret(secret: str) -> None:
    if not secret:
        raise AuthenticationError("JWT secret must be configured.")


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str
    expires_in: int
    token_type: str = "bearer"


def encode_jwt(payload: dict[str, Any], secret: str, ttl: timedelta) -> str:
    """Sign ``payload`` with iat/exp/jti claims filled in when absent."""
    _require_secret(secret)
    now = datetime.now(timezone.utc)
    body = {
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
        "jti": uuid.uuid4().hex,
        **payload,
    }
    signing_input = f"{_segment(HEADER)}.{_segment(body)}"
    return f"{signing_input}.{_signature(signing_input, secret)}"


def decode_jwt(
    token: str,
    secret: str,
    verify_exp: bool = True,
    expected_use: str | None = None,
) -> dict[str, Any]:
    """Verify signature, expiry and (optionally) ``token_use``; return the claims."""
    _require_secret(secret)
    parts = token.split(".")
    if len(parts) != 3:
        raise AuthenticationError("Invalid token format.")
    header_segment, payload_segment, signature_segment = parts

    if not hmac.compare_digest(_signature(f"{header_segment}.{payload_segment}", secret), signature_segment):
        raise AuthenticationError("Invalid token signature.")
    try:
        claims = _load_segment(payload_segment)
    except ValueError as exc:
        raise AuthenticationError("Invalid token payload.") from exc

    if verify_exp:
        if "exp" not in claims:
            raise AuthenticationError("Token is missing exp claim.")
        if int(claims["exp"]) < int(datetime.now(timezone.utc).timestamp()):
            raise AuthenticationError("Token has expired.")
    if expected_use is not None and claims.get("token_use") != expected_use:
        raise AuthenticationError(f"Token use must be '{expected_use}'.")
    return claims


def issue_token(
    token_use: str,
    user_id: int,
    email: str,
    role: str,
    secret: str,
    ttl: timedelta,
    permissions_version: int = 1,
) -> str:
    claims = {
        "sub": str(user_id),
        "email": email,
        "role": role,
        "permissions_version": permissions_version,
        "token_use": token_use,
    }
    return encode_jwt(claims, secret=secret, ttl=ttl)


def create_access_token(
    user_id: int,
    email: str,
    role: str,
    secret: str,
    permissions_version: int = 1,
    ttl_minutes: int = 60,
) -> str:
    return issue_token(ACCESS, user_id, email, role, secret, timedelta(minutes=ttl_minutes), permissions_version)


def create_token_pair(
    user_id: int,
    email: str,
    role: str,
    secret: str,
    permissions_version: int = 1,
    access_ttl_minutes: int = 60,
    refresh_ttl_days: int = 14,
) -> TokenPair:
    """Create an access + refresh token pair for a signed-in user."""
    return TokenPair(
        access_token=create_access_token(user_id, email, role, secret, permissions_version, access_ttl_minutes),
        refresh_token=issue_token(
            REFRESH, user_id, email, role, secret, timedelta(days=refresh_ttl_days), permissions_version
        ),
        expires_in=access_ttl_minutes * 60,
    )
