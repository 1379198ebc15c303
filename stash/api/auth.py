"""Identity verification for bearer tokens.

The auth service signs access tokens with a shared secret; a valid token's
``sub`` claim is the stable user id every resource row is keyed by.
"""

import logging
from typing import Any

from fastapi import Header
from jose import JWTError, jwt

from stash.api.errors import unauthorized
from stash.config import settings

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def verify_token(token: str) -> str:
    """Verify a JWT and return its subject.

    Raises:
        ValueError: If the token is invalid, expired, or missing ``sub``.
    """
    if not settings.jwt_secret:
        raise ValueError("JWT_SECRET not configured")

    options: dict[str, Any] = {"require_exp": True, "require_sub": True}
    if settings.jwt_audience is None:
        options["verify_aud"] = False
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options=options,
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e

    subject = payload.get("sub")
    if not subject:
        raise ValueError("Token missing required claim: sub")
    return str(subject)


def get_current_user_id(authorization: str | None = Header(None)) -> str:
    """FastAPI dependency: resolve the caller's user id or reject with 401."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise unauthorized()

    token = authorization[len(BEARER_PREFIX):].strip()
    try:
        return verify_token(token)
    except ValueError as e:
        logger.info(f"Rejected bearer token: {e}")
        raise unauthorized() from e
