"""
Token Utilities

JWT helpers built on PyJWT.

The portal is a token *holder*, not the issuing authority: tokens received
from the auth backend are decoded without signature verification to read
their ``exp`` and ``sub`` claims. The create_* helpers sign tokens with the
local secret and exist for development and tests.
"""

import logging
import math
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from ksfp.core.config import settings

logger = logging.getLogger(__name__)


def _create_token(
    subject: str,
    token_type: str,
    expires_delta: timedelta,
    additional_claims: dict[str, Any] | None = None,
) -> str:
    now = datetime.now(UTC)
    payload: dict[str, Any] = {
        "sub": subject,
        "type": token_type,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
    }
    if additional_claims:
        payload.update(additional_claims)

    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_access_token(
    subject: str,
    additional_claims: dict[str, Any] | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a signed access token.

    Args:
        subject: User ID placed in the ``sub`` claim
        additional_claims: Extra claims such as role or phone number
        expires_delta: Lifetime override (defaults to configured minutes)

    Returns:
        Encoded JWT string
    """
    return _create_token(
        subject,
        "access",
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes),
        additional_claims,
    )


def create_refresh_token(subject: str, expires_delta: timedelta | None = None) -> str:
    """Create a signed refresh token."""
    return _create_token(
        subject,
        "refresh",
        expires_delta or timedelta(days=settings.refresh_token_expire_days),
    )


def decode_token(token: str) -> dict[str, Any] | None:
    """
    Decode and verify a locally signed token.

    Returns:
        The claims, or None if the token is invalid or expired
    """
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except jwt.PyJWTError as e:
        logger.debug(f"Token verification failed: {e}")
        return None


def read_token_claims(token: str | None) -> dict[str, Any] | None:
    """
    Read a token's claims without verifying its signature or expiry.

    Malformed input never raises; it yields None so callers can treat it as
    "no valid session".

    Args:
        token: JWT-shaped string (header.payload.signature)

    Returns:
        The payload claims, or None if the token cannot be decoded
    """
    if not token:
        return None

    try:
        claims = jwt.decode(
            token,
            options={"verify_signature": False, "verify_exp": False},
        )
    except jwt.PyJWTError as e:
        logger.warning(f"Token decode error: {e}")
        return None

    return claims if isinstance(claims, dict) else None


def read_token_expiry_ms(token: str | None) -> int | None:
    """
    Return the token's ``exp`` claim in milliseconds since the epoch.

    Returns:
        Expiry in milliseconds, or None when the token is malformed or has
        no finite numeric ``exp`` claim
    """
    claims = read_token_claims(token)
    if not claims:
        return None

    exp = claims.get("exp")
    if isinstance(exp, bool) or not isinstance(exp, int | float):
        return None
    if isinstance(exp, float) and not math.isfinite(exp):
        return None
    return int(exp * 1000)
