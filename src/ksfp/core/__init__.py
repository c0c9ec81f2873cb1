"""
Core module - Configuration, Redis, tokens, rate limiting and scheduling.
"""

from ksfp.core.config import Settings, get_settings, settings
from ksfp.core.redis import close_redis, get_redis, init_redis
from ksfp.core.security import (
    create_access_token,
    create_refresh_token,
    decode_token,
    read_token_claims,
    read_token_expiry_ms,
)

__all__ = [
    # Config
    "Settings",
    "settings",
    "get_settings",
    # Redis
    "get_redis",
    "init_redis",
    "close_redis",
    # Tokens
    "create_access_token",
    "create_refresh_token",
    "decode_token",
    "read_token_claims",
    "read_token_expiry_ms",
]
