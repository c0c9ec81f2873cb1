"""
Session Manager

Holds the authentication token, refresh token, decoded expiry and user
profile for one portal user, persisted through a SessionStorage backend.

Lifecycle:
    ANONYMOUS -> AUTHENTICATED -> REFRESHING -> AUTHENTICATED
                               -> EXPIRED    -> ANONYMOUS

- set_session() records the token and its decoded ``exp`` claim. A token
  whose expiry cannot be read is stored without an expiry and is therefore
  already expired.
- is_authenticated() clears an expired session before answering False.
- refresh() exchanges the refresh token; any failure logs the user out.
- logout() clears every persisted field.

The manager is an explicit object: pass it to whatever needs auth state.
Concurrent refresh() calls are not deduplicated; the last one to resolve
writes the stored token.
"""

import logging
import time
from collections.abc import Callable
from enum import Enum
from typing import Any

from pydantic import ValidationError

from ksfp.core.security import read_token_expiry_ms
from ksfp.modules.auth.client import AuthClient
from ksfp.modules.auth.errors import AuthError
from ksfp.modules.auth.schemas import ROLE_LEVELS, UserProfile, UserRole
from ksfp.modules.auth.storage import (
    EXPIRY_KEY,
    REFRESH_TOKEN_KEY,
    SESSION_KEYS,
    TOKEN_KEY,
    USER_KEY,
    SessionStorage,
)

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    """Lifecycle state of a session."""

    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"
    REFRESHING = "refreshing"
    EXPIRED = "expired"


class SessionManager:
    """Client-side session for one user."""

    def __init__(
        self,
        storage: SessionStorage,
        client: AuthClient | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.storage = storage
        self.client = client
        self._clock = clock
        self._state = SessionState.ANONYMOUS

    @property
    def state(self) -> SessionState:
        return self._state

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    async def load(self) -> SessionState:
        """
        Derive the state from what is already in storage.

        Use this when attaching to storage that may hold an earlier session.
        """
        if not await self.get_token():
            self._state = SessionState.ANONYMOUS
        elif await self.is_token_expired():
            self._state = SessionState.EXPIRED
        else:
            self._state = SessionState.AUTHENTICATED
        return self._state

    # ------------------------------------------------------------------
    # Tokens
    # ------------------------------------------------------------------

    async def set_token(self, token: str) -> int | None:
        """
        Store a token and its decoded expiry.

        Returns:
            The expiry in milliseconds, or None if it could not be decoded
        """
        expiry_ms = read_token_expiry_ms(token)

        # The expiry is written first so a token never sits next to a stale expiry
        if expiry_ms is None:
            logger.warning("Stored token has no readable expiry; treating it as expired")
            await self.storage.delete(EXPIRY_KEY)
        else:
            await self.storage.set(EXPIRY_KEY, str(expiry_ms))

        await self.storage.set(TOKEN_KEY, token)
        return expiry_ms

    async def get_token(self) -> str | None:
        return await self.storage.get(TOKEN_KEY)

    async def set_refresh_token(self, refresh_token: str) -> None:
        await self.storage.set(REFRESH_TOKEN_KEY, refresh_token)

    async def get_refresh_token(self) -> str | None:
        return await self.storage.get(REFRESH_TOKEN_KEY)

    async def get_expiry_ms(self) -> int | None:
        raw = await self.storage.get(EXPIRY_KEY)
        if raw is None:
            return None
        try:
            return int(raw)
        except ValueError:
            logger.warning(f"Ignoring unreadable session expiry: {raw!r}")
            return None

    async def is_token_expired(self) -> bool:
        """True when no expiry is recorded or the recorded expiry has passed."""
        expiry_ms = await self.get_expiry_ms()
        if expiry_ms is None:
            return True
        return self._now_ms() >= expiry_ms

    async def time_to_expiry(self) -> int:
        """Whole seconds until the token expires (0 when unknown or past)."""
        expiry_ms = await self.get_expiry_ms()
        if expiry_ms is None:
            return 0
        return max(0, (expiry_ms - self._now_ms()) // 1000)

    async def auth_headers(self) -> dict[str, str]:
        """Headers for authenticated calls to the backend."""
        return {
            "Authorization": f"Bearer {await self.get_token()}",
            "Content-Type": "application/json",
        }

    # ------------------------------------------------------------------
    # User profile
    # ------------------------------------------------------------------

    async def set_user(self, user: UserProfile | dict[str, Any]) -> None:
        profile = user if isinstance(user, UserProfile) else UserProfile.model_validate(user)
        await self.storage.set(USER_KEY, profile.model_dump_json())

    async def get_user(self) -> UserProfile | None:
        raw = await self.storage.get(USER_KEY)
        if not raw:
            return None
        try:
            return UserProfile.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Ignoring unreadable stored user profile: {e.error_count()} error(s)")
            return None

    async def update_user(self, **fields: Any) -> UserProfile | None:
        """
        Merge fields into the stored profile.

        Returns:
            The updated profile, or None when no profile is stored
        """
        current = await self.get_user()
        if current is None:
            return None

        updated = UserProfile.model_validate({**current.model_dump(), **fields})
        await self.set_user(updated)
        return updated

    async def get_user_id(self) -> str | None:
        user = await self.get_user()
        return user.id if user else None

    async def get_user_role(self) -> str | None:
        user = await self.get_user()
        return user.role if user else None

    async def get_phone_number(self) -> str | None:
        user = await self.get_user()
        return user.phone_number if user else None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def set_session(
        self,
        token: str,
        refresh_token: str | None,
        user: UserProfile | dict[str, Any],
    ) -> SessionState:
        """
        Start a session after a successful authentication.

        Args:
            token: Access token (JWT-shaped)
            refresh_token: Refresh token, if the backend issued one
            user: User profile

        Returns:
            AUTHENTICATED, or EXPIRED when the token's expiry is unreadable
            or already past
        """
        # A new login replaces every field of any earlier session
        await self.storage.delete(*SESSION_KEYS)
        await self.set_token(token)
        if refresh_token:
            await self.set_refresh_token(refresh_token)
        await self.set_user(user)

        self._state = (
            SessionState.EXPIRED if await self.is_token_expired() else SessionState.AUTHENTICATED
        )
        logger.info(f"Session started for user {await self.get_user_id()} ({self._state.value})")
        return self._state

    async def check_expiry(self) -> bool:
        """
        Log out a session whose token has expired.

        Returns:
            True if an expired session was cleared
        """
        if not await self.get_token():
            return False
        if not await self.is_token_expired():
            return False

        self._state = SessionState.EXPIRED
        logger.info("Session token expired")
        await self.logout()
        return True

    async def is_authenticated(self) -> bool:
        """
        True iff a token is stored and has not expired.

        An expired session is cleared as a side effect.
        """
        if not await self.get_token():
            self._state = SessionState.ANONYMOUS
            return False

        if await self.check_expiry():
            return False

        if self._state == SessionState.ANONYMOUS:
            self._state = SessionState.AUTHENTICATED
        return True

    async def refresh(self) -> bool:
        """
        Exchange the refresh token for a new access token.

        Returns:
            True on success; False after logging out on any failure
        """
        refresh_token = await self.get_refresh_token()
        if not refresh_token or self.client is None:
            logger.info("No refresh token available, logging out")
            await self.logout()
            return False

        self._state = SessionState.REFRESHING
        try:
            result = await self.client.refresh(refresh_token)
        except AuthError as e:
            logger.warning(f"Token refresh failed: {e.message}")
            await self.logout()
            return False

        await self.set_token(result.token)
        if result.refresh_token:
            await self.set_refresh_token(result.refresh_token)

        if await self.is_token_expired():
            logger.warning("Refreshed token is already expired, logging out")
            await self.logout()
            return False

        self._state = SessionState.AUTHENTICATED
        logger.info("Session token refreshed")
        return True

    async def logout(self) -> None:
        """Clear every persisted session field."""
        await self.storage.delete(*SESSION_KEYS)
        self._state = SessionState.ANONYMOUS
        logger.info("Session cleared")

    # ------------------------------------------------------------------
    # Roles
    # ------------------------------------------------------------------

    async def has_role(self, role: str) -> bool:
        return await self.get_user_role() == role

    async def access_level(self) -> int:
        """Ordinal level of the current role: parent 1, school 2, admin 3, otherwise 0."""
        role = await self.get_user_role()
        return ROLE_LEVELS.get(role, 0) if role else 0

    async def can_access(self, required_role: UserRole | str) -> bool:
        """
        Check the current role against a required role.

        Roles form a strict order (parent < school < admin) and a higher role
        passes any lower requirement. This is an ordinal check rather than a
        capability set.
        """
        if isinstance(required_role, UserRole):
            required_role = required_role.value
        required_level = ROLE_LEVELS.get(required_role, 0)
        return await self.access_level() >= required_level

