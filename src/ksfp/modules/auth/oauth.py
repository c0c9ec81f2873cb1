"""
OAuth Login (Google, Facebook)

The provider SDKs run elsewhere; this module receives the credential they
produce and exchanges it with the auth backend:

- login() starts a session from a provider credential.
- link() / unlink() attach or detach the provider on the logged-in account
  and mirror the change in the stored profile (``google_id`` /
  ``facebook_id``).

Google also supports a manual redirect flow (authorization_url()).
"""

import logging
import secrets
from enum import Enum
from typing import Any
from urllib.parse import urlencode

from ksfp.core.config import settings
from ksfp.modules.auth.audit import log_auth_action
from ksfp.modules.auth.client import AuthClient
from ksfp.modules.auth.errors import AuthError, NotAuthenticatedError, UnsupportedProviderError
from ksfp.modules.auth.schemas import AuthResponse, DeviceInfo
from ksfp.modules.auth.session import SessionManager

logger = logging.getLogger(__name__)

GOOGLE_AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_SCOPES = "openid profile email"


class OAuthProvider(str, Enum):
    GOOGLE = "google"
    FACEBOOK = "facebook"


def generate_state() -> str:
    """Random OAuth ``state`` value for CSRF protection."""
    return secrets.token_urlsafe(16)


def generate_nonce() -> str:
    """Random OpenID Connect ``nonce`` value."""
    return secrets.token_urlsafe(12)


class OAuthService:
    """Provider login, link and unlink for one session."""

    def __init__(
        self,
        provider: OAuthProvider | str,
        session: SessionManager,
        client: AuthClient,
        device: DeviceInfo | None = None,
    ):
        try:
            self.provider = OAuthProvider(provider)
        except ValueError as e:
            raise UnsupportedProviderError(str(provider)) from e
        self.session = session
        self.client = client
        self.device = device or DeviceInfo()

    @property
    def profile_field(self) -> str:
        """Profile field holding the provider account ID."""
        return f"{self.provider.value}_id"

    async def _log(self, action: str, success: bool, message: str = "") -> None:
        await log_auth_action(
            self.session,
            self.client,
            self.provider.value,
            f"{self.provider.value}_{action}",
            success,
            message,
            self.device,
        )

    def _credential_payload(self, credential: str, extra: dict[str, Any]) -> dict[str, Any]:
        key = "token" if self.provider == OAuthProvider.GOOGLE else "access_token"
        return {key: credential, **extra}

    async def login(self, credential: str, **extra: Any) -> AuthResponse:
        """
        Exchange a provider credential for a portal session.

        Args:
            credential: Google ID token or Facebook access token
            **extra: Extra provider data (Facebook ``user_id``, ``user_info``)

        Returns:
            Backend auth response; the session is started from it

        Raises:
            AuthRequestError: Backend rejected the credential or is unreachable
        """
        try:
            result = await self.client.oauth_login(
                self.provider.value,
                {**self._credential_payload(credential, extra), "device": self.device.model_dump()},
            )
        except AuthError as e:
            await self._log("login", False, e.message)
            raise

        await self.session.set_session(result.token, result.refresh_token, result.user)
        logger.info(f"{self.provider.value} login for user {result.user.id}")
        await self._log("login", True)
        return result

    async def link(self, credential: str, **extra: Any) -> bool:
        """
        Link the provider account to the logged-in user.

        Returns:
            True if linked, False if the backend refused

        Raises:
            NotAuthenticatedError: No active session
        """
        if not await self.session.is_authenticated():
            raise NotAuthenticatedError()

        try:
            data = await self.client.oauth_link(
                self.provider.value,
                self._credential_payload(credential, extra),
                await self.session.get_token() or "",
            )
        except AuthError as e:
            await self._log("link", False, e.message)
            return False

        updates: dict[str, Any] = {
            self.profile_field: data.get(self.profile_field)
            or (extra.get("user_info") or {}).get("id")
        }
        if data.get("email"):
            updates["email"] = data["email"]
        await self.session.update_user(**updates)

        await self._log("link", True)
        return True

    async def unlink(self) -> bool:
        """
        Detach the provider account from the logged-in user.

        Returns:
            True if unlinked; False without a session or if the backend refused
        """
        if not await self.session.is_authenticated():
            return False

        try:
            await self.client.oauth_unlink(
                self.provider.value, await self.session.get_token() or ""
            )
        except AuthError as e:
            await self._log("unlink", False, e.message)
            return False

        await self.session.update_user(**{self.profile_field: None})
        await self._log("unlink", True)
        return True

    def authorization_url(self, state: str | None = None, nonce: str | None = None) -> str:
        """
        Build the Google authorization URL for the manual redirect flow.

        The caller keeps ``state`` to check it on the callback.

        Raises:
            UnsupportedProviderError: Provider is not Google
        """
        if self.provider != OAuthProvider.GOOGLE:
            raise UnsupportedProviderError(f"{self.provider.value} (redirect flow)")

        params = {
            "client_id": settings.google_client_id,
            "redirect_uri": f"{settings.portal_base_url}/api/auth/google/callback",
            "response_type": "code",
            "scope": GOOGLE_SCOPES,
            "state": state or generate_state(),
            "nonce": nonce or generate_nonce(),
        }
        return f"{GOOGLE_AUTHORIZE_URL}?{urlencode(params)}"
