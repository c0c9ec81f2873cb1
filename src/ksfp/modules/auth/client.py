"""
Auth Backend Client

Thin async HTTP client for the external authentication backend. Every call
posts (or gets) JSON and returns the decoded JSON body. Failures raise
AuthRequestError carrying the backend's ``message`` when present.

There are no retries and no in-flight deduplication: two concurrent calls
both reach the backend and whichever resolves last wins.
"""

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ksfp.core.config import settings
from ksfp.modules.auth.errors import AuthRequestError
from ksfp.modules.auth.schemas import AuthLogEntry, AuthResponse, DeviceInfo, RefreshResponse

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Network error. Please try again."

ResponseModel = TypeVar("ResponseModel", bound=BaseModel)


def _parse(model: type[ResponseModel], data: dict[str, Any]) -> ResponseModel:
    """Validate a success body, treating a malformed one as a backend failure."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.error(f"Unexpected auth backend response for {model.__name__}: {e}")
        raise AuthRequestError("Unexpected response from the authentication server") from e


class AuthClient:
    """Client for the auth backend REST endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._client = http_client or httpx.AsyncClient(
            base_url=base_url or settings.auth_api_base_url,
            timeout=settings.http_timeout_seconds,
        )

    async def close(self) -> None:
        await self._client.aclose()

    @staticmethod
    def _headers(bearer: str | None) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if bearer:
            headers["Authorization"] = f"Bearer {bearer}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        failure_message: str,
        payload: dict[str, Any] | None = None,
        bearer: str | None = None,
    ) -> dict[str, Any]:
        """
        Send a request and return the JSON body.

        Raises:
            AuthRequestError: On network failure or a non-2xx response
        """
        try:
            response = await self._client.request(
                method,
                path,
                json=payload,
                headers=self._headers(bearer),
            )
        except httpx.HTTPError as e:
            logger.error(f"Auth backend unreachable for {method} {path}: {e}")
            raise AuthRequestError(NETWORK_ERROR_MESSAGE) from e

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {"data": data}

        if response.is_error:
            message = data.get("message") or failure_message
            logger.warning(
                f"Auth backend rejected {method} {path} ({response.status_code}): {message}"
            )
            raise AuthRequestError(message, status_code=response.status_code)

        return data

    # ------------------------------------------------------------------
    # Phone / OTP
    # ------------------------------------------------------------------

    async def send_otp(self, phone_number: str, device: DeviceInfo) -> dict[str, Any]:
        """Ask the backend to send an OTP; the response carries ``user_id``."""
        return await self._request(
            "POST",
            "/auth/phone/send-otp",
            "Failed to send OTP",
            {"phone_number": phone_number, "device": device.model_dump()},
        )

    async def verify_otp(
        self,
        phone_number: str,
        user_id: str,
        otp: str,
        device: DeviceInfo,
    ) -> AuthResponse:
        data = await self._request(
            "POST",
            "/auth/verify-otp",
            "Invalid OTP",
            {
                "phone_number": phone_number,
                "user_id": user_id,
                "otp": otp,
                "device": device.model_dump(),
            },
        )
        return _parse(AuthResponse, data)

    async def resend_otp(self, phone_number: str, user_id: str) -> dict[str, Any]:
        return await self._request(
            "POST",
            "/auth/resend-otp",
            "Failed to resend OTP",
            {"phone_number": phone_number, "user_id": user_id},
        )

    async def phone_status(self, user_id: str, bearer: str) -> dict[str, Any]:
        return await self._request(
            "GET",
            f"/auth/phone/status/{user_id}",
            "Failed to check phone verification status",
            bearer=bearer,
        )

    async def update_phone(self, phone_number: str, bearer: str) -> dict[str, Any]:
        return await self._request(
            "POST",
            "/auth/phone/update",
            "Failed to update phone",
            {"phone_number": phone_number},
            bearer=bearer,
        )

    # ------------------------------------------------------------------
    # OAuth providers
    # ------------------------------------------------------------------

    async def oauth_login(self, provider: str, payload: dict[str, Any]) -> AuthResponse:
        data = await self._request(
            "POST",
            f"/auth/{provider}/login",
            f"{provider.capitalize()} login failed",
            payload,
        )
        return _parse(AuthResponse, data)

    async def oauth_link(
        self, provider: str, payload: dict[str, Any], bearer: str
    ) -> dict[str, Any]:
        return await self._request(
            "POST",
            f"/auth/{provider}/link",
            f"Failed to link {provider.capitalize()} account",
            payload,
            bearer=bearer,
        )

    async def oauth_unlink(self, provider: str, bearer: str) -> dict[str, Any]:
        return await self._request(
            "POST",
            f"/auth/{provider}/unlink",
            f"Failed to unlink {provider.capitalize()} account",
            bearer=bearer,
        )

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    async def refresh(self, refresh_token: str) -> RefreshResponse:
        data = await self._request(
            "POST",
            "/auth/refresh",
            "Session refresh failed",
            {"refresh_token": refresh_token},
        )
        return _parse(RefreshResponse, data)

    async def log_action(self, entry: AuthLogEntry, bearer: str) -> None:
        await self._request(
            "POST",
            "/auth/log",
            "Failed to record auth action",
            entry.model_dump(),
            bearer=bearer,
        )
