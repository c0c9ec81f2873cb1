"""
Phone Authentication

Phone-number login with a six-digit one-time code:

1. send_otp() normalises and validates the number, then asks the backend
   to send a code (the response carries the backend ``user_id``).
2. verify_otp() checks the code format and the per-number attempt limit
   before calling the backend; success starts the session.
3. resend_otp() requests a fresh code.

Validation failures are raised before any network call. Every outcome is
written to the auth audit log while a session is active.
"""

import logging
import math
import re
import time
from dataclasses import dataclass, field
from typing import Any

from ksfp.core.config import settings
from ksfp.core.rate_limit import check_rate_limit, reset_rate_limit
from ksfp.modules.auth.audit import log_auth_action
from ksfp.modules.auth.client import AuthClient
from ksfp.modules.auth.errors import (
    AuthError,
    InvalidOTPFormatError,
    InvalidPhoneNumberError,
    NotAuthenticatedError,
    OTPAttemptsExceededError,
)
from ksfp.modules.auth.schemas import AuthResponse, DeviceInfo
from ksfp.modules.auth.session import SessionManager

logger = logging.getLogger(__name__)

PROVIDER = "phone"

# Kenyan mobile numbers: +2547XXXXXXXX / +2541XXXXXXXX or 07.../01...
KENYAN_PHONE_PATTERN = re.compile(r"^(\+254|0)(7|1)\d{8}$")


def format_phone_number(phone_number: str) -> str:
    """
    Normalise a phone number to international form.

    Non-digits are stripped; ``0712...``, ``712...`` and ``254712...`` all
    become ``+254712...``.
    """
    cleaned = re.sub(r"\D", "", phone_number)

    if cleaned.startswith("254"):
        return f"+{cleaned}"
    if cleaned.startswith(("07", "01")):
        return f"+254{cleaned[1:]}"
    if cleaned.startswith(("7", "1")):
        return f"+254{cleaned}"
    return f"+{cleaned}"


def validate_phone_number(phone_number: str) -> bool:
    """Check a (formatted) number against the Kenyan mobile pattern."""
    return bool(KENYAN_PHONE_PATTERN.match(phone_number))


def validate_otp(otp: str) -> bool:
    """An OTP is exactly ``otp_length`` ASCII digits."""
    return bool(re.fullmatch(rf"[0-9]{{{settings.otp_length}}}", otp or ""))


def format_time(seconds: int) -> str:
    """Format a countdown as ``m:ss``."""
    seconds = max(0, int(seconds))
    return f"{seconds // 60}:{seconds % 60:02d}"


@dataclass
class OtpCountdown:
    """
    Validity and resend-cooldown timers for one sent code.

    ``started_at`` is a ``time.monotonic()`` reading.
    """

    validity_seconds: int = field(default_factory=lambda: settings.otp_validity_seconds)
    resend_cooldown_seconds: int = field(
        default_factory=lambda: settings.otp_resend_cooldown_seconds
    )
    started_at: float = field(default_factory=time.monotonic)

    def _elapsed(self, now: float | None = None) -> float:
        return (now if now is not None else time.monotonic()) - self.started_at

    def remaining(self, now: float | None = None) -> int:
        """Seconds until the code expires, rounded up, never negative."""
        left = self.validity_seconds - self._elapsed(now)
        return max(0, math.ceil(left))

    def is_expired(self, now: float | None = None) -> bool:
        return self.remaining(now) <= 0

    def can_resend(self, now: float | None = None) -> bool:
        return self._elapsed(now) >= self.resend_cooldown_seconds

    def restart(self, now: float | None = None) -> None:
        self.started_at = now if now is not None else time.monotonic()


class PhoneAuthService:
    """Phone/OTP login flows bound to one session."""

    def __init__(
        self,
        session: SessionManager,
        client: AuthClient,
        device: DeviceInfo | None = None,
    ):
        self.session = session
        self.client = client
        self.device = device or DeviceInfo()

    async def _log(self, action: str, success: bool, message: str = "") -> None:
        await log_auth_action(
            self.session, self.client, PROVIDER, action, success, message, self.device
        )

    @staticmethod
    def _normalise(phone_number: str) -> str:
        formatted = format_phone_number(phone_number)
        if not validate_phone_number(formatted):
            raise InvalidPhoneNumberError()
        return formatted

    async def send_otp(self, phone_number: str) -> dict[str, Any]:
        """
        Request an OTP for a phone number.

        Args:
            phone_number: Number in any common Kenyan format

        Returns:
            Backend response (includes ``user_id``)

        Raises:
            InvalidPhoneNumberError: Number is not a valid Kenyan mobile number
            AuthRequestError: Backend rejected the request or is unreachable
        """
        formatted = self._normalise(phone_number)

        try:
            data = await self.client.send_otp(formatted, self.device)
        except AuthError as e:
            await self._log("phone_otp_sent", False, e.message)
            raise

        await self._log("phone_otp_sent", True)
        logger.info(f"OTP sent to {formatted[:7]}***")
        return data

    async def verify_otp(self, phone_number: str, user_id: str, otp: str) -> AuthResponse:
        """
        Verify an OTP and start the session.

        Raises:
            InvalidPhoneNumberError: Invalid phone number
            InvalidOTPFormatError: OTP is not six digits
            OTPAttemptsExceededError: Too many attempts for this number
            AuthRequestError: Backend rejected the code or is unreachable
        """
        formatted = self._normalise(phone_number)
        if not validate_otp(otp):
            raise InvalidOTPFormatError()

        attempts_key = f"otp_attempts:{formatted}"
        allowed = await check_rate_limit(
            attempts_key,
            settings.otp_attempt_limit,
            settings.otp_attempt_window_seconds,
        )
        if not allowed:
            logger.warning(f"OTP attempt limit reached for {formatted[:7]}***")
            raise OTPAttemptsExceededError()

        try:
            result = await self.client.verify_otp(formatted, user_id, otp, self.device)
        except AuthError as e:
            await self._log("phone_otp_verified", False, e.message)
            raise

        await self.session.set_session(result.token, result.refresh_token, result.user)
        await reset_rate_limit(attempts_key)
        await self._log("phone_otp_verified", True)
        return result

    async def resend_otp(self, phone_number: str, user_id: str) -> dict[str, Any]:
        """
        Request a fresh OTP.

        Raises:
            InvalidPhoneNumberError: Invalid phone number
            AuthRequestError: Backend rejected the request or is unreachable
        """
        formatted = self._normalise(phone_number)

        try:
            data = await self.client.resend_otp(formatted, user_id)
        except AuthError as e:
            await self._log("phone_otp_resent", False, e.message)
            raise

        await self._log("phone_otp_resent", True)
        return data

    async def check_verification_status(self, user_id: str) -> dict[str, Any] | None:
        """
        Look up a user's phone verification status.

        Returns:
            Backend status, or None when the lookup fails
        """
        try:
            return await self.client.phone_status(user_id, await self.session.get_token() or "")
        except AuthError as e:
            logger.warning(f"Phone status check failed for {user_id}: {e.message}")
            return None

    async def update_phone_number(self, new_phone_number: str) -> dict[str, Any]:
        """
        Change the logged-in user's phone number (the new number must then be verified).

        Raises:
            NotAuthenticatedError: No active session
            InvalidPhoneNumberError: Invalid phone number
            AuthRequestError: Backend rejected the change
        """
        if not await self.session.is_authenticated():
            raise NotAuthenticatedError("Not logged in")

        formatted = self._normalise(new_phone_number)
        return await self.client.update_phone(formatted, await self.session.get_token() or "")
