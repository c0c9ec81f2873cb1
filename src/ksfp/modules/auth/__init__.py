"""
Auth module - Session lifecycle, phone OTP and OAuth login against the auth backend.
"""

from ksfp.modules.auth.client import AuthClient
from ksfp.modules.auth.errors import (
    AuthError,
    AuthRequestError,
    InvalidOTPFormatError,
    InvalidPhoneNumberError,
    NotAuthenticatedError,
    OTPAttemptsExceededError,
    UnsupportedProviderError,
)
from ksfp.modules.auth.jobs import SessionWatcher
from ksfp.modules.auth.oauth import OAuthProvider, OAuthService
from ksfp.modules.auth.phone import OtpCountdown, PhoneAuthService
from ksfp.modules.auth.schemas import AuthResponse, UserProfile, UserRole
from ksfp.modules.auth.session import SessionManager, SessionState
from ksfp.modules.auth.storage import (
    MemorySessionStorage,
    RedisSessionStorage,
    SessionStorage,
    create_session_storage,
)

__all__ = [
    "AuthClient",
    "AuthError",
    "AuthRequestError",
    "AuthResponse",
    "InvalidOTPFormatError",
    "InvalidPhoneNumberError",
    "MemorySessionStorage",
    "NotAuthenticatedError",
    "OAuthProvider",
    "OAuthService",
    "OTPAttemptsExceededError",
    "OtpCountdown",
    "PhoneAuthService",
    "RedisSessionStorage",
    "SessionManager",
    "SessionState",
    "SessionStorage",
    "SessionWatcher",
    "UnsupportedProviderError",
    "UserProfile",
    "UserRole",
    "create_session_storage",
]
