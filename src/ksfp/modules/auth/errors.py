"""
Authentication Errors

Every failure surfaced to callers of the auth flows derives from AuthError
and carries a human-readable message, a stable error code and an HTTP-style
status code.
"""


class AuthError(Exception):
    """Base exception for authentication errors."""

    def __init__(self, message: str, error_code: str, status_code: int = 400):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


class InvalidPhoneNumberError(AuthError):
    """Raised before any network call when a phone number is not a valid Kenyan number."""

    def __init__(self):
        super().__init__(
            message="Please enter a valid phone number",
            error_code="INVALID_PHONE_NUMBER",
            status_code=422,
        )


class InvalidOTPFormatError(AuthError):
    """Raised before any network call when an OTP is not exactly six digits."""

    def __init__(self):
        super().__init__(
            message="Invalid OTP format. Enter the 6-digit code.",
            error_code="INVALID_OTP_FORMAT",
            status_code=422,
        )


class OTPAttemptsExceededError(AuthError):
    """Raised when too many OTP verification attempts were made for a number."""

    def __init__(self):
        super().__init__(
            message="Too many attempts. Please try again later.",
            error_code="OTP_ATTEMPTS_EXCEEDED",
            status_code=429,
        )


class NotAuthenticatedError(AuthError):
    """Raised when an action requires a logged-in session."""

    def __init__(self, message: str = "Please log in first"):
        super().__init__(
            message=message,
            error_code="NOT_AUTHENTICATED",
            status_code=401,
        )


class UnsupportedProviderError(AuthError):
    """Raised for an OAuth provider the portal does not support."""

    def __init__(self, provider: str):
        super().__init__(
            message=f"Unsupported login provider: {provider}",
            error_code="UNSUPPORTED_PROVIDER",
            status_code=400,
        )


class AuthRequestError(AuthError):
    """
    Raised when the auth backend rejects a request or cannot be reached.

    The message is the backend's ``message`` when it sent one, otherwise a
    generic description of the failed action. No retry is attempted.
    """

    def __init__(self, message: str, status_code: int = 502):
        super().__init__(
            message=message,
            error_code="AUTH_REQUEST_FAILED",
            status_code=status_code,
        )
