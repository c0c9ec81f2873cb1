"""Authentication schemas."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class UserRole(str, Enum):
    """Portal roles, ordered from least to most privileged."""

    PARENT = "parent"
    SCHOOL = "school"
    ADMIN = "admin"


# Ordinal access levels; unknown roles have level 0
ROLE_LEVELS: dict[str, int] = {
    UserRole.PARENT.value: 1,
    UserRole.SCHOOL.value: 2,
    UserRole.ADMIN.value: 3,
}


class UserProfile(BaseModel):
    """User profile returned by the auth backend and kept in the session."""

    model_config = ConfigDict(extra="allow")

    id: str
    role: str
    phone_number: str | None = None
    email: str | None = None
    name: str | None = None
    google_id: str | None = None
    facebook_id: str | None = None


class AuthResponse(BaseModel):
    """Successful login / OTP verification response."""

    model_config = ConfigDict(extra="allow")

    token: str
    refresh_token: str | None = None
    user: UserProfile


class RefreshResponse(BaseModel):
    """Token refresh response."""

    model_config = ConfigDict(extra="allow")

    token: str
    refresh_token: str | None = None


class DeviceInfo(BaseModel):
    """Client device description sent with auth requests."""

    user_agent: str = "ksfp-portal"
    language: str = "en-KE"
    timezone: str = "Africa/Nairobi"
    ip: str = ""


class AuthLogEntry(BaseModel):
    """Audit record for an authentication action."""

    action: str
    provider: str
    success: bool
    message: str = ""
    device: DeviceInfo
