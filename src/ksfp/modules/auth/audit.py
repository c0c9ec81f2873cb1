"""
Auth Action Audit Log

Records login, link and OTP outcomes with the auth backend. Recording is
best effort: it only happens while a session is authenticated and a failed
write is logged locally without failing the action being audited.
"""

import logging

from ksfp.modules.auth.client import AuthClient
from ksfp.modules.auth.errors import AuthError
from ksfp.modules.auth.schemas import AuthLogEntry, DeviceInfo
from ksfp.modules.auth.session import SessionManager

logger = logging.getLogger(__name__)


async def log_auth_action(
    session: SessionManager,
    client: AuthClient,
    provider: str,
    action: str,
    success: bool,
    message: str = "",
    device: DeviceInfo | None = None,
) -> bool:
    """
    Send an audit entry for an auth action.

    Args:
        session: Current session (entries are only sent when authenticated)
        client: Auth backend client
        provider: "phone", "google" or "facebook"
        action: Action name, e.g. "google_login"
        success: Whether the action succeeded
        message: Failure message, if any
        device: Device description

    Returns:
        True if the entry was recorded
    """
    if not await session.is_authenticated():
        return False

    entry = AuthLogEntry(
        action=action,
        provider=provider,
        success=success,
        message=message or "",
        device=device or DeviceInfo(),
    )

    try:
        await client.log_action(entry, await session.get_token() or "")
    except AuthError as e:
        logger.warning(f"Could not record auth action {action}: {e.message}")
        return False

    return True
