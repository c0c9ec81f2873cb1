"""
Fixtures for auth module tests.
"""

import pytest
import pytest_asyncio

from ksfp.modules.auth.schemas import AuthResponse, UserProfile


@pytest.fixture
def auth_response(valid_token, parent_user):
    """Successful backend login response for the parent user."""
    return AuthResponse(
        token=valid_token,
        refresh_token="refresh-1",
        user=UserProfile.model_validate(parent_user),
    )


@pytest_asyncio.fixture
async def logged_in_session(session, valid_token, parent_user):
    """Session with an active parent login."""
    await session.set_session(valid_token, "refresh-1", parent_user)
    return session
