"""
Shared fixtures for KSFP portal tests.
"""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from ksfp.core import rate_limit, scheduler
from ksfp.core.security import create_access_token
from ksfp.modules.auth.client import AuthClient
from ksfp.modules.auth.session import SessionManager
from ksfp.modules.auth.storage import MemorySessionStorage
from ksfp.modules.schools.models import SchoolRecord


@pytest.fixture(autouse=True)
def clean_global_state():
    """Reset the in-memory rate limit store and job registry between tests."""
    rate_limit._memory_store.clear()
    scheduler._job_registry.clear()
    yield
    rate_limit._memory_store.clear()
    scheduler._job_registry.clear()


@pytest.fixture
def make_school():
    """Factory for school records with sensible defaults."""

    def _make(**overrides) -> SchoolRecord:
        data = {
            "id": "1",
            "name": "Test School",
            "grade": "Primary",
            "type": "public",
            "streams": ["Coed"],
            "monthlyFee": 1000,
            "yearlyFee": 12000,
            "academicRating": 0,
            "infrastructure": 0,
            "facilities": 0,
            "sportsRating": 0,
            "vacancyRate": 0,
            "phone": "+254712345678",
            "email": "info@test.ac.ke",
        }
        data.update(overrides)
        return SchoolRecord.model_validate(data)

    return _make


@pytest.fixture
def sample_schools(make_school):
    """A small mixed catalogue."""
    return [
        make_school(
            id="1",
            name="Alliance High School",
            grade="Secondary",
            streams=["Boys"],
            monthlyFee=4500,
            yearlyFee=54000,
            academicRating=9,
            infrastructure=8,
        ),
        make_school(
            id="2",
            name="Makini School",
            type="private",
            monthlyFee=18000,
            yearlyFee=216000,
            academicRating=8,
            facilities=8,
        ),
        make_school(
            id="3",
            name="Moi Avenue Primary",
            monthlyFee=500,
            yearlyFee=6000,
            academicRating=6,
            vacancyRate=20,
        ),
        make_school(
            id="4",
            name="Kenya High School",
            grade="Secondary",
            streams=["Girls"],
            monthlyFee=4200,
            yearlyFee=50400,
            academicRating=9,
            infrastructure=8,
        ),
    ]


@pytest.fixture
def memory_storage():
    return MemorySessionStorage()


@pytest.fixture
def mock_auth_client():
    """AuthClient double with every endpoint as an AsyncMock."""
    return AsyncMock(spec=AuthClient)


@pytest.fixture
def clock():
    """Controllable clock (seconds since the epoch) for session expiry tests."""

    class Clock:
        def __init__(self):
            self.now = 1_700_000_000.0

        def __call__(self) -> float:
            return self.now

        def advance(self, seconds: float) -> None:
            self.now += seconds

    return Clock()


@pytest.fixture
def session(memory_storage, mock_auth_client):
    """Session manager on memory storage with a mocked auth client."""
    return SessionManager(memory_storage, mock_auth_client)


@pytest.fixture
def valid_token():
    """Access token for user-123 valid for an hour."""
    return create_access_token(
        "user-123", {"role": "parent"}, expires_delta=timedelta(hours=1)
    )


@pytest.fixture
def expired_token():
    """Access token for user-123 that expired a minute ago."""
    return create_access_token("user-123", expires_delta=timedelta(minutes=-1))


@pytest.fixture
def parent_user():
    return {"id": "user-123", "role": "parent", "phone_number": "+254712345678"}
