"""
Tests for application startup and the health endpoints.
"""

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from ksfp import main
from ksfp.core import scheduler

BUNDLED_CATALOGUE = Path(__file__).parents[1] / "data" / "schools.json"


class TestHealthEndpoints:
    """Tests for the root and health endpoints."""

    def test_root(self):
        response = TestClient(main.app).get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health_and_ready(self):
        client = TestClient(main.app)

        assert client.get("/health").json() == {"status": "healthy"}
        assert client.get("/ready").json() == {"status": "ready"}


class TestLifespan:
    """Tests for the startup sequence."""

    def test_startup_loads_catalogue_without_redis(self):
        with (
            patch.object(main, "init_redis", AsyncMock(side_effect=ConnectionError("down"))),
            patch.object(main, "close_redis", AsyncMock()),
            patch.object(main.settings, "schools_data_path", BUNDLED_CATALOGUE),
        ):
            with TestClient(main.app) as client:
                assert len(main.app.state.school_catalog) == 8
                assert client.get("/api/v1/schools").json()["total"] == 8

        assert scheduler.get_scheduler() is None

    @pytest.mark.skipif(
        not main.settings.is_development, reason="debug routes are development only"
    )
    def test_debug_jobs_lists_registry(self):
        with (
            patch.object(main, "init_redis", AsyncMock()),
            patch.object(main, "close_redis", AsyncMock()),
            patch.object(main.settings, "schools_data_path", BUNDLED_CATALOGUE),
        ):
            with TestClient(main.app) as client:
                assert client.get("/debug/jobs").json() == {"jobs": []}
                response = client.post("/debug/jobs/missing/trigger")

        assert response.status_code == 400
