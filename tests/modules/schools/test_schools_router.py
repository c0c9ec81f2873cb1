"""
Tests for the school browse endpoints.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ksfp.api import api_router
from ksfp.modules.schools.catalog import SchoolCatalog


@pytest.fixture
def client(sample_schools):
    app = FastAPI()
    app.include_router(api_router, prefix="/api/v1")
    app.state.school_catalog = SchoolCatalog(sample_schools)
    return TestClient(app)


class TestListSchools:
    """Tests for GET /api/v1/schools."""

    def test_lists_all_by_score(self, client):
        response = client.get("/api/v1/schools")

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 4
        assert [item["id"] for item in body["items"]] == ["3", "1", "4", "2"]
        assert body["items"][0]["score"] == 48

    def test_max_fee_filter(self, client):
        response = client.get("/api/v1/schools", params={"max_fee": 4300})

        assert [item["id"] for item in response.json()["items"]] == ["3", "4"]

    def test_grade_and_sort_by_fee(self, client):
        response = client.get(
            "/api/v1/schools",
            params={"grade": "Secondary", "sort_by": "fee", "order": "asc"},
        )

        assert [item["id"] for item in response.json()["items"]] == ["4", "1"]

    def test_private_fee_doubled_without_scholarship(self, client):
        response = client.get("/api/v1/schools", params={"ownership": "private"})

        item = response.json()["items"][0]
        assert item["monthly_fee"] == 36000
        assert item["monthly_fee_display"] == "KES 36,000.00"
        assert item["fee_note"] == "Private school fee (doubled for non-scholarship)"

    def test_private_fee_listed_with_scholarship(self, client):
        response = client.get(
            "/api/v1/schools", params={"ownership": "private", "scholarship": "true"}
        )

        item = response.json()["items"][0]
        assert item["monthly_fee"] == 18000
        assert item["fee_note"] is None

    def test_invalid_sort_key_rejected(self, client):
        response = client.get("/api/v1/schools", params={"sort_by": "rating"})
        assert response.status_code == 422

    def test_negative_fee_rejected(self, client):
        response = client.get("/api/v1/schools", params={"min_fee": -1})
        assert response.status_code == 422

    def test_missing_catalogue_gives_empty_list(self):
        app = FastAPI()
        app.include_router(api_router, prefix="/api/v1")

        response = TestClient(app).get("/api/v1/schools")

        assert response.json() == {"items": [], "total": 0}


class TestPricedFeeFilters:
    """Fee filters and fee sorting use the fee the parent would pay."""

    @pytest.fixture
    def priced_client(self, make_school):
        app = FastAPI()
        app.include_router(api_router, prefix="/api/v1")
        app.state.school_catalog = SchoolCatalog(
            [
                make_school(id="p", type="private", monthlyFee=6000),
                make_school(id="q", type="public", monthlyFee=8000),
            ]
        )
        return TestClient(app)

    def test_doubled_private_fee_exceeds_max_fee(self, priced_client):
        response = priced_client.get(
            "/api/v1/schools", params={"max_fee": 10000, "sort_by": "fee", "order": "asc"}
        )

        items = response.json()["items"]
        assert [(item["id"], item["monthly_fee"]) for item in items] == [("q", 8000)]

    def test_fee_sort_uses_priced_fee(self, priced_client):
        response = priced_client.get("/api/v1/schools", params={"sort_by": "fee", "order": "asc"})

        fees = [item["monthly_fee"] for item in response.json()["items"]]
        assert fees == [8000, 12000]

    def test_scholarship_uses_listed_fee(self, priced_client):
        response = priced_client.get(
            "/api/v1/schools",
            params={"max_fee": 10000, "sort_by": "fee", "order": "asc", "scholarship": "true"},
        )

        assert [item["id"] for item in response.json()["items"]] == ["p", "q"]


class TestGetSchool:
    """Tests for GET /api/v1/schools/{school_id}."""

    def test_returns_scored_school(self, client):
        response = client.get("/api/v1/schools/3")

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Moi Avenue Primary"
        assert body["score"] == 48
        assert body["monthly_fee_display"] == "KES 500.00"

    def test_unknown_school_returns_404(self, client):
        response = client.get("/api/v1/schools/999")

        assert response.status_code == 404
        assert response.json()["detail"] == {
            "error": "SCHOOL_NOT_FOUND",
            "message": "School 999 not found.",
        }
