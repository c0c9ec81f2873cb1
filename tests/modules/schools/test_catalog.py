"""
Unit tests for the school catalogue.
"""

import json
from pathlib import Path

from ksfp.modules.schools.catalog import SchoolCatalog
from ksfp.modules.schools.models import Ownership

BUNDLED_CATALOGUE = Path(__file__).parents[3] / "data" / "schools.json"


def school_dict(**overrides):
    data = {
        "id": "1",
        "name": "Test School",
        "grade": "Primary",
        "type": "public",
        "streams": ["Coed"],
        "monthlyFee": 1000,
        "yearlyFee": 12000,
    }
    data.update(overrides)
    return data


class TestFromFile:
    """Tests for SchoolCatalog.from_file."""

    def test_loads_bundled_catalogue(self):
        catalog = SchoolCatalog.from_file(BUNDLED_CATALOGUE)

        assert len(catalog) == 8
        assert catalog.get_by_id("3").ownership == Ownership.PRIVATE

    def test_loads_camel_case_records(self, tmp_path):
        path = tmp_path / "schools.json"
        path.write_text(json.dumps([school_dict(academicRating=7.5)]), encoding="utf-8")

        catalog = SchoolCatalog.from_file(path)

        assert len(catalog) == 1
        assert catalog.get_by_id("1").academic_rating == 7.5

    def test_missing_file_gives_empty_catalogue(self, tmp_path):
        catalog = SchoolCatalog.from_file(tmp_path / "missing.json")
        assert len(catalog) == 0

    def test_invalid_json_gives_empty_catalogue(self, tmp_path):
        path = tmp_path / "schools.json"
        path.write_text("{not json", encoding="utf-8")

        assert len(SchoolCatalog.from_file(path)) == 0

    def test_non_list_gives_empty_catalogue(self, tmp_path):
        path = tmp_path / "schools.json"
        path.write_text(json.dumps({"schools": []}), encoding="utf-8")

        assert len(SchoolCatalog.from_file(path)) == 0


class TestFromRecords:
    """Tests for SchoolCatalog.from_records."""

    def test_invalid_records_are_skipped(self):
        records = [
            school_dict(id="1"),
            school_dict(id="2", academicRating=11),
            school_dict(id="3", monthlyFee=-5),
            school_dict(id="4", grade="Kindergarten"),
            "not a record",
            school_dict(id="5"),
        ]

        catalog = SchoolCatalog.from_records(records)

        assert [s.id for s in catalog.all()] == ["1", "5"]

    def test_get_by_id_unknown_returns_none(self):
        catalog = SchoolCatalog.from_records([school_dict()])
        assert catalog.get_by_id("missing") is None

    def test_all_returns_a_copy(self):
        catalog = SchoolCatalog.from_records([school_dict()])

        catalog.all().clear()

        assert len(catalog.all()) == 1
