"""
School Catalogue

Read-only access to the school list published by the portal
(``data/schools.json``).
"""

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError

from ksfp.modules.schools.models import SchoolRecord

logger = logging.getLogger(__name__)


class SchoolCatalog:
    """In-memory catalogue of validated school records."""

    def __init__(self, schools: Iterable[SchoolRecord] = ()):
        self._schools: list[SchoolRecord] = list(schools)
        self._by_id: dict[str, SchoolRecord] = {school.id: school for school in self._schools}

    @classmethod
    def from_file(cls, path: Path) -> "SchoolCatalog":
        """
        Load the catalogue from a JSON array of school objects.

        A missing or unreadable file yields an empty catalogue. Records that
        fail validation are logged and skipped.

        Args:
            path: Path to the JSON file

        Returns:
            The loaded catalogue
        """
        try:
            raw = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading schools from {path}: {e}")
            return cls()

        if not isinstance(raw, list):
            logger.error(f"Expected a list of schools in {path}, got {type(raw).__name__}")
            return cls()

        return cls.from_records(raw)

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> "SchoolCatalog":
        """Build a catalogue from raw dicts, skipping invalid ones."""
        schools: list[SchoolRecord] = []
        for record in records:
            try:
                schools.append(SchoolRecord.model_validate(record))
            except ValidationError as e:
                school_id = record.get("id") if isinstance(record, dict) else None
                logger.warning(
                    f"Skipping invalid school record {school_id}: {e.error_count()} error(s)"
                )

        logger.info(f"Loaded {len(schools)} school(s)")
        return cls(schools)

    def all(self) -> list[SchoolRecord]:
        """Return every school in catalogue order."""
        return list(self._schools)

    def get_by_id(self, school_id: str) -> SchoolRecord | None:
        """Get a school by ID, or None if not found."""
        return self._by_id.get(school_id)

    def __len__(self) -> int:
        return len(self._schools)
