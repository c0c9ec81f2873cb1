"""
School Scoring and Sorting

Pure functions: inputs are never mutated and every call returns a new list.
"""

import unicodedata
from collections.abc import Iterable
from enum import Enum

from ksfp.modules.schools.models import SchoolRecord, ScoredSchool

# Points per rating unit
ACADEMIC_WEIGHT = 3
INFRASTRUCTURE_WEIGHT = 2
FACILITIES_WEIGHT = 2
SPORTS_WEIGHT = 1.5
VACANCY_WEIGHT = 1.5


class SortKey(str, Enum):
    SCORE = "score"
    FEE = "fee"
    NAME = "name"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


def _round_half_up(value: float) -> int:
    # Python's round() rounds halves to even; the portal has always rounded 0.5 up.
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def score_school(school: SchoolRecord) -> int:
    """
    Compute a school's ranking score.

    A rating of zero contributes nothing, exactly like a missing rating.

    Args:
        school: The school to score

    Returns:
        Weighted sum of the ratings and vacancy rate, rounded to an integer
    """
    score = 0.0

    if school.academic_rating:
        score += school.academic_rating * ACADEMIC_WEIGHT
    if school.infrastructure:
        score += school.infrastructure * INFRASTRUCTURE_WEIGHT
    if school.facilities:
        score += school.facilities * FACILITIES_WEIGHT
    if school.sports_rating:
        score += school.sports_rating * SPORTS_WEIGHT
    if school.vacancy_rate:
        score += school.vacancy_rate * VACANCY_WEIGHT

    return _round_half_up(score)


def score_schools(schools: Iterable[SchoolRecord]) -> list[ScoredSchool]:
    """Pair each school with its score, preserving input order."""
    return [ScoredSchool(school=school, score=score_school(school)) for school in schools]


def _name_key(name: str) -> tuple[str, str]:
    # Accent- and case-insensitive first, exact text as the secondary key
    folded = "".join(
        ch for ch in unicodedata.normalize("NFKD", name) if not unicodedata.combining(ch)
    )
    return folded.casefold(), name


def sort_schools(
    schools: Iterable[SchoolRecord],
    sort_by: SortKey | str = SortKey.SCORE,
    order: SortOrder | str = SortOrder.DESC,
) -> list[SchoolRecord]:
    """
    Sort schools by score, monthly fee or name.

    The sort is stable: schools with equal keys keep their input order in
    both ascending and descending order.

    Args:
        schools: Schools to sort
        sort_by: "score", "fee" or "name"
        order: "asc" or "desc"

    Returns:
        A new sorted list

    Raises:
        ValueError: If sort_by or order is not a known value
    """
    key = SortKey(sort_by)
    reverse = SortOrder(order) == SortOrder.DESC

    if key == SortKey.SCORE:
        return sorted(schools, key=score_school, reverse=reverse)
    if key == SortKey.FEE:
        return sorted(schools, key=lambda s: s.monthly_fee, reverse=reverse)
    return sorted(schools, key=lambda s: _name_key(s.name), reverse=reverse)
