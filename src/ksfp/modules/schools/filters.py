"""
School Filtering

Filter criteria and the pure filtering/ranking pipeline used by the browse
endpoints.

A criterion that is None (or a zero fee bound) imposes no constraint; fee
bounds compare against the monthly fee.
"""

from collections.abc import Iterable

from pydantic import BaseModel, Field

from ksfp.core.config import settings
from ksfp.modules.schools.models import Grade, Ownership, SchoolRecord, ScoredSchool, Stream
from ksfp.modules.schools.scoring import SortKey, SortOrder, score_schools, sort_schools


class SchoolFilter(BaseModel):
    """Optional constraints for narrowing the school list."""

    grade: Grade | None = None
    stream: Stream | None = None
    ownership: Ownership | None = None
    min_fee: float | None = Field(default=None, ge=0)
    max_fee: float | None = Field(default=None, ge=0)


def matches(school: SchoolRecord, criteria: SchoolFilter) -> bool:
    """Check whether a school satisfies every provided criterion."""
    if criteria.grade and school.grade != criteria.grade:
        return False
    if criteria.stream and criteria.stream not in school.streams:
        return False
    if criteria.ownership and school.ownership != criteria.ownership:
        return False
    if criteria.min_fee and school.monthly_fee < criteria.min_fee:
        return False
    if criteria.max_fee and school.monthly_fee > criteria.max_fee:
        return False
    return True


def filter_schools(
    schools: Iterable[SchoolRecord],
    criteria: SchoolFilter | None = None,
) -> list[SchoolRecord]:
    """
    Keep the schools that satisfy every provided criterion.

    Args:
        schools: Schools to filter
        criteria: Filter criteria; None or empty criteria keep everything

    Returns:
        A new list with the matching schools in input order
    """
    if criteria is None:
        return list(schools)
    return [school for school in schools if matches(school, criteria)]


def apply_private_fee(
    school: SchoolRecord,
    applying_for_scholarship: bool = False,
    multiplier: float | None = None,
) -> SchoolRecord:
    """
    Return the fees a parent pays at a private school.

    Private schools show multiplied (doubled by default) fees unless the
    parent is applying for a scholarship. Public schools are returned as is.

    Args:
        school: The school record
        applying_for_scholarship: Whether the parent applies for a scholarship
        multiplier: Fee multiplier override (defaults to configuration)

    Returns:
        A copy with adjusted fees and a fee note, or the original record
    """
    if school.ownership != Ownership.PRIVATE or applying_for_scholarship:
        return school

    factor = multiplier if multiplier is not None else settings.private_fee_multiplier
    adjustment = "doubled" if factor == 2 else f"x{factor:g}"
    return school.model_copy(
        update={
            "monthly_fee": school.monthly_fee * factor,
            "yearly_fee": school.yearly_fee * factor,
            "fee_note": f"Private school fee ({adjustment} for non-scholarship)",
        }
    )


def rank_schools(
    schools: Iterable[SchoolRecord],
    criteria: SchoolFilter | None = None,
    sort_by: SortKey | str = SortKey.SCORE,
    order: SortOrder | str = SortOrder.DESC,
) -> list[ScoredSchool]:
    """
    Filter, sort and score schools for display.

    Returns:
        Scored views of the matching schools in display order
    """
    return score_schools(sort_schools(filter_schools(schools, criteria), sort_by, order))


def format_currency(amount: float, currency: str | None = None) -> str:
    """Format an amount for display, e.g. ``KES 1,500.00``."""
    return f"{currency or settings.currency} {amount:,.2f}"
