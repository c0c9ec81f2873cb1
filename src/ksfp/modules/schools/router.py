"""School browse router."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from ksfp.modules.schools.catalog import SchoolCatalog
from ksfp.modules.schools.filters import (
    SchoolFilter,
    apply_private_fee,
    format_currency,
    rank_schools,
)
from ksfp.modules.schools.models import Grade, Ownership, Stream
from ksfp.modules.schools.schemas import SchoolListResponse, SchoolResponse
from ksfp.modules.schools.scoring import SortKey, SortOrder, score_schools

logger = logging.getLogger(__name__)

router = APIRouter()


def get_catalog(request: Request) -> SchoolCatalog:
    """Return the catalogue loaded at startup."""
    catalog = getattr(request.app.state, "school_catalog", None)
    return catalog if catalog is not None else SchoolCatalog()


@router.get("", response_model=SchoolListResponse)
async def list_schools(
    grade: Grade | None = None,
    stream: Stream | None = None,
    ownership: Ownership | None = None,
    min_fee: float | None = Query(default=None, ge=0),
    max_fee: float | None = Query(default=None, ge=0),
    sort_by: SortKey = SortKey.SCORE,
    order: SortOrder = SortOrder.DESC,
    scholarship: bool = False,
    catalog: SchoolCatalog = Depends(get_catalog),
) -> SchoolListResponse:
    """
    List schools matching the given filters, scored and sorted.

    Fees are priced for the scholarship choice first, so the fee filters,
    fee sort and returned fees all use the fee the parent would pay.
    """
    criteria = SchoolFilter(
        grade=grade,
        stream=stream,
        ownership=ownership,
        min_fee=min_fee,
        max_fee=max_fee,
    )
    priced = [apply_private_fee(school, scholarship) for school in catalog.all()]
    ranked = rank_schools(priced, criteria, sort_by, order)

    items = [
        SchoolResponse.from_scored(scored, format_currency(scored.school.monthly_fee))
        for scored in ranked
    ]

    logger.debug(f"Listed {len(items)} of {len(catalog)} school(s)")
    return SchoolListResponse(items=items, total=len(items))


@router.get("/{school_id}", response_model=SchoolResponse)
async def get_school(
    school_id: str,
    scholarship: bool = False,
    catalog: SchoolCatalog = Depends(get_catalog),
) -> SchoolResponse:
    """
    Get a single school with its score.

    Raises:
        HTTPException 404: School not found
    """
    school = catalog.get_by_id(school_id)
    if school is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error": "SCHOOL_NOT_FOUND",
                "message": f"School {school_id} not found.",
            },
        )

    scored = score_schools([apply_private_fee(school, scholarship)])[0]
    return SchoolResponse.from_scored(scored, format_currency(scored.school.monthly_fee))
