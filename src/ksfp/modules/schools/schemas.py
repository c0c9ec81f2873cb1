"""School browse API schemas."""

from pydantic import BaseModel

from ksfp.modules.schools.models import Grade, Ownership, ScoredSchool, Stream


class SchoolResponse(BaseModel):
    """A school as returned by the browse API."""

    id: str
    name: str
    grade: Grade
    ownership: Ownership
    streams: list[Stream]
    monthly_fee: float
    yearly_fee: float
    monthly_fee_display: str
    fee_note: str | None = None
    academic_rating: float
    infrastructure: float
    facilities: float
    sports_rating: float
    vacancy_rate: float
    penalty_applied: bool
    score: int
    location: str | None = None
    phone: str | None = None
    email: str | None = None

    @classmethod
    def from_scored(cls, scored: ScoredSchool, monthly_fee_display: str) -> "SchoolResponse":
        school = scored.school
        return cls(
            **school.model_dump(by_alias=False),
            monthly_fee_display=monthly_fee_display,
            score=scored.score,
        )


class SchoolListResponse(BaseModel):
    """Response for the school listing."""

    items: list[SchoolResponse]
    total: int
