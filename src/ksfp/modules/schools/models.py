"""
School Models

Record types for the school catalogue. Records are validated when they are
constructed and again whenever a field is assigned, so the fee, rating and
vacancy invariants hold for every instance.

Catalogue JSON uses camelCase keys (``monthlyFee``, ``academicRating``);
both those and the snake_case field names are accepted.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Grade(str, Enum):
    """Education level offered by a school."""

    ECDE = "ECDE"
    PRIMARY = "Primary"
    SECONDARY = "Secondary"
    UNIVERSITY = "University"


class Ownership(str, Enum):
    """Ownership type of a school."""

    PUBLIC = "public"
    PRIVATE = "private"


class Stream(str, Enum):
    """Student stream a school admits."""

    COED = "Coed"
    BOYS = "Boys"
    GIRLS = "Girls"


class SchoolRecord(BaseModel):
    """
    A school as listed in the portal.

    Ratings are on a 0-10 scale and the vacancy rate is a percentage. A
    rating of zero means "no rating supplied".
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        use_enum_values=False,
    )

    id: str
    name: str = Field(min_length=1)
    grade: Grade
    ownership: Ownership = Field(alias="type")
    streams: list[Stream] = Field(default_factory=list)

    monthly_fee: float = Field(default=0, ge=0)
    yearly_fee: float = Field(default=0, ge=0)

    academic_rating: float = Field(default=0, ge=0, le=10)
    infrastructure: float = Field(default=0, ge=0, le=10)
    facilities: float = Field(default=0, ge=0, le=10)
    sports_rating: float = Field(default=0, ge=0, le=10)
    vacancy_rate: float = Field(default=0, ge=0, le=100)

    penalty_applied: bool = False
    fee_note: str | None = None

    phone: str | None = None
    email: str | None = None
    location: str | None = None

    def __repr__(self) -> str:
        return f"<SchoolRecord(id={self.id}, name={self.name}, grade={self.grade.value})>"


class ScoredSchool(BaseModel):
    """A school paired with its display score. The score is never stored on the record."""

    school: SchoolRecord
    score: int
