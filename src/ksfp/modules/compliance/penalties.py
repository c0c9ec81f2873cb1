"""
Fake Information Penalties

Schools that submit false or misleading data are charged a penalty of 20%
of their yearly fee. A penalty is created as ``pending_enforcement`` and
only counts against the school once it has been enforced.
"""

import logging
import uuid
from collections.abc import Iterable, Mapping
from typing import Any

from ksfp.modules.compliance.models import (
    FakeInformationReport,
    Penalty,
    PenaltyStatus,
    RiskLevel,
)
from ksfp.modules.schools.models import SchoolRecord

logger = logging.getLogger(__name__)

FAKE_INFO_PENALTY_RATE = 0.20
MAX_RATING = 10

RATING_FIELDS = (
    ("academicRating", "academic_rating"),
    ("infrastructure", "infrastructure"),
    ("facilities", "facilities"),
    ("sportsRating", "sports_rating"),
)
FEE_FIELDS = (
    ("monthlyFee", "monthly_fee"),
    ("yearlyFee", "yearly_fee"),
)
REQUIRED_FIELDS = ("name", "email", "phone")


def _field(data: Mapping[str, Any], *names: str) -> Any:
    """First value present under any of the given keys (camelCase or snake_case)."""
    for name in names:
        if name in data:
            return data[name]
    return None


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def detect_fake_information(school_data: Mapping[str, Any]) -> FakeInformationReport:
    """
    Check raw submitted school data for signs of false information.

    Runs on unvalidated input, since a ``SchoolRecord`` already rejects
    out-of-range values.

    Args:
        school_data: School fields, camelCase or snake_case keys

    Returns:
        Report with the raised flags; risk is high with more than two flags
    """
    flags: list[str] = []

    for camel, snake in RATING_FIELDS:
        rating = _field(school_data, camel, snake)
        if _is_number(rating) and rating > MAX_RATING:
            flags.append(f"Invalid {snake.replace('_', ' ')}")

    if any(
        _is_number(fee) and fee < 0
        for fee in (_field(school_data, camel, snake) for camel, snake in FEE_FIELDS)
    ):
        flags.append("Negative fee value")

    if any(not school_data.get(name) for name in REQUIRED_FIELDS):
        flags.append("Missing required school information")

    return FakeInformationReport(
        is_fake=bool(flags),
        flags=flags,
        risk_level=RiskLevel.HIGH if len(flags) > 2 else RiskLevel.LOW,
    )


def apply_fake_penalty(school: SchoolRecord, rate: float = FAKE_INFO_PENALTY_RATE) -> Penalty:
    """
    Create a fake-information penalty for a school.

    The school itself is not modified; see enforce_penalty().
    """
    penalty_amount = round(school.yearly_fee * rate, 2)
    penalty = Penalty(
        penalty_id=uuid.uuid4().hex,
        school_id=school.id,
        school_name=school.name,
        original_fee=school.yearly_fee,
        penalty_amount=penalty_amount,
        new_fee=round(school.yearly_fee + penalty_amount, 2),
        penalty_rate=rate,
    )

    logger.info(
        f"Penalty {penalty.penalty_id} raised for school {school.id}: {penalty_amount:.2f}"
    )
    return penalty


def enforce_penalty(school: SchoolRecord, penalty: Penalty) -> SchoolRecord:
    """
    Apply a penalty's fee to a school.

    Returns:
        Copy of the school with the penalised yearly fee and ``penalty_applied`` set

    Raises:
        ValueError: Penalty belongs to another school
    """
    if penalty.school_id != school.id:
        raise ValueError(f"Penalty {penalty.penalty_id} is not for school {school.id}")

    penalty.status = PenaltyStatus.ENFORCED
    return school.model_copy(update={"yearly_fee": penalty.new_fee, "penalty_applied": True})


def accumulated_penalties(penalties: Iterable[Penalty]) -> float:
    """Total penalty amount across the given penalties."""
    return round(sum(p.penalty_amount for p in penalties), 2)


def is_under_penalty(school_id: str, penalties: Iterable[Penalty]) -> bool:
    """True if the school has an enforced penalty."""
    return any(
        p.school_id == school_id and p.status == PenaltyStatus.ENFORCED for p in penalties
    )
