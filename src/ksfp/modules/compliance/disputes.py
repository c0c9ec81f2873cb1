"""
Disputes & Victim Compensation

Parents and victims of false school information file compensation claims
against a school. Approved claims are paid from the penalty enforcement
fund and count towards the school's compensation liability.
"""

import logging
import uuid
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

from ksfp.modules.compliance.models import (
    Compensation,
    Dispute,
    DisputeClaim,
    DisputePriority,
    DisputeStatus,
    PaymentStatus,
)

logger = logging.getLogger(__name__)

COMPENSATION_FUNDING_SOURCE = "School Penalty Enforcement Fund"
COMPENSATION_PAYMENT_DAYS = 30

SEVERITY_PRIORITY = {
    "critical": DisputePriority.HIGH,
    "significant": DisputePriority.MEDIUM,
    "minor": DisputePriority.LOW,
}


def calculate_priority(severity: str | None) -> DisputePriority:
    """Review priority for a claim; unknown or missing severity is medium."""
    return SEVERITY_PRIORITY.get(severity, DisputePriority.MEDIUM)


def file_dispute(claim_data: DisputeClaim | Mapping[str, Any]) -> Dispute:
    """
    File a compensation claim for review.

    Args:
        claim_data: Claim, or a mapping with camelCase or snake_case keys

    Raises:
        ValidationError: Claim is missing required fields or has a negative amount
    """
    claim = (
        claim_data
        if isinstance(claim_data, DisputeClaim)
        else DisputeClaim.model_validate(claim_data)
    )

    dispute = Dispute(
        dispute_id=f"dispute-{uuid.uuid4().hex}",
        priority=calculate_priority(claim.severity),
        **claim.model_dump(exclude={"severity"}),
    )

    logger.info(
        f"Dispute {dispute.dispute_id} filed against school {dispute.school_id} "
        f"({dispute.priority.value} priority)"
    )
    return dispute


def approve_compensation(dispute: Dispute) -> Compensation:
    """
    Approve a dispute's full claim amount for payment.

    The dispute is marked approved so it counts towards the school's
    liability.
    """
    now = datetime.now(UTC)
    dispute.status = DisputeStatus.APPROVED

    compensation = Compensation(
        compensation_id=f"comp-{uuid.uuid4().hex}",
        dispute_id=dispute.dispute_id,
        claimant_type=dispute.claimant_type,
        approved_amount=dispute.claim_amount,
        funding_source=COMPENSATION_FUNDING_SOURCE,
        approval_date=now,
        payment_due_date=now + timedelta(days=COMPENSATION_PAYMENT_DAYS),
    )

    logger.info(
        f"Compensation {compensation.compensation_id} approved for dispute "
        f"{dispute.dispute_id}: {compensation.approved_amount:.2f}"
    )
    return compensation


def track_compensation_payment(compensation: Compensation) -> Compensation:
    """Copy of the compensation with a tracking number and pending payment."""
    return compensation.model_copy(
        update={
            "payment_status": PaymentStatus.PENDING,
            "tracking_number": f"COMP-{uuid.uuid4().hex[:12].upper()}",
            "last_updated": datetime.now(UTC),
        }
    )


def school_disputes(school_id: str, disputes: Iterable[Dispute]) -> list[Dispute]:
    return [d for d in disputes if d.school_id == school_id]


def compensation_liability(disputes: Iterable[Dispute]) -> float:
    """Total claim amount of the approved disputes."""
    return round(
        sum(d.claim_amount for d in disputes if d.status == DisputeStatus.APPROVED), 2
    )
