"""
Unit tests for disputes and victim compensation.
"""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from ksfp.modules.compliance.disputes import (
    COMPENSATION_FUNDING_SOURCE,
    approve_compensation,
    calculate_priority,
    compensation_liability,
    file_dispute,
    school_disputes,
    track_compensation_payment,
)
from ksfp.modules.compliance.models import (
    ClaimantType,
    DisputePriority,
    DisputeStatus,
    PaymentStatus,
)


def make_claim(**overrides):
    data = {
        "claimantType": "parent",
        "schoolId": "3",
        "schoolName": "Brookhouse School",
        "description": "Advertised facilities do not exist",
        "claimAmount": 25000,
        "evidence": ["brochure.pdf"],
        "severity": "critical",
    }
    data.update(overrides)
    return data


class TestCalculatePriority:
    """Tests for calculate_priority."""

    @pytest.mark.parametrize(
        "severity,expected",
        [
            ("critical", DisputePriority.HIGH),
            ("significant", DisputePriority.MEDIUM),
            ("minor", DisputePriority.LOW),
            ("unknown", DisputePriority.MEDIUM),
            (None, DisputePriority.MEDIUM),
        ],
    )
    def test_severity_mapping(self, severity, expected):
        assert calculate_priority(severity) == expected


class TestFileDispute:
    """Tests for file_dispute."""

    def test_files_pending_review(self):
        dispute = file_dispute(make_claim())

        assert dispute.dispute_id.startswith("dispute-")
        assert dispute.claimant_type == ClaimantType.PARENT
        assert dispute.school_id == "3"
        assert dispute.claim_amount == 25000
        assert dispute.evidence == ["brochure.pdf"]
        assert dispute.status == DisputeStatus.PENDING_REVIEW
        assert dispute.priority == DisputePriority.HIGH

    def test_snake_case_keys(self):
        dispute = file_dispute(
            {
                "claimant_type": "victim",
                "school_id": "5",
                "description": "Fake results",
                "claim_amount": 1000,
            }
        )

        assert dispute.claimant_type == ClaimantType.VICTIM
        assert dispute.priority == DisputePriority.MEDIUM

    def test_negative_claim_rejected(self):
        with pytest.raises(ValidationError):
            file_dispute(make_claim(claimAmount=-1))

    def test_unknown_claimant_rejected(self):
        with pytest.raises(ValidationError):
            file_dispute(make_claim(claimantType="school"))


class TestApproveCompensation:
    """Tests for approve_compensation."""

    def test_approves_full_claim(self):
        dispute = file_dispute(make_claim())

        compensation = approve_compensation(dispute)

        assert compensation.dispute_id == dispute.dispute_id
        assert compensation.approved_amount == 25000
        assert compensation.funding_source == COMPENSATION_FUNDING_SOURCE
        assert compensation.status == DisputeStatus.APPROVED
        assert compensation.payment_due_date - compensation.approval_date == timedelta(days=30)

    def test_marks_dispute_approved(self):
        dispute = file_dispute(make_claim())

        approve_compensation(dispute)

        assert dispute.status == DisputeStatus.APPROVED


class TestTrackCompensationPayment:
    """Tests for track_compensation_payment."""

    def test_adds_tracking(self):
        compensation = approve_compensation(file_dispute(make_claim()))

        tracked = track_compensation_payment(compensation)

        assert tracked.payment_status == PaymentStatus.PENDING
        assert tracked.tracking_number.startswith("COMP-")
        assert tracked.last_updated is not None
        assert tracked.compensation_id == compensation.compensation_id
        assert compensation.tracking_number is None


class TestLiability:
    """Tests for school_disputes and compensation_liability."""

    def test_only_approved_disputes_count(self):
        approved = file_dispute(make_claim(claimAmount=25000))
        approve_compensation(approved)
        also_approved = file_dispute(make_claim(claimAmount=5000.5))
        approve_compensation(also_approved)
        pending = file_dispute(make_claim(claimAmount=99000))

        assert compensation_liability([approved, also_approved, pending]) == 30000.5

    def test_no_disputes(self):
        assert compensation_liability([]) == 0

    def test_school_disputes(self):
        ours = file_dispute(make_claim(schoolId="3"))
        other = file_dispute(make_claim(schoolId="5"))

        assert school_disputes("3", [ours, other]) == [ours]
