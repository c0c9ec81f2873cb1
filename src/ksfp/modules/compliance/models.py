"""
Compliance Models

Penalties for false school information, paid media uploads, upload fee
payments, vacancy postings and compensation disputes.
"""

import uuid
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ComplianceError(Exception):
    """Base exception for compliance rule violations."""

    def __init__(self, message: str, error_code: str, status_code: int = 400):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


class UploadNotEligibleError(ComplianceError):
    """Raised when approving an upload that lacks terms, payment or pending status."""

    def __init__(self):
        super().__init__(
            message="Upload is not eligible for approval",
            error_code="UPLOAD_NOT_ELIGIBLE",
            status_code=409,
        )


class VacancyFullError(ComplianceError):
    """Raised when enrolling into a full vacancy."""

    def __init__(self):
        super().__init__(
            message="Vacancy is full",
            error_code="VACANCY_FULL",
            status_code=409,
        )


# ============================================
# Penalties
# ============================================


class PenaltyStatus(str, Enum):
    PENDING_ENFORCEMENT = "pending_enforcement"
    ENFORCED = "enforced"


class RiskLevel(str, Enum):
    LOW = "low"
    HIGH = "high"


class FakeInformationReport(BaseModel):
    """Outcome of checking submitted school data for false information."""

    is_fake: bool
    flags: list[str]
    risk_level: RiskLevel


class Penalty(BaseModel):
    """A fee penalty levied on a school."""

    penalty_id: str
    school_id: str
    school_name: str
    original_fee: float
    penalty_amount: float
    new_fee: float
    penalty_type: str = "Fake Information"
    penalty_rate: float
    reason: str = "False or misleading information detected"
    status: PenaltyStatus = PenaltyStatus.PENDING_ENFORCEMENT
    applied_at: datetime = Field(default_factory=_utcnow)

    @property
    def penalty_percentage(self) -> str:
        return f"{self.penalty_rate * 100:g}%"


# ============================================
# Uploads
# ============================================


class UploadType(str, Enum):
    IMAGES = "Images"
    VIDEOS = "Videos"
    DOCUMENTS = "Documents"
    RESULTS = "Results"


class UploadStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class UploadValidation(BaseModel):
    valid: bool
    errors: list[str]


class Upload(BaseModel):
    """School media upload awaiting admin review."""

    model_config = ConfigDict(validate_assignment=True)

    id: str
    school_id: str
    school_name: str | None = None
    title: str = Field(min_length=1)
    type: UploadType
    description: str | None = None
    file_url: str | None = None
    file_size: int | None = Field(default=None, ge=0)
    file_type: str
    status: UploadStatus = UploadStatus.PENDING
    terms_accepted: bool = False
    payment_verified: bool = False
    approved_at: datetime | None = None
    approved_by: str | None = None
    rejection_reason: str | None = None
    uploaded_at: datetime = Field(default_factory=_utcnow)

    def is_eligible_for_approval(self) -> bool:
        return self.terms_accepted and self.payment_verified and self.status == UploadStatus.PENDING

    def approve(self, approved_by: str) -> "Upload":
        """
        Approve the upload.

        Raises:
            UploadNotEligibleError: Terms not accepted, payment not verified,
                or the upload is no longer pending
        """
        if not self.is_eligible_for_approval():
            raise UploadNotEligibleError()

        self.status = UploadStatus.APPROVED
        self.approved_at = _utcnow()
        self.approved_by = approved_by
        return self

    def reject(self, reason: str) -> "Upload":
        self.status = UploadStatus.REJECTED
        self.rejection_reason = reason
        return self


# ============================================
# Vacancies
# ============================================


class VacancyStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


class Vacancy(BaseModel):
    """Open seats for a grade/stream at a school. Closes itself when full."""

    model_config = ConfigDict(validate_assignment=True)

    id: str
    school_id: str
    school_name: str | None = None
    grade: str
    stream: str | None = None
    max_capacity: int = Field(gt=0)
    current_enrollment: int = Field(default=0, ge=0)
    status: VacancyStatus = VacancyStatus.OPEN
    closed_at: datetime | None = None
    posted_at: datetime = Field(default_factory=_utcnow)

    @model_validator(mode="after")
    def _enrollment_within_capacity(self) -> "Vacancy":
        if self.current_enrollment > self.max_capacity:
            raise ValueError("Enrollment cannot exceed capacity")
        return self

    @property
    def remaining_seats(self) -> int:
        return max(0, self.max_capacity - self.current_enrollment)

    @property
    def vacancy_percentage(self) -> float:
        """Share of seats still open, to one decimal place."""
        return round(self.remaining_seats / self.max_capacity * 100, 1)

    @property
    def is_full(self) -> bool:
        return self.current_enrollment >= self.max_capacity

    def close(self) -> "Vacancy":
        self.status = VacancyStatus.CLOSED
        self.closed_at = _utcnow()
        return self

    def enroll(self) -> int:
        """
        Enroll one student, closing the vacancy when it fills up.

        Returns:
            Remaining seats after enrolling

        Raises:
            VacancyFullError: No seats left (the vacancy is closed)
        """
        if self.is_full:
            self.close()
            raise VacancyFullError()

        self.current_enrollment += 1
        if self.is_full:
            self.close()
        return self.remaining_seats


# ============================================
# Payments
# ============================================


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class PaymentVerification(BaseModel):
    verified: bool
    amount: float | None
    transaction_id: str | None
    verification_date: datetime = Field(default_factory=_utcnow)


class PaymentReceipt(BaseModel):
    receipt_id: str
    school_name: str | None
    amount: float | None
    purpose: str | None
    payment_date: datetime
    status: PaymentStatus
    transaction_id: str | None
    generated_at: datetime = Field(default_factory=_utcnow)


class Payment(BaseModel):
    """A school's payment to the platform, e.g. the media upload fee."""

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=lambda: f"payment-{uuid.uuid4().hex}")
    school_id: str | None = None
    school_name: str | None = None
    amount: float | None = None
    purpose: str | None = None
    payment_date: datetime = Field(default_factory=_utcnow)
    status: PaymentStatus = PaymentStatus.PENDING
    payment_method: str | None = None
    transaction_id: str | None = None
    reference: str | None = None

    def verify(self) -> PaymentVerification:
        """Only a completed payment counts as verified."""
        return PaymentVerification(
            verified=self.status == PaymentStatus.COMPLETED,
            amount=self.amount,
            transaction_id=self.transaction_id,
        )

    def generate_receipt(self) -> PaymentReceipt:
        return PaymentReceipt(
            receipt_id=f"RECEIPT-{self.id}",
            school_name=self.school_name,
            amount=self.amount,
            purpose=self.purpose,
            payment_date=self.payment_date,
            status=self.status,
            transaction_id=self.transaction_id,
        )

    def validate_details(self) -> UploadValidation:
        """Check the fields a payment must carry before it is submitted."""
        errors: list[str] = []
        if not self.school_id:
            errors.append("School ID is required")
        if not self.amount or self.amount <= 0:
            errors.append("Valid amount is required")
        if not self.payment_method:
            errors.append("Payment method is required")
        return UploadValidation(valid=not errors, errors=errors)


# ============================================
# Disputes and compensation
# ============================================


class ClaimantType(str, Enum):
    PARENT = "parent"
    VICTIM = "victim"


class DisputeSeverity(str, Enum):
    CRITICAL = "critical"
    SIGNIFICANT = "significant"
    MINOR = "minor"


class DisputePriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class DisputeStatus(str, Enum):
    PENDING_REVIEW = "pending_review"
    APPROVED = "approved"


class DisputeClaim(BaseModel):
    """A compensation claim as submitted by a parent or victim."""

    model_config = ConfigDict(populate_by_name=True)

    claimant_type: ClaimantType = Field(alias="claimantType")
    school_id: str = Field(alias="schoolId")
    school_name: str | None = Field(default=None, alias="schoolName")
    description: str
    claim_amount: float = Field(ge=0, alias="claimAmount")
    evidence: list[str] = Field(default_factory=list)
    severity: str | None = None


class Dispute(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    dispute_id: str
    claimant_type: ClaimantType
    school_id: str
    school_name: str | None = None
    description: str
    claim_amount: float = Field(ge=0)
    evidence: list[str] = Field(default_factory=list)
    filed_date: datetime = Field(default_factory=_utcnow)
    status: DisputeStatus = DisputeStatus.PENDING_REVIEW
    priority: DisputePriority = DisputePriority.MEDIUM


class Compensation(BaseModel):
    """Compensation approved for a dispute, paid from penalty income."""

    compensation_id: str
    dispute_id: str
    claimant_type: ClaimantType
    approved_amount: float
    funding_source: str
    approval_date: datetime = Field(default_factory=_utcnow)
    status: DisputeStatus = DisputeStatus.APPROVED
    payment_due_date: datetime
    payment_status: PaymentStatus | None = None
    tracking_number: str | None = None
    last_updated: datetime | None = None
