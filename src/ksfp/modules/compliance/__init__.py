"""
Compliance module - Fake-information penalties, paid uploads, terms,
vacancies and compensation disputes.
"""

from ksfp.modules.compliance.disputes import (
    approve_compensation,
    calculate_priority,
    compensation_liability,
    file_dispute,
    school_disputes,
    track_compensation_payment,
)
from ksfp.modules.compliance.models import (
    ClaimantType,
    Compensation,
    ComplianceError,
    Dispute,
    DisputeClaim,
    DisputePriority,
    DisputeStatus,
    FakeInformationReport,
    Payment,
    PaymentStatus,
    Penalty,
    PenaltyStatus,
    RiskLevel,
    Upload,
    UploadNotEligibleError,
    UploadStatus,
    UploadType,
    UploadValidation,
    Vacancy,
    VacancyFullError,
    VacancyStatus,
)
from ksfp.modules.compliance.penalties import (
    accumulated_penalties,
    apply_fake_penalty,
    detect_fake_information,
    enforce_penalty,
    is_under_penalty,
)
from ksfp.modules.compliance.terms import (
    UPLOAD_FEE,
    UPLOAD_TERMS_VERSION,
    get_terms_document,
    validate_upload_compliance,
    verify_payment,
    verify_terms_acceptance,
)
from ksfp.modules.compliance.uploads import ALLOWED_FILE_TYPES, validate_upload

__all__ = [
    "ALLOWED_FILE_TYPES",
    "ClaimantType",
    "Compensation",
    "ComplianceError",
    "Dispute",
    "DisputeClaim",
    "DisputePriority",
    "DisputeStatus",
    "FakeInformationReport",
    "Payment",
    "PaymentStatus",
    "Penalty",
    "PenaltyStatus",
    "RiskLevel",
    "UPLOAD_FEE",
    "UPLOAD_TERMS_VERSION",
    "Upload",
    "UploadNotEligibleError",
    "UploadStatus",
    "UploadType",
    "UploadValidation",
    "Vacancy",
    "VacancyFullError",
    "VacancyStatus",
    "accumulated_penalties",
    "apply_fake_penalty",
    "approve_compensation",
    "calculate_priority",
    "compensation_liability",
    "detect_fake_information",
    "enforce_penalty",
    "file_dispute",
    "get_terms_document",
    "is_under_penalty",
    "school_disputes",
    "track_compensation_payment",
    "validate_upload",
    "validate_upload_compliance",
    "verify_payment",
    "verify_terms_acceptance",
]
