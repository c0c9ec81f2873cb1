"""
Terms & Conditions

The documents schools agree to before uploading media, and the checks that
gate an upload on accepted terms, a verified upload fee and non-empty
content.
"""

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

UPLOAD_FEE = 1000
UPLOAD_TERMS_VERSION = "1.0"

TermsType = Literal["upload", "payment", "school"]


class UploadTerms(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: str
    effective_date: str
    requirements: tuple[str, ...]


class PaymentTerms(BaseModel):
    model_config = ConfigDict(frozen=True)

    upload_fee: int
    currency: str
    mandatory: bool
    purpose: str


class SchoolComplianceTerms(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: str
    requirements: tuple[str, ...]


UPLOAD_TERMS = UploadTerms(
    version=UPLOAD_TERMS_VERSION,
    effective_date="2025-01-01",
    requirements=(
        "All content must be authentic and accurate",
        "No misleading or false information is permitted",
        "Schools must provide legitimate media and documents",
        "Acceptance of terms is mandatory for uploads",
        "Violation leads to 20% penalty enforcement",
    ),
)

PAYMENT_TERMS = PaymentTerms(
    upload_fee=UPLOAD_FEE,
    currency="KES",
    mandatory=True,
    purpose="Media upload fee for platform maintenance",
)

SCHOOL_COMPLIANCE_TERMS = SchoolComplianceTerms(
    version="1.0",
    requirements=(
        "Regular fee updates must be submitted annually",
        "Vacancy information must be accurate",
        "Academic results must be authentic",
        "Job postings must be legitimate",
        "False information results in 20% penalty",
    ),
)

_DOCUMENTS: dict[str, BaseModel] = {
    "upload": UPLOAD_TERMS,
    "payment": PAYMENT_TERMS,
    "school": SCHOOL_COMPLIANCE_TERMS,
}


class TermsCheck(BaseModel):
    accepted: bool
    reason: str | None = None
    message: str | None = None
    terms_version: str | None = None


class PaymentCheck(BaseModel):
    verified: bool
    reason: str | None = None
    message: str | None = None


class ComplianceCheck(BaseModel):
    compliant: bool
    errors: list[str]
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


def _get(data: Mapping[str, Any], snake: str, camel: str) -> Any:
    return data.get(snake, data.get(camel))


def verify_terms_acceptance(upload_data: Mapping[str, Any]) -> TermsCheck:
    if not _get(upload_data, "terms_accepted", "termsAccepted"):
        return TermsCheck(
            accepted=False,
            reason="Terms and conditions must be explicitly accepted",
        )

    return TermsCheck(
        accepted=True,
        message="Terms accepted successfully",
        terms_version=UPLOAD_TERMS.version,
    )


def verify_payment(payment_data: Mapping[str, Any]) -> PaymentCheck:
    """
    Check that the upload fee was paid in full.

    Args:
        payment_data: Mapping with ``verified`` and ``amount``

    Returns:
        Check result; a missing or non-numeric amount fails the minimum
    """
    if not payment_data.get("verified"):
        return PaymentCheck(verified=False, reason="Payment must be verified before upload")

    amount = payment_data.get("amount")
    if (
        isinstance(amount, bool)
        or not isinstance(amount, int | float)
        or amount < PAYMENT_TERMS.upload_fee
    ):
        minimum = f"{PAYMENT_TERMS.currency} {PAYMENT_TERMS.upload_fee}"
        return PaymentCheck(verified=False, reason=f"Minimum payment of {minimum} required")

    return PaymentCheck(verified=True, message="Payment verified successfully")


def validate_upload_compliance(upload_data: Mapping[str, Any]) -> ComplianceCheck:
    """
    Run every pre-upload check and collect the failures.

    Args:
        upload_data: Submission with terms acceptance, ``verified``,
            ``amount`` and ``content``
    """
    errors: list[str] = []

    terms = verify_terms_acceptance(upload_data)
    if not terms.accepted:
        errors.append(terms.reason)

    payment = verify_payment(upload_data)
    if not payment.verified:
        errors.append(payment.reason)

    content = upload_data.get("content")
    if not content or not str(content).strip():
        errors.append("Content cannot be empty")

    return ComplianceCheck(compliant=not errors, errors=errors)


def get_terms_document(terms_type: TermsType | str = "upload") -> BaseModel | None:
    """Terms document by type, or None for an unknown type."""
    return _DOCUMENTS.get(terms_type)
