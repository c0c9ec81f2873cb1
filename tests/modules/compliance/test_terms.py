"""
Unit tests for terms documents and pre-upload compliance checks.
"""

import pytest

from ksfp.modules.compliance.terms import (
    PAYMENT_TERMS,
    UPLOAD_FEE,
    UPLOAD_TERMS_VERSION,
    get_terms_document,
    validate_upload_compliance,
    verify_payment,
    verify_terms_acceptance,
)


def make_submission(**overrides):
    data = {
        "terms_accepted": True,
        "verified": True,
        "amount": UPLOAD_FEE,
        "content": "Sports day photos",
    }
    data.update(overrides)
    return data


class TestVerifyTermsAcceptance:
    """Tests for verify_terms_acceptance."""

    def test_accepted(self):
        result = verify_terms_acceptance({"termsAccepted": True})

        assert result.accepted is True
        assert result.terms_version == UPLOAD_TERMS_VERSION

    def test_not_accepted(self):
        result = verify_terms_acceptance({})

        assert result.accepted is False
        assert result.reason == "Terms and conditions must be explicitly accepted"


class TestVerifyPayment:
    """Tests for verify_payment."""

    def test_full_fee_verified(self):
        assert verify_payment({"verified": True, "amount": 1000}).verified is True

    def test_unverified_payment(self):
        result = verify_payment({"verified": False, "amount": 5000})

        assert result.verified is False
        assert result.reason == "Payment must be verified before upload"

    def test_below_minimum_fee(self):
        result = verify_payment({"verified": True, "amount": 999})

        assert result.verified is False
        assert result.reason == "Minimum payment of KES 1000 required"

    @pytest.mark.parametrize("amount", [None, "1000", True])
    def test_missing_or_non_numeric_amount(self, amount):
        assert verify_payment({"verified": True, "amount": amount}).verified is False


class TestValidateUploadCompliance:
    """Tests for validate_upload_compliance."""

    def test_compliant_submission(self):
        result = validate_upload_compliance(make_submission())

        assert result.compliant is True
        assert result.errors == []

    @pytest.mark.parametrize("content", [None, "", "   \n"])
    def test_empty_content_rejected(self, content):
        result = validate_upload_compliance(make_submission(content=content))

        assert result.compliant is False
        assert result.errors == ["Content cannot be empty"]

    def test_collects_every_failure(self):
        result = validate_upload_compliance(
            {"terms_accepted": False, "verified": True, "amount": 500, "content": ""}
        )

        assert result.errors == [
            "Terms and conditions must be explicitly accepted",
            "Minimum payment of KES 1000 required",
            "Content cannot be empty",
        ]


class TestGetTermsDocument:
    """Tests for get_terms_document."""

    def test_defaults_to_upload_terms(self):
        document = get_terms_document()

        assert document.version == "1.0"
        assert document.effective_date == "2025-01-01"
        assert len(document.requirements) == 5

    def test_payment_terms(self):
        document = get_terms_document("payment")

        assert document is PAYMENT_TERMS
        assert document.upload_fee == 1000
        assert document.currency == "KES"
        assert document.mandatory is True

    def test_school_terms(self):
        assert "Vacancy information must be accurate" in get_terms_document("school").requirements

    def test_unknown_type(self):
        assert get_terms_document("refund") is None
