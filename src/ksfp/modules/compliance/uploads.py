"""
Upload Checks

Paid school media uploads: the terms must be accepted, the upload fee
verified and the file of an allowed type before an upload is accepted for
review.
"""

from collections.abc import Mapping
from typing import Any

from ksfp.modules.compliance.models import UploadValidation

ALLOWED_FILE_TYPES = frozenset({"image/jpeg", "image/png", "video/mp4", "application/pdf"})


def validate_upload(upload_data: Mapping[str, Any]) -> UploadValidation:
    """
    Check an upload submission.

    Args:
        upload_data: Submission with ``terms_accepted``, ``payment_verified``
            and ``file_type`` (camelCase keys are accepted too)

    Returns:
        Validation result listing every failed check
    """

    def get(snake: str, camel: str) -> Any:
        return upload_data.get(snake, upload_data.get(camel))

    errors: list[str] = []

    if not get("terms_accepted", "termsAccepted"):
        errors.append("Terms and conditions must be accepted")

    if not get("payment_verified", "paymentVerified"):
        errors.append("Payment must be verified")

    if get("file_type", "fileType") not in ALLOWED_FILE_TYPES:
        errors.append("Invalid file type")

    return UploadValidation(valid=not errors, errors=errors)
