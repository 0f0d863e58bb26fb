"""Test validation result contract and upload rules."""

import pytest
from pydantic import ValidationError

from backend.app.models import (
    FraudRisk,
    UploadRequest,
    ValidationResult,
    check_validation_result,
)
from backend.app.models.uploads import (
    FAMILY_ID_REQUIRED,
    UNSUPPORTED_FILE_TYPE,
    UploadedDocument,
    check_upload_file,
    is_accepted_content_type,
)

MB = 1024 * 1024


def canonical_payload() -> dict:
    return {
        "aiValidationResult": {
            "validations": [
                {
                    "index": 0,
                    "file_name": "license.jpg",
                    "status": "valid",
                    "matched_type": "DriverLicense",
                    "reason": "Matches template",
                    "fraud_risk": "low",
                    "fraud_notes": "None",
                }
            ],
            "suggestions": ["Birth Certificate"],
            "summary": "1 document",
            "storyline": "A family of one.",
        },
        "unclassifiedFiles": ["scan.pdf"],
    }


def test_canonical_payload_parses() -> None:
    """Test that the canonical wire shape parses into ValidationResult."""
    result = ValidationResult.model_validate(canonical_payload())

    doc = result.ai_validation_result.validations[0]
    assert doc.file_name == "license.jpg"
    assert doc.fraud_risk == FraudRisk.low
    assert result.unclassified_files == ["scan.pdf"]


def test_pascal_case_payload_parses() -> None:
    """Test that the PascalCase variant is accepted."""
    payload = {
        "AiValidationResult": {
            "DocumentValidations": [
                {
                    "DocumentIndex": 3,
                    "FileName": "passport.png",
                    "Status": "Needs Review",
                    "MatchedType": "Passport",
                    "Reason": "Blurry",
                    "FraudRisk": "high",
                    "FraudNotes": "Photo edited",
                }
            ],
            "Suggestions": [],
            "Summary": "s",
            "Storyline": "t",
        },
        "UnclassifiedFiles": [],
    }

    result = ValidationResult.model_validate(payload)

    doc = result.ai_validation_result.validations[0]
    assert doc.index == 3
    assert doc.matched_type == "Passport"
    assert doc.fraud_risk == FraudRisk.high


def test_to_wire_uses_canonical_keys() -> None:
    """Test serialization emits aiValidationResult/unclassifiedFiles and snake_case docs."""
    payload = canonical_payload()
    wire = ValidationResult.model_validate(payload).to_wire()

    assert wire == payload


def test_missing_storyline_defaults_to_empty() -> None:
    """Test that storyline is optional."""
    payload = canonical_payload()
    del payload["aiValidationResult"]["storyline"]

    result = ValidationResult.model_validate(payload)

    assert result.ai_validation_result.storyline == ""


def test_unknown_fraud_risk_fails() -> None:
    """Test that fraud risk outside low/medium/high is rejected."""
    payload = canonical_payload()
    payload["aiValidationResult"]["validations"][0]["fraud_risk"] = "extreme"

    with pytest.raises(ValidationError):
        ValidationResult.model_validate(payload)


def test_check_validation_result_ok() -> None:
    """Test pure schema check on a valid payload."""
    check = check_validation_result(canonical_payload())

    assert check.ok
    assert check.error is None
    assert check.result is not None


def test_check_validation_result_missing_field() -> None:
    """Test schema check reports the failing location."""
    payload = canonical_payload()
    del payload["unclassifiedFiles"]

    check = check_validation_result(payload)

    assert not check.ok
    assert check.error is not None
    assert "unclassifiedFiles" in check.error


@pytest.mark.parametrize("payload", [None, "ok", [1, 2], 42])
def test_check_validation_result_non_object(payload: object) -> None:
    """Test schema check rejects non-object JSON values."""
    check = check_validation_result(payload)

    assert not check.ok
    assert check.error is not None
    assert "expected JSON object" in check.error


def test_upload_request_requires_family_id() -> None:
    """Test that blank family id fails validation."""
    with pytest.raises(ValidationError, match=FAMILY_ID_REQUIRED):
        UploadRequest.model_validate({"familyId": "   "})


def test_upload_request_strips_family_id() -> None:
    """Test that family id is trimmed."""
    request = UploadRequest.model_validate({"familyId": " 8480995 "})
    assert request.family_id == "8480995"


@pytest.mark.parametrize(
    "content_type,accepted",
    [
        ("image/jpeg", True),
        ("image/png", True),
        ("IMAGE/PNG", True),
        ("application/pdf", True),
        ("application/pdf; charset=binary", True),
        ("text/plain", False),
        ("application/octet-stream", False),
        ("", False),
        (None, False),
    ],
)
def test_is_accepted_content_type(content_type: str | None, accepted: bool) -> None:
    """Test image/* and application/pdf acceptance."""
    assert is_accepted_content_type(content_type) is accepted


def test_check_upload_file_rejects_text() -> None:
    """Test that a .txt upload is rejected."""
    assert check_upload_file("notes.txt", "text/plain", 100) == UNSUPPORTED_FILE_TYPE


def test_check_upload_file_rejects_oversized() -> None:
    """Test that a 12 MB image is rejected."""
    reason = check_upload_file("huge.jpg", "image/jpeg", 12 * MB)
    assert reason == "File too large: huge.jpg exceeds 10 MB"


def test_check_upload_file_accepts_exactly_limit() -> None:
    """Test that a file of exactly 10 MB is accepted."""
    assert check_upload_file("scan.pdf", "application/pdf", 10 * MB) is None


def test_uploaded_document_size() -> None:
    """Test size is derived from data."""
    doc = UploadedDocument(filename="a.png", content_type="image/png", data=b"12345")
    assert doc.size == 5
