"""Models package - re-exports for convenience."""

from backend.app.models.uploads import UploadedDocument, UploadRejectedError, UploadRequest
from backend.app.models.validation import (
    AiValidationResult,
    DocumentValidation,
    ErrorResponse,
    FraudRisk,
    SchemaCheck,
    ValidationResult,
    check_validation_result,
)

__all__ = [
    # Uploads
    "UploadRequest",
    "UploadedDocument",
    "UploadRejectedError",
    # Validation results
    "FraudRisk",
    "DocumentValidation",
    "AiValidationResult",
    "ValidationResult",
    "ErrorResponse",
    "SchemaCheck",
    "check_validation_result",
]
