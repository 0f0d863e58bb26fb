"""Validation result contract returned by the validation service.

Canonical wire shape:

    {
      "aiValidationResult": {
        "validations": [{"index", "file_name", "status", "matched_type",
                         "reason", "fraud_risk", "fraud_notes"}],
        "suggestions": [...],
        "summary": "...",
        "storyline": "..."
      },
      "unclassifiedFiles": [...]
    }

The PascalCase variant (AiValidationResult.DocumentValidations[].FileName, ...)
is accepted on input as well. Serialization always uses the canonical keys.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, ValidationError


class FraudRisk(str, Enum):
    """Fraud risk assessment attached to a document."""

    low = "low"
    medium = "medium"
    high = "high"


class DocumentValidation(BaseModel):
    """Validation verdict for a single document."""

    index: int = Field(..., validation_alias=AliasChoices("index", "DocumentIndex"))
    file_name: str = Field(
        ..., validation_alias=AliasChoices("file_name", "fileName", "FileName")
    )
    status: str = Field(
        ...,
        validation_alias=AliasChoices("status", "Status"),
        description="Free text, conventionally containing 'warning' or 'review'",
    )
    matched_type: str = Field(
        ..., validation_alias=AliasChoices("matched_type", "matchedType", "MatchedType")
    )
    reason: str = Field(..., validation_alias=AliasChoices("reason", "Reason"))
    fraud_risk: FraudRisk = Field(
        ..., validation_alias=AliasChoices("fraud_risk", "fraudRisk", "FraudRisk")
    )
    fraud_notes: str = Field(
        ..., validation_alias=AliasChoices("fraud_notes", "fraudNotes", "FraudNotes")
    )


class AiValidationResult(BaseModel):
    """AI verdicts plus the narrative fields shown on the review screen."""

    validations: list[DocumentValidation] = Field(
        ..., validation_alias=AliasChoices("validations", "DocumentValidations")
    )
    suggestions: list[str] = Field(
        ...,
        validation_alias=AliasChoices("suggestions", "Suggestions"),
        description="Suggested additional documents; entries with '(' are asides",
    )
    summary: str = Field(..., validation_alias=AliasChoices("summary", "Summary"))
    storyline: str = Field("", validation_alias=AliasChoices("storyline", "Storyline"))


class ValidationResult(BaseModel):
    """Full response of POST /api/validate-docs."""

    ai_validation_result: AiValidationResult = Field(
        ...,
        validation_alias=AliasChoices(
            "aiValidationResult", "AiValidationResult", "ai_validation_result"
        ),
        serialization_alias="aiValidationResult",
    )
    unclassified_files: list[str] = Field(
        ...,
        validation_alias=AliasChoices(
            "unclassifiedFiles", "UnclassifiedFiles", "unclassified_files"
        ),
        serialization_alias="unclassifiedFiles",
    )

    def to_wire(self) -> dict[str, Any]:
        """Serialize using the canonical wire keys."""
        return self.model_dump(mode="json", by_alias=True)


class ErrorResponse(BaseModel):
    """Error body for 4xx/5xx responses."""

    message: str


@dataclass(frozen=True)
class SchemaCheck:
    """Outcome of checking a payload against the ValidationResult contract."""

    result: ValidationResult | None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.result is not None


def check_validation_result(payload: Any) -> SchemaCheck:
    """Check a decoded JSON payload against the ValidationResult contract.

    Pure function with no transport concerns, used by the API proxy to decide
    between passthrough and fallback and by the UI to reject malformed responses.

    Args:
        payload: Decoded JSON value (any type)

    Returns:
        SchemaCheck with the parsed result, or with an error description
    """
    if not isinstance(payload, dict):
        return SchemaCheck(result=None, error=f"expected JSON object, got {type(payload).__name__}")

    try:
        return SchemaCheck(result=ValidationResult.model_validate(payload))
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        return SchemaCheck(
            result=None,
            error=f"{e.error_count()} schema error(s), first at {location or '<root>'}: {first['msg']}",
        )
