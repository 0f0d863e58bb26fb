"""Helper functions for UI - /api/validate-docs client, file staging and review state."""

import re
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

import httpx

from backend.app.config import MAX_UPLOAD_BYTES
from backend.app.models.uploads import (
    FAMILY_ID_REQUIRED,
    UploadedDocument,
    check_upload_file,
)
from backend.app.models.validation import (
    DocumentValidation,
    FraudRisk,
    ValidationResult,
    check_validation_result,
)

NO_FILES_SELECTED = "Please select files to upload"
GENERIC_UPLOAD_FAILURE = "Unknown error occurred"
NO_STORYLINE = "No storyline available."

# File extensions offered by the file picker
ACCEPTED_EXTENSIONS = ["png", "jpg", "jpeg", "pdf"]

# Browser request headers that carry the user's session
FORWARDED_HEADERS = ("authorization",)


class UploadError(Exception):
    """Upload could not be submitted or its response could not be used."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


# --- Upload flow ---


class StagingArea:
    """Ordered list of files staged for upload.

    Files keep insertion order and are not de-duplicated. Files that fail the
    type or size rules are never staged.
    """

    def __init__(self, max_bytes: int = MAX_UPLOAD_BYTES) -> None:
        self.max_bytes = max_bytes
        self._files: list[UploadedDocument] = []

    @property
    def files(self) -> list[UploadedDocument]:
        return list(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def add(self, candidates: Iterable[UploadedDocument]) -> list[tuple[str, str]]:
        """Append accepted files.

        Returns:
            List of (filename, reason) for every rejected candidate
        """
        rejected = []
        for doc in candidates:
            reason = check_upload_file(doc.filename, doc.content_type, doc.size, self.max_bytes)
            if reason:
                rejected.append((doc.filename, reason))
            else:
                self._files.append(doc)
        return rejected

    def remove(self, position: int) -> UploadedDocument:
        """Remove and return the file at position."""
        return self._files.pop(position)

    def clear(self) -> None:
        self._files.clear()


def format_file_size(size_bytes: int) -> str:
    """Format a byte count as megabytes with two decimals."""
    return f"{size_bytes / 1024 / 1024:.2f} MB"


def _error_message(response: httpx.Response) -> str:
    """Pick the most useful error text from a failed response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("message"), str) and body["message"]:
        return body["message"]
    return response.text.strip() or response.reason_phrase or GENERIC_UPLOAD_FAILURE


def session_credentials(
    headers: Mapping[str, str], cookies: Mapping[str, str]
) -> tuple[dict[str, str], dict[str, str]]:
    """Pick the session headers and cookies to forward from the browser request."""
    forwarded = {
        name: value for name, value in headers.items() if name.lower() in FORWARDED_HEADERS
    }
    return forwarded, dict(cookies)


def call_validate_docs(
    backend_url: str,
    family_id: str,
    files: list[UploadedDocument],
    headers: dict[str, str] | None = None,
    cookies: dict[str, str] | None = None,
    client: httpx.Client | None = None,
    timeout: float = 120.0,
) -> ValidationResult:
    """Call /api/validate-docs with the staged files.

    Args:
        backend_url: Backend base URL (e.g. http://localhost:8000)
        family_id: Family identifier from the form
        files: Staged files, in order
        headers: Session headers forwarded with the request
        cookies: Session cookies forwarded with the request
        client: Optional httpx client (for testing with mocks)
        timeout: Request timeout in seconds

    Returns:
        Parsed ValidationResult

    Raises:
        UploadError: On local input errors (no request is made), network
            errors, non-2xx responses or a response that is not a ValidationResult
    """
    if not family_id.strip():
        raise UploadError(FAMILY_ID_REQUIRED)
    if not files:
        raise UploadError(NO_FILES_SELECTED)

    multipart = [("files", (doc.filename, doc.data, doc.content_type)) for doc in files]

    close_client = False
    if client is None:
        client = httpx.Client(timeout=timeout, headers=headers, cookies=cookies)
        close_client = True
    else:
        # Credentials go on the client, not on the request
        if headers:
            client.headers.update(headers)
        if cookies:
            client.cookies.update(cookies)

    try:
        response = client.post(
            f"{backend_url}/api/validate-docs",
            data={"familyId": family_id.strip()},
            files=multipart,
        )
    except httpx.HTTPError as e:
        raise UploadError(f"Could not reach the validation backend: {e}") from e
    finally:
        if close_client:
            client.close()

    if response.is_error:
        raise UploadError(_error_message(response), status_code=response.status_code)

    try:
        payload = response.json()
    except ValueError as e:
        raise UploadError("Validation backend returned a non-JSON response") from e

    check = check_validation_result(payload)
    if check.result is None:
        raise UploadError(f"Unexpected validation response: {check.error}")
    return check.result


# --- Results review flow ---


class BadgeKind(str, Enum):
    """Status badge shown next to a validated document."""

    warning = "warning"
    needs_review = "needs_review"
    valid = "valid"


BADGE_LABELS = {
    BadgeKind.warning: "⚠️ Warning",
    BadgeKind.needs_review: "🚫 Please Review",
    BadgeKind.valid: "✅ Valid",
}

FRAUD_RISK_COLORS = {
    FraudRisk.high: "red",
    FraudRisk.medium: "orange",
    FraudRisk.low: "green",
}


def needs_review(status: str) -> bool:
    return "review" in status.lower()


def status_badge(status: str, fraud_risk: FraudRisk) -> BadgeKind:
    """Classify a document into exactly one badge.

    Precedence: warning text or medium risk, then review text or high risk,
    otherwise valid.
    """
    if "warning" in status.lower() or fraud_risk == FraudRisk.medium:
        return BadgeKind.warning
    if needs_review(status) or fraud_risk == FraudRisk.high:
        return BadgeKind.needs_review
    return BadgeKind.valid


def is_preselected(doc: DocumentValidation) -> bool:
    return doc.fraud_risk != FraudRisk.high and not needs_review(doc.status)


def default_selection(result: ValidationResult) -> set[int]:
    """Positions of documents selected by default for a fresh result."""
    return {
        i for i, doc in enumerate(result.ai_validation_result.validations) if is_preselected(doc)
    }


class ReviewSelection:
    """Documents the user chose to proceed with, scoped to one result."""

    def __init__(self, result: ValidationResult) -> None:
        self.result = result
        self._selected = default_selection(result)

    def is_selected(self, position: int) -> bool:
        return position in self._selected

    def set_selected(self, position: int, selected: bool) -> None:
        self._check_position(position)
        if selected:
            self._selected.add(position)
        else:
            self._selected.discard(position)

    def toggle(self, position: int) -> bool:
        """Flip selection of a document; returns the new state."""
        self.set_selected(position, not self.is_selected(position))
        return self.is_selected(position)

    def selected(self) -> list[int]:
        return sorted(self._selected)

    def selected_documents(self) -> list[DocumentValidation]:
        validations = self.result.ai_validation_result.validations
        return [validations[i] for i in self.selected()]

    def _check_position(self, position: int) -> None:
        if not 0 <= position < len(self.result.ai_validation_result.validations):
            raise IndexError(f"no document at position {position}")


def is_informational_suggestion(suggestion: str) -> bool:
    """Suggestions with a parenthesis are asides rather than actionable hints."""
    return "(" in suggestion


def format_matched_type(matched_type: str) -> str:
    """Split a CamelCase document type into words (DriverLicense -> Driver License)."""
    return re.sub(r"([A-Z])", r" \1", matched_type).strip()


def build_document_view(position: int, doc: DocumentValidation) -> dict[str, Any]:
    """Build the display fields for one document card."""
    badge = status_badge(doc.status, doc.fraud_risk)
    return {
        "position": position,
        "file_name": doc.file_name,
        "badge": badge,
        "badge_label": BADGE_LABELS[badge],
        "document_type": format_matched_type(doc.matched_type),
        "reason": doc.reason,
        "fraud_risk": doc.fraud_risk.value,
        "fraud_risk_color": FRAUD_RISK_COLORS[doc.fraud_risk],
        "fraud_notes": doc.fraud_notes,
    }


def build_suggestions_view(suggestions: list[str]) -> list[dict[str, Any]]:
    """Build suggestion rows with icon and emphasis."""
    rows = []
    for suggestion in suggestions:
        informational = is_informational_suggestion(suggestion)
        rows.append(
            {
                "text": suggestion,
                "informational": informational,
                "icon": "ℹ️" if informational else "💡",
            }
        )
    return rows
