"""Upload request models and file acceptance rules shared by the UI and the API."""

from dataclasses import dataclass

from pydantic import AliasChoices, BaseModel, Field, field_validator

from backend.app.config import MAX_UPLOAD_BYTES

PDF_CONTENT_TYPE = "application/pdf"
IMAGE_CONTENT_PREFIX = "image/"

FAMILY_ID_REQUIRED = "Family ID is required"
NO_FILES_UPLOADED = "No files uploaded"
UNSUPPORTED_FILE_TYPE = "Only image and PDF files are allowed"


class UploadRejectedError(Exception):
    """Upload request was rejected before reaching the validation service."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UploadRequest(BaseModel):
    """Form fields accompanying a document upload."""

    family_id: str = Field(
        ...,
        validation_alias=AliasChoices("familyId", "family_id"),
        serialization_alias="familyId",
        description="Family identifier the documents belong to",
    )

    @field_validator("family_id")
    @classmethod
    def validate_family_id_not_blank(cls, v: str) -> str:
        """Ensure family id has visible characters."""
        v = v.strip()
        if not v:
            raise ValueError(FAMILY_ID_REQUIRED)
        return v


@dataclass(frozen=True)
class UploadedDocument:
    """A single uploaded file held in memory for one request."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


def is_accepted_content_type(content_type: str | None) -> bool:
    """Return True for image/* and application/pdf content types."""
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type.startswith(IMAGE_CONTENT_PREFIX) or media_type == PDF_CONTENT_TYPE


def file_too_large_message(filename: str, max_bytes: int = MAX_UPLOAD_BYTES) -> str:
    """Format the rejection message for an oversized file."""
    return f"File too large: {filename} exceeds {max_bytes // (1024 * 1024)} MB"


def check_upload_file(
    filename: str,
    content_type: str | None,
    size: int,
    max_bytes: int = MAX_UPLOAD_BYTES,
) -> str | None:
    """Check a file against the upload rules.

    Args:
        filename: Original file name
        content_type: MIME type reported for the file
        size: File size in bytes
        max_bytes: Maximum accepted size in bytes

    Returns:
        None if the file is accepted, otherwise a human-readable rejection reason
    """
    if not is_accepted_content_type(content_type):
        return UNSUPPORTED_FILE_TYPE
    if size > max_bytes:
        return file_too_large_message(filename, max_bytes)
    return None
