"""Document validation endpoint - POST /api/validate-docs."""

import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from backend.app.config import Settings, get_settings
from backend.app.models.uploads import (
    FAMILY_ID_REQUIRED,
    NO_FILES_UPLOADED,
    UNSUPPORTED_FILE_TYPE,
    UploadedDocument,
    UploadRejectedError,
    UploadRequest,
    file_too_large_message,
    is_accepted_content_type,
)
from backend.app.models.validation import ErrorResponse, ValidationResult
from backend.app.utils.metrics import PrometheusValidationMetrics
from backend.app.validation.service import (
    ValidationServiceClient,
    get_validation_client,
    validate_documents,
)

router = APIRouter(prefix="/api", tags=["validation"])
logger = logging.getLogger(__name__)
metrics = PrometheusValidationMetrics()


async def read_uploads(uploads: list[UploadFile], max_bytes: int) -> list[UploadedDocument]:
    """Read multipart file parts into memory, enforcing type and size limits.

    Parts without a filename and without content (an empty file input) are
    skipped. Every other part must be an image or PDF no larger than max_bytes.

    Raises:
        UploadRejectedError: If any part has another content type or is too large
    """
    documents: list[UploadedDocument] = []
    for upload in uploads:
        data = await upload.read()
        if not upload.filename and not data:
            continue
        filename = upload.filename or "upload"

        if not is_accepted_content_type(upload.content_type):
            raise UploadRejectedError(UNSUPPORTED_FILE_TYPE)
        if len(data) > max_bytes:
            raise UploadRejectedError(file_too_large_message(filename, max_bytes))

        documents.append(
            UploadedDocument(filename=filename, content_type=upload.content_type or "", data=data)
        )
    return documents


@router.post(
    "/validate-docs",
    response_model=None,
    responses={
        status.HTTP_200_OK: {"model": ValidationResult},
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
async def validate_docs(
    client: Annotated[ValidationServiceClient, Depends(get_validation_client)],
    settings: Annotated[Settings, Depends(get_settings)],
    family_id: Annotated[str | None, Form(alias="familyId")] = None,
    files: Annotated[list[UploadFile] | None, File()] = None,
) -> JSONResponse:
    """Validate uploaded identity documents.

    Forwards the family id and files to the external validation service and
    returns its JSON verbatim. If the service is unreachable or its reply is
    unusable, a deterministic mock result is returned instead.

    Args:
        client: Validation service client
        settings: Application settings
        family_id: Family identifier (form field "familyId")
        files: Uploaded image/PDF files (form field "files")

    Returns:
        200 with a ValidationResult body

    Raises:
        UploadRejectedError: On wrong file type, oversized file, missing
            family id or no files (mapped to 400)
    """
    trace_id = uuid.uuid4().hex
    logger.info(
        f"Received validation request trace_id={trace_id} "
        f"files={len(files or [])}"
    )

    try:
        documents = await read_uploads(files or [], settings.max_upload_bytes)

        try:
            request = UploadRequest.model_validate({"familyId": family_id or ""})
        except ValidationError as e:
            raise UploadRejectedError(FAMILY_ID_REQUIRED) from e

        if not documents:
            raise UploadRejectedError(NO_FILES_UPLOADED)

        metrics.inc_files(len(documents))
        outcome = await validate_documents(
            request.family_id,
            documents,
            client,
            trace_id=trace_id,
        )
    except UploadRejectedError as e:
        logger.info(f"Rejected validation request trace_id={trace_id}: {e.message}")
        metrics.inc_request("rejected")
        raise
    except Exception as e:
        logger.exception(f"Validation request failed trace_id={trace_id}")
        metrics.inc_request("error")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": str(e) or "Internal server error"},
        )

    metrics.inc_request(outcome.source)
    return JSONResponse(content=outcome.body)
