"""Validation service client and the external/fallback decision.

The outbound call is a single attempt with a bounded timeout. Any transport
failure or unusable reply is recovered by substituting the deterministic mock
result, so callers always receive a ValidationOutcome.
"""

import logging
import time
import uuid
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Literal, Protocol

import httpx

from backend.app.config import get_settings
from backend.app.models.uploads import UploadedDocument
from backend.app.models.validation import ValidationResult, check_validation_result
from backend.app.utils.logging import StructuredUpstreamLogger, UpstreamCallContext
from backend.app.utils.metrics import PrometheusValidationMetrics
from backend.app.validation.mock import build_mock_result

logger = logging.getLogger(__name__)


class UpstreamResponseError(Exception):
    """Validation service replied, but the reply cannot be used."""

    def __init__(self, kind: str, detail: str, status_code: int | None = None) -> None:
        super().__init__(detail)
        self.kind = kind
        self.detail = detail
        self.status_code = status_code


@dataclass(frozen=True)
class UpstreamReply:
    """Well-formed reply from the validation service."""

    payload: dict[str, Any]
    result: ValidationResult
    status_code: int


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of a validation request, real or mocked.

    `body` is what the API returns: the upstream JSON verbatim for the
    external branch, the serialized mock for the fallback branch.
    """

    source: Literal["external", "fallback"]
    body: dict[str, Any]
    result: ValidationResult
    fallback_reason: str | None = None


class ValidationServiceClient(Protocol):
    """Protocol for validation service implementations."""

    async def validate_documents(
        self,
        *,
        family_id: str,
        documents: Sequence[UploadedDocument],
    ) -> UpstreamReply:
        """Submit documents for validation.

        Raises:
            httpx.HTTPError: On network errors or timeouts
            UpstreamResponseError: On non-2xx status or a body that does not
                match the ValidationResult contract
        """
        ...


class HttpValidationServiceClient:
    """httpx-backed client posting multipart uploads to the validation service."""

    def __init__(
        self,
        url: str,
        timeout_seconds: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize client.

        Args:
            url: Full URL of the validation endpoint
            timeout_seconds: Overall timeout for the outbound call
            client: Optional httpx client (for testing with mocks)
        """
        self.url = url
        self.timeout_seconds = timeout_seconds
        self._client = client

    async def validate_documents(
        self,
        *,
        family_id: str,
        documents: Sequence[UploadedDocument],
    ) -> UpstreamReply:
        """Forward documents as a fresh multipart body and parse the reply."""
        files = [
            ("files", (doc.filename, doc.data, doc.content_type)) for doc in documents
        ]

        client = self._client
        close_client = False
        if client is None:
            client = httpx.AsyncClient(timeout=self.timeout_seconds)
            close_client = True

        try:
            response = await client.post(self.url, data={"familyId": family_id}, files=files)
        finally:
            if close_client:
                await client.aclose()

        if response.is_error:
            raise UpstreamResponseError(
                "http_status",
                f"validation service returned {response.status_code}: {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamResponseError(
                "invalid_json",
                f"validation service returned a non-JSON body: {e}",
                status_code=response.status_code,
            ) from e

        check = check_validation_result(payload)
        if check.result is None:
            raise UpstreamResponseError(
                "schema_mismatch",
                f"validation service returned an unexpected shape: {check.error}",
                status_code=response.status_code,
            )

        return UpstreamReply(payload=payload, result=check.result, status_code=response.status_code)


async def validate_documents(
    family_id: str,
    documents: Sequence[UploadedDocument],
    client: ValidationServiceClient,
    *,
    trace_id: str | None = None,
    upstream_logger: StructuredUpstreamLogger | None = None,
    metrics: PrometheusValidationMetrics | None = None,
) -> ValidationOutcome:
    """Validate documents with the external service, falling back to the mock.

    Args:
        family_id: Family identifier from the upload form
        documents: Accepted uploaded files, in upload order
        client: Validation service implementation
        trace_id: Correlation id for logs (generated if omitted)
        upstream_logger: Structured logger (default instance if omitted)
        metrics: Metrics sink (default instance if omitted)

    Returns:
        ValidationOutcome from the "external" or "fallback" branch
    """
    upstream_logger = upstream_logger or StructuredUpstreamLogger()
    metrics = metrics or PrometheusValidationMetrics()
    ctx = UpstreamCallContext(
        trace_id=trace_id or uuid.uuid4().hex,
        family_id=family_id,
        file_count=len(documents),
    )

    start = time.perf_counter()
    status_code: int | None = None
    try:
        reply = await client.validate_documents(family_id=family_id, documents=documents)
    except httpx.TimeoutException as e:
        reason, detail = "timeout", f"{type(e).__name__}: {e}"
    except httpx.HTTPError as e:
        reason, detail = "transport_error", f"{type(e).__name__}: {e}"
    except UpstreamResponseError as e:
        reason, detail, status_code = e.kind, e.detail, e.status_code
    else:
        latency_ms = (time.perf_counter() - start) * 1000
        upstream_logger.log_call(ctx, "external", latency_ms, status_code=reply.status_code)
        metrics.record_upstream_latency("external", latency_ms)
        return ValidationOutcome(source="external", body=reply.payload, result=reply.result)

    latency_ms = (time.perf_counter() - start) * 1000
    upstream_logger.log_call(
        ctx, "fallback", latency_ms, status_code=status_code, error_reason=detail
    )
    metrics.record_upstream_latency("fallback", latency_ms)
    metrics.inc_fallback(reason)

    mock = build_mock_result(family_id, [doc.filename for doc in documents])
    return ValidationOutcome(
        source="fallback",
        body=mock.to_wire(),
        result=mock,
        fallback_reason=reason,
    )


async def get_validation_client() -> ValidationServiceClient:
    """Factory function for the configured validation service client."""
    settings = get_settings()
    logger.debug(f"Using validation service at {settings.validation_service_url}")
    return HttpValidationServiceClient(
        url=settings.validation_service_url,
        timeout_seconds=settings.validation_service_timeout_seconds,
    )
