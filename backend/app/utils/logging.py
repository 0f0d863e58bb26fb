"""Structured logging for validation service calls."""

import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpstreamCallContext:
    """Context for one outbound validation call."""

    trace_id: str
    family_id: str
    file_count: int


class StructuredUpstreamLogger:
    """Structured logger for validation service calls."""

    def log_call(
        self,
        ctx: UpstreamCallContext,
        outcome: str,
        latency_ms: float,
        status_code: int | None = None,
        error_reason: str | None = None,
    ) -> None:
        """Log an outbound call with structured data."""
        log_data: dict[str, Any] = {
            "trace_id": ctx.trace_id,
            "family_id": ctx.family_id,
            "file_count": ctx.file_count,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
        }

        if status_code is not None:
            log_data["status_code"] = status_code
        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Validation service call: {outcome}"
        if error_reason:
            log_msg += f" ({error_reason})"

        if outcome == "external":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
