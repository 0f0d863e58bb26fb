"""Health check endpoints.

- /health is a plain liveness probe
- /healthz additionally reports whether the validation service is reachable
"""

from typing import Any

import httpx
from fastapi import APIRouter

from backend.app.config import Settings, get_settings

router = APIRouter()


async def check_validation_service(settings: Settings) -> tuple[bool, str]:
    """Check validation service reachability.

    Any HTTP response counts as reachable; the service only needs to accept
    connections for the proxy to forward uploads.

    Returns:
        (is_ok, status_message)
    """
    if not settings.enable_upstream_healthcheck:
        return (True, "disabled")

    try:
        async with httpx.AsyncClient(timeout=settings.healthcheck_timeout_seconds) as client:
            await client.head(settings.validation_service_url)
        return (True, "ok")
    except httpx.HTTPError as e:
        return (False, f"error: {type(e).__name__}")


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple health check for Docker/k8s.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz")
async def healthz() -> dict[str, Any]:
    """Health check endpoint.

    An unreachable validation service degrades results to the mock fallback
    but does not stop the API from answering, so this always returns 200.

    Returns:
        Overall status ("ok" or "degraded") with component details
    """
    settings = get_settings()

    upstream_ok, upstream_status = await check_validation_service(settings)

    return {
        "status": "ok" if upstream_ok else "degraded",
        "components": {
            "validation_service": upstream_status,
        },
        "mode": "external" if upstream_ok else "fallback",
    }
