"""Global pytest configuration."""

import os

# Point the proxy at a port nothing listens on so tests never reach a real service
os.environ.setdefault("VALIDATION_SERVICE_URL", "http://127.0.0.1:9/hackathon/validate-docs")
os.environ.setdefault("VALIDATION_SERVICE_TIMEOUT_SECONDS", "2")
os.environ.setdefault("ENABLE_UPSTREAM_HEALTHCHECK", "false")
