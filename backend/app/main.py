"""FastAPI application - document validation proxy."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from backend.app.api.routes.health import router as health_router
from backend.app.api.routes.metrics import router as metrics_router
from backend.app.api.routes.validation import router as validation_router
from backend.app.models.uploads import UploadRejectedError

app = FastAPI(title="Document Validation API", version="0.1.0")

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(validation_router, tags=["validation"])


@app.exception_handler(UploadRejectedError)
async def upload_rejected_handler(request: Request, exc: UploadRejectedError) -> JSONResponse:
    """Map rejected uploads to 400 {"message": ...}."""
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed requests with the same {"message": ...} body as other errors."""
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": message})


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Document Validation API", "version": "0.1.0"}
