"""Export JSON schemas for ValidationResult and the upload form."""

import json
from pathlib import Path

from backend.app.models import UploadRequest, ValidationResult


def main() -> None:
    """Export schemas to docs/schemas/."""
    schemas_dir = Path("docs/schemas")
    schemas_dir.mkdir(parents=True, exist_ok=True)

    # Canonical wire keys (aiValidationResult, unclassifiedFiles)
    result_schema = ValidationResult.model_json_schema(by_alias=True, mode="serialization")
    result_path = schemas_dir / "ValidationResult.schema.json"
    with open(result_path, "w") as f:
        json.dump(result_schema, f, indent=2)
    print(f"Exported ValidationResult schema to {result_path}")

    request_schema = UploadRequest.model_json_schema(by_alias=True, mode="serialization")
    request_path = schemas_dir / "UploadRequest.schema.json"
    with open(request_path, "w") as f:
        json.dump(request_schema, f, indent=2)
    print(f"Exported UploadRequest schema to {request_path}")


if __name__ == "__main__":
    main()
