"""JSON Schema validation for submission documents.

This module loads the bundled JSON Schema and validates documents before
they are handed to a sink.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema
from .types import SubmissionDocument

# Bundled with the package: fileset_scanner/core/schemas/
SCHEMA_PATH = Path(__file__).parent / "schemas" / "fileset_descriptor.schema.json"


@lru_cache(maxsize=1)
def load_schema() -> dict[str, Any]:
    """Load the JSON schema from disk.

    Returns:
        Dictionary containing the JSON Schema.

    Raises:
        FileNotFoundError: If schema file doesn't exist
        json.JSONDecodeError: If schema is invalid JSON
    """
    if not SCHEMA_PATH.exists():
        raise FileNotFoundError(f"Schema file not found: {SCHEMA_PATH}")

    with SCHEMA_PATH.open("r", encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]


def validate_document(document: SubmissionDocument) -> None:
    """Validate a submission document against the JSON Schema.

    Args:
        document: The document to validate

    Raises:
        ValidationError: If the document doesn't conform to the schema
        FileNotFoundError: If schema file is missing
        json.JSONDecodeError: If schema is invalid
    """
    jsonschema.validate(instance=document, schema=load_schema())

