"""Type definitions for the submission wire format.

``SubmissionDocument`` mirrors the JSON schema in
``schemas/fileset_descriptor.schema.json``.
"""

from typing import TypedDict


class SubmissionDocument(TypedDict):
    """Structured document handed to the workflow trigger."""

    import_uuid: str  # Import session identifier
    files: list[str]  # Relative, normalized, "/"-separated; entry point first
    reader: str  # Format identifier (e.g. "OME-TIFF")
    reader_software: str  # Prober that recognised the fileset (e.g. "tifffile")
    reader_version: str  # Format version (e.g. "6.0", "2016-06")
