"""Core utilities shared by the scanner and its platforms.

This package contains configuration, the error hierarchy, path
normalization, the wire document type and its schema validation.
"""

from .config import OutOfRootPolicy, ScanConfig, SubmitFailurePolicy
from .errors import (
    ConfigurationError,
    FormatError,
    ScannerError,
    SubmissionAborted,
    SubmissionError,
    TraversalError,
)
from .paths import canonical_path, is_within, relativize
from .types import SubmissionDocument
from .validator import validate_document

__all__ = [
    "ConfigurationError",
    "FormatError",
    "OutOfRootPolicy",
    "ScanConfig",
    "ScannerError",
    "SubmissionAborted",
    "SubmissionDocument",
    "SubmissionError",
    "SubmitFailurePolicy",
    "TraversalError",
    "canonical_path",
    "is_within",
    "relativize",
    "validate_document",
]
