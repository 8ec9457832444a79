"""Fileset Scanner.

This package walks an import directory, groups files into filesets
(multi-file microscopy datasets) by probing them, and triggers exactly
one downstream processing request per discovered fileset.
"""

# Core library interface
from .ledger import ClaimLedger
from .registry import PlatformRegistry
from .scanner import Scanner, ScanReport
from .submission import FilesetDescriptor, SubmissionBuilder
from .traversal import walk_files

# Collaborator interfaces
from .probers import Prober, ProbeResult, Readable, Unreadable
from .sinks import Sink

# Core utilities
from .core import (
    ConfigurationError,
    FormatError,
    OutOfRootPolicy,
    ScanConfig,
    ScannerError,
    SubmissionAborted,
    SubmissionDocument,
    SubmissionError,
    SubmitFailurePolicy,
    TraversalError,
    canonical_path,
    relativize,
    validate_document,
)

__version__ = "0.1.0"

# Auto-discover and register all platforms
PlatformRegistry.discover_platforms()

__all__ = [
    # Primary library interface
    "Scanner",
    "ScanReport",
    "ClaimLedger",
    "FilesetDescriptor",
    "SubmissionBuilder",
    "PlatformRegistry",
    "walk_files",
    # Collaborators
    "Prober",
    "ProbeResult",
    "Readable",
    "Unreadable",
    "Sink",
    # Configuration and errors
    "ScanConfig",
    "SubmitFailurePolicy",
    "OutOfRootPolicy",
    "ScannerError",
    "ConfigurationError",
    "TraversalError",
    "FormatError",
    "SubmissionError",
    "SubmissionAborted",
    # Utilities
    "SubmissionDocument",
    "canonical_path",
    "relativize",
    "validate_document",
]
