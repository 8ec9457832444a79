"""Exception hierarchy for the fileset scanner.

Only configuration errors and traversal errors are fatal for a scan.
Everything else is absorbed into the scan report and the logs.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..submission import FilesetDescriptor


class ScannerError(Exception):
    """Base class for all scanner errors."""


class ConfigurationError(ScannerError):
    """Raised before traversal starts when the scan cannot be set up.

    Examples: the scan root is missing or not a directory, a setting has an
    invalid value, or a requested platform is not registered.
    """


class TraversalError(ScannerError):
    """Raised when a directory's entries cannot be enumerated.

    The traversal position cannot be resumed, so the whole run aborts.

    Attributes:
        directory: The directory that could not be listed
    """

    def __init__(self, directory: str, cause: Optional[BaseException] = None):
        self.directory = directory
        self.cause = cause
        message = f"Cannot list directory {directory}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class FormatError(ScannerError):
    """Raised by a prober when a file is not readable as a dataset."""


class SubmissionError(ScannerError):
    """Raised by a sink when a descriptor cannot be submitted."""


class SubmissionAborted(ScannerError):
    """Raised when the abort policy stops a run after a failed submission.

    Attributes:
        descriptor: The descriptor that could not be submitted
    """

    def __init__(self, descriptor: "FilesetDescriptor", cause: BaseException):
        self.descriptor = descriptor
        self.cause = cause
        super().__init__(
            f"Submission of fileset {descriptor.entry_point!r} failed, aborting scan: {cause}"
        )
