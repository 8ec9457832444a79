"""Base abstraction for workflow trigger sinks.

A sink accepts a fileset descriptor and starts the downstream job for
it. The scanner calls ``submit`` exactly once per descriptor attempt; any
retrying is the scanner's policy, not the sink's.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..submission import FilesetDescriptor


class Sink(ABC):
    """Abstract base class for workflow trigger sinks.

    Attributes:
        name: Registry name of the sink
    """

    name: str = ""

    @abstractmethod
    def submit(self, descriptor: "FilesetDescriptor") -> str:
        """Start the downstream job for a fileset.

        Args:
            descriptor: The fileset to submit

        Returns:
            Opaque submission identifier, used for audit logging only

        Raises:
            SubmissionError: If the job could not be started
        """
        pass

    def close(self) -> None:
        """Release any resources held by the sink."""
