"""Base abstractions for format probers.

A prober looks at one file and decides whether it is the entry point of
a readable dataset. If it is, the prober reports every file that belongs
to the dataset together with the format identification.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Unreadable:
    """The probed file is not the entry point of a readable dataset.

    Attributes:
        reason: Optional human-readable explanation, used for logging
    """

    reason: str = ""


@dataclass(frozen=True)
class Readable:
    """The probed file opened a dataset.

    Attributes:
        member_files: Absolute paths of every file in the dataset, in the
            order the prober reports them. The first one is the entry point.
        format_id: Format identifier (e.g. "OME-TIFF")
        format_version: Format version (e.g. "2016-06")
    """

    member_files: tuple[str, ...]
    format_id: str
    format_version: str

    def __post_init__(self) -> None:
        # Accept any sequence, store an immutable copy
        object.__setattr__(self, "member_files", tuple(self.member_files))


ProbeResult = Union[Readable, Unreadable]


class Prober(ABC):
    """Abstract base class for format probers.

    Implementations must be callable repeatedly and independently per
    path; the scanner assumes no state is shared between calls. Any
    handle a prober opens on a file must be released before ``probe``
    returns, on every exit path.

    Attributes:
        name: Registry name of the prober
        software: Value reported as ``reader_software`` downstream
    """

    name: str = ""
    software: str = ""

    @abstractmethod
    def probe(self, path: str) -> ProbeResult:
        """Probe a single file.

        Args:
            path: Absolute canonical path of the file

        Returns:
            Readable with the dataset's member files, or Unreadable

        Raises:
            FormatError: If the file is recognisably not a readable
                dataset (treated exactly like Unreadable)
        """
        pass
