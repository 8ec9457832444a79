"""Shared fakes and fixtures for scanner tests."""

from collections.abc import Iterable
from pathlib import Path

import pytest

from fileset_scanner.core.errors import FormatError, SubmissionError
from fileset_scanner.probers.base import Prober, ProbeResult, Readable, Unreadable
from fileset_scanner.sinks.base import Sink
from fileset_scanner.submission import FilesetDescriptor


class FakeProber(Prober):
    """Prober driven by a table of path -> result.

    Paths missing from the table are unreadable. A value that is an
    exception instance is raised instead of returned.
    """

    name = "fake"
    software = "fake-prober"

    def __init__(self, results: dict[str, ProbeResult | Exception] | None = None):
        self.results = results or {}
        self.calls: list[str] = []

    def probe(self, path: str) -> ProbeResult:
        self.calls.append(path)
        result = self.results.get(path, Unreadable("unknown format"))
        if isinstance(result, Exception):
            raise result
        return result


class RecordingSink(Sink):
    """Sink that records descriptors and fails for chosen entry points.

    Attributes:
        fail_for: Entry points (relative paths) whose submission fails
        failures_before_success: Number of failures before each such
            entry point succeeds; None means it always fails
    """

    name = "recording"

    def __init__(self, fail_for: Iterable[str] = (), failures_before_success: int | None = None):
        self.fail_for = set(fail_for)
        self.failures_before_success = failures_before_success
        self.attempts: dict[str, int] = {}
        self.submitted: list[FilesetDescriptor] = []

    def submit(self, descriptor: FilesetDescriptor) -> str:
        entry = descriptor.entry_point
        self.attempts[entry] = self.attempts.get(entry, 0) + 1
        if entry in self.fail_for:
            limit = self.failures_before_success
            if limit is None or self.attempts[entry] <= limit:
                raise SubmissionError(f"rejected {entry}")
        self.submitted.append(descriptor)
        return f"exec-{len(self.submitted)}"


def make_tree(root: Path, *relative_paths: str) -> list[str]:
    """Create empty files under root and return their absolute paths."""
    created = []
    for rel in relative_paths:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch()
        created.append(str(path))
    return created


def readable(*paths: str, format_id: str = "TIFF", format_version: str = "6.0") -> Readable:
    return Readable(tuple(paths), format_id, format_version)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def format_error() -> FormatError:
    return FormatError("not a dataset")
