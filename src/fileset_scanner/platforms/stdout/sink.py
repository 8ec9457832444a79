"""Sink that writes submission documents to a text stream."""

import json
import sys
from typing import TextIO

from ...core.errors import SubmissionError
from ...sinks.base import Sink
from ...submission import FilesetDescriptor


class StdoutSink(Sink):
    """Writes each descriptor as a JSON document, one per line by default.

    Useful for dry runs and for piping into another tool. The submission
    id is a running line number.

    Example:
        >>> sink = StdoutSink()
        >>> sink.submit(descriptor)
        {"import_uuid": "1234", "files": ["a.tif"], ...}
        'stdout-1'
    """

    name = "stdout"

    def __init__(self, stream: TextIO | None = None, indent: int | None = None):
        """Initialize the sink.

        Args:
            stream: Stream to write to (defaults to sys.stdout at submit time)
            indent: JSON indentation; None writes compact single lines
        """
        self._stream = stream
        self.indent = indent
        self.count = 0

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def submit(self, descriptor: FilesetDescriptor) -> str:
        try:
            json.dump(descriptor.to_document(), self.stream, indent=self.indent)
            self.stream.write("\n")
            self.stream.flush()
        except OSError as e:
            raise SubmissionError(f"Cannot write to output stream: {e}") from e

        self.count += 1
        return f"stdout-{self.count}"
