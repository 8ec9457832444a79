"""Fileset descriptors and their construction.

A descriptor is the submission-ready form of one discovered fileset. It
is built once per successful probe, never modified, and handed to a sink.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from .core.paths import PathLike, relativize
from .core.types import SubmissionDocument


@dataclass(frozen=True)
class FilesetDescriptor:
    """Immutable description of one fileset.

    Attributes:
        import_id: Identifier of the import session
        files: Member paths relative to the scan root, in probe order.
            The first entry is the designated entry point.
        format_id: Format identifier reported by the prober
        format_version: Format version reported by the prober
        reader_software: Software that recognised the fileset
    """

    import_id: str
    files: tuple[str, ...]
    format_id: str
    format_version: str
    reader_software: str = ""

    @property
    def entry_point(self) -> str:
        """Relative path of the entry point file."""
        return self.files[0]

    def to_document(self) -> SubmissionDocument:
        """Serialize into the structured document expected by sinks."""
        return SubmissionDocument(
            import_uuid=self.import_id,
            files=list(self.files),
            reader=self.format_id,
            reader_software=self.reader_software,
            reader_version=self.format_version,
        )


class SubmissionBuilder:
    """Turns probe results into descriptors.

    ``build`` is pure: the same inputs always give the same descriptor.
    """

    def __init__(self, reader_software: str = ""):
        """Initialize the builder.

        Args:
            reader_software: Recorded on every descriptor as the software
                that probed the fileset
        """
        self.reader_software = reader_software

    def build(
        self,
        import_id: str,
        member_files: Sequence[PathLike],
        format_id: str,
        format_version: str,
        root: PathLike,
    ) -> FilesetDescriptor:
        """Build the descriptor for one fileset.

        Args:
            import_id: Identifier of the import session, attached verbatim
            member_files: Absolute member paths in probe order
            format_id: Format identifier, attached verbatim
            format_version: Format version, attached verbatim
            root: Scan root the member paths are made relative to

        Returns:
            FilesetDescriptor with relative, normalized member paths

        Raises:
            ValueError: If member_files is empty
        """
        if not member_files:
            raise ValueError("A fileset needs at least one member file")

        return FilesetDescriptor(
            import_id=import_id,
            files=tuple(relativize(path, root) for path in member_files),
            format_id=format_id,
            format_version=format_version,
            reader_software=self.reader_software,
        )
