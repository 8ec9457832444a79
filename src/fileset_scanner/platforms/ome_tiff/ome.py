"""OME-XML parsing helpers.

Multi-file OME-TIFF datasets describe their layout in OME-XML: every
``TiffData`` block names the file holding its planes through a
``UUID/@FileName`` attribute. Binary-only files point at a separate
companion metadata file instead. These helpers extract both references
without needing any TIFF library.
"""

import os
import xml.etree.ElementTree as ET
from dataclasses import dataclass

from ...core.errors import FormatError

OME_NAMESPACE_PREFIX = "http://www.openmicroscopy.org/Schemas/OME/"


@dataclass(frozen=True)
class OmeLayout:
    """File references found in an OME-XML document.

    Attributes:
        schema_version: Schema version from the namespace (e.g. "2016-06")
        data_files: File names referenced by TiffData blocks, in document
            order, without duplicates
        metadata_file: Companion metadata file named by a BinaryOnly
            element, if any
    """

    schema_version: str
    data_files: tuple[str, ...]
    metadata_file: str | None = None


def _namespace(tag: str) -> str:
    if tag.startswith("{"):
        return tag[1:].split("}", 1)[0]
    return ""


def parse_ome_xml(xml: str | bytes) -> OmeLayout:
    """Parse an OME-XML document.

    Args:
        xml: The document text

    Returns:
        OmeLayout describing the referenced files

    Raises:
        FormatError: If the text is not well-formed or is not OME-XML
    """
    try:
        root = ET.fromstring(xml)
    except ET.ParseError as e:
        raise FormatError(f"Malformed OME-XML: {e}") from e

    ns = _namespace(root.tag)
    if not ns.startswith(OME_NAMESPACE_PREFIX) or not root.tag.endswith("}OME"):
        raise FormatError(f"Not an OME-XML document (root element {root.tag})")

    schema_version = ns[len(OME_NAMESPACE_PREFIX):].strip("/")

    data_files: list[str] = []
    for uuid in root.iter(f"{{{ns}}}UUID"):
        file_name = uuid.get("FileName")
        if file_name and file_name not in data_files:
            data_files.append(file_name)

    metadata_file = None
    binary_only = root.find(f"{{{ns}}}BinaryOnly")
    if binary_only is not None:
        metadata_file = binary_only.get("MetadataFile") or None

    return OmeLayout(
        schema_version=schema_version,
        data_files=tuple(data_files),
        metadata_file=metadata_file,
    )


def resolve_members(entry: str, references: list[str]) -> list[str]:
    """Resolve file references next to the entry file.

    The entry file comes first, the references follow in order. Names
    are relative to the entry file's directory.

    Args:
        entry: Absolute path of the probed file
        references: File names as written in the OME-XML

    Returns:
        Absolute normalized member paths without duplicates
    """
    directory = os.path.dirname(entry)
    members = [entry]
    for name in references:
        path = os.path.normpath(os.path.join(directory, name))
        if path not in members:
            members.append(path)
    return members
