"""OME-TIFF prober.

This module provides a Prober implementation backed by tifffile. Plain
TIFF files are single-file datasets. OME-TIFF files and ``.companion.ome``
metadata files pull in every TIFF file their OME-XML references.
"""

import logging
import os

import tifffile

from ...core.errors import FormatError
from ...probers.base import Prober, ProbeResult, Readable
from .ome import OmeLayout, parse_ome_xml, resolve_members

logger = logging.getLogger(__name__)

COMPANION_SUFFIX = ".companion.ome"

TIFF_FORMAT = "TIFF"
OME_TIFF_FORMAT = "OME-TIFF"
TIFF_VERSION = "6.0"
BIGTIFF_VERSION = "BigTIFF"


class OmeTiffProber(Prober):
    """Prober for TIFF, OME-TIFF and OME companion files.

    Example:
        >>> prober = OmeTiffProber()
        >>> result = prober.probe('/data/imports/1234/plate_0.ome.tif')
        >>> result.member_files[0]
        '/data/imports/1234/plate_0.ome.tif'
    """

    name = "ome-tiff"
    software = "tifffile"

    def probe(self, path: str) -> ProbeResult:
        """Probe one file.

        Raises:
            FormatError: If the file is not a TIFF file or companion file
        """
        if path.lower().endswith(COMPANION_SUFFIX):
            return self._probe_companion(path)
        return self._probe_tiff(path)

    def _probe_tiff(self, path: str) -> ProbeResult:
        try:
            # The handle is released before the OME-XML is interpreted
            with tifffile.TiffFile(path) as tif:
                ome_xml = tif.ome_metadata if tif.is_ome else None
                version = BIGTIFF_VERSION if tif.is_bigtiff else TIFF_VERSION
        except tifffile.TiffFileError as e:
            raise FormatError(f"Not a TIFF file: {e}") from e

        if not ome_xml:
            return Readable((path,), TIFF_FORMAT, version)

        try:
            layout = parse_ome_xml(ome_xml)
        except FormatError as e:
            logger.warning("Ignoring unusable OME-XML in %s: %s", path, e)
            return Readable((path,), TIFF_FORMAT, version)

        if layout.metadata_file:
            return self._probe_binary_only(path, layout.metadata_file, layout.schema_version)

        return Readable(
            tuple(resolve_members(path, list(layout.data_files))),
            OME_TIFF_FORMAT,
            layout.schema_version,
        )

    def _probe_binary_only(self, path: str, metadata_file: str, schema_version: str) -> ProbeResult:
        """Collect the whole dataset a binary-only OME-TIFF belongs to.

        The full OME-XML lives in the companion file, which lists every
        TIFF file of the dataset. The probed file comes first, then the
        companion, then the companion's data files.
        """
        companion = os.path.normpath(os.path.join(os.path.dirname(path), metadata_file))
        if companion == path:
            return Readable((path,), OME_TIFF_FORMAT, schema_version)
        try:
            layout = self._read_companion(companion)
        except FormatError as e:
            logger.warning("Cannot follow companion file of %s: %s", path, e)
            return Readable((path, companion), OME_TIFF_FORMAT, schema_version)

        members = [path]
        for member in resolve_members(companion, list(layout.data_files)):
            if member not in members:
                members.append(member)
        return Readable(tuple(members), OME_TIFF_FORMAT, layout.schema_version)

    def _probe_companion(self, path: str) -> ProbeResult:
        layout = self._read_companion(path)

        return Readable(
            tuple(resolve_members(path, list(layout.data_files))),
            OME_TIFF_FORMAT,
            layout.schema_version,
        )

    def _read_companion(self, path: str) -> OmeLayout:
        try:
            with open(path, "rb") as f:
                layout = parse_ome_xml(f.read())
        except OSError as e:
            raise FormatError(f"Cannot read companion file: {e}") from e

        if not layout.data_files:
            raise FormatError("Companion file references no TIFF files")
        return layout
