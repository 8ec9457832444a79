"""Path normalization relative to the scan root.

Member paths reported by a prober are absolute. Descriptors carry them
relative to the scan root, normalized and with forward slashes, so the
downstream job can rejoin them against its own view of the import
directory.
"""

import os
import posixpath
from pathlib import Path
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]


def canonical_path(path: PathLike) -> str:
    """Return an absolute, normalized form of a path.

    Redundant separators and ``.``/``..`` segments are collapsed. Symlinks
    are not resolved, so a linked file keeps the name it was found under.

    Args:
        path: Absolute or relative (to the working directory) path

    Returns:
        Absolute normalized path string
    """
    return os.path.normpath(os.path.abspath(os.fspath(path)))


def relativize(path: PathLike, root: PathLike) -> str:
    """Express a path relative to the scan root.

    Paths outside the root produce leading ``..`` segments. They are kept
    as they are; some datasets legitimately reference auxiliary files next
    to the import directory.

    Example:
        relativize("/data/imp/set/1.dat", "/data/imp") -> "set/1.dat"
        relativize("/data/shared/flat.tif", "/data/imp") -> "../shared/flat.tif"

    Args:
        path: Path to relativize (made absolute first if relative)
        root: Scan root directory

    Returns:
        Normalized relative path using ``/`` as separator
    """
    relative = os.path.relpath(canonical_path(path), canonical_path(root))
    return posixpath.normpath(Path(relative).as_posix())


def is_within(path: PathLike, root: PathLike) -> bool:
    """Check whether a path lies inside the scan root (lexically)."""
    root_path = Path(canonical_path(root))
    return Path(canonical_path(path)).is_relative_to(root_path)
