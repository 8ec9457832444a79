"""Deterministic directory traversal.

The walk is depth-first. Inside each directory the entries are sorted
lexicographically by name, and files and subdirectories are interleaved
in that order: a subdirectory is fully walked at its sorted position
before the next sibling entry is considered. Directories themselves are
never yielded.
"""

import logging
import os
from collections.abc import Callable, Iterator

from .core.errors import TraversalError
from .core.paths import PathLike, canonical_path

logger = logging.getLogger(__name__)

# Signature of a traversal function accepted by Scanner
Walker = Callable[[str], Iterator[str]]


def _list_entries(directory: str) -> list[os.DirEntry[str]]:
    try:
        with os.scandir(directory) as it:
            return sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        raise TraversalError(directory, e) from e


def walk_files(
    root: PathLike,
    *,
    include_hidden: bool = True,
    follow_symlinks: bool = False,
) -> Iterator[str]:
    """Yield every regular file under ``root`` in traversal order.

    Args:
        root: Directory to walk
        include_hidden: Visit entries whose name starts with "."
        follow_symlinks: Visit symlinked files and descend into symlinked
            directories. Off by default, which also rules out cycles.

    Yields:
        Absolute canonical file paths

    Raises:
        TraversalError: If a directory's entries cannot be listed
    """
    stack: list[Iterator[os.DirEntry[str]]] = [iter(_list_entries(canonical_path(root)))]

    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue

        if not include_hidden and entry.name.startswith("."):
            continue

        try:
            is_link = entry.is_symlink()
            if is_link and not follow_symlinks:
                logger.debug("Skipping symlink %s", entry.path)
                continue
            is_dir = entry.is_dir(follow_symlinks=follow_symlinks)
            is_file = not is_dir and entry.is_file(follow_symlinks=follow_symlinks)
        except OSError as e:
            # The entry vanished or cannot be stat'ed; it is not a file we can visit
            logger.warning("Cannot stat %s: %s", entry.path, e)
            continue

        if is_dir:
            stack.append(iter(_list_entries(entry.path)))
        elif is_file:
            yield canonical_path(entry.path)


def make_walker(*, include_hidden: bool = True, follow_symlinks: bool = False) -> Walker:
    """Bind traversal options into a one-argument walker."""

    def walker(root: str) -> Iterator[str]:
        return walk_files(root, include_hidden=include_hidden, follow_symlinks=follow_symlinks)

    return walker
