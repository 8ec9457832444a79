"""Claim ledger: files already attributed to a discovered fileset."""

import os
from collections.abc import Iterable, Iterator

from .core.paths import PathLike, canonical_path


class ClaimLedger:
    """Set of absolute file paths claimed during one scan.

    Claims are permanent for the lifetime of the ledger; there is no
    removal operation. Paths are canonicalized on insert and lookup so
    ``/a/./b`` and ``/a/b`` are the same claim.

    The ledger is not thread-safe. A single scanner owns it and performs
    every ``contains``/``claim_all`` pair for a probed path before moving
    on to the next path.
    """

    def __init__(self) -> None:
        self._claimed: set[str] = set()

    def contains(self, path: PathLike) -> bool:
        """Check whether a path has already been claimed."""
        return canonical_path(path) in self._claimed

    def claim_all(self, paths: Iterable[PathLike]) -> int:
        """Claim every path. Already-claimed paths are ignored.

        Args:
            paths: Paths to claim

        Returns:
            Number of paths that were not claimed before
        """
        before = len(self._claimed)
        self._claimed.update(canonical_path(p) for p in paths)
        return len(self._claimed) - before

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, os.PathLike)):
            return False
        return self.contains(path)

    def __len__(self) -> int:
        return len(self._claimed)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._claimed))
