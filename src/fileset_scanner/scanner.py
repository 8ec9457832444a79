"""Scan-and-claim traversal.

This module contains the scanner that walks a directory tree, probes
every unclaimed file, claims the member files of each dataset it
discovers and submits exactly one descriptor per dataset.

Claiming happens before submission, one probed path at a time. That
ordering is what keeps filesets disjoint: the claim for fileset N is
committed before any file of fileset N+1 is considered.
"""

import logging
import os
from dataclasses import dataclass, field

from jsonschema import ValidationError
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .core.config import OutOfRootPolicy, ScanConfig, SubmitFailurePolicy
from .core.errors import ConfigurationError, FormatError, SubmissionAborted, SubmissionError
from .core.paths import PathLike, canonical_path, is_within
from .core.validator import validate_document
from .ledger import ClaimLedger
from .probers.base import Prober, ProbeResult, Unreadable
from .sinks.base import Sink
from .submission import FilesetDescriptor, SubmissionBuilder
from .traversal import Walker, make_walker

logger = logging.getLogger(__name__)


@dataclass
class ScanReport:
    """Outcome of one scan.

    Every visited path ends in exactly one of: skipped because claimed,
    unreadable (including prober contract violations), submitted or
    failed. ``submitted`` is the best-effort count of triggered filesets.
    """

    root: str
    import_id: str
    visited: int = 0
    probed: int = 0
    skipped_claimed: int = 0
    unreadable: int = 0
    contract_violations: int = 0
    submitted: int = 0
    failed: int = 0
    submission_ids: list[str] = field(default_factory=list)
    failed_filesets: list[FilesetDescriptor] = field(default_factory=list)

    @property
    def filesets(self) -> int:
        """Number of filesets discovered, whether or not submission worked."""
        return self.submitted + self.failed


class Scanner:
    """Walks a directory tree and triggers one job per discovered fileset.

    The prober, sink and traversal are injected so each can be replaced,
    for instance by fakes in tests.

    Example:
        >>> from fileset_scanner import PlatformRegistry
        >>> scanner = PlatformRegistry.create_scanner('ome-tiff', 'stdout')
        >>> submitted = scanner.run('/data/imports/1234', import_id='1234')
    """

    def __init__(
        self,
        prober: Prober,
        sink: Sink,
        config: ScanConfig | None = None,
        builder: SubmissionBuilder | None = None,
        walker: Walker | None = None,
    ):
        """Initialize the scanner.

        Args:
            prober: Decides which files open a dataset
            sink: Receives one descriptor per discovered dataset
            config: Scan settings (defaults to ScanConfig())
            builder: Descriptor builder (defaults to one labelled with the
                prober's software name)
            walker: Traversal function yielding absolute file paths for a
                root. Defaults to the deterministic filesystem walk; when
                given, the root is not required to exist on disk.
        """
        self.prober = prober
        self.sink = sink
        self.config = config if config is not None else ScanConfig()
        self.builder = builder or SubmissionBuilder(reader_software=prober.software)
        self._custom_walker = walker is not None
        self.walker: Walker = walker or make_walker(
            include_hidden=self.config.include_hidden,
            follow_symlinks=self.config.follow_symlinks,
        )

    def run(self, root: PathLike, import_id: str) -> int:
        """Scan a tree and return the number of filesets submitted."""
        return self.scan(root, import_id).submitted

    def scan(self, root: PathLike, import_id: str) -> ScanReport:
        """Scan a tree and report what happened to every visited file.

        Each call starts with an empty claim ledger, so scanning an
        unchanged tree twice yields the same descriptors both times.

        Args:
            root: Directory to scan
            import_id: Identifier attached to every descriptor

        Returns:
            ScanReport with per-outcome counters

        Raises:
            ConfigurationError: If the root is not a directory or the
                import id is empty
            TraversalError: If a directory cannot be listed
            SubmissionAborted: If a submission fails under the abort policy
        """
        if not import_id:
            raise ConfigurationError("An import identifier is required")

        root_path = canonical_path(root)
        if not self._custom_walker and not os.path.isdir(root_path):
            raise ConfigurationError(f"Scan root is not a directory: {root_path}")

        ledger = ClaimLedger()
        report = ScanReport(root=root_path, import_id=import_id)
        logger.info("Scanning %s for import %s", root_path, import_id)

        for path in self.walker(root_path):
            report.visited += 1
            self._visit(canonical_path(path), root_path, ledger, report)

        logger.info(
            "Scan of %s finished: %d files visited, %d probed, %d filesets submitted, %d failed",
            root_path,
            report.visited,
            report.probed,
            report.submitted,
            report.failed,
        )
        return report

    def _visit(self, path: str, root: str, ledger: ClaimLedger, report: ScanReport) -> None:
        if ledger.contains(path):
            report.skipped_claimed += 1
            logger.debug("Skipping %s: already claimed", path)
            return

        report.probed += 1
        result = self._probe(path)

        if isinstance(result, Unreadable):
            report.unreadable += 1
            logger.info("File not readable: %s%s", path, f" ({result.reason})" if result.reason else "")
            return

        if not result.member_files:
            report.unreadable += 1
            report.contract_violations += 1
            logger.error(
                "Prober %s reported a readable %s dataset at %s with no member files; "
                "treating it as unreadable",
                type(self.prober).__name__,
                result.format_id,
                path,
            )
            return

        # Members claimed by an earlier fileset stay with that fileset
        members = [m for m in result.member_files if not ledger.contains(m)]
        if len(members) < len(result.member_files):
            logger.warning(
                "%d member(s) of the dataset at %s already belong to another fileset; "
                "leaving them out",
                len(result.member_files) - len(members),
                path,
            )

        ledger.claim_all([path, *members])
        if not members:
            report.unreadable += 1
            logger.warning("Dataset at %s has no unclaimed member files; nothing to submit", path)
            return

        descriptor = self.builder.build(
            report.import_id, members, result.format_id, result.format_version, root
        )
        self._handle(descriptor, members, root, report)

    def _probe(self, path: str) -> ProbeResult:
        try:
            return self.prober.probe(path)
        except FormatError as e:
            return Unreadable(str(e))
        except Exception as e:
            # A broken file must not stop the scan of the rest of the tree
            logger.warning("Prober failed on %s: %s", path, e, exc_info=True)
            return Unreadable(f"prober error: {e}")

    def _handle(
        self,
        descriptor: FilesetDescriptor,
        members: list[str],
        root: str,
        report: ScanReport,
    ) -> None:
        outside = [m for m in members if not is_within(m, root)]
        if outside:
            policy = self.config.out_of_root
            if policy is OutOfRootPolicy.REJECT:
                self._record_failure(
                    descriptor,
                    f"{len(outside)} member(s) outside the scan root, e.g. {outside[0]}",
                    report,
                )
                return
            if policy is OutOfRootPolicy.WARN:
                logger.warning(
                    "Fileset %s references %d file(s) outside %s: %s",
                    descriptor.entry_point,
                    len(outside),
                    root,
                    ", ".join(outside),
                )

        try:
            if self.config.validate_documents:
                validate_document(descriptor.to_document())
            submission_id = self._submit(descriptor)
        except (SubmissionError, ValidationError) as e:
            self._fail(descriptor, e, report)
            return
        except Exception as e:
            logger.debug("Unexpected sink error", exc_info=True)
            self._fail(descriptor, e, report)
            return

        report.submitted += 1
        report.submission_ids.append(submission_id)
        logger.info(
            "Submitted fileset %s (%d files, %s %s): %s",
            descriptor.entry_point,
            len(descriptor.files),
            descriptor.format_id,
            descriptor.format_version,
            submission_id,
        )

    def _submit(self, descriptor: FilesetDescriptor) -> str:
        if self.config.on_submit_failure is not SubmitFailurePolicy.RETRY:
            return self.sink.submit(descriptor)

        retrying = Retrying(
            stop=stop_after_attempt(self.config.submit_attempts),
            wait=wait_exponential(multiplier=1, max=self.config.retry_wait_max),
            retry=retry_if_exception_type(SubmissionError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        return retrying(self.sink.submit, descriptor)

    def _fail(self, descriptor: FilesetDescriptor, error: BaseException, report: ScanReport) -> None:
        self._record_failure(descriptor, str(error), report)
        if self.config.on_submit_failure is SubmitFailurePolicy.ABORT:
            raise SubmissionAborted(descriptor, error) from error

    def _record_failure(self, descriptor: FilesetDescriptor, reason: str, report: ScanReport) -> None:
        report.failed += 1
        report.failed_filesets.append(descriptor)
        logger.error(
            "Fileset %s was not submitted: %s. Its %d file(s) stay claimed for this run "
            "and will only be picked up again by a rescan.",
            descriptor.entry_point,
            reason,
            len(descriptor.files),
        )
