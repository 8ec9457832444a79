"""Command-line interface for the fileset scanner.

This module provides the CLI entry point that scans one import
directory and triggers a downstream job for every fileset it finds.
"""

import argparse
import logging
import os
import sys

from .core.config import OutOfRootPolicy, ScanConfig, SubmitFailurePolicy
from .core.errors import ConfigurationError, SubmissionAborted, TraversalError
from .core.paths import canonical_path
from .registry import PlatformRegistry
from .scanner import ScanReport

logger = logging.getLogger("fileset_scanner")

EXIT_OK = 0
EXIT_FAILURE = 1


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr; stdout is reserved for sink output."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def default_import_id(directory: str) -> str:
    """Derive the import identifier from the scan directory.

    Import directories are named after their import, so the last path
    component is used.
    """
    return os.path.basename(canonical_path(directory))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fileset-scan",
        description="Find multi-file datasets in a directory and trigger one ingestion job per dataset",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print one JSON document per fileset
  fileset-scan imports/1234

  # Trigger a Step Functions execution per fileset
  fileset-scan imports/1234 --sink stepfunctions \\
      --state-machine-arn arn:aws:states:us-east-1:123456789012:stateMachine:ingest

  # POST to a webhook, stop at the first rejected fileset
  fileset-scan imports/1234 --sink http --endpoint https://workflow.example/filesets \\
      --on-submit-failure abort
        """,
    )

    parser.add_argument("directory", help="Directory to scan, relative to the working directory")
    parser.add_argument(
        "--import-id",
        help="Import identifier attached to every fileset (default: the directory name)",
    )
    parser.add_argument("--prober", default="ome-tiff", help="Prober to use (default: ome-tiff)")
    parser.add_argument("--sink", default="stdout", help="Sink to submit filesets to (default: stdout)")
    parser.add_argument("--endpoint", help="Webhook URL for the http sink")
    parser.add_argument("--token", help="Bearer token for the http sink")
    parser.add_argument("--state-machine-arn", help="State machine ARN for the stepfunctions sink")
    parser.add_argument("--region", help="AWS region for the stepfunctions sink")
    parser.add_argument(
        "--on-submit-failure",
        choices=[p.value for p in SubmitFailurePolicy],
        help="What to do when a submission fails (default: continue)",
    )
    parser.add_argument(
        "--submit-attempts",
        type=int,
        help="Attempts per fileset with --on-submit-failure retry (default: 3)",
    )
    parser.add_argument(
        "--out-of-root",
        choices=[p.value for p in OutOfRootPolicy],
        help="How to treat member files outside the scanned directory (default: keep)",
    )
    parser.add_argument(
        "--no-hidden",
        dest="include_hidden",
        action="store_const",
        const=False,
        help="Skip files and directories whose name starts with '.'",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every skipped file")
    return parser


def _sink_options(args: argparse.Namespace) -> dict:
    if args.sink == "http":
        return {"endpoint": args.endpoint, "token": args.token}
    if args.sink == "stepfunctions":
        return {"state_machine_arn": args.state_machine_arn, "region_name": args.region}
    return {}


def scan(args: argparse.Namespace) -> ScanReport:
    """Run a scan for parsed arguments.

    Raises:
        ConfigurationError: If the directory or the settings are invalid
        TraversalError: If a directory cannot be listed
        SubmissionAborted: If a submission fails under the abort policy
    """
    root = canonical_path(args.directory)
    if not os.path.exists(root):
        raise ConfigurationError(f"Path does not exist: {root}")
    if not os.path.isdir(root):
        raise ConfigurationError(f"Path is not a directory: {root}")

    config = ScanConfig.from_env().with_overrides(
        on_submit_failure=args.on_submit_failure,
        submit_attempts=args.submit_attempts,
        out_of_root=args.out_of_root,
        include_hidden=args.include_hidden,
    )

    scanner = PlatformRegistry.create_scanner(
        args.prober,
        args.sink,
        config=config,
        sink_options=_sink_options(args),
    )
    try:
        return scanner.scan(root, args.import_id or default_import_id(root))
    finally:
        scanner.sink.close()


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the scanner."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        report = scan(args)
    except ConfigurationError as e:
        logger.error("Error: %s", e)
        return EXIT_FAILURE
    except TraversalError as e:
        logger.error("Input/output error while scanning %s: %s", e.directory, e.cause or e)
        return EXIT_FAILURE
    except SubmissionAborted as e:
        logger.error("Scan aborted: %s", e)
        return EXIT_FAILURE

    logger.info(
        "Submitted %d of %d fileset(s) from %s",
        report.submitted,
        report.filesets,
        report.root,
    )
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
