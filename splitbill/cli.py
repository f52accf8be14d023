"""
Command Line Interface

    splitbill --input=bill.json --output=result.json
    splitbill --input=bills/ --output=results/

A file input is split into the output file. A directory input has every
bill file split into the output directory under the same name; a bad file
is reported and skipped.

Exit statuses come from the SplitterError raised (see splitbill.errors).
"""

import argparse
import sys
from typing import Optional, Sequence

from splitbill import __version__
from splitbill.audit import configure_logging, create_correlation_id
from splitbill.config import get_settings
from splitbill.errors import ArgumentError, BillFormatError, SplitterError
from splitbill.models.bill import BillOutput
from splitbill.models.report import BatchReport
from splitbill.orchestrator import create_app_components


EXIT_OK = 0
EXIT_UNEXPECTED = 1


class _RaisingArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises ArgumentError instead of exiting."""

    def error(self, message: str):
        raise ArgumentError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _RaisingArgumentParser(
        prog="splitbill",
        description="Split a restaurant bill between the people who shared it.",
    )
    parser.add_argument(
        "--input",
        required=True,
        help="Bill JSON file, or a directory of bill JSON files",
    )
    parser.add_argument(
        "--output",
        required=True,
        help="Result JSON file, or a directory for batch results",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def _print_result(result, input_path: str, output_path: str) -> None:
    if isinstance(result, BatchReport):
        if result.processed == 0:
            print(f"No JSON files found in {input_path}")
            return
        print(
            f"Batch complete: {result.processed} files processed, "
            f"{len(result.succeeded)} succeeded, {result.failed_count} failed"
        )
        for failure in result.failures:
            print(f"  {failure.file}: [{failure.error_kind}] {failure.message}", file=sys.stderr)
    elif isinstance(result, BillOutput):
        print(f"Processed {input_path} -> {output_path}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run the CLI and return the process exit status.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])
    """
    settings = get_settings()
    configure_logging(settings.logging)

    _, processor = create_app_components(correlation_id=create_correlation_id())

    try:
        args = build_parser().parse_args(argv)
        if not args.input or not args.output:
            raise ArgumentError("--input and --output must not be empty")
        result = processor.run(args.input, args.output)
    except BillFormatError as e:
        print(f"Error: {e}", file=sys.stderr)
        summary = e.issue_summary()
        if summary:
            print(summary, file=sys.stderr)
        return e.exit_code
    except SplitterError as e:
        print(f"Error: {e}", file=sys.stderr)
        return e.exit_code
    except Exception as e:
        processor.audit_logger.log_error(
            error_type=type(e).__name__,
            error_message=str(e),
        )
        print(f"Unexpected error: {e}", file=sys.stderr)
        return EXIT_UNEXPECTED

    _print_result(result, args.input, args.output)
    return EXIT_OK


def run() -> None:
    """Console script entry point."""
    sys.exit(main())
