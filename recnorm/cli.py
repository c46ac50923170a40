"""
Command line filter: CSV on stdin, normalized CSV on stdout, diagnostics on stderr.

Exit status is 0 even when rows were dropped, unless --fail-on-error is
given (then 1). A missing time zone at startup exits with 2.
"""

from __future__ import annotations

import argparse
import io
import logging
import sys
from typing import BinaryIO, List, Optional

from . import settings
from .encoding import decode_input
from .errors import StartupError
from .normalize import Normalizer
from .pipeline import normalize_stream
from .rules import INPUT_ENCODING, OUTPUT_ENCODING
from .setup_logging import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="recnorm",
        description="Normalize timestamp, duration, zip and name columns of a CSV read from stdin.",
    )
    parser.add_argument(
        "--detect-encoding",
        action="store_true",
        default=settings.DETECT_ENCODING,
        help="Guess the input encoding instead of assuming UTF-8 (reads all input first)",
    )
    parser.add_argument(
        "--fail-on-error",
        action="store_true",
        default=settings.FAIL_ON_ERROR,
        help="Exit with status 1 if any row was dropped",
    )
    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        help=f"Diagnostic log level (default: {settings.LOG_LEVEL})",
    )
    return parser


def main(argv: Optional[List[str]] = None, stdin: Optional[BinaryIO] = None,
         stdout: Optional[BinaryIO] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        normalizer = Normalizer.from_zone_names()
    except StartupError as exc:
        logger.critical("cannot start: %s", exc)
        return 2

    stdin = stdin if stdin is not None else sys.stdin.buffer
    stdout = stdout if stdout is not None else sys.stdout.buffer

    if args.detect_encoding:
        text, used = decode_input(stdin.read(), detect_encoding=True)
        logger.info("decoding input as %s", used)
        source = io.StringIO(text, newline="")
    else:
        source = io.TextIOWrapper(stdin, encoding=INPUT_ENCODING, errors="surrogateescape", newline="")
    sink = io.TextIOWrapper(stdout, encoding=OUTPUT_ENCODING, errors="surrogateescape", newline="")

    try:
        report = normalize_stream(source, sink, normalizer)
    finally:
        # hand the byte streams back without closing them
        sink.detach()
        if isinstance(source, io.TextIOWrapper):
            source.detach()

    if args.fail_on_error and report.summary.rows_failed:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
