"""
Single-pass CSV driver: header passthrough, then one row at a time through
validate -> Record -> Normalizer -> writer.

Every per-row problem is logged and recorded in the report; nothing short of
an unexpected exception stops the loop. The sink is flushed exactly once, on
the way out, whatever the exit path.
"""

from __future__ import annotations

import csv
import logging
from contextlib import contextmanager
from typing import Iterable, Iterator, List, Optional, TextIO

from .encoding import validate_fields
from .errors import NormalizationError, RecnormError, RowFormatError, WriteError
from .models import NormalizationReport, Record, ReportItem
from .normalize import Normalizer
from .rules import FIELD_COUNT, LINE_TERMINATOR, NORMALIZED_DELIMITER

logger = logging.getLogger(__name__)


class _LineTracker:
    """Wraps the source lines and remembers which ones the current row used."""

    def __init__(self, lines: Iterable[str]):
        self._lines = iter(lines)
        self.consumed: List[str] = []

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        line = next(self._lines)
        self.consumed.append(line)
        return line

    def take(self) -> str:
        raw = "".join(self.consumed).rstrip("\r\n")
        self.consumed = []
        return raw


@contextmanager
def flushing(sink: TextIO):
    """Yield a csv writer on `sink`; flush `sink` once on exit."""
    try:
        yield csv.writer(sink, delimiter=NORMALIZED_DELIMITER, lineterminator=LINE_TERMINATOR)
    finally:
        sink.flush()


class _Run:
    def __init__(self, writer, normalizer: Normalizer):
        self.writer = writer
        self.normalizer = normalizer
        self.report = NormalizationReport()

    def fail(self, exc: RecnormError, row: Optional[int], line: str, action: str = "dropped"):
        message = f'{exc.kind}: {exc} for line "{line}"'
        logger.error(message)
        self.report.errors.append(ReportItem(
            row=row,
            issue=exc.kind,
            value=line,
            message=message,
            action=action,
        ))

    def write(self, fields: List[str]) -> None:
        try:
            self.writer.writerow(fields)
        except (csv.Error, OSError, UnicodeError) as exc:
            raise WriteError(str(exc)) from exc

    def header(self, reader, lines: _LineTracker) -> None:
        try:
            header = next(reader)
        except StopIteration:
            self.fail(RowFormatError("no header row"), None, "", action="nothing_written")
            return
        except csv.Error as exc:
            self.fail(RowFormatError(f"error reading csv header: {exc}"), reader.line_num, lines.take(),
                      action="header_not_written")
            return
        raw = lines.take()

        if len(header) != FIELD_COUNT:
            self.fail(RowFormatError(f"header has {len(header)} fields, expected {FIELD_COUNT}"),
                      reader.line_num, raw, action="header_written")
        try:
            self.write(header)
        except WriteError as exc:
            self.fail(exc, reader.line_num, raw, action="header_not_written")
            return
        self.report.summary.header_written = True

    def row(self, fields: List[str], row: int, raw: str) -> None:
        summary = self.report.summary
        if not fields:
            summary.rows_skipped += 1
            return
        if len(fields) != FIELD_COUNT:
            summary.rows_failed += 1
            self.fail(RowFormatError(f"expected {FIELD_COUNT} fields, got {len(fields)}"), row, raw)
            return

        validate_fields(fields)
        rec = Record.from_fields(fields)
        try:
            self.normalizer.normalize(rec)
        except NormalizationError as exc:
            summary.rows_failed += 1
            self.fail(exc, row, NORMALIZED_DELIMITER.join(fields))
            return

        try:
            self.write(rec.to_fields())
        except WriteError as exc:
            summary.rows_failed += 1
            self.fail(exc, row, NORMALIZED_DELIMITER.join(fields))
            return
        summary.rows_written += 1


def normalize_stream(source: Iterable[str], sink: TextIO, normalizer: Normalizer) -> NormalizationReport:
    """
    Normalize every data row of `source` (CSV text lines) into `sink`.

    `source` should be opened with newline="" so quoted newlines survive.
    Returns the run report; diagnostics are also logged as they happen.
    """
    lines = _LineTracker(source)
    reader = csv.reader(lines, strict=True)

    with flushing(sink) as writer:
        run = _Run(writer, normalizer)
        run.header(reader, lines)

        while True:
            try:
                fields = next(reader)
            except StopIteration:
                break
            except csv.Error as exc:
                run.report.summary.rows_read += 1
                run.report.summary.rows_failed += 1
                run.fail(RowFormatError(str(exc)), reader.line_num, lines.take())
                continue
            run.report.summary.rows_read += 1
            run.row(fields, reader.line_num, lines.take())

    summary = run.report.summary
    logger.info(
        "read %d rows: %d written, %d failed, %d skipped",
        summary.rows_read, summary.rows_written, summary.rows_failed, summary.rows_skipped,
    )
    return run.report
