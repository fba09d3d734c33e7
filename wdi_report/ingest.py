"""
wdi_report.ingest - Build a Report from the lines of a data file.

Two-state ingestion machine over a lazy sequence of lines:

    AwaitingHeader: skip lines until one whose first field is
                    "Country Name"; its fields [4:] become Report.years.
    Ingesting:      every later line becomes an Indicator, unless it has
                    fewer than len(years) + 4 fields, in which case it is
                    logged and dropped.

Design contract:
    - Lines are consumed once, in order. Each line is fully processed
      before the next one is requested.
    - The cancel token is checked before every line. A cancelled read
      raises ReadInterrupted and the partial Report is never returned.
    - read_data_file() maps SIGINT to "interrupted" and SIGTSTP to
      "stopped" for the duration of the read, then restores the previous
      handlers.
    - File errors (OSError) propagate unchanged.
    - Header year labels are read by their leading digits ("1980 [YR1980]"
      -> 1980). A column whose label has none is logged and left out of
      Indicator.values; the row-length check still counts it.
"""

from __future__ import annotations

import logging
import re
import signal
import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path

from wdi_report.constants import (
    FILE_ENCODING,
    FIXED_COLUMNS,
    HEADER_MARKER,
    REASON_INTERRUPTED,
    REASON_STOPPED,
)
from wdi_report.line_parser import parse_line
from wdi_report.models import Indicator, Report

logger = logging.getLogger("wdi.ingest")


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class ReadInterrupted(Exception):
    """Raised when a read is cancelled before end of input."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Read {reason} before end of input.")


# ---------------------------------------------------------------------------
# Cancellation
# ---------------------------------------------------------------------------


class CancelToken:
    """Records the first cancellation request. Checked between lines."""

    def __init__(self) -> None:
        self.reason: str | None = None

    @property
    def cancelled(self) -> bool:
        return self.reason is not None

    def cancel(self, reason: str) -> None:
        # Keep the first reason; a second signal does not overwrite it.
        if self.reason is None:
            self.reason = reason

    def raise_if_cancelled(self) -> None:
        if self.reason is not None:
            raise ReadInterrupted(self.reason)


def _signal_reasons() -> dict[int, str]:
    """Map available signal numbers to cancellation reasons."""
    reasons = {signal.SIGINT: REASON_INTERRUPTED}
    sigtstp = getattr(signal, "SIGTSTP", None)
    if sigtstp is not None:
        reasons[sigtstp] = REASON_STOPPED
    return reasons


@contextmanager
def cancel_on_signals(token: CancelToken) -> Iterator[CancelToken]:
    """Route SIGINT/SIGTSTP into token while the block runs.

    Signal handlers can only be installed from the main thread; elsewhere
    the token is yielded unchanged and only explicit cancel() calls apply.
    """
    if threading.current_thread() is not threading.main_thread():
        yield token
        return

    previous: dict[int, object] = {}
    for signum, reason in _signal_reasons().items():
        previous[signum] = signal.signal(
            signum,
            lambda _signum, _frame, reason=reason: token.cancel(reason),
        )
    try:
        yield token
    finally:
        for signum, handler in previous.items():
            # None means the old handler was not set from Python.
            signal.signal(signum, handler if handler is not None else signal.SIG_DFL)


# ---------------------------------------------------------------------------
# Ingestion
# ---------------------------------------------------------------------------


_YEAR_PREFIX = re.compile(r"\s*([+-]?\d+)")


def parse_year_label(label: str) -> int | None:
    """Parse the leading integer of a header year label.

    "1980" and "1980 [YR1980]" both give 1980. Labels without leading
    digits (including "") give None.
    """
    match = _YEAR_PREFIX.match(label)
    if match is None:
        return None
    return int(match.group(1))


def _year_keys(years: list[str]) -> list[int | None]:
    keys = [parse_year_label(label) for label in years]
    for label, key in zip(years, keys):
        if key is None:
            logger.warning("Header column '%s' is not a year; its cells are skipped", label)
    return keys


def _build_indicator(cols: list[str], year_keys: list[int | None]) -> Indicator:
    indicator = Indicator(
        country=cols[0],
        country_code=cols[1],
        name=cols[2],
        code=cols[3],
    )
    for index, year in enumerate(year_keys, FIXED_COLUMNS):
        if year is not None:
            indicator.values[year] = cols[index]
    return indicator


def build_report(
    lines: Iterable[str],
    cancel: CancelToken | None = None,
) -> Report:
    """Run the ingestion machine over lines and return the completed Report.

    Args:
        lines: Raw lines, with or without trailing newlines.
        cancel: Optional token checked before each line.

    Returns:
        Report with years, indicators and the count of dropped rows.

    Raises:
        ReadInterrupted: if cancel is triggered before end of input.
    """
    report = Report()
    year_keys: list[int | None] = []
    got_header = False

    for raw in lines:
        if cancel is not None:
            cancel.raise_if_cancelled()

        line = raw.rstrip("\r\n")
        cols = parse_line(line)

        if not got_header:
            if cols[0] == HEADER_MARKER:
                got_header = True
                report.years.extend(cols[FIXED_COLUMNS:])
                year_keys = _year_keys(report.years)
                logger.debug("Header found with %d year columns", len(report.years))
            continue

        if len(cols) < len(report.years) + FIXED_COLUMNS:
            logger.warning("ignored invalid line : %s", line)
            report.dropped_rows += 1
            continue

        report.add_indicator(_build_indicator(cols, year_keys))

    if cancel is not None:
        cancel.raise_if_cancelled()

    if not got_header:
        logger.warning("No '%s' header line found; report is empty", HEADER_MARKER)

    return report


def read_data_file(
    file_path: str | Path,
    cancel: CancelToken | None = None,
) -> Report:
    """Read a data file line by line into a Report.

    SIGINT and SIGTSTP received during the read cancel it.

    Raises:
        OSError: if the file cannot be opened or read.
        ReadInterrupted: if the read is cancelled.
    """
    token = cancel if cancel is not None else CancelToken()
    path = Path(file_path)

    with cancel_on_signals(token), open(path, encoding=FILE_ENCODING) as fh:
        report = build_report(fh, token)

    logger.info(
        "Loaded %s: %d years, %d indicators, %d invalid lines ignored",
        path.name, len(report.years), len(report.indicators), report.dropped_rows,
    )
    return report
