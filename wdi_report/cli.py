"""
wdi_report.cli - Command-line entry point.

Usage:
    wdi-report <data file path>
    python -m wdi_report <data file path>

Reads the data file, sorts indicators by code, and prints the answers to
the two canned questions on stdout. Diagnostics go to stderr via logging.

Exit codes:
    0: Both questions answered.
    1: Data file could not be read or is not valid UTF-8.
    2: Wrong number of arguments.
    3: A canned indicator has no rows in the file.
    4: Read interrupted (SIGINT) or stopped (SIGTSTP).
"""

from __future__ import annotations

import argparse
import logging
import sys

from wdi_report.constants import (
    CO2_INDICATOR,
    EXIT_FILE_ERROR,
    EXIT_INTERRUPTED,
    EXIT_NO_MATCHING_INDICATOR,
    EXIT_OK,
    URBAN_GROWTH_END_YEAR,
    URBAN_GROWTH_INDICATOR,
    URBAN_GROWTH_START_YEAR,
)
from wdi_report.ingest import ReadInterrupted, read_data_file
from wdi_report.queries import HighestAverageQuery, HighestYearQuery, NoMatchingIndicator

logger = logging.getLogger("wdi.cli")

CANNED_QUERIES: tuple[HighestAverageQuery | HighestYearQuery, ...] = (
    HighestAverageQuery(
        indicator_name=URBAN_GROWTH_INDICATOR,
        start_year=URBAN_GROWTH_START_YEAR,
        end_year=URBAN_GROWTH_END_YEAR,
    ),
    HighestYearQuery(indicator_name=CO2_INDICATOR),
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wdi-report",
        usage="%(prog)s <data file path>",
        description="Answer canned questions about a World Development Indicators CSV file.",
        epilog="Example: wdi-report data.csv",
    )
    parser.add_argument(
        "data_file",
        help="Path to the indicator CSV file.",
    )
    return parser


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    """Run the report. Returns exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging()

    try:
        report = read_data_file(args.data_file)
    except ReadInterrupted as exc:
        logger.error("Aborted: %s", exc)
        return EXIT_INTERRUPTED
    except OSError as exc:
        logger.error("Cannot read %s: %s", args.data_file, exc)
        return EXIT_FILE_ERROR
    except UnicodeDecodeError as exc:
        logger.error("Cannot decode %s: %s", args.data_file, exc)
        return EXIT_FILE_ERROR

    report.sort_by("code")

    for query in CANNED_QUERIES:
        try:
            result = query.run(report)
        except NoMatchingIndicator as exc:
            logger.error("%s", exc)
            return EXIT_NO_MATCHING_INDICATOR
        print(query.describe(result))

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
