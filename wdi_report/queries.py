"""
wdi_report.queries - Aggregation queries over a completed Report.

Pure-computation module. No I/O. Neither function mutates the Report.

    country_of_highest_average_between_years()
        Country whose summed values over [start_year, end_year] are highest.
        Countries with a gap inside the range are never preferred over a
        complete one. Ties go to the later row (>=).

    year_of_highest_among_all_countries()
        Year whose cross-country average is highest. Years where every
        country has a gap keep an average of 0 and still compete.
        Years are compared in ascending order and ties go to the later
        year (>=).

"No data" is an empty cell, a year outside the header, or a cell that
does not parse as a float. Treating unparsable cells such as ".." as
gaps differs from a plain float parse, which would let a NaN total
stick to whichever row got it first.

Both functions raise NoMatchingIndicator when no row carries the
requested indicator name.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pydantic import BaseModel, Field, field_validator, model_validator

from wdi_report.models import Indicator, Report

logger = logging.getLogger("wdi.queries")


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class NoMatchingIndicator(Exception):
    """Raised when a query's indicator name matches no rows."""

    def __init__(self, indicator_name: str) -> None:
        self.indicator_name = indicator_name
        super().__init__(f"no data for indicator '{indicator_name}'")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _numeric(raw: str | None) -> float | None:
    """Parse a raw cell. None for empty, missing or non-numeric cells."""
    if raw is None or raw == "":
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def _matching_or_raise(report: Report, indicator_name: str) -> list[Indicator]:
    matches = report.matching(indicator_name)
    if not matches:
        raise NoMatchingIndicator(indicator_name)
    return matches


def range_total(indicator: Indicator, start_year: int, end_year: int) -> float | None:
    """Sum indicator values over start_year..end_year inclusive.

    Returns None as soon as a year has no data; the partial sum is discarded.
    """
    total = 0.0
    for year in range(start_year, end_year + 1):
        value = _numeric(indicator.values.get(year))
        if value is None:
            return None
        total += value
    return total


# ---------------------------------------------------------------------------
# Country with the highest total over a year range
# ---------------------------------------------------------------------------


def _pick(
    winner: Indicator,
    candidate: Indicator,
    start_year: int,
    end_year: int,
) -> Indicator:
    candidate_total = range_total(candidate, start_year, end_year)
    if candidate_total is None:
        return winner

    winner_total = range_total(winner, start_year, end_year)
    if winner_total is None:
        return candidate

    return candidate if candidate_total >= winner_total else winner


def country_of_highest_average_between_years(
    report: Report,
    indicator_name: str,
    start_year: int,
    end_year: int,
) -> str:
    """Return the country with the highest total for indicator_name.

    Raises:
        NoMatchingIndicator: if no row has this indicator name.
    """
    first, *rest = _matching_or_raise(report, indicator_name)
    winner = first
    for candidate in rest:
        winner = _pick(winner, candidate, start_year, end_year)

    logger.debug(
        "Highest %s over %d-%d: %s (%s)",
        indicator_name, start_year, end_year, winner.country, winner.country_code,
    )
    return winner.country


# ---------------------------------------------------------------------------
# Year with the highest cross-country average
# ---------------------------------------------------------------------------


@dataclass
class YearAverage:
    """Running per-year accumulator."""

    total: float = 0.0
    count: int = 0
    avg: float = 0.0

    def add(self, value: float) -> None:
        self.total += value
        self.count += 1
        self.avg = self.total / self.count


def year_averages(report: Report, indicator_name: str) -> dict[int, YearAverage]:
    """Accumulate total, count and average per year across matching rows.

    Every year seen in a matching row gets an entry, even when all its
    cells are empty (count 0, avg 0).

    Raises:
        NoMatchingIndicator: if no row has this indicator name.
    """
    averages: dict[int, YearAverage] = {}
    for indicator in _matching_or_raise(report, indicator_name):
        for year, raw in indicator.values.items():
            entry = averages.setdefault(year, YearAverage())
            value = _numeric(raw)
            if value is None:
                continue
            entry.add(value)
    return averages


def year_of_highest_among_all_countries(report: Report, indicator_name: str) -> str:
    """Return the year label with the highest average for indicator_name.

    Raises:
        NoMatchingIndicator: if no row has this indicator name.
    """
    averages = year_averages(report, indicator_name)

    best: int | None = None
    for year in sorted(averages):
        if best is None or averages[year].avg >= averages[best].avg:
            best = year

    # A matching row with no year columns leaves nothing to choose from.
    if best is None:
        raise NoMatchingIndicator(indicator_name)

    logger.debug(
        "Highest averaged %s: %d (avg=%s over %d countries)",
        indicator_name, best, averages[best].avg, averages[best].count,
    )
    return str(best)


# ---------------------------------------------------------------------------
# Query models - validated parameters for the canned questions
# ---------------------------------------------------------------------------


class HighestAverageQuery(BaseModel):
    """Which country has the highest indicator total over a year range."""

    model_config = {"frozen": True}

    indicator_name: str = Field(..., description="Exact indicator name to match.")
    start_year: int = Field(..., description="First year, inclusive.")
    end_year: int = Field(..., description="Last year, inclusive.")

    @field_validator("indicator_name")
    @classmethod
    def _non_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("indicator_name must not be blank.")
        return v

    @model_validator(mode="after")
    def _ordered_range(self) -> HighestAverageQuery:
        if self.start_year > self.end_year:
            raise ValueError(
                f"start_year ({self.start_year}) must not exceed end_year ({self.end_year})."
            )
        return self

    def run(self, report: Report) -> str:
        return country_of_highest_average_between_years(
            report, self.indicator_name, self.start_year, self.end_year,
        )

    def describe(self, result: str) -> str:
        return (
            f"The country with the highest average {self.indicator_name} "
            f"between {self.start_year} and {self.end_year} : {result}"
        )


class HighestYearQuery(BaseModel):
    """Which year has the highest indicator average across countries."""

    model_config = {"frozen": True}

    indicator_name: str = Field(..., description="Exact indicator name to match.")

    @field_validator("indicator_name")
    @classmethod
    def _non_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("indicator_name must not be blank.")
        return v

    def run(self, report: Report) -> str:
        return year_of_highest_among_all_countries(report, self.indicator_name)

    def describe(self, result: str) -> str:
        return f"The year with the highest averaged {self.indicator_name} : {result}"
