"""
wdi_report.models - In-memory model of a loaded indicator file.

Indicator is one country+indicator row. Report is the whole file:
the header's year labels plus every ingested row in file order.

Design contract:
    - Indicator.values is keyed by int(year) and holds the raw cell text.
      An empty string means "no data" for that year.
    - Report.indicators keeps duplicates and insertion order.
    - After ingestion the model is read-only, except for sort_by().
"""

from __future__ import annotations

from dataclasses import dataclass, field

from wdi_report.constants import SORT_FIELDS


@dataclass
class Indicator:
    """One data row: a single indicator for a single country."""

    country: str
    country_code: str
    name: str
    code: str
    values: dict[int, str] = field(default_factory=dict)


@dataclass
class Report:
    """Structured result of reading one data file.

    Fields:
        years: Year labels from the header, in column order.
        indicators: Ingested rows, in file order.
        dropped_rows: Data lines skipped because they were too short.
    """

    years: list[str] = field(default_factory=list)
    indicators: list[Indicator] = field(default_factory=list)
    dropped_rows: int = 0

    def add_indicator(self, indicator: Indicator | None) -> None:
        """Append an indicator. None is ignored."""
        if indicator is not None:
            self.indicators.append(indicator)

    def sort_by(self, sort_field: str) -> None:
        """Sort indicators in place by "name" or "code".

        The sort is stable, so rows with equal keys keep file order.
        Raises ValueError for any other field.
        """
        if sort_field not in SORT_FIELDS:
            raise ValueError(
                f"Unknown sort field: '{sort_field}'. Expected one of {list(SORT_FIELDS)}."
            )
        self.indicators.sort(key=lambda indicator: getattr(indicator, sort_field))

    def matching(self, indicator_name: str) -> list[Indicator]:
        """Return indicators whose name equals indicator_name exactly."""
        return [i for i in self.indicators if i.name == indicator_name]
