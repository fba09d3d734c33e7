"""
wdi_report.constants - Single source of truth for wdi-report constants.

Every module that needs these values imports them from here.
No hardcoded duplicates anywhere in the package.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Input format
# ---------------------------------------------------------------------------

FIELD_SEPARATOR: str = '","'
"""Token between fields of a quote-wrapped line: "a","b","c"."""

HEADER_MARKER: str = "Country Name"
"""First field of the header line. Lines before it are metadata."""

FIXED_COLUMNS: int = 4
"""Leading columns before the year columns:
Country Name, Country Code, Indicator Name, Indicator Code."""

FILE_ENCODING: str = "utf-8-sig"
"""World Bank exports start with a BOM; utf-8-sig drops it."""

# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------

SORT_FIELDS: tuple[str, ...] = ("name", "code")
"""Indicator attributes accepted by Report.sort_by()."""

# ---------------------------------------------------------------------------
# Cancellation reasons
# ---------------------------------------------------------------------------

REASON_INTERRUPTED: str = "interrupted"
REASON_STOPPED: str = "stopped"

# ---------------------------------------------------------------------------
# Canned questions answered by the CLI
# ---------------------------------------------------------------------------

URBAN_GROWTH_INDICATOR: str = "Urban population growth (annual %)"
URBAN_GROWTH_START_YEAR: int = 1980
URBAN_GROWTH_END_YEAR: int = 1990

CO2_INDICATOR: str = "CO2 emissions (kt)"

# ---------------------------------------------------------------------------
# Exit codes - used by CLI, exposed for programmatic use
# ---------------------------------------------------------------------------

EXIT_OK: int = 0
EXIT_FILE_ERROR: int = 1
EXIT_USAGE: int = 2
EXIT_NO_MATCHING_INDICATOR: int = 3
EXIT_INTERRUPTED: int = 4
