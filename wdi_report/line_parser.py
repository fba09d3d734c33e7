"""
wdi_report.line_parser - Split one quote-wrapped CSV line into fields.

Input lines look like:

    "Aruba","ABW","CO2 emissions (kt)","EN.ATM.CO2E.KT","1980","",

The payload is cut out between the first and the last double quote and
split on the '","' token.

Design contract:
    - parse_line() never raises. Lines without quotes yield [""].
    - The substring bounds are start = first_quote + 1 and
      length = last_quote - 1. This is exactly "between the quotes" only
      when the line starts with a quote; lines with leading characters
      keep some trailing text. Existing data files rely on this, so the
      arithmetic is kept as is.
"""

from __future__ import annotations

from wdi_report.constants import FIELD_SEPARATOR


def strip_quotes(line: str) -> str:
    """Return the quoted payload of a line using the compatibility bounds.

    A negative length (no quote, or a single quote at index 0) gives "".
    """
    start = line.find('"') + 1
    length = line.rfind('"') - 1
    if length <= 0:
        return ""
    return line[start:start + length]


def parse_line(line: str, sep: str = FIELD_SEPARATOR) -> list[str]:
    """Split a raw line into its fields.

    Examples:
        parse_line('"a","b","c"')   -> ["a", "b", "c"]
        parse_line('"a","","c",')   -> ["a", "", "c"]
        parse_line('')              -> [""]
    """
    return strip_quotes(line).split(sep)
