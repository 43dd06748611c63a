"""Lenient parser for the CSSE time-series CSV tables."""

import logging
import math
import re

from models import RawRow
from .transform import format_date

logger = logging.getLogger(__name__)

# Date columns look like 3/14/21
DATE_COLUMN_PATTERN = re.compile(r'^\d+/\d+/\d+$')

COUNTRY_HEADERS = ('Country/Region', 'Country')
PROVINCE_HEADERS = ('Province/State', 'Province')
LAT_HEADER = 'Lat'
LNG_HEADER = 'Long'


def parse_csv_line(line: str) -> list[str]:
    """Split one CSV line on commas, keeping commas inside double quotes.

    Quote characters are dropped and every field is trimmed.
    """
    fields = []
    current = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == ',' and not in_quotes:
            fields.append(''.join(current).strip())
            current = []
        else:
            current.append(char)

    fields.append(''.join(current).strip())
    return fields


def _parse_int(value: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _parse_float(value: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _first_present(record: dict[str, str], headers: tuple[str, ...]) -> str:
    for header in headers:
        if record.get(header):
            return record[header]
    return ''


def parse_csv(text: str) -> list[RawRow]:
    """Parse a CSSE time-series table into RawRow records.

    Lines whose field count does not match the header are skipped, and so
    are date columns that do not name a real calendar day.
    """
    if not text or not text.strip():
        return []

    lines = text.strip().split('\n')
    header_line = lines[0].lstrip('\ufeff')
    headers = [h.strip().replace('"', '') for h in header_line.split(',')]
    date_columns = [
        h for h in headers
        if DATE_COLUMN_PATTERN.match(h) and format_date(h) != h
    ]
    dropped = sum(1 for h in headers if DATE_COLUMN_PATTERN.match(h)) - len(date_columns)
    if dropped:
        logger.debug(f"Ignored {dropped} date columns that are not calendar dates")

    rows = []
    skipped = 0

    for line in lines[1:]:
        values = parse_csv_line(line)
        if len(values) != len(headers):
            skipped += 1
            continue

        record = dict(zip(headers, values))
        rows.append(RawRow(
            region_name=_first_present(record, COUNTRY_HEADERS),
            sub_region=_first_present(record, PROVINCE_HEADERS) or None,
            lat=_parse_float(record.get(LAT_HEADER)),
            lng=_parse_float(record.get(LNG_HEADER)),
            daily_values={column: _parse_int(record[column]) for column in date_columns},
        ))

    if skipped:
        logger.debug(f"Skipped {skipped} malformed CSV lines")

    return rows
