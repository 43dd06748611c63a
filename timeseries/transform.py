"""Turn parsed CSV rows into per-country and global daily series."""

from datetime import date, datetime, timezone
from typing import Iterable

from models import RawRow, Coordinates, RegionSeries, CountrySeries, NormalizedSeries

UNKNOWN_COUNTRY = 'Unknown'
MAIN_REGION_KEY = 'main'


def format_date(date_str: str) -> str:
    """Convert a ``M/D/YY`` column header to ``YYYY-MM-DD``.

    Two-digit years below 50 map to 20YY, the rest to 19YY. Anything that
    is not three slash-separated numbers forming a calendar date is
    returned unchanged.
    """
    parts = date_str.split('/')
    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        return date_str

    month, day, year_part = parts
    year = int(year_part)
    if year < 50:
        year += 2000
    elif year < 100:
        year += 1900

    try:
        return date(year, int(month), int(day)).isoformat()
    except ValueError:
        return date_str


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def transform_to_time_series(rows: Iterable[RawRow], data_type: str,
                             last_updated: str | None = None) -> NormalizedSeries:
    """Aggregate raw rows into a NormalizedSeries.

    Province values are summed into their country's total and country
    totals into the global series. The first row seen for a country
    provides its coordinates. Every country total carries every date of
    the global series, zero where the country had no value.
    """
    series = NormalizedSeries(
        data_type=data_type,
        last_updated=last_updated or utc_timestamp(),
    )
    date_keys: dict[str, str] = {}

    for row in rows:
        country_name = row.region_name or UNKNOWN_COUNTRY
        coordinates = Coordinates(lat=row.lat, lng=row.lng)

        country = series.countries.get(country_name)
        if country is None:
            country = CountrySeries(name=country_name, coordinates=coordinates)
            series.countries[country_name] = country

        region = RegionSeries(name=row.sub_region or country_name, coordinates=coordinates)

        for raw_date, value in row.daily_values.items():
            if raw_date not in date_keys:
                date_keys[raw_date] = format_date(raw_date)
            iso_date = date_keys[raw_date]

            region.data[iso_date] = value
            country.total[iso_date] = country.total.get(iso_date, 0) + value
            series.global_series[iso_date] = series.global_series.get(iso_date, 0) + value

        country.provinces[row.sub_region or MAIN_REGION_KEY] = region

    # Align date keys across countries
    all_dates = sorted(series.global_series)
    series.global_series = {d: series.global_series[d] for d in all_dates}
    for country in series.countries.values():
        country.total = {d: country.total.get(d, 0) for d in all_dates}

    return series
