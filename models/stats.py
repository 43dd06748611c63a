"""Derived statistics records."""

from dataclasses import dataclass

from .timeseries import CountrySeries


@dataclass(frozen=True)
class Rates:
    """Percentages of confirmed cases, rounded to two decimals."""
    mortality_rate: float = 0.0
    recovery_rate: float = 0.0
    active_rate: float = 0.0


@dataclass(frozen=True)
class RankedCountry:
    name: str
    value: int
    data: CountrySeries


@dataclass(frozen=True)
class SeriesCounts:
    confirmed: int = 0
    deaths: int = 0
    active: int = 0


@dataclass(frozen=True)
class GlobalStats:
    """Latest global totals and their change since the previous date."""
    last_update: str | None
    current: SeriesCounts
    daily: SeriesCounts


@dataclass(frozen=True)
class DataFreshness:
    last_data_date: str | None
    days_since_last_update: int | None
    is_stale: bool
    warning: str | None = None


@dataclass(frozen=True)
class LatestValue:
    """Latest value of a series and its change since the previous date."""
    current: int = 0
    daily: int = 0
