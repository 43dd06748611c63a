"""Records mapped from the disease.sh REST aggregator."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class GlobalSnapshot:
    """Worldwide totals from ``/all``."""
    confirmed: int
    deaths: int
    recovered: int
    active: int
    today_cases: int
    today_deaths: int
    critical: int
    last_update: str | None


@dataclass
class CountrySnapshot:
    """Per-country totals from ``/countries`` and ``/countries/{name}``."""
    country: str
    confirmed: int
    deaths: int
    recovered: int
    active: int
    today_cases: int = 0
    today_deaths: int = 0
    today_recovered: int = 0
    critical: int = 0
    population: int = 0
    continent: str | None = None
    flag: str | None = None
    country_info: dict[str, Any] = field(default_factory=dict)


@dataclass
class ContinentSnapshot:
    continent: str
    confirmed: int
    deaths: int
    recovered: int
    active: int
    today_cases: int = 0
    today_deaths: int = 0
    critical: int = 0
    population: int = 0
    countries: list[str] = field(default_factory=list)


@dataclass
class HistoricalPoint:
    date: str
    confirmed: int
    deaths: int
    recovered: int
    active: int


@dataclass
class CovidOverview:
    """Everything the overview page needs, fetched in one go."""
    global_stats: GlobalSnapshot
    countries: list[CountrySnapshot]
    time_series: list[HistoricalPoint]
    last_update: str | None
