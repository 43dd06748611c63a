"""disease.sh REST aggregator - current snapshots and short histories."""

from dataclasses import fields
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

from .base import BaseDataSource
from .registry import register
from core.errors import NetworkError, NotFoundError
from models import (
    GlobalSnapshot,
    CountrySnapshot,
    ContinentSnapshot,
    HistoricalPoint,
    CovidOverview,
)
from timeseries import format_date

DEFAULT_BASE_URL = "https://disease.sh/v3/covid-19"

SORTABLE_FIELDS = frozenset(
    f.name for f in fields(CountrySnapshot) if f.type in (int, 'int')
)


def _count(record: dict[str, Any], key: str) -> int:
    """Integer field of a JSON record, 0 when absent or null."""
    try:
        return int(record.get(key) or 0)
    except (TypeError, ValueError):
        return 0


def updated_to_date(updated: Any) -> str | None:
    """Convert the API's epoch-millisecond ``updated`` field to an ISO date."""
    if not updated:
        return None
    return datetime.fromtimestamp(updated / 1000, tz=timezone.utc).date().isoformat()


def map_global(data: dict[str, Any]) -> GlobalSnapshot:
    return GlobalSnapshot(
        confirmed=_count(data, 'cases'),
        deaths=_count(data, 'deaths'),
        recovered=_count(data, 'recovered'),
        active=_count(data, 'active'),
        today_cases=_count(data, 'todayCases'),
        today_deaths=_count(data, 'todayDeaths'),
        critical=_count(data, 'critical'),
        last_update=updated_to_date(data.get('updated')),
    )


def map_country(data: dict[str, Any]) -> CountrySnapshot:
    country_info = data.get('countryInfo') or {}
    return CountrySnapshot(
        country=data.get('country', ''),
        confirmed=_count(data, 'cases'),
        deaths=_count(data, 'deaths'),
        recovered=_count(data, 'recovered'),
        active=_count(data, 'active'),
        today_cases=_count(data, 'todayCases'),
        today_deaths=_count(data, 'todayDeaths'),
        today_recovered=_count(data, 'todayRecovered'),
        critical=_count(data, 'critical'),
        population=_count(data, 'population'),
        continent=data.get('continent'),
        flag=country_info.get('flag'),
        country_info=country_info,
    )


def map_continent(data: dict[str, Any]) -> ContinentSnapshot:
    return ContinentSnapshot(
        continent=data.get('continent', ''),
        confirmed=_count(data, 'cases'),
        deaths=_count(data, 'deaths'),
        recovered=_count(data, 'recovered'),
        active=_count(data, 'active'),
        today_cases=_count(data, 'todayCases'),
        today_deaths=_count(data, 'todayDeaths'),
        critical=_count(data, 'critical'),
        population=_count(data, 'population'),
        countries=list(data.get('countries') or []),
    )


def map_timeline(timeline: dict[str, Any]) -> list[HistoricalPoint]:
    """Map a ``{cases, deaths, recovered}`` timeline to dated points.

    Active is confirmed minus deaths minus recovered, clamped at zero.
    """
    cases = timeline.get('cases') or {}
    deaths = timeline.get('deaths') or {}
    recovered = timeline.get('recovered') or {}

    points = []
    for date, confirmed in cases.items():
        confirmed = confirmed or 0
        dead = deaths.get(date) or 0
        healed = recovered.get(date) or 0
        points.append(HistoricalPoint(
            date=format_date(date),
            confirmed=confirmed,
            deaths=dead,
            recovered=healed,
            active=max(0, confirmed - dead - healed),
        ))
    return points


def get_time_series_window(points: list[HistoricalPoint], days: int = 30) -> list[HistoricalPoint]:
    """Last ``days`` points of a history."""
    if not points or days <= 0:
        return []
    return points[-days:]


def get_top_countries(countries: list[CountrySnapshot], limit: int = 10,
                      sort_by: str = 'confirmed') -> list[CountrySnapshot]:
    """Countries with the highest ``sort_by`` value; ties keep input order."""
    if sort_by not in SORTABLE_FIELDS:
        raise ValueError(f"Cannot sort countries by {sort_by!r}")
    if not countries:
        return []
    return sorted(countries, key=lambda c: getattr(c, sort_by), reverse=True)[:limit]


def get_countries_by_continent(countries: list[CountrySnapshot], continent: str) -> list[CountrySnapshot]:
    if not countries:
        return []
    wanted = continent.lower()
    return [c for c in countries if c.continent and c.continent.lower() == wanted]


def search_countries(countries: list[CountrySnapshot], query: str) -> list[CountrySnapshot]:
    """Case-insensitive substring match on the country name."""
    if not countries or not query:
        return []
    needle = query.lower()
    return [c for c in countries if needle in c.country.lower()]


@register
class DiseaseShSource(BaseDataSource):
    """Snapshot adapter for the disease.sh API."""

    name = "disease_sh"
    description = "disease.sh snapshots"

    @property
    def base_url(self) -> str:
        return self.config.get('api', {}).get('base_url', DEFAULT_BASE_URL).rstrip('/')

    @property
    def historical_days(self) -> int:
        return self.config.get('historical_days', 30)

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        url = f"{self.base_url}{path}"
        self.logger.debug(f"GET {url} {params or ''}")
        return self.http_client.get_json(url, params=params)

    def _get_named(self, path: str, entity: str, name: str,
                   params: dict[str, Any] | None = None) -> Any:
        try:
            return self._get(path, params=params)
        except NetworkError as e:
            if e.status == 404:
                raise NotFoundError(entity, name) from e
            raise

    def fetch_global_stats(self) -> GlobalSnapshot:
        return map_global(self._get('/all'))

    def fetch_countries(self) -> list[CountrySnapshot]:
        data = self._get('/countries')
        self.logger.info(f"Received {len(data)} country snapshots")
        return [map_country(record) for record in data]

    def fetch_country(self, country_name: str) -> CountrySnapshot:
        """Snapshot for one country; NotFoundError when the API has none."""
        data = self._get_named(f"/countries/{quote(country_name)}", 'country', country_name)
        return map_country(data)

    def fetch_historical(self, days: int | None = None) -> list[HistoricalPoint]:
        lastdays = self.historical_days if days is None else days
        data = self._get('/historical/all', params={'lastdays': lastdays})
        return map_timeline(data)

    def fetch_country_historical(self, country_name: str, days: int | None = None) -> list[HistoricalPoint]:
        data = self._get_named(
            f"/historical/{quote(country_name)}", 'country', country_name,
            params={'lastdays': self.historical_days if days is None else days},
        )
        timeline = data.get('timeline') if isinstance(data, dict) else None
        if not timeline:
            return []
        return map_timeline(timeline)

    def fetch_continents(self) -> list[ContinentSnapshot]:
        return [map_continent(record) for record in self._get('/continents')]

    def extract(self) -> dict[str, Any]:
        """Fetch global totals, countries and recent history concurrently."""
        days = self.historical_days
        return self.fetch_parallel({
            'global': lambda: self._get('/all'),
            'countries': lambda: self._get('/countries'),
            'historical': lambda: self._get('/historical/all', params={'lastdays': days}),
        })

    def transform(self, raw_data: dict[str, Any]) -> CovidOverview:
        global_stats = map_global(raw_data['global'])
        countries = [map_country(record) for record in raw_data['countries']]
        time_series = map_timeline(raw_data['historical'])

        self.logger.info(f"Mapped {len(countries)} countries and {len(time_series)} history points")
        return CovidOverview(
            global_stats=global_stats,
            countries=countries,
            time_series=time_series,
            last_update=global_stats.last_update,
        )

    def fetch_overview(self) -> CovidOverview:
        return self.run()
