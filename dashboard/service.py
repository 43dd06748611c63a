"""Cached access to the combined confirmed/deaths/active dataset."""

from datetime import date, datetime, timezone
from typing import Any

from core.cache import TimedCache
from core.container import Container
from core.errors import NotFoundError
from models import (
    CombinedData,
    CountrySeries,
    DatasetMetadata,
    DataFreshness,
    GlobalStats,
    LatestValue,
    RankedCountry,
    Rates,
    SeriesCounts,
    DATA_TYPES,
)
from sources import JhuCsseSource, get_registry
from timeseries import (
    calculate_rates,
    compute_trend,
    estimate_active,
    latest_and_daily,
    top_n,
)

DATASET_NOTES = {
    'recovered': 'Recovered counts were discontinued on 2021-08-05',
    'active': 'Estimated active cases = confirmed cases - deaths',
    'dataEnd': 'Data collection stopped on 2023-03-10',
}


class CovidDataService:
    """Fetches, aggregates and memoizes the CSSE time series.

    The combined dataset is rebuilt at most once per cache TTL, or after
    ``clear_cache``. A failed fetch raises and leaves the cache as it was.
    """

    def __init__(self, container: Container, source: JhuCsseSource | None = None,
                 cache: TimedCache | None = None):
        config = container.get_config()
        self.container = container
        self.logger = container.get_logger("dashboard.service")
        self.clock = container.get_clock()
        self.source = source or get_registry().create_source(JhuCsseSource.name, container)
        self.cache = cache or TimedCache(self.clock, ttl_millis=config.get_cache_ttl_ms())
        self.stale_after_days = config.get_stale_after_days()

    def get_all_data(self) -> CombinedData:
        """Return the combined dataset, fetching it if the cache is empty or expired."""
        cached = self.cache.get()
        if cached is not None:
            self.logger.info("Using cached data")
            return cached

        self.logger.info("Fetching fresh data")
        series = self.source.run()
        confirmed = series['confirmed']
        deaths = series['deaths']
        active = estimate_active(confirmed, deaths)

        data = CombinedData(
            confirmed=confirmed,
            deaths=deaths,
            active=active,
            metadata=DatasetMetadata(
                last_updated=datetime.now(timezone.utc).isoformat(),
                source=self.source.attribution,
                data_types=list(DATA_TYPES),
                notes=dict(DATASET_NOTES),
            ),
        )
        self.cache.put(data)
        self.logger.info(f"Cached dataset for {len(confirmed.countries)} countries")
        return data

    def clear_cache(self) -> None:
        self.logger.info("Clearing cached data")
        self.cache.clear()

    def refresh(self) -> CombinedData:
        """Drop the cache and fetch again."""
        self.clear_cache()
        return self.get_all_data()

    def get_country_data(self, country_name: str) -> dict[str, CountrySeries]:
        """Series of one country keyed by data type."""
        data = self.get_all_data()
        result = {
            data_type: series.countries[country_name]
            for data_type, series in data.items()
            if country_name in series.countries
        }
        if not result:
            raise NotFoundError('country', country_name)
        return result

    def get_global_data(self) -> dict[str, Any]:
        data = self.get_all_data()
        result: dict[str, Any] = {
            data_type: series.global_series for data_type, series in data.items()
        }
        result['metadata'] = data.metadata
        return result

    def get_available_countries(self) -> list[str]:
        return list(self.get_all_data().confirmed.countries)

    def get_global_stats(self) -> GlobalStats:
        """Latest global totals and the change since the previous date.

        Dates come from the confirmed series; daily changes are not clamped.
        """
        data = self.get_all_data()
        dates = data.confirmed.dates()
        last_date = dates[-1] if dates else None
        prev_date = dates[-2] if len(dates) > 1 else None

        def value(data_type: str, date_key: str | None) -> int:
            if date_key is None:
                return 0
            return data.series(data_type).global_series.get(date_key, 0)

        current = SeriesCounts(**{dt: value(dt, last_date) for dt in DATA_TYPES})
        previous = SeriesCounts(**{dt: value(dt, prev_date) for dt in DATA_TYPES})

        return GlobalStats(
            last_update=last_date,
            current=current,
            daily=SeriesCounts(
                confirmed=current.confirmed - previous.confirmed,
                deaths=current.deaths - previous.deaths,
                active=current.active - previous.active,
            ),
        )

    def get_country_stats(self, country_name: str) -> dict[str, LatestValue]:
        """Latest value and daily change of one country, per data type."""
        stats = {}
        for data_type, country in self.get_country_data(country_name).items():
            current, daily = latest_and_daily(country.total)
            stats[data_type] = LatestValue(current=current, daily=daily)
        return stats

    def get_rates(self, country_name: str | None = None) -> Rates:
        """Mortality and active rates at the latest date.

        Recovered counts are no longer published, so the recovery rate is 0.
        """
        if country_name is None:
            current = self.get_global_stats().current
            return calculate_rates(current.confirmed, current.deaths)

        stats = self.get_country_stats(country_name)
        confirmed = stats.get('confirmed', LatestValue()).current
        deaths = stats.get('deaths', LatestValue()).current
        return calculate_rates(confirmed, deaths)

    def get_top_countries(self, data_type: str = 'confirmed', n: int = 10) -> list[RankedCountry]:
        return top_n(self.get_all_data().series(data_type).countries, n)

    def get_trend(self, data_type: str = 'confirmed', country_name: str | None = None) -> float:
        """Seven-day trend of the global series, or of one country's total."""
        series = self.get_all_data().series(data_type)
        if country_name is None:
            return compute_trend(series.global_series)

        country = series.countries.get(country_name)
        if country is None:
            raise NotFoundError('country', country_name)
        return compute_trend(country.total)

    def get_data_freshness(self) -> DataFreshness:
        """How old the latest data point is relative to today's date."""
        dates = self.get_all_data().confirmed.dates()
        if not dates:
            return DataFreshness(last_data_date=None, days_since_last_update=None, is_stale=False)

        last_data_date = dates[-1]
        days = (self.clock.today() - date.fromisoformat(last_data_date)).days
        is_stale = days > self.stale_after_days

        return DataFreshness(
            last_data_date=last_data_date,
            days_since_last_update=days,
            is_stale=is_stale,
            warning=f"This data has not been updated since {last_data_date}" if is_stale else None,
        )
