"""Dashboard state and the pure reducer that updates it.

Any UI can hold a ``DashboardState``, feed events through ``reduce`` and
read derived values with the selector functions below.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any

from core.errors import CovidDataError
from models import (
    CombinedData,
    CountrySeries,
    DataFreshness,
    GlobalStats,
    RankedCountry,
    DATA_TYPES,
)
from timeseries import filter_date_range, top_n


@dataclass(frozen=True)
class DashboardState:
    all_data: CombinedData | None = None
    global_stats: GlobalStats | None = None
    available_countries: tuple[str, ...] = ()
    data_freshness: DataFreshness | None = None
    loading: bool = False
    error: str | None = None
    selected_country: str | None = None
    selected_data_type: str = 'confirmed'
    date_range: tuple[str | None, str | None] = (None, None)
    last_updated: str | None = None

    @property
    def is_data_loaded(self) -> bool:
        return self.all_data is not None

    @property
    def has_error(self) -> bool:
        return self.error is not None

    @property
    def is_data_stale(self) -> bool:
        return bool(self.data_freshness and self.data_freshness.is_stale)


# Events

@dataclass(frozen=True)
class SetLoading:
    loading: bool


@dataclass(frozen=True)
class SetData:
    all_data: CombinedData
    global_stats: GlobalStats
    available_countries: tuple[str, ...]
    data_freshness: DataFreshness
    last_updated: str


@dataclass(frozen=True)
class SetError:
    message: str


@dataclass(frozen=True)
class SelectCountry:
    country: str | None


@dataclass(frozen=True)
class SelectDataType:
    data_type: str


@dataclass(frozen=True)
class SetDateRange:
    start: str | None
    end: str | None


@dataclass(frozen=True)
class ClearError:
    pass


@dataclass(frozen=True)
class SetDataFreshness:
    data_freshness: DataFreshness


def reduce(state: DashboardState, event: Any) -> DashboardState:
    """Return the state that results from applying ``event``.

    Unknown events and unsupported data types leave the state unchanged.
    """
    if isinstance(event, SetLoading):
        return replace(
            state,
            loading=event.loading,
            error=None if event.loading else state.error,
        )

    if isinstance(event, SetData):
        return replace(
            state,
            all_data=event.all_data,
            global_stats=event.global_stats,
            available_countries=tuple(event.available_countries),
            data_freshness=event.data_freshness,
            last_updated=event.last_updated,
            loading=False,
            error=None,
        )

    if isinstance(event, SetError):
        return replace(state, error=event.message, loading=False)

    if isinstance(event, SelectCountry):
        return replace(state, selected_country=event.country)

    if isinstance(event, SelectDataType):
        if event.data_type not in DATA_TYPES:
            return state
        return replace(state, selected_data_type=event.data_type)

    if isinstance(event, SetDateRange):
        return replace(state, date_range=(event.start, event.end))

    if isinstance(event, ClearError):
        return replace(state, error=None)

    if isinstance(event, SetDataFreshness):
        return replace(state, data_freshness=event.data_freshness)

    return state


def load_dashboard(service: Any, state: DashboardState | None = None) -> DashboardState:
    """Load everything the dashboard shows from a CovidDataService.

    Pipeline errors end up in ``state.error``; the caller decides whether
    to retry.
    """
    state = reduce(state or DashboardState(), SetLoading(True))

    try:
        all_data = service.get_all_data()
        event = SetData(
            all_data=all_data,
            global_stats=service.get_global_stats(),
            available_countries=tuple(service.get_available_countries()),
            data_freshness=service.get_data_freshness(),
            last_updated=datetime.now(timezone.utc).isoformat(),
        )
    except (CovidDataError, ValueError) as e:
        return reduce(state, SetError(f"Failed to load data: {e}"))

    return reduce(state, event)


def refresh_dashboard(service: Any, state: DashboardState) -> DashboardState:
    """Drop the service cache, then load again."""
    service.clear_cache()
    return load_dashboard(service, state)


# Selectors

def selected_country_data(state: DashboardState) -> dict[str, CountrySeries] | None:
    if not state.selected_country or state.all_data is None:
        return None

    return {
        data_type: series.countries[state.selected_country]
        for data_type, series in state.all_data.items()
        if state.selected_country in series.countries
    }


def global_series_for_selection(state: DashboardState) -> dict[str, int]:
    """Global series of the selected data type within the selected date range."""
    if state.all_data is None:
        return {}

    series = state.all_data.series(state.selected_data_type).global_series
    start, end = state.date_range
    return filter_date_range(series, start, end)


def top_countries_for_selection(state: DashboardState, n: int = 10) -> list[RankedCountry]:
    if state.all_data is None:
        return []
    return top_n(state.all_data.series(state.selected_data_type).countries, n)


@dataclass(frozen=True)
class DataWarning:
    type: str
    severity: str
    message: str
    details: str | None = None


def data_warnings(state: DashboardState) -> list[DataWarning]:
    warnings = []

    if state.is_data_stale:
        warnings.append(DataWarning(
            type='stale-data',
            severity='warning',
            message='This data is no longer being updated',
            details=state.data_freshness.warning,
        ))

    warnings.append(DataWarning(
        type='missing-data',
        severity='info',
        message='Recovered case data is no longer available',
        details='Replaced by an estimate of active cases (confirmed - deaths)',
    ))

    return warnings
