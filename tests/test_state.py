"""Tests for the dashboard reducer and selectors."""

from unittest.mock import MagicMock

import pytest

from core.errors import NetworkError
from dashboard.service import CovidDataService
from dashboard.state import (
    ClearError,
    DashboardState,
    SelectCountry,
    SelectDataType,
    SetDateRange,
    SetError,
    SetLoading,
    data_warnings,
    global_series_for_selection,
    load_dashboard,
    reduce,
    refresh_dashboard,
    selected_country_data,
    top_countries_for_selection,
)
from models import DataFreshness


@pytest.fixture
def loaded_state(container):
    return load_dashboard(CovidDataService(container))


class TestReduce:

    def test_loading_clears_error(self):
        state = reduce(DashboardState(), SetError("boom"))
        state = reduce(state, SetLoading(True))

        assert state.loading is True
        assert state.error is None

    def test_loading_false_keeps_error(self):
        state = reduce(DashboardState(error="boom"), SetLoading(False))
        assert state.error == "boom"

    def test_set_error_stops_loading(self):
        state = reduce(DashboardState(loading=True), SetError("boom"))

        assert state.loading is False
        assert state.has_error

    def test_select_data_type_ignores_unknown_types(self):
        state = reduce(DashboardState(), SelectDataType('deaths'))
        assert state.selected_data_type == 'deaths'

        assert reduce(state, SelectDataType('recovered')) is state

    def test_clear_error(self):
        assert reduce(DashboardState(error="boom"), ClearError()).error is None

    def test_unknown_event_returns_same_state(self):
        state = DashboardState()
        assert reduce(state, object()) is state

    def test_reduce_does_not_mutate_input(self):
        state = DashboardState()
        reduce(state, SelectCountry('Italy'))
        assert state.selected_country is None


def test_load_dashboard_populates_state(loaded_state):
    assert loaded_state.is_data_loaded
    assert loaded_state.loading is False
    assert loaded_state.available_countries == ('Italy', 'Canada')
    assert loaded_state.global_stats.last_update == '2023-01-03'
    assert loaded_state.data_freshness.is_stale is False


def test_load_dashboard_records_errors():
    service = MagicMock()
    service.get_all_data.side_effect = NetworkError("https://example.test/x", status=502)

    state = load_dashboard(service)

    assert state.loading is False
    assert state.error.startswith("Failed to load data: HTTP error 502")
    assert not state.is_data_loaded


def test_refresh_dashboard_clears_cache(container, http_client):
    service = CovidDataService(container)
    state = load_dashboard(service)
    refresh_dashboard(service, state)

    assert len(http_client.calls) == 4


def test_selected_country_data(loaded_state):
    assert selected_country_data(loaded_state) is None

    state = reduce(loaded_state, SelectCountry('Canada'))
    data = selected_country_data(state)

    assert set(data) == {'confirmed', 'deaths', 'active'}
    assert data['confirmed'].total['2023-01-03'] == 70


def test_global_series_for_selection_applies_date_range(loaded_state):
    state = reduce(loaded_state, SelectDataType('active'))
    assert len(global_series_for_selection(state)) == 3

    state = reduce(state, SetDateRange('2023-01-02', '2023-01-03'))
    assert global_series_for_selection(state) == {'2023-01-02': 155, '2023-01-03': 182}


def test_top_countries_for_selection(loaded_state):
    assert top_countries_for_selection(DashboardState()) == []
    assert [r.name for r in top_countries_for_selection(loaded_state, 1)] == ['Italy']


def test_data_warnings():
    fresh = DashboardState(data_freshness=DataFreshness('2023-01-03', 7, False))
    assert [w.type for w in data_warnings(fresh)] == ['missing-data']

    stale = DashboardState(data_freshness=DataFreshness('2023-01-03', 400, True, 'old'))
    warnings = data_warnings(stale)
    assert [w.type for w in warnings] == ['stale-data', 'missing-data']
    assert warnings[0].details == 'old'


def test_load_dashboard_records_value_errors():
    service = MagicMock()
    service.get_data_freshness.side_effect = ValueError("bad date")

    state = load_dashboard(service)

    assert state.loading is False
    assert state.error == "Failed to load data: bad date"
    assert not state.is_data_loaded
