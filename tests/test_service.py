"""Tests for the cached dataset service."""

from datetime import date

import pytest

from core.errors import NetworkError, NotFoundError
from dashboard.service import CovidDataService
from tests.conftest import CONFIRMED_URL, DEATHS_URL


@pytest.fixture
def service(container):
    return CovidDataService(container)


def fetched_urls(http_client):
    return sorted(url for url, _ in http_client.calls)


def test_get_all_data_builds_combined_dataset(service, http_client):
    data = service.get_all_data()

    assert fetched_urls(http_client) == sorted([CONFIRMED_URL, DEATHS_URL])
    assert data.confirmed.countries['Canada'].total == {
        '2023-01-01': 50, '2023-01-02': 60, '2023-01-03': 70,
    }
    assert data.deaths.global_series == {'2023-01-01': 11, '2023-01-02': 15, '2023-01-03': 18}
    assert data.active.global_series == {'2023-01-01': 139, '2023-01-02': 155, '2023-01-03': 182}
    assert data.metadata.source == 'Johns Hopkins University CSSE'
    assert data.metadata.data_types == ['confirmed', 'deaths', 'active']


def test_second_call_within_ttl_uses_cache(service, http_client, clock):
    first = service.get_all_data()
    clock.advance(59_999)
    second = service.get_all_data()

    assert second is first
    assert len(http_client.calls) == 2


def test_expired_cache_triggers_new_fetch(service, http_client, clock):
    first = service.get_all_data()
    clock.advance(60_000)
    second = service.get_all_data()

    assert second is not first
    assert len(http_client.calls) == 4


def test_clear_cache_forces_refetch(service, http_client):
    first = service.get_all_data()
    service.clear_cache()
    second = service.get_all_data()

    assert second is not first
    assert len(http_client.calls) == 4


def test_failed_fetch_raises_and_caches_nothing(service, http_client):
    http_client.responses[DEATHS_URL] = NetworkError(DEATHS_URL, status=500)

    with pytest.raises(NetworkError):
        service.get_all_data()

    assert service.cache.entry is None


def test_failed_refetch_keeps_previous_entry(service, http_client, clock):
    first = service.get_all_data()
    entry = service.cache.entry

    clock.advance(60_000)
    http_client.responses[CONFIRMED_URL] = NetworkError(CONFIRMED_URL, reason="connection reset")

    with pytest.raises(NetworkError):
        service.get_all_data()

    assert service.cache.entry is entry
    assert service.cache.entry.payload is first


def test_get_country_data(service):
    country = service.get_country_data('Italy')

    assert set(country) == {'confirmed', 'deaths', 'active'}
    assert country['active'].total == {'2023-01-01': 90, '2023-01-02': 98, '2023-01-03': 115}


def test_get_country_data_unknown_country(service):
    with pytest.raises(NotFoundError):
        service.get_country_data('Atlantis')


def test_get_global_data(service):
    data = service.get_global_data()

    assert data['confirmed']['2023-01-03'] == 200
    assert data['metadata'].source == 'Johns Hopkins University CSSE'


def test_get_available_countries(service):
    assert service.get_available_countries() == ['Italy', 'Canada']


def test_get_global_stats(service):
    stats = service.get_global_stats()

    assert stats.last_update == '2023-01-03'
    assert (stats.current.confirmed, stats.current.deaths, stats.current.active) == (200, 18, 182)
    assert (stats.daily.confirmed, stats.daily.deaths, stats.daily.active) == (30, 3, 27)


def test_get_country_stats(service):
    stats = service.get_country_stats('Canada')

    assert stats['confirmed'].current == 70
    assert stats['confirmed'].daily == 10
    assert stats['deaths'].daily == 0


def test_get_rates(service):
    assert service.get_rates().mortality_rate == 9.0
    assert service.get_rates('Italy').mortality_rate == pytest.approx(11.54)


def test_get_top_countries(service):
    ranked = service.get_top_countries('deaths', 1)
    assert [(r.name, r.value) for r in ranked] == [('Italy', 15)]


def test_get_top_countries_unknown_type(service):
    with pytest.raises(ValueError):
        service.get_top_countries('recovered')


def test_get_trend_needs_seven_dates(service):
    assert service.get_trend('confirmed') == 0
    assert service.get_trend('confirmed', 'Italy') == 0

    with pytest.raises(NotFoundError):
        service.get_trend('confirmed', 'Atlantis')


def test_data_freshness_recent(service, clock):
    clock.current_date = date(2023, 1, 10)
    freshness = service.get_data_freshness()

    assert freshness.last_data_date == '2023-01-03'
    assert freshness.days_since_last_update == 7
    assert freshness.is_stale is False
    assert freshness.warning is None


def test_data_freshness_stale(service, clock):
    clock.current_date = date(2023, 7, 3)
    freshness = service.get_data_freshness()

    assert freshness.days_since_last_update == 181
    assert freshness.is_stale is True
    assert '2023-01-03' in freshness.warning


def test_data_freshness_ignores_impossible_date_columns(container, http_client, clock):
    csv = "Province/State,Country/Region,Lat,Long,2/27/23,2/28/23,2/30/23\n,Italy,41.9,12.6,1,2,3\n"
    http_client.responses[CONFIRMED_URL] = csv
    http_client.responses[DEATHS_URL] = csv
    clock.current_date = date(2023, 3, 2)

    freshness = CovidDataService(container).get_data_freshness()

    assert freshness.last_data_date == '2023-02-28'
    assert freshness.days_since_last_update == 2
