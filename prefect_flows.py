"""Prefect flow that rebuilds the dashboard dataset on a schedule."""

import logging
from typing import Any

from prefect import flow, task

from core.config import Config
from core.container import Container
from dashboard.service import CovidDataService
from models import CombinedData

logger = logging.getLogger(__name__)


@task(name="Fetch COVID-19 Time Series", retries=2, retry_delay_seconds=60)
def fetch_dataset(service: CovidDataService) -> CombinedData:
    """
    Rebuild the combined confirmed/deaths/active dataset.
    Retries belong to this scheduled caller; the service itself never retries.
    """
    service.clear_cache()
    return service.get_all_data()


@task(name="Summarize COVID-19 Dataset")
def summarize_dataset(service: CovidDataService, top: int = 10) -> dict[str, Any]:
    """Headline numbers, freshness and the top countries by confirmed cases."""
    stats = service.get_global_stats()
    freshness = service.get_data_freshness()

    if freshness.is_stale:
        logger.warning(f"{freshness.warning} ({freshness.days_since_last_update} days)")

    return {
        'last_update': stats.last_update,
        'confirmed': stats.current.confirmed,
        'deaths': stats.current.deaths,
        'active': stats.current.active,
        'daily_confirmed': stats.daily.confirmed,
        'is_stale': freshness.is_stale,
        'top_countries': [item.name for item in service.get_top_countries('confirmed', top)],
    }


@flow(name="COVID-19 Dashboard Refresh", log_prints=True)
def covid_dashboard_refresh_flow(config_path: str | None = None) -> dict[str, Any]:
    """
    Fetch the CSSE tables, rebuild the dataset and log a summary.
    """
    logger.info("=" * 50)
    logger.info("Starting COVID-19 dashboard refresh")
    logger.info("=" * 50)

    container = Container(Config(config_path) if config_path else Config())
    service = CovidDataService(container)

    try:
        fetch_dataset(service)
        summary = summarize_dataset(service)
    except Exception as e:
        logger.error(f"Dashboard refresh failed: {str(e)}")
        raise

    logger.info(f"Summary: {summary}")
    return summary


if __name__ == "__main__":
    covid_dashboard_refresh_flow()
