#!/usr/bin/env python3
"""Command-line summary of the COVID-19 dashboard data."""

import argparse
import sys

from core.config import Config
from core.container import Container
from core.errors import CovidDataError
from dashboard.service import CovidDataService
from models import DATA_TYPES
from sources import get_registry
from sources.disease_sh import get_top_countries


def list_sources(container: Container) -> None:
    """List all available sources and their status."""
    registry = get_registry()
    config = container.get_config()

    print("\nAvailable Data Sources:")
    print("-" * 50)

    for name, source_class in registry.get_all().items():
        try:
            source_config = config.get_source_config(name)
            status = "enabled" if source_config.get('enabled', False) else "disabled"
            desc = source_config.get('description', source_class.description)
        except KeyError:
            status = "not configured"
            desc = source_class.description

        print(f"  {name}: {desc}")
        print(f"    Status: {status}")
        print()


def print_global_summary(service: CovidDataService, data_type: str, top: int) -> None:
    stats = service.get_global_stats()
    freshness = service.get_data_freshness()
    rates = service.get_rates()

    print("\n" + "=" * 60)
    print(f"Global summary (last update: {stats.last_update})")
    print("=" * 60)
    for field_name in DATA_TYPES:
        current = getattr(stats.current, field_name)
        daily = getattr(stats.daily, field_name)
        print(f"  {field_name:<10} {current:>15,}  ({daily:+,} since previous day)")
    print(f"  Mortality rate: {rates.mortality_rate:.2f}%")
    print(f"  7-day {data_type} trend: {service.get_trend(data_type) * 100:+.1f}%")

    if freshness.is_stale:
        print(f"\n  Warning: {freshness.warning} ({freshness.days_since_last_update} days ago)")

    print(f"\nTop {top} countries by {data_type}:")
    for rank, item in enumerate(service.get_top_countries(data_type, top), start=1):
        print(f"  {rank:>3}. {item.name:<30} {item.value:>15,}")


def print_country_summary(service: CovidDataService, country_name: str) -> None:
    stats = service.get_country_stats(country_name)
    rates = service.get_rates(country_name)

    print("\n" + "=" * 60)
    print(f"{country_name}")
    print("=" * 60)
    for data_type, value in stats.items():
        trend = service.get_trend(data_type, country_name)
        print(f"  {data_type:<10} {value.current:>15,}  ({value.daily:+,}, trend {trend * 100:+.1f}%)")
    print(f"  Mortality rate: {rates.mortality_rate:.2f}%")


def print_snapshot(container: Container, top: int) -> None:
    source = get_registry().create_source('disease_sh', container)
    overview = source.fetch_overview()

    print("\n" + "=" * 60)
    print(f"disease.sh snapshot (updated {overview.last_update})")
    print("=" * 60)
    print(f"  Confirmed: {overview.global_stats.confirmed:,}")
    print(f"  Deaths:    {overview.global_stats.deaths:,}")
    print(f"  Today:     {overview.global_stats.today_cases:+,} cases")

    print(f"\nTop {top} countries by confirmed:")
    for country in get_top_countries(overview.countries, limit=top):
        print(f"  {country.country:<30} {country.confirmed:>15,}")


def main():
    parser = argparse.ArgumentParser(
        description="Summarize COVID-19 time series and snapshots"
    )
    parser.add_argument(
        '--country',
        help="Show the summary for one country"
    )
    parser.add_argument(
        '--type', '-t',
        choices=DATA_TYPES,
        default='confirmed',
        help="Data type used for trend and ranking (default: confirmed)"
    )
    parser.add_argument(
        '--top', '-n',
        type=int,
        default=10,
        help="Number of countries in the ranking"
    )
    parser.add_argument(
        '--snapshot',
        action='store_true',
        help="Use the disease.sh snapshot API instead of the CSV time series"
    )
    parser.add_argument(
        '--list', '-l',
        action='store_true',
        help="List available sources"
    )
    parser.add_argument(
        '--config', '-c',
        help="Path to configuration file"
    )

    args = parser.parse_args()

    # Initialize container
    config = Config(args.config) if args.config else Config()
    container = Container(config)

    if args.list:
        list_sources(container)
        return

    try:
        if args.snapshot:
            print_snapshot(container, args.top)
            return

        service = CovidDataService(container)
        if args.country:
            print_country_summary(service, args.country)
        else:
            print_global_summary(service, args.type, args.top)
    except CovidDataError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
