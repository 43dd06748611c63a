#!/usr/bin/env python3
"""
Script to set up a Prefect deployment that refreshes the dashboard dataset.
The deployment runs once per hour, matching the default cache TTL.
"""

from prefect import serve
from prefect_flows import covid_dashboard_refresh_flow
from datetime import timedelta

if __name__ == "__main__":
    print("Setting up Prefect deployment for the COVID-19 dashboard refresh")

    refresh_deployment = covid_dashboard_refresh_flow.to_deployment(
        name="covid-dashboard-hourly-refresh",
        interval=timedelta(hours=1),
        tags=["covid", "jhu-csse", "dashboard"],
        description="Rebuilds the COVID-19 time-series dataset every hour"
    )

    print("\nStarting Prefect scheduler. Press Ctrl+C to stop.")
    serve(refresh_deployment)
