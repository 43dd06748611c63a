"""Derived statistics over normalized series.

Everything here is pure: no I/O, no clock, inputs are never mutated.
"""

from typing import Mapping

from models import CountrySeries, NormalizedSeries, Rates, RankedCountry

TREND_WINDOW_DAYS = 7


def estimate_active(confirmed: NormalizedSeries, deaths: NormalizedSeries,
                    last_updated: str | None = None) -> NormalizedSeries:
    """Estimate active cases as confirmed minus deaths, clamped at zero.

    Only countries present in both series are included. The global series
    is the sum of the clamped per-country values, so it can exceed
    ``confirmed.global - deaths.global`` when a country is clamped.
    """
    active = NormalizedSeries(
        data_type='active',
        last_updated=last_updated or confirmed.last_updated,
    )

    for name, confirmed_country in confirmed.countries.items():
        deaths_country = deaths.countries.get(name)
        if deaths_country is None:
            continue

        country = CountrySeries(name=name, coordinates=confirmed_country.coordinates)
        for date, confirmed_value in confirmed_country.total.items():
            value = max(0, (confirmed_value or 0) - deaths_country.total.get(date, 0))
            country.total[date] = value
            active.global_series[date] = active.global_series.get(date, 0) + value

        active.countries[name] = country

    active.global_series = dict(sorted(active.global_series.items()))
    return active


def calculate_rates(confirmed: float, deaths: float, recovered: float = 0) -> Rates:
    """Mortality, recovery and active rates as percentages of confirmed."""
    if not confirmed:
        return Rates()

    def pct(part: float) -> float:
        return round(part / confirmed * 100, 2)

    return Rates(
        mortality_rate=pct(deaths),
        recovery_rate=pct(recovered),
        active_rate=pct(confirmed - deaths - recovered),
    )


def compute_trend(series: Mapping[str, float] | None) -> float:
    """Relative change of the last 7 days' mean against the 7 days before.

    Returns a fraction (0.25 means +25%). With fewer than 7 dates, or no
    earlier window to compare against, the trend is 0. A zero baseline
    gives 1 when there is any recent activity.
    """
    if not series:
        return 0

    dates = sorted(series)
    if len(dates) < TREND_WINDOW_DAYS:
        return 0

    recent = dates[-TREND_WINDOW_DAYS:]
    older = dates[-2 * TREND_WINDOW_DAYS:-TREND_WINDOW_DAYS]
    if not older:
        return 0

    recent_avg = sum(series.get(d) or 0 for d in recent) / len(recent)
    older_avg = sum(series.get(d) or 0 for d in older) / len(older)

    if older_avg == 0:
        return 1 if recent_avg > 0 else 0

    return (recent_avg - older_avg) / older_avg


def latest_value(total: Mapping[str, int]) -> int:
    """Value at the most recent ISO date key, 0 for an empty series."""
    if not total:
        return 0
    return total.get(max(total), 0) or 0


def top_n(countries: Mapping[str, CountrySeries], n: int = 10) -> list[RankedCountry]:
    """Rank countries by their latest value, highest first.

    Ties keep the mapping's iteration order.
    """
    ranked = [
        RankedCountry(name=name, value=latest_value(country.total), data=country)
        for name, country in countries.items()
    ]
    ranked.sort(key=lambda item: item.value, reverse=True)
    return ranked[:max(n, 0)]


def latest_and_daily(series: Mapping[str, int]) -> tuple[int, int]:
    """Latest value and its change since the previous date.

    The change is not clamped; downward corrections show up as negative.
    """
    dates = sorted(series)
    if not dates:
        return 0, 0

    current = series.get(dates[-1]) or 0
    previous = 0
    if len(dates) > 1:
        previous = series.get(dates[-2]) or 0
    return current, current - previous


def filter_date_range(series: Mapping[str, int], start: str | None,
                      end: str | None) -> dict[str, int]:
    """Restrict a series to ``start <= date <= end`` (ISO strings)."""
    if not start or not end:
        return dict(series)
    return {d: v for d, v in series.items() if start <= d <= end}
