from .csv_parser import parse_csv, parse_csv_line, DATE_COLUMN_PATTERN
from .transform import format_date, transform_to_time_series
from .metrics import (
    estimate_active,
    calculate_rates,
    compute_trend,
    top_n,
    latest_and_daily,
    filter_date_range,
)

__all__ = [
    'parse_csv',
    'parse_csv_line',
    'DATE_COLUMN_PATTERN',
    'format_date',
    'transform_to_time_series',
    'estimate_active',
    'calculate_rates',
    'compute_trend',
    'top_n',
    'latest_and_daily',
    'filter_date_range',
]
