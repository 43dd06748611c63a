"""Johns Hopkins CSSE global time series - raw CSV tables on GitHub."""

from .base import BaseDataSource
from .registry import register
from models import NormalizedSeries
from timeseries import parse_csv, transform_to_time_series

# Recovered counts were discontinued upstream on 2021-08-05
CSV_DATA_TYPES = ('confirmed', 'deaths')


@register
class JhuCsseSource(BaseDataSource):
    """Confirmed and deaths time series from the CSSE repository."""

    name = "jhu_csse"
    description = "Johns Hopkins CSSE time series"

    @property
    def attribution(self) -> str:
        return self.config.get('attribution', 'Johns Hopkins University CSSE')

    def get_url(self, data_type: str) -> str:
        urls = self.config.get('urls', {})
        if data_type not in urls:
            raise KeyError(f"No URL configured for '{data_type}' in source '{self.name}'")
        return urls[data_type]

    def fetch_csv(self, data_type: str) -> str:
        """Download the raw CSV table for one data type."""
        url = self.get_url(data_type)
        self.logger.info(f"Fetching {data_type} CSV from {url}")
        text = self.http_client.get_text(url)
        self.logger.info(f"Received {len(text)} bytes of {data_type} data")
        return text

    def extract(self) -> dict[str, str]:
        """Fetch all CSV tables concurrently."""
        return self.fetch_parallel({
            data_type: (lambda dt=data_type: self.fetch_csv(dt))
            for data_type in CSV_DATA_TYPES
        })

    def transform(self, raw_data: dict[str, str]) -> dict[str, NormalizedSeries]:
        """Parse each table and aggregate it into a NormalizedSeries."""
        result = {}

        for data_type, text in raw_data.items():
            rows = parse_csv(text)
            self.logger.info(f"Parsed {len(rows)} {data_type} rows")

            series = transform_to_time_series(rows, data_type)
            self.logger.info(
                f"Aggregated {data_type} into {len(series.countries)} countries "
                f"over {len(series.global_series)} dates"
            )
            result[data_type] = series

        return result
