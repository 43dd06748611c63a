"""Time-series records built from the CSV sources."""

from dataclasses import dataclass, field

# Data types exposed by the combined dataset
DATA_TYPES = ('confirmed', 'deaths', 'active')


@dataclass(frozen=True)
class Coordinates:
    lat: float = 0.0
    lng: float = 0.0


@dataclass
class RawRow:
    """One region line of a source table.

    ``daily_values`` keeps the source's native date tokens (e.g. ``3/14/21``)
    in column order.
    """
    region_name: str
    sub_region: str | None
    lat: float
    lng: float
    daily_values: dict[str, int] = field(default_factory=dict)


@dataclass
class RegionSeries:
    """Daily values of a single province/state (or of the country itself)."""
    name: str
    coordinates: Coordinates
    data: dict[str, int] = field(default_factory=dict)


@dataclass
class CountrySeries:
    """Per-country series; ``total`` is the sum over ``provinces``."""
    name: str
    coordinates: Coordinates
    total: dict[str, int] = field(default_factory=dict)
    provinces: dict[str, RegionSeries] = field(default_factory=dict)


@dataclass
class NormalizedSeries:
    """Per-country and global daily totals for one data type."""
    data_type: str
    last_updated: str
    countries: dict[str, CountrySeries] = field(default_factory=dict)
    global_series: dict[str, int] = field(default_factory=dict)

    def dates(self) -> list[str]:
        """ISO date keys of the global series, ascending."""
        return sorted(self.global_series)


@dataclass
class DatasetMetadata:
    last_updated: str
    source: str
    data_types: list[str] = field(default_factory=lambda: list(DATA_TYPES))
    notes: dict[str, str] = field(default_factory=dict)


@dataclass
class CombinedData:
    """Confirmed, deaths and estimated active series fetched together."""
    confirmed: NormalizedSeries
    deaths: NormalizedSeries
    active: NormalizedSeries
    metadata: DatasetMetadata

    def series(self, data_type: str) -> NormalizedSeries:
        """Return the series for ``data_type``."""
        if data_type not in DATA_TYPES:
            raise ValueError(f"Unknown data type '{data_type}', expected one of {DATA_TYPES}")
        return getattr(self, data_type)

    def items(self) -> list[tuple[str, NormalizedSeries]]:
        return [(data_type, self.series(data_type)) for data_type in DATA_TYPES]
