from .timeseries import (
    Coordinates,
    RawRow,
    RegionSeries,
    CountrySeries,
    NormalizedSeries,
    DatasetMetadata,
    CombinedData,
    DATA_TYPES,
)
from .stats import Rates, RankedCountry, SeriesCounts, GlobalStats, DataFreshness, LatestValue
from .snapshots import (
    GlobalSnapshot,
    CountrySnapshot,
    ContinentSnapshot,
    HistoricalPoint,
    CovidOverview,
)

__all__ = [
    'Coordinates',
    'RawRow',
    'RegionSeries',
    'CountrySeries',
    'NormalizedSeries',
    'DatasetMetadata',
    'CombinedData',
    'DATA_TYPES',
    'Rates',
    'RankedCountry',
    'SeriesCounts',
    'GlobalStats',
    'DataFreshness',
    'LatestValue',
    'GlobalSnapshot',
    'CountrySnapshot',
    'ContinentSnapshot',
    'HistoricalPoint',
    'CovidOverview',
]
