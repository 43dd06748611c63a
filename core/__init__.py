from .config import Config
from .container import Container
from .errors import CovidDataError, NetworkError, NotFoundError
from .protocols import HttpClient, Clock

__all__ = [
    'Config',
    'Container',
    'CovidDataError',
    'NetworkError',
    'NotFoundError',
    'HttpClient',
    'Clock',
]
