"""Shared fixtures: a scripted HTTP client, a fixed clock and a container."""

import threading
from datetime import date

import pytest
import yaml

from core.config import Config
from core.container import Container
from core.errors import NetworkError

CONFIRMED_URL = "https://example.test/confirmed.csv"
DEATHS_URL = "https://example.test/deaths.csv"
API_URL = "https://api.example.test/v3/covid-19"

CONFIRMED_CSV = """Province/State,Country/Region,Lat,Long,1/1/23,1/2/23,1/3/23
,Italy,41.9,12.6,100,110,130
Ontario,Canada,51.2,-85.3,40,45,50
Quebec,Canada,52.9,-73.5,10,15,20
"""

DEATHS_CSV = """Province/State,Country/Region,Lat,Long,1/1/23,1/2/23,1/3/23
,Italy,41.9,12.6,10,12,15
Ontario,Canada,51.2,-85.3,1,2,2
Quebec,Canada,52.9,-73.5,0,1,1
"""


class FakeHttpClient:
    """Returns canned responses per URL; an Exception value is raised instead."""

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []
        self._lock = threading.Lock()

    def _respond(self, url, params):
        with self._lock:
            self.calls.append((url, params))
        if url not in self.responses:
            raise NetworkError(url, status=404, reason="Not Found")
        response = self.responses[url]
        if isinstance(response, Exception):
            raise response
        return response

    def get_json(self, url, params=None):
        return self._respond(url, params)

    def get_text(self, url, params=None):
        return self._respond(url, params)


class FixedClock:
    def __init__(self, millis=1_700_000_000_000, today=date(2023, 1, 10)):
        self.millis = millis
        self.current_date = today

    def now_millis(self):
        return self.millis

    def today(self):
        return self.current_date

    def advance(self, millis):
        self.millis += millis


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "sources.yaml"
    path.write_text(yaml.safe_dump({
        'global': {
            'logging': {'level': 'DEBUG'},
            'cache': {'ttl_ms': 60_000},
            'freshness': {'stale_after_days': 180},
        },
        'sources': {
            'jhu_csse': {
                'enabled': True,
                'description': 'CSSE test tables',
                'urls': {'confirmed': CONFIRMED_URL, 'deaths': DEATHS_URL},
            },
            'disease_sh': {
                'enabled': False,
                'api': {'base_url': API_URL},
                'historical_days': 30,
            },
        },
    }))
    return path


@pytest.fixture
def http_client():
    return FakeHttpClient({CONFIRMED_URL: CONFIRMED_CSV, DEATHS_URL: DEATHS_CSV})


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def container(config_path, http_client, clock):
    container = Container(Config(str(config_path)))
    container.set_http_client(http_client)
    container.set_clock(clock)
    return container
