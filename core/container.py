"""Dependency injection container."""

import logging
import time
import requests
from datetime import date, datetime, timezone
from typing import Any

from .config import Config
from .errors import NetworkError
from .protocols import HttpClient, Clock


class RequestsHttpClient:
    """HTTP client implementation using requests library.

    Errors are not retried here; a failed request surfaces as NetworkError
    and the caller decides whether to try again.
    """

    def __init__(self, timeout: int = 30, session: requests.Session | None = None):
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get(self, url: str, params: dict[str, Any] | None = None) -> requests.Response:
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise NetworkError(url, reason=str(e)) from e

        if not response.ok:
            raise NetworkError(url, status=response.status_code, reason=response.reason)

        return response

    def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """Make a GET request and return JSON response."""
        response = self._get(url, params=params)
        try:
            return response.json()
        except ValueError as e:
            raise NetworkError(url, status=response.status_code, reason=f"invalid JSON: {e}") from e

    def get_text(self, url: str, params: dict[str, Any] | None = None) -> str:
        """Make a GET request and return the body as text."""
        return self._get(url, params=params).text


class SystemClock:
    """Clock backed by the system wall clock."""

    def now_millis(self) -> int:
        return int(time.time() * 1000)

    def today(self) -> date:
        return datetime.now(timezone.utc).date()


class Container:
    """Dependency injection container for managing application dependencies."""

    def __init__(self, config: Config | None = None):
        self._config = config or Config()
        self._instances: dict[str, Any] = {}
        self._factories: dict[str, Any] = {}

        # Register default implementations
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default dependency implementations."""
        global_config = self._config.get_global_config()

        # Logger factory
        def create_logger(name: str) -> logging.Logger:
            log_config = global_config.get('logging', {})
            logging.basicConfig(
                level=getattr(logging, log_config.get('level', 'INFO')),
                format=log_config.get('format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s')
            )
            return logging.getLogger(name)

        self._factories['logger'] = create_logger

        # HTTP client (singleton)
        http_config = global_config.get('http', {})
        self._factories['http_client'] = lambda: RequestsHttpClient(
            timeout=http_config.get('timeout', 30)
        )

        # Clock (singleton)
        self._factories['clock'] = lambda: SystemClock()

    def get_logger(self, name: str) -> logging.Logger:
        """Get a logger instance for the given name."""
        return self._factories['logger'](name)

    def get_http_client(self) -> HttpClient:
        """Get the HTTP client instance."""
        if 'http_client' not in self._instances:
            self._instances['http_client'] = self._factories['http_client']()
        return self._instances['http_client']

    def get_clock(self) -> Clock:
        """Get the clock instance."""
        if 'clock' not in self._instances:
            self._instances['clock'] = self._factories['clock']()
        return self._instances['clock']

    def get_config(self) -> Config:
        """Get the configuration instance."""
        return self._config

    # Methods for testing - allow overriding dependencies
    def set_http_client(self, client: HttpClient) -> None:
        """Override the HTTP client (useful for testing)."""
        self._instances['http_client'] = client

    def set_clock(self, clock: Clock) -> None:
        """Override the clock (useful for testing)."""
        self._instances['clock'] = clock
