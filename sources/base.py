"""Base class for all data sources with dependency injection."""

import time
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable

from core.container import Container


class BaseDataSource(ABC):
    """Abstract base class for data sources with dependency injection."""

    # Subclasses must define these
    name: str
    description: str

    def __init__(self, container: Container):
        """Initialize with dependency container."""
        self.container = container
        self.config = container.get_config().get_source_config(self.name)
        self.logger = container.get_logger(f"sources.{self.name}")
        self.http_client = container.get_http_client()

    @abstractmethod
    def extract(self) -> Any:
        """Fetch the raw payload(s) from the remote source."""
        ...

    @abstractmethod
    def transform(self, raw_data: Any) -> Any:
        """Map raw payloads into model records.

        Args:
            raw_data: Output of the extract phase.

        Returns:
            Records ready for the consumers of this source.
        """
        ...

    def run(self) -> Any:
        """Extract then transform.

        Failures are logged and re-raised; nothing is retried here.
        """
        self.logger.info(f"Starting {self.description} fetch")
        start_time = time.monotonic()

        try:
            raw_data = self.extract()
            result = self.transform(raw_data)
        except Exception as e:
            self.logger.error(f"{self.description} fetch failed: {str(e)}")
            raise

        duration = time.monotonic() - start_time
        self.logger.info(f"{self.description} fetch completed in {duration:.2f}s")
        return result

    def fetch_parallel(self, fetchers: dict[str, Callable[[], Any]]) -> dict[str, Any]:
        """Run every fetcher concurrently and wait for all of them.

        The first failure (in ``fetchers`` order) is raised once all
        fetchers have finished.
        """
        with ThreadPoolExecutor(max_workers=max(len(fetchers), 1)) as executor:
            futures = {key: executor.submit(fetcher) for key, fetcher in fetchers.items()}
        return {key: future.result() for key, future in futures.items()}

    def is_enabled(self) -> bool:
        """Check if this source is enabled in configuration."""
        return self.config.get('enabled', False)
