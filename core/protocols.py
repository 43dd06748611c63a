"""Protocol definitions for dependency injection."""

from datetime import date
from typing import Protocol, Any


class HttpClient(Protocol):
    """Protocol for HTTP client implementations."""

    def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """Make a GET request and return the decoded JSON body."""
        ...

    def get_text(self, url: str, params: dict[str, Any] | None = None) -> str:
        """Make a GET request and return the body as text."""
        ...


class Clock(Protocol):
    """Protocol for wall-clock access."""

    def now_millis(self) -> int:
        """Milliseconds since the epoch."""
        ...

    def today(self) -> date:
        """Current calendar date (UTC)."""
        ...

