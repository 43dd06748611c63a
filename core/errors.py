"""Error types raised by the data pipeline."""


class CovidDataError(Exception):
    """Base class for pipeline errors."""


class NetworkError(CovidDataError):
    """A remote source could not be fetched (transport failure or non-2xx)."""

    def __init__(self, url: str, status: int | None = None, reason: str | None = None):
        self.url = url
        self.status = status
        self.reason = reason

        if status is not None:
            message = f"HTTP error {status} fetching {url}"
        else:
            message = f"Failed to fetch {url}"
        if reason:
            message = f"{message}: {reason}"

        super().__init__(message)


class NotFoundError(CovidDataError):
    """A named entity (country, data type) is absent from a lookup."""

    def __init__(self, entity: str, name: str):
        self.entity = entity
        self.name = name
        super().__init__(f"{entity.capitalize()} '{name}' not found")
