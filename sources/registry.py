"""Registry of data source classes."""

from typing import Type

from .base import BaseDataSource
from core.container import Container
from core.errors import NotFoundError


class SourceRegistry:
    """Registry for data source classes."""

    def __init__(self):
        self._sources: dict[str, Type[BaseDataSource]] = {}

    def register(self, source_class: Type[BaseDataSource]) -> Type[BaseDataSource]:
        """Register a data source class. Can be used as a decorator."""
        self._sources[source_class.name] = source_class
        return source_class

    def get(self, name: str) -> Type[BaseDataSource] | None:
        """Get a data source class by name."""
        return self._sources.get(name)

    def get_all(self) -> dict[str, Type[BaseDataSource]]:
        """Get all registered source classes."""
        return self._sources.copy()

    def create_source(self, name: str, container: Container) -> BaseDataSource:
        """Instantiate the source registered under ``name``.

        Raises:
            NotFoundError: If no source is registered under that name.
            KeyError: If the source has no configuration section.
        """
        source_class = self._sources.get(name)
        if source_class is None:
            raise NotFoundError('source', name)
        return source_class(container)

    def create_enabled_sources(self, container: Container) -> list[BaseDataSource]:
        """Instantiate every registered source enabled in configuration."""
        enabled_names = container.get_config().get_enabled_sources()
        return [
            self.create_source(name, container)
            for name in enabled_names
            if name in self._sources
        ]


# Global registry instance
_registry = SourceRegistry()


def get_registry() -> SourceRegistry:
    """Get the global source registry."""
    return _registry


def register(source_class: Type[BaseDataSource]) -> Type[BaseDataSource]:
    """Decorator to register a data source class."""
    return _registry.register(source_class)
