from .base import BaseDataSource
from .registry import SourceRegistry, get_registry

# Import sources to register them
from .jhu_csse import JhuCsseSource
from .disease_sh import DiseaseShSource

__all__ = ['BaseDataSource', 'SourceRegistry', 'get_registry', 'JhuCsseSource', 'DiseaseShSource']
