"""Database layer for url-map."""

from .base import MappingStorageBase
from .memory import InMemoryMappingStorage
from .models import Mapping
from .factory import create_storage, create_storage_from_config

__all__ = [
    "MappingStorageBase",
    "InMemoryMappingStorage",
    "Mapping",
    "create_storage",
    "create_storage_from_config",
]
