"""Infrastructure layer: object storage adapters."""

from .local_object_storage_repository import LocalObjectStorageRepository
from .storage_factory import StorageFactory

__all__ = [
    "LocalObjectStorageRepository",
    "StorageFactory",
]
