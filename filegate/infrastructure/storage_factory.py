"""
Storage Factory

Factory for creating the object storage repository implementation.
The application layer stays decoupled from the concrete adapter through the
`IObjectStorageRepository` interface.
"""

import logging
from typing import Optional

from filegate.config.storage_config import StorageConfig, create_gcs_client
from filegate.domain.file_storage.storage_repository import IObjectStorageRepository
from filegate.infrastructure.local_object_storage_repository import (
    LocalObjectStorageRepository,
)

logger = logging.getLogger(__name__)


class StorageFactory:
    """Factory that returns the configured object storage repository."""

    @staticmethod
    def create_storage(config: Optional[StorageConfig] = None) -> IObjectStorageRepository:
        """
        Create the object storage repository selected by configuration.

        Args:
            config: Storage configuration, read from the environment if None

        Returns:
            `IObjectStorageRepository` implementation

        Environment Variables:
            STORAGE_BACKEND: 'local' (default) or 'gcs'
            LOCAL_STORAGE_DIR: Base directory for local storage (default: /tmp/filegate)

        Raises:
            RuntimeError: If the selected backend cannot be initialized
        """
        if config is None:
            config = StorageConfig()

        if config.backend == "gcs":
            return StorageFactory._create_gcs_storage(config)
        return StorageFactory._create_local_storage(config)

    @staticmethod
    def _create_local_storage(config: StorageConfig) -> IObjectStorageRepository:
        try:
            storage = LocalObjectStorageRepository(config.local_dir)
            logger.info(f"Storage factory: using local filesystem storage at {config.local_dir}")
            return storage
        except Exception as e:
            raise RuntimeError(f"Failed to initialize local storage: {e}") from e

    @staticmethod
    def _create_gcs_storage(config: StorageConfig) -> IObjectStorageRepository:
        from filegate.infrastructure.gcs_object_storage_repository import (
            GCSObjectStorageRepository,
        )

        try:
            storage = GCSObjectStorageRepository(create_gcs_client(config))
            logger.info("Storage factory: using Google Cloud Storage")
            return storage
        except Exception as e:
            raise RuntimeError(f"Failed to initialize GCS storage: {e}") from e
