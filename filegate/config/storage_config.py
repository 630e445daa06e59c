"""
Storage Configuration

Selects the object storage backend and builds Google Cloud Storage clients.
"""

import logging
import os
from typing import Optional

from google.cloud import storage
from google.oauth2 import service_account

logger = logging.getLogger(__name__)

SUPPORTED_BACKENDS = ("local", "gcs")


class StorageConfig:
    """Object storage settings."""

    def __init__(self):
        self.backend = os.getenv("STORAGE_BACKEND", "local").strip().lower()
        self.local_dir = os.getenv("LOCAL_STORAGE_DIR", "/tmp/filegate")
        self.gcs_project: Optional[str] = os.getenv("GCS_PROJECT") or None
        self.credentials_path: Optional[str] = (
            os.getenv("GOOGLE_APPLICATION_CREDENTIALS") or None
        )

        if self.backend not in SUPPORTED_BACKENDS:
            raise ValueError(
                f"Unsupported STORAGE_BACKEND '{self.backend}', "
                f"expected one of {', '.join(SUPPORTED_BACKENDS)}"
            )


def create_gcs_client(config: StorageConfig) -> storage.Client:
    """
    Create a Google Cloud Storage client.

    Uses the service account file when one is configured and present,
    application default credentials otherwise.

    Args:
        config: Storage configuration

    Returns:
        Configured storage client
    """
    credentials_path = config.credentials_path
    if credentials_path and os.path.exists(credentials_path):
        credentials = service_account.Credentials.from_service_account_file(
            credentials_path
        )
        logger.info(f"GCS client initialized with service account: {credentials_path}")
        return storage.Client(project=config.gcs_project, credentials=credentials)

    logger.info("GCS client initialized with default credentials")
    return storage.Client(project=config.gcs_project)
