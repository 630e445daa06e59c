"""
Google Cloud Storage Repository Implementation

Concrete implementation of IObjectStorageRepository backed by Google Cloud
Storage. Every logical bucket maps to the GCS bucket of the same name and
every path to a blob name.
"""

import logging
from typing import BinaryIO, Dict, List, Optional

from google.cloud import storage
from google.cloud.exceptions import GoogleCloudError, NotFound

from filegate.domain.errors import StorageBackendError
from filegate.domain.file_storage.storage_repository import IObjectStorageRepository

logger = logging.getLogger(__name__)


class GCSObjectStorageRepository(IObjectStorageRepository):
    """
    Google Cloud Storage implementation of IObjectStorageRepository.

    Thread Safety:
        This implementation is thread-safe. The GCS client handles concurrent
        operations safely.

    Attributes:
        client: Google Cloud Storage client instance
    """

    def __init__(self, client: Optional[storage.Client] = None):
        """
        Initialize the GCS object storage repository.

        Args:
            client: Preconfigured storage client; a default-credentials
                client is created when omitted

        Raises:
            GoogleCloudError: If GCS client initialization fails
        """
        self.client = client or storage.Client()

    @staticmethod
    def _check_coordinates(bucket: str, path: Optional[str] = None) -> None:
        if not bucket or not bucket.strip():
            raise ValueError("bucket cannot be empty")
        if path is not None and (not path or not path.strip()):
            raise ValueError("path cannot be empty")

    def open(self, bucket: str, path: str) -> Optional[BinaryIO]:
        try:
            self._check_coordinates(bucket, path)
        except ValueError:
            return None

        try:
            # get_blob fetches metadata only; absence shows up here, not mid-stream
            blob = self.client.bucket(bucket).get_blob(path)
            if blob is None:
                return None
            return blob.open("rb")
        except NotFound:
            return None
        except GoogleCloudError as e:
            raise StorageBackendError(
                f"Failed to open gs://{bucket}/{path}", original_error=e
            ) from e

    def get_content(self, bucket: str, path: str) -> Optional[bytes]:
        try:
            self._check_coordinates(bucket, path)
        except ValueError:
            return None

        try:
            blob = self.client.bucket(bucket).blob(path)
            # download raises NotFound for missing blobs, saving an exists() round trip
            return blob.download_as_bytes()
        except NotFound:
            return None
        except GoogleCloudError as e:
            raise StorageBackendError(
                f"Failed to read gs://{bucket}/{path}", original_error=e
            ) from e

    def list(self, bucket: str, prefix: str = "") -> List[str]:
        try:
            self._check_coordinates(bucket)
        except ValueError:
            return []

        try:
            blobs = self.client.list_blobs(bucket, prefix=prefix or None)
            return sorted(blob.name for blob in blobs)
        except NotFound:
            return []
        except GoogleCloudError as e:
            raise StorageBackendError(
                f"Failed to list gs://{bucket}/{prefix}", original_error=e
            ) from e

    def bucket_exists(self, bucket: str) -> bool:
        try:
            self._check_coordinates(bucket)
        except ValueError:
            return False

        try:
            return self.client.bucket(bucket).exists()
        except GoogleCloudError as e:
            raise StorageBackendError(
                f"Failed to check bucket {bucket}", original_error=e
            ) from e

    def store(
        self,
        bucket: str,
        path: str,
        data: bytes,
        content_type: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None,
    ) -> None:
        self._check_coordinates(bucket, path)
        try:
            blob = self.client.bucket(bucket).blob(path)
            if metadata:
                blob.metadata = dict(metadata)
            blob.upload_from_string(data, content_type=content_type)
        except GoogleCloudError as e:
            raise StorageBackendError(
                f"Failed to store gs://{bucket}/{path}", original_error=e
            ) from e

    def delete(self, bucket: str, path: str) -> bool:
        try:
            self._check_coordinates(bucket, path)
        except ValueError:
            return True

        try:
            self.client.bucket(bucket).blob(path).delete()
            return True
        except NotFound:
            return True
        except GoogleCloudError as e:
            raise StorageBackendError(
                f"Failed to delete gs://{bucket}/{path}", original_error=e
            ) from e

    def create_bucket(self, bucket: str) -> None:
        self._check_coordinates(bucket)
        try:
            if self.client.bucket(bucket).exists():
                return
            self.client.create_bucket(bucket)
            logger.info(f"Created GCS bucket {bucket}")
        except GoogleCloudError as e:
            raise StorageBackendError(
                f"Failed to create bucket {bucket}", original_error=e
            ) from e

    def health_check(self) -> bool:
        """Check that the client can reach GCS."""
        try:
            next(iter(self.client.list_buckets(max_results=1)), None)
            return True
        except Exception as e:
            logger.warning(f"GCS health check failed: {e}")
            return False
