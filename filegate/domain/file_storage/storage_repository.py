"""
Object Storage Repository Interface

Abstract interface for bucket/path object storage.
The domain and application layers depend only on this contract; concrete
adapters (local filesystem, Google Cloud Storage) live in infrastructure.
"""

from abc import ABC, abstractmethod
from typing import BinaryIO, Dict, List, Optional


class IObjectStorageRepository(ABC):
    """
    Unified interface for object storage operations.

    Contract Guarantees:
    - Objects are addressed by a bucket identifier and a path inside it
    - Absence is reported as None / False / empty list, never as an error
    - Unexpected backend failures raise StorageBackendError
    - delete() is idempotent

    Thread Safety:
    - Implementations must be safe for concurrent reads
    """

    @abstractmethod
    def open(self, bucket: str, path: str) -> Optional[BinaryIO]:
        """
        Open an object for reading.

        Args:
            bucket: Storage namespace identifier
            path: Object path within the bucket (e.g., 'products/m1/img.jpg')

        Returns:
            Readable binary stream if the object exists, None otherwise.
            The caller is responsible for closing the stream.

        Raises:
            StorageBackendError: If the backend fails unexpectedly
        """
        pass  # pragma: no cover

    @abstractmethod
    def get_content(self, bucket: str, path: str) -> Optional[bytes]:
        """
        Read an object fully into memory.

        Returns:
            Object bytes, or None if the object does not exist

        Raises:
            StorageBackendError: If the backend fails unexpectedly
        """
        pass  # pragma: no cover

    @abstractmethod
    def list(self, bucket: str, prefix: str = "") -> List[str]:
        """
        List object paths under a prefix.

        Returns:
            Sorted object paths; empty if the bucket does not exist

        Raises:
            StorageBackendError: If the backend fails unexpectedly
        """
        pass  # pragma: no cover

    @abstractmethod
    def bucket_exists(self, bucket: str) -> bool:
        """
        Check whether a bucket exists.

        Raises:
            StorageBackendError: If the backend fails unexpectedly
        """
        pass  # pragma: no cover

    @abstractmethod
    def store(
        self,
        bucket: str,
        path: str,
        data: bytes,
        content_type: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None,
    ) -> None:
        """
        Store an object, overwriting any existing one.

        Raises:
            ValueError: If bucket or path is empty or invalid
            StorageBackendError: If the backend fails unexpectedly
        """
        pass  # pragma: no cover

    @abstractmethod
    def delete(self, bucket: str, path: str) -> bool:
        """
        Delete an object.

        Returns:
            True if the object was deleted or did not exist

        Raises:
            StorageBackendError: If the backend fails unexpectedly
        """
        pass  # pragma: no cover

    @abstractmethod
    def create_bucket(self, bucket: str) -> None:
        """
        Create a bucket if it does not already exist.

        Raises:
            ValueError: If the bucket name is invalid
            StorageBackendError: If the backend fails unexpectedly
        """
        pass  # pragma: no cover
