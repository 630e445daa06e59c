"""
Local Object Storage Repository Implementation

Concrete implementation of IObjectStorageRepository for the local filesystem.
Each bucket is a directory under the base path and each object a file inside
it, addressed by its relative path.
"""

import logging
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Dict, List, Optional

from filegate.domain.errors import StorageBackendError
from filegate.domain.file_storage.storage_repository import IObjectStorageRepository

logger = logging.getLogger(__name__)

# Suffix of in-flight writes; never listed as objects
TEMP_SUFFIX = ".part"


class LocalObjectStorageRepository(IObjectStorageRepository):
    """
    Local filesystem implementation of IObjectStorageRepository.

    Thread Safety:
        Safe for concurrent reads. Writes replace whole files.

    Attributes:
        base_path: Directory holding one sub-directory per bucket
    """

    def __init__(self, base_path: str = "/tmp/filegate"):
        """
        Initialize the local object storage repository.

        Args:
            base_path: Base directory for bucket directories

        Raises:
            PermissionError: If the base directory cannot be created
            OSError: If directory creation fails for other reasons
        """
        self.base_path = Path(base_path).resolve()
        self._ensure_base_directory()

    def _ensure_base_directory(self) -> None:
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
        except PermissionError as e:
            raise PermissionError(
                f"Insufficient permissions to create storage directory: {self.base_path}"
            ) from e
        except OSError as e:
            raise OSError(
                f"Failed to create storage directory: {self.base_path}"
            ) from e

    def _bucket_dir(self, bucket: str) -> Path:
        """
        Resolve a bucket directory.

        Raises:
            ValueError: If the bucket name is empty or not a single path segment
        """
        if not bucket or not bucket.strip():
            raise ValueError("bucket cannot be empty")
        if "/" in bucket or "\\" in bucket or bucket in (".", ".."):
            raise ValueError(f"invalid bucket name: {bucket!r}")
        return self.base_path / bucket

    def _object_path(self, bucket: str, path: str) -> Path:
        """
        Resolve an object path, refusing anything outside the bucket.

        Raises:
            ValueError: If bucket or path is empty or escapes the bucket
        """
        if not path or not path.strip():
            raise ValueError("path cannot be empty")
        bucket_dir = self._bucket_dir(bucket).resolve()
        full_path = (bucket_dir / path).resolve()
        if bucket_dir not in full_path.parents:
            raise ValueError(f"path escapes bucket: {path!r}")
        return full_path

    # IObjectStorageRepository interface methods

    def open(self, bucket: str, path: str) -> Optional[BinaryIO]:
        try:
            full_path = self._object_path(bucket, path)
        except ValueError as e:
            logger.warning(f"Refusing to open {bucket}/{path}: {e}")
            return None

        if not full_path.is_file():
            return None

        try:
            return open(full_path, "rb")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageBackendError(
                f"Failed to open {bucket}/{path}", original_error=e
            ) from e

    def get_content(self, bucket: str, path: str) -> Optional[bytes]:
        stream = self.open(bucket, path)
        if stream is None:
            return None
        try:
            with stream:
                return stream.read()
        except OSError as e:
            raise StorageBackendError(
                f"Failed to read {bucket}/{path}", original_error=e
            ) from e

    def list(self, bucket: str, prefix: str = "") -> List[str]:
        try:
            bucket_dir = self._bucket_dir(bucket)
        except ValueError:
            return []
        if not bucket_dir.is_dir():
            return []

        try:
            names = [
                entry.relative_to(bucket_dir).as_posix()
                for entry in bucket_dir.rglob("*")
                if entry.is_file() and entry.suffix != TEMP_SUFFIX
            ]
        except OSError as e:
            raise StorageBackendError(
                f"Failed to list bucket {bucket}", original_error=e
            ) from e
        return sorted(name for name in names if name.startswith(prefix))

    def bucket_exists(self, bucket: str) -> bool:
        try:
            return self._bucket_dir(bucket).is_dir()
        except ValueError:
            return False

    def store(
        self,
        bucket: str,
        path: str,
        data: bytes,
        content_type: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None,
    ) -> None:
        full_path = self._object_path(bucket, path)
        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            # Write through a sibling temp file so readers never see a partial object
            tmp_path = full_path.with_name(full_path.name + TEMP_SUFFIX)
            with open(tmp_path, "wb") as f:
                f.write(data)
            tmp_path.replace(full_path)
        except OSError as e:
            raise StorageBackendError(
                f"Failed to store {bucket}/{path}", original_error=e
            ) from e

    def delete(self, bucket: str, path: str) -> bool:
        try:
            full_path = self._object_path(bucket, path)
        except ValueError:
            return True

        try:
            if full_path.is_file():
                full_path.unlink()
            return True
        except FileNotFoundError:
            return True
        except OSError as e:
            raise StorageBackendError(
                f"Failed to delete {bucket}/{path}", original_error=e
            ) from e

    def create_bucket(self, bucket: str) -> None:
        bucket_dir = self._bucket_dir(bucket)
        try:
            bucket_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageBackendError(
                f"Failed to create bucket {bucket}", original_error=e
            ) from e

    def health_check(self) -> bool:
        """Check that the base directory is still usable."""
        return self.base_path.is_dir()
