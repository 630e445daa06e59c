"""
Mock Repository Implementations

In-memory implementations of IObjectStorageRepository for unit testing.
Provides realistic behavior with inspection methods for test assertions.
"""

from io import BytesIO
from typing import Any, BinaryIO, Dict, List, Optional, Tuple

from filegate.domain.errors import StorageBackendError
from filegate.domain.file_storage import IObjectStorageRepository


class InMemoryObjectStorageRepository(IObjectStorageRepository):
    """
    In-memory object store.

    Records every call so tests can assert that no storage access happened
    before a token was accepted.
    """

    def __init__(self):
        self._objects: Dict[Tuple[str, str], bytes] = {}
        self._buckets: set = set()
        self._call_history: List[Dict[str, Any]] = []

    def open(self, bucket: str, path: str) -> Optional[BinaryIO]:
        self._call_history.append({"method": "open", "args": (bucket, path)})
        content = self._objects.get((bucket, path))
        return BytesIO(content) if content is not None else None

    def get_content(self, bucket: str, path: str) -> Optional[bytes]:
        self._call_history.append({"method": "get_content", "args": (bucket, path)})
        return self._objects.get((bucket, path))

    def list(self, bucket: str, prefix: str = "") -> List[str]:
        self._call_history.append({"method": "list", "args": (bucket, prefix)})
        return sorted(
            path
            for (obj_bucket, path) in self._objects
            if obj_bucket == bucket and path.startswith(prefix)
        )

    def bucket_exists(self, bucket: str) -> bool:
        self._call_history.append({"method": "bucket_exists", "args": (bucket,)})
        return bucket in self._buckets

    def store(
        self,
        bucket: str,
        path: str,
        data: bytes,
        content_type: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None,
    ) -> None:
        self._call_history.append({"method": "store", "args": (bucket, path)})
        self._buckets.add(bucket)
        self._objects[(bucket, path)] = bytes(data)

    def delete(self, bucket: str, path: str) -> bool:
        self._call_history.append({"method": "delete", "args": (bucket, path)})
        self._objects.pop((bucket, path), None)
        return True

    def create_bucket(self, bucket: str) -> None:
        self._call_history.append({"method": "create_bucket", "args": (bucket,)})
        self._buckets.add(bucket)

    def health_check(self) -> bool:
        return True

    # Inspection methods

    def calls(self, method: Optional[str] = None) -> List[Dict[str, Any]]:
        if method is None:
            return list(self._call_history)
        return [call for call in self._call_history if call["method"] == method]

    def clear_history(self) -> None:
        self._call_history.clear()


class FailingObjectStorageRepository(InMemoryObjectStorageRepository):
    """Storage whose reads always fail with a backend error."""

    def __init__(self, error: Optional[Exception] = None):
        super().__init__()
        self.error = error or StorageBackendError("storage offline")

    def open(self, bucket: str, path: str) -> Optional[BinaryIO]:
        self._call_history.append({"method": "open", "args": (bucket, path)})
        raise self.error

    def health_check(self) -> bool:
        return False
