"""
File Access Service

Application service that orchestrates token issuance and the verified
streaming path: verify the token, bind it to the requested resource, then
open the object from storage.
"""

import logging
import mimetypes
import posixpath
from dataclasses import dataclass
from typing import BinaryIO, List, Optional

from filegate.domain.errors import (
    InvalidRequestError,
    ObjectNotFoundError,
    ScopeMismatchError,
    StorageBackendError,
    TokenGenerationError,
)
from filegate.domain.file_access import (
    IssuedToken,
    TokenIssuer,
    TokenVerifier,
)
from filegate.domain.file_storage import IObjectStorageRepository

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def guess_content_type(path: str) -> str:
    """Derive a Content-Type from the path's extension."""
    # guess_type parses URLs (data: included); hand it the bare extension only
    _, extension = posixpath.splitext(posixpath.basename(path))
    if not extension:
        return DEFAULT_CONTENT_TYPE
    content_type, _ = mimetypes.guess_type(f"object{extension}", strict=False)
    return content_type or DEFAULT_CONTENT_TYPE


@dataclass
class FileDownload:
    """An opened object ready to be streamed to the client."""

    stream: BinaryIO
    content_type: str
    filename: str
    bucket: str
    path: str


class FileAccessService:
    """
    Issues file access tokens and serves objects for verified tokens.

    Service Purpose:
    - issue_token: used by the guarded issuance endpoint
    - open_file: used by the public streaming endpoint; no bytes are read
      from storage until the token verifies and matches the request
    """

    def __init__(
        self,
        issuer: TokenIssuer,
        verifier: TokenVerifier,
        storage_repository: IObjectStorageRepository,
        default_ttl_seconds: int = 300,
        max_ttl_seconds: int = 86400,
    ):
        """
        Initialize FileAccessService.

        Args:
            issuer: Token issuer holding the shared secret
            verifier: Token verifier holding the same secret
            storage_repository: Object storage backend
            default_ttl_seconds: TTL applied when the caller gives none
            max_ttl_seconds: Largest TTL a caller may request
        """
        self.issuer = issuer
        self.verifier = verifier
        self.storage_repository = storage_repository
        self.default_ttl_seconds = default_ttl_seconds
        self.max_ttl_seconds = max_ttl_seconds

    def issue_token(
        self, bucket: str, path: str, ttl_seconds: Optional[int] = None
    ) -> IssuedToken:
        """
        Issue a token for one object.

        Args:
            bucket: Storage namespace identifier
            path: Object path within the bucket
            ttl_seconds: Token lifetime; the configured default when None

        Returns:
            IssuedToken with the token and its expiry

        Raises:
            InvalidRequestError: If bucket/path are empty or ttl is out of range
            TokenGenerationError: If the token could not be produced
        """
        if ttl_seconds is None:
            ttl_seconds = self.default_ttl_seconds
        if ttl_seconds < 0:
            raise InvalidRequestError("ttlSeconds must not be negative")
        if ttl_seconds > self.max_ttl_seconds:
            raise InvalidRequestError(
                f"ttlSeconds must not exceed {self.max_ttl_seconds}"
            )

        try:
            issued = self.issuer.issue_token(bucket, path, ttl_seconds)
        except ValueError as e:
            raise InvalidRequestError(str(e), original_error=e) from e
        except Exception as e:
            raise TokenGenerationError(
                "Failed to generate file token", original_error=e
            ) from e

        logger.info(
            f"Issued file token for {issued.scope} (ttl={ttl_seconds}s, "
            f"expires_at={issued.expires_at})"
        )
        return issued

    def open_file(self, token: str, bucket: str, path: str) -> FileDownload:
        """
        Verify a token against the requested object and open it.

        Args:
            token: Token presented by the client
            bucket: Requested bucket
            path: Requested object path

        Returns:
            FileDownload with an open stream; the caller must close it

        Raises:
            TokenRejectedError: If the token is malformed, forged or expired
            ScopeMismatchError: If the token was issued for another object
            ObjectNotFoundError: If the object does not exist
            StorageBackendError: If the storage backend fails
        """
        file_token = self.verifier.verify(token)

        if not file_token.covers(bucket, path):
            logger.warning(
                f"Token scope {file_token.scope} does not match request {bucket}/{path}"
            )
            raise ScopeMismatchError(
                f"Token issued for {file_token.scope}, not {bucket}/{path}"
            )

        try:
            stream = self.storage_repository.open(bucket, path)
        except StorageBackendError:
            raise
        except Exception as e:
            raise StorageBackendError(
                f"Unexpected storage failure opening {bucket}/{path}", original_error=e
            ) from e

        if stream is None:
            raise ObjectNotFoundError(f"Object not found: {bucket}/{path}")

        return FileDownload(
            stream=stream,
            content_type=guess_content_type(path),
            filename=posixpath.basename(path) or path,
            bucket=bucket,
            path=path,
        )

    def list_files(self, bucket: str, prefix: str = "") -> List[str]:
        """
        List object paths in a bucket under a prefix.

        Raises:
            ObjectNotFoundError: If the bucket does not exist
            StorageBackendError: If the storage backend fails
        """
        if not self.storage_repository.bucket_exists(bucket):
            raise ObjectNotFoundError(f"Bucket not found: {bucket}")
        return self.storage_repository.list(bucket, prefix)
