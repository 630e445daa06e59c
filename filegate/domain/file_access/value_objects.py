"""
File Access Value Objects

Immutable value objects describing what a capability token grants.
"""

from dataclasses import dataclass
from typing import Any, Dict


class InvalidScopeError(ValueError):
    """Raised when a resource scope is missing its bucket or path."""

    pass


@dataclass(frozen=True)
class ResourceScope:
    """
    Value object for one object in one storage namespace.

    A token is valid for exactly one (bucket, path) pair.
    """

    bucket: str
    path: str

    def __post_init__(self):
        if not isinstance(self.bucket, str) or not self.bucket:
            raise InvalidScopeError("bucket must be a non-empty string")
        if not isinstance(self.path, str) or not self.path:
            raise InvalidScopeError("path must be a non-empty string")

    def matches(self, bucket: str, path: str) -> bool:
        """Exact comparison against the requested coordinates."""
        return self.bucket == bucket and self.path == path

    def __str__(self) -> str:
        return f"{self.bucket}/{self.path}"


@dataclass(frozen=True)
class FileToken:
    """
    A verified capability token.

    Only TokenVerifier produces these, after the signature and expiry checks
    have passed.
    """

    scope: ResourceScope
    expiry: int

    @property
    def bucket(self) -> str:
        return self.scope.bucket

    @property
    def path(self) -> str:
        return self.scope.path

    def covers(self, bucket: str, path: str) -> bool:
        """Check that this token was issued for the requested resource."""
        return self.scope.matches(bucket, path)


@dataclass(frozen=True)
class IssuedToken:
    """
    A freshly issued token together with the expiry signed into it.
    """

    token: str
    expires_at: int
    scope: ResourceScope

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the issuance response body."""
        return {"token": self.token, "expiresAt": self.expires_at}
