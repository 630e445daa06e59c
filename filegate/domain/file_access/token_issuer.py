"""
Token Issuer

Produces self-contained signed capability tokens bound to one
(bucket, path) pair and an absolute expiry.
"""

import logging
import time
from typing import Callable, Union

from .token_codec import (
    TOKEN_SEPARATOR,
    b64url_encode,
    build_payload,
    coerce_secret,
    compute_mac,
)
from .value_objects import IssuedToken, ResourceScope

logger = logging.getLogger(__name__)


class TokenIssuer:
    """
    Issues capability tokens signed with the shared secret.

    Stateless apart from the secret and the clock, so one instance can be
    shared across request threads.
    """

    def __init__(
        self,
        secret_key: Union[str, bytes],
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize TokenIssuer.

        Args:
            secret_key: Shared HMAC secret (str is encoded as UTF-8)
            clock: Returns the current time in epoch seconds
        """
        self._secret_key = coerce_secret(secret_key)
        self._clock = clock

    def issue(self, bucket: str, path: str, ttl_seconds: int) -> str:
        """
        Issue a token string for one object.

        Args:
            bucket: Storage namespace identifier
            path: Object path within the bucket
            ttl_seconds: Lifetime in seconds; 0 gives a token valid only for
                the current second

        Returns:
            Token string "<payload>.<signature>"

        Raises:
            ValueError: If bucket or path is empty or ttl_seconds is negative
        """
        return self.issue_token(bucket, path, ttl_seconds).token

    def issue_token(self, bucket: str, path: str, ttl_seconds: int) -> IssuedToken:
        """
        Issue a token and report the expiry that was signed into it.

        Raises:
            ValueError: If bucket or path is empty or ttl_seconds is negative
        """
        scope = ResourceScope(bucket, path)
        if isinstance(ttl_seconds, bool) or not isinstance(ttl_seconds, int):
            raise ValueError("ttl_seconds must be an integer")
        if ttl_seconds < 0:
            raise ValueError("ttl_seconds must not be negative")

        expiry = int(self._clock()) + ttl_seconds
        payload = build_payload(scope.bucket, scope.path, expiry).encode("utf-8")
        signature = compute_mac(self._secret_key, payload)

        token = b64url_encode(payload) + TOKEN_SEPARATOR + b64url_encode(signature)
        logger.debug(f"Issued file token for {scope} expiring at {expiry}")
        return IssuedToken(token=token, expires_at=expiry, scope=scope)
