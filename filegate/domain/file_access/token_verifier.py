"""
Token Verifier

Checks capability tokens presented by untrusted clients.

Every failure surfaces as a TokenRejectedError subclass; nothing else ever
escapes verify(), whatever the input. The subclasses let operators tell
causes apart in logs while the HTTP layer reports a single outcome.
"""

import logging
import time
from typing import Callable, Optional, Union

from filegate.domain.errors import (
    MalformedTokenError,
    SignatureMismatchError,
    TokenExpiredError,
    TokenRejectedError,
)

from .token_codec import (
    FIELD_SEPARATOR,
    TOKEN_SEPARATOR,
    b64url_decode,
    b64url_encode,
    coerce_secret,
    compute_mac,
    constant_time_equals,
    decode_component,
)
from .value_objects import FileToken, ResourceScope

logger = logging.getLogger(__name__)


class TokenVerifier:
    """
    Verifies signature, structure and expiry of capability tokens.

    Verification is idempotent: the same unexpired token always verifies.
    Scope binding against the requested resource is the caller's job.
    """

    def __init__(
        self,
        secret_key: Union[str, bytes],
        clock: Callable[[], float] = time.time,
        leeway_seconds: int = 0,
    ):
        """
        Initialize TokenVerifier.

        Args:
            secret_key: Shared HMAC secret, same value as the issuer's
            clock: Returns the current time in epoch seconds
            leeway_seconds: Tolerated clock skew between issuer and verifier
        """
        if leeway_seconds < 0:
            raise ValueError("leeway_seconds must not be negative")
        self._secret_key = coerce_secret(secret_key)
        self._clock = clock
        self._leeway_seconds = leeway_seconds

    def verify(self, token: str) -> FileToken:
        """
        Verify a token and recover its scope and expiry.

        Args:
            token: Token string as presented by the client

        Returns:
            FileToken with the signed bucket, path and expiry

        Raises:
            MalformedTokenError: Structural or encoding failure
            SignatureMismatchError: MAC does not match the payload
            TokenExpiredError: MAC valid but the expiry has passed
        """
        try:
            return self._verify(token)
        except TokenRejectedError as e:
            logger.debug(f"File token rejected ({e.reason}): {e}")
            raise
        except Exception as e:
            logger.warning(f"File token rejected (malformed): unexpected {e!r}")
            raise MalformedTokenError("Unparseable token", original_error=e) from e

    def validate(self, token: str) -> Optional[FileToken]:
        """
        Verify a token, returning None instead of raising on rejection.
        """
        try:
            return self.verify(token)
        except TokenRejectedError:
            return None

    def _verify(self, token: str) -> FileToken:
        if not isinstance(token, str) or not token:
            raise MalformedTokenError("Token is empty")
        if TOKEN_SEPARATOR not in token:
            raise MalformedTokenError("Token has no signature segment")

        # Split once; only the payload segment is ever parsed further.
        payload_b64, signature_b64 = token.split(TOKEN_SEPARATOR, 1)

        try:
            payload = b64url_decode(payload_b64)
        except ValueError as e:
            raise MalformedTokenError("Payload is not valid base64url", e) from e

        expected_b64 = b64url_encode(compute_mac(self._secret_key, payload))
        if not constant_time_equals(expected_b64, signature_b64):
            raise SignatureMismatchError("Token signature mismatch")

        try:
            text = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedTokenError("Payload is not UTF-8", e) from e

        fields = text.split(FIELD_SEPARATOR)
        if len(fields) != 3:
            raise MalformedTokenError(
                f"Payload has {len(fields)} fields, expected 3"
            )
        bucket_field, path_field, expiry_field = fields

        try:
            bucket = decode_component(bucket_field)
            path = decode_component(path_field)
        except ValueError as e:
            raise MalformedTokenError("Scope fields are not valid", e) from e
        if not bucket or not path:
            raise MalformedTokenError("Scope fields must not be empty")

        if not (expiry_field.isascii() and expiry_field.isdigit()):
            raise MalformedTokenError("Expiry is not an integer")
        expiry = int(expiry_field)

        now = int(self._clock())
        if now > expiry + self._leeway_seconds:
            raise TokenExpiredError(
                f"Token expired at {expiry}, now {now}", expiry=expiry, now=now
            )

        return FileToken(scope=ResourceScope(bucket, path), expiry=expiry)
