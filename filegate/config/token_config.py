"""
Token Configuration

Reads the capability-token settings from the environment once at startup.
The secret is handed explicitly to the issuer and verifier constructors.
"""

import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)

# Documented insecure default; must be overridden in production.
DEFAULT_SECRET = "change-me"


class InsecureSecretError(RuntimeError):
    """Raised when production starts with the default secret or no issuer key."""

    pass


class TokenConfig:
    """Capability token settings."""

    def __init__(self):
        self.secret = os.getenv("FILE_TOKEN_SECRET", DEFAULT_SECRET)
        self.default_ttl_seconds = int(os.getenv("FILE_TOKEN_DEFAULT_TTL_SECONDS", 300))
        self.max_ttl_seconds = int(os.getenv("FILE_TOKEN_MAX_TTL_SECONDS", 86400))
        self.leeway_seconds = int(os.getenv("FILE_TOKEN_LEEWAY_SECONDS", 0))
        self.issuer_api_key: Optional[str] = os.getenv("FILE_TOKEN_ISSUER_API_KEY") or None

    @property
    def uses_default_secret(self) -> bool:
        return self.secret == DEFAULT_SECRET

    def validate(self, is_production: bool = False) -> None:
        """
        Check the settings for consistency.

        Args:
            is_production: Refuse the default secret and a missing issuer key when True

        Raises:
            InsecureSecretError: If production runs with the default secret or
                without FILE_TOKEN_ISSUER_API_KEY
            ValueError: If the numeric settings are inconsistent
        """
        if not self.secret:
            raise ValueError("FILE_TOKEN_SECRET must not be empty")
        if self.default_ttl_seconds < 0 or self.max_ttl_seconds < 0:
            raise ValueError("token TTL settings must not be negative")
        if self.default_ttl_seconds > self.max_ttl_seconds:
            raise ValueError(
                "FILE_TOKEN_DEFAULT_TTL_SECONDS exceeds FILE_TOKEN_MAX_TTL_SECONDS"
            )
        if self.leeway_seconds < 0:
            raise ValueError("FILE_TOKEN_LEEWAY_SECONDS must not be negative")

        if self.uses_default_secret:
            if is_production:
                raise InsecureSecretError(
                    "FILE_TOKEN_SECRET is unset; refusing to start in production"
                )
            logger.warning(
                "FILE_TOKEN_SECRET is unset, using the insecure default secret"
            )

        if not self.issuer_api_key and is_production:
            raise InsecureSecretError(
                "FILE_TOKEN_ISSUER_API_KEY is unset; refusing to start in production "
                "with unguarded token issuance"
            )
