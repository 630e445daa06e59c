"""Process configuration read from the environment at startup."""

from .storage_config import StorageConfig
from .token_config import InsecureSecretError, TokenConfig

__all__ = ["TokenConfig", "StorageConfig", "InsecureSecretError"]
