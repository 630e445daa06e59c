"""
File Access Domain

Capability tokens granting time-limited read access to one stored object.
"""

from .token_codec import constant_time_equals
from .token_issuer import TokenIssuer
from .token_verifier import TokenVerifier
from .value_objects import FileToken, InvalidScopeError, IssuedToken, ResourceScope

__all__ = [
    "TokenIssuer",
    "TokenVerifier",
    "FileToken",
    "IssuedToken",
    "ResourceScope",
    "InvalidScopeError",
    "constant_time_equals",
]
