"""
Token Codec

Encoding, decoding and comparison helpers shared by the token issuer and
verifier.

Token format:
    base64url(payload) "." base64url(HMAC-SHA256(secret, payload))

    payload = quote(bucket) "|" quote(path) "|" expiry_epoch_seconds
"""

import base64
import binascii
import hashlib
import hmac
import re
from typing import Union
from urllib.parse import quote, unquote

TOKEN_SEPARATOR = "."
FIELD_SEPARATOR = "|"

_B64URL_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")


def coerce_secret(secret_key: Union[str, bytes]) -> bytes:
    """
    Normalize a secret key to bytes.

    Raises:
        ValueError: If the key is empty or not str/bytes
    """
    if isinstance(secret_key, str):
        secret_key = secret_key.encode("utf-8")
    if not isinstance(secret_key, bytes) or not secret_key:
        raise ValueError("secret_key must be a non-empty str or bytes value")
    return secret_key


def b64url_encode(data: bytes) -> str:
    """Base64 URL-safe encoding without padding."""
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def b64url_decode(text: str) -> bytes:
    """
    Strict inverse of b64url_encode.

    Only the canonical unpadded form is accepted, so two different strings
    never decode to the same bytes.

    Raises:
        ValueError: If the text is not canonical unpadded base64url
    """
    if not isinstance(text, str) or not _B64URL_ALPHABET.fullmatch(text):
        raise ValueError("invalid base64url alphabet")
    if len(text) % 4 == 1:
        raise ValueError("invalid base64url length")

    padded = text + "=" * (-len(text) % 4)
    try:
        data = base64.urlsafe_b64decode(padded.encode("ascii"))
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"invalid base64url data: {e}") from e

    if b64url_encode(data) != text:
        raise ValueError("non-canonical base64url encoding")
    return data


def encode_component(value: str) -> str:
    """
    Percent-encode a payload field.

    No character is left safe, so the field separator, '/' and spaces are all
    escaped and the encoded value can never contain FIELD_SEPARATOR.
    """
    return quote(value, safe="", encoding="utf-8", errors="strict")


def decode_component(value: str) -> str:
    """
    Percent-decode a payload field.

    Raises:
        ValueError: If the escapes do not form valid UTF-8
    """
    try:
        return unquote(value, encoding="utf-8", errors="strict")
    except UnicodeDecodeError as e:
        raise ValueError(f"invalid percent-encoding: {e}") from e


def build_payload(bucket: str, path: str, expiry: int) -> str:
    """Build the canonical payload string that the MAC covers."""
    return FIELD_SEPARATOR.join(
        (encode_component(bucket), encode_component(path), str(expiry))
    )


def compute_mac(secret_key: bytes, payload: bytes) -> bytes:
    """HMAC-SHA256 of the payload bytes."""
    return hmac.new(secret_key, payload, hashlib.sha256).digest()


def constant_time_equals(a: str, b: str) -> bool:
    """
    Compare two strings in time independent of where they differ.

    Unequal lengths are rejected before any content is inspected; equal
    lengths are compared with hmac.compare_digest over the UTF-8 bytes, so
    non-ASCII input from clients cannot raise.
    """
    if not isinstance(a, str) or not isinstance(b, str):
        return False
    a_bytes = a.encode("utf-8", errors="surrogatepass")
    b_bytes = b.encode("utf-8", errors="surrogatepass")
    if len(a_bytes) != len(b_bytes):
        return False
    return hmac.compare_digest(a_bytes, b_bytes)
