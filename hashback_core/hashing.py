"""
HashBack Hashing
================
PBKDF2 verification hash and Unus helpers.

The salt is a fixed protocol constant shared by every Caller and Issuer.
It separates this protocol version's hashes from any other use of
PBKDF2-HMAC-SHA256; it is not a secret.
"""

import base64
import binascii
import hashlib
import hmac
import secrets
from typing import Optional

# Protocol constants (public draft 4.0)
VERSION = "BILLPG_DRAFT_4.0"
SCHEME_PREFIX = "HashBack"
HASH_ALGORITHM = "sha256"
HASH_LENGTH = 256 // 8
UNUS_LENGTH = 128 // 8

FIXED_SALT = bytes([
    113, 218, 98, 9, 6, 165, 151, 157,
    46, 28, 229, 16, 66, 91, 91, 72,
    150, 246, 69, 83, 216, 235, 21, 239,
    162, 229, 139, 163, 6, 73, 175, 201,
])


def compute_hash(header_bytes: bytes, rounds: int) -> str:
    """
    Compute the verification hash of a header.

    Args:
        header_bytes: Canonical bytes of the JSON header
        rounds: PBKDF2 iteration count

    Returns:
        Base64-encoded 32-byte PBKDF2-HMAC-SHA256 digest
    """
    digest = hashlib.pbkdf2_hmac(
        HASH_ALGORITHM,
        header_bytes,
        FIXED_SALT,
        rounds,
        dklen=HASH_LENGTH,
    )
    return base64.b64encode(digest).decode("ascii")


def verify_hash(fetched: str, expected_hash: str) -> bool:
    """
    Compare a fetched verification hash using constant-time comparison.

    Surrounding whitespace (such as a trailing newline in a published
    file) is ignored.
    """
    return hmac.compare_digest(
        fetched.strip().encode("ascii", "replace"),
        expected_hash.encode("ascii"),
    )


def generate_unus() -> str:
    """Generate 128 random bits as a padded base64 Unus value."""
    return base64.b64encode(secrets.token_bytes(UNUS_LENGTH)).decode("ascii")


def decode_unus(unus: str) -> Optional[bytes]:
    """
    Decode a supplied Unus value.

    Returns:
        The 16 decoded bytes, or None if not strict base64 of that length
    """
    try:
        unus_bytes = base64.b64decode(unus, validate=True)
    except (binascii.Error, ValueError):
        return None

    if len(unus_bytes) != UNUS_LENGTH:
        return None
    return unus_bytes
