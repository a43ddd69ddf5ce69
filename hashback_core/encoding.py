"""
Header Encoding
===============
Normalizes a transmitted header into the canonical bytes that get hashed.

A header may arrive as literal JSON, standard base64, or JWT-flavoured
base64, with or without padding, interior whitespace or a leading
"HashBack" scheme token.
"""

import base64
import binascii
import re
from dataclasses import dataclass

from .exceptions import DecodeError, EncodingError
from .hashing import SCHEME_PREFIX

_WHITESPACE = re.compile(r"\s+")
_JWT_TRANSLATION = str.maketrans({"-": "+", "_": "/"})


@dataclass(frozen=True)
class NormalizedHeader:
    """Canonical form of a transmitted header."""
    raw_bytes: bytes
    json_text: str


def strip_scheme_prefix(header: str) -> str:
    """
    Remove a leading case-insensitive "HashBack" token.

    The token is only removed when something follows it.
    """
    header = header.strip()
    parts = header.split(None, 1)
    if len(parts) == 2 and parts[0].lower() == SCHEME_PREFIX.lower():
        return parts[1].strip()
    return header


def flex_base64_decode(value: str) -> bytes:
    """
    Decode base64 with or without padding, whitespace or JWT characters.

    Args:
        value: Base64 text in either alphabet

    Returns:
        Decoded bytes

    Raises:
        DecodeError: If the text is not decodable after normalization
    """
    cleaned = _WHITESPACE.sub("", value).rstrip("=").translate(_JWT_TRANSLATION)
    if not cleaned:
        return b""

    cleaned += "=" * (-len(cleaned) % 4)
    try:
        return base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Header is not valid base64. {e}") from e


def normalize_header(header: str) -> NormalizedHeader:
    """
    Produce the canonical bytes and JSON text of a header.

    Raises:
        DecodeError: Base64 payload cannot be decoded
        EncodingError: Payload text is not ASCII (literal JSON) or UTF-8 (base64)
    """
    payload = strip_scheme_prefix(header)

    if "{" in payload:
        try:
            raw_bytes = payload.encode("ascii")
        except UnicodeEncodeError as e:
            raise EncodingError(f"Header is not valid text. {e}") from e
        return NormalizedHeader(raw_bytes=raw_bytes, json_text=payload)

    raw_bytes = flex_base64_decode(payload)
    try:
        json_text = raw_bytes.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingError(f"Header is not valid text. {e}") from e
    return NormalizedHeader(raw_bytes=raw_bytes, json_text=json_text)
