"""
HashBack Models
===============
Data models and enums for parsing and generating HashBack headers.
"""

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import httpx

from .hashing import verify_hash


class ParseState(str, Enum):
    """Terminal states of a header parse."""
    NOT_VALID = "not_valid"
    NEEDS_VERIFICATION = "needs_verification"


class NotValidReason(str, Enum):
    """Reasons for rejecting a header."""
    MALFORMED_INPUT = "malformed_input"
    DECODING_ERROR = "decoding_error"
    SYNTAX_ERROR = "syntax_error"
    SCHEMA_ERROR = "schema_error"
    VERSION_MISMATCH = "version_mismatch"
    POLICY_REJECTION = "policy_rejection"
    REPLAY_DETECTED = "replay_detected"


@dataclass(frozen=True)
class ParseResult:
    """
    Outcome of parsing a HashBack header.

    Either NOT_VALID with error_text and reason_code set, or
    NEEDS_VERIFICATION with verify_url and expected_hash set. Never both.
    """
    state: ParseState
    error_text: Optional[str] = None
    reason_code: Optional[NotValidReason] = None
    verify_url: Optional[httpx.URL] = None
    expected_hash: Optional[str] = None

    @classmethod
    def not_valid(cls, error_text: str, reason_code: NotValidReason) -> "ParseResult":
        return cls(
            state=ParseState.NOT_VALID,
            error_text=error_text,
            reason_code=reason_code,
        )

    @classmethod
    def needs_verification(cls, verify_url: httpx.URL, expected_hash: str) -> "ParseResult":
        return cls(
            state=ParseState.NEEDS_VERIFICATION,
            verify_url=verify_url,
            expected_hash=expected_hash,
        )

    @property
    def is_valid(self) -> bool:
        return self.state == ParseState.NEEDS_VERIFICATION

    def is_match(self, fetched: str) -> bool:
        """
        Compare content fetched from the Verify URL to the expected hash.

        Args:
            fetched: Body retrieved from verify_url

        Returns:
            True if this result needs verification and the content matches
        """
        if self.expected_hash is None:
            return False
        return verify_hash(fetched, self.expected_hash)


@dataclass(frozen=True)
class GeneratedAuth:
    """A generated header and the hash the Caller must publish."""
    verification_id: uuid.UUID
    auth_header: str
    verification_hash: str
