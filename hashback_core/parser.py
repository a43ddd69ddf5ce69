"""
Header Parser
=============
Issuer-side parsing and validation of HashBack authentication headers.

Fields are checked in a fixed order: Version, Host, Now, Unus, Rounds,
Verify. The first failing check decides the reported error.
"""

import json
from typing import Any, Dict, Optional, Tuple

import httpx
import structlog

from .config import ParserConfig
from .encoding import normalize_header
from .exceptions import DecodeError, EncodingError
from .hashing import VERSION, compute_hash, decode_unus
from .models import NotValidReason, ParseResult
from .policies import (
    ClockService,
    HostPolicy,
    NowPolicy,
    RoundsPolicy,
    VerifyPolicy,
    allowed_verify_hosts,
    clock_window,
    reject_host,
    reject_verify,
    required_host,
    rounds_range,
    system_clock,
)
from .unus_tracker import UnusTracker

logger = structlog.get_logger(__name__)


class _Rejected(Exception):
    """Internal signal carrying a NotValid result out of a field check."""

    def __init__(self, error_text: str, reason_code: NotValidReason):
        super().__init__(error_text)
        self.error_text = error_text
        self.reason_code = reason_code


def _require(
    header: Dict[str, Any],
    name: str,
    expected_type: type,
) -> Any:
    value = header.get(name)
    if value is None:
        raise _Rejected(f"{name} property is missing.", NotValidReason.SCHEMA_ERROR)
    # bool is a subclass of int but never a valid Now or Rounds
    if not isinstance(value, expected_type) or isinstance(value, bool):
        raise _Rejected(f"{name} property is not valid.", NotValidReason.SCHEMA_ERROR)
    return value


def _apply(policy_error: Optional[str]) -> None:
    if policy_error is not None:
        raise _Rejected(policy_error, NotValidReason.POLICY_REJECTION)


def parse_verify_url(value: str) -> Optional[httpx.URL]:
    """Parse an absolute URL with a scheme and host, or return None."""
    try:
        url = httpx.URL(value)
    except httpx.InvalidURL:
        return None
    if not url.is_absolute_url:
        return None
    return url


class HashBackParser:
    """
    Parses HashBack headers against configurable field policies.

    Host and Verify policies reject everything until configured. The
    clock and rounds policies start from ParserConfig defaults.
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        unus_tracker: Optional[UnusTracker] = None,
    ):
        self.config = ParserConfig() if config is None else config
        self.unus_tracker = (
            UnusTracker(self.config.unus_capacity) if unus_tracker is None else unus_tracker
        )

        self.is_host_valid: HostPolicy = reject_host
        self.is_now_valid: NowPolicy = clock_window(
            system_clock, self.config.clock_skew_seconds
        )
        self.is_rounds_valid: RoundsPolicy = rounds_range(
            self.config.min_rounds, self.config.max_rounds
        )
        self.is_verify_valid: VerifyPolicy = reject_verify

    def set_required_host(self, host: str) -> None:
        self.is_host_valid = required_host(host)

    def set_clock_service(self, clock: ClockService, allow_seconds: int) -> None:
        self.is_now_valid = clock_window(clock, allow_seconds)

    def set_rounds_limit(self, min_rounds: int, max_rounds: int) -> None:
        self.is_rounds_valid = rounds_range(min_rounds, max_rounds)

    def set_allowed_verify_hosts(self, *hosts: str) -> None:
        self.is_verify_valid = allowed_verify_hosts(*hosts)

    def parse(self, auth_header: Optional[str]) -> ParseResult:
        """
        Parse and validate an authentication header.

        Args:
            auth_header: Header value as transmitted by the Caller

        Returns:
            ParseResult in NOT_VALID or NEEDS_VERIFICATION state
        """
        try:
            verify_url, expected_hash = self._parse(auth_header)
        except _Rejected as rejection:
            logger.info(
                "HashBack header rejected",
                reason=rejection.reason_code.value,
                error=rejection.error_text,
            )
            return ParseResult.not_valid(rejection.error_text, rejection.reason_code)

        logger.debug("HashBack header needs verification", verify_url=str(verify_url))
        return ParseResult.needs_verification(verify_url, expected_hash)

    def _parse(self, auth_header: Optional[str]) -> Tuple[httpx.URL, str]:
        if not auth_header:
            raise _Rejected("Header is null/missing.", NotValidReason.MALFORMED_INPUT)

        try:
            normalized = normalize_header(auth_header)
        except (DecodeError, EncodingError) as e:
            raise _Rejected(e.message, NotValidReason.DECODING_ERROR) from e

        try:
            header = json.loads(normalized.json_text)
        except (ValueError, RecursionError) as e:
            # JSONDecodeError, over-long integers and excessive nesting
            raise _Rejected(
                f"Supplied JSON is invalid. {e}", NotValidReason.SYNTAX_ERROR
            ) from e
        if not isinstance(header, dict):
            raise _Rejected(
                "Supplied JSON is invalid. Expected an object.",
                NotValidReason.SYNTAX_ERROR,
            )

        version = _require(header, "Version", str)
        if version != VERSION:
            raise _Rejected(
                f"Only Version={VERSION} is supported.",
                NotValidReason.VERSION_MISMATCH,
            )

        host = _require(header, "Host", str)
        _apply(self.is_host_valid(host))

        now = _require(header, "Now", int)
        _apply(self.is_now_valid(now))

        unus = _require(header, "Unus", str)
        unus_bytes = decode_unus(unus)
        if unus_bytes is None:
            raise _Rejected("Unus property is not valid.", NotValidReason.SCHEMA_ERROR)
        if self.unus_tracker.is_reused(unus_bytes):
            raise _Rejected(
                "Unus property has been reused.", NotValidReason.REPLAY_DETECTED
            )

        rounds = _require(header, "Rounds", int)
        _apply(self.is_rounds_valid(rounds))
        if rounds < 1:
            raise _Rejected("Rounds property is not valid.", NotValidReason.SCHEMA_ERROR)

        verify = _require(header, "Verify", str)
        verify_url = parse_verify_url(verify)
        if verify_url is None:
            raise _Rejected(
                "Verify property is not a valid URL.", NotValidReason.SCHEMA_ERROR
            )
        _apply(self.is_verify_valid(verify_url))

        return verify_url, compute_hash(normalized.raw_bytes, rounds)
