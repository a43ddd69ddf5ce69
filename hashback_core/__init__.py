"""
HashBack Core Library
=====================
Challenge/response authentication where a Caller proves control of a
Verify URL by publishing a hash the Issuer can recompute.
"""

__version__ = "0.1.0"

from .config import ParserConfig
from .exceptions import HashBackError, DecodeError, EncodingError, GeneratorConfigError
from .models import ParseState, NotValidReason, ParseResult, GeneratedAuth
from .hashing import (
    VERSION,
    SCHEME_PREFIX,
    FIXED_SALT,
    compute_hash,
    verify_hash,
    generate_unus,
    decode_unus,
)
from .encoding import NormalizedHeader, normalize_header, flex_base64_decode, strip_scheme_prefix
from .unus_tracker import UnusTracker, fold_unus
from .policies import (
    system_clock,
    required_host,
    clock_window,
    rounds_range,
    allowed_verify_hosts,
)
from .parser import HashBackParser, parse_verify_url
from .generator import (
    HashBackGenerator,
    VerifyUrlStrategy,
    QueryStringVerifyUrl,
    FileInFolderVerifyUrl,
    generate_auth_header,
)
from .logging_setup import setup_logging

__all__ = [
    # Config
    "ParserConfig",
    # Exceptions
    "HashBackError",
    "DecodeError",
    "EncodingError",
    "GeneratorConfigError",
    # Models
    "ParseState",
    "NotValidReason",
    "ParseResult",
    "GeneratedAuth",
    # Hashing
    "VERSION",
    "SCHEME_PREFIX",
    "FIXED_SALT",
    "compute_hash",
    "verify_hash",
    "generate_unus",
    "decode_unus",
    # Encoding
    "NormalizedHeader",
    "normalize_header",
    "flex_base64_decode",
    "strip_scheme_prefix",
    # Unus Tracker
    "UnusTracker",
    "fold_unus",
    # Policies
    "system_clock",
    "required_host",
    "clock_window",
    "rounds_range",
    "allowed_verify_hosts",
    # Parser
    "HashBackParser",
    "parse_verify_url",
    # Generator
    "HashBackGenerator",
    "VerifyUrlStrategy",
    "QueryStringVerifyUrl",
    "FileInFolderVerifyUrl",
    "generate_auth_header",
    # Logging
    "setup_logging",
]
