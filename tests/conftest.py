"""
Shared fixtures for HashBack tests.
"""

import base64
import json
from typing import Optional

import httpx
import pytest

from hashback_core.parser import HashBackParser


class ParserCapture:
    """Records the values a parser hands to its policies."""

    def __init__(self):
        self.captured_host: Optional[str] = None
        self.captured_now: Optional[int] = None
        self.captured_rounds: Optional[int] = None
        self.captured_verify: Optional[httpx.URL] = None
        self.host_error: Optional[str] = None
        self.now_error: Optional[str] = None
        self.rounds_error: Optional[str] = None
        self.verify_error: Optional[str] = None

    @classmethod
    def attach(cls, parser: HashBackParser) -> "ParserCapture":
        capture = cls()
        parser.is_host_valid = capture._is_host_valid
        parser.is_now_valid = capture._is_now_valid
        parser.is_rounds_valid = capture._is_rounds_valid
        parser.is_verify_valid = capture._is_verify_valid
        return capture

    def _is_host_valid(self, host):
        self.captured_host = host
        return self.host_error

    def _is_now_valid(self, now):
        self.captured_now = now
        return self.now_error

    def _is_rounds_valid(self, rounds):
        self.captured_rounds = rounds
        return self.rounds_error

    def _is_verify_valid(self, verify):
        self.captured_verify = verify
        return self.verify_error


def make_header_json(
    version: str = "BILLPG_DRAFT_4.0",
    host: str = "host.example",
    now: int = 100,
    unus: str = "RutabagaRutabagaRutaba==",
    rounds: int = 1,
    verify: str = "https://verify.example/",
) -> dict:
    return {
        "Version": version,
        "Host": host,
        "Now": now,
        "Unus": unus,
        "Rounds": rounds,
        "Verify": verify,
    }


def to_header(header_json: dict) -> str:
    """Compact JSON, base64 encoded, with the HashBack prefix."""
    as_bytes = json.dumps(header_json, separators=(",", ":")).encode("ascii")
    return "HashBack " + base64.b64encode(as_bytes).decode("ascii")


@pytest.fixture
def parser() -> HashBackParser:
    return HashBackParser()


@pytest.fixture
def capture(parser) -> ParserCapture:
    return ParserCapture.attach(parser)
