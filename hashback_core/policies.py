"""
Field Policies
==============
Validators applied by the parser to individual header fields.

Every policy takes the supplied value and returns None when it is
acceptable or an error string when it is not.
"""

import time
from typing import Callable, Optional

import httpx

HostPolicy = Callable[[str], Optional[str]]
NowPolicy = Callable[[int], Optional[str]]
RoundsPolicy = Callable[[int], Optional[str]]
VerifyPolicy = Callable[[httpx.URL], Optional[str]]
ClockService = Callable[[], int]


def system_clock() -> int:
    """Current time in whole Unix seconds."""
    return int(time.time())


def reject_host(supplied_host: str) -> Optional[str]:
    """Default host policy until a required host is configured."""
    return "Host property is not valid."


def reject_verify(supplied_verify: httpx.URL) -> Optional[str]:
    """Default verify policy until one is configured."""
    return "Verify property is not valid."


def required_host(host: str) -> HostPolicy:
    """Accept only an exact match of the given host."""
    def is_match(supplied_host: str) -> Optional[str]:
        if supplied_host == host:
            return None
        return f'Host property must be "{host}".'
    return is_match


def clock_window(clock: ClockService, allow_seconds: int) -> NowPolicy:
    """
    Accept a Now value within allow_seconds of the clock, inclusive.

    Args:
        clock: Source of the Issuer's current Unix time
        allow_seconds: Permitted skew in either direction
    """
    def is_valid(supplied_now: int) -> Optional[str]:
        actual_now = clock()
        if supplied_now < actual_now - allow_seconds:
            return "Supplied Now property is too far in the past."
        if supplied_now > actual_now + allow_seconds:
            return "Supplied Now property is too far in the future."
        return None
    return is_valid


def rounds_range(min_rounds: int, max_rounds: int) -> RoundsPolicy:
    """Accept a Rounds value between min_rounds and max_rounds, inclusive."""
    def error(too_what: str) -> str:
        return (
            f"Rounds property is too {too_what}."
            f" Valid range: {min_rounds}-{max_rounds}."
        )

    def is_between(supplied_rounds: int) -> Optional[str]:
        if supplied_rounds < min_rounds:
            return error("small")
        if supplied_rounds > max_rounds:
            return error("large")
        return None
    return is_between


def allowed_verify_hosts(*hosts: str) -> VerifyPolicy:
    """Accept https Verify URLs on one of the given hosts."""
    allowed = {host.lower() for host in hosts}

    def is_allowed(supplied_verify: httpx.URL) -> Optional[str]:
        if supplied_verify.scheme != "https":
            return "Verify property must use https."
        if supplied_verify.host.lower() not in allowed:
            return "Verify property is not on an allowed host."
        return None
    return is_allowed
