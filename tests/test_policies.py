"""
Tests for field policies.
"""

import httpx
import pytest

from hashback_core.policies import (
    allowed_verify_hosts,
    clock_window,
    reject_host,
    reject_verify,
    required_host,
    rounds_range,
    system_clock,
)


class TestPolicies:
    """Tests for the standard policy factories."""

    def test_reject_defaults(self):
        """Should reject everything by default."""
        assert reject_host("anything") == "Host property is not valid."
        assert reject_verify(httpx.URL("https://a/")) == "Verify property is not valid."

    def test_required_host(self):
        """Should require an exact host match."""
        policy = required_host("server.example")
        assert policy("server.example") is None
        assert policy("SERVER.EXAMPLE") == 'Host property must be "server.example".'

    def test_clock_window_reads_clock_each_call(self):
        """Should read the clock on every check."""
        now = [1000]
        policy = clock_window(lambda: now[0], 5)
        assert policy(1005) is None
        now[0] = 2000
        assert policy(1005) == "Supplied Now property is too far in the past."

    @pytest.mark.parametrize("rounds,expected", [
        (1, None),
        (99, None),
        (0, "Rounds property is too small. Valid range: 1-99."),
        (100, "Rounds property is too large. Valid range: 1-99."),
    ])
    def test_rounds_range(self, rounds, expected):
        """Should accept the bounds inclusively."""
        assert rounds_range(1, 99)(rounds) == expected

    def test_allowed_verify_hosts(self):
        """Should require https on an allowed host."""
        policy = allowed_verify_hosts("Client.Example")
        assert policy(httpx.URL("https://client.example/x")) is None
        assert policy(httpx.URL("http://client.example/x")) == "Verify property must use https."
        assert policy(httpx.URL("https://evil.example/x")) == "Verify property is not on an allowed host."

    def test_system_clock(self):
        """Should return whole Unix seconds."""
        import time

        assert abs(system_clock() - time.time()) < 2
        assert isinstance(system_clock(), int)
