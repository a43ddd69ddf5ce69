"""
Unus Tracker
============
In-memory replay detection for Unus values.

Holds the most recent UNUS_CAPACITY distinct values in insertion order.
Older values fall out of the window and will be accepted again.
"""

import threading
from collections import OrderedDict
from typing import Optional

import structlog

from .config import UNUS_CAPACITY

logger = structlog.get_logger(__name__)

# Keeps the decimal form of every folded value the same width
FOLD_OFFSET = 10_000_000_000_000_000
_MASK_64 = (1 << 64) - 1


def fold_unus(unus: bytes) -> int:
    """
    Fold Unus bytes into a single 64-bit value.

    Each byte is XORed in three bits further left than the previous one,
    so sixteen bytes cover bits 0-52.
    """
    folded = 0
    for index, value in enumerate(unus):
        folded ^= value << ((index * 3) % 64)
    return (folded & _MASK_64) + FOLD_OFFSET


class UnusTracker:
    """
    Bounded FIFO set of Unus values already seen.

    One instance belongs to each Issuer validation context. Share an
    instance between parsers that must share a replay window.
    """

    def __init__(self, capacity: Optional[int] = None):
        self.capacity = UNUS_CAPACITY if capacity is None else capacity
        if self.capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {self.capacity}")
        self._seen: "OrderedDict[int, None]" = OrderedDict()
        self._lock = threading.Lock()

    def is_reused(self, unus: bytes) -> bool:
        """
        Check whether an Unus has been seen, recording it if not.

        Args:
            unus: Decoded Unus bytes

        Returns:
            True if the value is already in the window
        """
        folded = fold_unus(unus)

        with self._lock:
            if folded in self._seen:
                logger.warning("Replay attack detected", unus_hash=str(folded)[:8])
                return True

            self._seen[folded] = None
            while len(self._seen) > self.capacity:
                self._seen.popitem(last=False)
            return False

    def __len__(self) -> int:
        with self._lock:
            return len(self._seen)
