"""
Input shaper: turns noisy boolean key samples into clean edges.

Each logical key owns an 8-bit shift register. Every sample shifts the raw
state in; an edge is reported only when the two oldest samples disagree with
three consecutive newer ones. After an edge the register is locked to the
new level so the same edge cannot fire again until the opposite pattern is
seen.
"""

from enum import Enum
from typing import List, Optional

from gitools.config.constants import (
    EDGE_MASK,
    LOCKED_PRESSED,
    LOCKED_RELEASED,
    PRESS_PATTERN,
    REGISTER_MASK,
    RELEASE_PATTERN,
)


class Edge(Enum):
    """Edge produced by a single sample."""

    NONE = "none"
    PRESS = "press"
    RELEASE = "release"


class InputShaper:
    """Shift-register debouncer for a fixed number of keys.

    The caller supplies samples at a constant polling cadence; the shaper
    owns no timers.
    """

    def __init__(self, key_count: int):
        if key_count < 0:
            raise ValueError(f"key_count must be >= 0, got {key_count}")
        self._registers: List[int] = [0] * key_count

    @property
    def key_count(self) -> int:
        return len(self._registers)

    def register(self, key_id: int) -> int:
        """Current history byte for a key (newest sample in bit 0)."""
        return self._registers[key_id]

    def sample(self, key_id: int, raw_pressed: bool) -> Edge:
        """Shift one raw sample in and report the resulting edge."""
        register = ((self._registers[key_id] << 1) | (1 if raw_pressed else 0)) & REGISTER_MASK
        masked = register & EDGE_MASK

        if masked == PRESS_PATTERN:
            self._registers[key_id] = LOCKED_PRESSED
            return Edge.PRESS

        if masked == RELEASE_PATTERN:
            self._registers[key_id] = LOCKED_RELEASED
            return Edge.RELEASE

        self._registers[key_id] = register
        return Edge.NONE

    def reset(self, key_id: Optional[int] = None) -> None:
        """Clear one register, or all of them."""
        if key_id is None:
            for i in range(len(self._registers)):
                self._registers[i] = 0
        else:
            self._registers[key_id] = 0
