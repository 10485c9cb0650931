"""Cosmetic progress shown while a review is being generated.

The value is not tied to the actual request in any way: it creeps toward
95% on a timer and only reaches 100% once the review call has returned.
"""

from __future__ import annotations

import random

CEILING = 95
DONE = 100
TICK_SECONDS = 0.2


class ScanProgress:
    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()
        self.value = 0

    def advance(self) -> int:
        """Step forward by 5-9 points without passing CEILING."""
        if self.value < CEILING:
            self.value = min(CEILING, self.value + self._rng.randint(5, 9))
        return self.value

    def complete(self) -> int:
        self.value = DONE
        return self.value

    def reset(self) -> None:
        self.value = 0
