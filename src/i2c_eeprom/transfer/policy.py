"""Retry bounds for bus transactions."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field

DATA_ATTEMPTS = 100
DATA_DELAY = 10e-6  # 10 us between data/addressing attempts
POLL_ATTEMPTS = 100
POLL_DELAY = 1e-6  # 1 us between readiness probes


@dataclass(frozen=True)
class RetryPolicy:
    """Attempt ceilings and inter-attempt spacing.

    Timeouts are attempt counts, not wall-clock deadlines: worst-case
    latency scales with the cost of a bus transaction.
    """

    attempts: int = DATA_ATTEMPTS
    delay: float = DATA_DELAY
    poll_attempts: int = POLL_ATTEMPTS
    poll_delay: float = POLL_DELAY
    sleep: Callable[[float], None] = field(default=time.sleep, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.attempts < 1 or self.poll_attempts < 1:
            raise ValueError("Retry policy needs at least one attempt")


DEFAULT_POLICY = RetryPolicy()
