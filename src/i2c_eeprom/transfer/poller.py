"""Device readiness poller: waits out the EEPROM's internal write cycle."""

from __future__ import annotations

import logging

from ..bus.handle import BusHandle
from .policy import DEFAULT_POLICY, RetryPolicy

logger = logging.getLogger(__name__)


def poll_ready(handle: BusHandle, policy: RetryPolicy = DEFAULT_POLICY) -> bool:
    """Probe the device with 1-byte reads until it acknowledges.

    The part NACKs every transaction while committing a page, so a failed
    read means busy, not broken. Adapts to each part's real write-cycle
    time instead of sleeping a fixed worst case.

    Args:
        handle: Bus handle bound to the device.
        policy: Supplies the probe ceiling and spacing.

    Returns:
        True once the device answers; False if it never did within the
        attempt ceiling. Callers may ignore False, since the next
        addressed transaction retries on its own.
    """
    for attempt in range(policy.poll_attempts):
        if len(handle.raw_read(1)) == 1:
            if attempt:
                logger.debug("device ready after %d busy probes", attempt)
            return True
        policy.sleep(policy.poll_delay)
    logger.debug("device still busy after %d probes", policy.poll_attempts)
    return False
