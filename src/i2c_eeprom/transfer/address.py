"""Address sequencer: positions the device's internal pointer."""

from __future__ import annotations

import logging

from ..bus.handle import BusHandle
from ..geometry import ADDRESS_BYTES
from .policy import DEFAULT_POLICY, RetryPolicy
from .poller import poll_ready

logger = logging.getLogger(__name__)


def encode_address(address: int) -> bytes:
    """Encode a 16-bit memory address, most significant byte first."""
    if not 0 <= address <= 0xFFFF:
        raise ValueError(f"Memory address {address:#x} outside 0x0000..0xFFFF")
    return address.to_bytes(ADDRESS_BYTES, "big")


def go_to_address(
    handle: BusHandle, address: int, policy: RetryPolicy = DEFAULT_POLICY,
) -> bool:
    """Set the device's read/write pointer to address.

    Other bus masters may have moved the pointer since our last
    transaction, so every read must come through here first.

    Returns:
        True if both address bytes were acknowledged. False is not fatal;
        the caller retries the whole addressing+transfer sequence.
    """
    payload = encode_address(address)
    poll_ready(handle, policy)
    written = handle.raw_write(payload)
    if written != len(payload):
        logger.debug(
            "failed to set address 0x%04X (%d of %d bytes)",
            address, written, len(payload),
        )
        return False
    return True
