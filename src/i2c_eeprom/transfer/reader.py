"""Bounded reader: addressed sequential reads with retry."""

from __future__ import annotations

import logging

from ..bus.handle import BusHandle
from ..errors import ReadLengthError, TransferError
from ..geometry import MAX_READ_LENGTH
from .address import go_to_address
from .monitor import NULL_MONITOR, TransferMonitor
from .policy import DEFAULT_POLICY, RetryPolicy
from .poller import poll_ready

logger = logging.getLogger(__name__)


def read_chunk(
    handle: BusHandle,
    address: int,
    length: int,
    policy: RetryPolicy = DEFAULT_POLICY,
    monitor: TransferMonitor = NULL_MONITOR,
) -> bytes:
    """Read length bytes starting at address.

    Every attempt re-sends the address before reading: a failed read
    may have left the pointer anywhere, and another master may have
    moved it.

    Args:
        handle: Bus handle bound to the device.
        address: Memory address of the first byte.
        length: Number of bytes, 1..MAX_READ_LENGTH.
        policy: Attempt ceiling and spacing.
        monitor: Notified of each failed attempt.

    Returns:
        Exactly length bytes.

    Raises:
        ReadLengthError: If length exceeds MAX_READ_LENGTH (no I/O is done).
        TransferError: If every attempt failed.
    """
    if length > MAX_READ_LENGTH:
        raise ReadLengthError(length, MAX_READ_LENGTH)
    if length < 1:
        raise ValueError(f"Read length must be positive, got {length}")

    poll_ready(handle, policy)
    for _ in range(policy.attempts):
        if not go_to_address(handle, address, policy):
            monitor.retry(address, "address")
            policy.sleep(policy.delay)
            continue
        data = handle.raw_read(length)
        if len(data) == length:
            return data
        logger.debug(
            "read at 0x%04X short (%d of %d bytes)", address, len(data), length,
        )
        monitor.retry(address, "read")
        policy.sleep(policy.delay)
    raise TransferError("read", address, policy.attempts)
