"""Paged writer: commits data in page-bounded write frames with retry."""

from __future__ import annotations

import logging

from ..bus.handle import BusHandle
from ..errors import TransferError
from ..geometry import DeviceGeometry
from .address import encode_address
from .monitor import NULL_MONITOR, TransferMonitor
from .policy import DEFAULT_POLICY, RetryPolicy
from .poller import poll_ready

logger = logging.getLogger(__name__)


def write_page(
    handle: BusHandle,
    geometry: DeviceGeometry,
    address: int,
    chunk: bytes,
    policy: RetryPolicy = DEFAULT_POLICY,
    monitor: TransferMonitor = NULL_MONITOR,
) -> bool:
    """Write one frame: the 2-byte address followed by chunk.

    chunk must fit inside the page that holds address. The part would
    otherwise wrap its write pointer within the page and overwrite
    earlier bytes. A frame that is not fully acknowledged is resent from
    scratch as a new attempt.

    Args:
        handle: Bus handle bound to the device.
        geometry: Page size the frame is checked against.
        address: Memory address of the first data byte.
        chunk: Data bytes, at most the rest of the page.
        policy: Attempt ceiling and spacing.
        monitor: Notified of each failed attempt.

    Returns:
        True once the frame has been acknowledged.

    Raises:
        TransferError: If every attempt failed.
        ValueError: If chunk is empty or crosses a page boundary.
    """
    page = geometry.page_size
    if not 0 < len(chunk) <= page:
        raise ValueError(f"Write chunk of {len(chunk)} bytes outside 1..{page}")
    if address % page + len(chunk) > page:
        raise ValueError(
            f"Write chunk of {len(chunk)} bytes at 0x{address:04X} crosses a {page}-byte page"
        )
    frame = encode_address(address) + bytes(chunk)

    poll_ready(handle, policy)
    for _ in range(policy.attempts):
        written = handle.raw_write(frame)
        if written == len(frame):
            return True
        logger.debug(
            "write frame at 0x%04X short (%d of %d bytes)",
            address, written, len(frame),
        )
        monitor.retry(address, "write")
        policy.sleep(policy.delay)
    raise TransferError("write", address, policy.attempts)


def write_span(
    handle: BusHandle,
    geometry: DeviceGeometry,
    address: int,
    data: bytes,
    policy: RetryPolicy = DEFAULT_POLICY,
    monitor: TransferMonitor = NULL_MONITOR,
) -> None:
    """Write an arbitrary-length buffer starting at address.

    The buffer is split so that no frame carries more than
    geometry.page_size bytes or crosses a page boundary. From an aligned
    start every frame is a full page except possibly the last.

    Raises:
        TransferError: If any frame exhausts its attempts; nothing after
            it is written.
        ValueError: If the span runs past the end of the device.
    """
    geometry.check_span(address, len(data))
    page = geometry.page_size
    view = memoryview(data)
    offset = 0
    while offset < len(view):
        room = page - (address % page)
        length = min(room, len(view) - offset)
        write_page(handle, geometry, address, view[offset:offset + length], policy, monitor)
        # Advance by what was sent, so a short final chunk lands correctly
        address += length
        offset += length
    poll_ready(handle, policy)
