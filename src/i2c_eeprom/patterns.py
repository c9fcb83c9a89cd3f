"""Fill patterns for blanking or exercising a device."""

from __future__ import annotations

import logging
from enum import Enum

logger = logging.getLogger(__name__)

INCREMENT_CHUNK = 256
INCREMENT_STEP = 3  # Per-chunk offset, so a dead or aliased page shows up on verify


class FillPattern(Enum):
    """Fill patterns, keyed by their single-character CLI code."""

    ZEROS = "0"
    ONES = "1"
    INCREMENT = "3"
    FIVES = "5"
    AS = "a"

    @property
    def byte(self) -> int | None:
        """The constant fill byte, or None for the incrementing pattern."""
        return _CONSTANT_BYTES.get(self)

    def describe(self) -> str:
        if self is FillPattern.INCREMENT:
            return "Increment"
        return f"0x{self.byte:02X}"


_CONSTANT_BYTES = {
    FillPattern.ZEROS: 0x00,
    FillPattern.ONES: 0xFF,
    FillPattern.FIVES: 0x55,
    FillPattern.AS: 0xAA,
}


def fill_buffer(
    pattern: FillPattern, size: int, buffer: bytearray | None = None,
) -> bytearray:
    """Write pattern into the first size bytes of buffer.

    The incrementing pattern gives byte o of 256-byte chunk c the value
    (o + 3*c) mod 256, independent of the device page size.

    Args:
        pattern: Pattern to generate.
        size: Number of bytes to fill.
        buffer: Target buffer; a new one of size bytes if None.

    Returns:
        The filled buffer.
    """
    if buffer is None:
        buffer = bytearray(size)
    if size > len(buffer):
        raise ValueError(f"Buffer of {len(buffer)} bytes cannot hold {size}")

    logger.info("Preparing pattern (%s)", pattern.describe())
    value = pattern.byte
    if value is not None:
        buffer[:size] = bytes([value]) * size
        return buffer

    for start in range(0, size, INCREMENT_CHUNK):
        offset = (start // INCREMENT_CHUNK) * INCREMENT_STEP
        length = min(INCREMENT_CHUNK, size - start)
        buffer[start:start + length] = bytes((o + offset) & 0xFF for o in range(length))
    return buffer
