"""Base protocol for raw I2C bus handles."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class BusHandle(Protocol):
    """Protocol for an open channel to one device on one I2C bus.

    The handle is already bound to the device address. Both primitives
    report failure through their return value rather than raising, so
    callers can treat NACKs and short transfers as retryable contention.
    A failed call must leave the handle usable for the next attempt.
    """

    def raw_write(self, data: bytes) -> int:
        """Write data in a single transaction; return bytes transferred (0 on failure)."""
        ...

    def raw_read(self, length: int) -> bytes:
        """Read up to length bytes in a single transaction; return b"" on failure."""
        ...
