"""Exception hierarchy for the EEPROM tool.

Transient bus failures never raise; they are retried locally. The
exceptions below are the unrecoverable outcomes that propagate up to
the CLI, which maps them to messages and exit codes.
"""


class EepromError(Exception):
    """Base class for all EEPROM tool failures."""


class TransferError(EepromError):
    """A write frame or read chunk failed on every allowed attempt."""

    def __init__(self, operation: str, address: int, attempts: int) -> None:
        self.operation = operation
        self.address = address
        self.attempts = attempts
        super().__init__(
            f"Hard {operation} error at 0x{address:04X} "
            f"after {attempts} attempts - aborting"
        )


class ReadLengthError(EepromError, ValueError):
    """A read request exceeded the bus read ceiling; no I/O was attempted."""

    def __init__(self, length: int, limit: int) -> None:
        self.length = length
        self.limit = limit
        super().__init__(
            f"Maximum IO length is {limit} bytes, got {length}; use a smaller read"
        )


class BusOpenError(EepromError):
    """The I2C bus device node could not be opened."""


class ImageError(EepromError):
    """An image file could not be read or written."""


class ResourceError(EepromError):
    """The memory buffer could not be allocated."""
