"""Device geometry: page size, total size, and protocol ceilings."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

MAX_PAGE_SIZE = 128
MAX_DEVICE_KB = 64
MAX_DEVICE_SIZE = MAX_DEVICE_KB * 1024
MAX_READ_LENGTH = 1024  # Drivers and parts misbehave on longer sequential reads
ADDRESS_BYTES = 2


def is_binary_size(value: int, limit: int) -> bool:
    """Return True if value is 1 or a power of two no larger than limit."""
    return 0 < value <= limit and (value & (value - 1)) == 0


@dataclass(frozen=True)
class DeviceGeometry:
    """Page size and capacity of one EEPROM part.

    Built once per session and passed to every transfer component.
    ``page_size`` bounds the data portion of a single write frame;
    it need not divide ``total_size``, in which case the last page
    transferred is short.
    """

    page_size: int
    total_size: int

    def __post_init__(self) -> None:
        if not 0 < self.page_size <= MAX_PAGE_SIZE:
            raise ValueError(
                f"Page size {self.page_size} outside 1..{MAX_PAGE_SIZE}"
            )
        if not 0 < self.total_size <= MAX_DEVICE_SIZE:
            raise ValueError(
                f"Device size {self.total_size} outside 1..{MAX_DEVICE_SIZE}"
            )

    @classmethod
    def from_kilobytes(cls, size_kb: int, page_size: int) -> DeviceGeometry:
        """Build a geometry from a device size in KB.

        Args:
            size_kb: Device size in KB; 1 or a power of two up to 64.
            page_size: Write page size in bytes.

        Raises:
            ValueError: If size_kb is not a valid binary size.
        """
        if not is_binary_size(size_kb, MAX_DEVICE_KB):
            raise ValueError(
                f"Device size must be a binary multiple in the 1-{MAX_DEVICE_KB}K range"
            )
        return cls(page_size=page_size, total_size=size_kb * 1024)

    @property
    def buffer_size(self) -> int:
        """Bytes reserved for a memory buffer, including one page of overrun."""
        return self.total_size + self.page_size

    @property
    def page_count(self) -> int:
        return -(-self.total_size // self.page_size)

    def strides(self) -> Iterator[tuple[int, int]]:
        """Yield (address, length) for each page-sized stride of the device."""
        for address in range(0, self.total_size, self.page_size):
            yield address, min(self.page_size, self.total_size - address)

    def check_span(self, address: int, length: int) -> None:
        """Raise ValueError unless [address, address+length) lies on the device."""
        if address < 0 or length < 0 or address + length > self.total_size:
            raise ValueError(
                f"Span 0x{address:04X}+{length} exceeds device size {self.total_size}"
            )
