"""Linux i2c-dev bus handle built on smbus2 combined transactions."""

from __future__ import annotations

import logging

from smbus2 import SMBus, i2c_msg

from ..errors import BusOpenError

logger = logging.getLogger(__name__)

MAX_DEVICE_ADDRESS = 0x7F  # 7-bit addressing


class SMBusHandle:
    """Raw byte channel to one device on /dev/i2c-<bus>.

    Each raw_write / raw_read is a single I2C_RDWR message, so the
    device sees exactly one START..STOP transaction per call. Kernel
    errors (NACK, arbitration loss, timeout) surface as OSError and are
    reported as a failed transfer rather than raised.
    """

    def __init__(self, bus: int, address: int) -> None:
        if not 0 <= address <= MAX_DEVICE_ADDRESS:
            raise ValueError(f"Device address 0x{address:02X} is not a 7-bit address")
        self.bus_number = bus
        self.address = address
        try:
            self._bus = SMBus(bus)
        except OSError as e:
            raise BusOpenError(f"Failed to open /dev/i2c-{bus}: {e.strerror or e}") from e

    def raw_write(self, data: bytes) -> int:
        msg = i2c_msg.write(self.address, data)
        try:
            self._bus.i2c_rdwr(msg)
        except OSError as e:
            logger.debug(
                "write of %d bytes to 0x%02X failed: %s",
                len(data), self.address, e.strerror or e,
            )
            return 0
        return len(data)

    def raw_read(self, length: int) -> bytes:
        msg = i2c_msg.read(self.address, length)
        try:
            self._bus.i2c_rdwr(msg)
        except OSError as e:
            logger.debug(
                "read of %d bytes from 0x%02X failed: %s",
                length, self.address, e.strerror or e,
            )
            return b""
        return bytes(msg)

    def close(self) -> None:
        self._bus.close()

    def __enter__(self) -> SMBusHandle:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


def open_device(bus: int, address: int) -> SMBusHandle:
    """Open the bus and bind a handle to the given device address.

    Raises:
        BusOpenError: If /dev/i2c-<bus> cannot be opened.
        ValueError: If address is not a 7-bit I2C address.
    """
    logger.debug("opening device 0x%02X on /dev/i2c-%d", address, bus)
    return SMBusHandle(bus, address)
