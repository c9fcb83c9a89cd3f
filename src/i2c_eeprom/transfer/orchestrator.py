"""Transfer orchestrator: whole-device fill, write, read and verify."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..bus.handle import BusHandle
from ..errors import ResourceError
from ..geometry import DeviceGeometry
from ..patterns import FillPattern, fill_buffer
from .monitor import NULL_MONITOR, TransferMonitor
from .policy import DEFAULT_POLICY, RetryPolicy
from .reader import read_chunk
from .writer import write_span

logger = logging.getLogger(__name__)

MAX_RECORDED_MISMATCHES = 10


@dataclass(frozen=True)
class Mismatch:
    """One byte that read back differently from the reference."""

    address: int
    actual: int
    expected: int


@dataclass
class VerifyResult:
    """Outcome of comparing the device against a reference buffer."""

    mismatch_count: int = 0
    mismatches: list[Mismatch] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.mismatch_count == 0

    @property
    def truncated(self) -> bool:
        """True if more mismatches occurred than were recorded."""
        return self.mismatch_count > len(self.mismatches)


class EepromProgrammer:
    """Drives whole-device transfers through one bus handle.

    Every transfer moves in page_size strides, reads included, so that
    progress advances once per page. Any TransferError from a lower
    layer propagates unchanged: a transfer either completes or aborts,
    with no resumable partial state.
    """

    def __init__(
        self,
        handle: BusHandle,
        geometry: DeviceGeometry,
        policy: RetryPolicy = DEFAULT_POLICY,
        monitor: TransferMonitor = NULL_MONITOR,
    ) -> None:
        self.handle = handle
        self.geometry = geometry
        self.policy = policy
        self.monitor = monitor

    def new_buffer(self) -> bytearray:
        """Allocate a zeroed memory buffer with one page of overrun margin.

        Raises:
            ResourceError: If the buffer cannot be allocated.
        """
        try:
            return bytearray(self.geometry.buffer_size)
        except MemoryError as e:
            raise ResourceError(
                f"Cannot allocate {self.geometry.buffer_size} byte buffer"
            ) from e

    def fill(self, pattern: FillPattern) -> bytearray:
        """Fill the device with pattern; return the buffer that was written."""
        buffer = fill_buffer(pattern, self.geometry.total_size, self.new_buffer())
        self.write(buffer)
        return buffer

    def write(self, image: bytes) -> None:
        """Write the first total_size bytes of image to the device."""
        if len(image) < self.geometry.total_size:
            raise ValueError(
                f"Image of {len(image)} bytes is smaller than device "
                f"({self.geometry.total_size} bytes)"
            )
        view = memoryview(image)
        self.monitor.start("Writing device", self.geometry.page_count)
        try:
            for address, length in self.geometry.strides():
                write_span(
                    self.handle, self.geometry, address,
                    view[address:address + length], self.policy, self.monitor,
                )
                self.monitor.page_done(address, length)
        finally:
            self.monitor.finish()
        logger.info("Wrote %d bytes", self.geometry.total_size)

    def read(self) -> bytearray:
        """Read the whole device into a new buffer."""
        buffer = self.new_buffer()
        self.monitor.start("Reading device", self.geometry.page_count)
        try:
            for address, length in self.geometry.strides():
                buffer[address:address + length] = read_chunk(
                    self.handle, address, length, self.policy, self.monitor,
                )
                self.monitor.page_done(address, length)
        finally:
            self.monitor.finish()
        logger.info("Read %d bytes", self.geometry.total_size)
        return buffer

    def verify(self, reference: bytes) -> VerifyResult:
        """Re-read the device and compare it byte by byte with reference.

        The device is always read back, even when reference was just
        written, so that persistence is checked rather than assumed.
        Only the first MAX_RECORDED_MISMATCHES differences are recorded,
        but the whole device is read and every difference is counted.
        """
        if len(reference) < self.geometry.total_size:
            raise ValueError(
                f"Reference of {len(reference)} bytes is smaller than device "
                f"({self.geometry.total_size} bytes)"
            )
        result = VerifyResult()
        self.monitor.start("Verifying", self.geometry.page_count)
        try:
            for address, length in self.geometry.strides():
                scratch = read_chunk(
                    self.handle, address, length, self.policy, self.monitor,
                )
                expected = reference[address:address + length]
                if scratch != expected:
                    self._record(result, address, scratch, expected)
                self.monitor.page_done(address, length)
        finally:
            self.monitor.finish()

        logger.debug("verify complete: %d mismatched bytes", result.mismatch_count)
        return result

    @staticmethod
    def _record(result: VerifyResult, address: int, actual: bytes, expected: bytes) -> None:
        for offset, (got, want) in enumerate(zip(actual, expected)):
            if got == want:
                continue
            result.mismatch_count += 1
            if len(result.mismatches) < MAX_RECORDED_MISMATCHES:
                mismatch = Mismatch(address + offset, got, want)
                result.mismatches.append(mismatch)
                logger.warning(
                    "Verify error at 0x%04X read 0x%02X, expect 0x%02X",
                    mismatch.address, got, want,
                )
                if len(result.mismatches) == MAX_RECORDED_MISMATCHES:
                    logger.warning("Ignoring other verify errors")
