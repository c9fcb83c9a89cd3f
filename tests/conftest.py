"""Shared fixtures: a simulated EEPROM behind the BusHandle protocol."""

from __future__ import annotations

import pytest

from i2c_eeprom.geometry import DeviceGeometry
from i2c_eeprom.transfer.monitor import TransferMonitor
from i2c_eeprom.transfer.policy import RetryPolicy


class FakeEEPROM:
    """In-memory 24Cxx-style part that speaks raw write/read frames.

    A write frame sets the address pointer from its first two bytes and
    stores any further bytes, wrapping inside the current page the way
    real parts do. After storing data the part NACKs the next
    ``write_cycle`` transactions while it "commits".

    Failure injection:
        write_results: queued return values that override the next raw
            writes (e.g. 0 for a NACK, 1 for a short address write).
        failing_reads: number of upcoming multi-byte reads to fail.
    """

    def __init__(self, geometry: DeviceGeometry, write_cycle: int = 2) -> None:
        self.geometry = geometry
        self.memory = bytearray(geometry.total_size)
        self.pointer = 0
        self.write_cycle = write_cycle
        self.busy = 0
        self.write_results: list[int] = []
        self.failing_reads = 0
        self.calls: list[tuple[str, bytes | int]] = []
        self.closed = False

    def raw_write(self, data: bytes) -> int:
        data = bytes(data)
        self.calls.append(("write", data))
        if self.write_results:
            return self.write_results.pop(0)
        if self.busy:
            self.busy -= 1
            return 0
        if len(data) < 2:
            return 0
        self.pointer = int.from_bytes(data[:2], "big") % self.geometry.total_size
        payload = data[2:]
        if payload:
            page = self.geometry.page_size
            base = self.pointer - (self.pointer % page)
            offset = self.pointer % page
            for byte in payload:
                self.memory[base + offset] = byte
                offset = (offset + 1) % page
            self.busy = self.write_cycle
        return len(data)

    def raw_read(self, length: int) -> bytes:
        self.calls.append(("read", length))
        if self.busy:
            self.busy -= 1
            return b""
        if length > 1 and self.failing_reads:
            self.failing_reads -= 1
            return b""
        out = bytearray()
        for _ in range(length):
            out.append(self.memory[self.pointer])
            self.pointer = (self.pointer + 1) % self.geometry.total_size
        return bytes(out)

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> FakeEEPROM:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # Helpers for assertions

    def data_writes(self) -> list[bytes]:
        """Payloads (address stripped) of all write frames that carried data."""
        return [
            frame[2:] for kind, frame in self.calls
            if kind == "write" and len(frame) > 2
        ]

    def read_lengths(self) -> list[int]:
        return [n for kind, n in self.calls if kind == "read"]


class RecordingMonitor(TransferMonitor):
    """Monitor that keeps every notification for inspection."""

    def __init__(self) -> None:
        self.events: list[tuple] = []

    def start(self, label: str, pages: int) -> None:
        self.events.append(("start", label, pages))

    def page_done(self, address: int, length: int) -> None:
        self.events.append(("page", address, length))

    def retry(self, address: int, stage: str) -> None:
        self.events.append(("retry", address, stage))

    def finish(self) -> None:
        self.events.append(("finish",))

    def of(self, kind: str) -> list[tuple]:
        return [e for e in self.events if e[0] == kind]


@pytest.fixture
def policy() -> RetryPolicy:
    """Zero-delay retry policy with the standard attempt ceilings."""
    return RetryPolicy(delay=0.0, poll_delay=0.0, sleep=lambda _: None)


@pytest.fixture
def make_eeprom():
    """Factory fixture: returns a function that creates a fresh FakeEEPROM."""
    def _make(page_size: int = 32, total_size: int = 4096, write_cycle: int = 2) -> FakeEEPROM:
        return FakeEEPROM(DeviceGeometry(page_size, total_size), write_cycle)
    return _make


@pytest.fixture
def monitor() -> RecordingMonitor:
    return RecordingMonitor()
