"""Paged, retrying EEPROM transfer engine."""

from .address import encode_address, go_to_address
from .orchestrator import EepromProgrammer, Mismatch, VerifyResult
from .poller import poll_ready
from .reader import read_chunk
from .writer import write_page, write_span

__all__ = [
    "EepromProgrammer",
    "Mismatch",
    "VerifyResult",
    "encode_address",
    "go_to_address",
    "poll_ready",
    "read_chunk",
    "write_page",
    "write_span",
]
