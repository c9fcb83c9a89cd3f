"""Read, write, fill and verify I2C serial EEPROMs from Linux user space."""

from .errors import (
    BusOpenError,
    EepromError,
    ImageError,
    ReadLengthError,
    ResourceError,
    TransferError,
)
from .geometry import DeviceGeometry
from .patterns import FillPattern
from .transfer.orchestrator import EepromProgrammer, Mismatch, VerifyResult
from .transfer.policy import RetryPolicy

__all__ = [
    "BusOpenError",
    "DeviceGeometry",
    "EepromError",
    "EepromProgrammer",
    "FillPattern",
    "ImageError",
    "Mismatch",
    "ReadLengthError",
    "ResourceError",
    "RetryPolicy",
    "TransferError",
    "VerifyResult",
]
