"""Flat binary image files: one byte per device address, no header."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .errors import ImageError

logger = logging.getLogger(__name__)


@dataclass
class LoadedImage:
    """Image contents sized to the device, and whether padding was needed."""

    data: bytearray
    padded: bool


def load_image(path: str | Path, length: int) -> LoadedImage:
    """Read up to length bytes of an image file.

    A file shorter than the device is zero-padded with a warning; bytes
    past length are ignored.

    Raises:
        ImageError: If the file cannot be opened or read.
    """
    logger.info("Reading %s", path)
    try:
        with open(path, "rb") as f:
            raw = f.read(length)
    except OSError as e:
        raise ImageError(f"Unable to read {path}: {e.strerror or e}") from e

    data = bytearray(length)
    data[:len(raw)] = raw
    padded = len(raw) < length
    if padded:
        logger.warning(
            "%s is smaller than the EEPROM (%d of %d bytes); "
            "remainder filled with 0x00", path, len(raw), length,
        )
    return LoadedImage(data=data, padded=padded)


def save_image(path: str | Path, data: bytes) -> None:
    """Write data to path as a raw image.

    Raises:
        ImageError: If the file cannot be created or written.
    """
    logger.info("Writing %s", path)
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise ImageError(f"Unable to write {path}: {e.strerror or e}") from e
