"""Tests for loading and saving flat binary images."""

import logging

import pytest

from i2c_eeprom.errors import ImageError
from i2c_eeprom.image import load_image, save_image


class TestLoadImage:
    """Tests for reading image files into device-sized buffers."""

    def test_exact_size(self, tmp_path) -> None:
        path = tmp_path / "full.bin"
        path.write_bytes(bytes(range(256)) * 4)
        image = load_image(path, 1024)
        assert image.data == bytes(range(256)) * 4
        assert not image.padded

    def test_short_file_zero_padded(self, tmp_path, caplog) -> None:
        """A short file is padded with 0x00 and only warned about."""
        path = tmp_path / "short.bin"
        path.write_bytes(b"\xAB" * 10)
        with caplog.at_level(logging.WARNING, logger="i2c_eeprom"):
            image = load_image(path, 64)
        assert image.padded
        assert image.data == b"\xAB" * 10 + bytes(54)
        assert "remainder filled with 0x00" in caplog.text

    def test_long_file_truncated(self, tmp_path) -> None:
        path = tmp_path / "long.bin"
        path.write_bytes(b"\x01" * 2048)
        image = load_image(path, 1024)
        assert len(image.data) == 1024
        assert not image.padded

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(ImageError, match="Unable to read"):
            load_image(tmp_path / "nope.bin", 1024)


class TestSaveImage:
    """Tests for writing raw images."""

    def test_raw_bytes_no_header(self, tmp_path) -> None:
        path = tmp_path / "out.bin"
        save_image(path, b"\x00\x01\x02")
        assert path.read_bytes() == b"\x00\x01\x02"

    def test_unwritable_path(self, tmp_path) -> None:
        with pytest.raises(ImageError, match="Unable to write"):
            save_image(tmp_path / "missing-dir" / "out.bin", b"\x00")

    def test_round_trip(self, tmp_path) -> None:
        path = tmp_path / "rt.bin"
        data = bytes((i * 3) & 0xFF for i in range(4096))
        save_image(path, data)
        assert load_image(path, 4096).data == data
