"""Tests for the address sequencer."""

import pytest

from i2c_eeprom.transfer.address import encode_address, go_to_address


class TestEncodeAddress:
    """Tests for big-endian address encoding."""

    def test_msb_first(self) -> None:
        assert encode_address(0x1234) == b"\x12\x34"

    def test_bounds(self) -> None:
        assert encode_address(0) == b"\x00\x00"
        assert encode_address(0xFFFF) == b"\xFF\xFF"

    def test_out_of_range(self) -> None:
        with pytest.raises(ValueError):
            encode_address(0x10000)
        with pytest.raises(ValueError):
            encode_address(-1)


class TestGoToAddress:
    """Tests for positioning the device pointer."""

    def test_sets_pointer(self, make_eeprom, policy) -> None:
        """A two-byte write moves the device pointer."""
        dev = make_eeprom()
        assert go_to_address(dev, 0x0ABC, policy) is True
        assert dev.pointer == 0x0ABC
        assert ("write", b"\x0A\xBC") in dev.calls

    def test_polls_before_writing(self, make_eeprom, policy) -> None:
        """Readiness is probed before the address write is issued."""
        dev = make_eeprom()
        go_to_address(dev, 0x10, policy)
        assert dev.calls[0] == ("read", 1)
        assert dev.calls[-1] == ("write", b"\x00\x10")

    def test_short_write_is_failure(self, make_eeprom, policy) -> None:
        """Only one of two address bytes transferred counts as failure."""
        dev = make_eeprom()
        dev.write_results = [1]
        assert go_to_address(dev, 0x20, policy) is False

    def test_nack_is_failure(self, make_eeprom, policy) -> None:
        dev = make_eeprom()
        dev.write_results = [0]
        assert go_to_address(dev, 0x20, policy) is False

    def test_proceeds_when_poll_times_out(self, make_eeprom, policy) -> None:
        """An exhausted readiness poll does not prevent the address write."""
        dev = make_eeprom()
        dev.busy = 100
        assert go_to_address(dev, 0x40, policy) is True
        assert dev.pointer == 0x40
