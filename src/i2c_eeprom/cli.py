"""Command-line interface for the I2C EEPROM tool."""

import argparse
import logging
import sys

from .bus.smbus import MAX_DEVICE_ADDRESS, open_device
from .console import RichMonitor
from .errors import EepromError, TransferError
from .geometry import MAX_DEVICE_KB, MAX_PAGE_SIZE, DeviceGeometry, is_binary_size
from .hexdump import format_hex_dump
from .image import load_image, save_image
from .logging_config import setup_logging
from .patterns import FillPattern
from .transfer.monitor import TransferMonitor
from .transfer.orchestrator import EepromProgrammer, VerifyResult

DEFAULT_PAGE_SIZE = 32
DEFAULT_SIZE_KB = 4

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_TRANSFER = 2

_EPILOG = """\
fill patterns:
  0  all zeros (0x00)
  1  all ones (0xFF)
  3  incrementing, with a +3 offset on each 0x100 block
  5  0b01010101 (0x55)
  a  0b10101010 (0xAA)

A progress bar advances once per page. The retry count next to it
rises on transient bus errors, for example while another master is
using the I2C bus.
"""


def parse_int(value: str) -> int:
    """Parse a decimal integer, or hexadecimal with a 0x prefix.

    Raises:
        argparse.ArgumentTypeError: If the value is not a number.
    """
    try:
        if value.lower().startswith("0x"):
            return int(value[2:], 16)
        return int(value, 10)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number '{value}'") from None


def _device_address_arg(value: str) -> int:
    address = parse_int(value)
    if not 0 <= address <= MAX_DEVICE_ADDRESS:
        raise argparse.ArgumentTypeError(f"device address {value} is not a 7-bit I2C address")
    return address


def _page_size_arg(value: str) -> int:
    size = parse_int(value)
    if not is_binary_size(size, MAX_PAGE_SIZE):
        raise argparse.ArgumentTypeError(
            "Page Size should be a binary multiple such as 32, 64, 128 bytes"
        )
    return size


def _size_kb_arg(value: str) -> int:
    size = parse_int(value)
    if not is_binary_size(size, MAX_DEVICE_KB):
        raise argparse.ArgumentTypeError(
            f"Device size must be a binary multiple in the 1-{MAX_DEVICE_KB}K range"
        )
    return size


def _fill_arg(value: str) -> FillPattern:
    try:
        return FillPattern(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid Fill pattern '{value}'") from None


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the i2ceeprom command."""
    parser = argparse.ArgumentParser(
        prog="i2ceeprom",
        description="Utility to manipulate I2C EEPROM devices",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("bus", type=parse_int, help="I2C bus number (/dev/i2c-N)")
    parser.add_argument("address", type=_device_address_arg, help="I2C address of the device")
    parser.add_argument(
        "-p", "--page-size", type=_page_size_arg, default=DEFAULT_PAGE_SIZE,
        help=f"Page size of device in bytes (default {DEFAULT_PAGE_SIZE})",
    )
    parser.add_argument(
        "-s", "--size", type=_size_kb_arg, default=DEFAULT_SIZE_KB, metavar="KB",
        help=f"Device size in KB, 1-{MAX_DEVICE_KB} (default {DEFAULT_SIZE_KB})",
    )
    parser.add_argument(
        "-f", "--fill", type=_fill_arg, metavar="PATTERN",
        help="Fill device with the given pattern (0, 1, 3, 5, a)",
    )
    parser.add_argument(
        "-d", "--dump", action="store_true",
        help="Read device and hex dump it to stdout",
    )
    parser.add_argument(
        "-w", "--write", action="store_true", help="Write file contents into EEPROM",
    )
    parser.add_argument(
        "-r", "--read", action="store_true", help="Read contents of EEPROM into file",
    )
    parser.add_argument(
        "-v", "--verify", action="store_true",
        help="Verify after operation (includes fill)",
    )
    parser.add_argument("-n", "--name", metavar="FILE", help="Filename for the operation")
    parser.add_argument(
        "--debug", action="store_true", help="Log every transient bus failure",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse and cross-check arguments; exits with status 2 on error."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not (args.read or args.write or args.verify or args.fill or args.dump):
        parser.error("Nothing to do - check your options !")
    # Fill can verify against its own buffer without a file
    if args.fill is None and (args.read or args.write or args.verify) and not args.name:
        parser.error("Filename not specified")
    return args


def _report_verify(result: VerifyResult) -> None:
    if result.ok:
        print("Verify OK", file=sys.stderr)
        return
    print(f"Verify failed: {result.mismatch_count} mismatched bytes", file=sys.stderr)
    if result.truncated:
        print(
            f"  (only the first {len(result.mismatches)} are listed above)",
            file=sys.stderr,
        )


def run(
    args: argparse.Namespace,
    geometry: DeviceGeometry,
    monitor: TransferMonitor | None = None,
) -> int:
    """Open the device and perform the requested operations in order.

    Order is fill, write, read, verify, dump. Verify compares against
    whichever buffer an earlier step produced, and loads the file only
    if there is none.

    Raises:
        EepromError: On any unrecoverable failure.
    """
    print(
        f"Opening device 0x{args.address:02X} on bus {args.bus}, "
        f"{args.size}K with page size of {args.page_size} bytes",
        file=sys.stderr,
    )
    if monitor is None:
        monitor = RichMonitor()
    total = geometry.total_size

    with open_device(args.bus, args.address) as handle:
        programmer = EepromProgrammer(handle, geometry, monitor=monitor)
        buffer: bytearray | None = None

        if args.fill is not None:
            buffer = programmer.fill(args.fill)

        if args.write:
            buffer = load_image(args.name, total).data
            programmer.write(buffer)

        if args.read:
            buffer = programmer.read()
            save_image(args.name, buffer[:total])

        if args.verify:
            if buffer is None:
                buffer = load_image(args.name, total).data
            _report_verify(programmer.verify(buffer))

        if args.dump:
            contents = programmer.read()
            print("EEPROM contents\n")
            print(format_hex_dump(contents, total))

    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Entry point for the i2ceeprom CLI."""
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.debug else logging.INFO)
    geometry = DeviceGeometry.from_kilobytes(args.size, args.page_size)

    try:
        return run(args, geometry)
    except TransferError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_TRANSFER
    except EepromError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE
