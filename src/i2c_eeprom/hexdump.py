"""Hex dump renderer: formats a memory image as address/hex/ASCII rows."""

from __future__ import annotations

ROW_LENGTH = 16
_HALF = ROW_LENGTH // 2

HEADER = (
    "      "
    + " ".join(f"{i:02X}" for i in range(_HALF))
    + "   "
    + " ".join(f"{i:02X}" for i in range(_HALF, ROW_LENGTH))
)


def _printable(byte_val: int) -> str:
    # Printable ASCII range: 0x20-0x7E
    return chr(byte_val) if 0x20 <= byte_val <= 0x7E else "."


def format_row(address: int, row: bytes) -> str:
    """Format up to 16 bytes as one dump row.

    Layout matches ``hexdump -C`` with an extra gap in the middle of
    both the hex and the ASCII columns:
        0000  HH HH HH HH HH HH HH HH   HH HH HH HH HH HH HH HH  |........ ........|

    Short rows are padded so the ASCII column stays aligned.
    """
    hex_parts = [f"{b:02X}" for b in row] + ["  "] * (ROW_LENGTH - len(row))
    ascii_str = "".join(_printable(b) for b in row).ljust(ROW_LENGTH)
    hex_left = " ".join(hex_parts[:_HALF])
    hex_right = " ".join(hex_parts[_HALF:])
    return (
        f"{address:04X}  {hex_left}   {hex_right}  "
        f"|{ascii_str[:_HALF]} {ascii_str[_HALF:]}|"
    )


def format_hex_dump(data: bytes, size: int | None = None) -> str:
    """Format the first size bytes of data as a hex dump.

    Args:
        data: Memory image to render.
        size: Number of bytes to render; all of data if None.

    Returns:
        A header line, a blank line, then one line per 16 bytes.
    """
    if size is None:
        size = len(data)
    view = memoryview(data)[:size]
    lines = [HEADER, ""]
    for address in range(0, len(view), ROW_LENGTH):
        lines.append(format_row(address, bytes(view[address:address + ROW_LENGTH])))
    return "\n".join(lines)
