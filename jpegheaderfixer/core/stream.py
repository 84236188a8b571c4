"""Byte stream with a forward-only read cursor."""

import struct


class ByteStream:
    """In-memory view of a file's bytes with a monotonically advancing cursor.

    Reads past the end return fewer bytes than requested (possibly none);
    callers decide whether a short read is an error.
    """

    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.cursor = 0

    @property
    def length(self) -> int:
        return len(self.data)

    def at_end(self) -> bool:
        return self.cursor >= self.length

    def remaining(self) -> int:
        return self.length - self.cursor

    def read(self, count: int) -> bytes:
        """Read up to `count` bytes and advance the cursor past them."""
        chunk = self.data[self.cursor:self.cursor + count]
        self.cursor += len(chunk)
        return chunk

    def read_uint16(self) -> int | None:
        """Read an unsigned big-endian 16-bit value, or None on a short read."""
        raw = self.read(2)
        if len(raw) < 2:
            return None
        return struct.unpack(">H", raw)[0]

    def peek_at(self, offset: int, count: int) -> bytes:
        """Return bytes at an absolute offset without touching the cursor."""
        if offset < 0:
            return b""
        return self.data[offset:offset + count]

    def hexdump(self, offset: int, before: int = 16, after: int = 16, width: int = 16) -> str:
        """Hex dump of the bytes surrounding `offset`, one row per `width` bytes.

        The row containing `offset` is flagged with a `>` in the first column.
        Offsets beyond the end of the data produce an explanatory line instead.
        """
        if offset >= self.length:
            return f"  (offset 0x{offset:08X} is beyond end of file at 0x{self.length:08X})"

        start = max(0, offset - before) // width * width
        end = min(self.length, offset + after)
        lines = []
        for row in range(start, end, width):
            chunk = self.data[row:row + width]
            flag = ">" if row <= offset < row + width else " "
            hex_part = " ".join(f"{b:02X}" for b in chunk)
            ascii_part = "".join(chr(b) if 32 <= b < 127 else "." for b in chunk)
            lines.append(f"{flag} 0x{row:08X}  {hex_part:<{width * 3}} {ascii_part}")
        return "\n".join(lines)
