"""
Bounds-checked read cursor over an immutable input buffer.

All multi-byte reads are big-endian and advance the offset by their width.
A read that would move past the end of the buffer raises ``OutOfBoundsRead``
and leaves the offset untouched.
"""
from __future__ import annotations

import struct

from rooclino.parsing.cbor.errors import OutOfBoundsRead

BREAK_MARKER = 0xFF

POW_2_24 = 2.0 ** -24
POW_2_32 = 2 ** 32

_UINT16 = struct.Struct(">H")
_UINT32 = struct.Struct(">I")
_FLOAT32 = struct.Struct(">f")
_FLOAT64 = struct.Struct(">d")


class Cursor:
    __slots__ = ("buf", "pos", "length")

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self.buf = bytes(data)
        self.pos = 0
        self.length = len(self.buf)

    def remaining(self) -> int:
        return self.length - self.pos

    def tell(self) -> int:
        return self.pos

    def at_end(self) -> bool:
        return self.pos == self.length

    def _require(self, n: int) -> int:
        if n < 0 or n > self.length - self.pos:
            raise OutOfBoundsRead(
                f"need {n} byte(s) at offset {self.pos}, only {self.remaining()} left",
                offset=self.pos,
            )
        start = self.pos
        self.pos += n
        return start

    def _unpack(self, fmt: struct.Struct):
        start = self._require(fmt.size)
        return fmt.unpack_from(self.buf, start)[0]

    # fixed-width unsigned integers
    def read_uint8(self) -> int:
        start = self._require(1)
        return self.buf[start]

    def read_uint16(self) -> int:
        return self._unpack(_UINT16)

    def read_uint32(self) -> int:
        return self._unpack(_UINT32)

    def read_uint64(self) -> int:
        if self.remaining() < 8:
            raise OutOfBoundsRead(
                f"need 8 byte(s) at offset {self.pos}, only {self.remaining()} left",
                offset=self.pos,
            )
        high = self.read_uint32()
        return high * POW_2_32 + self.read_uint32()

    # IEEE 754 floats
    def read_float16(self) -> float:
        value = self.read_uint16()
        sign = value & 0x8000
        exponent = value & 0x7C00
        fraction = value & 0x03FF

        if exponent == 0x7C00:
            exponent = 0xFF << 10
        elif exponent != 0:
            exponent += (127 - 15) << 10
        elif fraction != 0:
            # denormal: no single-precision pattern needed
            return (-1.0 if sign else 1.0) * fraction * POW_2_24

        bits = (sign << 16) | (exponent << 13) | (fraction << 13)
        return _FLOAT32.unpack(bits.to_bytes(4, "big"))[0]

    def read_float32(self) -> float:
        return self._unpack(_FLOAT32)

    def read_float64(self) -> float:
        return self._unpack(_FLOAT64)

    # raw bytes / framing
    def read_bytes(self, n: int) -> bytes:
        start = self._require(n)
        return self.buf[start:self.pos]

    def read_break(self) -> bool:
        if self.pos >= self.length:
            raise OutOfBoundsRead(f"expected item or break at offset {self.pos}, buffer ended", offset=self.pos)
        if self.buf[self.pos] != BREAK_MARKER:
            return False
        self.pos += 1
        return True

    def __repr__(self) -> str:
        return f"Cursor(pos={self.pos}, length={self.length})"


__all__ = ["Cursor", "BREAK_MARKER", "POW_2_24", "POW_2_32"]
