"""
Assembly of byte and text strings, including the chunked indefinite form.

Text payloads are translated octet by octet into UTF-16 code units: lead
bytes select the sequence width, continuation bytes contribute their low six
bits, and no validation is performed. Code points above the BMP are emitted
as surrogate pairs. The collected code units are materialized as a ``str``
at the very end.
"""
from __future__ import annotations

import struct

from rooclino.parsing.cbor.cursor import Cursor
from rooclino.parsing.cbor.lengths import read_indefinite_string_length

MAJOR_BYTE_STRING = 2
MAJOR_TEXT_STRING = 3


def append_utf16_data(cur: Cursor, utf16data: list[int], length: int) -> None:
    """
    Decode ``length`` encoded bytes from ``cur`` and append UTF-16 code units.

    ``length`` counts encoded bytes, not characters; each multi-byte sequence
    shrinks the outstanding count by the continuation bytes it consumed.
    """
    i = 0
    while i < length:
        value = cur.read_uint8()
        if value & 0x80:
            if value < 0xE0:
                value = (value & 0x1F) << 6 | (cur.read_uint8() & 0x3F)
                length -= 1
            elif value < 0xF0:
                value = (
                    (value & 0x0F) << 12
                    | (cur.read_uint8() & 0x3F) << 6
                    | (cur.read_uint8() & 0x3F)
                )
                length -= 2
            else:
                value = (
                    (value & 0x0F) << 18
                    | (cur.read_uint8() & 0x3F) << 12
                    | (cur.read_uint8() & 0x3F) << 6
                    | (cur.read_uint8() & 0x3F)
                )
                length -= 3

        if value < 0x10000:
            utf16data.append(value)
        else:
            value -= 0x10000
            utf16data.append(0xD800 | (value >> 10))
            utf16data.append(0xDC00 | (value & 0x3FF))
        i += 1


def utf16_to_text(utf16data: list[int]) -> str:
    # surrogatepass joins valid pairs and keeps lone surrogates as-is
    raw = struct.pack(f">{len(utf16data)}H", *utf16data)
    return raw.decode("utf-16-be", errors="surrogatepass")


def read_byte_string(cur: Cursor, length: int) -> bytes:
    return cur.read_bytes(length)


def read_indefinite_byte_string(cur: Cursor) -> bytes:
    chunks: list[bytes] = []
    while True:
        length = read_indefinite_string_length(cur, MAJOR_BYTE_STRING)
        if length is None:
            break
        chunks.append(cur.read_bytes(length))
    return b"".join(chunks)


def read_text_string(cur: Cursor, length: int) -> str:
    utf16data: list[int] = []
    append_utf16_data(cur, utf16data, length)
    return utf16_to_text(utf16data)


def read_indefinite_text_string(cur: Cursor) -> str:
    utf16data: list[int] = []
    while True:
        length = read_indefinite_string_length(cur, MAJOR_TEXT_STRING)
        if length is None:
            break
        append_utf16_data(cur, utf16data, length)
    return utf16_to_text(utf16data)


__all__ = [
    "append_utf16_data",
    "utf16_to_text",
    "read_byte_string",
    "read_indefinite_byte_string",
    "read_text_string",
    "read_indefinite_text_string",
]
