"""
Decoding of the 5-bit "additional information" field of an item header.
"""
from __future__ import annotations

from typing import Optional

from rooclino.parsing.cbor.cursor import BREAK_MARKER, Cursor
from rooclino.parsing.cbor.errors import InvalidIndefiniteElement, MalformedLengthEncoding

# Additional-information values with a fixed meaning.
AI_UINT8 = 24
AI_UINT16 = 25
AI_UINT32 = 26
AI_UINT64 = 27
AI_INDEFINITE = 31

# Sentinel returned for indefinite length; never a valid length.
INDEFINITE = -1


def read_length(cur: Cursor, additional_information: int) -> int:
    """
    Resolve an item length from its additional information.

    Args:
        cur: The cursor positioned just after the header byte.
        additional_information: The low 5 bits of the header byte.

    Returns:
        The decoded length, or ``INDEFINITE`` for additional information 31.

    Raises:
        MalformedLengthEncoding: For the reserved values 28, 29 and 30.
    """
    if additional_information < 24:
        return additional_information
    if additional_information == AI_UINT8:
        return cur.read_uint8()
    if additional_information == AI_UINT16:
        return cur.read_uint16()
    if additional_information == AI_UINT32:
        return cur.read_uint32()
    if additional_information == AI_UINT64:
        return cur.read_uint64()
    if additional_information == AI_INDEFINITE:
        return INDEFINITE
    raise MalformedLengthEncoding(
        f"invalid length encoding: additional information {additional_information}",
        offset=cur.tell() - 1,
    )


def read_indefinite_string_length(cur: Cursor, major_type: int) -> Optional[int]:
    """
    Read the header of the next chunk of an indefinite-length string.

    Returns ``None`` once the break marker is consumed. A chunk must have a
    definite length and the same major type as the enclosing string.
    """
    start = cur.tell()
    initial_byte = cur.read_uint8()
    if initial_byte == BREAK_MARKER:
        return None
    length = read_length(cur, initial_byte & 0x1F)
    if length == INDEFINITE or (initial_byte >> 5) != major_type:
        raise InvalidIndefiniteElement(
            f"invalid indefinite length element 0x{initial_byte:02x} inside major type {major_type}",
            offset=start,
        )
    return length


__all__ = [
    "INDEFINITE",
    "AI_UINT8",
    "AI_UINT16",
    "AI_UINT32",
    "AI_UINT64",
    "AI_INDEFINITE",
    "read_length",
    "read_indefinite_string_length",
]
