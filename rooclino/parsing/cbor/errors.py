"""
Error taxonomy for the CBOR decoder.

Every failure aborts the decode immediately. Callers can either catch the
common ``CborDecodeError`` base and inspect ``kind``, or catch one of the
concrete subclasses.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


class DecodeErrorKind(str, Enum):
    """The distinct reasons a decode can fail."""
    MALFORMED_LENGTH_ENCODING = "malformed_length_encoding"
    INVALID_INDEFINITE_ELEMENT = "invalid_indefinite_element"
    INVALID_LENGTH_FOR_MAJOR_TYPE = "invalid_length_for_major_type"
    OUT_OF_BOUNDS_READ = "out_of_bounds_read"
    TRAILING_BYTES = "trailing_bytes"
    DEPTH_LIMIT_EXCEEDED = "depth_limit_exceeded"


class CborDecodeError(ValueError):
    """
    Base class for all decode failures.

    Attributes:
        kind: The ``DecodeErrorKind`` of the failure.
        offset: Cursor position at which the failure was detected, if known.
    """
    kind: DecodeErrorKind

    def __init__(self, message: str, offset: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.offset = offset

    def as_dict(self) -> dict:
        return {"kind": self.kind.value, "offset": self.offset, "message": self.message}


class MalformedLengthEncoding(CborDecodeError):
    kind = DecodeErrorKind.MALFORMED_LENGTH_ENCODING


class InvalidIndefiniteElement(CborDecodeError):
    kind = DecodeErrorKind.INVALID_INDEFINITE_ELEMENT


class InvalidLengthForMajorType(CborDecodeError):
    kind = DecodeErrorKind.INVALID_LENGTH_FOR_MAJOR_TYPE


class OutOfBoundsRead(CborDecodeError):
    kind = DecodeErrorKind.OUT_OF_BOUNDS_READ


class TrailingBytes(CborDecodeError):
    kind = DecodeErrorKind.TRAILING_BYTES


class DepthLimitExceeded(CborDecodeError):
    kind = DecodeErrorKind.DEPTH_LIMIT_EXCEEDED


__all__ = [
    "DecodeErrorKind",
    "CborDecodeError",
    "MalformedLengthEncoding",
    "InvalidIndefiniteElement",
    "InvalidLengthForMajorType",
    "OutOfBoundsRead",
    "TrailingBytes",
    "DepthLimitExceeded",
]
