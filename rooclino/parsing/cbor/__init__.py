"""
CBOR decoder for clevabit uplink payloads.

This sub-package decodes one fully buffered CBOR item into a tree of
``CborValue`` dataclasses. It handles every length encoding, indefinite-length
strings and containers, half-precision floats and surrogate-pair text, and
rejects buffers that are not consumed exactly.
"""
from rooclino.parsing.cbor.convert import to_jsonable, to_python
from rooclino.parsing.cbor.cursor import Cursor
from rooclino.parsing.cbor.decode import (
    DEFAULT_MAX_DEPTH,
    MAX_DEPTH_LIMIT,
    DecodeOptions,
    decode,
    decode_hex,
    decode_item,
    keep_tags,
)
from rooclino.parsing.cbor.errors import (
    CborDecodeError,
    DecodeErrorKind,
    DepthLimitExceeded,
    InvalidIndefiniteElement,
    InvalidLengthForMajorType,
    MalformedLengthEncoding,
    OutOfBoundsRead,
    TrailingBytes,
)
from rooclino.parsing.cbor.values import (
    FALSE,
    NULL,
    TRUE,
    UNDEFINED,
    Array,
    ByteString,
    CborValue,
    Float,
    Integer,
    Map,
    Simple,
    Tagged,
    TextString,
)

__all__ = [
    "decode",
    "decode_hex",
    "decode_item",
    "keep_tags",
    "to_python",
    "to_jsonable",
    "Cursor",
    "DecodeOptions",
    "DEFAULT_MAX_DEPTH",
    "MAX_DEPTH_LIMIT",
    "CborDecodeError",
    "DecodeErrorKind",
    "DepthLimitExceeded",
    "InvalidIndefiniteElement",
    "InvalidLengthForMajorType",
    "MalformedLengthEncoding",
    "OutOfBoundsRead",
    "TrailingBytes",
    "CborValue",
    "Integer",
    "ByteString",
    "TextString",
    "Float",
    "Array",
    "Map",
    "Tagged",
    "Simple",
    "FALSE",
    "TRUE",
    "NULL",
    "UNDEFINED",
]
