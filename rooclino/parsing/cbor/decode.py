"""
Recursive CBOR item decoder and the top-level ``decode`` entry point.

Each call to ``decode`` owns a private ``Cursor`` and receives its callbacks
through an explicit ``DecodeOptions`` value, so independent buffers can be
decoded concurrently.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional

from rooclino.core.binary import hex_to_bytes
from rooclino.parsing.cbor.cursor import Cursor
from rooclino.parsing.cbor.errors import DepthLimitExceeded, InvalidLengthForMajorType, TrailingBytes
from rooclino.parsing.cbor.lengths import INDEFINITE, read_length
from rooclino.parsing.cbor.strings import (
    read_byte_string,
    read_indefinite_byte_string,
    read_indefinite_text_string,
    read_text_string,
)
from rooclino.parsing.cbor.values import (
    FALSE,
    NULL,
    SIMPLE_FALSE,
    SIMPLE_NULL,
    SIMPLE_TRUE,
    SIMPLE_UNDEFINED,
    TRUE,
    UNDEFINED,
    Array,
    ByteString,
    CborValue,
    Float,
    Integer,
    Map,
    Tagged,
    TextString,
)

logger = logging.getLogger(__name__)

# Major types (top three bits of the header byte).
MAJOR_UNSIGNED = 0
MAJOR_NEGATIVE = 1
MAJOR_BYTE_STRING = 2
MAJOR_TEXT_STRING = 3
MAJOR_ARRAY = 4
MAJOR_MAP = 5
MAJOR_TAG = 6
MAJOR_SIMPLE = 7

# Major types that accept the indefinite-length form.
INDEFINITE_MAJOR_TYPES: frozenset[int] = frozenset(
    {MAJOR_BYTE_STRING, MAJOR_TEXT_STRING, MAJOR_ARRAY, MAJOR_MAP}
)

DEFAULT_MAX_DEPTH = 256
# Highest depth limit the CLI and webhook accept. Decoding and converting take
# a few frames per level; deeper limits hit the interpreter recursion limit.
MAX_DEPTH_LIMIT = 300

Tagger = Callable[[CborValue, int], CborValue]
SimpleValueHandler = Callable[[int], CborValue]


def identity_tagger(value: CborValue, tag: int) -> CborValue:
    return value


def keep_tags(value: CborValue, tag: int) -> CborValue:
    """Tag transform that preserves the tag number as a ``Tagged`` item."""
    return Tagged(tag=tag, value=value)


def undefined_simple_value(code: int) -> CborValue:
    return UNDEFINED


@dataclass(frozen=True)
class DecodeOptions:
    """
    Caller configuration for a decode call.

    Attributes:
        tagger: Applied to every tagged item as ``tagger(inner, tag_number)``;
            its result replaces the item. Defaults to returning ``inner``.
        simple_value: Called with the code of every simple value other than
            false/true/null/undefined. Must return a hashable ``CborValue``
            (the result may end up as a map key). Defaults to returning
            ``UNDEFINED``.
        max_depth: Deepest container/tag nesting accepted.
    """
    tagger: Tagger = identity_tagger
    simple_value: SimpleValueHandler = undefined_simple_value
    max_depth: int = DEFAULT_MAX_DEPTH


DEFAULT_OPTIONS = DecodeOptions()

_FIXED_SIMPLE_VALUES: dict[int, CborValue] = {
    SIMPLE_FALSE: FALSE,
    SIMPLE_TRUE: TRUE,
    SIMPLE_NULL: NULL,
    SIMPLE_UNDEFINED: UNDEFINED,
}


def decode_item(cur: Cursor, options: DecodeOptions = DEFAULT_OPTIONS, depth: int = 0) -> CborValue:
    """
    Decode one item (and, recursively, everything nested in it) at ``cur``.

    Args:
        cur: The shared cursor; advanced past the item on return.
        options: Tag transform, simple-value handler and nesting limit.
        depth: Current nesting depth, 0 for the root item.

    Returns:
        The decoded ``CborValue``.
    """
    if depth > options.max_depth:
        raise DepthLimitExceeded(f"nesting deeper than {options.max_depth}", offset=cur.tell())

    start = cur.tell()
    initial_byte = cur.read_uint8()
    major_type = initial_byte >> 5
    additional_information = initial_byte & 0x1F

    if major_type == MAJOR_SIMPLE:
        if additional_information == 25:
            return Float(cur.read_float16())
        if additional_information == 26:
            return Float(cur.read_float32())
        if additional_information == 27:
            return Float(cur.read_float64())

    length = read_length(cur, additional_information)
    if length == INDEFINITE and major_type not in INDEFINITE_MAJOR_TYPES:
        raise InvalidLengthForMajorType(
            f"invalid length: indefinite length not allowed for major type {major_type}",
            offset=start,
        )

    if major_type == MAJOR_UNSIGNED:
        return Integer(length)
    if major_type == MAJOR_NEGATIVE:
        return Integer(-1 - length)
    if major_type == MAJOR_BYTE_STRING:
        if length == INDEFINITE:
            return ByteString(read_indefinite_byte_string(cur))
        return ByteString(read_byte_string(cur, length))
    if major_type == MAJOR_TEXT_STRING:
        if length == INDEFINITE:
            return TextString(read_indefinite_text_string(cur))
        return TextString(read_text_string(cur, length))
    if major_type == MAJOR_ARRAY:
        return _decode_array(cur, options, length, depth)
    if major_type == MAJOR_MAP:
        return _decode_map(cur, options, length, depth)
    if major_type == MAJOR_TAG:
        return options.tagger(decode_item(cur, options, depth + 1), length)
    return _decode_simple(options, length)


def _decode_array(cur: Cursor, options: DecodeOptions, length: int, depth: int) -> Array:
    items: list[CborValue] = []
    if length == INDEFINITE:
        while not cur.read_break():
            items.append(decode_item(cur, options, depth + 1))
    else:
        for _ in range(length):
            items.append(decode_item(cur, options, depth + 1))
    return Array(tuple(items))


def _decode_map(cur: Cursor, options: DecodeOptions, length: int, depth: int) -> Map:
    entries: dict[CborValue, CborValue] = {}

    def read_pair() -> None:
        key = decode_item(cur, options, depth + 1)
        # duplicate keys: last write wins
        entries[key] = decode_item(cur, options, depth + 1)

    if length == INDEFINITE:
        while not cur.read_break():
            read_pair()
    else:
        for _ in range(length):
            read_pair()
    return Map(entries)


def _decode_simple(options: DecodeOptions, code: int) -> CborValue:
    fixed = _FIXED_SIMPLE_VALUES.get(code)
    if fixed is not None:
        return fixed
    value = options.simple_value(code)
    try:
        hash(value)
    except TypeError as exc:
        raise TypeError(f"simple value handler returned an unhashable value for code {code}") from exc
    return value


def decode(
    data: bytes | bytearray | memoryview,
    options: Optional[DecodeOptions] = None,
    *,
    tagger: Optional[Tagger] = None,
    simple_value: Optional[SimpleValueHandler] = None,
) -> CborValue:
    """
    Decode exactly one top-level item from ``data``.

    Args:
        data: The complete encoded buffer.
        options: Decoder configuration; defaults to ``DecodeOptions()``.
        tagger: Shortcut overriding ``options.tagger``.
        simple_value: Shortcut overriding ``options.simple_value``.

    Returns:
        The root of the decoded value tree.

    Raises:
        CborDecodeError: One of its subclasses, depending on the failure.
            ``TrailingBytes`` if bytes remain after the root item;
            ``DepthLimitExceeded`` also when the interpreter runs out of
            recursion before ``max_depth`` is reached.
    """
    opts = options or DEFAULT_OPTIONS
    if tagger is not None:
        opts = replace(opts, tagger=tagger)
    if simple_value is not None:
        opts = replace(opts, simple_value=simple_value)

    cur = Cursor(data)
    try:
        value = decode_item(cur, opts)
    except RecursionError as exc:
        raise DepthLimitExceeded(
            f"nesting too deep for the interpreter (max_depth={opts.max_depth})",
            offset=cur.tell(),
        ) from exc
    if not cur.at_end():
        raise TrailingBytes(
            f"remaining bytes: {cur.remaining()} after top-level item",
            offset=cur.tell(),
        )
    logger.debug(
        "cbor_decoded",
        extra={"details": {"length": cur.length, "root": type(value).__name__}},
    )
    return value


def decode_hex(payload_hex: str, options: Optional[DecodeOptions] = None) -> CborValue:
    """Decode a hex-encoded buffer; see ``decode``."""
    return decode(hex_to_bytes(payload_hex), options)


__all__ = [
    "DecodeOptions",
    "DEFAULT_MAX_DEPTH",
    "MAX_DEPTH_LIMIT",
    "decode",
    "decode_hex",
    "decode_item",
    "identity_tagger",
    "keep_tags",
    "undefined_simple_value",
]
