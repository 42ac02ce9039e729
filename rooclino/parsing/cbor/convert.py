"""
Conversion of a decoded value tree into plain Python objects.

Used wherever a tree has to leave the library as JSON (the CLI and the
webhook). The conversion is lossy: ``NULL`` and ``UNDEFINED`` both become
``None`` and the distinction between ``Integer(1)`` and ``Float(1.0)`` keys
follows Python's own equality rules.
"""
from __future__ import annotations

import json
import math
from typing import Any

from rooclino.parsing.cbor.values import (
    SIMPLE_FALSE,
    SIMPLE_NULL,
    SIMPLE_TRUE,
    SIMPLE_UNDEFINED,
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

BYTES_RAW = "raw"
BYTES_HEX = "hex"


def to_python(value: CborValue, *, bytes_as: str = BYTES_RAW) -> Any:
    """
    Convert a ``CborValue`` tree into ints, floats, strings, lists and dicts.

    Args:
        value: The root of the tree.
        bytes_as: ``"raw"`` keeps byte strings as ``bytes``; ``"hex"`` renders
            them as lowercase hex strings (JSON friendly).

    Returns:
        The converted object. Map keys that would be unhashable (lists, dicts)
        are turned into tuples.
    """
    if bytes_as not in (BYTES_RAW, BYTES_HEX):
        raise ValueError(f"bytes_as must be '{BYTES_RAW}' or '{BYTES_HEX}'")
    return _convert(value, bytes_as)


def _convert(value: CborValue, bytes_as: str) -> Any:
    if isinstance(value, (Integer, Float, TextString)):
        return value.value
    if isinstance(value, ByteString):
        return value.value.hex() if bytes_as == BYTES_HEX else value.value
    if isinstance(value, Array):
        return [_convert(item, bytes_as) for item in value.items]
    if isinstance(value, Map):
        return {
            _freeze(_convert(k, bytes_as)): _convert(v, bytes_as)
            for k, v in value.entries.items()
        }
    if isinstance(value, Tagged):
        return {"tag": value.tag, "value": _convert(value.value, bytes_as)}
    if isinstance(value, Simple):
        if value.code == SIMPLE_FALSE:
            return False
        if value.code == SIMPLE_TRUE:
            return True
        if value.code in (SIMPLE_NULL, SIMPLE_UNDEFINED):
            return None
        return value.value if value.value is not None else {"simple": value.code}
    raise TypeError(f"not a decoded CBOR value: {type(value).__name__}")


def _freeze(obj: Any) -> Any:
    if isinstance(obj, list):
        return tuple(_freeze(item) for item in obj)
    if isinstance(obj, dict):
        return tuple((k, _freeze(v)) for k, v in obj.items())
    return obj


def to_jsonable(value: CborValue) -> Any:
    """
    Like ``to_python`` with hex byte strings, but every map key becomes a
    string: text keys are kept, anything else is rendered as compact JSON.
    Non-finite floats are rendered as ``"NaN"``, ``"Infinity"`` and
    ``"-Infinity"``.
    """
    return _jsonable(to_python(value, bytes_as=BYTES_HEX))


def _jsonable(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {
            k if isinstance(k, str) else json.dumps(_jsonable(_thaw(k)), separators=(",", ":")): _jsonable(v)
            for k, v in obj.items()
        }
    if isinstance(obj, list):
        return [_jsonable(item) for item in obj]
    if isinstance(obj, float) and not math.isfinite(obj):
        if math.isnan(obj):
            return "NaN"
        return "Infinity" if obj > 0 else "-Infinity"
    return obj


def _thaw(obj: Any) -> Any:
    if isinstance(obj, tuple):
        return [_thaw(item) for item in obj]
    return obj


__all__ = ["to_python", "to_jsonable", "BYTES_RAW", "BYTES_HEX"]
