"""
Extraction of sensor readings from decoded room climate uplinks.

An uplink is a CBOR array whose first element is a header, followed by
``[transmit_id, value]`` pairs. Temperature, humidity and CO2 are looked up by
their transmit id and rounded half up.
"""
from __future__ import annotations

import datetime as dt
import math
from typing import Any, Iterable, Optional

from rooclino.core.binary import b64_to_bytes, hex_to_bytes
from rooclino.parsing.cbor import (
    Array,
    CborDecodeError,
    CborValue,
    DecodeOptions,
    Float,
    Integer,
    decode,
    to_python,
)
from rooclino.parsing.uplink.model import ClimateReading, UplinkSnapshot

TRANSMIT_TEMPERATURE = 1
TRANSMIT_HUMIDITY = 2
TRANSMIT_CO2 = 3


def decode_uplink_hex(payload_hex: str) -> bytes:
    try:
        return hex_to_bytes(payload_hex)
    except ValueError as exc:
        raise ValueError(f"Failed to decode uplink hex: {exc}") from exc


def decode_uplink_b64(frm_payload: str) -> bytes:
    try:
        return b64_to_bytes(frm_payload)
    except ValueError as exc:
        raise ValueError(f"Failed to decode uplink base64: {exc}") from exc


def _type_name(value: Any) -> str:
    if isinstance(value, CborValue):
        return type(value).__name__.lower()
    return type(value).__name__


def _as_number(value: Optional[CborValue]) -> Optional[float | int]:
    if isinstance(value, (Integer, Float)):
        return value.value
    return None


def packet_entries(root: CborValue) -> tuple[CborValue, ...]:
    """
    Return the sensor entries of an uplink, i.e. everything after the header.

    Raises:
        TypeError: If the root item is not an array.
    """
    if not isinstance(root, Array):
        raise TypeError(f"illegal packet found, expected array got {_type_name(root)}")
    return root.items[1:]


def find_value(transmit_id: int, packet: Iterable[CborValue]) -> Optional[CborValue]:
    """
    Find the value paired with ``transmit_id``.

    Args:
        transmit_id: The sensor id to look for (non-zero).
        packet: The entries following the header.

    Returns:
        The second element of the first ``[transmit_id, value]`` entry, or
        ``None`` if no entry matches.

    Raises:
        TypeError: If an entry is not itself an array.
    """
    for value in packet:
        if not isinstance(value, Array):
            raise TypeError(f"illegal value found, expected array got {_type_name(value)}")
        if not len(value):
            continue
        first = _as_number(value[0])
        if first and first == transmit_id:
            return value[1] if len(value) > 1 else None
    return None


def round_half_up(value: Optional[CborValue]) -> Optional[int]:
    number = _as_number(value)
    if number is None or not math.isfinite(number):
        return None
    return math.floor(number + 0.5)


def extract_reading(root: CborValue) -> ClimateReading:
    """
    Build a ``ClimateReading`` from a decoded uplink.

    Raises:
        TypeError: If the uplink is not an array of arrays.
    """
    packet = packet_entries(root)
    return ClimateReading(
        temperature=round_half_up(find_value(TRANSMIT_TEMPERATURE, packet)),
        humidity=round_half_up(find_value(TRANSMIT_HUMIDITY, packet)),
        co2=round_half_up(find_value(TRANSMIT_CO2, packet)),
    )


def _payload_bytes(payload: dict[str, Any]) -> Optional[bytes]:
    if payload.get("payload_hex"):
        return decode_uplink_hex(payload["payload_hex"])
    frm_payload = payload.get("frm_payload") or (payload.get("uplink_message") or {}).get("frm_payload")
    if frm_payload:
        return decode_uplink_b64(frm_payload)
    return None


def _received_at(payload: dict[str, Any]) -> dt.datetime:
    ts = payload.get("received_at")
    if isinstance(ts, (int, float)):
        return dt.datetime.fromtimestamp(ts, dt.UTC)
    return dt.datetime.now(dt.UTC)


def build_uplink_snapshot(
    payload: dict[str, Any],
    source: str = "webhook",
    device_id: str | None = None,
    options: DecodeOptions | None = None,
) -> UplinkSnapshot:
    """
    Decode a webhook-style uplink payload into an ``UplinkSnapshot``.

    The raw bytes are taken from ``payload_hex``, ``frm_payload`` or
    ``uplink_message.frm_payload``, in that order. Failures are reported in
    ``errors``; this function does not raise for bad payloads.
    """
    received_at = _received_at(payload)
    try:
        raw = _payload_bytes(payload)
    except ValueError as exc:
        return UplinkSnapshot(
            raw=b"",
            raw_hex="",
            received_at=received_at,
            errors=[f"payload_invalid: {exc}"],
            source=source,
            device_id=device_id,
        )
    if raw is None:
        return UplinkSnapshot(
            raw=b"",
            raw_hex="",
            received_at=received_at,
            warnings=["no payload_hex or frm_payload in payload"],
            source=source,
            device_id=device_id,
        )

    snapshot = UplinkSnapshot(
        raw=raw,
        raw_hex=raw.hex(),
        received_at=received_at,
        source=source,
        device_id=device_id,
    )
    try:
        root = decode(raw, options)
    except CborDecodeError as exc:
        snapshot.errors.append(f"decode_failed: {exc.kind.value}: {exc}")
        snapshot.parsed["raw_length"] = len(raw)
        return snapshot

    snapshot.root = root
    try:
        reading = extract_reading(root)
    except TypeError as exc:
        snapshot.errors.append(f"packet_invalid: {exc}")
        return snapshot

    snapshot.reading = reading
    snapshot.parsed.update(reading.as_dict())
    snapshot.parsed["header"] = to_python(root[0], bytes_as="hex") if len(root) else None
    snapshot.parsed["entries"] = len(root) - 1 if len(root) else 0
    for name, value in reading.as_dict().items():
        if value is None:
            snapshot.warnings.append(f"{name} missing from uplink")
    return snapshot
