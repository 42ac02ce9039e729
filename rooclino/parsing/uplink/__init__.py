"""
Room climate uplink decoding.

This sub-package turns a decoded uplink (see ``rooclino.parsing.cbor``) into
temperature, humidity and CO2 readings, and wraps the whole pipeline from a
webhook payload to an ``UplinkSnapshot``.
"""
from rooclino.parsing.uplink.decode import (
    TRANSMIT_CO2,
    TRANSMIT_HUMIDITY,
    TRANSMIT_TEMPERATURE,
    build_uplink_snapshot,
    decode_uplink_b64,
    decode_uplink_hex,
    extract_reading,
    find_value,
    packet_entries,
    round_half_up,
)
from rooclino.parsing.uplink.model import ClimateReading, UplinkSnapshot

__all__ = [
    "build_uplink_snapshot",
    "decode_uplink_b64",
    "decode_uplink_hex",
    "extract_reading",
    "find_value",
    "packet_entries",
    "round_half_up",
    "ClimateReading",
    "UplinkSnapshot",
    "TRANSMIT_TEMPERATURE",
    "TRANSMIT_HUMIDITY",
    "TRANSMIT_CO2",
]
