from rooclino.parsing.cbor import CborDecodeError, CborValue, DecodeOptions, decode, decode_hex, to_python
from rooclino.parsing.uplink import ClimateReading, UplinkSnapshot, build_uplink_snapshot, extract_reading
from importlib.metadata import PackageNotFoundError, version

__all__ = [
    "decode",
    "decode_hex",
    "to_python",
    "CborValue",
    "CborDecodeError",
    "DecodeOptions",
    "ClimateReading",
    "UplinkSnapshot",
    "build_uplink_snapshot",
    "extract_reading",
]

try:
    __version__ = version("rooclino")
except PackageNotFoundError:
    __version__ = "0.0.0"
