from __future__ import annotations

import base64
import binascii


def hex_to_bytes(payload_hex: str) -> bytes:
    cleaned = "".join(payload_hex.split())
    if cleaned[:2].lower() == "0x":
        cleaned = cleaned[2:]
    try:
        return bytes.fromhex(cleaned)
    except ValueError as exc:
        raise ValueError(f"Invalid hex payload: {exc}") from exc


def b64_to_bytes(b64_data: str) -> bytes:
    cleaned = "".join(b64_data.split())
    cleaned += "=" * (-len(cleaned) % 4)
    try:
        return base64.b64decode(cleaned, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"Invalid base64 payload: {exc}") from exc


def hexdump_head(data: bytes, limit: int = 16) -> str:
    head = data[:limit].hex()
    return head + "..." if len(data) > limit else head
