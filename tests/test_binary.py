"""Tests for the hex/base64 payload helpers."""
import pytest

from rooclino.core.binary import b64_to_bytes, hex_to_bytes, hexdump_head


def test_hex_to_bytes_accepts_prefix_and_whitespace():
    assert hex_to_bytes("0xA1 01\n02") == b"\xa1\x01\x02"
    assert hex_to_bytes("") == b""


def test_hex_to_bytes_rejects_odd_length():
    with pytest.raises(ValueError, match="Invalid hex payload"):
        hex_to_bytes("abc")


def test_b64_to_bytes_restores_padding():
    assert b64_to_bytes("AQI") == b"\x01\x02"
    assert b64_to_bytes("AQI=") == b"\x01\x02"


def test_b64_to_bytes_rejects_invalid_characters():
    with pytest.raises(ValueError, match="Invalid base64 payload"):
        b64_to_bytes("A*B=")


def test_hexdump_head():
    assert hexdump_head(b"\x01\x02") == "0102"
    assert hexdump_head(bytes(20), limit=4) == "00000000..."
