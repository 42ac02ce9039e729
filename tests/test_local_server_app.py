"""Tests for the uplink webhook app."""
import base64
import logging

import pytest
from fastapi.testclient import TestClient

from rooclino.local_server_app import create_app
from rooclino.local_server_app.config import ServerSettings
from rooclino.local_server_app.logging import (
    MAX_LOGGED_HEX,
    RingBufferHandler,
    create_logger,
    redact,
    ring_events,
)
from rooclino.parsing.cbor import MAX_DEPTH_LIMIT

UPLINK_HEX = "8401" "8201f94d60" "8202182d" "8203190264"


@pytest.fixture
def client():
    return TestClient(create_app(ServerSettings(log_ring_size=50)))


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_uplink_ok(client):
    resp = client.post(
        "/uplink",
        json={"payload_hex": UPLINK_HEX, "device_id": "room-1", "received_at": 1700000000},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["temperature"] == 22
    assert body["humidity"] == 45
    assert body["co2"] == 612
    assert body["errors"] == []
    assert body["warnings"] == []
    assert body["device_id"] == "room-1"
    assert body["received_at"] == 1700000000


def test_uplink_frm_payload(client):
    resp = client.post("/uplink", json={"frm_payload": base64.b64encode(bytes.fromhex(UPLINK_HEX)).decode()})
    assert resp.status_code == 200
    assert resp.json()["co2"] == 612


def test_uplink_requires_payload(client):
    resp = client.post("/uplink", json={})
    assert resp.status_code == 422


def test_uplink_decode_failure_is_reported(client):
    resp = client.post("/uplink", json={"payload_hex": "8401ff"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["temperature"] is None
    assert len(body["errors"]) == 1
    assert body["errors"][0].startswith("decode_failed: invalid_length_for_major_type")

    events = client.get("/logs").json()["events"]
    assert any(e["event"] == "uplink_failed" and e["level"] == "WARNING" for e in events)


def test_decode_map(client):
    resp = client.post("/decode", json={"payload_hex": "a26161016162820203"})
    assert resp.status_code == 200
    assert resp.json() == {"value": {"a": 1, "b": [2, 3]}}


def test_decode_integer_keys_become_strings(client):
    resp = client.post("/decode", json={"payload_hex": "a10102"})
    assert resp.json() == {"value": {"1": 2}}


def test_decode_malformed_length(client):
    resp = client.post("/decode", json={"payload_hex": "1c"})
    assert resp.status_code == 400
    detail = resp.json()["detail"]
    assert detail["kind"] == "malformed_length_encoding"
    assert detail["offset"] is not None


def test_decode_invalid_hex(client):
    resp = client.post("/decode", json={"payload_hex": "zz"})
    assert resp.status_code == 400
    assert resp.json()["detail"]["kind"] == "invalid_payload"


def test_decode_respects_max_depth():
    client = TestClient(create_app(ServerSettings(decode_max_depth=2)))
    resp = client.post("/decode", json={"payload_hex": "8181818100"})
    assert resp.status_code == 400
    assert resp.json()["detail"]["kind"] == "depth_limit_exceeded"


def test_logs_record_decodes(client):
    client.post("/decode", json={"payload_hex": "00"})
    events = client.get("/logs").json()["events"]
    assert any(e["event"] == "decode_ok" and e["details"] == {"length": 1} for e in events)


def test_redact_truncates_long_payloads():
    long_hex = "ab" * 100
    cleaned = redact({"payload_hex": long_hex, "raw_hex": "00", "device_id": long_hex})
    assert cleaned["payload_hex"] == long_hex[:MAX_LOGGED_HEX] + "..."
    assert cleaned["raw_hex"] == "00"
    assert cleaned["device_id"] == long_hex


def test_redact_empty():
    assert redact(None) == {}
    assert redact({}) == {}


def test_ring_buffer_keeps_latest_events():
    logger = create_logger("rooclino.tests.ring", ring_size=2)
    for name in ("one", "two", "three"):
        logger.info(name, extra={"details": {"n": name}})
    events = ring_events(logger)
    assert [e["event"] for e in events] == ["two", "three"]
    assert events[-1]["details"] == {"n": "three"}


def test_ring_events_without_handler():
    assert ring_events(logging.getLogger("rooclino.tests.bare")) == []


def test_create_logger_is_idempotent():
    first = create_logger("rooclino.tests.idempotent", ring_size=5)
    second = create_logger("rooclino.tests.idempotent", ring_size=10)
    assert first is second
    handlers = [h for h in second.handlers if isinstance(h, RingBufferHandler)]
    assert len(handlers) == 1
    assert handlers[0].max_entries == 5


def test_decode_at_default_depth_limit(client):
    resp = client.post("/decode", json={"payload_hex": "81" * 256 + "00"})
    assert resp.status_code == 200
    value = resp.json()["value"]
    for _ in range(256):
        assert isinstance(value, list) and len(value) == 1
        value = value[0]
    assert value == 0


def test_decode_just_past_default_depth_limit(client):
    resp = client.post("/decode", json={"payload_hex": "81" * 257 + "00"})
    assert resp.status_code == 400
    assert resp.json()["detail"]["kind"] == "depth_limit_exceeded"


def test_decode_at_highest_configurable_depth():
    client = TestClient(create_app(ServerSettings(decode_max_depth=MAX_DEPTH_LIMIT)))
    resp = client.post("/decode", json={"payload_hex": "81" * MAX_DEPTH_LIMIT + "00"})
    assert resp.status_code == 200
    resp = client.post("/decode", json={"payload_hex": "81" * 3000 + "00"})
    assert resp.status_code == 400
    assert resp.json()["detail"]["kind"] == "depth_limit_exceeded"


def test_uplink_nested_uplink_message(client):
    b64 = base64.b64encode(bytes.fromhex(UPLINK_HEX)).decode()
    resp = client.post("/uplink", json={"uplink_message": {"frm_payload": b64, "f_port": 1}})
    assert resp.status_code == 200
    assert resp.json()["temperature"] == 22


def test_uplink_message_without_frm_payload(client):
    resp = client.post("/uplink", json={"uplink_message": {"f_port": 1}})
    assert resp.status_code == 422
