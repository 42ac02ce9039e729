"""
HTTP webhook that decodes room climate uplinks.

A LoRaWAN network server (or any integration) posts the raw uplink payload;
the app decodes it and answers with the extracted readings.
"""
from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse

from rooclino.core.binary import hexdump_head
from rooclino.local_server_app.config import ServerSettings, get_settings
from rooclino.local_server_app.logging import create_logger, ring_events
from rooclino.local_server_app.models import (
    DecodeRequest,
    DecodeResponse,
    LogsResponse,
    UplinkRequest,
    UplinkResponse,
)
from rooclino.parsing.cbor import CborDecodeError, decode, to_jsonable
from rooclino.parsing.uplink import build_uplink_snapshot, decode_uplink_hex


def create_app(settings: Optional[ServerSettings] = None) -> FastAPI:
    settings = settings or get_settings()
    logger = create_logger("rooclino.local_server", settings.log_ring_size, settings.log_level.upper())
    options = settings.decode_options()

    app = FastAPI(title="rooclino", version="1")
    app.state.settings = settings
    app.state.logger = logger

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/logs", response_model=LogsResponse)
    def logs() -> LogsResponse:
        return LogsResponse(events=ring_events(logger))

    @app.post("/uplink", response_model=UplinkResponse)
    def uplink(body: UplinkRequest) -> UplinkResponse:
        snapshot = build_uplink_snapshot(
            body.model_dump(exclude_none=True),
            source="webhook",
            device_id=body.device_id,
            options=options,
        )
        details = {
            "device_id": snapshot.device_id,
            "raw_hex": snapshot.raw_hex,
            "reading": snapshot.reading.as_dict(),
        }
        if snapshot.errors:
            logger.warning("uplink_failed", extra={"details": {**details, "errors": snapshot.errors}})
        else:
            logger.info("uplink_decoded", extra={"details": details})
        return UplinkResponse(
            **snapshot.reading.as_dict(),
            warnings=snapshot.warnings,
            errors=snapshot.errors,
            device_id=snapshot.device_id,
            received_at=snapshot.received_at.timestamp(),
        )

    @app.post("/decode", response_model=DecodeResponse)
    def decode_payload(body: DecodeRequest) -> JSONResponse:
        try:
            raw = decode_uplink_hex(body.payload_hex)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail={"kind": "invalid_payload", "offset": None, "message": str(exc)})
        try:
            value = decode(raw, options)
        except CborDecodeError as exc:
            logger.warning("decode_failed", extra={"details": {"raw_hex": hexdump_head(raw), **exc.as_dict()}})
            raise HTTPException(status_code=400, detail=exc.as_dict())
        logger.info("decode_ok", extra={"details": {"length": len(raw)}})
        # serialized here: deep trees exceed pydantic-core's own depth limit
        return JSONResponse({"value": to_jsonable(value)})

    return app


__all__ = ["create_app", "ServerSettings", "get_settings"]
