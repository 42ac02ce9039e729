from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator


class UplinkRequest(BaseModel):
    payload_hex: Optional[str] = None
    frm_payload: Optional[str] = None
    # The Things Network webhook shape: {"uplink_message": {"frm_payload": ...}}
    uplink_message: Optional[Dict[str, Any]] = None
    device_id: Optional[str] = None
    received_at: Optional[float] = None

    @model_validator(mode="after")
    def _require_payload(self) -> "UplinkRequest":
        nested = (self.uplink_message or {}).get("frm_payload")
        if not self.payload_hex and not self.frm_payload and not nested:
            raise ValueError("one of payload_hex, frm_payload or uplink_message.frm_payload is required")
        return self


class UplinkResponse(BaseModel):
    temperature: Optional[int] = None
    humidity: Optional[int] = None
    co2: Optional[int] = None
    warnings: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    device_id: Optional[str] = None
    received_at: Optional[float] = None


class DecodeRequest(BaseModel):
    payload_hex: str


class DecodeResponse(BaseModel):
    value: Any = None


class LogsResponse(BaseModel):
    events: List[Dict[str, Any]] = Field(default_factory=list)
