from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from rooclino.parsing.cbor.values import CborValue


@dataclass(frozen=True)
class ClimateReading:
    """
    The three sensor values carried by a room climate uplink.

    Attributes:
        temperature: Rounded temperature, or ``None`` if absent.
        humidity: Rounded relative humidity, or ``None`` if absent.
        co2: Rounded CO2 concentration, or ``None`` if absent.
    """
    temperature: Optional[int] = None
    humidity: Optional[int] = None
    co2: Optional[int] = None

    def as_dict(self) -> dict[str, Optional[int]]:
        return {
            "temperature": self.temperature,
            "humidity": self.humidity,
            "co2": self.co2,
        }


@dataclass
class UplinkSnapshot:
    raw: bytes
    raw_hex: str
    received_at: datetime
    reading: ClimateReading = field(default_factory=ClimateReading)
    parsed: dict[str, Any] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    source: str = "webhook"
    device_id: Optional[str] = None
    root: Optional[CborValue] = None
