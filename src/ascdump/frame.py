from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CanFrame:
    timestamp: float
    bus_id: int
    id: int
    length: int
    payload: bytes

    # True when the source token carried the trailing `x` extended-id marker.
    is_extended: bool = False

    @property
    def payload_hex(self) -> str:
        return self.payload.hex(" ")

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "bus_id": self.bus_id,
            "id": self.id,
            "is_extended": self.is_extended,
            "length": self.length,
            "payload": self.payload.hex(),
        }
