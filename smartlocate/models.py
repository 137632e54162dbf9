"""Value types passed between the probes, strategies and the resolver."""
from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union

UNLOCATED = "unlocated"
FAILED = "failed"
UNKNOWN = "unknown"


class Source(str, Enum):
    GPS = "GPS"
    IP = "IP"
    HTML5 = "HTML5"
    UNKNOWN = "unknown"


class DeviceClass(str, Enum):
    DESKTOP = "desktop"
    MOBILE = "mobile"
    TABLET = "tablet"


def now_ms() -> int:
    return int(time.time() * 1000)


Coordinate = Union[float, str]


@dataclass
class LocationResult:
    longitude: Coordinate = UNLOCATED
    latitude: Coordinate = UNLOCATED
    accuracy: float = math.inf
    source: Source = Source.UNKNOWN
    timestamp: int = field(default_factory=now_ms)
    city: str = ""
    country: str = ""
    operator: str = UNKNOWN
    network_type: str = UNKNOWN
    is_wifi: bool = False
    error: Optional[str] = None

    def as_dict(self, json_safe: bool = False) -> Dict[str, Any]:
        """Wire shape of the record.

        ``json_safe`` replaces an infinite accuracy with ``None`` because strict
        JSON encoders (FastAPI's included) refuse ``Infinity``.
        """
        accuracy: Optional[float] = self.accuracy
        if json_safe and accuracy is not None and math.isinf(accuracy):
            accuracy = None
        return {
            "longitude": self.longitude,
            "latitude": self.latitude,
            "accuracy": accuracy,
            "source": self.source.value,
            "timestamp": self.timestamp,
            "city": self.city,
            "country": self.country,
            "operator": self.operator,
            "networkType": self.network_type,
            "isWiFi": self.is_wifi,
            "error": self.error,
        }


@dataclass(frozen=True)
class NetworkInfo:
    network_type: str
    is_wifi: bool


@dataclass(frozen=True)
class DeviceCapability:
    device_class: DeviceClass
    has_sensor: bool
    probed_accuracy: float = math.inf


@dataclass(frozen=True)
class Position:
    latitude: float
    longitude: float
    accuracy: float


@dataclass(frozen=True)
class SensorOptions:
    enable_high_accuracy: bool
    timeout: float  # seconds
    maximum_age: float = 0.0  # seconds a cached fix may be reused


@dataclass
class StrategyOutcome:
    success: bool
    payload: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    @classmethod
    def ok(cls, **payload: Any) -> "StrategyOutcome":
        return cls(success=True, payload=payload)

    @classmethod
    def fail(cls, error: str) -> "StrategyOutcome":
        return cls(success=False, error=error or "unknown error")
