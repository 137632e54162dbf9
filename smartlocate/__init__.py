"""Best-effort device positioning with GPS, IP and HTML5-style fallbacks."""
from __future__ import annotations

from .config import ResolverSettings
from .host import ConnectionState, StaticHost, StaticSensor, local_host
from .models import DeviceCapability, DeviceClass, LocationResult, NetworkInfo, Position, Source
from .resolver import resolve_location
from .services import SERVICES, IpService

__all__ = [
    "ConnectionState",
    "DeviceCapability",
    "DeviceClass",
    "IpService",
    "LocationResult",
    "NetworkInfo",
    "Position",
    "ResolverSettings",
    "SERVICES",
    "Source",
    "StaticHost",
    "StaticSensor",
    "local_host",
    "resolve_location",
]
