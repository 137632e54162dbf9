"""Host collaborators: identifier string, connection state and positioning sensor."""
from __future__ import annotations

import asyncio
import platform
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from .errors import SensorError, SensorTimeout
from .models import Position, SensorOptions


@dataclass(frozen=True)
class ConnectionState:
    """What the host knows about its link. Either field may be missing."""
    type: Optional[str] = None
    effective_type: Optional[str] = None


class GeolocationSensor(Protocol):
    async def get_current_position(self, options: SensorOptions) -> Position: ...


class Host(Protocol):
    user_agent: str
    connection: Optional[ConnectionState]
    sensor: Optional[GeolocationSensor]


@dataclass
class StaticSensor:
    """Sensor that answers every read with a fixed position or error.

    ``delay`` simulates a slow fix; if it exceeds the requested timeout the read
    raises :class:`SensorTimeout` once the timeout has elapsed, like a real
    device would.
    """
    position: Optional[Position] = None
    error: Optional[SensorError] = None
    delay: float = 0.0
    calls: List[SensorOptions] = field(default_factory=list)

    async def get_current_position(self, options: SensorOptions) -> Position:
        self.calls.append(options)
        if self.delay > options.timeout:
            await asyncio.sleep(options.timeout)
            raise SensorTimeout()
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.position is None:
            raise SensorError("position unavailable")
        return self.position


@dataclass
class StaticHost:
    user_agent: str = ""
    connection: Optional[ConnectionState] = None
    sensor: Optional[GeolocationSensor] = None


def local_host(user_agent: Optional[str] = None,
               connection: Optional[ConnectionState] = None) -> StaticHost:
    """Host description for the machine running this process (no sensor)."""
    if not user_agent:
        user_agent = f"smartlocate ({platform.system()} {platform.release()}; {platform.machine()})"
    return StaticHost(user_agent=user_agent, connection=connection, sensor=None)
