"""Time-boxed reads from the host positioning sensor.

A read is raced against an explicit timer. The host API offers no way to
abort a pending read, so when the timer wins the read keeps running; its
eventual result (or exception) is collected by a done-callback and dropped.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, TypeVar

from .errors import SensorTimeout, SensorUnavailable
from .host import Host
from .models import Position, SensorOptions

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _discard_late(task: "asyncio.Future") -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug("late sensor read failed after timeout: %s", exc)
    else:
        logger.debug("late sensor read resolved after timeout; result discarded")


async def race_timer(aw: Awaitable[T], timeout: float, message: str = "positioning timed out") -> T:
    """Await ``aw`` unless ``timeout`` seconds pass first.

    Raises :class:`SensorTimeout` when the timer wins. The underlying
    awaitable is not cancelled.
    """
    task = asyncio.ensure_future(aw)
    done, _ = await asyncio.wait({task}, timeout=timeout)
    if task in done:
        return task.result()
    task.add_done_callback(_discard_late)
    raise SensorTimeout(message)


async def read_position(host: Host, options: SensorOptions, timer: float | None = None) -> Position:
    """One sensor read. ``timer`` defaults to the read's own timeout."""
    sensor = getattr(host, "sensor", None)
    if sensor is None:
        raise SensorUnavailable()
    limit = options.timeout if timer is None else timer
    return await race_timer(sensor.get_current_position(options), limit)
