"""The three positioning strategies.

Each one returns a :class:`StrategyOutcome` and never raises; the resolver
only looks at ``success`` to decide where to go next.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional, Sequence

from .config import DEFAULT_SETTINGS, ResolverSettings
from .errors import SensorError, ServiceError
from .host import Host
from .models import SensorOptions, StrategyOutcome
from .sensor import read_position
from .services import SERVICES, IpService, fetch_json

logger = logging.getLogger(__name__)

Fetcher = Callable[[str, float], Any]


def sensor_options(high_accuracy: bool, settings: ResolverSettings = DEFAULT_SETTINGS) -> SensorOptions:
    if high_accuracy:
        return SensorOptions(enable_high_accuracy=True, timeout=settings.gps_timeout, maximum_age=0)
    return SensorOptions(enable_high_accuracy=False, timeout=settings.fallback_timeout,
                         maximum_age=settings.fallback_max_age)


async def sensor_fix(host: Host, high_accuracy: bool = True,
                     settings: ResolverSettings = DEFAULT_SETTINGS) -> StrategyOutcome:
    options = sensor_options(high_accuracy, settings)
    try:
        position = await read_position(host, options)
    except SensorError as e:
        logger.debug("sensor fix (high_accuracy=%s) failed with code %s: %s", high_accuracy, e.code, e)
        return StrategyOutcome.fail(str(e))
    except Exception as e:
        logger.debug("sensor fix (high_accuracy=%s) failed: %r", high_accuracy, e)
        return StrategyOutcome.fail(str(e))
    return StrategyOutcome.ok(
        longitude=position.longitude,
        latitude=position.latitude,
        accuracy=position.accuracy,
    )


async def ip_lookup(services: Sequence[IpService] = SERVICES,
                    fetch: Fetcher = fetch_json,
                    ip: Optional[str] = None,
                    settings: ResolverSettings = DEFAULT_SETTINGS) -> StrategyOutcome:
    """Try each service in order; the first parseable answer wins."""
    for service in services:
        url = service.url_for(ip)
        try:
            data = await asyncio.to_thread(fetch, url, settings.http_timeout)
            payload = service.read(data)
        except ServiceError as e:
            logger.warning("IP lookup service %s failed (%s): %s", e.service or service.name, e.url or url, e)
            continue
        except Exception as e:
            logger.warning("IP lookup service %s failed unexpectedly: %r", service.name, e)
            continue
        payload["service"] = service.name
        return StrategyOutcome.ok(**payload)
    return StrategyOutcome.fail("all IP lookup services failed")
