"""Capability-gated fallback resolver.

Attempt order, stopping at the first success::

    probe capability -> GPS (only if eligible) -> IP lookup -> HTML5 -> failed

Nothing is retried and nothing is cached; every call probes from scratch.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from .capability import detect_capabilities
from .config import DEFAULT_SETTINGS, ResolverSettings
from .errors import AllStrategiesExhausted
from .host import Host
from .models import LocationResult, NetworkInfo, Source
from .network import probe_network
from .normalize import format_result, merge_network
from .services import SERVICES, IpService, fetch_json
from .strategies import Fetcher, ip_lookup, sensor_fix

logger = logging.getLogger(__name__)


async def resolve_location(host: Host,
                           services: Sequence[IpService] = SERVICES,
                           fetch: Fetcher = fetch_json,
                           ip: Optional[str] = None,
                           settings: Optional[ResolverSettings] = None) -> LocationResult:
    """Best-effort location of ``host``. Never raises.

    When every strategy fails the returned record has ``source`` unknown,
    "unlocated" coordinates and a non-empty ``error``.
    """
    settings = settings or DEFAULT_SETTINGS
    failed = LocationResult()
    try:
        network = probe_network(host)
        failed.network_type = network.network_type
        failed.is_wifi = network.is_wifi
        return await _run_chain(host, network, services, fetch, ip, settings)
    except Exception as e:
        logger.info("positioning failed: %s", e)
        failed.error = str(e) or type(e).__name__
        return failed


async def _run_chain(host: Host, network: NetworkInfo, services: Sequence[IpService],
                     fetch: Fetcher, ip: Optional[str], settings: ResolverSettings) -> LocationResult:
    capability = await detect_capabilities(host, settings)

    if capability.has_sensor and capability.probed_accuracy < settings.eligible_accuracy:
        outcome = await sensor_fix(host, high_accuracy=True, settings=settings)
        if outcome.success:
            return _finish(format_result(outcome, Source.GPS), network)
        logger.info("GPS fix failed (%s); trying IP lookup", outcome.error)

    outcome = await ip_lookup(services, fetch=fetch, ip=ip, settings=settings)
    if outcome.success:
        return _finish(format_result(outcome, Source.IP), network)

    outcome = await sensor_fix(host, high_accuracy=False, settings=settings)
    if outcome.success:
        return _finish(format_result(outcome, Source.HTML5), network)

    raise AllStrategiesExhausted()


def _finish(result: LocationResult, network: NetworkInfo) -> LocationResult:
    result = merge_network(result, network)
    logger.info("located via %s (accuracy %sm, operator %s)",
                result.source.value, result.accuracy, result.operator)
    return result
