"""Turn strategy outcomes into :class:`LocationResult` records."""
from __future__ import annotations

import math
from dataclasses import replace

from .models import FAILED, UNKNOWN, LocationResult, NetworkInfo, Source, StrategyOutcome, now_ms
from .operators import format_operator_name


def format_result(outcome: StrategyOutcome, source: Source) -> LocationResult:
    if not outcome.success:
        return LocationResult(
            longitude=FAILED,
            latitude=FAILED,
            accuracy=math.inf,
            source=source,
            timestamp=now_ms(),
            operator=UNKNOWN,
            error=outcome.error or "unknown error",
        )

    data = outcome.payload
    result = LocationResult(
        longitude=data["longitude"],
        latitude=data["latitude"],
        accuracy=data["accuracy"],
        source=source,
        timestamp=now_ms(),
    )
    if source is Source.IP:
        result.city = data.get("city") or ""
        result.country = data.get("country") or ""
        result.operator = format_operator_name(data.get("operator"))
    return result


def merge_network(result: LocationResult, info: NetworkInfo) -> LocationResult:
    return replace(result, network_type=info.network_type, is_wifi=info.is_wifi)
