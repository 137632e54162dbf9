"""Tunable timeouts and thresholds for one resolution call."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ResolverSettings:
    # capability probe: sensor timeout and the racing timer
    probe_timeout: float = 10.0
    # high-accuracy fix (GPS)
    gps_timeout: float = 15.0
    # low-accuracy fix (HTML5)
    fallback_timeout: float = 10.0
    fallback_max_age: float = 300.0
    # probed accuracy must be below this (meters) before a GPS fix is attempted
    eligible_accuracy: float = 500.0
    # per-request timeout for IP lookup services
    http_timeout: float = 4.0


DEFAULT_SETTINGS = ResolverSettings()
