"""User-agent classification table.

Order matters: the first matching pattern wins, and anything unmatched is a
desktop. iPads carry both mobile and tablet tokens and land in ``MOBILE``.
"""
from __future__ import annotations

import re
from typing import List, Pattern, Tuple

from .models import DeviceClass

DEVICE_PATTERNS: List[Tuple[Pattern[str], DeviceClass]] = [
    (re.compile(r"Mobi|Android|iPhone|iPad|iPod", re.IGNORECASE), DeviceClass.MOBILE),
    (re.compile(r"iPad|Tablet|Touch", re.IGNORECASE), DeviceClass.TABLET),
]


def device_class(user_agent: str | None) -> DeviceClass:
    ua = user_agent or ""
    for pattern, cls in DEVICE_PATTERNS:
        if pattern.search(ua):
            return cls
    return DeviceClass.DESKTOP


def is_mobile_like(user_agent: str | None) -> bool:
    """True only for the mobile row; tablet-only agents count as desktop-like."""
    return device_class(user_agent) is DeviceClass.MOBILE
