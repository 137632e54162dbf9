"""Coarse network classification from the host's connection state."""
from __future__ import annotations

from .classify import is_mobile_like
from .host import Host
from .models import NetworkInfo

WIFI_LINK_TYPES = {"wifi", "wlan", "unknown", "802.11"}
WIRED_LINK_TYPES = {"ethernet", "lan"}

EFFECTIVE_TYPE_LABELS = {
    "4g": "4G",
    "3g": "3G",
    "2g": "2G",
    "5g": "5G",
    "slow-2g": "2G (slow)",
}

WIFI_OR_WIRED = "WiFi/wired"
MOBILE_NETWORK = "mobile network"


def mobile_network_label(effective_type: str | None) -> str:
    return EFFECTIVE_TYPE_LABELS.get(effective_type or "", MOBILE_NETWORK)


def probe_network(host: Host) -> NetworkInfo:
    """Best guess of the link type; never fails."""
    mobile = is_mobile_like(getattr(host, "user_agent", ""))
    conn = getattr(host, "connection", None)

    if conn is None:
        if mobile:
            return NetworkInfo(MOBILE_NETWORK, False)
        return NetworkInfo(WIFI_OR_WIRED, True)

    if conn.type is not None:
        if conn.type in WIFI_LINK_TYPES:
            return NetworkInfo("WiFi", True)
        if conn.type in WIRED_LINK_TYPES:
            return NetworkInfo("wired", True)
        return NetworkInfo(mobile_network_label(conn.effective_type), False)

    # no link type: desktops are WiFi/wired whatever the effective type says
    if not mobile:
        return NetworkInfo(WIFI_OR_WIRED, True)
    return NetworkInfo(mobile_network_label(conn.effective_type), False)
