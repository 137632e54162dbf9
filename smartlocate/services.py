"""IP geolocation services shared across the resolver, CLI and server.

Each entry in :data:`SERVICES` describes one free endpoint: where to send the
request, how to read its JSON, and how precise its answers usually are. The
order of the table is the order in which services are tried.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional

import requests

from .errors import ServiceUnparseable, ServiceUnreachable

DEFAULT_TIMEOUT = 4.0
HEADERS = {"Accept": "application/json", "User-Agent": "smartlocate/0.1"}


@dataclass(frozen=True)
class IpService:
    name: str
    url: str
    ip_url: str  # same endpoint for an explicit address, formatted with ip=
    parse: Callable[[Dict[str, Any]], Dict[str, Any]]
    accuracy: float  # meters

    def url_for(self, ip: Optional[str] = None) -> str:
        return self.ip_url.format(ip=ip) if ip else self.url

    def read(self, data: Any) -> Dict[str, Any]:
        """Parse ``data`` into the common IP payload or raise ServiceUnparseable."""
        if not isinstance(data, dict):
            raise ServiceUnparseable(f"{self.name}: expected a JSON object", service=self.name)
        try:
            fields = self.parse(data)
            lat = float(fields["latitude"])
            lon = float(fields["longitude"])
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ServiceUnparseable(f"{self.name}: unexpected response ({e!r})", service=self.name) from e
        if math.isnan(lat) or math.isnan(lon):
            raise ServiceUnparseable(f"{self.name}: coordinates are NaN", service=self.name)
        return {
            "latitude": lat,
            "longitude": lon,
            "accuracy": self.accuracy,
            "city": fields.get("city") or "",
            "country": fields.get("country") or "",
            "operator": fields.get("operator") or "",
        }


# --------------- response parsers ---------------
def _parse_ipinfo(data: Dict[str, Any]) -> Dict[str, Any]:
    lat_s, lon_s = data["loc"].split(",")
    return {
        "latitude": lat_s,
        "longitude": lon_s,
        "city": data.get("city"),
        "country": data.get("country"),
        "operator": data.get("org"),
    }


def _parse_ip_api(data: Dict[str, Any]) -> Dict[str, Any]:
    if data.get("status") == "fail":
        raise ValueError(data.get("message") or "lookup failed")
    return {
        "latitude": data["lat"],
        "longitude": data["lon"],
        "city": data.get("city"),
        "country": data.get("country"),
        "operator": data.get("isp"),
    }


def _parse_geoplugin(data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "latitude": data["geoplugin_latitude"],
        "longitude": data["geoplugin_longitude"],
        "city": data.get("geoplugin_city"),
        "country": data.get("geoplugin_countryName"),
    }


SERVICES: List[IpService] = [
    IpService("ipinfo", "https://ipinfo.io/json", "https://ipinfo.io/{ip}/json",
              _parse_ipinfo, accuracy=10000),
    IpService("ip-api", "http://ip-api.com/json", "http://ip-api.com/json/{ip}",
              _parse_ip_api, accuracy=50000),
    IpService("geoplugin", "https://www.geoplugin.net/json.gp", "https://www.geoplugin.net/json.gp?ip={ip}",
              _parse_geoplugin, accuracy=50000),
]

_BY_NAME = {s.name: s for s in SERVICES}


def get_service(name: str) -> IpService:
    try:
        return _BY_NAME[name]
    except KeyError:
        raise KeyError(f"unknown IP service {name!r}; known: {', '.join(_BY_NAME)}") from None


def select_services(names: Iterable[str] | None) -> List[IpService]:
    """Subset of :data:`SERVICES` by name, keeping table order."""
    if not names:
        return list(SERVICES)
    wanted = {n.strip() for n in names if n and n.strip()}
    for n in wanted:
        get_service(n)
    return [s for s in SERVICES if s.name in wanted]


# --------------- transport ---------------
def fetch_json(url: str, timeout: float = DEFAULT_TIMEOUT) -> Any:
    """GET ``url`` and decode its JSON body.

    Transport errors and non-2xx statuses raise :class:`ServiceUnreachable`;
    a body that is not JSON raises :class:`ServiceUnparseable`.
    """
    try:
        response = requests.get(url, headers=HEADERS, timeout=timeout)
    except requests.RequestException as e:
        raise ServiceUnreachable(str(e), url=url) from e
    if not 200 <= response.status_code < 300:
        raise ServiceUnreachable(f"service responded {response.status_code}", url=url,
                                 status=response.status_code)
    try:
        return response.json()
    except ValueError as e:
        raise ServiceUnparseable(f"invalid JSON from {url}", url=url) from e
