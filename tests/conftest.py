"""Shared fixtures: user-agent strings and an offline stand-in for ``fetch_json``."""
from __future__ import annotations

from typing import Any, Dict, List
from urllib.parse import urlparse

import pytest

from smartlocate.services import SERVICES

DESKTOP_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
MOBILE_UA = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
)
TABLET_UA = "Mozilla/5.0 (Tablet; rv:26.0) Gecko/26.0 Firefox/26.0"

IPINFO_CHONGQING = {"loc": "29.56,106.56", "city": "Chongqing", "country": "CN", "org": "AS4134"}
IP_API_BERLIN = {
    "status": "success", "lat": 52.52, "lon": 13.405, "city": "Berlin",
    "country": "Germany", "isp": "Deutsche Telekom AG",
}
GEOPLUGIN_PARIS = {
    "geoplugin_latitude": "48.8566", "geoplugin_longitude": "2.3522",
    "geoplugin_city": "Paris", "geoplugin_countryName": "France",
}


class FakeFetch:
    """Answers by service host; exceptions in the table are raised."""

    def __init__(self, answers: Dict[str, Any]):
        self._by_host = {
            urlparse(s.url).netloc: answers[s.name] for s in SERVICES if s.name in answers
        }
        self.calls: List[str] = []

    def __call__(self, url: str, timeout: float = None) -> Any:
        self.calls.append(url)
        host = urlparse(url).netloc
        if host not in self._by_host:
            raise AssertionError(f"unexpected fetch of {url}")
        value = self._by_host[host]
        if isinstance(value, Exception):
            raise value
        return value


@pytest.fixture
def make_fetch():
    return FakeFetch
