import asyncio
import math

import pytest

from smartlocate import resolve_location
from smartlocate.config import ResolverSettings
from smartlocate.errors import SensorError, ServiceUnreachable
from smartlocate.host import ConnectionState, StaticHost, StaticSensor
from smartlocate.models import Position, Source

from conftest import DESKTOP_UA, IPINFO_CHONGQING, MOBILE_UA, TABLET_UA

FAST = ResolverSettings(probe_timeout=0.05, gps_timeout=0.05, fallback_timeout=0.05)

ALL_SERVICES_DOWN = {
    "ipinfo": ServiceUnreachable("service responded 500", status=500),
    "ip-api": {"message": "no lat/lon here"},
    "geoplugin": ["malformed"],
}


class ScriptedSensor:
    """Returns (or raises) the scripted answers in order."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.calls = []

    async def get_current_position(self, options):
        self.calls.append(options)
        answer = self.answers.pop(0)
        if isinstance(answer, Exception):
            raise answer
        return answer


class ExplodingHost:
    connection = None
    sensor = None

    @property
    def user_agent(self):
        raise RuntimeError("host went away")


def resolve(host, fetch, **kw):
    kw.setdefault("settings", FAST)
    return asyncio.run(resolve_location(host, fetch=fetch, **kw))


def assert_invariants(result):
    assert result.source in set(Source)
    assert (result.source is Source.UNKNOWN) == (result.error is not None)


def test_ip_result_when_sensor_absent(make_fetch):
    fetch = make_fetch({"ipinfo": IPINFO_CHONGQING})
    result = resolve(StaticHost(user_agent=DESKTOP_UA), fetch)
    assert result.source is Source.IP
    assert (result.latitude, result.longitude) == (29.56, 106.56)
    assert (result.city, result.country) == ("Chongqing", "CN")
    assert result.operator == "中国电信"
    assert result.accuracy == 10000
    assert result.error is None
    assert (result.network_type, result.is_wifi) == ("WiFi/wired", True)
    assert_invariants(result)


def test_gps_result_on_mobile_with_precise_sensor(make_fetch):
    fetch = make_fetch({"ipinfo": IPINFO_CHONGQING})
    sensor = StaticSensor(position=Position(29.55, 106.55, 50.0))
    result = resolve(StaticHost(user_agent=MOBILE_UA, sensor=sensor), fetch)
    assert result.source is Source.GPS
    assert result.error is None
    assert result.accuracy == 50.0
    assert result.operator == "unknown"
    assert result.city == ""
    assert fetch.calls == []
    # probe and the real fix are separate high-accuracy reads
    assert [c.enable_high_accuracy for c in sensor.calls] == [True, True]
    assert (result.network_type, result.is_wifi) == ("mobile network", False)
    assert_invariants(result)


def test_failure_record_when_everything_fails(make_fetch):
    fetch = make_fetch(ALL_SERVICES_DOWN)
    result = resolve(StaticHost(user_agent=DESKTOP_UA), fetch)
    assert result.longitude == "unlocated"
    assert result.latitude == "unlocated"
    assert math.isinf(result.accuracy)
    assert result.source is Source.UNKNOWN
    assert result.error == "all positioning methods failed"
    assert result.operator == "unknown"
    # network metadata is still reported
    assert result.network_type == "WiFi/wired"
    assert len(fetch.calls) == 3
    assert_invariants(result)


def test_desktop_sensor_never_used_for_gps(make_fetch):
    fetch = make_fetch({"ipinfo": IPINFO_CHONGQING})
    sensor = StaticSensor(position=Position(1.0, 2.0, 5.0))
    result = resolve(StaticHost(user_agent=DESKTOP_UA, sensor=sensor), fetch)
    assert result.source is Source.IP
    assert len(sensor.calls) == 1


def test_imprecise_mobile_goes_to_ip(make_fetch):
    fetch = make_fetch({"ipinfo": IPINFO_CHONGQING})
    sensor = StaticSensor(position=Position(1.0, 2.0, 150.0))
    result = resolve(StaticHost(user_agent=MOBILE_UA, sensor=sensor), fetch)
    assert result.source is Source.IP
    assert len(sensor.calls) == 1


def test_malformed_sensor_reading_still_falls_back_to_ip(make_fetch):
    fetch = make_fetch({"ipinfo": IPINFO_CHONGQING})
    sensor = StaticSensor(position=Position(1.0, 2.0, None))
    result = resolve(StaticHost(user_agent=MOBILE_UA, sensor=sensor), fetch)
    assert result.source is Source.IP
    assert result.error is None
    assert fetch.calls == ["https://ipinfo.io/json"]


def test_tablet_within_threshold_gets_gps(make_fetch):
    fetch = make_fetch({})
    sensor = StaticSensor(position=Position(1.0, 2.0, 150.0))
    result = resolve(StaticHost(user_agent=TABLET_UA, sensor=sensor), fetch)
    assert result.source is Source.GPS


def test_gps_failure_falls_back_to_ip(make_fetch):
    fetch = make_fetch({"ipinfo": IPINFO_CHONGQING})
    sensor = ScriptedSensor(Position(1.0, 2.0, 20.0), SensorError("position unavailable"))
    result = resolve(StaticHost(user_agent=MOBILE_UA, sensor=sensor), fetch)
    assert result.source is Source.IP
    assert len(sensor.calls) == 2


def test_html5_fallback_after_ip_failure(make_fetch):
    fetch = make_fetch(ALL_SERVICES_DOWN)
    sensor = ScriptedSensor(Position(1.0, 2.0, 900.0), Position(30.0, 120.0, 1200.0))
    host = StaticHost(user_agent=MOBILE_UA, sensor=sensor,
                      connection=ConnectionState(type="cellular", effective_type="4g"))
    result = resolve(host, fetch)
    assert result.source is Source.HTML5
    assert (result.latitude, result.longitude, result.accuracy) == (30.0, 120.0, 1200.0)
    assert (result.network_type, result.is_wifi) == ("4G", False)
    assert sensor.calls[-1].enable_high_accuracy is False
    assert sensor.calls[-1].maximum_age == FAST.fallback_max_age
    assert_invariants(result)


def test_every_strategy_tried_once(make_fetch):
    fetch = make_fetch(ALL_SERVICES_DOWN)
    sensor = ScriptedSensor(Position(1.0, 2.0, 10.0), SensorError("gps lost"), SensorError("no fix"))
    result = resolve(StaticHost(user_agent=MOBILE_UA, sensor=sensor), fetch)
    assert result.error == "all positioning methods failed"
    assert len(sensor.calls) == 3
    assert len(fetch.calls) == 3


def test_explicit_ip_is_forwarded(make_fetch):
    fetch = make_fetch({"ipinfo": IPINFO_CHONGQING})
    resolve(StaticHost(user_agent=DESKTOP_UA), fetch, ip="203.0.113.9")
    assert fetch.calls == ["https://ipinfo.io/203.0.113.9/json"]


def test_never_raises_on_broken_host(make_fetch):
    result = resolve(ExplodingHost(), make_fetch({}))
    assert result.source is Source.UNKNOWN
    assert result.error == "host went away"
    assert result.network_type == "unknown"


@pytest.mark.parametrize("services", [[], None])
def test_empty_service_list(make_fetch, services):
    kw = {} if services is None else {"services": services}
    result = resolve(StaticHost(user_agent=DESKTOP_UA), make_fetch({}), **kw)
    assert result.error == "all positioning methods failed"


def test_as_dict_wire_shape(make_fetch):
    result = resolve(StaticHost(user_agent=DESKTOP_UA), make_fetch(ALL_SERVICES_DOWN))
    wire = result.as_dict(json_safe=True)
    assert wire["accuracy"] is None
    assert wire["source"] == "unknown"
    assert wire["isWiFi"] is True
    assert wire["networkType"] == "WiFi/wired"
    assert math.isinf(result.as_dict()["accuracy"])
