"""Does this device carry a real positioning sensor?

A single high-accuracy read is taken and its reported accuracy compared with a
per-device-class threshold. Desktops never qualify: browsers on desktops
answer with Wi-Fi or IP derived fixes that can look precise.
"""
from __future__ import annotations

import logging
import math
from typing import Dict, Optional

from .classify import device_class
from .config import DEFAULT_SETTINGS, ResolverSettings
from .host import Host
from .models import DeviceCapability, DeviceClass, SensorOptions
from .sensor import read_position

logger = logging.getLogger(__name__)

# meters; None means the class never counts as having a sensor
SENSOR_THRESHOLDS: Dict[DeviceClass, Optional[float]] = {
    DeviceClass.MOBILE: 100.0,
    DeviceClass.TABLET: 200.0,
    DeviceClass.DESKTOP: None,
}


def has_sensor_for(cls: DeviceClass, accuracy: float) -> bool:
    threshold = SENSOR_THRESHOLDS.get(cls)
    if threshold is None:
        return False
    return accuracy < threshold


async def detect_capabilities(host: Host, settings: ResolverSettings = DEFAULT_SETTINGS) -> DeviceCapability:
    cls = device_class(getattr(host, "user_agent", ""))
    options = SensorOptions(enable_high_accuracy=True, timeout=settings.probe_timeout, maximum_age=0)
    try:
        position = await read_position(host, options, timer=settings.probe_timeout)
        accuracy = float(position.accuracy)
        if math.isnan(accuracy):
            raise ValueError("sensor reported NaN accuracy")
        found = has_sensor_for(cls, accuracy)
    except Exception as e:
        logger.debug("capability probe failed for %s device: %s", cls.value, e)
        return DeviceCapability(device_class=cls, has_sensor=False, probed_accuracy=math.inf)

    logger.debug("capability probe: %s device, accuracy=%.1fm, has_sensor=%s", cls.value, accuracy, found)
    return DeviceCapability(device_class=cls, has_sensor=found, probed_accuracy=accuracy)
