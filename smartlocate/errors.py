"""Exception types raised inside the positioning chain.

None of these reach callers of :func:`smartlocate.resolve_location`; strategies
catch them and turn them into failed outcomes.
"""
from __future__ import annotations

from typing import Optional


class LocationError(Exception):
    """Base class for positioning failures."""


class SensorError(LocationError):
    """Failure reported by (or about) the host positioning sensor.

    ``code`` follows the W3C geolocation numbering: 1 permission denied,
    2 position unavailable, 3 timeout.
    """

    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3

    def __init__(self, message: str, *, code: int = POSITION_UNAVAILABLE):
        super().__init__(message)
        self.code = code


class SensorUnavailable(SensorError):
    def __init__(self, message: str = "geolocation API unavailable"):
        super().__init__(message, code=SensorError.POSITION_UNAVAILABLE)


class SensorDenied(SensorError):
    def __init__(self, message: str = "user denied geolocation"):
        super().__init__(message, code=SensorError.PERMISSION_DENIED)


class SensorTimeout(SensorError):
    def __init__(self, message: str = "positioning timed out"):
        super().__init__(message, code=SensorError.TIMEOUT)


class ServiceError(LocationError):
    """An IP lookup service could not produce a location."""

    def __init__(self, message: str, *, service: Optional[str] = None, url: Optional[str] = None):
        super().__init__(message)
        self.service = service
        self.url = url


class ServiceUnreachable(ServiceError):
    """Transport failure or non-2xx response."""

    def __init__(self, message: str, *, service: Optional[str] = None,
                 url: Optional[str] = None, status: Optional[int] = None):
        super().__init__(message, service=service, url=url)
        self.status = status


class ServiceUnparseable(ServiceError):
    """Response body did not have the shape the service parser expects."""


class AllStrategiesExhausted(LocationError):
    def __init__(self, message: str = "all positioning methods failed"):
        super().__init__(message)
