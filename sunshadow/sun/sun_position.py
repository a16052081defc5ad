# sunshadow/sun/sun_position.py

import logging
import math
from datetime import datetime
from typing import Callable, Tuple

from astral import Observer
from astral.sun import azimuth, elevation

from sunshadow.core.common_types import GeoTime, SunAngle

# (date, latitude, longitude) -> (azimuth, altitude), both in radians.
# Azimuth from north, clockwise. Altitude above the horizon.
EphemerisFunction = Callable[[datetime, float, float], Tuple[float, float]]


def astral_sun_angle(date: datetime, latitude: float, longitude: float) -> Tuple[float, float]:
    """
    Ephemeris backed by the astral package.

    Astral reports degrees with azimuth measured clockwise from north, which is our
    convention, so only a unit conversion is needed. The geometric altitude (no
    atmospheric refraction) is used. Naive datetimes are treated as UTC by astral.
    """
    observer = Observer(latitude=latitude, longitude=longitude)
    azimuth_deg = azimuth(observer, date)
    altitude_deg = elevation(observer, date, with_refraction=False)
    return math.radians(azimuth_deg), math.radians(altitude_deg)


class SunPositionResolver:
    """
    Maps a moment and a place to the sun's azimuth and altitude.

    Inputs are not validated here: they are forwarded to the ephemeris as-is and its
    result, NaN included, is returned unchanged. Ephemeris errors are logged and
    re-raised to the caller.
    """

    def __init__(self, ephemeris: EphemerisFunction = astral_sun_angle):
        self._ephemeris = ephemeris
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def resolve(self, date: datetime, latitude: float, longitude: float) -> SunAngle:
        try:
            sun_azimuth, sun_altitude = self._ephemeris(date, latitude, longitude)
        except Exception as e:
            self.logger.error(
                f"Ephemeris failed for date={date!r}, latitude={latitude}, longitude={longitude}: {e}")
            raise
        sun_angle = SunAngle(azimuth=float(sun_azimuth), altitude=float(sun_altitude))
        self.logger.debug(
            f"Sun at {date} ({latitude}, {longitude}): azimuth {sun_angle.azimuth_degrees:.2f} deg, "
            f"altitude {sun_angle.altitude_degrees:.2f} deg")
        return sun_angle

    def resolve_geotime(self, geotime: GeoTime) -> SunAngle:
        return self.resolve(geotime.date, geotime.latitude, geotime.longitude)


_default_resolver = SunPositionResolver()


def calculate_sun_position(date: datetime, latitude: float, longitude: float) -> SunAngle:
    """Resolves the sun position with the default astral-backed ephemeris."""
    return _default_resolver.resolve(date, latitude, longitude)


if __name__ == '__main__':
    from datetime import timezone

    logging.basicConfig(level=logging.DEBUG, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    now = datetime.now(timezone.utc)
    shanghai = calculate_sun_position(now, 31.2304, 121.4737)
    print(f"Shanghai at {now.isoformat()}: azimuth {shanghai.azimuth_degrees:.1f} deg, "
          f"altitude {shanghai.altitude_degrees:.1f} deg")
