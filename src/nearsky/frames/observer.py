"""Observer location, local sidereal time, and diurnal-parallax factors."""

from __future__ import annotations

import math
from dataclasses import dataclass

from nearsky.constants import (
    DAYS_PER_CENTURY,
    DEG2RAD,
    EARTH_POLAR_TO_EQUATORIAL,
    HOURS2RAD,
    J2000,
)


@dataclass(frozen=True, eq=False)
class ObserverLocation:
    """Geographic position in degrees, east longitude and north latitude positive.

    Compared by identity: the ephemeris cache treats a different location
    object as a new location even if its coordinates are equal.
    """

    longitude_deg: float
    latitude_deg: float
    name: str = ''


def greenwich_sidereal_hours(jd_ut: float) -> float:
    """Greenwich mean sidereal time in hours, possibly outside [0, 24)."""
    jd0 = math.floor(jd_ut - 0.5) + 0.5
    ut = (jd_ut - jd0) * 24.0
    t = (jd0 - J2000) / DAYS_PER_CENTURY
    gst = 6.697374558 + t * (2400.0513369072 + t * (0.0000258622 + t / 580650000))
    return math.fmod(gst, 24.0) + ut * 1.00273790935


def local_sidereal_hours(jd_ut: float, longitude_deg: float) -> float:
    """Local mean sidereal time in hours, wrapped into [0, 24).

    Parameters:
        jd_ut: Julian day on the UT scale.
        longitude_deg: East longitude in degrees.

    Returns:
        Local sidereal time in hours.
    """
    lst = math.fmod(greenwich_sidereal_hours(jd_ut) + longitude_deg / 15.0, 24.0)
    if lst < 0.0:
        lst += 24.0
    return lst


@dataclass(frozen=True)
class ObserverState:
    """Latitude, local sidereal time, and rho*sin(phi'), rho*cos(phi') (Meeus ch. 11)."""

    latitude_rad: float
    lst_rad: float
    rho_sin_phi: float
    rho_cos_phi: float

    @classmethod
    def from_location(cls, location: ObserverLocation, jd_ut: float) -> ObserverState:
        """Derive the parallax geometry for a location at a UT Julian day."""
        phi = location.latitude_deg * DEG2RAD
        u = math.atan(math.tan(phi) * EARTH_POLAR_TO_EQUATORIAL)
        lst = local_sidereal_hours(jd_ut, location.longitude_deg)
        return cls(
            latitude_rad=phi,
            lst_rad=lst * HOURS2RAD,
            rho_sin_phi=EARTH_POLAR_TO_EQUATORIAL * math.sin(u),
            rho_cos_phi=math.cos(u),
        )
