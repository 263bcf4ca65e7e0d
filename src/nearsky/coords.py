"""Frame-tagged ecliptic and equatorial coordinate values."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from nearsky.constants import TWO_PI
from nearsky.vectors import Vector3


class EclipticFrame(Enum):
    """Reference frame of an ecliptic coordinate triple."""

    MEAN_OF_DATE = 'mean-of-date'
    J2000 = 'J2000'


class EquatorialFrame(Enum):
    """Apparent (precessed, nutated, aberrated) or astrometric J2000 output."""

    APPARENT = 'apparent'
    J2000 = 'J2000'


@dataclass(frozen=True)
class EclipticCoordinates:
    """Longitude and latitude in radians, radius in AU, with frame tag."""

    longitude: float
    latitude: float
    radius: float
    frame: EclipticFrame = EclipticFrame.MEAN_OF_DATE

    def to_vector(self) -> Vector3:
        """Rectangular coordinates (x toward the equinox, z toward the pole)."""
        cb = math.cos(self.latitude)
        return Vector3(
            self.radius * cb * math.cos(self.longitude),
            self.radius * cb * math.sin(self.longitude),
            self.radius * math.sin(self.latitude),
        )


@dataclass(frozen=True)
class EquatorialCoordinates:
    """Right ascension and declination in radians, with frame tag."""

    ra: float
    dec: float
    frame: EquatorialFrame = EquatorialFrame.APPARENT


def normalize_angle(angle: float) -> float:
    """Wrap an angle into [0, 2*pi); a true modulo, negatives wrap upward."""
    angle = math.fmod(angle, TWO_PI)
    if angle < 0.0:
        angle += TWO_PI
    # fmod of a tiny negative value can round up to exactly 2*pi
    if angle >= TWO_PI:
        angle = 0.0
    return angle


def ra_dec_from_vector(v: Vector3) -> tuple[float, float]:
    """Direction of a rectangular vector as (ra, dec), ra wrapped into [0, 2*pi).

    A zero-length vector maps to (0, 0); a zero x/y projection gives ra = 0.
    """
    norm = v.magnitude()
    if norm == 0.0:
        return 0.0, 0.0
    z = max(-1.0, min(1.0, v.z / norm))
    dec = math.asin(z)
    if v.x == 0.0 and v.y == 0.0:
        return 0.0, dec
    return normalize_angle(math.atan2(v.y, v.x)), dec


def unit_vector(ra: float, dec: float) -> Vector3:
    """Unit rectangular vector for a direction (ra, dec)."""
    cd = math.cos(dec)
    return Vector3(cd * math.cos(ra), cd * math.sin(ra), math.sin(dec))
