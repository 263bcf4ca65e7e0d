"""Pluto model: perturbation series in the mean longitudes of Jupiter, Saturn, Pluto.

Meeus chapter 37. The series is fitted to 1885-2099 but stays within a fraction
of a degree for several Pluto revolutions either side of J2000, so it is used
across the whole supported range.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from nearsky.constants import (
    COS_OBLIQUITY_J2000,
    DAYS_PER_CENTURY,
    DEG2RAD,
    J2000,
    LIGHT_DAYS_PER_AU,
    SIN_OBLIQUITY_J2000,
)
from nearsky.coords import EclipticCoordinates, EclipticFrame, normalize_angle
from nearsky.data import load_table
from nearsky.vectors import Vector3

# Passes of the light-time fixed point.
LIGHT_TIME_PASSES = 2

_terms: np.ndarray | None = None


def _get_terms() -> np.ndarray:
    """Return the (n, 9) term table: J S P multipliers, then A/B pairs for l, b, r."""
    global _terms
    if _terms is None:
        arr = np.asarray(load_table('pluto')['terms'], dtype=np.float64)
        arr.setflags(write=False)
        _terms = arr
    return _terms


def _series(T: float) -> tuple[float, float, float]:
    """Longitude and latitude (degrees) and radius (AU) on the J2000 ecliptic.

    Parameters:
        T: Julian centuries from J2000.0.
    """
    terms = _get_terms()
    J = 34.35 + 3034.9057 * T
    S = 50.08 + 1222.1138 * T
    P = 238.96 + 144.9600 * T
    alpha = np.fmod(terms[:, 0] * J + terms[:, 1] * S + terms[:, 2] * P, 360.0) * DEG2RAD
    sin_a = np.sin(alpha)
    cos_a = np.cos(alpha)
    l = float(np.sum(terms[:, 3] * sin_a + terms[:, 4] * cos_a))
    b = float(np.sum(terms[:, 5] * sin_a + terms[:, 6] * cos_a))
    r = float(np.sum(terms[:, 7] * sin_a + terms[:, 8] * cos_a))
    l = 238.958116 + 144.96 * T + l / 1e6
    b = -3.908239 + b / 1e6
    r = 40.7241346 + r / 1e7
    return l, b, r


def heliocentric_j2000(T: float) -> EclipticCoordinates:
    """Heliocentric coordinates on the J2000 ecliptic at T centuries from J2000.0."""
    l, b, r = _series(T)
    return EclipticCoordinates(normalize_angle(l * DEG2RAD), b * DEG2RAD, r, EclipticFrame.J2000)


def heliocentric_for_orbit_view(t: float) -> EclipticCoordinates:
    """Approximate heliocentric coordinates referred to the equinox of date.

    The J2000 longitude is advanced by t*360/260 degrees (one turn per 26000
    years) as a rough precession, good enough for drawing orbits.

    Parameters:
        t: Julian millennia from J2000.0.

    Returns:
        Ecliptic coordinates with longitude wrapped into [0, 2*pi).
    """
    T = t * 10.0
    l, b, r = _series(T)
    l += T * 360.0 / 260.0
    return EclipticCoordinates(
        normalize_angle(l * DEG2RAD), b * DEG2RAD, r, EclipticFrame.MEAN_OF_DATE
    )


def j2000_equatorial_vector(helio: EclipticCoordinates) -> Vector3:
    """Rotate J2000 ecliptic coordinates to J2000 equatorial rectangular ones."""
    cosl = math.cos(helio.longitude)
    sinl = math.sin(helio.longitude)
    cosb = math.cos(helio.latitude)
    sinb = math.sin(helio.latitude)
    r = helio.radius
    return Vector3(
        r * cosl * cosb,
        r * (sinl * cosb * COS_OBLIQUITY_J2000 - sinb * SIN_OBLIQUITY_J2000),
        r * (sinl * cosb * SIN_OBLIQUITY_J2000 + sinb * COS_OBLIQUITY_J2000),
    )


@dataclass(frozen=True)
class PlutoGeocentric:
    """Astrometric J2000 direction of Pluto with Earth and Sun distances (AU)."""

    ra: float
    dec: float
    distance: float
    sun_distance: float


def geocentric(
    jde: float,
    sun: Vector3,
    passes: int = LIGHT_TIME_PASSES,
) -> PlutoGeocentric:
    """Geocentric J2000 equatorial position of Pluto with light-time correction.

    Each pass evaluates Pluto at `jde - tau`, adds the Sun's geocentric J2000
    vector, and derives a new light time tau from the resulting distance. The
    pass count is fixed, not convergence-checked.

    Parameters:
        jde: Julian Ephemeris Day.
        sun: Sun's geocentric J2000 equatorial rectangular position (AU).
        passes: Number of light-time passes.

    Returns:
        PlutoGeocentric with ra, dec (radians), distance and sun_distance (AU).
    """
    tau = 0.0
    geo = Vector3()
    dist = 0.0
    helio_r = 0.0
    for _ in range(passes):
        T = (jde - tau - J2000) / DAYS_PER_CENTURY
        helio = heliocentric_j2000(T)
        helio_r = helio.radius
        geo = sun + j2000_equatorial_vector(helio)
        dist = geo.magnitude()
        tau = LIGHT_DAYS_PER_AU * dist
    ra = math.atan2(geo.y, geo.x)
    dec = math.asin(max(-1.0, min(1.0, geo.z / dist)))
    return PlutoGeocentric(ra, dec, dist, helio_r)
