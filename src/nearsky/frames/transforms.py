"""Coordinate corrections applied between series output and final RA/Dec.

Pure functions. Each takes the frame quantities it needs explicitly, so the
per-body composition order in nearsky.bodies stays the only place where the
order of corrections is decided.
"""

from __future__ import annotations

import math

import numpy as np

from nearsky.constants import (
    ABERRATION_CONSTANT,
    ARCSEC2RAD,
    DAYS_PER_CENTURY,
    DEG2RAD,
    HALF_PI,
    J2000,
    SOLAR_PARALLAX,
)
from nearsky.coords import ra_dec_from_vector, unit_vector
from nearsky.frames.nutation import AberrationElements, Nutation
from nearsky.frames.observer import ObserverState
from nearsky.frames.precession import FrameState
from nearsky.vectors import Vector3

# sin of the Sun's horizontal parallax at 1 AU
SIN_SOLAR_PARALLAX = math.sin(SOLAR_PARALLAX)


def _clamped_asin(x: float) -> float:
    if x > 1.0:
        return HALF_PI
    if x < -1.0:
        return -HALF_PI
    return math.asin(x)


def fk5_correction(jde: float, lam: float, beta: float) -> tuple[float, float]:
    """Shift VSOP dynamical ecliptic coordinates onto the FK5 system (Meeus p. 219).

    Parameters:
        jde: Julian Ephemeris Day.
        lam: Ecliptic longitude (radians).
        beta: Ecliptic latitude (radians).

    Returns:
        Corrected (longitude, latitude).
    """
    T = (jde - J2000) / DAYS_PER_CENTURY
    lp = lam - T * (1.397 + T * 0.00031) * DEG2RAD
    coslp = math.cos(lp)
    sinlp = math.sin(lp)
    tanb = math.tan(beta)
    lam += (0.03916 * (coslp + sinlp) * tanb - 0.09033) * ARCSEC2RAD
    beta += 0.03916 * (coslp - sinlp) * ARCSEC2RAD
    return lam, beta


def ecliptic_aberration(
    elements: AberrationElements, lam: float, beta: float
) -> tuple[float, float]:
    """Add annual aberration to ecliptic coordinates (Meeus p. 151).

    The latitude term is evaluated at the already-corrected longitude.
    """
    k = ABERRATION_CONSTANT
    e = elements.eccentricity
    lam += k * (e * math.cos(elements.perihelion - lam) - math.cos(elements.sun_longitude - lam)) / math.cos(beta)
    beta += k * (e * math.sin(elements.perihelion - lam) - math.sin(elements.sun_longitude - lam)) * math.sin(beta)
    return lam, beta


def ecliptic_to_equatorial(nut: Nutation, lam: float, beta: float) -> tuple[float, float]:
    """Mean ecliptic of date to true equator of date, adding nutation in longitude.

    Returns:
        (ra, dec); ra is the raw atan2 value in (-pi, pi].
    """
    lam += nut.dpsi
    cep = nut.cos_obliquity
    sep = nut.sin_obliquity
    sinlam = math.sin(lam)
    cosb = math.cos(beta)
    sinb = math.sin(beta)
    ra = math.atan2(sinlam * cep - sinb * sep / cosb, math.cos(lam))
    dec = _clamped_asin(sinb * cep + cosb * sep * sinlam)
    return ra, dec


def equatorial_to_ecliptic(nut: Nutation, ra: float, dec: float) -> tuple[float, float]:
    """Inverse of ecliptic_to_equatorial, removing nutation in longitude."""
    cep = nut.cos_obliquity
    sep = nut.sin_obliquity
    sina = math.sin(ra)
    sind = math.sin(dec)
    cosd = math.cos(dec)
    lam = math.atan2(sina * cep + sind * sep / cosd, math.cos(ra))
    beta = _clamped_asin(sind * cep - cosd * sep * sina)
    return lam - nut.dpsi, beta


def equatorial_aberration(frame: FrameState, ra: float, dec: float) -> tuple[float, float]:
    """Add annual aberration to true equatorial coordinates of date."""
    lam, beta = equatorial_to_ecliptic(frame.nutation, ra, dec)
    lam, beta = ecliptic_aberration(frame.aberration, lam, beta)
    return ecliptic_to_equatorial(frame.nutation, lam, beta)


def rotate_ra_dec(matrix: np.ndarray, ra: float, dec: float) -> tuple[float, float]:
    """Apply a 3x3 rotation to a direction; ra of the result is in [0, 2*pi)."""
    v = matrix @ np.array(unit_vector(ra, dec).as_tuple())
    return ra_dec_from_vector(Vector3(float(v[0]), float(v[1]), float(v[2])))


def precess_nutate(frame: FrameState, ra: float, dec: float) -> tuple[float, float]:
    """J2000 equatorial to true equatorial of date."""
    return rotate_ra_dec(frame.precess_nutate, ra, dec)


def unprecess_nutate(frame: FrameState, ra: float, dec: float) -> tuple[float, float]:
    """True equatorial of date back to J2000 equatorial."""
    return rotate_ra_dec(frame.unprecess_nutate, ra, dec)


def diurnal_parallax(
    observer: ObserverState, ra: float, dec: float, dist: float
) -> tuple[float, float, float]:
    """Topocentric RA/Dec and distance from geocentric ones (Meeus p. 279-280).

    Parameters:
        observer: Observer's sidereal time and parallax factors.
        ra: Geocentric right ascension (radians).
        dec: Geocentric declination (radians).
        dist: Geocentric distance (AU).

    Returns:
        (ra, dec, dist) as seen from the observer.
    """
    sinpi = SIN_SOLAR_PARALLAX / dist
    h = observer.lst_rad - ra
    cosh = math.cos(h)
    sinh = math.sin(h)
    cosd = math.cos(dec)
    sind = math.sin(dec)
    rho_cos = observer.rho_cos_phi
    rho_sin = observer.rho_sin_phi
    dalpha = math.atan2(-rho_cos * sinpi * sinh, cosd - rho_cos * sinpi * cosh)
    new_dec = math.atan2(math.cos(dalpha) * (sind - rho_sin * sinpi), cosd - rho_cos * sinpi * cosh)
    a = cosd * sinh
    b = cosd * cosh - rho_cos * sinpi
    c = sind - rho_sin * sinpi
    q = math.sqrt(a * a + b * b + c * c)
    return ra + dalpha, new_dec, dist * q


def angular_separation(ra1: float, dec1: float, ra2: float, dec2: float) -> float:
    """Angle between two directions in radians, cosine clamped into [-1, 1]."""
    c = math.sin(dec1) * math.sin(dec2) + math.cos(dec1) * math.cos(dec2) * math.cos(ra1 - ra2)
    return math.acos(max(-1.0, min(1.0, c)))
