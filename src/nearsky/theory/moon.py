"""Lunar theory (Meeus chapter 47, truncated) and Moon phase geometry."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from nearsky.constants import AU_KM, DAYS_PER_CENTURY, DEG2RAD, J2000, TWO_PI
from nearsky.coords import EclipticCoordinates, EclipticFrame, normalize_angle
from nearsky.data import load_table

MEAN_DISTANCE_KM = 385000.56

_tables: dict[str, np.ndarray] = {}


def _get_table(key: str) -> np.ndarray:
    """Return 'longitude_distance' (n, 6) or 'latitude' (n, 5) as a read-only array."""
    arr = _tables.get(key)
    if arr is None:
        arr = np.asarray(load_table('moon')[key], dtype=np.float64)
        arr.setflags(write=False)
        _tables[key] = arr
    return arr


@dataclass(frozen=True)
class LunarArguments:
    """Fundamental arguments in degrees (reduced modulo 360) and the factor E."""

    Lp: float
    D: float
    M: float
    Mp: float
    F: float
    A1: float
    A2: float
    A3: float
    E: float


def lunar_arguments(T: float) -> LunarArguments:
    """Mean longitude, elongation, anomalies, argument of latitude, and E.

    Parameters:
        T: Julian centuries from J2000.0.
    """
    T2 = T * T
    T3 = T2 * T
    T4 = T3 * T
    Lp = 218.3164477 + 481267.88123421 * T - 0.0015786 * T2 + T3 / 538841 - T4 / 65194000
    D = 297.8501921 + 445267.1114034 * T - 0.0018819 * T2 + T3 / 545868 - T4 / 113065000
    M = 357.5291092 + 35999.0502909 * T - 0.0001536 * T2 + T3 / 24490000
    Mp = 134.9633964 + 477198.8675055 * T + 0.0087414 * T2 + T3 / 69699 - T4 / 14712000
    F = 93.2720950 + 483202.0175233 * T - 0.0036539 * T2 - T3 / 3526000 + T4 / 863310000
    A1 = 119.75 + 131.849 * T
    A2 = 53.09 + 479264.290 * T
    A3 = 313.45 + 481266.484 * T
    E = 1 - T * (0.002516 + T * 0.0000074)
    return LunarArguments(
        *(math.fmod(v, 360.0) for v in (Lp, D, M, Mp, F, A1, A2, A3)),
        E=E,
    )


def _eccentricity_factors(m_coeffs: np.ndarray, E: float) -> np.ndarray:
    """E**|k| for terms with k = 0, +-1, +-2 multiples of the solar anomaly."""
    return np.power(E, np.abs(m_coeffs))


def coordinates(jde: float) -> EclipticCoordinates:
    """Geocentric ecliptic longitude, latitude (radians), and distance (AU).

    No light-time or aberration correction is applied at this precision.

    Parameters:
        jde: Julian Ephemeris Day.

    Returns:
        EclipticCoordinates referred to the mean equinox of date.
    """
    args = lunar_arguments((jde - J2000) / DAYS_PER_CENTURY)
    fundamentals = np.array([args.D, args.M, args.Mp, args.F])

    lr = _get_table('longitude_distance')
    arg = np.fmod(lr[:, :4] @ fundamentals, 360.0) * DEG2RAD
    ecc = _eccentricity_factors(lr[:, 1], args.E)
    sigma_l = float(np.sum(lr[:, 4] * np.sin(arg) * ecc))
    sigma_r = float(np.sum(lr[:, 5] * np.cos(arg) * ecc))

    lb = _get_table('latitude')
    arg = np.fmod(lb[:, :4] @ fundamentals, 360.0) * DEG2RAD
    ecc = _eccentricity_factors(lb[:, 1], args.E)
    sigma_b = float(np.sum(lb[:, 4] * np.sin(arg) * ecc))

    # Venus, Jupiter, and flattening terms.
    sigma_l += (
        3958 * math.sin(args.A1 * DEG2RAD)
        + 1962 * math.sin((args.Lp - args.F) * DEG2RAD)
        + 318 * math.sin(args.A2 * DEG2RAD)
    )
    sigma_b += (
        -2235 * math.sin(args.Lp * DEG2RAD)
        + 382 * math.sin(args.A3 * DEG2RAD)
        + 175 * math.sin((args.A1 - args.F) * DEG2RAD)
        + 175 * math.sin((args.A1 + args.F) * DEG2RAD)
        + 127 * math.sin((args.Lp - args.Mp) * DEG2RAD)
        - 115 * math.sin((args.Lp + args.Mp) * DEG2RAD)
    )
    lam = (sigma_l / 1e6 + args.Lp) * DEG2RAD
    beta = sigma_b / 1e6 * DEG2RAD
    dist_km = MEAN_DISTANCE_KM + sigma_r / 1000
    return EclipticCoordinates(
        normalize_angle(lam), beta, dist_km / AU_KM, EclipticFrame.MEAN_OF_DATE
    )


def illuminated_fraction(ra_moon: float, dec_moon: float, ra_sun: float, dec_sun: float) -> float:
    """Fraction of the lunar disk lit, (1 - cos psi)/2, psi the Sun-Moon elongation.

    Ignores the relative Sun and Moon distances.
    """
    cospsi = math.sin(dec_moon) * math.sin(dec_sun) + math.cos(dec_moon) * math.cos(
        dec_sun
    ) * math.cos(ra_moon - ra_sun)
    return (1.0 - cospsi) / 2.0


def bright_limb_position_angle(
    ra_moon: float, dec_moon: float, ra_sun: float, dec_sun: float
) -> float:
    """Position angle of the Moon's bright limb in radians (north through east)."""
    num = math.cos(dec_sun) * math.sin(ra_sun - ra_moon)
    den = math.sin(dec_sun) * math.cos(dec_moon) - math.cos(dec_sun) * math.sin(
        dec_moon
    ) * math.cos(ra_sun - ra_moon)
    return math.atan2(num, den)


def is_waxing(ra_moon: float, ra_sun: float) -> bool:
    """True while the Moon is east of the Sun by less than 180 degrees of RA."""
    return math.fmod(ra_moon - ra_sun + 2 * TWO_PI, TWO_PI) < math.pi
