"""Nutation, obliquity of the ecliptic, and solar elements for aberration.

Nutation uses the 63-term series of Meeus chapter 22, the mean obliquity the
polynomial on p. 147, and the aberration elements the low-accuracy solar
formulas of chapters 23 and 25.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from nearsky.constants import DAYS_PER_CENTURY, DEG2RAD, J2000
from nearsky.data import load_table

# Arcseconds beyond 23d26m, coefficients of U**0 .. U**10 (U in 10000 years).
_OBLIQUITY_ARCSEC = (
    21.448,
    -4680.93,
    -1.55,
    1999.25,
    -51.38,
    -249.67,
    -39.05,
    7.12,
    27.87,
    5.79,
    2.45,
)

_terms: np.ndarray | None = None


def _get_terms() -> np.ndarray:
    """Return the (63, 9) table: D M Mp F Om multipliers, then psi and eps coefficients."""
    global _terms
    if _terms is None:
        arr = np.asarray(load_table('nutation')['terms'], dtype=np.float64)
        arr.setflags(write=False)
        _terms = arr
    return _terms


@dataclass(frozen=True)
class Nutation:
    """Nutation in longitude and obliquity, obliquities, and the nutation matrix.

    Angles are in radians. `matrix` takes mean equatorial coordinates of date
    to true equatorial coordinates of date.
    """

    dpsi: float
    deps: float
    mean_obliquity: float
    true_obliquity: float
    matrix: np.ndarray

    @property
    def cos_obliquity(self) -> float:
        return math.cos(self.true_obliquity)

    @property
    def sin_obliquity(self) -> float:
        return math.sin(self.true_obliquity)


def mean_obliquity(T: float) -> float:
    """Mean obliquity of the ecliptic in radians at T centuries from J2000.0."""
    U = T / 100.0
    ep0 = 0.0
    for c in reversed(_OBLIQUITY_ARCSEC):
        ep0 = ep0 * U + c
    return (23.0 + (26.0 + ep0 / 60.0) / 60.0) * DEG2RAD


def nutation(jde: float) -> Nutation:
    """Compute nutation and obliquity for a Julian Ephemeris Day.

    Parameters:
        jde: Julian Ephemeris Day.

    Returns:
        Nutation with dpsi, deps, both obliquities, and the rotation matrix.
    """
    T = (jde - J2000) / DAYS_PER_CENTURY
    D = 297.85036 + T * (445267.111480 - T * (0.0019142 - T / 189474))
    M = 357.52772 + T * (35999.050340 - T * (0.0001603 + T / 300000))
    Mp = 134.96298 + T * (477198.867398 + T * (0.0086972 + T / 56250))
    F = 93.27191 + T * (483202.017538 - T * (0.0036825 - T / 327270))
    Om = 125.04452 - T * (1934.136261 - T * (0.0020708 + T / 450000))

    terms = _get_terms()
    # Coefficients are in 0.0001 arcsec, with the T-dependent part per millennium.
    tm = T / 10.0
    arg = np.fmod(terms[:, :5] @ np.array([D, M, Mp, F, Om]), 360.0) * DEG2RAD
    dpsi = float(np.sum((terms[:, 5] + terms[:, 6] * tm) * np.sin(arg)))
    deps = float(np.sum((terms[:, 7] + terms[:, 8] * tm) * np.cos(arg)))
    dpsi *= DEG2RAD / 36000000.0
    deps *= DEG2RAD / 36000000.0

    ep0 = mean_obliquity(T)
    ep = ep0 + deps
    cep, sep = math.cos(ep), math.sin(ep)
    ce0, se0 = math.cos(ep0), math.sin(ep0)
    cdp, sdp = math.cos(dpsi), math.sin(dpsi)
    matrix = np.array(
        [
            [cdp, -ce0 * sdp, -se0 * sdp],
            [cep * sdp, ce0 * cep * cdp + se0 * sep, se0 * cep * cdp - ce0 * sep],
            [sep * sdp, ce0 * sep * cdp - se0 * cep, se0 * sep * cdp + ce0 * cep],
        ],
        dtype=np.float64,
    )
    matrix.setflags(write=False)
    return Nutation(dpsi, deps, ep0, ep, matrix)


@dataclass(frozen=True)
class AberrationElements:
    """Sun's true longitude, Earth's orbital eccentricity, and perihelion longitude.

    Angles in radians.
    """

    sun_longitude: float
    eccentricity: float
    perihelion: float


def aberration_elements(jde: float) -> AberrationElements:
    """Low-accuracy solar elements, sufficient for arcsecond-level aberration."""
    T = (jde - J2000) / DAYS_PER_CENTURY
    L0 = 280.46646 + T * (36000.76983 + T * 0.0003032)
    M = math.fmod(357.52911 + T * (35999.05029 - T * 0.0001537), 360.0) * DEG2RAD
    C = (
        (1.914602 - T * (0.004817 + T * 0.000014)) * math.sin(M)
        + (0.019993 - T * 0.000101) * math.sin(2 * M)
        + 0.000289 * math.sin(3 * M)
    )
    sun_lon = math.fmod(L0 + C, 360.0)
    if sun_lon < 0:
        sun_lon += 360.0
    ecc = 0.016708634 - T * (0.000042037 + T * 0.0000001267)
    peri = (102.93735 + T * (1.71946 + T * 0.00046)) * DEG2RAD
    return AberrationElements(sun_lon * DEG2RAD, ecc, peri)
