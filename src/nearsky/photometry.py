"""Visual magnitudes and angular sizes (Meeus chapters 41, 45, and 55)."""

from __future__ import annotations

import math

from nearsky.bodies.base import BodySpec
from nearsky.constants import DAYS_PER_CENTURY, DEG2RAD, J2000, RAD2DEG

MAGNITUDE_FACTOR = 5.0 / math.log(10.0)


def phase_angle_deg(sun_distance: float, earth_distance: float, earth_radius: float) -> float:
    """Sun-body-Earth angle in degrees from the three sides of the triangle.

    Parameters:
        sun_distance: Body-Sun distance (AU).
        earth_distance: Body-Earth distance (AU).
        earth_radius: Earth-Sun distance (AU).

    Returns:
        Phase angle in degrees, in [0, 180].
    """
    c = (sun_distance**2 + earth_distance**2 - earth_radius**2) / (
        2.0 * sun_distance * earth_distance
    )
    return math.acos(max(-1.0, min(1.0, c))) * RAD2DEG


def saturn_ring_sin_b(jde: float, lam: float, beta: float) -> float:
    """Sine of the Saturnicentric latitude of Earth referred to the ring plane.

    Parameters:
        jde: Julian Ephemeris Day.
        lam: Saturn's geocentric ecliptic longitude (radians).
        beta: Saturn's geocentric ecliptic latitude (radians).

    Returns:
        sin(B), signed.
    """
    T = (jde - J2000) / DAYS_PER_CENTURY
    inc = (28.075216 - T * (0.012998 - T * 0.000004)) * DEG2RAD
    node = (169.508470 + T * (1.394681 + T * 0.000412)) * DEG2RAD
    return math.sin(inc) * math.cos(beta) * math.sin(lam - node) - math.cos(inc) * math.sin(beta)


def ring_brightness(sin_b: float) -> float:
    """Magnitude change from the rings; B stays well inside +-90 deg so |sin B| is used."""
    sin_b = abs(sin_b)
    return -sin_b * (2.60 - sin_b * 1.25)


def planet_magnitude(
    spec: BodySpec,
    sun_distance: float,
    earth_distance: float,
    earth_radius: float,
    ring_sin_b: float = 0.0,
) -> float | None:
    """Apparent visual magnitude of a planet or Pluto.

    Parameters:
        spec: Body specification carrying the phase law.
        sun_distance: Body-Sun distance (AU).
        earth_distance: Body-Earth distance (AU).
        earth_radius: Earth-Sun distance (AU).
        ring_sin_b: Saturn's ring tilt sine (ignored for other bodies).

    Returns:
        Magnitude, or None for bodies without a phase law (Sun, Moon).
    """
    if not spec.phase_law:
        return None
    i = phase_angle_deg(sun_distance, earth_distance, earth_radius)
    mag = MAGNITUDE_FACTOR * math.log(sun_distance * earth_distance)
    law = 0.0
    for c in reversed(spec.phase_law):
        law = law * i + c
    mag += law
    if spec.has_rings:
        mag += ring_brightness(ring_sin_b)
    return mag


def angular_size_arcsec(spec: BodySpec, distance: float) -> float:
    """Apparent diameter in arcseconds, 2*s/distance for semi-diameter s at 1 AU."""
    return 2.0 * spec.semidiameter_arcsec / distance
