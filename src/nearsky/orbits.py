"""Keplerian orbit reconstruction for orbit views.

Two heliocentric position samples a short interval apart are turned into a
velocity with the Lambert-Gauss solution (Vallado, "Fundamentals of
Astrodynamics and Applications", 2nd ed., p. 460), and position plus velocity
into classical elements with ELORB (ibid., p. 120). Canonical units: AU, and
a time unit TU of 58.132821 days, so that mu = 1.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from nearsky.constants import (
    CANONICAL_MU,
    CANONICAL_TIME_UNIT_DAYS,
    DAYS_PER_MILLENNIUM,
    PRECESSION_RATE,
    TWO_PI,
)
from nearsky.vectors import UNIT_Z, Vector3

if TYPE_CHECKING:
    from nearsky.ephemeris import Ephemeris

logger = logging.getLogger(__name__)

LAMBERT_TOLERANCE = 1e-14
LAMBERT_MAX_ITERATIONS = 100

# One twentieth of the sidereal period in days, by orbit-view index
# (Mercury, Venus, Earth, Mars, Jupiter, Saturn, Uranus, Neptune, Pluto).
SAMPLE_INTERVAL_DAYS = (4.401, 11.23, 18.26, 34.35, 216.8, 537.8, 1535.0, 3011.0, 4531.0)

ORBIT_POINT_COUNT = 180
ORBIT_POINT_STEP = 0.0349066  # about 2 degrees of true anomaly


@dataclass(frozen=True)
class OrbitalElements:
    """Classical elements; angles in radians, p in AU, epoch in Julian millennia.

    Attributes:
        p: Semiparameter.
        e: Eccentricity.
        i: Inclination.
        node: Longitude of the ascending node (Omega).
        arg_periapsis: Argument of periapsis (omega).
        true_anomaly: True anomaly (nu) at the epoch.
        epoch: Time the elements were derived for.
    """

    p: float
    e: float
    i: float
    node: float
    arg_periapsis: float
    true_anomaly: float
    epoch: float = 0.0

    @property
    def semi_major_axis(self) -> float:
        return self.p / (1.0 - self.e * self.e)


def _clamped_acos(x: float) -> float:
    return math.acos(max(-1.0, min(1.0, x)))


def _gauss_series(x: float) -> float:
    """Truncated series X(x) of the Gauss method, six nested terms."""
    s = 1.0 + 14.0 * x / 13.0
    s = 1.0 + 12.0 * x * s / 11.0
    s = 1.0 + 10.0 * x * s / 9.0
    s = 1.0 + 8.0 * x * s / 7.0
    s = 1.0 + 6.0 * x * s / 5.0
    return 4.0 * s / 3.0


def lambert_gauss(pos1: Vector3, pos2: Vector3, dt: float, mu: float = CANONICAL_MU) -> Vector3:
    """Velocity at pos1 of the short-way conic reaching pos2 after dt.

    Parameters:
        pos1: Initial position (AU).
        pos2: Second position (AU).
        dt: Time between the positions (canonical time units).
        mu: Gravitational parameter in canonical units.

    Returns:
        Velocity at pos1 (AU per canonical time unit). If the iteration has not
        converged after LAMBERT_MAX_ITERATIONS the last estimate is used.
    """
    mag1 = pos1.magnitude()
    mag2 = pos2.magnitude()
    mag12 = mag1 * mag2
    sqrtmag12 = math.sqrt(mag12)

    dnu = _clamped_acos(pos1.dot(pos2) / mag12)
    cosdnu = math.cos(dnu)
    coshalfdnu = math.cos(dnu / 2.0)

    l = (mag1 + mag2) / (4.0 * sqrtmag12 * coshalfdnu) - 0.5
    m = mu * dt * dt / (2.0 * sqrtmag12 * coshalfdnu) ** 3

    y = 1.0
    x1 = 0.0
    converged = False
    for _ in range(LAMBERT_MAX_ITERATIONS):
        yold = y
        x1 = m / (y * y) - l
        y = 1.0 + _gauss_series(x1) * (l + x1)
        if abs((y - yold) / y) <= LAMBERT_TOLERANCE:
            converged = True
            break
    if not converged:
        logger.warning(
            'Lambert-Gauss did not converge in %d iterations (dnu=%.6f rad, dt=%.6f TU)',
            LAMBERT_MAX_ITERATIONS,
            dnu,
            dt,
        )

    coshalfde = 1.0 - 2.0 * x1
    p = mag12 * (1.0 - cosdnu) / (mag1 + mag2 - 2.0 * sqrtmag12 * coshalfdnu * coshalfde)
    f = 1.0 - mag2 * (1.0 - cosdnu) / p
    g = mag12 * math.sin(dnu) / math.sqrt(mu * p)
    return (pos2 - pos1 * f) / g


def cartesian_to_keplerian(
    pos: Vector3,
    vel: Vector3,
    mu: float = CANONICAL_MU,
    epoch: float = 0.0,
) -> OrbitalElements:
    """Classical orbital elements from position and velocity (ELORB).

    Circular (e = 0) and equatorial (i = 0) orbits are not supported; all
    bodies handled here have neither.

    Parameters:
        pos: Position (AU).
        vel: Velocity (AU per canonical time unit).
        mu: Gravitational parameter in canonical units.
        epoch: Epoch to record on the result.

    Returns:
        OrbitalElements.
    """
    r = pos.magnitude()
    v = vel.magnitude()
    h = pos.cross(vel)
    n = UNIT_Z.cross(h)
    nmag = n.magnitude()

    ecc = (pos * (v * v - mu / r) - vel * pos.dot(vel)) / mu
    e = ecc.magnitude()

    xi = v * v / 2.0 - mu / r
    p = mu * (e * e - 1.0) / (2.0 * xi)

    inc = _clamped_acos(h.z / h.magnitude())

    node = _clamped_acos(n.x / nmag)
    if n.y < 0:
        node = TWO_PI - node

    argp = _clamped_acos(n.dot(ecc) / (nmag * e))
    if ecc.z < 0:
        argp = TWO_PI - argp

    nu = _clamped_acos(ecc.dot(pos) / (e * r))
    if pos.dot(vel) < 0:
        nu = TWO_PI - nu

    return OrbitalElements(p, e, inc, node, argp, nu, epoch)


def orbit_points(
    elements: OrbitalElements,
    count: int = ORBIT_POINT_COUNT,
    step: float = ORBIT_POINT_STEP,
) -> list[Vector3]:
    """Heliocentric ecliptic points along an orbit, starting at the epoch position.

    Parameters:
        elements: Orbit to sample.
        count: Number of points.
        step: True-anomaly increment between points (radians).

    Returns:
        Points in AU.
    """
    cos_node, sin_node = math.cos(elements.node), math.sin(elements.node)
    cos_argp, sin_argp = math.cos(elements.arg_periapsis), math.sin(elements.arg_periapsis)
    cos_i, sin_i = math.cos(elements.i), math.sin(elements.i)
    r00 = cos_node * cos_argp - sin_node * sin_argp * cos_i
    r01 = -cos_node * sin_argp - sin_node * cos_argp * cos_i
    r10 = sin_node * cos_argp + cos_node * sin_argp * cos_i
    r11 = -sin_node * sin_argp + cos_node * cos_argp * cos_i
    r20 = sin_argp * sin_i
    r21 = cos_argp * sin_i

    points = []
    nu = elements.true_anomaly
    for _ in range(count):
        cosnu = math.cos(nu)
        radius = elements.p / (1.0 + elements.e * cosnu)
        rp = radius * cosnu
        rq = radius * math.sin(nu)
        points.append(Vector3(r00 * rp + r01 * rq, r10 * rp + r11 * rq, r20 * rp + r21 * rq))
        nu += step
    return points


class OrbitTracker:
    """Per-body orbital elements, regenerated only once they become stale.

    Elements for a body are rebuilt when none exist yet or when the requested
    time is at least one sample interval (1/20 of the period) from their
    epoch.

    Parameters:
        ephemeris: Source of heliocentric coordinates; a geocentric Ephemeris
            is created when omitted.
    """

    def __init__(self, ephemeris: Ephemeris | None = None) -> None:
        if ephemeris is None:
            from nearsky.ephemeris import Ephemeris

            ephemeris = Ephemeris(geocentric=True)
        self.ephemeris = ephemeris
        self._elements: dict[int, OrbitalElements] = {}
        self.recompute_count = 0

    def is_stale(self, index: int, t: float) -> bool:
        """True if elements for `index` must be regenerated for time t (millennia)."""
        current = self._elements.get(index)
        if current is None:
            return True
        return abs(t - current.epoch) >= SAMPLE_INTERVAL_DAYS[index] / DAYS_PER_MILLENNIUM

    def _sample(self, index: int, t: float) -> tuple[Vector3, Vector3]:
        interval = SAMPLE_INTERVAL_DAYS[index]
        pos1 = self.ephemeris.heliocentric(index, t).to_vector()
        later = self.ephemeris.heliocentric(index, t + interval / DAYS_PER_MILLENNIUM)
        # Undo the equinox drift over the interval so it does not read as motion.
        later = replace(later, longitude=later.longitude - interval * PRECESSION_RATE)
        return pos1, later.to_vector()

    def elements(self, index: int, t: float) -> OrbitalElements:
        """Orbital elements of orbit-view body `index` near time t.

        Parameters:
            index: 0-8 for Mercury, Venus, Earth, Mars, ..., Neptune, Pluto.
            t: Julian millennia from J2000.0.

        Returns:
            Cached elements, or freshly derived ones if stale; zeroed
            elements (not cached) when the index is outside 0-8.
        """
        if not 0 <= index < len(SAMPLE_INTERVAL_DAYS):
            logger.warning('Orbit-view body index %r out of range 0-8', index)
            return OrbitalElements(0.0, 0.0, 0.0, 0.0, 0.0, 0.0, t)
        if not self.is_stale(index, t):
            return self._elements[index]
        pos1, pos2 = self._sample(index, t)
        vel1 = lambert_gauss(pos1, pos2, SAMPLE_INTERVAL_DAYS[index] / CANONICAL_TIME_UNIT_DAYS)
        elements = cartesian_to_keplerian(pos1, vel1, epoch=t)
        self._elements[index] = elements
        self.recompute_count += 1
        logger.debug('Orbital elements for body %d regenerated at t=%.8f', index, t)
        return elements
