"""Per-instant memo of Earth's position, Sun direction, frame, and parallax geometry.

The cache holds one entry. It is recomputed only when the Julian Ephemeris
Day changes or a different ObserverLocation object is supplied (identity, not
value, comparison). It is not synchronized: one thread owns it, and use from
any other thread raises RuntimeError.
"""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass

from nearsky.constants import DAYS_PER_MILLENNIUM, J2000
from nearsky.coords import (
    EclipticCoordinates,
    EquatorialCoordinates,
    EquatorialFrame,
    normalize_angle,
)
from nearsky.frames.observer import ObserverLocation, ObserverState
from nearsky.frames.precession import FrameState, frame_state
from nearsky.frames.transforms import ecliptic_to_equatorial, unprecess_nutate
from nearsky.theory.vsop import earth_heliocentric, get_model
from nearsky.time_utils import Instant
from nearsky.vectors import Vector3

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """Everything shared by all bodies at one instant and location.

    Attributes:
        instant: Instant the entry was built for.
        location: Location object the entry was built for (None if geocentric).
        earth: Earth's heliocentric coordinates (mean ecliptic of date).
        earth_vector: The same as rectangular coordinates (AU).
        frame: Nutation, precession, and aberration elements for the JDE.
        observer: Parallax geometry, or None without a location.
        sun_apparent: Sun RA/Dec, precessed and nutated (no FK5 or aberration).
        sun_j2000: The same direction referred to J2000.
    """

    instant: Instant
    location: ObserverLocation | None
    earth: EclipticCoordinates
    earth_vector: Vector3
    frame: FrameState
    observer: ObserverState | None
    sun_apparent: EquatorialCoordinates
    sun_j2000: EquatorialCoordinates

    @property
    def millennia(self) -> float:
        return (self.instant.jde - J2000) / DAYS_PER_MILLENNIUM


def sun_j2000_vector(t: float) -> Vector3:
    """Geocentric Sun on the FK5 J2000 equator, from Earth's J2000-ecliptic series.

    Parameters:
        t: Julian millennia from J2000.0.
    """
    earth = get_model('earth_j2000').heliocentric(t)
    v = -earth.to_vector()
    # VSOP J2000 dynamical ecliptic to FK5 J2000 equator (Meeus p. 174).
    return Vector3(
        v.x + 0.000000440360 * v.y - 0.000000190919 * v.z,
        -0.000000479966 * v.x + 0.917482137087 * v.y - 0.397776982902 * v.z,
        0.397776982202 * v.y + 0.917482137087 * v.z,
    )


class EphemerisCache:
    """Single-entry cache keyed by (JDE, location identity).

    Attributes:
        recompute_count: Number of times the entry has been rebuilt.
    """

    def __init__(self) -> None:
        self._entry: CacheEntry | None = None
        self._sun_vector: Vector3 | None = None
        self._owner: int | None = None
        self.recompute_count = 0

    def _check_owner(self) -> None:
        ident = threading.get_ident()
        if self._owner is None:
            self._owner = ident
        elif self._owner != ident:
            raise RuntimeError(
                'EphemerisCache is owned by another thread; use one Ephemeris per thread'
            )

    def is_current(self, instant: Instant, location: ObserverLocation | None) -> bool:
        """True if the cached entry matches this JDE and this location object."""
        entry = self._entry
        return entry is not None and entry.instant.jde == instant.jde and entry.location is location

    def ensure_current(self, instant: Instant, location: ObserverLocation | None) -> CacheEntry:
        """Return the entry for (instant, location), rebuilding it only if stale.

        Parameters:
            instant: Query instant.
            location: Observer location, or None in geocentric mode.

        Returns:
            Current CacheEntry.

        Raises:
            RuntimeError: If called from a thread other than the owner.
        """
        self._check_owner()
        if self._entry is not None and self.is_current(instant, location):
            return self._entry

        t = instant.millennia
        earth = earth_heliocentric(t)
        frame = frame_state(instant.jde)
        ra, dec = ecliptic_to_equatorial(frame.nutation, earth.longitude + math.pi, -earth.latitude)
        ra = normalize_angle(ra)
        ra2000, dec2000 = unprecess_nutate(frame, ra, dec)
        observer = None
        if location is not None:
            observer = ObserverState.from_location(location, instant.jd_ut)

        self._entry = CacheEntry(
            instant=instant,
            location=location,
            earth=earth,
            earth_vector=earth.to_vector(),
            frame=frame,
            observer=observer,
            sun_apparent=EquatorialCoordinates(ra, dec, EquatorialFrame.APPARENT),
            sun_j2000=EquatorialCoordinates(ra2000, dec2000, EquatorialFrame.J2000),
        )
        self._sun_vector = None
        self.recompute_count += 1
        logger.debug(
            'Ephemeris cache rebuilt for JDE %.6f (%d rebuilds)', instant.jde, self.recompute_count
        )
        return self._entry

    def sun_j2000_vector(self) -> Vector3:
        """Sun's geocentric J2000 equatorial vector for the current entry (lazy).

        Raises:
            RuntimeError: If no entry has been computed yet.
        """
        if self._entry is None:
            raise RuntimeError('EphemerisCache.ensure_current() has not been called')
        if self._sun_vector is None:
            self._sun_vector = sun_j2000_vector(self._entry.millennia)
        return self._sun_vector

    def clear(self) -> None:
        """Drop the cached entry (the owner thread is kept)."""
        self._check_owner()
        self._entry = None
        self._sun_vector = None
